import dataclasses
from typing import List, Optional

from recipe_utils.matching.timings import MatchedTiming, matched_timings
from recipe_utils.units.conversion import AlternativeQuantity


@dataclasses.dataclass
class IngredientQuantity:
    quantity: float
    quantity_text: str
    min_quantity: float
    max_quantity: float


@dataclasses.dataclass
class IngredientUnit:
    unit: str  # display text, e.g. "tablespoon"
    unit_text: str  # as written, e.g. "tbsp"


@dataclasses.dataclass
class RecipeIngredient:
    """One ingredient line of a recipe and what was parsed from it."""

    ingredient_text: str
    sort_index: int = 0
    ingredient_part: Optional[str] = None
    extra_information: Optional[str] = None
    quantity: Optional[IngredientQuantity] = None
    unit: Optional[IngredientUnit] = None
    alternative_quantities: List[AlternativeQuantity] = dataclasses.field(
        default_factory=list
    )


@dataclasses.dataclass
class RecipeStepTiming:
    time_in_seconds: float
    time_text: str
    time_unit_text: str


@dataclasses.dataclass
class RecipeStepTemperature:
    temperature: float
    temperature_text: str
    temperature_unit_text: str
    temperature_unit: str = ""


@dataclasses.dataclass
class RecipeStep:
    """One instruction step with the timings and temperatures found in it."""

    instruction_text: str
    sort_index: int = 0
    timings: List[RecipeStepTiming] = dataclasses.field(default_factory=list)
    temperatures: List[RecipeStepTemperature] = dataclasses.field(default_factory=list)

    def matched_timings(self) -> List[MatchedTiming]:
        """Where each timing is written in ``instruction_text``."""
        return matched_timings(self)

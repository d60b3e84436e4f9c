import dataclasses
from typing import List

from recipe_utils.units.conversion import AlternativeQuantity


@dataclasses.dataclass
class IngredientParseResult:
    quantity: float
    quantity_text: str
    min_quantity: float
    max_quantity: float
    unit: str  # display text ("tablespoon"), empty when no unit was found
    unit_text: str  # unit as written ("tbsp")
    ingredient: str
    extra: str
    alternative_quantities: List[AlternativeQuantity] = dataclasses.field(
        default_factory=list
    )


__all__ = ["AlternativeQuantity", "IngredientParseResult"]

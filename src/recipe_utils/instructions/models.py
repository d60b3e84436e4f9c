import dataclasses
from typing import List

from recipe_utils.units.conversion import AlternativeQuantity


@dataclasses.dataclass
class InstructionTime:
    time_in_seconds: int
    time_unit_text: str  # as written, e.g. "mins"
    time_text: str  # number as written, e.g. "20"


@dataclasses.dataclass
class InstructionParseResult:
    total_time_in_seconds: int = 0
    time_items: List[InstructionTime] = dataclasses.field(default_factory=list)
    temperature: float = 0.0
    temperature_unit: str = ""
    temperature_text: str = ""
    temperature_unit_text: str = ""
    alternative_temperatures: List[AlternativeQuantity] = dataclasses.field(
        default_factory=list
    )

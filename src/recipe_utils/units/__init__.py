"""Unit catalogs and unit conversion."""

from .catalog import (
    LanguageNotSupportedError,
    LinearConversion,
    UnitDetail,
    UnitsConfig,
    create_american_english_units,
    create_english_units,
    get_units_for_language,
)
from .conversion import (
    AlternativeQuantity,
    convert,
    get_ingredient_conversions,
    get_temperature_conversions,
)

__all__ = [
    "AlternativeQuantity",
    "LanguageNotSupportedError",
    "LinearConversion",
    "UnitDetail",
    "UnitsConfig",
    "convert",
    "create_american_english_units",
    "create_english_units",
    "get_ingredient_conversions",
    "get_temperature_conversions",
    "get_units_for_language",
]

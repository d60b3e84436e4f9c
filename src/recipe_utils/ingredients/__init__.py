"""Ingredient line parsing."""

from .models import AlternativeQuantity, IngredientParseResult
from .number_utils import UNICODE_FRACTIONS, get_quantity_value
from .parsing import (
    get_extra,
    get_ingredient,
    get_quantity,
    get_unit,
    parse_ingredient,
)

__all__ = [
    "parse_ingredient",
    "get_quantity",
    "get_quantity_value",
    "get_unit",
    "get_ingredient",
    "get_extra",
    "AlternativeQuantity",
    "IngredientParseResult",
    "UNICODE_FRACTIONS",
]

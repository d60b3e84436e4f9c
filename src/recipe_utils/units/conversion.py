"""Unit conversion between units of the same conversion group."""

import dataclasses
import logging
from typing import List

from recipe_utils.units.catalog import UnitsConfig

logger = logging.getLogger(__name__)

CONVERSION_PRECISION = 4


@dataclasses.dataclass(frozen=True)
class AlternativeQuantity:
    """A quantity expressed in another unit.

    ``unit`` is the catalog display text ("kilogram"). ``unit_text`` is what
    to show for it: the surface text when the alternative was read from the
    ingredient line, the unit symbol when it was computed.
    """

    quantity: float
    unit: str
    unit_text: str
    min_quantity: float
    max_quantity: float


def convert(value: float, from_symbol: str, to_symbol: str, units: UnitsConfig) -> float:
    """Convert a value between two unit symbols of one catalog.

    Returns the value unchanged when the catalog has no conversion for the
    pair (different groups, or a group the language does not convert).

    Examples:
        >>> en = create_english_units()
        >>> round(convert(1, "kg", "lb", en), 5)
        2.20462
        >>> round(convert(100, "c", "f", en), 4)
        212.0
    """
    group = units.conversion_group_of(from_symbol)
    if group is not None and to_symbol in units.conversions[group]:
        table = units.conversions[group]
        return table[to_symbol].from_base(table[from_symbol].to_base(value))

    logger.debug(f"No conversion for {from_symbol}->{to_symbol} in {units.language}")
    return value


def get_ingredient_conversions(
    default_quantity: AlternativeQuantity, units: UnitsConfig
) -> List[AlternativeQuantity]:
    """Express a parsed quantity in every other default unit of its group.

    Args:
        default_quantity: The parsed quantity; ``unit`` is the catalog's
            display text for the unit ("gram", "cup").
        units: Catalog for the ingredient's language.

    Returns:
        One AlternativeQuantity per target unit, rounded to four decimal
        places. Empty when the unit is unknown or its group has no defaults.
    """
    unit = units.ingredient_units.get(default_quantity.unit)
    if unit is None or unit.conversion_group is None:
        return []
    targets = units.default_conversions.get(unit.conversion_group)
    if not targets:
        return []

    alternatives = []
    for symbol in targets:
        if symbol == unit.symbol:
            continue
        target = units.ingredient_units.get(symbol)
        if target is None:
            continue
        alternatives.append(
            AlternativeQuantity(
                quantity=round(
                    convert(default_quantity.quantity, unit.symbol, symbol, units),
                    CONVERSION_PRECISION,
                ),
                unit=target.display_text,
                unit_text=target.symbol,
                min_quantity=round(
                    convert(default_quantity.min_quantity, unit.symbol, symbol, units),
                    CONVERSION_PRECISION,
                ),
                max_quantity=round(
                    convert(default_quantity.max_quantity, unit.symbol, symbol, units),
                    CONVERSION_PRECISION,
                ),
            )
        )
    return alternatives


def get_temperature_conversions(
    temperature: float, unit_text: str, units: UnitsConfig
) -> List[AlternativeQuantity]:
    """Express a temperature in the other temperature units of the catalog."""
    unit = units.temperature_units.get(unit_text.lower())
    if unit is None or unit.conversion_group is None:
        return []

    alternatives = []
    for symbol in units.default_conversions.get(unit.conversion_group, ()):
        if symbol == unit.symbol:
            continue
        target = units.temperature_units.get(symbol)
        if target is None:
            continue
        converted = round(convert(temperature, unit.symbol, symbol, units), CONVERSION_PRECISION)
        alternatives.append(
            AlternativeQuantity(
                quantity=converted,
                unit=target.display_text,
                unit_text=target.symbol,
                min_quantity=converted,
                max_quantity=converted,
            )
        )
    return alternatives

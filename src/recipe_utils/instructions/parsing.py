"""Extraction of durations and temperatures from instruction steps."""

import logging
from typing import Optional

from recipe_utils.ingredients.number_utils import _is_number
from recipe_utils.instructions.models import InstructionParseResult, InstructionTime
from recipe_utils.tokenizer import tokenize
from recipe_utils.units.catalog import get_units_for_language
from recipe_utils.units.conversion import get_temperature_conversions

logger = logging.getLogger(__name__)


def parse_instruction(
    text: Optional[str],
    language: Optional[str],
    include_alternative_temperature_unit: bool = False,
    fallback_language: Optional[str] = None,
) -> Optional[InstructionParseResult]:
    """Scan an instruction step for "<number> <unit>" pairs.

    Each number followed by a time unit adds a duration. A number followed by
    a temperature unit sets the step's temperature; the first explicit pair
    wins. A bare degree marker ("180°") sets a tentative temperature in the
    language's default unit, which an explicit unit directly after it
    ("180 °C") replaces. Languages without a default unit ignore bare
    markers.

    Args:
        text: Raw instruction step.
        language: Language tag selecting the unit catalog.
        include_alternative_temperature_unit: Also express the temperature in
            the other temperature units.
        fallback_language: Catalog to use when ``language`` has none.

    Returns:
        The extracted timings and temperature, or None for empty text.

    Raises:
        LanguageNotSupportedError: Neither language has a unit catalog.

    Examples:
        >>> result = parse_instruction("Bake at 180 C for 1 hour 20 minutes", "en")
        >>> result.temperature, result.temperature_unit, result.total_time_in_seconds
        (180.0, 'celsius', 4800)
    """
    if text is None or not text.strip():
        return None

    units = get_units_for_language(language, fallback_language=fallback_language)
    tokens = tokenize(text)
    if not tokens:
        return None

    result = InstructionParseResult()
    number = 0.0
    number_text = ""
    temperature_locked = False

    for token in tokens:
        if _is_number(token.text):
            number = float(token.text)
            number_text = token.text
            continue
        if number <= 0:
            continue

        word = token.lower
        if word in units.temperature_markers:
            default_unit = units.temperature_units.get(units.default_temperature_unit or "")
            if default_unit is not None and not result.temperature_text:
                result.temperature = number
                result.temperature_text = number_text
                result.temperature_unit = default_unit.display_text
            # The number stays pending for an explicit unit ("180 °C")
            continue

        time_unit = units.time_units.get(word)
        temperature_unit = units.temperature_units.get(word)
        if time_unit is not None:
            seconds = int(round(number * units.time_unit_multipliers[time_unit]))
            result.total_time_in_seconds += seconds
            result.time_items.append(
                InstructionTime(
                    time_in_seconds=seconds,
                    time_unit_text=token.text,
                    time_text=number_text,
                )
            )
        elif temperature_unit is not None and not temperature_locked:
            result.temperature = number
            result.temperature_text = number_text
            result.temperature_unit = temperature_unit.display_text
            result.temperature_unit_text = token.text
            temperature_locked = True

        # A bare-marker temperature only yields to a unit right after it
        if result.temperature_text:
            temperature_locked = True
        number = 0.0

    if include_alternative_temperature_unit and result.temperature > 0:
        result.alternative_temperatures = get_temperature_conversions(
            result.temperature, result.temperature_unit, units
        )

    logger.debug(
        f"Found {len(result.time_items)} timings and temperature "
        f"{result.temperature_text or '-'} in {text!r}"
    )
    return result

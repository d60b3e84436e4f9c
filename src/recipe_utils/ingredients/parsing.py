"""Ingredient line grammar: quantity, unit, alternative quantity, name, extra."""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from recipe_utils.ingredients.models import AlternativeQuantity, IngredientParseResult
from recipe_utils.ingredients.number_utils import (
    UNICODE_FRACTIONS,
    _is_number,
    get_quantity_value,
)
from recipe_utils.tokenizer import Token, tokenize
from recipe_utils.units.catalog import UnitsConfig, get_units_for_language
from recipe_utils.units.conversion import get_ingredient_conversions

logger = logging.getLogger(__name__)

# --- Grammar ---


def get_quantity(
    tokens: Sequence[Token], units: UnitsConfig, start_index: int = 0
) -> Tuple[float, float, str, int]:
    """Read a quantity run starting at ``start_index``.

    A run is made of numbers, fractions ("1/2"), unicode fraction glyphs,
    and spelled-out numbers, optionally joined by addition markers
    ("1 and a half") or split by a range marker ("1-2", "2 to 3"). Leading
    whitespace is skipped; the first other token that is not part of the
    run ends it. The run always ends after its last numeric token, so a
    trailing marker ("2 or more") is left for the next grammar step.

    Args:
        tokens: Tokens of the line, with whitespace tokens kept.
        units: Catalog supplying spelled-out numbers and markers.
        start_index: Index of the first token to look at.

    Returns:
        A tuple containing:
            - min_value: Value before the range marker, or the value
              itself when there is no range
            - value: Value of the last (or only) part of the run
            - quantity_text: The run as written, e.g. "1 and a half"
            - next_index: Index after the run, ``start_index`` if no run

    Examples:
        >>> en = get_units_for_language("en")
        >>> get_quantity(tokenize("1-2 cups", remove_spaces=False), en)
        (1.0, 2.0, '1-2', 3)
        >>> get_quantity(tokenize("2 cups", remove_spaces=False), en)
        (2.0, 2.0, '2', 1)
    """
    quantity_text = ""
    convertible = ""
    first_convertible = ""
    space = ""
    previous_was_number = False
    in_range = False

    committed = ("", "", "", False, start_index)

    index = start_index
    while index < len(tokens):
        item = tokens[index].text
        lower = item.lower()
        is_space = item.isspace()
        is_number = not is_space and _is_number(item)
        is_fraction = (
            item == "/"
            and previous_was_number
            and index + 1 < len(tokens)
            and _is_number(tokens[index + 1].text)
        )
        is_glyph = item in UNICODE_FRACTIONS
        is_word_number = lower in units.ingredient_quantities

        if is_number or is_fraction or is_glyph or is_word_number:
            value = item
            value_space = space
            if is_glyph:
                value = UNICODE_FRACTIONS[item]
                # "1½" is one and a half, not "11/2"
                value_space = " " if convertible else space
            elif is_word_number:
                value = units.ingredient_quantities[lower]
                value_space = " " if convertible else space
            quantity_text += space + item
            convertible += value_space + value
            if not is_fraction:
                committed = (quantity_text, convertible, first_convertible, in_range, index + 1)
        elif quantity_text and lower in units.ingredient_quantity_add_markers:
            quantity_text += space + item
        elif quantity_text and lower in units.ingredient_range_markers:
            quantity_text += space + item
            first_convertible = convertible
            convertible = ""
            in_range = True
        elif not is_space:
            break

        space = " " if is_space else ""
        previous_was_number = is_number
        index += 1

    quantity_text, convertible, first_convertible, has_range, next_index = committed
    value = get_quantity_value(convertible)
    return (
        get_quantity_value(first_convertible) if has_range else value,
        value,
        quantity_text,
        next_index,
    )


def get_unit(
    tokens: Sequence[Token], start_index: int, units: UnitsConfig
) -> Tuple[str, str, int]:
    """Read an optional unit, skipping whitespace and size adjectives.

    Returns:
        ``(display_text, surface_text, next_index)``; ``("", "", start_index)``
        when the next word is not a unit.
    """
    index = start_index
    while index < len(tokens) and (
        tokens[index].is_space or tokens[index].lower in units.ingredient_sizes
    ):
        index += 1

    if index >= len(tokens):
        return "", "", start_index

    unit = units.ingredient_units.get(tokens[index].lower)
    if unit is None:
        return "", "", start_index
    return unit.display_text, tokens[index].text, index + 1


def get_ingredient(
    tokens: Sequence[Token], start_index: int, units: UnitsConfig
) -> Tuple[str, int]:
    """Read the ingredient name up to the first comma.

    A single leading preposition, size adjective or stray period is dropped,
    and parenthesised asides are removed.

    Returns:
        The cleaned name and the index of the terminating comma (or
        ``len(tokens)`` when there is none).
    """
    index = start_index
    while index < len(tokens) and tokens[index].is_space:
        index += 1

    if index < len(tokens):
        first = tokens[index].lower
        if (
            first in units.ingredient_prepositions
            or first in units.ingredient_sizes
            or first == "."
        ):
            index += 1

    end_index = len(tokens)
    for position in range(start_index, len(tokens)):
        if tokens[position].text == ",":
            end_index = position
            break

    parts: List[str] = []
    depth = 0
    for token in tokens[index:end_index]:
        if token.text == "(":
            depth += 1
        elif token.text == ")" and depth > 0:
            depth -= 1
        elif depth == 0:
            parts.append(token.text)

    return re.sub(r"\s+", " ", "".join(parts)).strip(), end_index


def get_extra(tokens: Sequence[Token], separator_index: int) -> str:
    """Return everything after the separating comma."""
    if separator_index + 1 >= len(tokens):
        return ""
    return "".join(token.text for token in tokens[separator_index + 1 :]).strip()


def _get_alternative_quantity(
    tokens: Sequence[Token], start_index: int, units: UnitsConfig
) -> Tuple[Optional[AlternativeQuantity], int]:
    """Read "(6 oz)" or "/ 170 g" directly after the primary unit.

    Only called once a primary unit was found, so "2 (14 oz) cans" yields
    no alternative.
    """
    index = start_index
    while index < len(tokens) and tokens[index].is_space:
        index += 1
    if index >= len(tokens) or tokens[index].text not in ("(", "/"):
        return None, start_index

    first, quantity, _, quantity_end = get_quantity(tokens, units, index + 1)
    if quantity <= 0:
        return None, start_index
    unit, unit_text, unit_end = get_unit(tokens, quantity_end, units)

    end_index = unit_end
    while end_index < len(tokens) and tokens[end_index].is_space:
        end_index += 1
    if end_index < len(tokens) and tokens[end_index].text == ")":
        end_index += 1
    else:
        end_index = unit_end

    min_quantity, max_quantity = sorted((first, quantity))
    return (
        AlternativeQuantity(
            quantity=quantity,
            unit=unit,
            unit_text=unit_text,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
        ),
        end_index,
    )


# --- Entry point ---


def parse_ingredient(
    text: Optional[str],
    language: Optional[str],
    include_extra: bool = True,
    include_alternative_units: bool = False,
    fallback_language: Optional[str] = None,
) -> Optional[IngredientParseResult]:
    """Parse a free-text ingredient line.

    Args:
        text: Raw ingredient line (e.g., "1 cup (240 ml) milk, warmed").
        language: Language tag selecting the unit catalog ("en", "en-US").
        include_extra: Fill ``extra`` with the text after the first comma.
        include_alternative_units: Append the quantity expressed in every
            other default unit of the parsed unit's conversion group.
        fallback_language: Catalog to use when ``language`` has none.

    Returns:
        The parsed line, or None for empty or whitespace-only text. Lines
        without a recognisable quantity still produce a result with a zero
        quantity and the whole line as the ingredient.

    Raises:
        LanguageNotSupportedError: Neither language has a unit catalog.

    Examples:
        >>> result = parse_ingredient("2 tbsp coconut oil", "en")
        >>> result.quantity, result.unit_text, result.ingredient
        (2.0, 'tbsp', 'coconut oil')
    """
    if text is None or not text.strip():
        return None

    units = get_units_for_language(language, fallback_language=fallback_language)
    tokens = tokenize(text, remove_spaces=False)

    first_quantity, quantity, quantity_text, quantity_end = get_quantity(tokens, units)
    if not quantity_text:
        logger.debug(f"No quantity found in ingredient line {text!r}")
    unit, unit_text, unit_end = get_unit(tokens, quantity_end, units)

    alternative_quantities: List[AlternativeQuantity] = []
    ingredient_start = unit_end
    if unit:
        alternative, ingredient_start = _get_alternative_quantity(tokens, unit_end, units)
        if alternative is not None:
            alternative_quantities.append(alternative)

    ingredient, ingredient_end = get_ingredient(tokens, ingredient_start, units)
    extra = get_extra(tokens, ingredient_end) if include_extra else ""

    min_quantity, max_quantity = sorted((first_quantity, quantity))

    if include_alternative_units and unit:
        alternative_quantities.extend(
            get_ingredient_conversions(
                AlternativeQuantity(
                    quantity=quantity,
                    unit=unit,
                    unit_text=unit_text,
                    min_quantity=min_quantity,
                    max_quantity=max_quantity,
                ),
                units,
            )
        )

    return IngredientParseResult(
        quantity=quantity,
        quantity_text=quantity_text,
        min_quantity=min_quantity,
        max_quantity=max_quantity,
        unit=unit,
        unit_text=unit_text,
        ingredient=ingredient,
        extra=extra,
        alternative_quantities=alternative_quantities,
    )

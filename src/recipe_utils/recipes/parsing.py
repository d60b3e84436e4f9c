"""Build structured recipe records from imported free text."""

import dataclasses
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup

from recipe_utils.ingredients.parsing import parse_ingredient
from recipe_utils.instructions.parsing import parse_instruction
from recipe_utils.recipes.models import (
    IngredientQuantity,
    IngredientUnit,
    RecipeIngredient,
    RecipeStep,
    RecipeStepTemperature,
    RecipeStepTiming,
)

logger = logging.getLogger(__name__)

# Tags such as "<b>" or "</p>", and entities such as "&amp;" or "&#39;"
MARKUP_PATTERN = re.compile(r"</?[a-zA-Z][^<>]*>|&#?\w+;")


@dataclasses.dataclass
class Recipe:
    """Dataclass for holding parsed recipe data."""

    name: str
    ingredients: List[RecipeIngredient]
    steps: List[RecipeStep]
    description: Optional[str] = None


def clean_import_text(text: Optional[str]) -> str:
    """Strip HTML markup and decode entities from an imported string.

    Interior spacing is kept as imported. Text without tags or entities is
    only stripped, so a stray "<" in plain text survives.

    Examples:
        >>> clean_import_text("1 tbsp ginger, peeled &amp; grated")
        '1 tbsp ginger, peeled & grated'
        >>> clean_import_text("<b>2</b> eggs ")
        '2 eggs'
    """
    if not text:
        return ""
    if not MARKUP_PATTERN.search(text):
        return text.strip()
    return BeautifulSoup(text, "lxml").get_text().strip()


def build_ingredient(
    text: str,
    language: Optional[str],
    sort_index: int = 0,
    include_alternative_units: bool = False,
    fallback_language: Optional[str] = None,
) -> RecipeIngredient:
    """Parse an imported ingredient line into a RecipeIngredient.

    Args:
        text: Ingredient line as imported, possibly with HTML entities.
        language: Language tag selecting the unit catalog.
        sort_index: Position of the line in the recipe.
        include_alternative_units: Store conversions to other units too.
        fallback_language: Catalog to use when ``language`` has none.

    Returns:
        The ingredient. Lines that cannot be parsed keep only their text.
    """
    cleaned = clean_import_text(text)
    result = parse_ingredient(
        cleaned,
        language,
        include_alternative_units=include_alternative_units,
        fallback_language=fallback_language,
    )
    if result is None:
        return RecipeIngredient(ingredient_text=cleaned, sort_index=sort_index)

    quantity = None
    if result.quantity_text:
        quantity = IngredientQuantity(
            quantity=result.quantity,
            quantity_text=result.quantity_text,
            min_quantity=result.min_quantity,
            max_quantity=result.max_quantity,
        )
    unit = IngredientUnit(unit=result.unit, unit_text=result.unit_text) if result.unit else None

    return RecipeIngredient(
        ingredient_text=cleaned,
        sort_index=sort_index,
        ingredient_part=result.ingredient or None,
        extra_information=result.extra or None,
        quantity=quantity,
        unit=unit,
        alternative_quantities=result.alternative_quantities,
    )


def build_step(
    text: str,
    language: Optional[str],
    sort_index: int = 0,
    include_alternative_temperature_unit: bool = False,
    fallback_language: Optional[str] = None,
) -> RecipeStep:
    """Parse an imported instruction step into a RecipeStep."""
    cleaned = clean_import_text(text)
    result = parse_instruction(
        cleaned,
        language,
        include_alternative_temperature_unit=include_alternative_temperature_unit,
        fallback_language=fallback_language,
    )
    if result is None:
        return RecipeStep(instruction_text=cleaned, sort_index=sort_index)

    timings = [
        RecipeStepTiming(
            time_in_seconds=item.time_in_seconds,
            time_text=item.time_text,
            time_unit_text=item.time_unit_text,
        )
        for item in result.time_items
    ]
    temperatures = []
    if result.temperature > 0:
        temperatures.append(
            RecipeStepTemperature(
                temperature=result.temperature,
                temperature_text=result.temperature_text,
                temperature_unit_text=result.temperature_unit_text,
                temperature_unit=result.temperature_unit,
            )
        )

    return RecipeStep(
        instruction_text=cleaned,
        sort_index=sort_index,
        timings=timings,
        temperatures=temperatures,
    )


def build_recipe(
    name: str,
    ingredient_lines: List[str],
    step_texts: List[str],
    language: Optional[str] = "en",
    description: Optional[str] = None,
    fallback_language: Optional[str] = None,
) -> Recipe:
    """Parse every ingredient line and step of an imported recipe.

    Blank ingredient lines and steps are skipped; sort indices follow the
    order of the lines that are kept.
    """
    ingredients = [
        build_ingredient(line, language, index, fallback_language=fallback_language)
        for index, line in enumerate(line for line in ingredient_lines if line and line.strip())
    ]
    steps = [
        build_step(text, language, index, fallback_language=fallback_language)
        for index, text in enumerate(text for text in step_texts if text and text.strip())
    ]
    logger.debug(f"Built recipe {name!r}: {len(ingredients)} ingredients, {len(steps)} steps")
    return Recipe(name=name, ingredients=ingredients, steps=steps, description=description)

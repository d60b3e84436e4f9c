"""Recipe-wide matching and tabulation of parsed records."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from recipe_utils.matching.config import DEFAULT_MATCHING_CONFIG, IngredientMatchingConfig
from recipe_utils.matching.matcher import IngredientStepMatcher
from recipe_utils.recipes.models import RecipeIngredient, RecipeStep


def match_recipe_steps(
    steps: Sequence[RecipeStep],
    ingredients: Sequence[RecipeIngredient],
    config: IngredientMatchingConfig = DEFAULT_MATCHING_CONFIG,
    max_workers: int = 4,
    show_progress: bool = False,
) -> List[List[RecipeIngredient]]:
    """Match every step of a recipe against its ingredients in parallel.

    Args:
        steps: The recipe's steps.
        ingredients: The recipe's ingredients.
        config: Matching configuration shared by all workers.
        max_workers: Maximum number of parallel workers.
        show_progress: Show a tqdm progress bar.

    Returns:
        One list of matched ingredients per step, in step order.
    """
    matcher = IngredientStepMatcher(config)
    results: Dict[int, List[RecipeIngredient]] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(matcher.match_ingredients, step.instruction_text, ingredients): index
            for index, step in enumerate(steps)
        }

        with tqdm(
            total=len(steps), desc="Matching steps", disable=not show_progress
        ) as pbar:
            for future in as_completed(future_to_index):
                results[future_to_index[future]] = future.result()
                pbar.update(1)

    return [results[index] for index in range(len(steps))]


def _number_or_nan(value: Optional[float]) -> float:
    return np.nan if value is None else value


def ingredients_to_frame(ingredients: Sequence[RecipeIngredient]) -> pd.DataFrame:
    """Tabulate parsed ingredients, one row per line.

    Missing quantities are NaN and missing text fields are empty strings.
    """
    rows = []
    for ingredient in ingredients:
        quantity = ingredient.quantity
        unit = ingredient.unit
        rows.append(
            {
                "sort_index": ingredient.sort_index,
                "ingredient_text": ingredient.ingredient_text,
                "ingredient": ingredient.ingredient_part or "",
                "extra": ingredient.extra_information or "",
                "quantity": _number_or_nan(quantity.quantity if quantity else None),
                "quantity_text": quantity.quantity_text if quantity else "",
                "min_quantity": _number_or_nan(quantity.min_quantity if quantity else None),
                "max_quantity": _number_or_nan(quantity.max_quantity if quantity else None),
                "unit": unit.unit if unit else "",
                "unit_text": unit.unit_text if unit else "",
            }
        )

    columns = [
        "sort_index",
        "ingredient_text",
        "ingredient",
        "extra",
        "quantity",
        "quantity_text",
        "min_quantity",
        "max_quantity",
        "unit",
        "unit_text",
    ]
    return pd.DataFrame(rows, columns=columns)


def steps_to_frame(
    steps: Sequence[RecipeStep],
    matched_ingredients: Optional[Sequence[Sequence[RecipeIngredient]]] = None,
) -> pd.DataFrame:
    """Tabulate parsed steps, one row per step.

    Args:
        steps: Parsed steps.
        matched_ingredients: Optional output of ``match_recipe_steps``; adds
            an "ingredients" column listing each step's matches in order.
    """
    rows = []
    for index, step in enumerate(steps):
        temperature = step.temperatures[0] if step.temperatures else None
        row = {
            "sort_index": step.sort_index,
            "instruction_text": step.instruction_text,
            "total_time_seconds": sum(timing.time_in_seconds for timing in step.timings),
            "timings": "; ".join(t.display_text for t in step.matched_timings()),
            "temperature": _number_or_nan(temperature.temperature if temperature else None),
            "temperature_unit": temperature.temperature_unit if temperature else "",
        }
        if matched_ingredients is not None:
            row["ingredients"] = "; ".join(
                ingredient.ingredient_part or ingredient.ingredient_text
                for ingredient in matched_ingredients[index]
            )
        rows.append(row)

    return pd.DataFrame(rows)

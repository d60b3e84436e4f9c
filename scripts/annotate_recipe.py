#!/usr/bin/env python3
"""
Annotate a recipe: parse its ingredient lines and steps, then match
ingredients and timings to each step.

The input is a JSON file of the form
    {"name": "...", "ingredients": ["..."], "steps": ["..."]}
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Tuple

import pandas as pd
from tqdm import tqdm

from recipe_utils.recipes import (
    build_ingredient,
    build_step,
    ingredients_to_frame,
    match_recipe_steps,
    steps_to_frame,
)


def load_recipe(path: Path) -> dict:
    """Load a recipe JSON file and check that it has the expected lists."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    for key in ("ingredients", "steps"):
        if not isinstance(data.get(key), list):
            raise ValueError(f"{path}: '{key}' must be a list of strings")
    return data


def annotate(
    data: dict,
    language: str,
    fallback_language: str,
    include_alternative_units: bool,
    max_workers: int,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Parse and match one recipe, returning ingredient and step tables."""
    ingredients = [
        build_ingredient(
            line,
            language,
            sort_index=index,
            include_alternative_units=include_alternative_units,
            fallback_language=fallback_language,
        )
        for index, line in enumerate(tqdm(data["ingredients"], desc="Ingredients"))
    ]
    steps = [
        build_step(text, language, sort_index=index, fallback_language=fallback_language)
        for index, text in enumerate(tqdm(data["steps"], desc="Steps"))
    ]

    matches = match_recipe_steps(
        steps, ingredients, max_workers=max_workers, show_progress=True
    )
    return ingredients_to_frame(ingredients), steps_to_frame(steps, matches)


def main():
    parser = argparse.ArgumentParser(
        description="Parse a recipe's ingredients and steps and match them together"
    )
    parser.add_argument("recipe", type=Path, help="Recipe JSON file")
    parser.add_argument(
        "--language", default="en", help="Language of the recipe text (default: en)"
    )
    parser.add_argument(
        "--fallback-language",
        default="en",
        help="Language to use when --language has no unit catalog (default: en)",
    )
    parser.add_argument(
        "--alternative-units",
        action="store_true",
        help="Also compute conversions to other units",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=4,
        help="Maximum number of parallel workers for step matching (default: 4)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Write ingredients.csv and steps.csv here instead of printing",
    )
    parser.add_argument("--verbose", action="store_true", help="Show debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    data = load_recipe(args.recipe)
    print(f"Annotating {data.get('name') or args.recipe.name}...")
    ingredients_df, steps_df = annotate(
        data,
        args.language,
        args.fallback_language,
        args.alternative_units,
        args.max_workers,
    )

    if args.output_dir:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        ingredients_df.to_csv(args.output_dir / "ingredients.csv", index=False)
        steps_df.to_csv(args.output_dir / "steps.csv", index=False)
        print(f"Wrote {len(ingredients_df)} ingredients and {len(steps_df)} steps to {args.output_dir}")
    else:
        with pd.option_context("display.max_colwidth", 60, "display.width", 200):
            print(ingredients_df.to_string(index=False))
            print()
            print(steps_df.to_string(index=False))


if __name__ == "__main__":
    main()

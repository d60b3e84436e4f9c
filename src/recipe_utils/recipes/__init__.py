"""Recipe records, import builders and batch processing."""

from .batch import ingredients_to_frame, match_recipe_steps, steps_to_frame
from .models import (
    IngredientQuantity,
    IngredientUnit,
    RecipeIngredient,
    RecipeStep,
    RecipeStepTemperature,
    RecipeStepTiming,
)
from .parsing import (
    Recipe,
    build_ingredient,
    build_recipe,
    build_step,
    clean_import_text,
)

__all__ = [
    "Recipe",
    "RecipeIngredient",
    "IngredientQuantity",
    "IngredientUnit",
    "RecipeStep",
    "RecipeStepTiming",
    "RecipeStepTemperature",
    "build_ingredient",
    "build_step",
    "build_recipe",
    "clean_import_text",
    "match_recipe_steps",
    "ingredients_to_frame",
    "steps_to_frame",
]

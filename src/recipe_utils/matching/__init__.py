"""Matching instruction steps to ingredients and timings."""

from .config import DEFAULT_MATCHING_CONFIG, IngredientMatchingConfig, MatchScoring
from .lemmatizer import (
    IdentityLemmatizer,
    Lemmatizer,
    SnowballLemmatizer,
    WordNetLemmatizer,
)
from .matcher import (
    IngredientMatchDebug,
    IngredientMatchKind,
    IngredientMatchResult,
    IngredientStepMatcher,
    match_ingredients,
)
from .normalization import (
    NormalisedStep,
    canonical_tokens,
    generate_variants,
    letters_and_separators_only,
    normalise_step,
)
from .timings import MatchedTiming, matched_timings

__all__ = [
    "DEFAULT_MATCHING_CONFIG",
    "IngredientMatchingConfig",
    "MatchScoring",
    "Lemmatizer",
    "IdentityLemmatizer",
    "SnowballLemmatizer",
    "WordNetLemmatizer",
    "IngredientMatchDebug",
    "IngredientMatchKind",
    "IngredientMatchResult",
    "IngredientStepMatcher",
    "match_ingredients",
    "NormalisedStep",
    "canonical_tokens",
    "generate_variants",
    "letters_and_separators_only",
    "normalise_step",
    "MatchedTiming",
    "matched_timings",
]

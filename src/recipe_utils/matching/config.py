"""Configuration for matching ingredients to instruction steps."""

import dataclasses
import functools
from typing import Dict, FrozenSet, Iterable, List, Mapping, Tuple

from recipe_utils.matching.lemmatizer import Lemmatizer, SnowballLemmatizer

# --- Default word lists ---

STOP_WORDS = frozenset(
    {
        "a", "an", "the", "of", "to", "into", "in", "on", "and", "or", "with",
        "for", "from", "as", "at", "by", "up", "down", "over", "under",
    }
)

PREP_WORDS = frozenset(
    {
        "peeled", "grated", "diced", "minced", "sliced", "chopped", "crushed",
        "ground", "boneless", "skinless", "fresh", "dried", "large", "small",
        "medium", "optional", "garnish", "finely", "roughly", "thinly",
    }
)

ALLOW_SHORT_TOKENS = frozenset({"egg", "soy", "ale", "tea"})

UNIT_WORDS = frozenset(
    {
        "g", "gram", "grams", "kg", "ml", "milliliter", "milliliters", "l",
        "tbsp", "tablespoon", "tsp", "teaspoon", "cup", "cups", "clove",
        "cloves", "pinch", "dash", "ounce", "oz",
    }
)

SYNONYMS = {
    "rapeseed oil": ("canola oil",),
    "spring onion": ("scallion", "green onion"),
    "coriander": ("cilantro",),
    "eggplant": ("aubergine",),
}

# Generic heads that say little on their own ("oil" of "coconut oil")
LOW_INFO_HEADS = frozenset({"oil", "sauce", "flour", "sugar", "pepper", "chili", "chilli"})

# Heads whose modifier may match alone ("chicken" of "chicken breasts")
ALLOW_MODIFIER_SINGLES_FOR_HEADS = frozenset(
    {
        "breast", "breasts", "thigh", "thighs", "wing", "wings", "drumstick",
        "drumsticks", "fillet", "fillets", "steak", "steaks", "mince",
    }
)

MIN_TOKEN_LENGTH = 3


@dataclasses.dataclass(frozen=True)
class MatchScoring:
    """Points awarded to a candidate match, by kind and bonus."""

    full_span: int = 1000
    full_single: int = 900
    head_single: int = 700
    modifier_single: int = 500
    span_bonus_per_token: int = 50
    exact_canonical_bonus: int = 75


@dataclasses.dataclass(frozen=True)
class IngredientMatchingConfig:
    """Word lists and weights for the step-ingredient matcher.

    Word lists are written in plain English. They are compared against
    lemmatized tokens in both their written and lemmatized form, so they keep
    working whichever lemmatizer is configured.

    Attributes:
        stop_words: Words never used as, or inside, a variant.
        prep_words: Preparation words dropped from ingredient names.
        allow_short_tokens: Tokens shorter than three letters to keep.
        unit_words: Unit names dropped from ingredient names.
        synonyms: Ingredient phrase -> alternative phrases to search for.
        low_info_heads: Single words never matched alone when they come from
            a longer phrase.
        max_variant_tokens: Inclusive (min, max) n-gram size of variants.
        allow_modifier_singles_for_heads: Heads whose modifiers may match as
            single words.
        ignore_variant_sources_beyond_name: Only use the ingredient name and
            raw line, not the extra information, as variant sources.
        scoring: Candidate scoring weights.
        lemmatizer: Backend shared by step and ingredient normalisation.
    """

    stop_words: FrozenSet[str] = STOP_WORDS
    prep_words: FrozenSet[str] = PREP_WORDS
    allow_short_tokens: FrozenSet[str] = ALLOW_SHORT_TOKENS
    unit_words: FrozenSet[str] = UNIT_WORDS
    synonyms: Mapping[str, Tuple[str, ...]] = dataclasses.field(
        default_factory=lambda: dict(SYNONYMS)
    )
    low_info_heads: FrozenSet[str] = LOW_INFO_HEADS
    max_variant_tokens: Tuple[int, int] = (1, 3)
    allow_modifier_singles_for_heads: FrozenSet[str] = ALLOW_MODIFIER_SINGLES_FOR_HEADS
    ignore_variant_sources_beyond_name: bool = True
    scoring: MatchScoring = dataclasses.field(default_factory=MatchScoring)
    lemmatizer: Lemmatizer = dataclasses.field(
        default_factory=SnowballLemmatizer, compare=False, repr=False
    )

    def _forms(self, words: Iterable[str]) -> FrozenSet[str]:
        forms = set()
        for word in words:
            forms.add(word.lower())
            forms.update(self.lemmatizer.lemmas(word))
        return frozenset(forms)

    @functools.cached_property
    def stop_word_forms(self) -> FrozenSet[str]:
        return self._forms(self.stop_words)

    @functools.cached_property
    def prep_word_forms(self) -> FrozenSet[str]:
        return self._forms(self.prep_words)

    @functools.cached_property
    def unit_word_forms(self) -> FrozenSet[str]:
        return self._forms(self.unit_words)

    @functools.cached_property
    def allow_short_token_forms(self) -> FrozenSet[str]:
        return self._forms(self.allow_short_tokens)

    @functools.cached_property
    def low_info_head_forms(self) -> FrozenSet[str]:
        return self._forms(self.low_info_heads)

    @functools.cached_property
    def modifier_single_head_forms(self) -> FrozenSet[str]:
        return self._forms(self.allow_modifier_singles_for_heads)

    @functools.cached_property
    def synonym_lookup(self) -> Dict[str, Tuple[str, ...]]:
        """Synonyms keyed by the filtered, lemmatized form of each phrase."""
        lookup: Dict[str, Tuple[str, ...]] = {}
        for phrase, alternatives in self.synonyms.items():
            lookup[phrase.lower()] = tuple(alternatives)
            key = " ".join(self.filter_tokens(self.lemmatizer.lemmas(phrase)))
            if key:
                lookup[key] = tuple(alternatives)
        return lookup

    def is_short(self, token: str) -> bool:
        return len(token) < MIN_TOKEN_LENGTH and token not in self.allow_short_token_forms

    def keep_token(self, token: str) -> bool:
        """Whether a lemmatized token can be part of an ingredient phrase."""
        return not (
            token in self.stop_word_forms
            or token in self.prep_word_forms
            or token in self.unit_word_forms
            or self.is_short(token)
        )

    def filter_tokens(self, tokens: Iterable[str]) -> List[str]:
        return [token for token in tokens if self.keep_token(token)]


DEFAULT_MATCHING_CONFIG = IngredientMatchingConfig()

"""Normalisation of step text and ingredient names into lemma tokens."""

import dataclasses
import html
import re
from typing import FrozenSet, List, Optional, Set, Tuple

from recipe_utils.matching.config import DEFAULT_MATCHING_CONFIG, IngredientMatchingConfig


@dataclasses.dataclass(frozen=True)
class NormalisedStep:
    lemma_tokens: Tuple[str, ...]
    token_set: FrozenSet[str]

    @property
    def normalised_text(self) -> str:
        """Space-padded lemma text, handy for substring checks."""
        return f" {' '.join(self.lemma_tokens)} "


def letters_and_separators_only(text: str) -> str:
    """Replace everything but letters, spaces, "/", "&" and "-" with a space.

    Examples:
        >>> letters_and_separators_only("650g chicken (£4.00)")
        ' g chicken '
    """
    cleaned = "".join(
        char if char.isalpha() or char in " /&-" else " " for char in text
    )
    return re.sub(r" {2,}", " ", cleaned)


def normalise_step(
    step_text: str, config: IngredientMatchingConfig = DEFAULT_MATCHING_CONFIG
) -> NormalisedStep:
    """Lower-case, unescape and lemmatize a step's instruction text."""
    cleaned = letters_and_separators_only(html.unescape(step_text.lower()))
    lemmas = tuple(config.lemmatizer.lemmas(cleaned))
    return NormalisedStep(lemma_tokens=lemmas, token_set=frozenset(lemmas))


# --- Ingredient phrases ---


def _variant_sources(ingredient, config: IngredientMatchingConfig) -> List[str]:
    """Name-bearing text fields of a recipe ingredient."""
    fields = [ingredient.ingredient_part, ingredient.ingredient_text]
    if not config.ignore_variant_sources_beyond_name:
        fields.append(ingredient.extra_information)
    return [field for field in fields if field]


def _source_phrases(source: str) -> List[str]:
    """Split one source string into the phrases worth lemmatizing.

    Asides in brackets and everything after the first comma are dropped, and
    alternatives separated by "/", "&" or "-" become separate phrases. With
    two or more alternatives the joined phrase is kept too.
    """
    text = html.unescape(source.lower())
    text = re.sub(r"\(.*?\)", " ", text)
    text = re.sub(r"\[.*?\]", " ", text)
    text = re.sub(r",.*$", " ", text, flags=re.DOTALL).strip()

    parts = [
        letters_and_separators_only(part).strip() for part in re.split(r"[/&\-]", text)
    ]
    parts = [part for part in parts if part]
    if len(parts) >= 2:
        return parts + [" ".join(parts)]
    return parts


def _filtered_phrases(ingredient, config: IngredientMatchingConfig) -> List[List[str]]:
    phrases = []
    for source in _variant_sources(ingredient, config):
        for phrase in _source_phrases(source):
            phrases.append(config.filter_tokens(config.lemmatizer.lemmas(phrase)))
    return phrases


def canonical_tokens(
    ingredient, config: IngredientMatchingConfig = DEFAULT_MATCHING_CONFIG
) -> List[str]:
    """The longest filtered lemma phrase among the ingredient's name fields.

    Args:
        ingredient: Object with ``ingredient_part``, ``ingredient_text`` and
            ``extra_information`` attributes, such as a RecipeIngredient.
        config: Word lists and lemmatizer to use.

    Returns:
        Lemma tokens of the most informative phrase; the first one wins a
        tie. Empty when no name field has a usable word.
    """
    best: List[str] = []
    for tokens in _filtered_phrases(ingredient, config):
        if len(tokens) > len(best):
            best = tokens
    return best


def _synonym_variants(phrase: str, config: IngredientMatchingConfig) -> List[str]:
    variants = []
    for synonym in config.synonym_lookup.get(phrase, ()):
        cleaned = letters_and_separators_only(synonym.lower()).strip()
        tokens = config.filter_tokens(config.lemmatizer.lemmas(cleaned))
        if tokens:
            variants.append(" ".join(tokens))
    return variants


def generate_variants(
    ingredient, config: IngredientMatchingConfig = DEFAULT_MATCHING_CONFIG
) -> Set[str]:
    """Every n-gram of the ingredient's phrases that may be searched for.

    Single words taken from a longer phrase are dropped when they are a
    low-information head ("oil"), or when they are a modifier and the head
    does not allow modifier matches ("coconut" of "coconut oil", but
    "chicken" of "chicken breast" is kept). Whole phrases short enough to be
    a variant are always kept along with their configured synonyms.

    Returns:
        Space-joined lemma sequences.
    """
    min_tokens, max_tokens = config.max_variant_tokens
    variants: Set[str] = set()

    for tokens in _filtered_phrases(ingredient, config):
        if not tokens:
            continue
        head: Optional[str] = tokens[-1]

        for size in range(min_tokens, max_tokens + 1):
            for start in range(len(tokens) - size + 1):
                ngram = tokens[start : start + size]
                if size == 1 and len(tokens) >= 2:
                    token = ngram[0]
                    if token in config.low_info_head_forms:
                        continue
                    if token != head and head not in config.modifier_single_head_forms:
                        continue
                variants.add(" ".join(ngram))

        if len(tokens) <= max_tokens:
            joined = " ".join(tokens)
            variants.add(joined)
            variants.update(_synonym_variants(joined, config))

    return variants

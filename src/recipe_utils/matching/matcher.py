"""Decide which of a recipe's ingredients an instruction step mentions."""

import dataclasses
import enum
import logging
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from recipe_utils.matching.config import DEFAULT_MATCHING_CONFIG, IngredientMatchingConfig
from recipe_utils.matching.normalization import (
    NormalisedStep,
    canonical_tokens,
    generate_variants,
    normalise_step,
)

logger = logging.getLogger(__name__)


class IngredientMatchKind(enum.Enum):
    FULL_SPAN = "fullSpan"
    FULL_SINGLE = "fullSingle"
    HEAD_SINGLE = "headSingle"
    MODIFIER_SINGLE = "modifierSingle"


@dataclasses.dataclass(frozen=True)
class Candidate:
    """One occurrence of one ingredient variant in the step tokens."""

    ingredient_index: int
    variant: str
    variant_tokens: Tuple[str, ...]
    start: int
    span_length: int
    kind: IngredientMatchKind
    score: int

    @property
    def end(self) -> int:
        return self.start + self.span_length

    def sort_key(self) -> Tuple[int, int, int, int]:
        return (-self.score, -self.span_length, self.start, self.ingredient_index)


@dataclasses.dataclass
class IngredientMatchDebug:
    ingredient: Any
    matched_variant: Optional[str]
    index: Optional[int]
    span_length: Optional[int]
    kind: Optional[IngredientMatchKind]
    score: Optional[int]
    selected: bool
    reason: str


@dataclasses.dataclass
class IngredientMatchResult:
    ingredients: List[Any]
    debug: List[IngredientMatchDebug] = dataclasses.field(default_factory=list)


def _token_indices(token: str, tokens: Sequence[str]) -> List[int]:
    return [index for index, candidate in enumerate(tokens) if candidate == token]


def _span_indices(
    variant_tokens: Sequence[str], tokens: Sequence[str], allow_overlapping: bool
) -> List[int]:
    """Start indices of ``variant_tokens`` as a contiguous run in ``tokens``."""
    size = len(variant_tokens)
    if size == 0 or size > len(tokens):
        return []

    target = list(variant_tokens)
    starts = []
    index = 0
    while index + size <= len(tokens):
        if list(tokens[index : index + size]) == target:
            starts.append(index)
            index += 1 if allow_overlapping else size
        else:
            index += 1
    return starts


class IngredientStepMatcher:
    """Matches a step's text against a list of recipe ingredients.

    Every occurrence of every ingredient variant becomes a scored candidate.
    Candidates are then taken greedily, best first, skipping ingredients
    that already matched and spans that an earlier pick already occupies.

    Example:
        matcher = IngredientStepMatcher()
        ingredients = matcher.match_ingredients(step.instruction_text, recipe.ingredients)
    """

    def __init__(self, config: IngredientMatchingConfig = DEFAULT_MATCHING_CONFIG):
        self.config = config

    def classify_kind(
        self, canonical: Sequence[str], matched_token: Optional[str], span_length: int
    ) -> IngredientMatchKind:
        if span_length >= 2:
            return IngredientMatchKind.FULL_SPAN
        if len(canonical) <= 1:
            return IngredientMatchKind.FULL_SINGLE
        if matched_token is not None and matched_token == canonical[-1]:
            return IngredientMatchKind.HEAD_SINGLE
        return IngredientMatchKind.MODIFIER_SINGLE

    def score(
        self, kind: IngredientMatchKind, span_length: int, is_exact_canonical: bool
    ) -> int:
        scoring = self.config.scoring
        base = {
            IngredientMatchKind.FULL_SPAN: scoring.full_span,
            IngredientMatchKind.FULL_SINGLE: scoring.full_single,
            IngredientMatchKind.HEAD_SINGLE: scoring.head_single,
            IngredientMatchKind.MODIFIER_SINGLE: scoring.modifier_single,
        }[kind]
        span_bonus = span_length * scoring.span_bonus_per_token if span_length >= 2 else 0
        exact_bonus = scoring.exact_canonical_bonus if is_exact_canonical else 0
        return base + span_bonus + exact_bonus

    def _candidates_for(
        self,
        ingredient_index: int,
        ingredient: Any,
        step: NormalisedStep,
    ) -> List[Candidate]:
        canonical = canonical_tokens(ingredient, self.config)
        # Longest variants first so equal candidates keep a stable order
        variants = sorted(
            generate_variants(ingredient, self.config), key=lambda v: (-len(v), v)
        )

        candidates = []
        for variant in variants:
            variant_tokens = tuple(variant.split())
            if not variant_tokens:
                continue
            if not all(token in step.token_set for token in variant_tokens):
                continue

            if len(variant_tokens) == 1:
                token = variant_tokens[0]
                if self.config.is_short(token) or token in self.config.stop_word_forms:
                    continue
                kind = self.classify_kind(canonical, token, 1)
                score = self.score(kind, 1, list(canonical) == [token])
                starts = _token_indices(token, step.lemma_tokens)
            else:
                kind = self.classify_kind(canonical, None, len(variant_tokens))
                score = self.score(
                    kind, len(variant_tokens), list(canonical) == list(variant_tokens)
                )
                starts = _span_indices(
                    variant_tokens, step.lemma_tokens, allow_overlapping=False
                )

            for start in starts:
                candidates.append(
                    Candidate(
                        ingredient_index=ingredient_index,
                        variant=variant,
                        variant_tokens=variant_tokens,
                        start=start,
                        span_length=len(variant_tokens),
                        kind=kind,
                        score=score,
                    )
                )
        return candidates

    def match(
        self, step_text: str, ingredients: Sequence[Any], debug: bool = False
    ) -> IngredientMatchResult:
        """Match a step against ingredients, optionally with a per-ingredient trace.

        Args:
            step_text: The step's raw instruction text.
            ingredients: Objects with ``ingredient_part``, ``ingredient_text``
                and ``extra_information`` attributes.
            debug: Also explain, for every ingredient, which candidate was
                selected or why it was not.

        Returns:
            Matched ingredients ordered by where they first occur in the step.
        """
        if not step_text or not ingredients:
            return IngredientMatchResult(ingredients=[])

        step = normalise_step(step_text, self.config)

        all_candidates: List[Candidate] = []
        best_by_ingredient: Dict[int, Candidate] = {}
        for ingredient_index, ingredient in enumerate(ingredients):
            for candidate in self._candidates_for(ingredient_index, ingredient, step):
                all_candidates.append(candidate)
                best = best_by_ingredient.get(ingredient_index)
                if best is None or candidate.sort_key() < best.sort_key():
                    best_by_ingredient[ingredient_index] = candidate

        all_candidates.sort(key=Candidate.sort_key)

        selected: List[Candidate] = []
        selected_ingredients: Set[int] = set()
        occupied: Dict[int, Candidate] = {}
        suppressed_by: Dict[int, str] = {}

        for candidate in all_candidates:
            if candidate.ingredient_index in selected_ingredients:
                continue

            owner = next(
                (occupied[i] for i in range(candidate.start, candidate.end) if i in occupied),
                None,
            )
            if owner is not None:
                suppressed_by[candidate.ingredient_index] = f"suppressed by '{owner.variant}'"
                logger.debug(
                    f"Candidate '{candidate.variant}' at {candidate.start} "
                    f"suppressed by '{owner.variant}'"
                )
                continue

            selected.append(candidate)
            selected_ingredients.add(candidate.ingredient_index)
            self._occupy(candidate, step, occupied)
            logger.debug(
                f"Selected '{candidate.variant}' at {candidate.start} "
                f"({candidate.kind.value}, score {candidate.score})"
            )

        selected.sort(key=lambda candidate: candidate.start)
        matched = [ingredients[candidate.ingredient_index] for candidate in selected]

        if not debug:
            return IngredientMatchResult(ingredients=matched)

        return IngredientMatchResult(
            ingredients=matched,
            debug=self._debug_items(ingredients, selected, best_by_ingredient, suppressed_by),
        )

    def match_ingredients(self, step_text: str, ingredients: Sequence[Any]) -> List[Any]:
        return self.match(step_text, ingredients).ingredients

    @staticmethod
    def _occupy(
        candidate: Candidate, step: NormalisedStep, occupied: Dict[int, Candidate]
    ) -> None:
        # A full span claims every occurrence of its phrase in the step
        if candidate.kind is IngredientMatchKind.FULL_SPAN:
            starts = _span_indices(
                candidate.variant_tokens, step.lemma_tokens, allow_overlapping=True
            )
        else:
            starts = [candidate.start]

        for start in starts:
            for index in range(start, start + candidate.span_length):
                occupied.setdefault(index, candidate)

    @staticmethod
    def _debug_items(
        ingredients: Sequence[Any],
        selected: Sequence[Candidate],
        best_by_ingredient: Dict[int, Candidate],
        suppressed_by: Dict[int, str],
    ) -> List[IngredientMatchDebug]:
        selected_by_ingredient = {candidate.ingredient_index: candidate for candidate in selected}

        items = []
        for index, ingredient in enumerate(ingredients):
            candidate = selected_by_ingredient.get(index)
            if candidate is not None:
                reason = "selected"
            else:
                candidate = best_by_ingredient.get(index)
                reason = suppressed_by.get(index, "not selected")

            if candidate is None:
                items.append(
                    IngredientMatchDebug(
                        ingredient=ingredient,
                        matched_variant=None,
                        index=None,
                        span_length=None,
                        kind=None,
                        score=None,
                        selected=False,
                        reason="no match",
                    )
                )
                continue

            items.append(
                IngredientMatchDebug(
                    ingredient=ingredient,
                    matched_variant=candidate.variant,
                    index=candidate.start,
                    span_length=candidate.span_length,
                    kind=candidate.kind,
                    score=candidate.score,
                    selected=reason == "selected",
                    reason=reason,
                )
            )
        return items


def match_ingredients(
    step_text: str,
    ingredients: Sequence[Any],
    config: IngredientMatchingConfig = DEFAULT_MATCHING_CONFIG,
    debug: bool = False,
):
    """Return the ingredients a step mentions, in order of first mention.

    With ``debug=True`` an IngredientMatchResult is returned instead, whose
    ``debug`` list explains the outcome for every ingredient.

    Examples:
        >>> onions = build_ingredient("2 onions, diced", "en")
        >>> oil = build_ingredient("1 tbsp coconut oil", "en")
        >>> [i.ingredient_part for i in match_ingredients("Fry the onion in the oil", [onions, oil])]
        ['onions']
    """
    result = IngredientStepMatcher(config).match(step_text, ingredients, debug=debug)
    if debug:
        return result
    return result.ingredients

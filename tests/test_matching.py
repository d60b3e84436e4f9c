import dataclasses

import pytest

from recipe_utils.matching import (
    DEFAULT_MATCHING_CONFIG,
    IdentityLemmatizer,
    IngredientMatchingConfig,
    IngredientMatchKind,
    IngredientStepMatcher,
    match_ingredients,
)
from recipe_utils.recipes import build_ingredient


def _parts(ingredients):
    return [ingredient.ingredient_part for ingredient in ingredients]


def _debug_for(result, ingredient_text):
    return next(item for item in result.debug if item.ingredient.ingredient_text == ingredient_text)


def test_katsu_step_one(katsu_ingredients, katsu_step_one):
    matched = match_ingredients(katsu_step_one, katsu_ingredients)
    assert [ingredient.ingredient_text for ingredient in matched] == [
        "2  onions, diced ((£0.65/3)=(£0.22))",
        "1  carrot, thinly sliced ((£0.09))",
        "1 tbsp coconut oil",
    ]


def test_katsu_step_two(katsu_ingredients, katsu_step_two):
    matched = match_ingredients(katsu_step_two, katsu_ingredients)
    assert _parts(matched) == [
        "garlic",
        "curry powder",
        "ginger",
        "turmeric",
        "honey/brown sugar",
        "soy sauce",
        "flour",
        "chicken stock",
    ]
    assert matched[2].ingredient_text == "1 tbsp ginger, peeled & grated ((£0.55))"


def test_longer_phrase_suppresses_modifier(katsu_ingredients, katsu_step_two):
    result = match_ingredients(katsu_step_two, katsu_ingredients, debug=True)
    stock_variant = " ".join(DEFAULT_MATCHING_CONFIG.lemmatizer.lemmas("chicken stock"))

    breasts = _debug_for(result, "650 g chicken breasts ((£4.00))")
    assert not breasts.selected
    assert breasts.reason == f"suppressed by '{stock_variant}'"
    assert breasts.kind is IngredientMatchKind.MODIFIER_SINGLE

    stock = _debug_for(result, "600 ml chicken stock")
    assert stock.selected
    assert stock.reason == "selected"
    assert stock.kind is IngredientMatchKind.FULL_SPAN
    assert stock.span_length == 2


def test_head_single_loses_to_full_single(katsu_ingredients, katsu_step_one):
    result = match_ingredients(katsu_step_one, katsu_ingredients, debug=True)
    onion_variant = DEFAULT_MATCHING_CONFIG.lemmatizer.lemma("onion")

    onions = _debug_for(result, "2  onions, diced ((£0.65/3)=(£0.22))")
    assert onions.kind is IngredientMatchKind.FULL_SINGLE
    assert onions.score == 975

    spring_onions = _debug_for(result, "Spring onions to garnish ((£0.50))")
    assert spring_onions.kind is IngredientMatchKind.HEAD_SINGLE
    assert spring_onions.reason == f"suppressed by '{onion_variant}'"


def test_debug_reports_unmatched(katsu_ingredients, katsu_step_two):
    result = match_ingredients(katsu_step_two, katsu_ingredients, debug=True)
    assert len(result.debug) == len(katsu_ingredients)

    chilli = _debug_for(result, "Chilli flakes")
    assert chilli.reason == "no match"
    assert chilli.matched_variant is None
    assert chilli.index is None


@pytest.mark.parametrize("step_fixture", ["katsu_step_one", "katsu_step_two"])
def test_selected_spans_do_not_overlap(request, katsu_ingredients, step_fixture):
    step_text = request.getfixturevalue(step_fixture)
    result = match_ingredients(step_text, katsu_ingredients, debug=True)
    selected = [item for item in result.debug if item.selected]
    assert len(selected) == len(result.ingredients)

    covered = set()
    for item in selected:
        span = set(range(item.index, item.index + item.span_length))
        assert not covered & span
        covered |= span


def test_each_ingredient_matched_once(katsu_ingredients, katsu_step_two):
    # "chicken stock" appears twice in the step
    matched = match_ingredients(katsu_step_two, katsu_ingredients)
    assert len({id(ingredient) for ingredient in matched}) == len(matched)


def test_empty_inputs(katsu_ingredients):
    assert match_ingredients("", katsu_ingredients) == []
    assert match_ingredients("Fry the onion", []) == []
    assert match_ingredients("", katsu_ingredients, debug=True).debug == []


def test_plurals_need_a_lemmatizer():
    onions = build_ingredient("2 onions", "en")
    assert match_ingredients("Fry the onion", [onions]) == [onions]

    identity = IngredientMatchingConfig(lemmatizer=IdentityLemmatizer())
    assert match_ingredients("Fry the onion", [onions], identity) == []
    assert match_ingredients("Fry the onions", [onions], identity) == [onions]


def test_modifier_single_needs_allowed_head():
    breasts = build_ingredient("650 g chicken breasts", "en")
    assert match_ingredients("Slice the chicken", [breasts]) == [breasts]

    config = dataclasses.replace(
        DEFAULT_MATCHING_CONFIG, allow_modifier_singles_for_heads=frozenset()
    )
    assert match_ingredients("Slice the chicken", [breasts], config) == []


def test_low_info_head_is_not_matched_alone():
    oil = build_ingredient("1 tbsp coconut oil", "en")
    assert match_ingredients("Heat the oil", [oil]) == []


def test_synonym_match():
    onions = build_ingredient("4 spring onions", "en")
    assert match_ingredients("Scatter over the scallions", [onions]) == [onions]


def test_tie_goes_to_first_ingredient():
    first = build_ingredient("2 onions", "en", sort_index=0)
    second = build_ingredient("2 onions", "en", sort_index=1)
    matched = match_ingredients("Fry the onions", [first, second])
    assert len(matched) == 1
    assert matched[0] is first


def test_results_follow_step_order():
    garlic = build_ingredient("2 cloves garlic", "en")
    ginger = build_ingredient("1 tbsp ginger", "en")
    matched = match_ingredients("Add the ginger, then the garlic", [garlic, ginger])
    assert matched == [ginger, garlic]


def test_matcher_uses_configured_lemmatizer(mocker):
    config = IngredientMatchingConfig()
    spy = mocker.spy(config.lemmatizer, "lemmas")
    onions = build_ingredient("2 onions", "en")
    IngredientStepMatcher(config).match_ingredients("Fry the onions", [onions])
    assert spy.call_count > 0


def test_matcher_class_and_function_agree(katsu_ingredients, katsu_step_two):
    matcher = IngredientStepMatcher()
    assert matcher.match_ingredients(katsu_step_two, katsu_ingredients) == match_ingredients(
        katsu_step_two, katsu_ingredients
    )


@pytest.mark.parametrize(
    "kind, span_length, exact, expected",
    [
        (IngredientMatchKind.FULL_SPAN, 2, True, 1175),
        (IngredientMatchKind.FULL_SPAN, 3, False, 1150),
        (IngredientMatchKind.FULL_SINGLE, 1, True, 975),
        (IngredientMatchKind.HEAD_SINGLE, 1, False, 700),
        (IngredientMatchKind.MODIFIER_SINGLE, 1, False, 500),
    ],
)
def test_score(kind, span_length, exact, expected):
    assert IngredientStepMatcher().score(kind, span_length, exact) == expected


@pytest.mark.parametrize(
    "canonical, token, span_length, expected",
    [
        (["chicken", "stock"], None, 2, IngredientMatchKind.FULL_SPAN),
        (["garlic"], "garlic", 1, IngredientMatchKind.FULL_SINGLE),
        (["chicken", "breast"], "breast", 1, IngredientMatchKind.HEAD_SINGLE),
        (["chicken", "breast"], "chicken", 1, IngredientMatchKind.MODIFIER_SINGLE),
    ],
)
def test_classify_kind(canonical, token, span_length, expected):
    assert IngredientStepMatcher().classify_kind(canonical, token, span_length) is expected

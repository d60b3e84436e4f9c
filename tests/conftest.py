import pytest

from recipe_utils.recipes import RecipeStep, RecipeStepTiming, build_ingredient
from recipe_utils.units import get_units_for_language

# Chicken katsu curry, as imported (costs in brackets, entities not decoded)
KATSU_INGREDIENT_LINES = [
    "650 g chicken breasts ((£4.00))",
    "70 g to 140g (6oz) panko breadcrumbs (if double dipping) ((£1.25))",
    "2  egg ( (£1.39/12)=(£0.24))",
    "1 tbsp ginger, peeled &amp; grated ((£0.55))",
    "2  onions, diced ((£0.65/3)=(£0.22))",
    "1  carrot, thinly sliced ((£0.09))",
    "3 cloves of garlic, minced ((£0.69/3)=(£0.23))",
    "600 ml chicken stock",
    "1 tbsp honey/brown sugar",
    "1.5 tbsp curry powder",
    "½ tsp turmeric",
    "1 tbsp coconut oil",
    "2 tbsp rapeseed oil",
    "1.5 tbsp soy sauce",
    "2 tbsp flour",
    "Other 300g white/brown rice ((£1.50/5X3)=(£0.90))",
    "Spring onions to garnish ((£0.50))",
    "Chilli flakes",
]

KATSU_STEP_ONE = (
    "Start by adding the onion & carrots into a deep non-stick frying pan along with "
    "the coconut oil. Gently fry on a medium/ low heat for around 5 minutes. "
    "Season with salt."
)

KATSU_STEP_TWO = (
    "After this time, add the minced garlic, curry powder, ginger, turmeric, honey, "
    "soy sauce and flour with a splash of the chicken stock. Gently fry for another "
    "minute before gradually adding all of the chicken stock. Reduce to a simmer and "
    "set the timer for 20 minutes."
)


@pytest.fixture
def english_units():
    return get_units_for_language("en")


@pytest.fixture
def american_units():
    return get_units_for_language("en-us")


@pytest.fixture
def katsu_ingredients():
    return [
        build_ingredient(line, "en", sort_index=index)
        for index, line in enumerate(KATSU_INGREDIENT_LINES)
    ]


@pytest.fixture
def make_step():
    """Build a RecipeStep from text and (time_text, unit_text, seconds) tuples."""

    def _make_step(text, timings):
        return RecipeStep(
            instruction_text=text,
            timings=[
                RecipeStepTiming(
                    time_in_seconds=seconds, time_text=time_text, time_unit_text=unit_text
                )
                for time_text, unit_text, seconds in timings
            ],
        )

    return _make_step


@pytest.fixture
def katsu_step_one():
    return KATSU_STEP_ONE


@pytest.fixture
def katsu_step_two():
    return KATSU_STEP_TWO

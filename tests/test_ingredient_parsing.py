import pytest

from recipe_utils.ingredients import (
    AlternativeQuantity,
    get_ingredient,
    get_quantity,
    get_quantity_value,
    get_unit,
    parse_ingredient,
)
from recipe_utils.ingredients.number_utils import _is_fraction, _is_number
from recipe_utils.tokenizer import tokenize
from recipe_utils.units import LanguageNotSupportedError


@pytest.mark.parametrize(
    "input_text, expected",
    [
        ("2", True),
        ("1.5", True),
        (".5", True),
        ("nan", False),
        ("inf", False),
        ("1/2", False),
        ("", False),
    ],
)
def test_is_number(input_text, expected):
    assert _is_number(input_text) == expected


@pytest.mark.parametrize(
    "input_text, expected",
    [("1/2", True), ("3/4", True), ("1/", False), ("a/b", False), ("1", False)],
)
def test_is_fraction(input_text, expected):
    assert _is_fraction(input_text) == expected


@pytest.mark.parametrize(
    "input_text, expected",
    [
        ("1 1/2", 1.5),
        ("1/3", 0.33),
        ("2", 2.0),
        ("1+1/2", 1.5),
        ("", 0.0),
        ("1/0", 0.0),
        ("abc", 0.0),
    ],
)
def test_get_quantity_value(input_text, expected):
    assert get_quantity_value(input_text) == expected


def test_parse_simple_line():
    result = parse_ingredient("2 tbsp coconut oil", "en")
    assert result.quantity == 2.0
    assert result.quantity_text == "2"
    assert result.unit == "tablespoon"
    assert result.unit_text == "tbsp"
    assert result.ingredient == "coconut oil"
    assert result.extra == ""
    assert result.min_quantity == result.max_quantity == 2.0
    assert result.alternative_quantities == []


@pytest.mark.parametrize(
    "input_text, expected_quantity, expected_text",
    [
        ("1/2 cup sugar", 0.5, "1/2"),
        ("1 1/2 cups milk", 1.5, "1 1/2"),
        ("1 and 1/2 cups flour", 1.5, "1 and 1/2"),
        ("1 and a half cups rice", 1.5, "1 and a half"),
        ("½ tsp turmeric", 0.5, "½"),
        ("1½ cups milk", 1.5, "1½"),
        ("two eggs", 2.0, "two"),
        ("1.5 tbsp soy sauce", 1.5, "1.5"),
    ],
)
def test_parse_quantities(input_text, expected_quantity, expected_text):
    result = parse_ingredient(input_text, "en")
    assert result.quantity == expected_quantity
    assert result.quantity_text == expected_text
    assert result.min_quantity == result.max_quantity == expected_quantity


@pytest.mark.parametrize(
    "input_text, expected_min, expected_max, expected_text",
    [
        ("1-2 cups flour", 1.0, 2.0, "1-2"),
        ("2 to 3 tbsp honey", 2.0, 3.0, "2 to 3"),
        ("3 or 4 carrots", 3.0, 4.0, "3 or 4"),
        ("0-2 tbsp sugar", 0.0, 2.0, "0-2"),
    ],
)
def test_parse_ranges(input_text, expected_min, expected_max, expected_text):
    result = parse_ingredient(input_text, "en")
    assert result.min_quantity == expected_min
    assert result.max_quantity == expected_max
    assert result.quantity == expected_max
    assert result.quantity_text == expected_text


def test_range_unit_and_name():
    result = parse_ingredient("1-2 cups flour", "en")
    assert result.unit == "cup"
    assert result.ingredient == "flour"


def test_trailing_marker_is_not_consumed():
    result = parse_ingredient("2 or more eggs", "en")
    assert result.quantity_text == "2"
    assert result.min_quantity == result.max_quantity == 2.0


@pytest.mark.parametrize(
    "input_text, expected_unit, expected_unit_text, expected_ingredient, expected_extra",
    [
        ("2  onions, diced ((£0.65/3)=(£0.22))", "", "", "onions", "diced ((£0.65/3)=(£0.22))"),
        ("3 cloves of garlic, minced", "clove", "cloves", "garlic", "minced"),
        ("650 g chicken breasts ((£4.00))", "gram", "g", "chicken breasts", ""),
        ("2  egg ( (£1.39/12)=(£0.24))", "", "", "egg", ""),
        ("2 large eggs", "", "", "eggs", ""),
        ("1 tbsp. sugar", "tablespoon", "tbsp", "sugar", ""),
        ("1 tbsp honey/brown sugar", "tablespoon", "tbsp", "honey/brown sugar", ""),
        ("600 ML Chicken Stock", "milliliter", "ML", "Chicken Stock", ""),
        ("Chilli flakes", "", "", "Chilli flakes", ""),
    ],
)
def test_parse_unit_ingredient_and_extra(
    input_text, expected_unit, expected_unit_text, expected_ingredient, expected_extra
):
    result = parse_ingredient(input_text, "en")
    assert result.unit == expected_unit
    assert result.unit_text == expected_unit_text
    assert result.ingredient == expected_ingredient
    assert result.extra == expected_extra


def test_parse_without_extra():
    result = parse_ingredient("1 carrot, thinly sliced", "en", include_extra=False)
    assert result.ingredient == "carrot"
    assert result.extra == ""


def test_line_without_quantity():
    result = parse_ingredient("Chilli flakes", "en")
    assert result.quantity == 0.0
    assert result.quantity_text == ""
    assert result.min_quantity == result.max_quantity == 0.0


@pytest.mark.parametrize(
    "input_text, expected_alternative, expected_ingredient",
    [
        (
            "1 cup (240 ml) milk",
            AlternativeQuantity(240.0, "milliliter", "ml", 240.0, 240.0),
            "milk",
        ),
        (
            "200 g / 7 oz butter",
            AlternativeQuantity(7.0, "ounce", "oz", 7.0, 7.0),
            "butter",
        ),
    ],
)
def test_parse_alternative_quantity(input_text, expected_alternative, expected_ingredient):
    result = parse_ingredient(input_text, "en")
    assert result.alternative_quantities == [expected_alternative]
    assert result.ingredient == expected_ingredient


def test_parenthesis_without_quantity_is_not_an_alternative():
    result = parse_ingredient("1 cup (packed) brown sugar", "en")
    assert result.alternative_quantities == []
    assert result.ingredient == "brown sugar"


@pytest.mark.parametrize(
    "input_text, expected_quantity, expected_ingredient",
    [
        ("2 (14 oz) cans tomatoes", 2.0, "cans tomatoes"),
        ("1 / 2 cup sugar", 1.0, "/ 2 cup sugar"),
    ],
)
def test_alternative_needs_primary_unit(input_text, expected_quantity, expected_ingredient):
    result = parse_ingredient(input_text, "en")
    assert result.quantity == expected_quantity
    assert result.unit == ""
    assert result.alternative_quantities == []
    assert result.ingredient == expected_ingredient


def test_include_alternative_units():
    result = parse_ingredient("1 kg flour", "en", include_alternative_units=True)
    assert [a.unit for a in result.alternative_quantities] == [
        "pound",
        "ounce",
        "milligram",
        "gram",
    ]
    assert result.alternative_quantities[0].quantity == 2.2046


def test_include_alternative_volume_units_for_american_english():
    result = parse_ingredient("1 cup milk", "en-US", include_alternative_units=True)
    units = {a.unit_text: a.quantity for a in result.alternative_quantities}
    assert units["tbsp"] == 16.0
    assert units["ml"] == 236.588
    assert "cup" not in units


def test_no_alternative_units_without_unit():
    result = parse_ingredient("2 eggs", "en", include_alternative_units=True)
    assert result.alternative_quantities == []


@pytest.mark.parametrize("input_text", [None, "", "   ", "\n"])
def test_empty_input(input_text):
    assert parse_ingredient(input_text, "en") is None


def test_unsupported_language():
    with pytest.raises(LanguageNotSupportedError):
        parse_ingredient("2 tbsp coconut oil", "xx")


def test_fallback_language():
    result = parse_ingredient("2 tbsp coconut oil", "xx", fallback_language="en")
    assert result.ingredient == "coconut oil"


def test_get_quantity_without_quantity(english_units):
    tokens = tokenize("salt to taste", remove_spaces=False)
    assert get_quantity(tokens, english_units) == (0.0, 0.0, "", 0)


def test_get_quantity_from_index(english_units):
    tokens = tokenize("(2 cups)", remove_spaces=False)
    assert get_quantity(tokens, english_units, 1) == (2.0, 2.0, "2", 2)


def test_get_unit_skips_sizes(english_units):
    tokens = tokenize(" large cloves garlic", remove_spaces=False)
    assert get_unit(tokens, 0, english_units) == ("clove", "cloves", 4)


def test_get_unit_without_unit(english_units):
    tokens = tokenize(" large eggs", remove_spaces=False)
    assert get_unit(tokens, 0, english_units) == ("", "", 0)


def test_get_ingredient(english_units):
    tokens = tokenize(" of garlic (peeled), minced", remove_spaces=False)
    ingredient, end_index = get_ingredient(tokens, 0, english_units)
    assert ingredient == "garlic"
    assert tokens[end_index].text == ","

"""Per-language unit catalogs for ingredient and instruction parsing."""

import dataclasses
import functools
import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


class LanguageNotSupportedError(ValueError):
    """Raised when no unit catalog exists for a language or its fallback."""


@dataclasses.dataclass(frozen=True)
class LinearConversion:
    """Maps a unit onto its conversion group's base unit.

    ``base = value * scale + offset``
    """

    scale: float
    offset: float = 0.0

    def to_base(self, value: float) -> float:
        return value * self.scale + self.offset

    def from_base(self, value: float) -> float:
        return (value - self.offset) / self.scale


@dataclasses.dataclass(frozen=True)
class UnitDetail:
    symbol: str
    display_text: str
    conversion_group: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class UnitsConfig:
    """All unit tables for one language.

    Built once by a factory function and never mutated afterwards; every
    mapping is a read-only proxy so a catalog can be shared between threads.

    Attributes:
        ingredient_units: Lower-case surface form -> UnitDetail. Several keys
            share one UnitDetail instance ("g", "gram", "grams").
        ingredient_sizes: Size adjectives skipped before a unit.
        time_units: Lower-case surface form -> canonical time unit.
        time_unit_multipliers: Canonical time unit -> seconds.
        temperature_units: Lower-case surface form -> UnitDetail.
        ingredient_prepositions: Words dropped at the start of an ingredient.
        temperature_markers: Tokens that mark a temperature without a unit.
        ingredient_quantities: Spelled-out numbers -> numeric text.
        ingredient_range_markers: Tokens separating a min and max quantity.
        ingredient_quantity_add_markers: Tokens joining parts of one quantity.
        conversions: Conversion group -> unit symbol -> LinearConversion.
        default_conversions: Conversion group -> symbols offered as
            alternatives, in display order.
        default_temperature_unit: Temperature unit assumed for bare degree
            markers, or None when a bare marker is ambiguous.
    """

    language: str
    ingredient_units: Mapping[str, UnitDetail]
    ingredient_sizes: FrozenSet[str]
    time_units: Mapping[str, str]
    time_unit_multipliers: Mapping[str, int]
    temperature_units: Mapping[str, UnitDetail]
    ingredient_prepositions: FrozenSet[str]
    temperature_markers: FrozenSet[str]
    ingredient_quantities: Mapping[str, str]
    ingredient_range_markers: FrozenSet[str]
    ingredient_quantity_add_markers: FrozenSet[str]
    conversions: Mapping[str, Mapping[str, LinearConversion]]
    default_conversions: Mapping[str, Tuple[str, ...]]
    default_temperature_unit: Optional[str] = None

    def conversion_group_of(self, symbol: str) -> Optional[str]:
        for group, table in self.conversions.items():
            if symbol in table:
                return group
        return None

    def conversion_pairs(self) -> Dict[str, Tuple[float, float]]:
        """List every supported "from->to" pair as a (scale, offset) formula.

        ``to_value = from_value * scale + offset``
        """
        pairs = {}
        for table in self.conversions.values():
            for source, source_conversion in table.items():
                for target, target_conversion in table.items():
                    if source == target:
                        continue
                    scale = source_conversion.scale / target_conversion.scale
                    offset = (
                        source_conversion.offset - target_conversion.offset
                    ) / target_conversion.scale
                    pairs[f"{source}->{target}"] = (scale, offset)
        return pairs


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


def _unit_lookup(
    entries: Iterable[Tuple[Iterable[str], UnitDetail]],
) -> Dict[str, UnitDetail]:
    lookup = {}
    for keys, unit in entries:
        for key in keys:
            lookup[key] = unit
    return lookup


# Factors are expressed against the base unit of each group, taken from the
# per-pair factors the catalog has always used (1 kg = 2.20462 lb, etc.).
_LB_PER_KG = 2.20462
_OZ_PER_KG = 35.274
_CM_PER_INCH = 2.54

_MASS = {
    "g": LinearConversion(1.0),
    "kg": LinearConversion(1000.0),
    "mg": LinearConversion(0.001),
    "lb": LinearConversion(1000.0 / _LB_PER_KG),
    "oz": LinearConversion(1000.0 / _OZ_PER_KG),
}

_LENGTH = {
    "cm": LinearConversion(1.0),
    "in": LinearConversion(_CM_PER_INCH),
}

_TEMPERATURE = {
    "c": LinearConversion(1.0),
    "f": LinearConversion(5.0 / 9.0, -160.0 / 9.0),
}

# Per-cup factors; a cup is 236.588 ml.
_ML_PER_CUP = 236.588
_VOLUME_PER_CUP = {
    "cup": 1.0,
    "ml": _ML_PER_CUP,
    "l": 0.236588,
    "tbsp": 16.0,
    "tsp": 48.0,
    "qt": 0.25,
    "gal": 0.0625,
    "pt": 0.416337,
}

_VOLUME = {
    symbol: LinearConversion(_ML_PER_CUP / per_cup)
    for symbol, per_cup in _VOLUME_PER_CUP.items()
}


def create_english_units() -> UnitsConfig:
    """Build the catalog for generic English ("en")."""
    bag = UnitDetail("bag", "bag")
    batch = UnitDetail("batch", "batch")
    box = UnitDetail("box", "box")
    bunch = UnitDetail("bunch", "bunch")
    cup = UnitDetail("cup", "cup", "volume")
    can = UnitDetail("can", "can")
    clove = UnitDetail("clove", "clove")
    dash = UnitDetail("dash", "dash")
    drop = UnitDetail("drop", "drop")
    gram = UnitDetail("g", "gram", "mass")
    gallon = UnitDetail("gal", "gallon", "volume")
    grain = UnitDetail("grain", "grain")
    inch = UnitDetail("in", "inch", "length")
    centimeter = UnitDetail("cm", "centimeter", "length")
    kilogram = UnitDetail("kg", "kilogram", "mass")
    pound = UnitDetail("lb", "pound", "mass")
    liter = UnitDetail("l", "liter", "volume")
    milligram = UnitDetail("mg", "milligram", "mass")
    milliliter = UnitDetail("ml", "milliliter", "volume")
    ounce = UnitDetail("oz", "ounce", "mass")
    package = UnitDetail("package", "package")
    piece = UnitDetail("piece", "piece")
    pinch = UnitDetail("pinch", "pinch")
    pint = UnitDetail("pt", "pint", "volume")
    quart = UnitDetail("qt", "quart", "volume")
    slice_ = UnitDetail("slice", "slice")
    stalk = UnitDetail("stalk", "stalk")
    stick = UnitDetail("stick", "stick")
    teaspoon = UnitDetail("tsp", "teaspoon", "volume")
    tablespoon = UnitDetail("tbsp", "tablespoon", "volume")

    ingredient_units = _unit_lookup(
        [
            (["bag", "bags"], bag),
            (["batch", "batches"], batch),
            (["box", "boxes"], box),
            (["bunch", "bunches"], bunch),
            (["c", "cup", "cups"], cup),
            (["can", "cans"], can),
            (["cm", "centimeter", "centimeters", "centimetre", "centimetres"], centimeter),
            (["clove", "cloves"], clove),
            (["dash", "dashes"], dash),
            (["drop", "drops"], drop),
            (["g", "gram", "grams", "gramme", "grammes"], gram),
            (["gal", "gallon", "gallons"], gallon),
            (["gr", "grain", "grains"], grain),
            (["inch", "inches", "in"], inch),
            (["kg", "kgs", "kilogram", "kilograms"], kilogram),
            (["lb", "lbs", "pound", "pounds"], pound),
            (["liter", "liters", "litre", "litres", "lt", "l", "lts"], liter),
            (["mg", "mgs", "milligram", "milligrams"], milligram),
            (
                ["milliliter", "millilitre", "millilitres", "milliliters", "ml", "mls"],
                milliliter,
            ),
            (["ounce", "ounces", "oz", "ozs"], ounce),
            (["package", "packages", "pkg", "pkgs"], package),
            (["pcs", "piece", "pieces"], piece),
            (["pinch", "pinches"], pinch),
            (["pint", "pints", "pnt", "pt", "pts"], pint),
            (["qt", "qts", "quart", "quarts"], quart),
            (["slice", "slices"], slice_),
            (["stalk", "stalks"], stalk),
            (["stick", "sticks"], stick),
            (["t", "teaspoon", "teaspoons", "tsp", "tspn"], teaspoon),
            (["tablespoon", "tablespoons", "tbs", "tbsp", "tbspn"], tablespoon),
        ]
    )

    time_units = {
        "sec": "second",
        "secs": "second",
        "second": "second",
        "seconds": "second",
        "min": "minute",
        "mins": "minute",
        "minute": "minute",
        "minutes": "minute",
        "h": "hour",
        "hr": "hour",
        "hrs": "hour",
        "hour": "hour",
        "hours": "hour",
        "day": "day",
        "days": "day",
    }

    fahrenheit = UnitDetail("f", "fahrenheit", "temperature")
    celsius = UnitDetail("c", "celsius", "temperature")
    temperature_units = {
        "fahrenheit": fahrenheit,
        "f": fahrenheit,
        "celsius": celsius,
        "c": celsius,
    }

    ingredient_quantities = {
        "one": "1",
        "two": "2",
        "three": "3",
        "four": "4",
        "five": "5",
        "six": "6",
        "seven": "7",
        "eight": "8",
        "nine": "9",
        "ten": "10",
        "half": "1/2",
        "quarter": "1/4",
    }

    return UnitsConfig(
        language="en",
        ingredient_units=_freeze(ingredient_units),
        ingredient_sizes=frozenset({"large", "medium", "small"}),
        time_units=_freeze(time_units),
        time_unit_multipliers=_freeze(
            {"second": 1, "minute": 60, "hour": 3600, "day": 86400}
        ),
        temperature_units=_freeze(temperature_units),
        ingredient_prepositions=frozenset({"of"}),
        temperature_markers=frozenset({"°", "degree", "degrees"}),
        ingredient_quantities=_freeze(ingredient_quantities),
        ingredient_range_markers=frozenset({"to", "-", "–", "or"}),
        ingredient_quantity_add_markers=frozenset({"and", "a"}),
        conversions=_freeze(
            {
                "mass": _freeze(_MASS),
                "length": _freeze(_LENGTH),
                "temperature": _freeze(_TEMPERATURE),
            }
        ),
        default_conversions=_freeze(
            {
                "mass": ("lb", "kg", "oz", "mg", "g"),
                "length": ("in", "cm"),
                "temperature": ("f", "c"),
            }
        ),
        default_temperature_unit=None,
    )


def create_american_english_units() -> UnitsConfig:
    """Build the catalog for American English ("en-us").

    Same tables as English, plus the volume conversion group and
    fahrenheit as the unit for bare degree markers.
    """
    english = create_english_units()
    conversions = dict(english.conversions)
    conversions["volume"] = _freeze(_VOLUME)
    default_conversions = dict(english.default_conversions)
    default_conversions["volume"] = ("cup", "tbsp", "l", "ml", "qt", "tsp", "gal", "pt")

    return dataclasses.replace(
        english,
        language="en-us",
        conversions=_freeze(conversions),
        default_conversions=_freeze(default_conversions),
        default_temperature_unit="fahrenheit",
    )


CATALOG_FACTORIES = MappingProxyType(
    {
        "en": create_english_units,
        "en-us": create_american_english_units,
    }
)


@functools.lru_cache(maxsize=None)
def _catalog_for(language: str) -> UnitsConfig:
    return CATALOG_FACTORIES[language]()


def get_units_for_language(
    language: Optional[str], fallback_language: Optional[str] = None
) -> UnitsConfig:
    """Look up the unit catalog for a language tag.

    Tags are matched case-insensitively and "_" is accepted in place of "-"
    ("en_US" finds "en-us").

    Raises:
        LanguageNotSupportedError: Neither language nor fallback_language has
            a catalog.
    """
    if language is None:
        raise LanguageNotSupportedError("Language null is not supported")

    key = language.lower().replace("_", "-")
    if key in CATALOG_FACTORIES:
        return _catalog_for(key)

    if fallback_language is not None:
        logger.debug(
            f"No unit catalog for {language!r}, falling back to {fallback_language!r}"
        )
        try:
            return get_units_for_language(fallback_language)
        except LanguageNotSupportedError:
            raise LanguageNotSupportedError(
                f"Language {language} is not supported and no fallback language is provided"
            ) from None

    raise LanguageNotSupportedError(f"Language {language} is not supported")

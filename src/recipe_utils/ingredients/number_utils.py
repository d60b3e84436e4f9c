import re
from decimal import Decimal, InvalidOperation

# Unicode vulgar fraction glyphs and their ASCII fractions
UNICODE_FRACTIONS = {
    "½": "1/2",
    "⅓": "1/3",
    "⅔": "2/3",
    "¼": "1/4",
    "¾": "3/4",
    "⅕": "1/5",
    "⅖": "2/5",
    "⅗": "3/5",
    "⅘": "4/5",
    "⅙": "1/6",
    "⅚": "5/6",
    "⅐": "1/7",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
    "⅑": "1/9",
    "⅒": "1/10",
}

_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")

QUANTITY_PRECISION = 2


def _is_number(text: str) -> bool:
    """Check if a string is a plain decimal number ("2", "1.5", ".5", "3.")."""
    return _NUMBER_RE.fullmatch(text) is not None


def _is_fraction(text: str) -> bool:
    """Check if a string represents a valid fraction (e.g., '1/2')."""
    if "/" not in text:
        return False
    parts = text.split("/")
    return len(parts) == 2 and all(_is_number(part) for part in parts)


def _parse_fraction(text: str) -> Decimal:
    """Parse a fraction string (e.g., '1/2') into a Decimal."""
    if "/" not in text:
        raise ValueError(f"Not a fraction: {text}")

    numerator_str, denominator_str = text.split("/")
    numerator = Decimal(numerator_str)
    denominator = Decimal(denominator_str)

    if denominator == 0:
        raise ZeroDivisionError("Division by zero in fraction")

    return numerator / denominator


def get_quantity_value(text: str) -> float:
    """Evaluate an accumulated quantity run such as "1 1/2" or "2".

    Parts separated by whitespace or "+" are summed; parts that are not
    numbers or valid fractions contribute nothing. The result is rounded to
    two decimal places.

    Examples:
        >>> get_quantity_value("1 1/2")
        1.5
        >>> get_quantity_value("1/3")
        0.33
        >>> get_quantity_value("")
        0.0
    """
    total = Decimal(0)
    for part in re.split(r"[\s+]+", text.strip()):
        if not part:
            continue
        try:
            if _is_fraction(part):
                total += _parse_fraction(part)
            elif _is_number(part):
                total += Decimal(part)
        except (InvalidOperation, ZeroDivisionError):
            continue
    return round(float(total), QUANTITY_PRECISION)

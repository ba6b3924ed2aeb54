"""
data_transformation.py

Normalizers for the German number and date formats used on broker
documents, e.g. "1.234,56" and "04.02.2020". Money values are always
returned as Decimal.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from brokerextract.parsers_core.errors import MalformedDate, MalformedNumber

DEFAULT_DATE_PATTERN = "%d.%m.%Y"
# Residue after separator normalization, e.g. "-1234.56".
LOCALE_NUMBER_RE = re.compile(r"-?\d+(\.\d+)?")


def parse_locale_decimal(value: str) -> Decimal:
    """
    Parse a number that uses "." as thousands separator and "," as decimal
    separator.

    Args:
        value (str): The raw text, e.g. "1.234,56" or "-0,99".

    Returns:
        Decimal: The parsed value, e.g. Decimal("1234.56").

    Raises:
        MalformedNumber: If the text is not a finite number after normalization.
    """
    if value is None:
        raise MalformedNumber("No number supplied")

    text = str(value).strip().replace(".", "").replace(",", ".")
    if not text:
        raise MalformedNumber(f"Empty number in {value!r}")
    # Decimal() alone would also take exponents, underscores and NaN.
    if not LOCALE_NUMBER_RE.fullmatch(text):
        raise MalformedNumber(f"Not a number: {value!r}")

    try:
        return Decimal(text)
    except InvalidOperation:
        raise MalformedNumber(f"Not a number: {value!r}")


def format_locale_decimal(value: Decimal, places: int = 2) -> str:
    """Format a Decimal the way broker documents print it ("1.234,56")."""
    quantized = Decimal(value).quantize(Decimal(1).scaleb(-places))
    formatted = f"{quantized:,.{places}f}"
    return formatted.replace(",", "_").replace(".", ",").replace("_", ".")


def parse_locale_date(value: str, pattern: str = DEFAULT_DATE_PATTERN) -> date:
    """
    Parse a day.month.year date into a calendar date.

    Raises:
        MalformedDate: If the text does not match the pattern.
    """
    if value is None:
        raise MalformedDate("No date supplied")
    try:
        return datetime.strptime(str(value).strip(), pattern).date()
    except ValueError:
        raise MalformedDate(f"Date {value!r} does not match pattern {pattern!r}")


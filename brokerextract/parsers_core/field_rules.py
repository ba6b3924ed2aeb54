"""
Declarative field rules.

A FieldRule describes where a value lives relative to a marker line
(which line to search for, first or last occurrence, how many lines to
move from there) and how the text of that line becomes a value. Broker
parsers declare their templates as rule tables instead of writing lookups
by hand, so a new document layout is supported by adding rules.

Example:
    FieldRule("amount", "GESAMT", match=Match.EQUALS, offset=1,
              token=True, shape=Shape.DECIMAL)
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Sequence

from brokerextract.parsers_core.errors import (
    ExtractionError,
    FieldNotFound,
    MarkerNotFound,
)
from brokerextract.utils.data_transformation import (
    DEFAULT_DATE_PATTERN,
    parse_locale_date,
    parse_locale_decimal,
)
from brokerextract.utils.lines import (
    find_last_line_containing,
    find_last_line_equal,
    find_line_containing,
    find_line_equal,
    line_at_offset,
)


class Match(str, Enum):
    CONTAINS = "contains"
    EQUALS = "equals"


class Occurrence(str, Enum):
    FIRST = "first"
    LAST = "last"


class Shape(str, Enum):
    TEXT = "text"
    DECIMAL = "decimal"
    ABSOLUTE_DECIMAL = "absolute_decimal"
    DATE = "date"


_LOCATORS = {
    (Match.CONTAINS, Occurrence.FIRST): find_line_containing,
    (Match.CONTAINS, Occurrence.LAST): find_last_line_containing,
    (Match.EQUALS, Occurrence.FIRST): find_line_equal,
    (Match.EQUALS, Occurrence.LAST): find_last_line_equal,
}


@dataclass(frozen=True)
class FieldRule:
    field: str
    marker: str
    match: Match = Match.CONTAINS
    occurrence: Occurrence = Occurrence.FIRST
    offset: int = 0
    shape: Shape = Shape.TEXT
    # Text cutting, applied in this order.
    after: Optional[str] = None
    width: Optional[int] = None
    before: Optional[str] = None
    token: bool = False
    tail: Optional[int] = None
    date_pattern: str = DEFAULT_DATE_PATTERN
    # Used when the marker is missing.
    optional: bool = False
    default: Any = Decimal("0")
    fallback: Optional["FieldRule"] = None

    def locate(self, lines: Sequence[str]) -> int:
        return _LOCATORS[(self.match, self.occurrence)](lines, self.marker)

    def apply(self, lines: Sequence[str]) -> Any:
        """Locate the value line and convert it; errors carry the field name."""
        try:
            index = self.locate(lines)
        except MarkerNotFound as exc:
            if self.fallback is not None:
                return self.fallback.apply(lines)
            if self.optional:
                return self.default
            raise exc.with_field(self.field)

        try:
            line = line_at_offset(lines, index, self.offset)
            return self.convert(self.cut(line))
        except ExtractionError as exc:
            raise exc.with_field(self.field)

    def cut(self, line: str) -> str:
        text = line
        if self.after is not None:
            parts = text.split(self.after, 1)
            if len(parts) < 2:
                raise FieldNotFound(f"{self.after!r} not found in line {line!r}")
            text = parts[1].strip()
        if self.width is not None:
            text = text[: self.width]
        if self.before is not None:
            text = text.split(self.before)[0]
        if self.token:
            text = text.strip().split(" ")[0]
        if self.tail is not None:
            text = text.strip()[-self.tail :]
        return text.strip()

    def convert(self, text: str) -> Any:
        if self.shape is Shape.DECIMAL:
            return parse_locale_decimal(text)
        if self.shape is Shape.ABSOLUTE_DECIMAL:
            return abs(parse_locale_decimal(text))
        if self.shape is Shape.DATE:
            return parse_locale_date(text, self.date_pattern)
        return text


def sum_rules(rules: Sequence[FieldRule], lines: Sequence[str]) -> Decimal:
    """Add up the Decimal values of several (usually optional) rules."""
    total = Decimal("0")
    for rule in rules:
        total += rule.apply(lines)
    return total

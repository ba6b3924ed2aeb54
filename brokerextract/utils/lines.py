"""
Helpers to locate marker lines in the text of a document page.

All lookups are total-but-fallible: a missing marker raises MarkerNotFound
and an index outside the page raises OffsetOutOfRange, so a template
mismatch never turns into a silently wrong value.
"""

from typing import Sequence

from brokerextract.parsers_core.errors import MarkerNotFound, OffsetOutOfRange


def contains_marker(lines: Sequence[str], marker: str) -> bool:
    return any(marker in line for line in lines)


def find_line_containing(lines: Sequence[str], marker: str) -> int:
    """Index of the first line that includes marker."""
    for index, line in enumerate(lines):
        if marker in line:
            return index
    raise MarkerNotFound(marker)


def find_last_line_containing(lines: Sequence[str], marker: str) -> int:
    """Index of the last line that includes marker."""
    for index in range(len(lines) - 1, -1, -1):
        if marker in lines[index]:
            return index
    raise MarkerNotFound(marker)


def find_line_equal(lines: Sequence[str], marker: str) -> int:
    """Index of the first line that is exactly marker."""
    for index, line in enumerate(lines):
        if line == marker:
            return index
    raise MarkerNotFound(marker)


def find_last_line_equal(lines: Sequence[str], marker: str) -> int:
    for index in range(len(lines) - 1, -1, -1):
        if lines[index] == marker:
            return index
    raise MarkerNotFound(marker)


def line_at_offset(lines: Sequence[str], base_index: int, offset: int = 0) -> str:
    """Return lines[base_index + offset] without wrapping negative indexes."""
    index = base_index + offset
    if index < 0 or index >= len(lines):
        raise OffsetOutOfRange(index, len(lines))
    return lines[index]

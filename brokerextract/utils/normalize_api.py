import logging
import os
from typing import Iterable, List, Optional

import pandas as pd

from brokerextract.parsers_core.autodiscover import autodiscover_parsers
from brokerextract.parsers_core.errors import DocumentReadError, UnclassifiedDocument
from brokerextract.parsers_core.models import (
    ActivityRecord,
    BatchOutput,
    ParseFailure,
    ParseOutcome,
)
from brokerextract.parsers_core.registry import ParserRegistry
from brokerextract.utils.pdf_utils import extract_pages

# Register all available parsers at import time
autodiscover_parsers()

logger = logging.getLogger(__name__)

ACTIVITY_COLUMNS = [
    "broker",
    "type",
    "date",
    "isin",
    "company",
    "shares",
    "price",
    "amount",
    "fee",
    "tax",
]
FAILURE_COLUMNS = ["source", "code", "field", "message"]


def find_pdf_files(directory, exts=(".pdf",)) -> List[str]:
    files = []
    for root, _, filenames in os.walk(directory):
        for fname in filenames:
            if fname.lower().endswith(exts):
                files.append(os.path.join(root, fname))
    return sorted(files)


def parse_file(file_path, parser_name: Optional[str] = None) -> List[ParseOutcome]:
    """
    Read one PDF and run the matching parser on it. If parser_name is None,
    the parser is detected from the first page. Failures come back as
    ParseOutcome entries, they are never raised.
    """
    source = str(file_path)
    try:
        pages = extract_pages(file_path)
    except DocumentReadError as e:
        return [ParseOutcome(failure=e.to_failure(source), source=source)]

    if parser_name is None:
        parser_name = ParserRegistry.detect_parser_for_lines(pages[0] if pages else [])
        if parser_name is None:
            error = UnclassifiedDocument("No registered parser recognizes this document")
            return [ParseOutcome(failure=error.to_failure(source), source=source)]

    parser_cls = ParserRegistry.get_parser(parser_name)
    if parser_cls is None:
        raise ValueError(
            f"Unknown parser {parser_name!r}; available: {ParserRegistry.list_parsers()}"
        )
    return parser_cls().parse_pages(pages, source=source)


def parse_files(file_paths: Iterable, parser_name: Optional[str] = None) -> BatchOutput:
    """Parse many files; one failing document does not affect the others."""
    output = BatchOutput()
    for file_path in file_paths:
        for outcome in parse_file(file_path, parser_name=parser_name):
            if outcome.ok:
                output.activities.append(outcome.activity)
            else:
                output.failures.append(outcome.failure)
    logger.info(
        f"Parsed {len(output.activities)} activities, {len(output.failures)} failures"
    )
    return output


def activities_to_dataframe(activities: Iterable[ActivityRecord]) -> pd.DataFrame:
    rows = []
    for activity in activities:
        row = activity.model_dump()
        row["type"] = activity.type.value
        row["date"] = activity.date.isoformat()
        rows.append(row)
    return pd.DataFrame(rows, columns=ACTIVITY_COLUMNS)


def failures_to_dataframe(failures: Iterable[ParseFailure]) -> pd.DataFrame:
    return pd.DataFrame([f.model_dump() for f in failures], columns=FAILURE_COLUMNS)

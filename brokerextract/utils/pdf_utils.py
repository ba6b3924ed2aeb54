"""PDF-to-lines stage: turns each page of a PDF into a list of text lines."""

import logging
from pathlib import Path
from typing import List, Union

from PyPDF2 import PdfReader

from brokerextract.parsers_core.errors import DocumentReadError

logger = logging.getLogger(__name__)


def page_text_to_lines(text: str) -> List[str]:
    """Split extracted page text into stripped, non-empty lines."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def extract_pages(input_path: Union[str, Path]) -> List[List[str]]:
    """
    Read a PDF and return its pages as lists of lines.

    Raises:
        DocumentReadError: If the file is missing or PyPDF2 fails on it in any way.
    """
    path = Path(input_path)
    if not path.is_file():
        raise DocumentReadError(f"File not found: {path}")
    try:
        reader = PdfReader(str(path))
        pages = [page_text_to_lines(page.extract_text()) for page in reader.pages]
    except Exception as e:
        # Malformed files surface as arbitrary errors from inside PyPDF2.
        raise DocumentReadError(
            f"Could not read PDF {path}: {type(e).__name__}: {e}"
        ) from e
    logger.debug(f"Extracted {len(pages)} page(s) from {path}")
    return pages

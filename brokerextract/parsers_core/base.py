import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .errors import ExtractionError
from .models import ActivityRecord, ParseOutcome

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Common interface of all broker document parsers."""

    name: str = ""

    @abstractmethod
    def can_parse(self, lines: Sequence[str]) -> bool:
        """Return True if the page text looks like a document of this broker."""
        pass

    @abstractmethod
    def parse_lines(self, lines: Sequence[str]) -> ActivityRecord:
        """Extract one activity from the page text, raising ExtractionError on failure."""
        pass

    def parse_document(
        self, lines: Sequence[str], source: Optional[str] = None
    ) -> ParseOutcome:
        """
        Parse one document and return a tagged outcome instead of raising.
        Extraction errors are local to the document, so a batch caller can
        collect them and continue with the next file.
        """
        try:
            activity = self.parse_lines(lines)
        except ExtractionError as e:
            logger.warning(f"{self.name}: could not parse {source or 'document'}: {e}")
            return ParseOutcome(
                failure=e.to_failure(source), parser_name=self.name, source=source
            )
        return ParseOutcome(activity=activity, parser_name=self.name, source=source)

    def parse_pages(
        self, pages: Sequence[Sequence[str]], source: Optional[str] = None
    ) -> List[ParseOutcome]:
        """Parse a multi-page document. The default reads one activity per page."""
        return [self.parse_document(page, source=source) for page in pages]

"""
Error taxonomy for broker document extraction.

Every error raised while classifying or reading a document derives from
ExtractionError. They are local-data errors: the parser boundary
(BaseParser.parse_document) converts them into a ParseFailure so that a
batch of documents keeps going when one of them does not match its template.
"""

from typing import List, Optional

from .models import ParseFailure


class ExtractionError(ValueError):
    """Base class for all document-level extraction errors."""

    code = "extraction_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def with_field(self, field: str) -> "ExtractionError":
        """Attach the field name if the error was raised below the field layer."""
        if self.field is None:
            self.field = field
        return self

    def to_failure(self, source: Optional[str] = None) -> ParseFailure:
        return ParseFailure(
            code=self.code, message=self.message, field=self.field, source=source
        )

    def __str__(self):
        if self.field:
            return f"[{self.field}] {self.message}"
        return self.message


class FieldNotFound(ExtractionError):
    code = "field_not_found"


class MarkerNotFound(FieldNotFound):
    """A required marker line is absent from the document."""

    code = "marker_not_found"

    def __init__(self, marker: str, field: Optional[str] = None):
        super().__init__(f"Marker {marker!r} not found", field=field)
        self.marker = marker


class OffsetOutOfRange(FieldNotFound):
    """A line offset from a found marker points outside the document."""

    code = "offset_out_of_range"

    def __init__(self, index: int, size: int, field: Optional[str] = None):
        super().__init__(
            f"Line index {index} is outside the document ({size} lines)", field=field
        )
        self.index = index
        self.size = size


class MalformedNumber(ExtractionError):
    code = "malformed_number"


class MalformedDate(ExtractionError):
    code = "malformed_date"


class UnclassifiedDocument(ExtractionError):
    """The document is not from this issuer or matches no known activity type."""

    code = "unclassified_document"


class IncompleteRecord(ExtractionError):
    code = "incomplete_record"

    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        missing_fields = list(missing_fields or [])
        super().__init__(
            message, field=",".join(missing_fields) if missing_fields else None
        )
        self.missing_fields = missing_fields


class DocumentReadError(ExtractionError):
    """The input file could not be turned into text lines."""

    code = "document_read_error"

from datetime import date as Date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class ActivityType(str, Enum):
    BUY = "Buy"
    SELL = "Sell"
    DIVIDEND = "Dividend"


class ActivityRecord(BaseModel):
    """
    Normalized activity extracted from one broker document.
    Constructed once, fully populated, and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    broker: str = Field(..., description="Tag of the issuing broker, e.g. 'traderepublic'")
    type: ActivityType = Field(..., description="Kind of activity")
    date: Date = Field(..., description="Activity date, serialized as ISO 8601")
    isin: str = Field(..., min_length=1, description="Security identifier (ISIN)")
    company: str = Field(..., min_length=1, description="Security or issuer name")
    shares: Decimal = Field(..., gt=0, description="Number of shares")
    amount: Decimal = Field(..., ge=0, description="Total cash amount of the event")
    fee: Decimal = Field(Decimal("0"), ge=0, description="External cost surcharge")
    tax: Decimal = Field(Decimal("0"), ge=0, description="Sum of withheld taxes")

    @computed_field
    @property
    def price(self) -> Decimal:
        """Price per share, always derived from amount and shares."""
        return self.amount / self.shares


class ParseFailure(BaseModel):
    """
    Tagged failure for a single document. Carries enough context to tell which
    document and which field did not match the expected template.
    """

    code: str = Field(..., description="Error code, e.g. 'marker_not_found'")
    message: str = Field(..., description="Human readable description")
    field: Optional[str] = Field(None, description="Field that failed, if known")
    source: Optional[str] = Field(None, description="Document the failure belongs to")


class ParseOutcome(BaseModel):
    """Exactly one of activity or failure is set."""

    activity: Optional[ActivityRecord] = None
    failure: Optional[ParseFailure] = None
    parser_name: Optional[str] = None
    source: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one(self):
        if (self.activity is None) == (self.failure is None):
            raise ValueError("ParseOutcome needs either an activity or a failure")
        return self

    @property
    def ok(self) -> bool:
        return self.activity is not None


class BatchOutput(BaseModel):
    """
    Result of running the parsers over many documents.
    - activities: successfully parsed records
    - failures: one entry per document that could not be parsed
    """

    activities: List[ActivityRecord] = Field(default_factory=list)
    failures: List[ParseFailure] = Field(default_factory=list)
    schema_version: Optional[str] = Field("1.0", description="Output schema version")

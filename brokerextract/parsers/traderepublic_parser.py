"""
Parser for Trade Republic transaction confirmations.

Trade Republic sends one single-page PDF per order execution or payout:
market order buys, savings plan executions, sells and dividend payouts.
The page text follows a fixed template, so every field is read from a
known position relative to a marker line (see the rule tables below).

usage:
python3 -m brokerextract.parsers.traderepublic_parser path/to/confirmation.pdf
"""

import argparse
import logging
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..parsers_core.base import BaseParser
from ..parsers_core.errors import (
    DocumentReadError,
    IncompleteRecord,
    UnclassifiedDocument,
)
from ..parsers_core.field_rules import FieldRule, Match, Occurrence, Shape, sum_rules
from ..parsers_core.models import ActivityRecord, ActivityType, ParseOutcome
from ..parsers_core.registry import ParserRegistry
from ..utils.lines import contains_marker
from ..utils.pdf_utils import extract_pages

logger = logging.getLogger(__name__)

BROKER = "traderepublic"
ISSUER_MARKER = "TRADE REPUBLIC BANK GMBH"


class DocumentKind(str, Enum):
    BUY_SINGLE = "buy_single"
    BUY_SAVINGS_PLAN = "buy_savings_plan"
    SELL = "sell"
    DIVIDEND = "dividend"

    @property
    def activity_type(self) -> ActivityType:
        if self is DocumentKind.SELL:
            return ActivityType.SELL
        if self is DocumentKind.DIVIDEND:
            return ActivityType.DIVIDEND
        return ActivityType.BUY


# Newer documents label the ISIN, older ones print it bare on the line
# above the share count.
ISIN_RULE = FieldRule(
    "isin",
    "ISIN:",
    tail=12,
    fallback=FieldRule("isin", "Stk.", offset=-1),
)
COMPANY_RULE = FieldRule("company", "BETRAG", offset=1)
SHARES_RULE = FieldRule("shares", " Stk.", before=" Stk.", shape=Shape.DECIMAL)

DATE_RULES: Dict[DocumentKind, FieldRule] = {
    # "Market-Order Kauf am 04.02.2020, um 14:02 Uhr an der Lang & Schwarz Exchange."
    DocumentKind.BUY_SINGLE: FieldRule(
        "date", "Kauf am ", after="Kauf am ", width=10, shape=Shape.DATE
    ),
    # "Sparplanausführung am 16.01.2020 an der Lang & Schwarz Exchange."
    DocumentKind.BUY_SAVINGS_PLAN: FieldRule(
        "date",
        "Sparplanausführung am ",
        after="Sparplanausführung am ",
        width=10,
        shape=Shape.DATE,
    ),
    DocumentKind.SELL: FieldRule(
        "date", "Verkauf am ", after="Verkauf am ", width=10, shape=Shape.DATE
    ),
    # The payment date sits in the VALUTA column, three cells after the header.
    DocumentKind.DIVIDEND: FieldRule(
        "date", "VALUTA", match=Match.EQUALS, offset=3, shape=Shape.DATE
    ),
}

# Sell and dividend documents repeat GESAMT in the fee breakdown; the last
# occurrence is the net total.
AMOUNT_BUY_RULE = FieldRule(
    "amount", "GESAMT", match=Match.EQUALS, offset=1, token=True, shape=Shape.DECIMAL
)
AMOUNT_NET_RULE = FieldRule(
    "amount",
    "GESAMT",
    match=Match.EQUALS,
    occurrence=Occurrence.LAST,
    offset=1,
    token=True,
    shape=Shape.DECIMAL,
)

FEE_RULE = FieldRule(
    "fee",
    "Fremdkostenzuschlag",
    match=Match.EQUALS,
    offset=1,
    before=" EUR",
    shape=Shape.ABSOLUTE_DECIMAL,
    optional=True,
)

TAX_RULES = [
    FieldRule(
        "tax",
        marker,
        match=Match.EQUALS,
        occurrence=Occurrence.LAST,
        offset=1,
        before=" EUR",
        shape=Shape.ABSOLUTE_DECIMAL,
        optional=True,
    )
    for marker in ("Kapitalertragssteuer", "Solidaritätszuschlag", "Kirchensteuer")
]

RECORD_FIELDS = ["type", "date", "isin", "company", "shares", "amount", "fee", "tax"]


class TradeRepublicParser(BaseParser):
    """
    Parses Trade Republic buy, savings plan, sell and dividend confirmations.
    """

    name = BROKER

    def classify(self, lines: Sequence[str]) -> DocumentKind:
        """Decide the document kind, raising UnclassifiedDocument if none matches."""
        if not contains_marker(lines, ISSUER_MARKER):
            raise UnclassifiedDocument(
                f"Issuer marker {ISSUER_MARKER!r} not found; not a Trade Republic document"
            )
        # A savings plan page takes its date from the plan execution line.
        if contains_marker(lines, "Sparplanausführung am"):
            return DocumentKind.BUY_SAVINGS_PLAN
        if contains_marker(lines, "Kauf am"):
            return DocumentKind.BUY_SINGLE
        if contains_marker(lines, "Verkauf am"):
            return DocumentKind.SELL
        if contains_marker(lines, "mit dem Ex-Tag"):
            return DocumentKind.DIVIDEND
        raise UnclassifiedDocument("Unable to detect order type")

    def can_parse(self, lines: Sequence[str]) -> bool:
        try:
            self.classify(lines)
        except UnclassifiedDocument:
            return False
        return True

    def extract_fields(self, lines: Sequence[str], kind: DocumentKind) -> Dict:
        """Run the rules for the given kind and return the candidate field map."""
        fields = {
            "type": kind.activity_type,
            "isin": ISIN_RULE.apply(lines),
            "company": COMPANY_RULE.apply(lines),
            "date": DATE_RULES[kind].apply(lines),
            "shares": SHARES_RULE.apply(lines),
        }
        if kind.activity_type is ActivityType.BUY:
            fields["amount"] = AMOUNT_BUY_RULE.apply(lines)
            fields["fee"] = FEE_RULE.apply(lines)
            fields["tax"] = Decimal("0")
        elif kind.activity_type is ActivityType.SELL:
            fields["amount"] = AMOUNT_NET_RULE.apply(lines)
            fields["fee"] = FEE_RULE.apply(lines)
            fields["tax"] = sum_rules(TAX_RULES, lines)
        else:
            fields["amount"] = AMOUNT_NET_RULE.apply(lines)
            fields["fee"] = Decimal("0")
            fields["tax"] = sum_rules(TAX_RULES, lines)
        return fields

    def parse_lines(self, lines: Sequence[str]) -> ActivityRecord:
        kind = self.classify(lines)
        logger.debug(f"Classified document as {kind.value}")
        return build_activity(self.extract_fields(lines, kind))

    def parse_pages(
        self, pages: Sequence[Sequence[str]], source: Optional[str] = None
    ) -> List[ParseOutcome]:
        # Trade Republic only issues one-page documents.
        if not pages:
            return [self.parse_document([], source=source)]
        return [self.parse_document(pages[0], source=source)]


def missing_fields(fields: Dict) -> List[str]:
    """
    Names of fields that are absent. None and empty text count as absent,
    Decimal("0") is a legitimate value.
    """
    missing = []
    for name in RECORD_FIELDS:
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def build_activity(fields: Dict) -> ActivityRecord:
    """Validate the candidate fields and build the record, or raise IncompleteRecord."""
    missing = missing_fields(fields)
    if missing:
        raise IncompleteRecord(
            f"Missing fields after extraction: {', '.join(missing)}", missing
        )
    try:
        return ActivityRecord(broker=BROKER, **{k: fields[k] for k in RECORD_FIELDS})
    except ValidationError as e:
        invalid = [str(error["loc"][0]) for error in e.errors() if error["loc"]]
        raise IncompleteRecord(f"Invalid record: {e}", invalid)


def main(input_path: str) -> List[ParseOutcome]:
    """
    Main function for the parser, returns one ParseOutcome for the PDF.
    """
    source = str(input_path)
    try:
        pages = extract_pages(input_path)
    except DocumentReadError as e:
        return [
            ParseOutcome(failure=e.to_failure(source), parser_name=BROKER, source=source)
        ]
    return TradeRepublicParser().parse_pages(pages, source=source)


# Register the parser class, not the main function
ParserRegistry.register_parser(name=BROKER, parser_cls=TradeRepublicParser)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Extract the activity from a Trade Republic confirmation PDF."
    )
    parser.add_argument("input_path", help="Path to a PDF file.")
    args = parser.parse_args()
    for outcome in main(input_path=args.input_path):
        print(outcome.model_dump_json(indent=2))

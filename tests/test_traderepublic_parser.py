"""Tests for the Trade Republic confirmation parser."""

from datetime import date
from decimal import Decimal

import pytest

from brokerextract.parsers.traderepublic_parser import (
    DocumentKind,
    TradeRepublicParser,
    build_activity,
    missing_fields,
)
from brokerextract.parsers_core.errors import (
    IncompleteRecord,
    MarkerNotFound,
    OffsetOutOfRange,
    UnclassifiedDocument,
)
from brokerextract.parsers_core.models import ActivityRecord, ActivityType

CENT = Decimal("0.01")


@pytest.fixture
def parser():
    return TradeRepublicParser()


def test_spec_example_single_buy(parser):
    """The minimal single buy layout produces the documented record."""
    lines = [
        "TRADE REPUBLIC BANK GMBH",
        "Market-Order Kauf am 04.02.2020, um 14:02 Uhr an der Lang & Schwarz Exchange.",
        "BETRAG",
        "Acme Corp",
        "ISIN: DE000ACME001",
        "150 Stk.",
        "GESAMT",
        "1.500,00 EUR",
    ]
    activity = parser.parse_lines(lines)

    assert activity.broker == "traderepublic"
    assert activity.type == ActivityType.BUY
    assert activity.date == date(2020, 2, 4)
    assert activity.isin == "DE000ACME001"
    assert activity.company == "Acme Corp"
    assert activity.shares == Decimal("150")
    assert activity.amount == Decimal("1500.00")
    assert activity.price == Decimal("10.00")
    assert activity.fee == Decimal("0")
    assert activity.tax == Decimal("0")


def test_single_buy_with_fee(parser, buy_lines):
    activity = parser.parse_lines(buy_lines)

    assert activity.type == ActivityType.BUY
    assert activity.company == "Acme Corp"
    assert activity.fee == Decimal("1.00")
    assert activity.tax == 0
    assert abs(activity.price * activity.shares - activity.amount) <= CENT


def test_savings_plan_buy_uses_plan_execution_date(parser, savings_plan_lines):
    assert parser.classify(savings_plan_lines) == DocumentKind.BUY_SAVINGS_PLAN

    activity = parser.parse_lines(savings_plan_lines)
    assert activity.type == ActivityType.BUY
    assert activity.date == date(2020, 1, 16)
    assert activity.isin == "IE00B4L5Y983"
    assert activity.company == "iShares Core MSCI World"
    assert activity.shares == Decimal("0.4321")
    assert activity.amount == Decimal("25.00")
    assert abs(activity.price * activity.shares - activity.amount) <= CENT


def test_sell_uses_last_total_and_sums_taxes(parser, sell_lines):
    activity = parser.parse_lines(sell_lines)

    assert activity.type == ActivityType.SELL
    assert activity.date == date(2020, 3, 10)
    assert activity.shares == Decimal("20")
    assert activity.amount == Decimal("1072.63")
    assert activity.fee == Decimal("1.00")
    assert activity.tax == Decimal("26.37")
    assert activity.price == Decimal("1072.63") / Decimal("20")


def test_sell_without_tax_lines_has_zero_tax(parser, sell_lines):
    lines = [
        line
        for i, line in enumerate(sell_lines)
        if line not in ("Kapitalertragssteuer", "Solidaritätszuschlag")
        and sell_lines[i - 1] not in ("Kapitalertragssteuer", "Solidaritätszuschlag")
    ]
    activity = parser.parse_lines(lines)

    assert activity.tax == Decimal("0")
    assert activity.tax >= 0


def test_sell_counts_church_tax(parser, sell_lines):
    lines = sell_lines[:-2] + ["Kirchensteuer", "-2,00 EUR"] + sell_lines[-2:]
    activity = parser.parse_lines(lines)

    assert activity.tax == Decimal("28.37")


def test_dividend(parser, dividend_lines):
    activity = parser.parse_lines(dividend_lines)

    assert activity.type == ActivityType.DIVIDEND
    assert activity.date == date(2020, 2, 15)
    assert activity.shares == Decimal("150")
    assert activity.amount == Decimal("10.03")
    assert activity.fee == Decimal("0")
    assert activity.tax == Decimal("3.59")


def test_dividend_ignores_fee_line(parser, dividend_lines):
    lines = dividend_lines[:14] + ["Fremdkostenzuschlag", "-1,00 EUR"] + dividend_lines[14:]
    assert parser.parse_lines(lines).fee == Decimal("0")


def test_old_layout_reads_isin_above_share_count(parser):
    lines = [
        "TRADE REPUBLIC BANK GMBH",
        "Market-Order Kauf am 04.02.2020, um 14:02 Uhr",
        "BETRAG",
        "Acme Corp",
        "DE000ACME001",
        "150 Stk.",
        "GESAMT",
        "1.500,00 EUR",
    ]
    assert parser.parse_lines(lines).isin == "DE000ACME001"


def test_isin_line_with_trailing_whitespace_keeps_all_twelve_characters(parser, buy_lines):
    lines = [line + "  " if line.startswith("ISIN:") else line for line in buy_lines]

    isin = parser.parse_lines(lines).isin

    assert isin == "DE000ACME001"
    assert len(isin) == 12


def test_extraction_is_idempotent(parser, sell_lines):
    first = parser.parse_lines(sell_lines)
    second = parser.parse_lines(list(sell_lines))

    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_record_serializes_iso_date_and_price(parser, buy_lines):
    data = parser.parse_lines(buy_lines).model_dump(mode="json")

    assert data["date"] == "2020-02-04"
    assert data["type"] == "Buy"
    assert Decimal(data["price"]) == Decimal("10")


@pytest.mark.parametrize(
    "fixture_name,kind",
    [
        ("buy_lines", DocumentKind.BUY_SINGLE),
        ("savings_plan_lines", DocumentKind.BUY_SAVINGS_PLAN),
        ("sell_lines", DocumentKind.SELL),
        ("dividend_lines", DocumentKind.DIVIDEND),
    ],
)
def test_classify(parser, request, fixture_name, kind):
    lines = request.getfixturevalue(fixture_name)
    assert parser.classify(lines) == kind
    assert parser.can_parse(lines)


def test_missing_issuer_marker_is_unclassified(parser, buy_lines):
    lines = buy_lines[1:]

    assert not parser.can_parse(lines)
    with pytest.raises(UnclassifiedDocument):
        parser.parse_lines(lines)


def test_unknown_document_type_is_unclassified(parser):
    lines = ["TRADE REPUBLIC BANK GMBH", "KONTOAUSZUG", "GESAMT", "1,00 EUR"]

    assert not parser.can_parse(lines)
    with pytest.raises(UnclassifiedDocument):
        parser.classify(lines)


def test_truncated_total_is_offset_out_of_range(parser, buy_lines):
    lines = buy_lines[:-1]

    with pytest.raises(OffsetOutOfRange) as excinfo:
        parser.parse_lines(lines)
    assert excinfo.value.field == "amount"


def test_missing_total_marker(parser, buy_lines):
    lines = [line for line in buy_lines if line != "GESAMT"]

    with pytest.raises(MarkerNotFound) as excinfo:
        parser.parse_lines(lines)
    assert excinfo.value.field == "amount"


def test_empty_company_is_incomplete(parser, buy_lines):
    lines = list(buy_lines)
    lines[lines.index("Acme Corp")] = "  "

    with pytest.raises(IncompleteRecord) as excinfo:
        parser.parse_lines(lines)
    assert excinfo.value.missing_fields == ["company"]


def test_zero_is_present_but_none_is_missing():
    fields = {
        "type": ActivityType.BUY,
        "date": date(2020, 2, 4),
        "isin": "DE000ACME001",
        "company": "Acme Corp",
        "shares": Decimal("1"),
        "amount": Decimal("0"),
        "fee": Decimal("0"),
        "tax": None,
    }
    assert missing_fields(fields) == ["tax"]

    fields["tax"] = Decimal("0")
    assert isinstance(build_activity(fields), ActivityRecord)


def test_zero_shares_is_rejected():
    fields = {
        "type": ActivityType.BUY,
        "date": date(2020, 2, 4),
        "isin": "DE000ACME001",
        "company": "Acme Corp",
        "shares": Decimal("0"),
        "amount": Decimal("10"),
        "fee": Decimal("0"),
        "tax": Decimal("0"),
    }
    with pytest.raises(IncompleteRecord) as excinfo:
        build_activity(fields)
    assert excinfo.value.missing_fields == ["shares"]


def test_parse_document_returns_tagged_failure(parser, buy_lines):
    outcome = parser.parse_document(buy_lines[:-1], source="truncated.pdf")

    assert not outcome.ok
    assert outcome.activity is None
    assert outcome.failure.code == "offset_out_of_range"
    assert outcome.failure.field == "amount"
    assert outcome.failure.source == "truncated.pdf"
    assert outcome.parser_name == "traderepublic"


def test_parse_pages_only_reads_first_page(parser, buy_lines, sell_lines):
    outcomes = parser.parse_pages([buy_lines, sell_lines], source="doc.pdf")

    assert len(outcomes) == 1
    assert outcomes[0].ok
    assert outcomes[0].activity.type == ActivityType.BUY


def test_parse_pages_without_pages_fails(parser):
    outcomes = parser.parse_pages([])

    assert len(outcomes) == 1
    assert outcomes[0].failure.code == "unclassified_document"

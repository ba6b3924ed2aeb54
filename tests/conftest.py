import pytest


def pytest_sessionstart(session):
    """
    Called after the Session object has been created and
    before performing test collection and execution.
    """
    from brokerextract.parsers_core.autodiscover import autodiscover_parsers

    autodiscover_parsers()


ISSUER = "TRADE REPUBLIC BANK GMBH KASTANIENALLEE 32 10435 BERLIN"


@pytest.fixture
def buy_lines():
    """Market order buy with an external cost surcharge."""
    return [
        ISSUER,
        "WERTPAPIERABRECHNUNG",
        "Market-Order Kauf am 04.02.2020, um 14:02 Uhr an der Lang & Schwarz Exchange.",
        "POSITION",
        "ANZAHL",
        "DURCHSCHNITTSKURS",
        "BETRAG",
        "Acme Corp",
        "150 Stk.",
        "9,99 EUR",
        "1.499,00 EUR",
        "ISIN: DE000ACME001",
        "POSITION",
        "BETRAG",
        "Fremdkostenzuschlag",
        "-1,00 EUR",
        "GESAMT",
        "1.500,00 EUR",
    ]


@pytest.fixture
def savings_plan_lines():
    return [
        ISSUER,
        "WERTPAPIERABRECHNUNG SPARPLAN",
        "Sparplanausführung am 16.01.2020 an der Lang & Schwarz Exchange.",
        "POSITION",
        "ANZAHL",
        "DURCHSCHNITTSKURS",
        "BETRAG",
        "iShares Core MSCI World",
        "0,4321 Stk.",
        "57,86 EUR",
        "25,00 EUR",
        "ISIN: IE00B4L5Y983",
        "GESAMT",
        "25,00 EUR",
    ]


@pytest.fixture
def sell_lines():
    """Sell with a fee breakdown and withheld taxes; GESAMT appears twice."""
    return [
        ISSUER,
        "WERTPAPIERABRECHNUNG",
        "Market-Order Verkauf am 10.03.2020, um 09:15 Uhr an der Lang & Schwarz Exchange.",
        "POSITION",
        "ANZAHL",
        "DURCHSCHNITTSKURS",
        "BETRAG",
        "Acme Corp",
        "20 Stk.",
        "55,00 EUR",
        "1.100,00 EUR",
        "ISIN: DE000ACME001",
        "POSITION",
        "BETRAG",
        "Fremdkostenzuschlag",
        "-1,00 EUR",
        "GESAMT",
        "1.099,00 EUR",
        "ABRECHNUNG",
        "POSITION",
        "BETRAG",
        "Kapitalertragssteuer",
        "-25,00 EUR",
        "Solidaritätszuschlag",
        "-1,37 EUR",
        "GESAMT",
        "1.072,63 EUR",
    ]


@pytest.fixture
def dividend_lines():
    return [
        ISSUER,
        "DIVIDENDE",
        "mit dem Ex-Tag 13.02.2020.",
        "POSITION",
        "ANZAHL",
        "ERTRAG",
        "BETRAG",
        "Acme Corp",
        "150 Stk.",
        "0,10 USD",
        "13,62 EUR",
        "ISIN: DE000ACME001",
        "POSITION",
        "BETRAG",
        "GESAMT",
        "13,62 EUR",
        "Kapitalertragssteuer",
        "-3,41 EUR",
        "Solidaritätszuschlag",
        "-0,18 EUR",
        "GESAMT",
        "10,03 EUR",
        "VERRECHNUNGSKONTO",
        "VALUTA",
        "BETRAG",
        "DE12345678901234567890",
        "15.02.2020",
        "10,03 EUR",
    ]

from datetime import date

import pytest

from finance_dashboard import Ledger, TransactionKind, ValidationError
from finance_dashboard.utils import (
    currency_formatter,
    filter_transactions_by_month,
    format_currency,
    parse_amount,
    parse_kind,
    parse_month,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "Rp 0"),
        (800, "Rp 800"),
        (1000, "Rp 1.000"),
        (1500000, "Rp 1.500.000"),
        (12.5, "Rp 12,5"),
        (1234567.891, "Rp 1.234.567,891"),
        (-800, "Rp -800"),
    ],
)
def test_format_currency_indonesian_style(value, expected):
    assert format_currency(value) == expected


def test_format_currency_custom_separators():
    assert format_currency(1234.5, symbol="$", thousands_sep=",", decimal_sep=".", max_decimals=2) == "$ 1,234.5"
    assert format_currency(1234, symbol="") == "1.234"


def test_currency_formatter_reads_config():
    fmt = currency_formatter({"currency": {"symbol": "EUR", "thousands_sep": " ", "decimal_sep": ","}})
    assert fmt(2500.25) == "EUR 2 500,25"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("10", 10.0),
        (" 12.50 ", 12.5),
        ("12,5", 12.5),
        ("1,000.25", 1000.25),
        ("1.500.000", 1500000.0),
        ("1.500.000,5", 1500000.5),
        ("1.500,5", 1500.5),
        ("2 000", 2000.0),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", None, "ten", "12abc", "1.2.x"])
def test_parse_amount_rejects_junk(text):
    with pytest.raises(ValidationError):
        parse_amount(text)


def test_parse_kind_aliases():
    assert parse_kind("Income") is TransactionKind.INCOME
    assert parse_kind("+") is TransactionKind.INCOME
    assert parse_kind(" out ") is TransactionKind.EXPENSE
    with pytest.raises(ValidationError):
        parse_kind("transfer")


def test_filter_transactions_by_month():
    ledger = Ledger()
    jan = ledger.add("food", 10, "expense", date=date(2025, 1, 31))
    ledger.add("food", 10, "expense", date=date(2025, 2, 1))
    assert filter_transactions_by_month(ledger.list(), "2025-01") == [jan]


def test_parse_month():
    assert parse_month("2025-03") == (2025, 3)
    assert parse_month(" 2024-12 ") == (2024, 12)
    for bad in ("2025-13", "2025-3", "March", "", None):
        with pytest.raises(ValidationError):
            parse_month(bad)


def test_filter_transactions_by_month_rejects_bad_month():
    with pytest.raises(ValidationError):
        filter_transactions_by_month([], "2025/01")

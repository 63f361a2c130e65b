# finance_dashboard/utils.py
import re

from finance_dashboard.core.models import TransactionKind, ValidationError

_KIND_ALIASES = {
    "income": TransactionKind.INCOME,
    "in": TransactionKind.INCOME,
    "+": TransactionKind.INCOME,
    "expense": TransactionKind.EXPENSE,
    "out": TransactionKind.EXPENSE,
    "-": TransactionKind.EXPENSE,
}


def format_currency(value, symbol="Rp", thousands_sep=".", decimal_sep=",", max_decimals=3):
    """
    Render an amount the way the dashboard shows it, e.g. ``Rp 1.500.000``
    or ``Rp 12,5``. Trailing zero decimals are dropped.
    """
    number = float(value)
    sign = "-" if number < 0 else ""
    whole, _, frac = f"{abs(number):,.{max_decimals}f}".partition(".")
    frac = frac.rstrip("0")
    text = whole.replace(",", thousands_sep)
    if frac:
        text += decimal_sep + frac
    if text.strip("0" + thousands_sep + decimal_sep) == "":
        sign = ""
    return f"{symbol} {sign}{text}" if symbol else f"{sign}{text}"


def currency_formatter(config):
    """Return a one-argument formatter bound to the ``currency`` config section."""
    currency = config.get("currency", {})

    def _format(value):
        return format_currency(
            value,
            symbol=currency.get("symbol", "Rp"),
            thousands_sep=currency.get("thousands_sep", "."),
            decimal_sep=currency.get("decimal_sep", ","),
            max_decimals=int(currency.get("max_decimals", 3)),
        )

    return _format


def parse_amount(text):
    """
    Parse a user-typed amount. A comma after the last dot (``1.500,5``) or a
    lone comma (``12,5``) is the decimal separator; otherwise commas, spaces
    and underscores are grouping.
    """
    raw = str(text).strip() if text is not None else ""
    if not raw:
        raise ValidationError("amount is required")
    if "," in raw and "." in raw:
        if raw.rfind(",") > raw.rfind("."):
            # 1.500,5
            raw = raw.replace(".", "").replace(",", ".")
    elif raw.count(".") > 1:
        # 1.500.000
        raw = raw.replace(".", "")
    elif raw.count(",") == 1:
        raw = raw.replace(",", ".")
    cleaned = re.sub(r"[,\s_]", "", raw)
    try:
        return float(cleaned)
    except ValueError:
        raise ValidationError(f"amount must be a number, got {text!r}") from None


def parse_kind(text):
    key = str(text).strip().lower() if text is not None else ""
    try:
        return _KIND_ALIASES[key]
    except KeyError:
        raise ValidationError(f"kind must be income or expense, got {text!r}") from None


def parse_month(text):
    """Parse ``YYYY-MM`` into a ``(year, month)`` pair."""
    match = re.fullmatch(r"(\d{4})-(\d{2})", str(text).strip()) if text is not None else None
    if not match or not 1 <= int(match.group(2)) <= 12:
        raise ValidationError(f"month must be YYYY-MM, got {text!r}")
    return int(match.group(1)), int(match.group(2))


def filter_transactions_by_month(transactions, month_str):
    """
    Keep the transactions dated within ``month_str`` (YYYY-MM), preserving
    their order. Raises ``ValidationError`` for a malformed month.
    """
    year, month = parse_month(month_str)
    return [tx for tx in transactions if (tx.date.year, tx.date.month) == (year, month)]

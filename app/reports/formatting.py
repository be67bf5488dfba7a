"""
Text formatting helpers shared by the report builder and renderer.

Everything here is total: bad input produces a marker string rather than
an exception, so one malformed record cannot abort a report.
"""

import calendar
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, localcontext

INVALID_DATE = "Invalid date"

_CENT = Decimal("0.01")


def parse_date(value) -> date | None:
    """
    Coerce a date-like value to a date.

    Accepts date, datetime and ISO-8601 strings ("2024-01-15" or a full
    timestamp). Returns None when the value cannot be interpreted.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def parse_amount(value) -> Decimal:
    """
    Coerce an amount to a non-negative Decimal with two places.

    Missing, non-numeric, NaN, infinite and negative values become 0.00,
    as do values too large to carry cents (more than 26 integer digits).
    """
    if value is None or isinstance(value, bool):
        return Decimal("0.00")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not amount.is_finite() or amount < 0:
            return Decimal("0.00")
        # Beyond the context precision quantize cannot keep two places
        return amount.quantize(_CENT)
    except (InvalidOperation, ValueError):
        return Decimal("0.00")


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format an amount as "$1,234.56", or "-$1,234.56" when negative."""
    value = Decimal(amount)
    with localcontext() as ctx:
        # Sums of large amounts may need more digits than the default context
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        value = value.quantize(_CENT)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_date(value) -> str:
    """Format a date as YYYY-MM-DD, or the invalid-date marker."""
    parsed = parse_date(value)
    if parsed is None:
        return INVALID_DATE
    return parsed.isoformat()


def format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def truncate(text: str | None, width: int = 30) -> str:
    """
    Shorten text for tabular display.

    >>> truncate("Monthly grocery run at the farmers market", 30)
    'Monthly grocery run at the far...'
    """
    if text is None:
        return ""
    text = str(text)
    if len(text) <= width:
        return text
    return text[:width] + "..."


def month_name(month: int) -> str:
    return calendar.month_name[month]


def period_label(year: int, month: int | None = None) -> str:
    """"March 2024" for a month window, "2024" for a year window."""
    if month is None:
        return str(year)
    return f"{month_name(month)} {year}"

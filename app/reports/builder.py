"""
Report builder: turns transactions into ordered section descriptors.

Two windows are supported, sharing the same section helpers:

  Monthly report
    header -> summary -> category_breakdown -> transactions
  Annual report
    header -> annual_summary -> monthly_evolution -> top_categories -> transactions

The builder only reads the snapshot it is given. Records outside the
window are ignored; records whose date cannot be parsed are listed at the
end of the detail table with an "Invalid date" marker and left out of
every total.

Empty windows still produce every section: summaries show zero totals and
table sections carry a placeholder text instead of an empty table.
"""

from datetime import datetime, timezone
from decimal import Decimal

from app.reports import aggregator
from app.reports.formatting import (
    format_currency,
    format_date,
    format_percent,
    format_timestamp,
    parse_amount,
    parse_date,
    period_label,
    truncate,
)
from app.schemas.report import Report, ReportLine, ReportSection
from app.schemas.summary import CategorySummary, Totals

NO_TRANSACTIONS = "No transactions found for this period."
NO_CATEGORIES = "No categories recorded for this period."

TABLE_STYLE = {
    "header_fill": "#3B82F6",
    "header_text": "#FFFFFF",
    "zebra_fill": "#F5F5F5",
    "font_size": 10,
}
DETAIL_STYLE = {**TABLE_STYLE, "font_size": 8, "wide_column": 3}

TYPE_LABELS = {"income": "Income", "expense": "Expense"}


def monthly_file_name(year: int, month: int) -> str:
    return f"cashflow-report-{month:02d}-{year}.pdf"


def annual_file_name(year: int) -> str:
    return f"cashflow-report-{year}.pdf"


# ---------------------------------------------------------------------------
# Public builders
# ---------------------------------------------------------------------------

def build_monthly_report(
    transactions,
    year: int,
    month: int,
    generated_at: datetime | None = None,
    detail_limit: int | None = None,
    currency_symbol: str = "$",
    description_width: int = 30,
) -> Report:
    """
    Assemble the report for one calendar month.

    Args:
        transactions: Snapshot of the owner's transactions. Anything outside
                      the month is ignored.
        year: Report year.
        month: Report month (1-12).
        generated_at: Timestamp printed in the header. Defaults to now (UTC).
        detail_limit: Cap on detail rows; None lists every transaction.
        currency_symbol: Prefix for money cells.
        description_width: Descriptions longer than this are truncated.

    Returns:
        A Report with sections header, summary, category_breakdown and
        transactions, in that order.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")

    transactions = list(transactions)
    generated_at = generated_at or datetime.now(timezone.utc)
    label = period_label(year, month)
    title = "Monthly Cash Flow Report"

    in_window = aggregator.filter_by_period(transactions, year, month)
    totals = aggregator.totals_by_type(in_window)

    sections = [
        _header_section(title, label, generated_at),
        _totals_section("summary", f"Summary - {label}", totals, currency_symbol),
        _category_section(
            "category_breakdown",
            "Category Breakdown",
            aggregator.category_breakdown(in_window),
            currency_symbol,
            ranked=False,
        ),
        _detail_section(
            in_window + _undated(transactions),
            detail_limit,
            currency_symbol,
            description_width,
        ),
    ]

    return Report(
        kind="monthly",
        title=title,
        period_label=label,
        generated_at=generated_at,
        file_name=monthly_file_name(year, month),
        sections=sections,
    )


def build_annual_report(
    transactions,
    year: int,
    generated_at: datetime | None = None,
    detail_limit: int | None = 20,
    top_limit: int = 10,
    currency_symbol: str = "$",
    description_width: int = 30,
) -> Report:
    """
    Assemble the report for a full calendar year.

    The detail listing is capped at the ``detail_limit`` most recent
    transactions of the year (20 by default, None for all of them).
    Monthly averages divide the yearly totals by 12.
    """
    transactions = list(transactions)
    generated_at = generated_at or datetime.now(timezone.utc)
    label = period_label(year)
    title = "Annual Cash Flow Report"

    in_window = aggregator.filter_by_period(transactions, year)
    totals = aggregator.totals_by_type(in_window)

    sections = [
        _header_section(title, label, generated_at),
        _annual_summary_section(totals, currency_symbol),
        _monthly_evolution_section(aggregator.monthly_breakdown(in_window, year), currency_symbol),
        _category_section(
            "top_categories",
            f"Top {top_limit} Categories",
            aggregator.top_categories(in_window, top_limit),
            currency_symbol,
            ranked=True,
        ),
        _detail_section(
            in_window + _undated(transactions),
            detail_limit,
            currency_symbol,
            description_width,
        ),
    ]

    return Report(
        kind="annual",
        title=title,
        period_label=label,
        generated_at=generated_at,
        file_name=annual_file_name(year),
        sections=sections,
    )


# ---------------------------------------------------------------------------
# Section helpers
# ---------------------------------------------------------------------------

def _undated(transactions) -> list:
    return [t for t in transactions if parse_date(getattr(t, "date", None)) is None]


def _tone(amount: Decimal) -> str:
    return "positive" if amount >= 0 else "negative"


def _header_section(title: str, label: str, generated_at: datetime) -> ReportSection:
    return ReportSection(
        key="header",
        title=title,
        lines=[
            ReportLine(label="Period", value=label),
            ReportLine(label="Generated at", value=format_timestamp(generated_at)),
        ],
        style={"font_size": 20},
    )


def _totals_section(key: str, title: str, totals: Totals, symbol: str) -> ReportSection:
    return ReportSection(
        key=key,
        title=title,
        lines=[
            ReportLine(label="Total income", value=format_currency(totals.income_total, symbol)),
            ReportLine(label="Total expenses", value=format_currency(totals.expense_total, symbol)),
            ReportLine(
                label="Balance",
                value=format_currency(totals.balance, symbol),
                tone=_tone(totals.balance),
            ),
        ],
    )


def _annual_summary_section(totals: Totals, symbol: str) -> ReportSection:
    section = _totals_section("annual_summary", "Annual Summary", totals, symbol)
    average_income = totals.income_total / 12
    average_expense = totals.expense_total / 12
    average_balance = totals.balance / 12
    section.lines.extend([
        ReportLine(label="Monthly average income", value=format_currency(average_income, symbol)),
        ReportLine(label="Monthly average expenses", value=format_currency(average_expense, symbol)),
        ReportLine(
            label="Monthly average balance",
            value=format_currency(average_balance, symbol),
            tone=_tone(average_balance),
        ),
    ])
    return section


def _monthly_evolution_section(months, symbol: str) -> ReportSection:
    return ReportSection(
        key="monthly_evolution",
        title="Monthly Evolution",
        columns=["Month", "Income", "Expenses", "Balance"],
        rows=[
            [
                summary.period_label,
                format_currency(summary.income_total, symbol),
                format_currency(summary.expense_total, symbol),
                format_currency(summary.balance, symbol),
            ]
            for summary in months
        ],
        style=dict(TABLE_STYLE),
    )


def _category_section(
    key: str,
    title: str,
    summaries: list[CategorySummary],
    symbol: str,
    ranked: bool,
) -> ReportSection:
    columns = ["Category", "Type", "Count", "Total", "% of Total"]
    if ranked:
        columns = ["#"] + columns

    rows = []
    for rank, summary in enumerate(summaries, start=1):
        row = [
            summary.category,
            TYPE_LABELS[summary.type],
            str(summary.count),
            format_currency(summary.total, symbol),
            format_percent(summary.percent_of_total),
        ]
        rows.append([str(rank)] + row if ranked else row)

    return ReportSection(
        key=key,
        title=title,
        columns=columns,
        rows=rows,
        placeholder=None if rows else NO_CATEGORIES,
        style=dict(TABLE_STYLE),
    )


def _detail_section(
    transactions: list,
    limit: int | None,
    symbol: str,
    description_width: int,
) -> ReportSection:
    ordered = latest_first(transactions)

    capped = limit is not None and len(ordered) > limit
    if limit is not None:
        ordered = ordered[:max(limit, 0)]

    title = "Detailed Transactions"
    if capped:
        title = f"Detailed Transactions (Last {limit})"

    rows = [
        [
            format_date(t.date),
            TYPE_LABELS.get(t.type, str(t.type)),
            str(t.category or ""),
            truncate(getattr(t, "description", None), description_width),
            format_currency(parse_amount(t.amount), symbol),
        ]
        for t in ordered
    ]

    return ReportSection(
        key="transactions",
        title=title,
        columns=["Date", "Type", "Category", "Description", "Amount"],
        rows=rows,
        placeholder=None if rows else NO_TRANSACTIONS,
        style={**DETAIL_STYLE, "truncated": capped},
    )


def latest_first(transactions) -> list:
    """Order transactions by date, newest first; undated ones go last."""
    dated = [t for t in transactions if parse_date(getattr(t, "date", None)) is not None]
    return sorted(dated, key=lambda t: parse_date(t.date), reverse=True) + _undated(transactions)

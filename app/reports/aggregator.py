"""
Transaction aggregation: totals, monthly breakdowns and category rankings.

All functions here are pure. They accept any iterable of transaction-like
objects (ORM rows, response schemas, or plain objects exposing ``date``,
``type``, ``category`` and ``amount`` attributes) and never mutate them.
Calling a function twice on the same input returns equal output.

Malformed records degrade instead of failing:
  - a missing/non-numeric/negative amount counts as zero
  - an unparseable date belongs to no month (and no dated window)
  - a type other than "income"/"expense" is ignored

Balances are always ``income_total - expense_total``.
"""

from collections.abc import Iterable
from decimal import Decimal

from app.reports.formatting import month_name, parse_amount, parse_date
from app.schemas.summary import CategorySummary, MonthlySummary, Totals

INCOME = "income"
EXPENSE = "expense"

_ZERO = Decimal("0.00")


def filter_by_period(transactions: Iterable, year: int, month: int | None = None) -> list:
    """Keep the records whose date falls in ``year`` (and ``month``, if given)."""
    selected = []
    for txn in transactions:
        day = parse_date(getattr(txn, "date", None))
        if day is None or day.year != year:
            continue
        if month is not None and day.month != month:
            continue
        selected.append(txn)
    return selected


def totals_by_type(transactions: Iterable) -> Totals:
    """Sum amounts per type. Empty input yields all-zero totals."""
    income = _ZERO
    expense = _ZERO
    for txn in transactions:
        txn_type = getattr(txn, "type", None)
        if txn_type == INCOME:
            income += parse_amount(getattr(txn, "amount", None))
        elif txn_type == EXPENSE:
            expense += parse_amount(getattr(txn, "amount", None))
    return Totals(income_total=income, expense_total=expense, balance=income - expense)


def monthly_breakdown(transactions: Iterable, year: int) -> list[MonthlySummary]:
    """
    Partition a year's transactions into calendar months.

    Always returns exactly 12 entries, January to December. Months without
    transactions are zero-filled, so consumers never special-case gaps.
    """
    buckets: dict[int, list] = {month: [] for month in range(1, 13)}
    for txn in filter_by_period(transactions, year):
        buckets[parse_date(txn.date).month].append(txn)

    summaries = []
    for month, month_txns in buckets.items():
        totals = totals_by_type(month_txns)
        summaries.append(
            MonthlySummary(
                month=month,
                period_label=month_name(month),
                income_total=totals.income_total,
                expense_total=totals.expense_total,
                balance=totals.balance,
            )
        )
    return summaries


def category_breakdown(transactions: Iterable) -> list[CategorySummary]:
    """
    Group by (category, type), largest total first.

    Ties keep the order in which their buckets were first seen. Each
    bucket's percent_of_total is its share of the sum of all bucket totals
    (income and expense together); it is 0.0 when that sum is zero.
    """
    # dicts preserve insertion order, which is the encounter order
    buckets: dict[tuple[str, str], list] = {}
    for txn in transactions:
        txn_type = getattr(txn, "type", None)
        if txn_type not in (INCOME, EXPENSE):
            continue
        key = (str(getattr(txn, "category", None) or ""), txn_type)
        bucket = buckets.setdefault(key, [0, _ZERO])
        bucket[0] += 1
        bucket[1] += parse_amount(getattr(txn, "amount", None))

    grand_total = sum((total for _, total in buckets.values()), _ZERO)

    summaries = [
        CategorySummary(
            category=category,
            type=txn_type,
            count=count,
            total=total,
            percent_of_total=(
                float(total / grand_total * 100) if grand_total > 0 else 0.0
            ),
        )
        for (category, txn_type), (count, total) in buckets.items()
    ]
    # sorted() is stable, also with reverse=True
    return sorted(summaries, key=lambda summary: summary.total, reverse=True)


def top_categories(transactions: Iterable, limit: int = 10) -> list[CategorySummary]:
    """The ``limit`` largest categories, same ordering as category_breakdown."""
    return category_breakdown(transactions)[:max(limit, 0)]

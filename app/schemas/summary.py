"""
Derived summaries produced by the aggregator.

None of these are persisted: they are recomputed from the transaction set
on every request. They double as API response schemas for the dashboard
and the JSON report endpoints.
"""

from decimal import Decimal

from pydantic import BaseModel


class Totals(BaseModel):
    """Income/expense totals over an aggregation window."""
    income_total: Decimal = Decimal("0.00")
    expense_total: Decimal = Decimal("0.00")
    balance: Decimal = Decimal("0.00")


class MonthlySummary(BaseModel):
    """Totals for one calendar month of a year."""
    month: int
    period_label: str
    income_total: Decimal
    expense_total: Decimal
    balance: Decimal


class CategorySummary(BaseModel):
    """Totals for one (category, type) bucket."""
    category: str
    type: str
    count: int
    total: Decimal
    percent_of_total: float


class DashboardResponse(BaseModel):
    """
    Dashboard metrics.

    current_balance covers the user's whole history; the monthly_* fields
    cover the selected month; yearly_data always has 12 entries.
    """
    year: int
    month: int
    current_balance: Decimal
    monthly_income: Decimal
    monthly_expense: Decimal
    monthly_balance: Decimal
    yearly_data: list[MonthlySummary]

"""
Dashboard service: the numbers shown on the landing page.

  - current_balance: income minus expenses over the user's whole history
  - monthly_*: totals for the selected month
  - yearly_data: the 12-month breakdown of the selected year

All figures are recomputed from transactions on every call; nothing is
cached or stored.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.reports import aggregator
from app.schemas.summary import DashboardResponse
from app.services import transaction_service


async def get_dashboard(
    db: AsyncSession,
    user_id: uuid.UUID,
    year: int,
    month: int,
) -> DashboardResponse:
    """
    Compute dashboard metrics for the user.

    Args:
        db: Database session.
        user_id: Owner whose data to aggregate.
        year: Year for the 12-month breakdown.
        month: Month (of ``year``) for the monthly figures.
    """
    all_transactions = await transaction_service.get_transactions(db, user_id)

    overall = aggregator.totals_by_type(all_transactions)
    year_transactions = aggregator.filter_by_period(all_transactions, year)
    monthly = aggregator.totals_by_type(
        aggregator.filter_by_period(year_transactions, year, month)
    )

    return DashboardResponse(
        year=year,
        month=month,
        current_balance=overall.balance,
        monthly_income=monthly.income_total,
        monthly_expense=monthly.expense_total,
        monthly_balance=monthly.balance,
        yearly_data=aggregator.monthly_breakdown(year_transactions, year),
    )

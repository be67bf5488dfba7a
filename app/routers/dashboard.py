"""
Dashboard router.

Endpoints:
  GET /dashboard?year=YYYY&month=MM

Both parameters default to the current date (UTC).
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.summary import DashboardResponse
from app.services import dashboard_service

router = APIRouter()


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Get dashboard metrics",
)
async def get_dashboard(
    year: int | None = Query(None, ge=2000, le=2100, description="Year of the 12-month breakdown"),
    month: int | None = Query(None, ge=1, le=12, description="Month of the monthly figures"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Dashboard metrics for the authenticated user:

    - **current_balance**: Income minus expenses, all time
    - **monthly_income / monthly_expense / monthly_balance**: Selected month
    - **yearly_data**: Always 12 entries, January to December
    """
    today = datetime.now(timezone.utc).date()
    return await dashboard_service.get_dashboard(
        db=db,
        user_id=user.id,
        year=year or today.year,
        month=month or today.month,
    )

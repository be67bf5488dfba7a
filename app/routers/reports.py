"""
Reports router: monthly and annual cash-flow reports.

Endpoints:
  GET /reports/monthly?year=YYYY&month=MM       Section descriptors (JSON)
  GET /reports/monthly/pdf?year=YYYY&month=MM   Rendered PDF download
  GET /reports/annual?year=YYYY                 Section descriptors (JSON)
  GET /reports/annual/pdf?year=YYYY             Rendered PDF download

PDF downloads are named cashflow-report-MM-YYYY.pdf (monthly) and
cashflow-report-YYYY.pdf (annual) and rendered in a worker thread. A rendering
failure returns a single 500 response with error_type "report_render_failed".
"""

from fastapi import APIRouter, Depends, Query, Response
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.report import Report
from app.services import report_service

router = APIRouter()


async def _pdf_response(report: Report) -> Response:
    # reportlab layout is CPU-bound; keep it off the event loop
    content = await run_in_threadpool(report_service.render_pdf, report)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report.file_name}"'},
    )


@router.get(
    "/monthly",
    response_model=Report,
    summary="Get the monthly report",
)
async def get_monthly_report(
    year: int = Query(..., ge=2000, le=2100, description="Report year"),
    month: int = Query(..., ge=1, le=12, description="Report month (1-12)"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Sections, in order: header, summary, category_breakdown, transactions.

    Transactions are listed newest first. An empty month still returns
    every section; the transactions section carries a placeholder.
    """
    return await report_service.monthly_report(db=db, user_id=user.id, year=year, month=month)


@router.get(
    "/monthly/pdf",
    summary="Download the monthly report as PDF",
    response_class=Response,
)
async def download_monthly_report(
    year: int = Query(..., ge=2000, le=2100, description="Report year"),
    month: int = Query(..., ge=1, le=12, description="Report month (1-12)"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    report = await report_service.monthly_report(db=db, user_id=user.id, year=year, month=month)
    return await _pdf_response(report)


@router.get(
    "/annual",
    response_model=Report,
    summary="Get the annual report",
)
async def get_annual_report(
    year: int = Query(..., ge=2000, le=2100, description="Report year"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Sections, in order: header, annual_summary, monthly_evolution,
    top_categories, transactions (the 20 most recent of the year).
    """
    return await report_service.annual_report(db=db, user_id=user.id, year=year)


@router.get(
    "/annual/pdf",
    summary="Download the annual report as PDF",
    response_class=Response,
)
async def download_annual_report(
    year: int = Query(..., ge=2000, le=2100, description="Report year"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    report = await report_service.annual_report(db=db, user_id=user.id, year=year)
    return await _pdf_response(report)

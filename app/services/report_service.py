"""
Report service: monthly and annual cash-flow reports.

Generates a report for a user and window by:
  1. Fetching the window's transactions (one owner-scoped query)
  2. Handing the snapshot to the report builder
  3. Optionally rendering the sections to PDF

The builder and aggregator never touch the database; they work on the
snapshot fetched in step 1. Renderer failures (ReportRenderError) are not
retried or wrapped: they propagate to the caller as raised.
"""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.reports.builder import build_annual_report, build_monthly_report
from app.reports.renderer import PdfRenderer
from app.schemas.report import Report
from app.services import transaction_service

logger = structlog.get_logger()


async def monthly_report(
    db: AsyncSession,
    user_id: uuid.UUID,
    year: int,
    month: int,
) -> Report:
    """Build the monthly report sections for the user."""
    transactions = await transaction_service.get_transactions(
        db, user_id, year=year, month=month
    )
    report = build_monthly_report(
        transactions,
        year,
        month,
        detail_limit=settings.MONTHLY_DETAIL_LIMIT,
        currency_symbol=settings.CURRENCY_SYMBOL,
        description_width=settings.DESCRIPTION_MAX_LENGTH,
    )

    logger.info(
        "report_built",
        kind=report.kind,
        user_id=str(user_id),
        period=report.period_label,
        transaction_count=len(transactions),
    )
    return report


async def annual_report(
    db: AsyncSession,
    user_id: uuid.UUID,
    year: int,
) -> Report:
    """Build the annual report sections for the user."""
    transactions = await transaction_service.get_transactions(db, user_id, year=year)
    report = build_annual_report(
        transactions,
        year,
        detail_limit=settings.ANNUAL_DETAIL_LIMIT,
        top_limit=settings.TOP_CATEGORIES_LIMIT,
        currency_symbol=settings.CURRENCY_SYMBOL,
        description_width=settings.DESCRIPTION_MAX_LENGTH,
    )

    logger.info(
        "report_built",
        kind=report.kind,
        user_id=str(user_id),
        period=report.period_label,
        transaction_count=len(transactions),
    )
    return report


def render_pdf(report: Report, renderer: PdfRenderer | None = None) -> bytes:
    """
    Render a built report to PDF bytes.

    Raises:
        ReportRenderError: Propagated unchanged from the renderer.
    """
    renderer = renderer or PdfRenderer()
    content = renderer.render(report)
    logger.info("report_rendered", file_name=report.file_name, size_bytes=len(content))
    return content

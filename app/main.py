"""
Cash Flow API application.

Wiring, in order: lifespan (logging, tables), CORS, domain exception
handlers, routers. Settings are validated when app.config is imported,
so a missing SECRET_KEY or empty DATABASE_URL stops the process before
it serves anything.

Run locally:
    uvicorn app.main:app --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import models  # noqa: F401  (registers every table on Base.metadata)
from app.config import settings
from app.database import close_database, init_database
from app.exceptions import register_exception_handlers
from app.logging_config import configure_logging
from app.routers import auth, categories, dashboard, reports, transactions, users

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create_all only adds missing tables; schema changes need a migration
    configure_logging(settings.LOG_LEVEL, json=not settings.DEBUG)
    await init_database()
    logger.info("app_started", version=settings.APP_VERSION)
    yield
    await close_database()
    logger.info("app_stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Personal cash-flow tracking with dashboards and PDF reports",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    # Browsers hide Content-Disposition unless exposed; the PDF name lives there
    expose_headers=["Content-Disposition"],
)

register_exception_handlers(app)

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(transactions.router, prefix="/transactions", tags=["Transactions"])
app.include_router(categories.router, prefix="/categories", tags=["Categories"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
app.include_router(reports.router, prefix="/reports", tags=["Reports"])


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "ok", "version": settings.APP_VERSION}

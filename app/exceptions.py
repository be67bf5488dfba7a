"""
Custom exception classes and FastAPI exception handlers.

Service code raises domain-specific errors (like TransactionNotFoundError)
without importing HTTP concepts. The handler layer translates these into
HTTP responses with a consistent body: {"detail": ..., "error_type": ...}.

Exception hierarchy:
    CashFlowError (base)
    ├── TransactionNotFoundError  unknown id, or owned by someone else
    ├── CategoryNotFoundError     unknown id, or owned by someone else
    ├── DuplicateCategoryError    same (name, type) already exists
    ├── DuplicateEmailError       signup with a registered email
    ├── InvalidCredentialsError   bad email/password combination
    └── ReportRenderError         the PDF renderer failed

Ownership note:
  A transaction or category that belongs to another user is reported as
  "not found", so ids of other users' records are never confirmed.
"""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class CashFlowError(Exception):
    """Base exception for all Cash Flow API domain errors."""

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class TransactionNotFoundError(CashFlowError):
    """Raised when a transaction does not exist for the current user."""

    def __init__(self, transaction_id: uuid.UUID):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")


class CategoryNotFoundError(CashFlowError):
    """Raised when a category does not exist for the current user."""

    def __init__(self, category_id: uuid.UUID):
        self.category_id = category_id
        super().__init__(f"Category {category_id} not found")


class DuplicateCategoryError(CashFlowError):
    """Raised when the user already has a category with this name and type."""

    def __init__(self, name: str, category_type: str):
        self.name = name
        self.category_type = category_type
        super().__init__(f"Category '{name}' ({category_type}) already exists")


class DuplicateEmailError(CashFlowError):
    """Raised when attempting to register with an email that's already in use."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email {email} is already registered")


class InvalidCredentialsError(CashFlowError):
    """Raised when login credentials are incorrect."""

    def __init__(self):
        super().__init__("Invalid email or password")


class ReportRenderError(CashFlowError):
    """
    Raised when a report cannot be painted into a document.

    Attributes:
        file_name: The file the renderer was producing.
    """

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Could not generate report {file_name}: {reason}")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers with the FastAPI application.

    Each handler maps a domain exception to an HTTP status code and
    consistent JSON response format: {"detail": "error message"}

    This is called once during app startup in main.py.
    """

    @app.exception_handler(TransactionNotFoundError)
    async def transaction_not_found_handler(
        request: Request, exc: TransactionNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"detail": exc.detail, "error_type": "transaction_not_found"},
        )

    @app.exception_handler(CategoryNotFoundError)
    async def category_not_found_handler(
        request: Request, exc: CategoryNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"detail": exc.detail, "error_type": "category_not_found"},
        )

    @app.exception_handler(DuplicateCategoryError)
    async def duplicate_category_handler(
        request: Request, exc: DuplicateCategoryError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=409,  # Conflict: the resource already exists
            content={"detail": exc.detail, "error_type": "duplicate_category"},
        )

    @app.exception_handler(DuplicateEmailError)
    async def duplicate_email_handler(
        request: Request, exc: DuplicateEmailError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"detail": exc.detail, "error_type": "duplicate_email"},
        )

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(
        request: Request, exc: InvalidCredentialsError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={"detail": exc.detail, "error_type": "invalid_credentials"},
        )

    @app.exception_handler(ReportRenderError)
    async def report_render_handler(
        request: Request, exc: ReportRenderError
    ) -> JSONResponse:
        logger.error(
            "report_render_failed",
            file_name=exc.file_name,
            reason=exc.reason,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": exc.detail, "error_type": "report_render_failed"},
        )

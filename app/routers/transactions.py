"""
Transactions router: record, list, edit and delete cash-flow entries.

All endpoints are scoped to the authenticated user:
  POST   /transactions                 Record an income or expense
  GET    /transactions                 List (month/year/type/category filters)
  DELETE /transactions                 Clear all of the user's transactions
  GET    /transactions/{id}            Get a single transaction
  PATCH  /transactions/{id}            Partially update a transaction
  DELETE /transactions/{id}            Delete a transaction
"""

import uuid
from typing import Literal

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.transaction import (
    BulkDeleteResponse,
    TransactionCreateRequest,
    TransactionResponse,
    TransactionUpdateRequest,
)
from app.services import transaction_service

router = APIRouter()


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a transaction (income or expense)",
)
async def create_transaction(
    request: TransactionCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Record an income or expense entry.

    - **type**: "income" or "expense"
    - **amount**: Non-negative, at most two decimal places
    - **category**: Any label; it does not have to be a registered category
    """
    return await transaction_service.create_transaction(
        db=db,
        user_id=user.id,
        txn_date=request.date,
        txn_type=request.type,
        category=request.category,
        amount=request.amount,
        description=request.description,
    )


@router.get(
    "",
    response_model=list[TransactionResponse],
    summary="List transactions",
)
async def list_transactions(
    year: int | None = Query(None, ge=2000, le=2100, description="Filter by year"),
    month: int | None = Query(None, ge=1, le=12, description="Filter by month (requires year)"),
    type: Literal["income", "expense"] | None = Query(None, description="Filter by type"),
    category: str | None = Query(None, description="Filter by exact category name"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the user's transactions, newest first, with optional filters and pagination."""
    return await transaction_service.get_transactions(
        db=db,
        user_id=user.id,
        year=year,
        month=month,
        type_filter=type,
        category=category,
        limit=limit,
        offset=offset,
    )


@router.delete(
    "",
    response_model=BulkDeleteResponse,
    summary="Delete all of the user's transactions",
)
async def clear_transactions(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Permanently delete every transaction the user owns. Categories are kept."""
    deleted = await transaction_service.delete_all_transactions(db=db, user_id=user.id)
    return BulkDeleteResponse(deleted_count=deleted)


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Get a single transaction",
)
async def get_transaction(
    transaction_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get details for a specific transaction."""
    return await transaction_service.get_transaction(
        db=db,
        user_id=user.id,
        transaction_id=transaction_id,
    )


@router.patch(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Update a transaction",
)
async def update_transaction(
    transaction_id: uuid.UUID,
    request: TransactionUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Only the fields present in the body are changed."""
    return await transaction_service.update_transaction(
        db=db,
        user_id=user.id,
        transaction_id=transaction_id,
        changes=request.model_dump(exclude_unset=True),
    )


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a transaction",
)
async def delete_transaction(
    transaction_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await transaction_service.delete_transaction(
        db=db,
        user_id=user.id,
        transaction_id=transaction_id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

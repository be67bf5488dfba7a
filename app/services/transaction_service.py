"""
Transaction service: owner-scoped CRUD over the transactions table.

Every function takes the authenticated user's id and adds it to the WHERE
clause. A transaction belonging to someone else is indistinguishable from
one that does not exist: both raise TransactionNotFoundError.

Each operation is a single round trip (plus a flush); the request-scoped
session in app.database commits or rolls back around it.
"""

import uuid
from datetime import date
from decimal import Decimal

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import TransactionNotFoundError
from app.models.transaction import Transaction

logger = structlog.get_logger()


def month_bounds(year: int, month: int | None = None) -> tuple[date, date]:
    """
    First day of the window and first day after it.

    month=None gives the whole year.
    """
    if month is None:
        return date(year, 1, 1), date(year + 1, 1, 1)
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


async def create_transaction(
    db: AsyncSession,
    user_id: uuid.UUID,
    txn_date: date,
    txn_type: str,
    category: str,
    amount: Decimal,
    description: str = "",
) -> Transaction:
    """
    Record a new income or expense entry for the user.

    Args:
        db: Database session.
        user_id: Owner of the new transaction.
        txn_date: Calendar day of the entry.
        txn_type: "income" or "expense".
        category: Free-text category label.
        amount: Non-negative amount.
        description: Optional memo.

    Returns:
        The created Transaction instance.
    """
    txn = Transaction(
        user_id=user_id,
        date=txn_date,
        type=txn_type,
        category=category,
        amount=amount,
        description=description,
    )
    db.add(txn)
    await db.flush()
    # Reload so the amount comes back at the column scale (10 -> 10.00)
    await db.refresh(txn)

    logger.info(
        "transaction_created",
        transaction_id=str(txn.id),
        user_id=str(user_id),
        type=txn_type,
    )
    return txn


async def get_transactions(
    db: AsyncSession,
    user_id: uuid.UUID,
    year: int | None = None,
    month: int | None = None,
    type_filter: str | None = None,
    category: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Transaction]:
    """
    List the user's transactions, newest first.

    The date window is applied when ``year`` is given: the whole year, or a
    single month of it when ``month`` is also given. A month without a
    year is ignored.

    Args:
        db: Database session.
        user_id: Owner whose transactions to list.
        year: Optional window year.
        month: Optional window month (1-12), requires year.
        type_filter: Optional "income" / "expense".
        category: Optional exact category name.
        limit: Max number of results; None returns everything.
        offset: Number of results to skip (for pagination).

    Returns:
        List of Transaction instances ordered by date descending.
    """
    query = (
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(Transaction.date.desc(), Transaction.created_at.desc())
        .offset(offset)
    )

    if year is not None:
        start, end = month_bounds(year, month)
        query = query.where(Transaction.date >= start, Transaction.date < end)
    if type_filter:
        query = query.where(Transaction.type == type_filter)
    if category:
        query = query.where(Transaction.category == category)
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_transaction(
    db: AsyncSession,
    user_id: uuid.UUID,
    transaction_id: uuid.UUID,
) -> Transaction:
    """
    Get a single transaction owned by the user.

    Raises:
        TransactionNotFoundError: If it doesn't exist or belongs to someone else.
    """
    result = await db.execute(
        select(Transaction)
        .where(Transaction.id == transaction_id)
        .where(Transaction.user_id == user_id)
    )
    txn = result.scalar_one_or_none()

    if txn is None:
        raise TransactionNotFoundError(transaction_id)

    return txn


async def update_transaction(
    db: AsyncSession,
    user_id: uuid.UUID,
    transaction_id: uuid.UUID,
    changes: dict,
) -> Transaction:
    """
    Apply a partial update to one of the user's transactions.

    Only keys present in ``changes`` are written; ``user_id`` and ``id``
    cannot be changed this way.

    Raises:
        TransactionNotFoundError: If it doesn't exist or belongs to someone else.
    """
    txn = await get_transaction(db, user_id, transaction_id)

    for field in ("date", "type", "category", "description", "amount"):
        if field in changes and changes[field] is not None:
            setattr(txn, field, changes[field])

    await db.flush()
    await db.refresh(txn)

    logger.info(
        "transaction_updated",
        transaction_id=str(transaction_id),
        fields=sorted(changes),
    )
    return txn


async def delete_transaction(
    db: AsyncSession,
    user_id: uuid.UUID,
    transaction_id: uuid.UUID,
) -> None:
    """
    Delete one of the user's transactions.

    Raises:
        TransactionNotFoundError: If it doesn't exist or belongs to someone else.
    """
    txn = await get_transaction(db, user_id, transaction_id)
    await db.delete(txn)
    await db.flush()

    logger.info("transaction_deleted", transaction_id=str(transaction_id))


async def delete_all_transactions(db: AsyncSession, user_id: uuid.UUID) -> int:
    """
    Delete every transaction the user owns ("clear all data").

    Returns:
        Number of deleted rows.
    """
    result = await db.execute(
        delete(Transaction).where(Transaction.user_id == user_id)
    )
    await db.flush()

    logger.warning("transactions_cleared", user_id=str(user_id), count=result.rowcount)
    return result.rowcount

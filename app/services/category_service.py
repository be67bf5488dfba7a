"""
Category service: user-defined labels for transactions.

Categories are independent of transactions. Deleting one leaves every
transaction that used the name untouched, and transactions may use names
that are not registered categories at all.
"""

import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import CategoryNotFoundError, DuplicateCategoryError
from app.models.category import PRESET_CATEGORIES, Category

logger = structlog.get_logger()


async def list_categories(
    db: AsyncSession,
    user_id: uuid.UUID,
    type_filter: str | None = None,
) -> list[Category]:
    """The user's own categories ordered by name, optionally for one type."""
    query = (
        select(Category)
        .where(Category.user_id == user_id)
        .order_by(Category.name, Category.type)
    )
    if type_filter:
        query = query.where(Category.type == type_filter)

    result = await db.execute(query)
    return list(result.scalars().all())


async def create_category(
    db: AsyncSession,
    user_id: uuid.UUID,
    name: str,
    category_type: str,
) -> Category:
    """
    Create a category for the user.

    Raises:
        DuplicateCategoryError: If the user already has this (name, type).
    """
    result = await db.execute(
        select(Category).where(
            Category.user_id == user_id,
            Category.name == name,
            Category.type == category_type,
        )
    )
    if result.scalar_one_or_none() is not None:
        raise DuplicateCategoryError(name, category_type)

    category = Category(user_id=user_id, name=name, type=category_type)
    db.add(category)
    await db.flush()

    logger.info("category_created", category_id=str(category.id), type=category_type)
    return category


async def delete_category(
    db: AsyncSession,
    user_id: uuid.UUID,
    category_id: uuid.UUID,
) -> None:
    """
    Delete one of the user's categories.

    Raises:
        CategoryNotFoundError: If it doesn't exist or belongs to someone else.
    """
    result = await db.execute(
        select(Category)
        .where(Category.id == category_id)
        .where(Category.user_id == user_id)
    )
    category = result.scalar_one_or_none()
    if category is None:
        raise CategoryNotFoundError(category_id)

    await db.delete(category)
    await db.flush()

    logger.info("category_deleted", category_id=str(category_id))


async def available_category_names(db: AsyncSession, user_id: uuid.UUID) -> dict[str, list[str]]:
    """
    Category names to offer per type: presets first, then the user's own.

    Names are de-duplicated; a user category named like a preset appears once.
    """
    names = {txn_type: list(presets) for txn_type, presets in PRESET_CATEGORIES.items()}
    for category in await list_categories(db, user_id):
        if category.name not in names[category.type]:
            names[category.type].append(category.name)
    return names

"""
Categories router: the user's own transaction labels.

Endpoints:
  GET    /categories             List the user's categories (by name)
  POST   /categories             Create a category
  GET    /categories/available   Preset + user category names per type
  DELETE /categories/{id}        Delete a category
"""

import uuid
from typing import Literal

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.category import (
    AvailableCategoriesResponse,
    CategoryCreateRequest,
    CategoryResponse,
)
from app.services import category_service

router = APIRouter()


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List the user's categories",
)
async def list_categories(
    type: Literal["income", "expense"] | None = Query(None, description="Filter by type"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await category_service.list_categories(db=db, user_id=user.id, type_filter=type)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(
    request: CategoryCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Names are unique per user and type; a duplicate returns 409."""
    return await category_service.create_category(
        db=db,
        user_id=user.id,
        name=request.name,
        category_type=request.type,
    )


@router.get(
    "/available",
    response_model=AvailableCategoriesResponse,
    summary="Category names to offer in forms",
)
async def available_categories(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Preset names first, followed by the user's own categories."""
    names = await category_service.available_category_names(db=db, user_id=user.id)
    return AvailableCategoriesResponse(**names)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category",
)
async def delete_category(
    category_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Transactions that use the category name are left unchanged."""
    await category_service.delete_category(db=db, user_id=user.id, category_id=category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

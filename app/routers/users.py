"""
Profile of the authenticated user.

  GET   /users/me  Current profile
  PATCH /users/me  Change the display name
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.user import ProfileResponse, ProfileUpdateRequest
from app.services import auth_service

router = APIRouter()


@router.get("/me", response_model=ProfileResponse, summary="Get the current profile")
async def get_me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=ProfileResponse, summary="Update the display name")
async def update_me(
    updates: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Fields other than `name` are rejected with 422."""
    return await auth_service.update_profile(
        db=db, user=user, changes=updates.model_dump(exclude_unset=True)
    )

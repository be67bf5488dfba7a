"""Pydantic schemas for Category endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.transaction import TransactionType


class CategoryCreateRequest(BaseModel):
    """Request body for POST /categories."""
    name: str = Field(min_length=1, max_length=100)
    type: TransactionType

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name must not be blank")
        return value


class CategoryResponse(BaseModel):
    """Public representation of a user-defined category."""
    id: uuid.UUID
    name: str
    type: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AvailableCategoriesResponse(BaseModel):
    """Preset names merged with the user's own, per type."""
    income: list[str]
    expense: list[str]

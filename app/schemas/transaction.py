"""
Pydantic schemas for Transaction endpoints.

Amounts are decimals with two places (e.g. 10.50). JSON responses carry
them as strings ("10.50") so no precision is lost in transit.
"""

import uuid
from datetime import date as calendar_date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

TransactionType = Literal["income", "expense"]


class TransactionCreateRequest(BaseModel):
    """Request body for POST /transactions."""
    date: calendar_date
    type: TransactionType
    category: str = Field(min_length=1, max_length=100)
    description: str = Field("", max_length=500)
    amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)

    # Runs before the length checks, so a blank category is rejected
    @field_validator("category", "description", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return value.strip() if isinstance(value, str) else value


class TransactionUpdateRequest(BaseModel):
    """Request body for PATCH /transactions/{id}. Only sent fields change."""
    date: calendar_date | None = None
    type: TransactionType | None = None
    category: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    amount: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)

    @field_validator("category", "description", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return value.strip() if isinstance(value, str) else value


class TransactionResponse(BaseModel):
    """Public representation of a transaction."""
    id: uuid.UUID
    date: calendar_date
    type: str
    category: str
    description: str
    amount: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BulkDeleteResponse(BaseModel):
    """Response body for DELETE /transactions (clear all data)."""
    deleted_count: int

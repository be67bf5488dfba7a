"""Profile bodies for /users/me. The password hash never leaves the model."""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class ProfileResponse(BaseModel):
    id: uuid.UUID
    email: EmailStr
    name: str | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ProfileUpdateRequest(BaseModel):
    name: str | None = Field(None, max_length=100)

    model_config = {"extra": "forbid"}

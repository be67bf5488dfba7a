"""Request and response bodies for /auth."""

import uuid

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    name: str | None = Field(None, max_length=100)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class SignupResponse(TokenResponse):
    """The new user's identity plus a token, so signup doubles as login."""
    user_id: uuid.UUID
    email: str
    name: str | None

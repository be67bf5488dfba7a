"""
Auth router. Public endpoints; everything else needs a bearer token.

  POST /auth/signup  Create a user and return a token
  POST /auth/login   Exchange email and password for a token
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.auth import LoginRequest, SignupRequest, SignupResponse, TokenResponse
from app.services import auth_service

router = APIRouter()


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def signup(request: SignupRequest, db: AsyncSession = Depends(get_db)):
    """
    The returned token is immediately usable, so the client can go straight
    to the dashboard. A registered email returns 409.
    """
    user, token = await auth_service.signup(
        db=db,
        email=request.email,
        password=request.password,
        name=request.name,
    )
    return SignupResponse(user_id=user.id, email=user.email, name=user.name, token=token)


@router.post("/login", response_model=TokenResponse, summary="Get a bearer token")
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Send the token back as `Authorization: Bearer <token>`."""
    _, token = await auth_service.login(db=db, email=request.email, password=request.password)
    return TokenResponse(token=token)

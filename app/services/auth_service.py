"""
Account service: signup, login and profile edits.

A user owns every transaction and category they create, so this is the
only place where users are created. Login failures are indistinguishable
(unknown email, wrong password, deactivated user) so emails cannot be
probed through the login form.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DuplicateEmailError, InvalidCredentialsError
from app.models.user import User
from app.security import create_access_token, hash_password, verify_password

logger = structlog.get_logger()


async def _find_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def signup(
    db: AsyncSession,
    email: str,
    password: str,
    name: str | None = None,
) -> tuple[User, str]:
    """
    Register a user and log them in.

    Returns:
        The new User and a bearer token for it.

    Raises:
        DuplicateEmailError: If the email is already registered.
    """
    if await _find_by_email(db, email) is not None:
        raise DuplicateEmailError(email)

    user = User(email=email, name=name, hashed_password=hash_password(password))
    db.add(user)
    await db.flush()

    logger.info("user_signed_up", user_id=str(user.id))
    return user, create_access_token(user.id)


async def login(db: AsyncSession, email: str, password: str) -> tuple[User, str]:
    """
    Raises:
        InvalidCredentialsError: For any failed attempt.
    """
    user = await _find_by_email(db, email)
    if user is None or not user.is_active or not verify_password(password, user.hashed_password):
        logger.info("login_failed")
        raise InvalidCredentialsError()

    logger.info("user_logged_in", user_id=str(user.id))
    return user, create_access_token(user.id)


async def update_profile(db: AsyncSession, user: User, changes: dict) -> User:
    """Apply the fields the client sent; the email is not editable."""
    for field, value in changes.items():
        setattr(user, field, value)

    await db.flush()
    await db.refresh(user)
    return user

"""
Category model: a user-defined label for income or expense entries.

Categories are only used for labelling and filtering. Transactions store
the category name as plain text, so there is no foreign key between the
two tables and deleting a category leaves existing transactions intact.

PRESET_CATEGORIES are offered to every user on top of their own.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

PRESET_CATEGORIES: dict[str, list[str]] = {
    "income": ["Salary", "Freelance", "Sales", "Investments", "Other"],
    "expense": ["Food", "Transport", "Housing", "Health", "Education", "Leisure", "Other"],
}


class Category(Base):
    __tablename__ = "categories"

    __table_args__ = (
        UniqueConstraint("user_id", "name", "type", name="uq_categories_user_name_type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    # "income" or "expense"
    type: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

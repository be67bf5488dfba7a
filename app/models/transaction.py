"""
Transaction model: one income or expense entry of a user's cash flow.

Key fields:
  - type: "income" or "expense", the direction of the money flow
  - amount: Always non-negative; the sign is implied by the type
  - date: The calendar day the entry happened (no time component)
  - category: Free text. Not a foreign key: users may type any label,
    and deleting a category never touches existing transactions

Why amount is never negative:
  Storing a non-negative amount with a separate type field is clearer than
  signed values. Balances are always income total minus expense total.
"""

import uuid
from datetime import date as calendar_date, datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, ForeignKey, Numeric, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_transactions_non_negative_amount"),
        CheckConstraint(
            "type IN ('income', 'expense')", name="ck_transactions_type"
        ),
        # Most reads are "this user's transactions in a date range"
        Index("ix_transactions_user_date", "user_id", "date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    # Owner: every query and mutation is scoped to this value
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date: Mapped[calendar_date] = mapped_column(
        Date,
        nullable=False,
    )

    # "income" or "expense"
    type: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
    )

    category: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default="",
    )

    # Single currency, two decimal places
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

"""
SQLAlchemy ORM models package.

All models are imported here so that Base.metadata knows every table
before create_all() runs, and other modules can import from app.models.
"""

from app.models.user import User  # noqa: F401
from app.models.transaction import Transaction  # noqa: F401
from app.models.category import Category  # noqa: F401

"""Base model class for the person service.

Timestamps are set by the database so rows written by other tooling carry the
same values as rows written here.
"""

from sqlalchemy import Column, func
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import declarative_mixin

# Import Base from the database module to avoid duplicate declarations
from ..core.database import Base


@declarative_mixin
class TimestampMixin:
    """Mixin for adding server-maintained timestamp columns to models."""

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)


__all__ = ["Base", "TimestampMixin"]

"""Key-value entry model."""

from sqlalchemy import Column, String

from .base import Base, TimestampMixin


class KeyValue(Base, TimestampMixin):
    """A plain string value stored under a unique string key."""

    __tablename__ = "key_value"

    key = Column(String(255), primary_key=True)
    value = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<KeyValue(key={self.key})>"

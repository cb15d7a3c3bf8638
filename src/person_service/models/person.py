"""Person model.

Persons are provisioned out of band; this service only reads them to scope
attribute operations.
"""

from sqlalchemy import Column, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class Person(Base, TimestampMixin):
    __tablename__ = "person"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    client_id = Column(String, nullable=True)

    # Deletion is cascaded by the FK; the ORM must not try to null out children
    attributes = relationship("PersonAttribute", back_populates="person", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Person(id={self.id})>"

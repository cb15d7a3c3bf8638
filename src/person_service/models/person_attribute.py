"""Encrypted person attribute model."""

from sqlalchemy import Column, ForeignKey, Integer, LargeBinary, UniqueConstraint
from sqlalchemy.dialects.postgresql import CITEXT, UUID
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class PersonAttribute(Base, TimestampMixin):
    """A named value owned by a person.

    ``encrypted_value`` holds ``pgp_sym_encrypt`` output; plaintext never lands
    in the table. ``attribute_key`` is CITEXT so the per-person uniqueness is
    case-insensitive.
    """

    __tablename__ = "person_attributes"
    __table_args__ = (UniqueConstraint("person_id", "attribute_key", name="uq_person_attributes_person_key"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    person_id = Column(UUID(as_uuid=True), ForeignKey("person.id", ondelete="CASCADE"), nullable=False, index=True)
    attribute_key = Column(CITEXT, nullable=False)
    encrypted_value = Column(LargeBinary, nullable=False)
    key_version = Column(Integer, nullable=False, default=1)

    person = relationship("Person", back_populates="attributes")

    def __repr__(self) -> str:
        return f"<PersonAttribute(id={self.id}, person_id={self.person_id}, key={self.attribute_key})>"

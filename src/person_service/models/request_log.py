"""Audit trail of attribute writes."""

from sqlalchemy import Column, Integer, LargeBinary, String, func
from sqlalchemy.dialects.postgresql import TIMESTAMP

from .base import Base


class RequestLog(Base):
    """Append-only audit row; request and response bodies are stored encrypted."""

    __tablename__ = "request_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trace_id = Column(String, nullable=False, index=True)
    caller = Column(String, nullable=True)
    reason = Column(String, nullable=True)
    encrypted_request_body = Column(LargeBinary, nullable=True)
    encrypted_response_body = Column(LargeBinary, nullable=True)
    key_version = Column(Integer, nullable=False, default=1)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<RequestLog(id={self.id}, trace_id={self.trace_id})>"

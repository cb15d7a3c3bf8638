"""Pydantic schemas for the person-attributes API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class RequestMeta(BaseModel):
    """Caller-supplied audit metadata."""

    caller: StrictStr | None = None
    reason: StrictStr | None = None
    trace_id: StrictStr | None = Field(None, alias="traceId")

    model_config = ConfigDict(populate_by_name=True)


class AttributeWriteRequest(BaseModel):
    """Body shared by attribute create and update.

    Create requires ``key`` and ``meta``; update treats an empty ``key`` as
    "keep the existing key". Presence rules live in the service so each
    route can report its own error code.
    """

    key: StrictStr | None = None
    value: StrictStr | None = None
    meta: RequestMeta | None = None


class AttributeResponse(BaseModel):
    """A decrypted attribute as returned to clients."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    key: str
    value: str
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")

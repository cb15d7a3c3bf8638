"""Pydantic schemas for the key-value API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class KeyValueSetRequest(BaseModel):
    """Body of ``POST /api/key-value``.

    Both fields are optional at the schema level so that a missing field is
    reported as a missing key/value rather than as a malformed body.
    """

    key: StrictStr | None = None
    value: StrictStr | None = None


class KeyValueResponse(BaseModel):
    """A stored key-value record."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    value: str
    created_at: datetime = Field(..., description="First write time")
    updated_at: datetime = Field(..., description="Most recent write time")

"""FastAPI dependencies for the person service.

Request-scoped sessions, the persistence gateway and the resource services
are built here so tests can swap any layer with ``dependency_overrides``.
"""

import json
from collections.abc import AsyncGenerator
from typing import TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db as core_get_db
from ..core.encryption import EncryptionContext, get_encryption_context
from ..core.exceptions import ValidationError
from ..services.key_value_service import KeyValueService
from ..services.person_attribute_service import PersonAttributeService
from ..services.queries import Queries

BodyModel = TypeVar("BodyModel", bound=BaseModel)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency."""
    async for session in core_get_db():
        yield session


def get_queries(db: AsyncSession = Depends(get_db)) -> Queries:
    return Queries(db)


def get_key_value_service(queries: Queries = Depends(get_queries)) -> KeyValueService:
    return KeyValueService(queries)


def get_person_attribute_service(
    queries: Queries = Depends(get_queries),
    encryption: EncryptionContext = Depends(get_encryption_context),
) -> PersonAttributeService:
    return PersonAttributeService(queries, encryption)


async def read_json_body(request: Request, model: type[BodyModel], error_code: str) -> BodyModel:
    """Parse the request body as a JSON object into ``model``.

    An empty body is treated as ``{}`` so missing fields are reported by the
    caller's own presence checks. Anything else that is not a JSON object
    matching the model's types raises ``ValidationError`` with ``error_code``.
    """
    raw = await request.body()
    if not raw.strip():
        return model()
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise ValidationError("Invalid request body", error_code) from e
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body", error_code)
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError("Invalid request body", error_code, details={"errors": e.errors()}) from e

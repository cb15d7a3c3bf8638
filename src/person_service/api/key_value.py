"""Key-value API endpoints.

Unauthenticated string storage under ``/api/key-value``.
"""

from fastapi import APIRouter, Depends, Request

from ..core import error_codes
from ..core.exceptions import ValidationError
from ..core.logging import get_logger
from ..core.response import ServiceResponse
from ..schemas.key_value import KeyValueResponse, KeyValueSetRequest
from ..services.key_value_service import KeyValueService
from .dependencies import get_key_value_service, read_json_body

logger = get_logger(__name__)
router = APIRouter(prefix="/api/key-value", tags=["key-value"])


@router.post("", summary="Set a value", response_model=KeyValueResponse)
async def set_value(request: Request, service: KeyValueService = Depends(get_key_value_service)):
    body = await read_json_body(request, KeyValueSetRequest, error_codes.KV_INVALID_REQUEST_BODY)
    entry = await service.set_value(body.key, body.value)
    return ServiceResponse.success(KeyValueResponse.model_validate(entry))


@router.get("/{key}", summary="Get a value", response_model=KeyValueResponse)
async def get_value(key: str, service: KeyValueService = Depends(get_key_value_service)):
    entry = await service.get_value(key)
    return ServiceResponse.success(KeyValueResponse.model_validate(entry))


@router.delete("/{key}", summary="Delete a value")
async def delete_value(key: str, service: KeyValueService = Depends(get_key_value_service)):
    await service.delete_value(key)
    logger.debug("Key deleted", extra={"key": key})
    return ServiceResponse.message("Key deleted successfully")


# An empty key segment would otherwise fall through to an unknown-route 404
@router.get("/", include_in_schema=False)
@router.delete("/", include_in_schema=False)
async def missing_key():
    raise ValidationError("Key parameter is required", error_codes.KV_MISSING_KEY_PARAM)

"""Person attributes API endpoints.

Encrypted, per-person named attributes. Every route sits behind the API key
gate. Path parameters are validated first, then the body, then the person's
existence.
"""

import re
import uuid

from fastapi import APIRouter, Depends, Request

from ..auth.api_key import require_api_key
from ..core import error_codes
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..core.response import ServiceResponse
from ..schemas.person_attribute import AttributeResponse, AttributeWriteRequest
from ..services.person_attribute_service import PersonAttributeService
from .dependencies import get_person_attribute_service, read_json_body

logger = get_logger(__name__)
router = APIRouter(prefix="/persons", tags=["person-attributes"], dependencies=[Depends(require_api_key)])

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_ATTRIBUTE_ID_RE = re.compile(r"^[+-]?[0-9]+$")
# Canonical dashed form or 32 bare hex digits; no braces or urn prefix
_PERSON_ID_RE = re.compile(
    r"^(?:[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
    r"|[0-9a-fA-F]{32})$"
)


def _parse_person_id(raw: str) -> uuid.UUID | None:
    if _PERSON_ID_RE.fullmatch(raw) is None:
        return None
    return uuid.UUID(raw)


def parse_collection_person_id(raw: str) -> uuid.UUID:
    """Parse the person id of a collection route; bad input reads as an unknown person."""
    parsed = _parse_person_id(raw)
    if parsed is None:
        raise NotFoundError("Person not found", error_codes.PA_INVALID_PERSON_ID)
    return parsed


def parse_item_person_id(raw: str) -> uuid.UUID:
    """Parse the person id of a single-attribute route; bad input is a format error."""
    parsed = _parse_person_id(raw)
    if parsed is None:
        raise ValidationError("Invalid person ID format", error_codes.PA_INVALID_PERSON_ID)
    return parsed


def parse_attribute_id(raw: str) -> int:
    """Parse a signed 32-bit decimal attribute id."""
    if _ATTRIBUTE_ID_RE.fullmatch(raw):
        value = int(raw)
        if _INT32_MIN <= value <= _INT32_MAX:
            return value
    raise ValidationError("Invalid attribute ID format", error_codes.PA_INVALID_ATTRIBUTE_ID_FORMAT)


@router.api_route(
    "/{person_id}/attributes",
    methods=["POST", "PUT"],
    status_code=201,
    response_model=AttributeResponse,
    summary="Create or overwrite an attribute",
)
async def create_attribute(
    person_id: str,
    request: Request,
    service: PersonAttributeService = Depends(get_person_attribute_service),
):
    parsed_person_id = parse_collection_person_id(person_id)
    body = await read_json_body(request, AttributeWriteRequest, error_codes.PA_INVALID_REQUEST_BODY)
    attribute = await service.create_attribute(parsed_person_id, body)
    return ServiceResponse.created(attribute)


@router.get("/{person_id}/attributes", response_model=list[AttributeResponse], summary="List attributes")
async def list_attributes(
    person_id: str,
    service: PersonAttributeService = Depends(get_person_attribute_service),
):
    attributes = await service.list_attributes(parse_collection_person_id(person_id))
    return ServiceResponse.success(attributes)


@router.get("/{person_id}/attributes/{attribute_id}", response_model=AttributeResponse, summary="Get an attribute")
async def get_attribute(
    person_id: str,
    attribute_id: str,
    service: PersonAttributeService = Depends(get_person_attribute_service),
):
    parsed_person_id = parse_item_person_id(person_id)
    parsed_attribute_id = parse_attribute_id(attribute_id)
    attribute = await service.get_attribute(parsed_person_id, parsed_attribute_id)
    return ServiceResponse.success(attribute)


@router.put(
    "/{person_id}/attributes/{attribute_id}",
    response_model=AttributeResponse,
    summary="Update or rename an attribute",
)
async def update_attribute(
    person_id: str,
    attribute_id: str,
    request: Request,
    service: PersonAttributeService = Depends(get_person_attribute_service),
):
    parsed_person_id = parse_item_person_id(person_id)
    parsed_attribute_id = parse_attribute_id(attribute_id)
    body = await read_json_body(request, AttributeWriteRequest, error_codes.PA_INVALID_REQUEST_BODY)
    attribute = await service.update_attribute(parsed_person_id, parsed_attribute_id, body)
    return ServiceResponse.success(attribute)


@router.delete("/{person_id}/attributes/{attribute_id}", summary="Delete an attribute")
async def delete_attribute(
    person_id: str,
    attribute_id: str,
    service: PersonAttributeService = Depends(get_person_attribute_service),
):
    parsed_person_id = parse_item_person_id(person_id)
    parsed_attribute_id = parse_attribute_id(attribute_id)
    await service.delete_attribute(parsed_person_id, parsed_attribute_id)
    return ServiceResponse.message("Attribute deleted successfully")

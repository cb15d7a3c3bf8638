"""Person-attribute resource service.

Attribute values are encrypted and decrypted in SQL with the configured
symmetric key. Mutations that carry a ``meta.traceId`` also attempt an audit
record; audit failures are logged and never fail the request.
"""

import json
import uuid

from ..core import error_codes
from ..core.encryption import EncryptionContext
from ..core.exceptions import AuditError, InternalError, NotFoundError, ValidationError
from ..core.logging import get_logger
from ..schemas.person_attribute import AttributeResponse, AttributeWriteRequest, RequestMeta
from .queries import STORE_ERRORS, DecryptedAttribute, Queries

logger = get_logger(__name__)


def to_response(attribute: DecryptedAttribute) -> AttributeResponse:
    return AttributeResponse(
        id=attribute.id,
        key=attribute.attribute_key,
        value=attribute.attribute_value,
        created_at=attribute.created_at,
        updated_at=attribute.updated_at,
    )


class PersonAttributeService:
    """CRUD of encrypted attributes scoped to one person."""

    def __init__(self, queries: Queries, encryption: EncryptionContext):
        self.queries = queries
        self.encryption = encryption

    async def _verify_person(self, person_id: uuid.UUID) -> None:
        try:
            found = await self.queries.get_person_by_id(person_id)
        except STORE_ERRORS as e:
            logger.error("Failed to verify person", extra={"person_id": str(person_id), "error": str(e)})
            raise InternalError("Failed to verify person", error_codes.PA_FAILED_VERIFY_PERSON) from e
        if found is None:
            raise NotFoundError("Person not found", error_codes.PA_PERSON_NOT_FOUND)

    async def _find_by_id(self, person_id: uuid.UUID, attribute_id: int) -> DecryptedAttribute:
        try:
            attribute = await self.queries.get_person_attribute_by_id(person_id, attribute_id, self.encryption.key)
        except STORE_ERRORS as e:
            logger.error(
                "Failed to retrieve attributes",
                extra={"person_id": str(person_id), "attribute_id": attribute_id, "error": str(e)},
            )
            raise InternalError("Failed to retrieve attributes", error_codes.PA_FAILED_RETRIEVE_ATTRIBUTES) from e
        if attribute is None:
            raise NotFoundError("Attribute not found", error_codes.PA_ATTRIBUTE_NOT_FOUND)
        return attribute

    async def _upsert(self, person_id: uuid.UUID, key: str, value: str) -> int:
        return await self.queries.create_or_update_person_attribute(
            person_id, key, value, self.encryption.key, self.encryption.key_version
        )

    async def _audit(self, meta: RequestMeta | None, key: str, value: str) -> None:
        """Write an audit record when the caller supplied a trace id.

        Never raises: a failed audit is logged at warning level and dropped.
        """
        if meta is None or not meta.trace_id:
            return

        request_body = json.dumps({"key": key, "value": value}, separators=(",", ":"))
        try:
            await self.queries.insert_request_log(
                trace_id=meta.trace_id,
                caller=meta.caller,
                reason=meta.reason,
                request_body=request_body,
                response_body="",
                enc_key=self.encryption.key,
                key_version=self.encryption.key_version,
            )
        except Exception as e:
            audit_error = AuditError(meta.trace_id, str(e), error_codes.PA_FAILED_AUDIT_LOG)
            logger.warning(
                audit_error.message,
                extra={
                    "error_code": audit_error.error_code,
                    "trace_id": meta.trace_id,
                    "exception_type": type(e).__name__,
                },
            )

    async def create_attribute(self, person_id: uuid.UUID, body: AttributeWriteRequest) -> AttributeResponse:
        """Create or overwrite the attribute named ``body.key``."""
        if not body.key:
            raise ValidationError("Key is required", error_codes.PA_MISSING_KEY)
        if body.meta is None:
            raise ValidationError('Missing required field "meta"', error_codes.PA_MISSING_META)

        await self._verify_person(person_id)

        value = body.value or ""
        try:
            attribute_id = await self._upsert(person_id, body.key, value)
        except STORE_ERRORS as e:
            logger.error("Failed to create attribute", extra={"person_id": str(person_id), "error": str(e)})
            raise InternalError("Failed to create attribute", error_codes.PA_FAILED_CREATE_ATTRIBUTE) from e

        await self._audit(body.meta, body.key, value)

        try:
            attribute = await self.queries.get_person_attribute(person_id, body.key, self.encryption.key)
        except STORE_ERRORS as e:
            logger.error(
                "Failed to retrieve created attribute",
                extra={"person_id": str(person_id), "attribute_id": attribute_id, "error": str(e)},
            )
            raise InternalError("Failed to retrieve attribute", error_codes.PA_FAILED_RETRIEVE_ATTRIBUTE) from e
        if attribute is None:
            raise InternalError("Failed to retrieve attribute", error_codes.PA_FAILED_RETRIEVE_ATTRIBUTE)

        logger.info("Attribute written", extra={"person_id": str(person_id), "attribute_id": attribute.id})
        return to_response(attribute)

    async def list_attributes(self, person_id: uuid.UUID) -> list[AttributeResponse]:
        await self._verify_person(person_id)
        try:
            attributes = await self.queries.get_all_person_attributes(person_id, self.encryption.key)
        except STORE_ERRORS as e:
            logger.error("Failed to retrieve attributes", extra={"person_id": str(person_id), "error": str(e)})
            raise InternalError("Failed to retrieve attributes", error_codes.PA_FAILED_RETRIEVE_ATTRIBUTES) from e
        return [to_response(attribute) for attribute in attributes]

    async def get_attribute(self, person_id: uuid.UUID, attribute_id: int) -> AttributeResponse:
        await self._verify_person(person_id)
        return to_response(await self._find_by_id(person_id, attribute_id))

    async def update_attribute(
        self, person_id: uuid.UUID, attribute_id: int, body: AttributeWriteRequest
    ) -> AttributeResponse:
        """Update an attribute's value, renaming it when a different key is given.

        A rename deletes the old row and upserts under the new key as two
        separate commits; a failure between them leaves the attribute deleted.
        """
        await self._verify_person(person_id)
        existing = await self._find_by_id(person_id, attribute_id)

        effective_key = existing.attribute_key
        if body.key and body.key != existing.attribute_key:
            try:
                await self.queries.delete_person_attribute(person_id, existing.attribute_key)
            except STORE_ERRORS as e:
                logger.error(
                    "Failed to remove attribute under its old key",
                    extra={"person_id": str(person_id), "attribute_id": attribute_id, "error": str(e)},
                )
                raise InternalError("Failed to update attribute key", error_codes.PA_FAILED_UPDATE_KEY) from e
            effective_key = body.key

        value = body.value or ""
        try:
            await self._upsert(person_id, effective_key, value)
        except STORE_ERRORS as e:
            logger.error(
                "Failed to update attribute",
                extra={"person_id": str(person_id), "attribute_id": attribute_id, "error": str(e)},
            )
            raise InternalError("Failed to update attribute", error_codes.PA_FAILED_UPDATE_ATTRIBUTE) from e

        await self._audit(body.meta, effective_key, value)

        try:
            attribute = await self.queries.get_person_attribute(person_id, effective_key, self.encryption.key)
        except STORE_ERRORS as e:
            logger.error("Failed to retrieve updated attribute", extra={"person_id": str(person_id), "error": str(e)})
            raise InternalError("Failed to retrieve updated attribute", error_codes.PA_FAILED_RETRIEVE_UPDATED) from e
        if attribute is None:
            raise InternalError("Failed to retrieve updated attribute", error_codes.PA_FAILED_RETRIEVE_UPDATED)
        return to_response(attribute)

    async def delete_attribute(self, person_id: uuid.UUID, attribute_id: int) -> None:
        await self._verify_person(person_id)
        existing = await self._find_by_id(person_id, attribute_id)
        try:
            await self.queries.delete_person_attribute(person_id, existing.attribute_key)
        except STORE_ERRORS as e:
            logger.error(
                "Failed to delete attribute",
                extra={"person_id": str(person_id), "attribute_id": attribute_id, "error": str(e)},
            )
            raise InternalError("Failed to delete attribute", error_codes.PA_FAILED_DELETE_ATTRIBUTE) from e
        logger.info("Attribute deleted", extra={"person_id": str(person_id), "attribute_id": attribute_id})

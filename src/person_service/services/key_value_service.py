"""Key-value resource service."""

from ..core import error_codes
from ..core.exceptions import InternalError, NotFoundError, ValidationError
from ..core.logging import get_logger
from ..models.key_value import KeyValue
from .queries import STORE_ERRORS, Queries

logger = get_logger(__name__)


class KeyValueService:
    """Set, get and delete plain string values by key."""

    def __init__(self, queries: Queries):
        self.queries = queries

    async def set_value(self, key: str | None, value: str | None) -> KeyValue:
        """Upsert ``key`` and return the stored record."""
        if not key or not value:
            raise ValidationError("Key and value are required", error_codes.KV_MISSING_KEY_OR_VALUE)

        try:
            await self.queries.set_value(key, value)
        except STORE_ERRORS as e:
            logger.error("Failed to set value", extra={"key": key, "error": str(e)})
            raise InternalError("Failed to set value", error_codes.KV_FAILED_SET_VALUE) from e

        try:
            entry = await self.queries.get_key_value(key)
        except STORE_ERRORS as e:
            logger.error("Failed to read back value", extra={"key": key, "error": str(e)})
            raise InternalError("Failed to retrieve value", error_codes.KV_FAILED_RETRIEVE_VALUE) from e
        if entry is None:
            raise InternalError("Failed to retrieve value", error_codes.KV_FAILED_RETRIEVE_VALUE)
        return entry

    async def get_value(self, key: str) -> KeyValue:
        if not key:
            raise ValidationError("Key parameter is required", error_codes.KV_MISSING_KEY_PARAM)

        try:
            entry = await self.queries.get_key_value(key)
        except STORE_ERRORS as e:
            logger.error("Failed to retrieve value", extra={"key": key, "error": str(e)})
            raise InternalError("Failed to retrieve value", error_codes.KV_FAILED_RETRIEVE_VALUE) from e
        if entry is None:
            raise NotFoundError("Key not found", error_codes.KV_KEY_NOT_FOUND)
        return entry

    async def delete_value(self, key: str) -> None:
        """Delete ``key``; deleting an absent key is not an error."""
        if not key:
            raise ValidationError("Key parameter is required", error_codes.KV_MISSING_KEY_PARAM)

        try:
            await self.queries.delete_value(key)
        except STORE_ERRORS as e:
            logger.error("Failed to delete value", extra={"key": key, "error": str(e)})
            raise InternalError("Failed to delete value", error_codes.KV_FAILED_DELETE_VALUE) from e

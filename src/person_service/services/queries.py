"""Persistence gateway for the person service.

One method per statement the service issues. Encryption and decryption happen
inside Postgres (``pgp_sym_encrypt`` / ``pgp_sym_decrypt``); the symmetric key
travels only as a bound parameter. Write methods commit; on a database error
they roll the session back and re-raise for the calling service to translate.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import LargeBinary, Text, delete, func, select, text
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..models.key_value import KeyValue
from ..models.person import Person
from ..models.person_attribute import PersonAttribute
from ..models.request_log import RequestLog

logger = get_logger(__name__)

# asyncpg connect and socket failures reach callers as OSError, unwrapped by SQLAlchemy
STORE_ERRORS = (SQLAlchemyError, OSError)


@dataclass
class DecryptedAttribute:
    """An attribute row with its value decrypted."""

    id: int
    attribute_key: str
    attribute_value: str
    created_at: datetime | None
    updated_at: datetime | None


def _encrypt(value: str, enc_key: str):
    return func.pgp_sym_encrypt(value, enc_key, type_=LargeBinary)


def _decrypt(column, enc_key: str):
    return func.pgp_sym_decrypt(column, enc_key, type_=Text)


class Queries:
    """Typed statements against the person service schema."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _write(self, stmt):
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except STORE_ERRORS:
            await self.db.rollback()
            raise
        return result

    async def _read(self, stmt):
        try:
            return await self.db.execute(stmt)
        except STORE_ERRORS:
            # Leave the session usable for the next statement in this request
            await self.db.rollback()
            raise

    # Health

    async def health_check(self) -> None:
        await self._read(text("SELECT 1"))

    # Key-value

    async def set_value(self, key: str, value: str) -> None:
        stmt = (
            insert(KeyValue)
            .values(key=key, value=value)
            .on_conflict_do_update(
                index_elements=[KeyValue.key],
                set_={"value": value, "updated_at": func.now()},
            )
        )
        await self._write(stmt)

    async def get_key_value(self, key: str) -> KeyValue | None:
        stmt = select(KeyValue).where(KeyValue.key == key).execution_options(populate_existing=True)
        result = await self._read(stmt)
        return result.scalar_one_or_none()

    async def delete_value(self, key: str) -> None:
        await self._write(delete(KeyValue).where(KeyValue.key == key))

    # Persons

    async def get_person_by_id(self, person_id: uuid.UUID) -> uuid.UUID | None:
        result = await self._read(select(Person.id).where(Person.id == person_id))
        return result.scalar_one_or_none()

    # Person attributes

    async def create_or_update_person_attribute(
        self,
        person_id: uuid.UUID,
        attribute_key: str,
        attribute_value: str,
        enc_key: str,
        key_version: int,
    ) -> int:
        """Upsert one attribute and return its id.

        A conflict on (person_id, attribute_key) overwrites the ciphertext and
        key version, refreshes ``updated_at`` and keeps the row id.
        """
        stmt = insert(PersonAttribute).values(
            person_id=person_id,
            attribute_key=attribute_key,
            encrypted_value=_encrypt(attribute_value, enc_key),
            key_version=key_version,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_person_attributes_person_key",
            set_={
                "encrypted_value": stmt.excluded.encrypted_value,
                "key_version": stmt.excluded.key_version,
                "updated_at": func.now(),
            },
        ).returning(PersonAttribute.id)
        try:
            result = await self.db.execute(stmt)
            attribute_id = result.scalar_one()
            await self.db.commit()
        except STORE_ERRORS:
            await self.db.rollback()
            raise
        return attribute_id

    def _decrypted_attributes(self, enc_key: str):
        return select(
            PersonAttribute.id,
            PersonAttribute.attribute_key,
            _decrypt(PersonAttribute.encrypted_value, enc_key).label("attribute_value"),
            PersonAttribute.created_at,
            PersonAttribute.updated_at,
        )

    async def get_person_attribute(
        self, person_id: uuid.UUID, attribute_key: str, enc_key: str
    ) -> DecryptedAttribute | None:
        stmt = self._decrypted_attributes(enc_key).where(
            PersonAttribute.person_id == person_id,
            PersonAttribute.attribute_key == attribute_key,
        )
        row = (await self._read(stmt)).one_or_none()
        return DecryptedAttribute(*row) if row is not None else None

    async def get_person_attribute_by_id(
        self, person_id: uuid.UUID, attribute_id: int, enc_key: str
    ) -> DecryptedAttribute | None:
        stmt = self._decrypted_attributes(enc_key).where(
            PersonAttribute.person_id == person_id,
            PersonAttribute.id == attribute_id,
        )
        row = (await self._read(stmt)).one_or_none()
        return DecryptedAttribute(*row) if row is not None else None

    async def get_all_person_attributes(self, person_id: uuid.UUID, enc_key: str) -> list[DecryptedAttribute]:
        stmt = (
            self._decrypted_attributes(enc_key)
            .where(PersonAttribute.person_id == person_id)
            .order_by(PersonAttribute.id)
        )
        result = await self._read(stmt)
        return [DecryptedAttribute(*row) for row in result.all()]

    async def delete_person_attribute(self, person_id: uuid.UUID, attribute_key: str) -> None:
        stmt = delete(PersonAttribute).where(
            PersonAttribute.person_id == person_id,
            PersonAttribute.attribute_key == attribute_key,
        )
        await self._write(stmt)

    # Audit

    async def insert_request_log(
        self,
        trace_id: str,
        caller: str | None,
        reason: str | None,
        request_body: str,
        response_body: str,
        enc_key: str,
        key_version: int,
    ) -> int:
        stmt = (
            insert(RequestLog)
            .values(
                trace_id=trace_id,
                caller=caller,
                reason=reason,
                encrypted_request_body=_encrypt(request_body, enc_key),
                encrypted_response_body=_encrypt(response_body, enc_key),
                key_version=key_version,
            )
            .returning(RequestLog.id)
        )
        try:
            result = await self.db.execute(stmt)
            log_id = result.scalar_one()
            await self.db.commit()
        except STORE_ERRORS:
            await self.db.rollback()
            raise
        logger.debug("Audit record written", extra={"trace_id": trace_id, "request_log_id": log_id})
        return log_id

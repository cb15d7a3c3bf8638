"""API key gate for the person-attributes routes.

Clients present ``x-api-key``. Accepted keys come from an ordered list of
named credential slots (blue/green today) so a key can be rotated by filling
the idle slot, moving clients over, then clearing the old slot.
"""

import re
import secrets
from collections.abc import Iterable
from dataclasses import dataclass

from fastapi import Depends, Request

from ..core import error_codes
from ..core.config import Settings, get_settings_instance
from ..core.exceptions import AuthenticationError, ServiceUnavailableError
from ..core.logging import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "x-api-key"

API_KEY_PATTERN = re.compile(
    r"^person-service-key-[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def is_well_formed(key: str | None) -> bool:
    return bool(key) and API_KEY_PATTERN.fullmatch(key) is not None


@dataclass(frozen=True)
class CredentialSlot:
    """A named place an accepted API key can be configured."""

    name: str
    value: str | None

    @property
    def active(self) -> bool:
        """A slot only counts when its value is itself a well-formed key."""
        return is_well_formed(self.value)

    def __repr__(self) -> str:
        return f"CredentialSlot(name={self.name!r}, active={self.active})"


class APIKeyGate:
    """Stateless check of a presented key against the configured slots."""

    def __init__(self, slots: Iterable[CredentialSlot]):
        self.slots = list(slots)

    @classmethod
    def from_settings(cls, settings: Settings) -> "APIKeyGate":
        return cls(CredentialSlot(name, value) for name, value in settings.api_key_slots)

    def verify(self, presented: str | None) -> CredentialSlot:
        """Return the slot that accepted ``presented``.

        Raises:
            AuthenticationError: header missing, malformed, or not an accepted key
            ServiceUnavailableError: no slot holds a well-formed key

        """
        if not presented:
            raise AuthenticationError(f'Missing required header "{API_KEY_HEADER}"', error_codes.API_MISSING_API_KEY)

        if not is_well_formed(presented):
            raise AuthenticationError("Invalid API key format", error_codes.API_INVALID_API_KEY_FORMAT)

        active_slots = [slot for slot in self.slots if slot.active]
        if not active_slots:
            raise ServiceUnavailableError("API keys are not properly configured", error_codes.API_KEYS_NOT_CONFIGURED)

        for slot in active_slots:
            if secrets.compare_digest(presented, slot.value):
                return slot

        raise AuthenticationError("Invalid API key", error_codes.API_INVALID_API_KEY)


async def require_api_key(request: Request, settings: Settings = Depends(get_settings_instance)) -> None:
    """FastAPI dependency guarding a router with the API key gate.

    Slots are read from settings on every request.
    """
    slot = APIKeyGate.from_settings(settings).verify(request.headers.get(API_KEY_HEADER))
    request.state.api_key_slot = slot.name
    logger.debug("API key accepted", extra={"api_key_slot": slot.name})

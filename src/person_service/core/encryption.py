"""Attribute encryption context.

Attribute values and audit bodies are encrypted inside Postgres with
``pgp_sym_encrypt`` so the plaintext only ever travels as a bound query
parameter. This module carries the symmetric key and its version to the
queries that need them.
"""

from dataclasses import dataclass

from .config import DEFAULT_ENCRYPTION_KEY, get_settings_instance
from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class EncryptionContext:
    """Symmetric key and the version stamped on rows it encrypts."""

    key: str
    key_version: int

    def __repr__(self) -> str:
        return f"EncryptionContext(key=***, key_version={self.key_version})"

    @property
    def is_default_key(self) -> bool:
        return self.key == DEFAULT_ENCRYPTION_KEY


_context: EncryptionContext | None = None


def get_encryption_context() -> EncryptionContext:
    """Return the process-wide encryption context built from settings."""
    global _context  # noqa: PLW0603
    if _context is None:
        settings = get_settings_instance()
        _context = EncryptionContext(key=settings.encryption_key, key_version=settings.encryption_key_version)
        if _context.is_default_key and settings.environment == "production":
            logger.warning("ENCRYPTION_KEY_1 is not set; using the development default key")
    return _context

"""Request authentication for the person service."""

from .api_key import APIKeyGate, CredentialSlot, require_api_key

__all__ = ["APIKeyGate", "CredentialSlot", "require_api_key"]

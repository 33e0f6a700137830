"""
Credential Manager — API key lifecycle

Holds the active Gemini API key together with the client built from it.
The pair is swapped as a single tuple, so a call that takes a snapshot at
its start keeps a consistent view even if the key is rotated mid-flight.

Usage:
    from gemini_gateway.credentials import CredentialManager
    manager = CredentialManager()
    manager.set_api_key(" my-key ")
    client = manager.client_for()
"""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from google import genai

from gemini_gateway.config import Settings, settings as default_settings
from gemini_gateway.errors import InvalidCredentialError, NotConfiguredError
from gemini_gateway.logging import get_logger

logger = get_logger("credentials")

_WHITESPACE = re.compile(r"\s+")
_NON_PRINTABLE_ASCII = re.compile(r"[^\x21-\x7e]")
_VALID_KEY = re.compile(r"^[A-Za-z0-9_\-]+$")

ClientFactory = Callable[[str], Any]


def _default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def sanitize_api_key(raw: str) -> str:
    """Strip whitespace and anything outside printable ASCII (e.g. an em dash)."""
    raw = "" if raw is None else str(raw)
    cleaned = _NON_PRINTABLE_ASCII.sub("", _WHITESPACE.sub("", raw))
    if cleaned != raw:
        logger.warning(
            "Gemini API key contained whitespace or non-ASCII characters "
            "and was sanitized."
        )
    return cleaned


def validate_api_key(raw: str) -> str:
    """Sanitize a key and check it only holds URL-safe characters.

    Raises:
        InvalidCredentialError: if nothing valid is left.
    """
    cleaned = sanitize_api_key(raw)
    if not _VALID_KEY.match(cleaned):
        raise InvalidCredentialError(
            "Invalid Gemini API key: contains unsupported characters."
        )
    return cleaned


class CredentialManager:
    """Owns the process-wide API key and the provider client built from it."""

    def __init__(self, client_factory: Optional[ClientFactory] = None):
        self._client_factory = client_factory or _default_client_factory
        self._state: Optional[tuple[str, Any]] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings = default_settings,
        client_factory: Optional[ClientFactory] = None,
    ) -> "CredentialManager":
        """Build a manager, activating GEMINI_API_KEY when one is set."""
        manager = cls(client_factory=client_factory)
        if settings.GEMINI_API_KEY:
            manager.set_api_key(settings.GEMINI_API_KEY)
        return manager

    def set_api_key(self, raw: str) -> None:
        """Validate a key, build a client for it and make both active.

        Validation and client construction happen before anything is
        replaced, so a rejected key leaves the previous state in place.
        """
        api_key = validate_api_key(raw)
        client = self._client_factory(api_key)
        self._state = (api_key, client)
        logger.info("Gemini API key updated; client reinitialized.")

    def is_configured(self) -> bool:
        return self._state is not None and all(self._state)

    def snapshot(self) -> Optional[tuple[str, Any]]:
        """Return the active (key, client) pair, or None."""
        return self._state

    def client_for(self, api_key: Optional[str] = None) -> Any:
        """Resolve the client for a single call.

        A per-call key gets its own transient client that is never stored.
        """
        if api_key:
            return self._client_factory(validate_api_key(api_key))

        state = self._state
        if state is None:
            raise NotConfiguredError(
                "Gemini API key is not set. Call set_api_key() first or "
                "pass api_key for this request."
            )
        return state[1]

    def clear(self) -> None:
        """Drop the active key and client (process shutdown)."""
        self._state = None


# Process-wide key and client; GeminiGateway and get_provider default to it
credential_manager = CredentialManager.from_settings(default_settings)

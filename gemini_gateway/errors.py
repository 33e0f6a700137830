"""
Gateway Errors

Every failure the gateway surfaces derives from GatewayError, so callers
can catch the whole family or a single case.
"""

from __future__ import annotations

from typing import Optional


class GatewayError(Exception):
    """Base class for gateway failures."""


class InvalidCredentialError(GatewayError):
    """API key is empty or has unsupported characters after sanitization."""


class NotConfiguredError(GatewayError):
    """A generation call was made with no active or per-call API key."""


class AttachmentReadError(GatewayError):
    """A document attachment could not be read.

    Raised by the document reader only. The attachment resolver always
    catches it and degrades to a text part.
    """

    def __init__(self, filepath: str, reason: str):
        super().__init__(f"Could not read attachment {filepath}: {reason}")
        self.filepath = filepath
        self.reason = reason


class RemoteCallError(GatewayError):
    """The provider call failed or returned no usable text."""

    def __init__(self, message: str, model: Optional[str] = None):
        super().__init__(message)
        self.model = model


class RemoteTimeoutError(RemoteCallError):
    """The provider call did not finish before the per-call deadline."""


class InvalidJSONResponseError(GatewayError, ValueError):
    """The model was asked for JSON but returned something unparseable."""

    def __init__(self, message: str, raw: str):
        super().__init__(message)
        self.raw = raw

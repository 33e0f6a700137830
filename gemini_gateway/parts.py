"""
Content Parts

The units of request content sent to the model, in the order they are
listed. Kept free of SDK types; the provider converts them at call time.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class InlineBinaryPart:
    mime_type: str
    data: bytes

    @property
    def base64(self) -> str:
        """Standard base64 encoding of the payload, as sent on the wire."""
        return base64.b64encode(self.data).decode("ascii")


ContentPart = Union[TextPart, InlineBinaryPart]

"""
LLM Provider — Abstract Interface

All generation calls go through this interface, so application code and
tests can swap the Gemini gateway for another implementation.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from gemini_gateway.errors import InvalidJSONResponseError


class LLMProvider(ABC):
    """Abstract base for LLM providers."""

    @abstractmethod
    async def generate_text(
        self, prompt: str, options: Optional[Any] = None, **kwargs: Any,
    ) -> str:
        """Single-turn generation."""
        ...

    @abstractmethod
    async def chat_completion(
        self, messages: Sequence[Any], options: Optional[Any] = None, **kwargs: Any,
    ) -> str:
        """Reply to the last message of a conversation."""
        ...

    async def generate_json(
        self, prompt: str, options: Optional[Any] = None, **kwargs: Any,
    ) -> Any:
        """Generate with the JSON instruction and parse the response."""
        kwargs["request_json"] = True
        text = await self.generate_text(prompt, options, **kwargs)
        # Strip markdown fences if the LLM wraps JSON in ```json blocks
        cleaned = text.strip()
        if cleaned.startswith("```"):
            cleaned = cleaned.split("\n", 1)[-1].rsplit("```", 1)[0].strip()
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise InvalidJSONResponseError(
                f"LLM returned invalid JSON: {e}. Raw response: {text[:300]}",
                raw=text,
            ) from e

"""
Request Schemas

Pydantic models for gateway call options and chat messages.
Field aliases accept the camelCase names used by JavaScript callers.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One message of a conversation, in user/assistant form."""
    role: str = "user"
    content: str


class GenerationOptions(BaseModel):
    """Per-call options for generate_text / chat_completion.

    Unset temperature / max_tokens fall back to the configured defaults.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    model: Optional[str] = Field(
        None, description="Model to use. Defaults to GEMINI_MODEL.")
    temperature: Optional[float] = Field(
        None, ge=0.0, le=2.0, description="Sampling temperature.")
    max_tokens: Optional[int] = Field(
        None, ge=1, alias="maxTokens", description="Maximum output tokens.")
    request_json: bool = Field(
        False, alias="requestJson",
        description="Append the raw-JSON instruction to the prompt.")
    api_key: Optional[str] = Field(
        None, alias="apiKey",
        description="Per-call API key. Builds a client for this call only.")
    content_attachment: Any = Field(
        None, alias="contentAttachment",
        description="Plain text, or a document descriptor mapping.")

    @classmethod
    def build(
        cls, options: Any = None, **overrides: Any,
    ) -> "GenerationOptions":
        """Merge an options object or mapping with keyword overrides.

        Both sides are validated first, so camelCase and snake_case keys
        name the same field and an override always wins.
        """
        base = options if isinstance(options, cls) else cls.model_validate(options or {})
        data = base._explicit_fields()
        data.update(cls.model_validate(overrides)._explicit_fields())
        return cls.model_validate(data)

    def _explicit_fields(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}

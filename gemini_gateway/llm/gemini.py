"""
Gemini Gateway — Google Gemini API implementation.

Uses the google.genai SDK. The client comes from a CredentialManager,
so the app loads without an API key and only fails on an actual call.

Features:
- Per-call API key override (transient client, never stored)
- Inline PDF attachments with a text fallback when the file is unreadable
- Chat fallback: an explicitly requested model that fails is retried once
  with the fallback model
- Per-call deadline on every remote call
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional, Sequence

from google.genai import types

from gemini_gateway.attachments import resolve_attachment
from gemini_gateway.composer import (
    build_chat_turns,
    coerce_messages,
    compose_parts,
)
from gemini_gateway.config import Settings, settings as default_settings
from gemini_gateway.credentials import (
    CredentialManager,
    credential_manager as default_credentials,
)
from gemini_gateway.errors import RemoteCallError, RemoteTimeoutError
from gemini_gateway.llm import LLMProvider
from gemini_gateway.logging import get_logger
from gemini_gateway.parts import ContentPart, InlineBinaryPart, TextPart
from gemini_gateway.prompts import format_prompt
from gemini_gateway.schemas import GenerationOptions

logger = get_logger("llm.gemini")


def to_genai_part(part: ContentPart) -> types.Part:
    if isinstance(part, InlineBinaryPart):
        return types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
    return types.Part.from_text(text=part.text)


class GeminiGateway(LLMProvider):
    """Google Gemini gateway for text generation and chat."""

    def __init__(
        self,
        credentials: Optional[CredentialManager] = None,
        settings: Settings = default_settings,
    ):
        self.settings = settings
        self.credentials = credentials or default_credentials

    def _generation_config(
        self, options: GenerationOptions,
    ) -> types.GenerateContentConfig:
        temperature = options.temperature
        if temperature is None:
            temperature = self.settings.DEFAULT_TEMPERATURE
        return types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=options.max_tokens or self.settings.DEFAULT_MAX_TOKENS,
        )

    async def _call_model(
        self, model: str, call: Callable[[], Awaitable[Any]],
    ) -> str:
        """Run one remote call under the deadline and extract its text."""
        timeout = self.settings.REQUEST_TIMEOUT
        start = time.monotonic()
        try:
            response = await asyncio.wait_for(call(), timeout=timeout)
            text = response.text
        except asyncio.TimeoutError as e:
            raise RemoteTimeoutError(
                f"Gemini call to {model} timed out after {timeout}s", model=model,
            ) from e
        except Exception as e:
            raise RemoteCallError(
                f"Gemini call to {model} failed: {e}", model=model,
            ) from e

        if text is None:
            raise RemoteCallError(
                f"Gemini returned no text from {model} (empty or blocked response)",
                model=model,
            )
        logger.debug(
            "Gemini call succeeded",
            extra={
                "model": model,
                "duration_ms": round((time.monotonic() - start) * 1000),
            },
        )
        return text

    async def generate_text(
        self, prompt: str, options: Optional[Any] = None, **kwargs: Any,
    ) -> str:
        opts = GenerationOptions.build(options, **kwargs)
        client = self.credentials.client_for(opts.api_key)
        model = opts.model or self.settings.GEMINI_MODEL
        config = self._generation_config(opts)

        attachment_parts = await asyncio.to_thread(
            resolve_attachment, opts.content_attachment,
        )
        parts = compose_parts(
            format_prompt(prompt, opts.request_json), attachment_parts,
        )
        contents = [
            types.Content(role="user", parts=[to_genai_part(p) for p in parts]),
        ]

        try:
            return await self._call_model(
                model,
                lambda: client.aio.models.generate_content(
                    model=model, contents=contents, config=config,
                ),
            )
        except RemoteCallError as e:
            logger.error(
                "Error calling Gemini API: %s", e,
                extra={
                    "model": model,
                    "parts_count": len(parts),
                    "error_type": type(e.__cause__ or e).__name__,
                },
            )
            raise

    def _chat_models(self, options: GenerationOptions) -> list[str]:
        """Models to try in order: the requested one, then maybe the fallback."""
        fallback = self.settings.GEMINI_FALLBACK_MODEL
        if options.model and options.model != fallback:
            return [options.model, fallback]
        return [options.model or self.settings.GEMINI_MODEL]

    async def chat_completion(
        self, messages: Sequence[Any], options: Optional[Any] = None, **kwargs: Any,
    ) -> str:
        opts = GenerationOptions.build(options, **kwargs)
        client = self.credentials.client_for(opts.api_key)
        config = self._generation_config(opts)

        history, final = build_chat_turns(coerce_messages(messages), opts.request_json)

        parts: list[ContentPart] = [TextPart(final.text)]
        if final.role == "user":
            attachment_parts = await asyncio.to_thread(
                resolve_attachment, opts.content_attachment,
            )
            parts = compose_parts(final.text, attachment_parts)

        history_contents = [
            types.Content(role=turn.role, parts=[types.Part.from_text(text=turn.text)])
            for turn in history
        ]
        message = [to_genai_part(p) for p in parts]

        models = self._chat_models(opts)
        last_error: Optional[RemoteCallError] = None
        for attempt, model in enumerate(models, start=1):
            if last_error is not None:
                logger.warning(
                    "Retrying chat with fallback model %s", model,
                    extra={"model": last_error.model, "fallback_model": model},
                )

            async def send(model: str = model) -> Any:
                chat = client.aio.chats.create(
                    model=model, config=config, history=history_contents,
                )
                return await chat.send_message(message)

            try:
                return await self._call_model(model, send)
            except RemoteCallError as e:
                logger.error(
                    "Error calling Gemini Chat API: %s", e,
                    extra={
                        "model": model,
                        "attempt": attempt,
                        "history_count": len(history_contents),
                        "parts_count": len(parts),
                        "error_type": type(e.__cause__ or e).__name__,
                    },
                )
                last_error = e

        raise last_error  # type: ignore[misc]

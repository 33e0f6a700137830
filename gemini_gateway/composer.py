"""
Request Composer

Assembles the ordered content parts of a request and maps chat messages
onto the provider's user/model turn roles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from gemini_gateway.parts import ContentPart, TextPart
from gemini_gateway.prompts import format_prompt
from gemini_gateway.schemas import ChatMessage


@dataclass(frozen=True)
class ChatTurn:
    """A message translated to provider roles ("user" or "model")."""
    role: str
    text: str


def compose_parts(
    formatted_prompt: str, attachment_parts: Iterable[ContentPart] = (),
) -> list[ContentPart]:
    """Prompt first, then attachment parts, order preserved."""
    return [TextPart(formatted_prompt), *attachment_parts]


def translate_role(role: str) -> str:
    return "user" if role == "user" else "model"


def coerce_messages(messages: Iterable[Any]) -> list[ChatMessage]:
    return [
        m if isinstance(m, ChatMessage) else ChatMessage.model_validate(m)
        for m in messages
    ]


def build_chat_turns(
    messages: Sequence[ChatMessage], request_json: bool = False,
) -> tuple[list[ChatTurn], ChatTurn]:
    """Split messages into (history, final turn).

    Only the final turn gets the JSON instruction.

    Raises:
        ValueError: if there are no messages.
    """
    if not messages:
        raise ValueError("chat_completion requires at least one message")

    *earlier, last = messages
    history = [ChatTurn(translate_role(m.role), m.content) for m in earlier]
    final = ChatTurn(
        translate_role(last.role), format_prompt(last.content, request_json),
    )
    return history, final

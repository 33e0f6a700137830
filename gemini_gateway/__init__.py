"""
Gemini Gateway — LLM provider gateway

Mediates between an application and the Google Gemini API: single-turn
text generation and multi-turn chat behind one stable contract, with
runtime API key rotation, JSON-output prompting, and PDF attachments.

Public API:
  - set_api_key / is_configured: credential lifecycle of the default gateway
  - generate_text:   single-turn generation
  - chat_completion: reply to a conversation (one fallback-model retry)
  - GeminiGateway:   gateway class, for an explicit CredentialManager
  - CredentialManager: holds the active key and client
  - setup_logging:   configure the gemini_gateway log tree; call once at startup

Usage:
    import gemini_gateway
    gemini_gateway.setup_logging()
    gemini_gateway.set_api_key("my-key")
    text = await gemini_gateway.generate_text("Say hi", request_json=True)
"""

__version__ = "1.0.0"

from gemini_gateway.config import GEMINI_MODELS, Settings, settings
from gemini_gateway.credentials import (
    CredentialManager,
    credential_manager,
    sanitize_api_key,
    validate_api_key,
)
from gemini_gateway.errors import (
    GatewayError,
    InvalidCredentialError,
    NotConfiguredError,
    AttachmentReadError,
    RemoteCallError,
    RemoteTimeoutError,
    InvalidJSONResponseError,
)
from gemini_gateway.attachments import DocumentRef, PlainText, resolve_attachment
from gemini_gateway.parts import ContentPart, InlineBinaryPart, TextPart
from gemini_gateway.prompts import JSON_INSTRUCTION, format_prompt
from gemini_gateway.schemas import ChatMessage, GenerationOptions
from gemini_gateway.llm import LLMProvider
from gemini_gateway.llm.gemini import GeminiGateway
from gemini_gateway.llm.factory import get_provider
from gemini_gateway.logging import setup_logging

# Default instances, shared across the application
gateway = GeminiGateway(credentials=credential_manager, settings=settings)

set_api_key = credential_manager.set_api_key
is_configured = credential_manager.is_configured
generate_text = gateway.generate_text
chat_completion = gateway.chat_completion
generate_json = gateway.generate_json

__all__ = [
    "GEMINI_MODELS",
    "Settings",
    "settings",
    "CredentialManager",
    "sanitize_api_key",
    "validate_api_key",
    "GatewayError",
    "InvalidCredentialError",
    "NotConfiguredError",
    "AttachmentReadError",
    "RemoteCallError",
    "RemoteTimeoutError",
    "InvalidJSONResponseError",
    "DocumentRef",
    "PlainText",
    "resolve_attachment",
    "ContentPart",
    "InlineBinaryPart",
    "TextPart",
    "JSON_INSTRUCTION",
    "format_prompt",
    "ChatMessage",
    "GenerationOptions",
    "LLMProvider",
    "GeminiGateway",
    "get_provider",
    "setup_logging",
    "credential_manager",
    "gateway",
    "set_api_key",
    "is_configured",
    "generate_text",
    "chat_completion",
    "generate_json",
]

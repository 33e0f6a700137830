"""
LLM Provider — factory.
"""

from __future__ import annotations

from typing import Optional

from gemini_gateway.credentials import CredentialManager
from gemini_gateway.llm import LLMProvider


def get_provider(
    provider_name: str = "gemini",
    credentials: Optional[CredentialManager] = None,
) -> LLMProvider:
    """Factory — returns the configured LLM provider."""
    if provider_name == "gemini":
        from gemini_gateway.llm.gemini import GeminiGateway
        return GeminiGateway(credentials=credentials)
    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")

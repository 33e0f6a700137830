"""
Shared fixtures and google.genai test doubles.

The fakes record every request and reply without any network access.
"""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Optional

import pytest

from gemini_gateway.config import Settings
from gemini_gateway.credentials import CredentialManager
from gemini_gateway.llm.gemini import GeminiGateway


def make_settings(**overrides) -> Settings:
    values = {
        "GEMINI_API_KEY": "",
        "GEMINI_MODEL": "gemini-2.5-flash",
        "GEMINI_FALLBACK_MODEL": "gemini-2.5-flash",
        "DEFAULT_TEMPERATURE": 0.7,
        "DEFAULT_MAX_TOKENS": 100,
        "REQUEST_TIMEOUT": 5.0,
    }
    values.update(overrides)
    return Settings(**values)


class FakeChat:
    def __init__(self, client: "FakeClient", model: str, config, history):
        self._client = client
        self.model = model
        self.config = config
        self.history = history

    async def send_message(self, message):
        self._client.chat_calls.append({
            "model": self.model,
            "config": self.config,
            "history": self.history,
            "message": message,
        })
        return await self._client.respond(self.model)


class FakeClient:
    """Mimics client.aio.models.generate_content and client.aio.chats.create."""

    def __init__(
        self,
        api_key: str = "test-key",
        reply: Optional[str] = "ok",
        fail_models: tuple = (),
        fail_all: bool = False,
        malformed_models: tuple = (),
        delay: float = 0.0,
    ):
        self.api_key = api_key
        self.reply = reply
        self.fail_models = set(fail_models)
        self.fail_all = fail_all
        self.malformed_models = set(malformed_models)
        self.delay = delay
        self.generate_calls: list[dict] = []
        self.chat_calls: list[dict] = []
        self.aio = SimpleNamespace(
            models=SimpleNamespace(generate_content=self._generate_content),
            chats=SimpleNamespace(create=self._create_chat),
        )

    async def respond(self, model: str):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_all or model in self.fail_models:
            raise RuntimeError(f"503 UNAVAILABLE for {model}")
        if model in self.malformed_models:
            return SimpleNamespace()
        return SimpleNamespace(text=self.reply)

    async def _generate_content(self, *, model, contents, config):
        self.generate_calls.append(
            {"model": model, "contents": contents, "config": config}
        )
        return await self.respond(model)

    def _create_chat(self, *, model, config=None, history=None):
        return FakeChat(self, model, config, history)


class RecordingFactory:
    """Client factory that hands out FakeClients and remembers them."""

    def __init__(self, **client_kwargs):
        self.client_kwargs = client_kwargs
        self.clients: list[FakeClient] = []

    def __call__(self, api_key: str) -> FakeClient:
        client = FakeClient(api_key=api_key, **self.client_kwargs)
        self.clients.append(client)
        return client


# --- Fixtures ---

@pytest.fixture
def make_gateway():
    """Build a configured GeminiGateway backed by FakeClients.

    Keyword arguments in upper case override Settings; the rest go to
    FakeClient.
    """

    def _make(api_key: Optional[str] = "test-key", **kwargs):
        settings_overrides = {k: v for k, v in kwargs.items() if k.isupper()}
        client_kwargs = {k: v for k, v in kwargs.items() if not k.isupper()}
        factory = RecordingFactory(**client_kwargs)
        manager = CredentialManager(client_factory=factory)
        if api_key:
            manager.set_api_key(api_key)
        gateway = GeminiGateway(
            credentials=manager, settings=make_settings(**settings_overrides),
        )
        return gateway, factory

    return _make


@pytest.fixture
def factory():
    return RecordingFactory()


@pytest.fixture
def manager(factory):
    return CredentialManager(client_factory=factory)

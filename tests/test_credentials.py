"""
Credential Manager Tests

Covers key sanitization, validation, atomic replacement of the active
key/client pair, and per-call override clients.
"""

from __future__ import annotations

import logging

import pytest

from gemini_gateway.config import Settings
from gemini_gateway.credentials import (
    CredentialManager,
    sanitize_api_key,
    validate_api_key,
)
from gemini_gateway.errors import InvalidCredentialError, NotConfiguredError


# ============================================================
# SANITIZATION
# ============================================================

class TestSanitize:

    def test_clean_key_unchanged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gemini_gateway"):
            assert sanitize_api_key("AIza_abc-123") == "AIza_abc-123"
        assert caplog.records == []

    def test_strips_whitespace_and_em_dash(self):
        assert sanitize_api_key("  sk-AbC123— ") == "sk-AbC123"

    def test_strips_inner_whitespace(self):
        assert sanitize_api_key("ab c\td\ne") == "abcde"

    def test_strips_control_characters(self):
        assert sanitize_api_key("abc\x00\x07def") == "abcdef"

    def test_sanitizing_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gemini_gateway"):
            sanitize_api_key(" key ")
        assert any("sanitized" in r.getMessage() for r in caplog.records)

    def test_warning_never_contains_key(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gemini_gateway"):
            sanitize_api_key(" secret-value ")
        assert all("secret-value" not in r.getMessage() for r in caplog.records)


class TestValidate:

    @pytest.mark.parametrize("raw", ["abc", "A-b_C-9", "sk-AbC123", "_", "-"])
    def test_valid_keys(self, raw):
        assert validate_api_key(raw) == raw

    @pytest.mark.parametrize("raw", ["", "   ", "——", "bad key!", "a.b", "k=v", "x/y"])
    def test_invalid_keys(self, raw):
        with pytest.raises(InvalidCredentialError):
            validate_api_key(raw)


# ============================================================
# MANAGER
# ============================================================

class TestCredentialManager:

    def test_starts_unconfigured(self, manager):
        assert manager.is_configured() is False
        assert manager.snapshot() is None

    def test_set_api_key_configures(self, manager, factory):
        manager.set_api_key("  sk-AbC123— ")
        assert manager.is_configured() is True
        key, client = manager.snapshot()
        assert key == "sk-AbC123"
        assert client is factory.clients[-1]
        assert client.api_key == "sk-AbC123"

    def test_invalid_key_leaves_unconfigured(self, manager, factory):
        with pytest.raises(InvalidCredentialError):
            manager.set_api_key("bad key!")
        assert manager.is_configured() is False
        assert factory.clients == []

    def test_invalid_key_keeps_previous_state(self, manager):
        manager.set_api_key("good-key")
        before = manager.snapshot()
        with pytest.raises(InvalidCredentialError):
            manager.set_api_key("bad key!")
        assert manager.is_configured() is True
        assert manager.snapshot() is before

    def test_rotation_replaces_client(self, manager, factory):
        manager.set_api_key("first")
        first_client = manager.client_for()
        manager.set_api_key("second")
        assert manager.client_for() is not first_client
        assert manager.client_for().api_key == "second"
        assert len(factory.clients) == 2

    def test_snapshot_unaffected_by_later_rotation(self, manager):
        manager.set_api_key("first")
        snap = manager.snapshot()
        manager.set_api_key("second")
        assert snap[0] == "first"
        assert snap[1].api_key == "first"

    def test_client_for_without_key_raises(self, manager):
        with pytest.raises(NotConfiguredError):
            manager.client_for()

    def test_override_builds_transient_client(self, manager, factory):
        client = manager.client_for(api_key=" per-call ")
        assert client.api_key == "per-call"
        assert manager.is_configured() is False

    def test_override_does_not_replace_active(self, manager):
        manager.set_api_key("active")
        active = manager.client_for()
        override = manager.client_for(api_key="other")
        assert override is not active
        assert manager.client_for() is active

    def test_invalid_override_raises(self, manager):
        manager.set_api_key("active")
        with pytest.raises(InvalidCredentialError):
            manager.client_for(api_key="no good")

    def test_clear(self, manager):
        manager.set_api_key("active")
        manager.clear()
        assert manager.is_configured() is False

    def test_from_settings_with_key(self, factory):
        manager = CredentialManager.from_settings(
            Settings(GEMINI_API_KEY="env-key"), client_factory=factory,
        )
        assert manager.is_configured() is True
        assert manager.snapshot()[0] == "env-key"

    def test_from_settings_without_key(self, factory):
        manager = CredentialManager.from_settings(
            Settings(GEMINI_API_KEY=""), client_factory=factory,
        )
        assert manager.is_configured() is False

    def test_none_key_rejected(self, manager):
        with pytest.raises(InvalidCredentialError):
            manager.set_api_key(None)
        assert manager.is_configured() is False

"""Unit tests for htmlpreview.config."""

from __future__ import annotations

import pytest

from htmlpreview.config import Settings
from htmlpreview.models.params import DEFAULT_CORS_PROXY


class TestDefaults:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.server.host == "127.0.0.1"
        assert settings.server.port == 8080
        assert settings.fetcher.timeout_seconds is None
        assert settings.fetcher.follow_redirects is True
        assert settings.preview.cors_proxy == DEFAULT_CORS_PROXY
        assert settings.logging.format == "json"


class TestEnvironmentOverrides:
    def test_nested_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTMLPREVIEW__SERVER__PORT", "9090")
        monkeypatch.setenv("HTMLPREVIEW__FETCHER__TIMEOUT_SECONDS", "12.5")
        monkeypatch.setenv("HTMLPREVIEW__PREVIEW__CORS_PROXY", "https://relay.test/?u=")
        settings = Settings()
        assert settings.server.port == 9090
        assert settings.fetcher.timeout_seconds == 12.5
        assert settings.preview.cors_proxy == "https://relay.test/?u="

    def test_constructor_args_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTMLPREVIEW__LOGGING__LEVEL", "ERROR")
        settings = Settings(logging={"level": "DEBUG"})
        assert settings.logging.level == "DEBUG"

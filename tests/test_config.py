"""Tests for config.py, validate_env.py and transport selection."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from scaha_scraper.config import Settings
from scaha_scraper.navigation import BrowserTransport, HttpTransport, make_transport
from scaha_scraper.validate_env import (
    validate_environment_value,
    validate_non_local_url,
    validate_transport_value,
)


class TestValidateEnv:
    """Tests for the fail-fast validators."""

    def test_known_environment(self):
        validate_environment_value("production")

    def test_unknown_environment(self):
        with pytest.raises(RuntimeError, match="ENVIRONMENT"):
            validate_environment_value("prod")

    def test_unknown_transport(self):
        with pytest.raises(RuntimeError, match="SCAHA_TRANSPORT"):
            validate_transport_value("curl")

    def test_localhost_rejected(self):
        with pytest.raises(RuntimeError, match="localhost"):
            validate_non_local_url("SCAHA_BASE_URL", "http://localhost:8080")

    def test_missing_host_rejected(self):
        with pytest.raises(RuntimeError, match="hostname"):
            validate_non_local_url("SCAHA_BASE_URL", "not a url")

    def test_real_host_accepted(self):
        validate_non_local_url("SCAHA_BASE_URL", "https://www.scaha.net")


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SCAHA_BASE_URL", raising=False)
        monkeypatch.delenv("SCAHA_ALLOW_SEASON_SWITCH", raising=False)
        settings = Settings(_env_file=None)
        assert settings.upstream.scoreboard_url == "https://www.scaha.net/scaha/scoreboard.xhtml"
        assert settings.upstream.stats_central_url == "https://www.scaha.net/scaha/statscentral.xhtml"
        assert settings.allow_season_switch is False
        assert settings.browser.page_load_timeout_ms == 30000
        assert settings.browser.network_idle_timeout_ms == 15000

    def test_top_level_overrides(self, monkeypatch):
        monkeypatch.setenv("SCAHA_BASE_URL", "https://mirror.example.org/")
        monkeypatch.setenv("CHROME_EXECUTABLE_PATH", "/opt/chrome")
        monkeypatch.setenv("SCAHA_ALLOW_SEASON_SWITCH", "true")
        settings = Settings(_env_file=None)
        assert settings.upstream.scoreboard_url == "https://mirror.example.org/scaha/scoreboard.xhtml"
        assert settings.browser.executable_path == "/opt/chrome"
        assert settings.allow_season_switch is True

    def test_invalid_transport_mode(self, monkeypatch):
        monkeypatch.setenv("SCAHA_TRANSPORT", "carrier-pigeon")
        with pytest.raises(ValueError):
            Settings(_env_file=None)


class TestMakeTransport:
    """Tests for make_transport."""

    def test_auto_uses_preferred(self):
        with patch("scaha_scraper.navigation.settings") as mock_settings:
            mock_settings.transport_mode = "auto"
            assert isinstance(make_transport("browser"), BrowserTransport)
            http = make_transport("http")
            assert isinstance(http, HttpTransport)
            http.close()

    def test_forced_mode_overrides(self):
        with patch("scaha_scraper.navigation.settings") as mock_settings:
            mock_settings.transport_mode = "http"
            transport = make_transport("browser")
            assert isinstance(transport, HttpTransport)
            transport.close()

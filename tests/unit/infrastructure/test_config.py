"""Unit tests for application configuration."""

from __future__ import annotations

import pytest

from cluster_console.config import (
    AmbariSettings,
    ApiSettings,
    ConsoleSettings,
    Environment,
    ObservabilitySettings,
    Settings,
)


class TestAmbariSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AMBARI_HOST", raising=False)
        monkeypatch.delenv("AMBARI_PORT", raising=False)
        settings = AmbariSettings()
        assert settings.host == "localhost"
        assert settings.port == 8080
        assert settings.user == "admin"

    def test_base_url(self) -> None:
        settings = AmbariSettings(host="ambari", port=8081)
        assert settings.base_url == "http://ambari:8081/api/v1"

    def test_base_url_with_tls(self) -> None:
        settings = AmbariSettings(host="ambari", port=8443, use_tls=True)
        assert settings.base_url == "https://ambari:8443/api/v1"

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AMBARI_HOST", "server.example.com")
        monkeypatch.setenv("AMBARI_PORT", "9090")
        settings = AmbariSettings()
        assert settings.host == "server.example.com"
        assert settings.port == 9090


class TestConsoleSettings:
    def test_defaults(self) -> None:
        settings = ConsoleSettings()
        assert settings.prompt == "ambari-shell>"
        assert settings.progress_interval == 1.0
        assert settings.progress_max_frames == 600
        assert settings.simulate is False


    def test_progress_frames_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONSOLE_PROGRESS_MAX_FRAMES", "5")
        assert ConsoleSettings().progress_max_frames == 5


class TestApiSettings:
    def test_defaults(self) -> None:
        settings = ApiSettings()
        assert settings.port == 8000
        assert settings.prefix == "/api/v1"


class TestObservabilitySettings:
    def test_defaults(self) -> None:
        settings = ObservabilitySettings()
        assert settings.log_level == "INFO"
        assert settings.metrics_enabled is True
        assert settings.tracing_enabled is False
        assert settings.json_logs is False


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.delenv("DEBUG", raising=False)
        settings = Settings()
        assert settings.environment == Environment.DEVELOPMENT
        assert settings.debug is False

    def test_nested_settings(self) -> None:
        settings = Settings()
        assert isinstance(settings.ambari, AmbariSettings)
        assert isinstance(settings.console, ConsoleSettings)
        assert isinstance(settings.api, ApiSettings)
        assert isinstance(settings.observability, ObservabilitySettings)


class TestEnvironment:
    def test_values(self) -> None:
        assert Environment.DEVELOPMENT == "development"
        assert Environment.PRODUCTION == "production"
        assert Environment.TESTING == "testing"
        assert Environment.STAGING == "staging"

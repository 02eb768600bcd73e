"""Tests for environment settings."""

import os
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError
from spotmeta.config import ResolutionDepth
from spotmeta.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from .env file and shell environment."""
    for key in list(os.environ.keys()):
        if key.startswith("SPOTMETA_"):
            monkeypatch.delenv(key, raising=False)
    # Change to temp dir so Settings won't find .env file
    monkeypatch.chdir(tmp_path)


def _create_settings(**kwargs: Any) -> Settings:
    return Settings(**kwargs)


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self) -> None:
        settings = _create_settings()
        assert settings.host == "localhost:8080"
        assert settings.password == ""
        assert settings.service == "spotify"
        assert settings.depth == ResolutionDepth.ONE_LEVEL
        assert settings.max_workers == 1
        assert settings.log_level == "WARNING"


class TestEnvironment:
    """Tests for reading SPOTMETA_* variables."""

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPOTMETA_HOST", "backend:9000")
        monkeypatch.setenv("SPOTMETA_PASSWORD", "hunter2")
        monkeypatch.setenv("SPOTMETA_DEPTH", "full")
        monkeypatch.setenv("SPOTMETA_MAX_WORKERS", "4")

        settings = _create_settings()

        assert settings.host == "backend:9000"
        assert settings.password == "hunter2"
        assert settings.depth == ResolutionDepth.FULL
        assert settings.max_workers == 4

    def test_reads_env_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("SPOTMETA_HOST=fromfile:1\nOTHER=ignored\n")
        assert _create_settings().host == "fromfile:1"

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestValidation:
    """Tests for value validation."""

    @pytest.mark.parametrize(
        ("input_level", "expected"),
        [("debug", "DEBUG"), ("Info", "INFO"), ("WaRnInG", "WARNING")],
    )
    def test_normalizes_log_level(self, input_level: str, expected: str) -> None:
        """Should normalize log level case."""
        assert _create_settings(log_level=input_level).log_level == expected

    @pytest.mark.parametrize("invalid_level", ["VERBOSE", "WARN", ""])
    def test_rejects_invalid_log_level(self, invalid_level: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _create_settings(log_level=invalid_level)

        assert exc_info.value.errors()[0]["loc"] == ("log_level",)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("max_workers", 0),
            ("timeout", 0),
            ("scheme", "ftp"),
            ("depth", "deep"),
        ],
    )
    def test_rejects_invalid_values(self, field: str, value: Any) -> None:
        with pytest.raises(ValidationError):
            _create_settings(**{field: value})


class TestBuilders:
    """Tests for config builders."""

    def test_backend_config(self) -> None:
        settings = _create_settings(host="h:1", password="p", scheme="https", timeout=2)
        config = settings.backend_config()

        assert config.host == "h:1"
        assert config.password == "p"
        assert config.scheme == "https"
        assert config.timeout == 2

    def test_resolver_config(self) -> None:
        settings = _create_settings(depth="stub", max_workers=3)
        config = settings.resolver_config()

        assert config.depth == ResolutionDepth.STUB
        assert config.max_workers == 3

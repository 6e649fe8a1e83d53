"""Tests for environment-driven settings (config.py)."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from split_stream.config import Settings, get_settings
from split_stream.core.session import DEFAULT_SHARE_URL
from split_stream.core.tiers import Tier
from split_stream.exceptions import ConfigurationError


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    """Run from an empty directory so no stray ``.env`` is picked up."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "SPLIT_STREAM_ACTOR_ID",
        "SPLIT_STREAM_TIER",
        "SPLIT_STREAM_EVENTS_PATH",
        "SPLIT_STREAM_SHARE_URL",
        "SPLIT_STREAM_FETCH_TITLES",
        "SPLIT_STREAM_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    def test_defaults(self, env: pytest.MonkeyPatch) -> None:
        settings = Settings()
        assert settings.actor_id is None
        assert settings.tier is Tier.FREE
        assert settings.events_path is None
        assert settings.share_url == DEFAULT_SHARE_URL
        assert settings.fetch_titles is False
        assert settings.log_level == "WARNING"


class TestEnvironment:
    def test_prefixed_variables(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("SPLIT_STREAM_ACTOR_ID", "user-9")
        env.setenv("SPLIT_STREAM_TIER", "premium")
        env.setenv("SPLIT_STREAM_EVENTS_PATH", "out/events.jsonl")
        env.setenv("SPLIT_STREAM_FETCH_TITLES", "true")

        settings = Settings()
        assert settings.actor_id == "user-9"
        assert settings.tier is Tier.PREMIUM
        assert settings.events_path == Path("out/events.jsonl")
        assert settings.fetch_titles is True

    def test_dotenv_file(self, env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("SPLIT_STREAM_TIER=trial\n", encoding="utf-8")
        assert Settings().tier is Tier.TRIAL

    def test_unknown_tier_rejected(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("SPLIT_STREAM_TIER", "gold")
        with pytest.raises(ValidationError):
            Settings()


class TestLogLevel:
    def test_normalised_to_upper(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("SPLIT_STREAM_LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_unknown_level_rejected(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("SPLIT_STREAM_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError, match="Unknown log level"):
            Settings()


class TestGetSettings:
    def test_invalid_value_names_variable(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("SPLIT_STREAM_TIER", "gold")
        get_settings.cache_clear()
        try:
            with pytest.raises(ConfigurationError, match="SPLIT_STREAM_TIER") as exc_info:
                get_settings()
        finally:
            get_settings.cache_clear()
        assert exc_info.value.hint is not None
        assert "SPLIT_STREAM_TIER" in exc_info.value.hint

    def test_valid_settings_cached(self, env: pytest.MonkeyPatch) -> None:
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

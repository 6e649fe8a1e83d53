"""Runtime settings for split-stream.

Values come from ``SPLIT_STREAM_*`` environment variables or a ``.env``
file in the working directory; CLI flags override them.

    SPLIT_STREAM_ACTOR_ID=user-123        # signed-in identity
    SPLIT_STREAM_TIER=trial               # free | trial | premium
    SPLIT_STREAM_EVENTS_PATH=events.jsonl # omit for in-memory only
    SPLIT_STREAM_FETCH_TITLES=true
    SPLIT_STREAM_LOG_LEVEL=INFO
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from split_stream.core.session import DEFAULT_SHARE_URL
from split_stream.core.tiers import Tier
from split_stream.exceptions import ConfigurationError

ENV_PREFIX: str = "SPLIT_STREAM_"

_LOG_LEVELS: tuple[str, ...] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Settings consumed by the CLI when wiring a session."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    actor_id: str | None = Field(
        default=None,
        description="Signed-in actor; analytics are only recorded when set",
    )
    tier: Tier = Field(
        default=Tier.FREE,
        description="Subscription tier deciding how many screens are allowed",
    )
    events_path: Path | None = Field(
        default=None,
        description="JSON Lines file receiving analytics records",
    )
    share_url: str = Field(
        default=DEFAULT_SHARE_URL,
        description="Link shared or copied for a session",
    )
    fetch_titles: bool = Field(
        default=False,
        description="Resolve real video titles through yt-dlp",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root logging level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


def _env_names(exc: ValidationError) -> list[str]:
    names: list[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        if loc:
            name = f"{ENV_PREFIX}{str(loc[0]).upper()}"
            if name not in names:
                names.append(name)
    return names


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance.

    Raises
    ------
    ConfigurationError
        When an ``SPLIT_STREAM_*`` value (or ``.env`` entry) is invalid.
    """
    try:
        return Settings()
    except ValidationError as exc:
        names = _env_names(exc)
        raise ConfigurationError(
            f"Invalid settings: {', '.join(names) or 'environment'}",
            hint=f"Check the value of {' / '.join(names) or 'the SPLIT_STREAM_* variables'}.",
        ) from exc

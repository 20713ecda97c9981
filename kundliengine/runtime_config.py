"""Runtime configuration loaded from environment variables and .env files."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from kundliengine.config.settings import Settings as PersistedSettings

__all__ = [
    "RuntimeSettings",
    "configure_logging",
    "get_runtime_settings",
]

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class RuntimeSettings(BaseSettings):
    """Runtime configuration resolved from the process environment."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")
    settings_file: Path | None = Field(default=None, alias="KUNDLI_SETTINGS_FILE")

    _persisted_cache: PersistedSettings | None = PrivateAttr(default=None)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: str | None) -> str:
        level = str(value or "WARNING").strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @field_validator("settings_file", mode="before")
    @classmethod
    def _expand_optional_path(cls, value: Path | str | None) -> Path | None:
        if value in {None, ""}:
            return None
        return Path(value).expanduser()

    def persisted(self, *, fresh: bool = False) -> "PersistedSettings":
        """Return a deep copy of the persisted settings, loading from disk once."""

        from kundliengine.config.settings import load_settings

        if fresh or self._persisted_cache is None:
            self._persisted_cache = load_settings(self.settings_file)
        return self._persisted_cache.model_copy(deep=True)

    def clear_persisted_cache(self) -> None:
        self._persisted_cache = None


@lru_cache(maxsize=1)
def get_runtime_settings() -> RuntimeSettings:
    """Return the process-wide :class:`RuntimeSettings`, built on first use."""

    return RuntimeSettings()


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Apply ``level`` (or ``LOG_LEVEL``) to the ``kundliengine`` logger.

    No handlers are installed; applications keep control of output.
    """

    if level is None:
        level = get_runtime_settings().log_level
    if isinstance(level, str):
        name = level.strip().upper()
        if name not in _LEVELS:
            raise ConfigurationError(f"unknown log level {level!r}")
        level = logging.getLevelName(name)
    logger = logging.getLogger("kundliengine")
    logger.setLevel(level)
    return logger

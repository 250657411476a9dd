"""Application configuration models and loader utilities."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any, cast
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import dotenv_values
from pydantic import BaseModel, Field, field_validator

LOGGER = logging.getLogger(__name__)


class ApplicationSettings(BaseModel):
    """Settings describing the application's reference timezone."""

    timezone: str = Field(
        default="UTC", description="IANA name of the application timezone"
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        name = value.strip()
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"Unknown timezone '{value}'"
            raise ValueError(msg) from exc
        return name


class LoggingSettings(BaseModel):
    """Logging preferences."""

    level: str = Field(default="INFO", description="Root logging level")
    structured: bool = Field(
        default=False,
        description="Emit key=value structured log lines instead of plain text",
    )


class AppSettings(BaseModel):
    """Aggregated application configuration."""

    app: ApplicationSettings = Field(default_factory=ApplicationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


ENV_PREFIX = "DT_NORMALIZER_"


def _normalize_key(raw_key: str) -> list[str]:
    """Convert an environment variable key into a nested attribute path."""
    trimmed = raw_key.removeprefix(ENV_PREFIX)
    return [segment.lower() for segment in trimmed.split("__") if segment]


def _merge_into_tree(tree: dict[str, Any], path: list[str], value: Any) -> None:
    """Assign a value to a nested dictionary given a path."""
    cursor = tree
    for segment in path[:-1]:
        next_node = cursor.setdefault(segment, {})
        cursor = cast(dict[str, Any], next_node)
    cursor[path[-1]] = value


def _coerce_value(value: str | None) -> Any:
    if value is None or value == "":
        return None
    lowercase_value = value.lower()
    if lowercase_value == "true":
        return True
    if lowercase_value == "false":
        return False
    return value


def _collect_env_values(
    env_file: Path | str | None, include_environment: bool
) -> dict[str, Any]:
    """Load configuration values from environment variables and optional file."""
    collected: dict[str, Any] = {}

    file_values: dict[str, str | None] = {}
    if env_file:
        env_path = Path(env_file)
        if env_path.is_file():
            file_values = {
                key: value
                for key, value in dotenv_values(env_path).items()
                if key and key.startswith(ENV_PREFIX)
            }
        else:
            LOGGER.debug("Env file %s not found; skipping", env_path)

    env_values: dict[str, str | None] = {}
    if include_environment:
        env_values = {
            key: value
            for key, value in os.environ.items()
            if key.startswith(ENV_PREFIX)
        }

    combined = {**file_values, **env_values}

    for key, value in combined.items():
        path = _normalize_key(key)
        if not path:
            continue
        normalized_value = _coerce_value(value)
        if normalized_value is None:
            # Unset values fall back to the model defaults.
            continue
        _merge_into_tree(collected, path, normalized_value)

    return collected


@lru_cache(maxsize=1)
def load_app_settings(
    env_file: Path | str | None = None,
    *,
    include_environment: bool = True,
) -> AppSettings:
    """Load application settings from an optional env file and the environment."""
    collected = _collect_env_values(env_file, include_environment)
    settings = AppSettings.model_validate(collected)
    LOGGER.debug("Loaded settings with application timezone %s", settings.app.timezone)
    return settings


def settings_timezone_provider(
    env_file: Path | str | None = None,
    *,
    include_environment: bool = True,
) -> Callable[[], str]:
    """Return a callable that reads the application timezone on every call."""

    def provider() -> str:
        return load_app_settings(
            env_file, include_environment=include_environment
        ).app.timezone

    return provider


__all__ = [
    "AppSettings",
    "ApplicationSettings",
    "LoggingSettings",
    "load_app_settings",
    "settings_timezone_provider",
]

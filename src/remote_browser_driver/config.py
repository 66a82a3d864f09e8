"""Configuration models for the remote browser driver."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import TeardownPolicy


class BrowserConfig(BaseModel):
    """Settings for the browser backend."""

    browser: str = Field(default="chromium", description="Name looked up in the session registry.")
    headless: bool = True
    profile_path: Optional[Path] = None
    viewport_width: int = 1280
    viewport_height: int = 720
    slow_mo: Optional[float] = Field(
        default=None,
        description="Delay (in seconds) inserted between remote commands.",
    )
    timeout: Optional[float] = Field(
        default=None,
        description="Default timeout (in seconds) for remote commands.",
    )


class DriverConfig(BaseSettings):
    """Top-level configuration for a driver session."""

    model_config = SettingsConfigDict(
        env_prefix="REMOTE_BROWSER_DRIVER_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    start_url: Optional[str] = None
    teardown: TeardownPolicy = Field(
        default=TeardownPolicy.PROPAGATE,
        description="Whether failures while quitting are raised or only logged.",
    )


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    **overrides: object,
) -> DriverConfig:
    """Load configuration from an optional YAML file and overrides.

    Values from the file and the overrides win over environment variables;
    nested sections are merged key by key.
    """

    data: dict[str, Any] = {}
    if path:
        import yaml

        data = yaml.safe_load(path.read_text()) or {}
    data = _merge(data, overrides)
    if env_file is not None:
        return DriverConfig(_env_file=env_file, **data)
    return DriverConfig(**data)


def _merge(base: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged

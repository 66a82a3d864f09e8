"""Factories for constructing remote sessions from configuration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Optional

from .browser.base import RemoteSession
from .browser.playwright_session import PlaywrightRemoteSession
from .config import BrowserConfig

LOGGER = logging.getLogger(__name__)

SessionConstructor = Callable[[BrowserConfig], RemoteSession]


class SessionRegistry:
    """Maps browser names to the constructors of their sessions.

    Registries are plain objects passed to whoever creates sessions; there is
    no process-wide table.
    """

    def __init__(self, constructors: Optional[Mapping[str, SessionConstructor]] = None) -> None:
        self._constructors: dict[str, SessionConstructor] = {}
        for name, constructor in (constructors or {}).items():
            self.register(name, constructor)

    def register(self, name: str, constructor: SessionConstructor) -> None:
        self._constructors[_normalise(name)] = constructor

    def names(self) -> list[str]:
        return sorted(self._constructors)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _normalise(name) in self._constructors

    def create(self, name: str, config: Optional[BrowserConfig] = None) -> RemoteSession:
        constructor = self._constructors.get(_normalise(name))
        if constructor is None:
            raise ValueError(f"Unsupported browser: {name}")
        LOGGER.debug("Creating %s session", name)
        return constructor(config or BrowserConfig(browser=name))


def _normalise(name: str) -> str:
    return name.strip().lower()


def _playwright(engine: str, channel: Optional[str] = None) -> SessionConstructor:
    def _factory(config: BrowserConfig) -> RemoteSession:
        return PlaywrightRemoteSession(config, engine=engine, channel=channel)

    return _factory


def default_registry() -> SessionRegistry:
    """Return a new registry with the browsers Playwright can drive."""

    return SessionRegistry(
        {
            "chromium": _playwright("chromium"),
            "chrome": _playwright("chromium", channel="chrome"),
            "msedge": _playwright("chromium", channel="msedge"),
            "firefox": _playwright("firefox"),
            "webkit": _playwright("webkit"),
        }
    )


def build_session(
    config: BrowserConfig,
    registry: Optional[SessionRegistry] = None,
) -> RemoteSession:
    return (registry or default_registry()).create(config.browser, config)

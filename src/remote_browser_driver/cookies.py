"""Cookie management for a remote session."""

from __future__ import annotations

import logging
from typing import Optional, Set

from .browser.base import CookieCapable
from .errors import CookieNotFoundError, RemoteCommandError
from .models import Cookie

LOGGER = logging.getLogger(__name__)


class CookieJar:
    """Cookies of one session, keyed by name.

    The session is the source of truth; nothing is kept locally.
    """

    def __init__(self, session: CookieCapable) -> None:
        self._session = session

    def add(self, cookie: Cookie) -> None:
        """Add ``cookie``, replacing any cookie with the same name."""

        LOGGER.debug("Adding cookie %s", cookie.name)
        previous = self.named(cookie.name)
        self._session.delete_cookie_named(cookie.name)
        try:
            self._session.add_cookie(cookie)
        except RemoteCommandError:
            if previous is not None:
                LOGGER.debug("Restoring cookie %s after failed add", cookie.name)
                self._session.add_cookie(previous)
            raise

    def delete_named(self, name: str) -> None:
        LOGGER.debug("Deleting cookie %s", name)
        self._session.delete_cookie_named(name)

    def delete(self, cookie: Cookie) -> None:
        self.delete_named(cookie.name)

    def delete_all(self) -> None:
        LOGGER.debug("Deleting all cookies")
        self._session.delete_all_cookies()

    def all(self) -> Set[Cookie]:
        return set(self._session.get_cookies())

    def named(self, name: str) -> Optional[Cookie]:
        """Return the cookie called ``name``, or ``None`` when there is none."""

        try:
            return self._session.get_cookie(name)
        except CookieNotFoundError:
            LOGGER.debug("No cookie named %s", name)
            return None

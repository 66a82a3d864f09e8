"""High-level driver over one remote session."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import List, Optional, Set, Type, Union

from .browser.base import RemoteSession
from .config import BrowserConfig, DriverConfig
from .cookies import CookieJar
from .elements import ElementHandle
from .errors import RemoteCommandError
from .factory import SessionRegistry, build_session
from .models import Locator, TeardownPolicy
from .search import find_many, find_one
from .select_list import SelectWidget

LOGGER = logging.getLogger(__name__)


class Driver:
    """Navigation, search and cookies for a started remote session.

    A driver is not thread-safe: callers sharing one across threads must
    serialise their calls.
    """

    def __init__(
        self,
        session: RemoteSession,
        *,
        teardown: TeardownPolicy = TeardownPolicy.PROPAGATE,
    ) -> None:
        self._session = session
        self._teardown = teardown
        self._cookies = CookieJar(session)

    @property
    def session(self) -> RemoteSession:
        return self._session

    @property
    def cookies(self) -> CookieJar:
        return self._cookies

    def get(self, url: str) -> None:
        """Navigate the current window to ``url``."""

        self._session.navigate_to(url)

    to = get

    def back(self) -> None:
        self._session.back()

    def forward(self) -> None:
        self._session.forward()

    def refresh(self) -> None:
        self._session.refresh()

    @property
    def current_url(self) -> str:
        return self._session.current_url()

    @property
    def title(self) -> str:
        return self._session.title()

    @property
    def page_source(self) -> str:
        return self._session.page_source()

    def window_handles(self) -> Set[str]:
        return set(self._session.window_handles())

    def window_handle(self) -> str:
        return self._session.window_handle()

    def switch_to_window(self, handle: str) -> None:
        self._session.switch_to_window(handle)

    def switch_to_frame(self, frame: Union[int, str, ElementHandle]) -> None:
        if isinstance(frame, ElementHandle):
            self._session.switch_to_frame(frame.remote)
        else:
            self._session.switch_to_frame(frame)

    def switch_to_default(self) -> None:
        self._session.switch_to_default_content()

    def switch_to_active(self) -> ElementHandle:
        """Return the focused element, or the body when nothing has focus."""

        return ElementHandle(self._session.active_element())

    def find_element(self, locator: Locator) -> Optional[ElementHandle]:
        return find_one(self._session, locator)

    def find_elements(self, locator: Locator) -> List[ElementHandle]:
        return find_many(self._session, locator)

    def select_list(self, locator: Locator) -> Optional[SelectWidget]:
        """Find a ``<select>`` by ``locator`` and wrap it, or return ``None``."""

        element = self.find_element(locator)
        return element.as_select() if element is not None else None

    def close(self) -> None:
        """Close the current window."""

        self._session.close()

    def quit(self, policy: Optional[TeardownPolicy] = None) -> bool:
        """Terminate the session.

        Returns ``True`` when the session quit cleanly. With the best-effort
        policy a failure is logged and ``False`` is returned; otherwise the
        ``RemoteCommandError`` propagates.
        """

        policy = policy or self._teardown
        try:
            self._session.quit()
        except RemoteCommandError:
            if policy != TeardownPolicy.BEST_EFFORT:
                raise
            LOGGER.warning("Failed to quit browser session", exc_info=True)
            return False
        LOGGER.info("Browser session quit")
        return True

    def __enter__(self) -> "Driver":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        # never mask an exception that is already propagating
        self.quit(TeardownPolicy.BEST_EFFORT if exc_type is not None else None)


def start(
    browser: str,
    url: Optional[str] = None,
    *,
    config: Optional[DriverConfig] = None,
    registry: Optional[SessionRegistry] = None,
) -> Driver:
    """Create a session for ``browser``, start it and open ``url``."""

    config = config or DriverConfig()
    browser_config: BrowserConfig = config.browser.model_copy(update={"browser": browser})
    session = build_session(browser_config, registry)
    driver = Driver(session, teardown=config.teardown)
    target = url or config.start_url
    try:
        session.start()
        if target:
            driver.get(target)
    except RemoteCommandError:
        driver.quit(TeardownPolicy.BEST_EFFORT)
        raise
    return driver

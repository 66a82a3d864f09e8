"""Remote session abstractions.

A remote session is supplied by the automation library being wrapped. These
interfaces describe what the driver needs from it; everything above this
module talks to a session only through them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Set, Union

from ..models import Cookie, Locator


class Clickable(ABC):
    """Capability of elements that accept pointer and keyboard input."""

    @abstractmethod
    def click(self) -> None:
        """Click the element."""

    @abstractmethod
    def submit(self) -> None:
        """Submit the form that is, or contains, the element."""

    @abstractmethod
    def clear(self) -> None:
        """Clear the element's editable content."""

    @abstractmethod
    def send_keys(self, text: str) -> None:
        """Type ``text`` into the element without clearing it first."""


class TextCarrier(ABC):
    """Capability of elements with readable text and attributes."""

    @abstractmethod
    def get_text(self) -> str:
        """Return the rendered text of the element."""

    @abstractmethod
    def get_tag_name(self) -> str:
        """Return the lower-case tag name of the element."""

    @abstractmethod
    def get_attribute(self, name: str) -> Optional[str]:
        """Return an attribute value, or ``None`` when it is absent."""

    @abstractmethod
    def get_value(self) -> Optional[str]:
        """Return the current ``value`` of a form control."""


class Selectable(ABC):
    """Capability of checkboxes, radio buttons and options."""

    @abstractmethod
    def is_selected(self) -> bool:
        """Return whether the element is checked or selected."""

    @abstractmethod
    def select(self) -> None:
        """Mark the element as selected."""

    @abstractmethod
    def toggle(self) -> bool:
        """Flip the selected state and return the new state."""


class CookieCapable(ABC):
    """Capability of sessions that manage cookies."""

    @abstractmethod
    def add_cookie(self, cookie: Cookie) -> None:
        """Add ``cookie`` to the session."""

    @abstractmethod
    def get_cookie(self, name: str) -> Cookie:
        """Return the cookie called ``name`` or raise ``CookieNotFoundError``."""

    @abstractmethod
    def get_cookies(self) -> List[Cookie]:
        """Return the cookies visible to the current page."""

    @abstractmethod
    def delete_cookie_named(self, name: str) -> None:
        """Delete the cookie called ``name``; missing cookies are ignored."""

    @abstractmethod
    def delete_all_cookies(self) -> None:
        """Delete every cookie of the session."""


class RemoteElement(Clickable, TextCarrier, Selectable):
    """Raw reference to one element inside a remote session.

    The reference goes stale when the page navigates away or the element is
    removed; commands on a stale reference raise ``RemoteCommandError``.
    """

    @abstractmethod
    def is_enabled(self) -> bool:
        """Return whether the element is enabled."""

    @abstractmethod
    def set_selected(self, selected: bool) -> None:
        """Set the selected or checked state of the element."""

    @abstractmethod
    def find_element(self, locator: Locator) -> "RemoteElement":
        """Find the first descendant matching ``locator``.

        Raises ``ElementNotFoundError`` when nothing matches.
        """

    @abstractmethod
    def find_elements(self, locator: Locator) -> List["RemoteElement"]:
        """Find every descendant matching ``locator``."""

    def select(self) -> None:
        self.set_selected(True)

    def toggle(self) -> bool:
        self.set_selected(not self.is_selected())
        return self.is_selected()


FrameTarget = Union[int, str, RemoteElement]


class RemoteSession(CookieCapable):
    """Interface for one live, automation-capable browser session."""

    @abstractmethod
    def start(self) -> None:
        """Launch the browser session."""

    @abstractmethod
    def close(self) -> None:
        """Close the current window, quitting if it was the last one."""

    @abstractmethod
    def quit(self) -> None:
        """Terminate the browser session and every window it owns."""

    @abstractmethod
    def navigate_to(self, url: str) -> None:
        """Load ``url`` in the current window."""

    @abstractmethod
    def back(self) -> None:
        """Go back one entry in the browsing history."""

    @abstractmethod
    def forward(self) -> None:
        """Go forward one entry in the browsing history."""

    @abstractmethod
    def refresh(self) -> None:
        """Reload the current page."""

    @abstractmethod
    def current_url(self) -> str:
        """Return the URL of the current page."""

    @abstractmethod
    def title(self) -> str:
        """Return the title of the current page."""

    @abstractmethod
    def page_source(self) -> str:
        """Return the serialized markup of the current page."""

    @abstractmethod
    def window_handles(self) -> Set[str]:
        """Return the handles of every open window."""

    @abstractmethod
    def window_handle(self) -> str:
        """Return the handle of the current window."""

    @abstractmethod
    def switch_to_window(self, handle: str) -> None:
        """Focus the window identified by ``handle``."""

    @abstractmethod
    def switch_to_frame(self, frame: FrameTarget) -> None:
        """Focus a frame given by index, name or id, or frame element."""

    @abstractmethod
    def switch_to_default_content(self) -> None:
        """Focus the top-level document of the current window."""

    @abstractmethod
    def active_element(self) -> RemoteElement:
        """Return the focused element, or the body when none has focus."""

    @abstractmethod
    def find_element(self, locator: Locator) -> RemoteElement:
        """Find the first element matching ``locator``.

        Raises ``ElementNotFoundError`` when nothing matches.
        """

    @abstractmethod
    def find_elements(self, locator: Locator) -> List[RemoteElement]:
        """Find every element matching ``locator``."""

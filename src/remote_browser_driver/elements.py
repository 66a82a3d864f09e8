"""Handles to elements found in a remote session."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from .browser.base import Clickable, RemoteElement, Selectable, TextCarrier
from .models import Locator

if TYPE_CHECKING:
    from .select_list import SelectWidget

LOGGER = logging.getLogger(__name__)


class ElementHandle(Clickable, TextCarrier, Selectable):
    """Reference to one element of a remote session.

    Every method is a single request to the session; nothing is cached, so the
    handle always reports live state. Failures, including use of a handle whose
    element has left the page, raise ``RemoteCommandError``.
    """

    def __init__(self, element: RemoteElement) -> None:
        self._element = element

    @property
    def remote(self) -> RemoteElement:
        """The raw session element behind this handle."""

        return self._element

    def click(self) -> None:
        LOGGER.debug("Clicking %r", self)
        self._element.click()

    def submit(self) -> None:
        LOGGER.debug("Submitting form of %r", self)
        self._element.submit()

    def clear(self) -> None:
        self._element.clear()

    def send_keys(self, text: str) -> None:
        LOGGER.debug("Sending %d characters to %r", len(text), self)
        self._element.send_keys(text)

    input_text = send_keys

    def get_text(self) -> str:
        return self._element.get_text()

    def get_tag_name(self) -> str:
        return self._element.get_tag_name()

    def get_attribute(self, name: str) -> Optional[str]:
        return self._element.get_attribute(name)

    def get_value(self) -> Optional[str]:
        return self._element.get_value()

    def is_enabled(self) -> bool:
        return self._element.is_enabled()

    def is_selected(self) -> bool:
        return self._element.is_selected()

    def select(self) -> None:
        self._element.select()

    def toggle(self) -> bool:
        """Flip a checkbox or option and return its new selected state."""

        return self._element.toggle()

    def find_element(self, locator: Locator) -> Optional["ElementHandle"]:
        """Find the first descendant matching ``locator``, or ``None``."""

        from .search import find_one

        return find_one(self._element, locator)

    def find_elements(self, locator: Locator) -> List["ElementHandle"]:
        """Find every descendant matching ``locator``."""

        from .search import find_many

        return find_many(self._element, locator)

    def is_select(self) -> bool:
        return self.get_tag_name().lower() == "select"

    def as_select(self) -> "SelectWidget":
        """Wrap this element as a select list; see :class:`SelectWidget`."""

        from .select_list import SelectWidget

        return SelectWidget(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementHandle):
            return NotImplemented
        return self._element is other._element

    def __hash__(self) -> int:
        return id(self._element)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._element!r})"

"""Element search with not-found recovery.

A single-element search that matches nothing returns ``None``; a multi-element
search that matches nothing returns an empty list. Any other failure of the
session propagates as ``RemoteCommandError``.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from .browser.base import RemoteElement, RemoteSession
from .elements import ElementHandle
from .errors import ElementNotFoundError
from .models import Locator

LOGGER = logging.getLogger(__name__)

Searchable = Union[RemoteSession, RemoteElement]


def find_one(searchable: Searchable, locator: Locator) -> Optional[ElementHandle]:
    """Return the first element matching ``locator``, or ``None``."""

    try:
        element = searchable.find_element(locator)
    except ElementNotFoundError:
        LOGGER.debug("No element matches %s", locator)
        return None
    return ElementHandle(element)


def find_many(searchable: Searchable, locator: Locator) -> List[ElementHandle]:
    """Return every element matching ``locator``; possibly none."""

    try:
        elements = searchable.find_elements(locator)
    except ElementNotFoundError:
        LOGGER.debug("No elements match %s", locator)
        return []
    return [ElementHandle(element) for element in elements]

"""Shared models used across the remote browser driver."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocatorStrategy(str, enum.Enum):
    """Enumerated strategies for finding elements in a page."""

    ID = "id"
    LINK_TEXT = "link_text"
    PARTIAL_LINK_TEXT = "partial_link_text"
    NAME = "name"
    TAG_NAME = "tag_name"
    XPATH = "xpath"
    CLASS_NAME = "class_name"
    CSS_SELECTOR = "css_selector"


class Locator(BaseModel):
    """A search strategy paired with the value to search for.

    Locators carry no behaviour: sessions decide how each strategy is
    expressed in their own selector language.
    """

    model_config = ConfigDict(frozen=True)

    strategy: LocatorStrategy
    value: str

    @field_validator("value")
    @classmethod
    def _value_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Locator value must not be empty")
        return value

    def __str__(self) -> str:
        return f"{self.strategy.value}={self.value!r}"

    @classmethod
    def by_id(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.ID, value=value)

    @classmethod
    def by_link_text(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.LINK_TEXT, value=value)

    @classmethod
    def by_partial_link_text(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.PARTIAL_LINK_TEXT, value=value)

    @classmethod
    def by_name(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.NAME, value=value)

    @classmethod
    def by_tag_name(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.TAG_NAME, value=value)

    @classmethod
    def by_xpath(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.XPATH, value=value)

    @classmethod
    def by_class_name(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.CLASS_NAME, value=value)

    @classmethod
    def by_css_selector(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.CSS_SELECTOR, value=value)


by_id = Locator.by_id
by_link_text = Locator.by_link_text
by_partial_link_text = Locator.by_partial_link_text
by_name = Locator.by_name
by_tag_name = Locator.by_tag_name
by_xpath = Locator.by_xpath
by_class_name = Locator.by_class_name
by_css_selector = Locator.by_css_selector


class Cookie(BaseModel):
    """A browser cookie. Changing a cookie means deleting and re-adding it."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    path: str = "/"
    expiry: Optional[datetime] = None
    domain: Optional[str] = Field(
        default=None,
        description="Cookie domain; defaults to the host of the current page.",
    )
    secure: bool = False
    http_only: bool = False


def new_cookie(
    name: str,
    value: str,
    path: str = "/",
    expiry: Optional[datetime] = None,
) -> Cookie:
    """Create a cookie to be sent to a session with :meth:`CookieJar.add`."""

    return Cookie(name=name, value=value, path=path, expiry=expiry)


class SelectOption(BaseModel):
    """Snapshot of one ``<option>`` read from the live page.

    ``index`` is the 0-based position of the option within its list.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    value: str
    text: str
    selected: bool


class TeardownPolicy(str, enum.Enum):
    """How failures while quitting a session are reported."""

    PROPAGATE = "propagate"
    BEST_EFFORT = "best_effort"

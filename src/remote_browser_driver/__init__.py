"""Client-side driver for remote browser sessions."""

from .cookies import CookieJar
from .driver import Driver, start
from .elements import ElementHandle
from .errors import (
    CookieNotFoundError,
    DriverError,
    ElementNotFoundError,
    InvalidStateError,
    NoSelectionError,
    NotFoundError,
    OptionNotFoundError,
    RemoteCommandError,
    UnexpectedTagNameError,
)
from .factory import SessionRegistry, build_session, default_registry
from .models import (
    Cookie,
    Locator,
    LocatorStrategy,
    SelectOption,
    TeardownPolicy,
    by_class_name,
    by_css_selector,
    by_id,
    by_link_text,
    by_name,
    by_partial_link_text,
    by_tag_name,
    by_xpath,
    new_cookie,
)
from .search import find_many, find_one
from .select_list import SelectWidget

__all__ = [
    "Cookie",
    "CookieJar",
    "CookieNotFoundError",
    "Driver",
    "DriverError",
    "ElementHandle",
    "ElementNotFoundError",
    "InvalidStateError",
    "Locator",
    "LocatorStrategy",
    "NoSelectionError",
    "NotFoundError",
    "OptionNotFoundError",
    "RemoteCommandError",
    "SelectOption",
    "SelectWidget",
    "SessionRegistry",
    "TeardownPolicy",
    "UnexpectedTagNameError",
    "build_session",
    "by_class_name",
    "by_css_selector",
    "by_id",
    "by_link_text",
    "by_name",
    "by_partial_link_text",
    "by_tag_name",
    "by_xpath",
    "default_registry",
    "find_many",
    "find_one",
    "new_cookie",
    "start",
]

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Set

import pytest

from remote_browser_driver.browser.base import FrameTarget, RemoteElement, RemoteSession
from remote_browser_driver.driver import Driver
from remote_browser_driver.errors import CookieNotFoundError, ElementNotFoundError, RemoteCommandError
from remote_browser_driver.models import Cookie, Locator, LocatorStrategy

LOGIN_URL = "https://example.test/login"
OTHER_URL = "https://example.test/other"


class FakeElement(RemoteElement):
    """In-memory element used in place of a browser."""

    def __init__(
        self,
        tag: str,
        *,
        attrs: Optional[dict[str, str]] = None,
        text: str = "",
        children: tuple["FakeElement", ...] = (),
        selected: bool = False,
        enabled: bool = True,
        content: Optional["FakeElement"] = None,
    ) -> None:
        self.tag = tag
        self.attrs = dict(attrs or {})
        self.text = text
        self.children = list(children)
        self.selected = selected
        self.enabled = enabled
        self.content = content
        self.value = self.attrs.get("value")
        self.parent: Optional[FakeElement] = None
        self.attached = True
        self.clicks = 0
        self.submissions = 0
        for child in self.children:
            child.parent = self

    def descendants(self) -> Iterator["FakeElement"]:
        for child in self.children:
            yield child
            yield from child.descendants()

    def detach(self) -> None:
        self.attached = False
        for element in self.descendants():
            element.attached = False

    def matches(self, locator: Locator) -> bool:
        strategy, value = locator.strategy, locator.value
        if strategy == LocatorStrategy.ID:
            return self.attrs.get("id") == value
        if strategy == LocatorStrategy.NAME:
            return self.attrs.get("name") == value
        if strategy == LocatorStrategy.TAG_NAME:
            return self.tag == value.lower()
        if strategy == LocatorStrategy.CLASS_NAME:
            return value in self.attrs.get("class", "").split()
        if strategy == LocatorStrategy.LINK_TEXT:
            return self.tag == "a" and " ".join(self.text.split()) == " ".join(value.split())
        if strategy == LocatorStrategy.PARTIAL_LINK_TEXT:
            return self.tag == "a" and value in self.text
        if strategy == LocatorStrategy.CSS_SELECTOR:
            if value.startswith("#"):
                return self.attrs.get("id") == value[1:]
            if value.startswith("."):
                return value[1:] in self.attrs.get("class", "").split()
            return self.tag == value
        raise RemoteCommandError(f"invalid selector: {locator}")

    def _check(self) -> None:
        if not self.attached:
            raise RemoteCommandError("stale element reference")

    def click(self) -> None:
        self._check()
        if not self.enabled:
            raise RemoteCommandError("element not interactable")
        self.clicks += 1
        if self.tag == "input" and self.attrs.get("type") == "checkbox":
            self.selected = not self.selected

    def submit(self) -> None:
        self._check()
        form = self
        while form is not None and form.tag != "form":
            form = form.parent
        if form is None:
            raise RemoteCommandError("element is not inside a form")
        form.submissions += 1

    def clear(self) -> None:
        self._check()
        self.value = ""

    def send_keys(self, text: str) -> None:
        self._check()
        if not self.enabled:
            raise RemoteCommandError("element not interactable")
        self.value = (self.value or "") + text

    def get_text(self) -> str:
        self._check()
        return self.text

    def get_tag_name(self) -> str:
        self._check()
        return self.tag

    def get_attribute(self, name: str) -> Optional[str]:
        self._check()
        return self.attrs.get(name)

    def get_value(self) -> Optional[str]:
        self._check()
        if self.tag == "option":
            return self.attrs.get("value", self.text)
        return self.value

    def is_enabled(self) -> bool:
        self._check()
        return self.enabled

    def is_selected(self) -> bool:
        self._check()
        return self.selected

    def set_selected(self, selected: bool) -> None:
        self._check()
        if self.tag == "option":
            select = self.parent if self.parent is not None and self.parent.tag == "select" else None
            single = select is not None and "multiple" not in select.attrs
            if not selected and single and self.selected:
                raise RemoteCommandError("cannot deselect an option of a single-select list")
            if selected and single:
                for sibling in select.children:
                    sibling.selected = False
            self.selected = selected
        elif self.tag == "input" and self.attrs.get("type") in ("checkbox", "radio"):
            self.selected = selected
        else:
            raise RemoteCommandError(f"<{self.tag}> is not selectable")

    def find_element(self, locator: Locator) -> RemoteElement:
        for element in self.find_elements(locator):
            return element
        raise ElementNotFoundError(f"no element matches {locator}")

    def find_elements(self, locator: Locator) -> List[RemoteElement]:
        self._check()
        return [element for element in self.descendants() if element.matches(locator)]

    def __repr__(self) -> str:
        return f"<{self.tag} {self.attrs}>"


def option(value: str, text: str, selected: bool = False) -> FakeElement:
    return FakeElement("option", attrs={"value": value}, text=text, selected=selected)


def build_login_page() -> FakeElement:
    frame_document = FakeElement(
        "html",
        children=(FakeElement("p", attrs={"id": "promo"}, text="Buy now"),),
    )
    return FakeElement(
        "html",
        attrs={"title": "Login"},
        children=(
            FakeElement(
                "body",
                children=(
                    FakeElement(
                        "form",
                        attrs={"id": "login"},
                        children=(
                            FakeElement(
                                "input",
                                attrs={"id": "user", "name": "username", "class": "field text", "value": "guest"},
                            ),
                            FakeElement("input", attrs={"id": "remember", "type": "checkbox"}),
                            FakeElement("input", attrs={"id": "locked", "name": "locked"}, enabled=False),
                            FakeElement("button", attrs={"id": "go", "type": "submit"}, text="Sign in"),
                        ),
                    ),
                    FakeElement("a", attrs={"href": "/help", "class": "link"}, text="Need help?"),
                    FakeElement("a", attrs={"href": "/help/faq", "class": "link"}, text="Help FAQ"),
                    FakeElement(
                        "select",
                        attrs={"id": "color", "name": "color"},
                        children=(option("x", "Ex", selected=True), option("y", "Why")),
                    ),
                    FakeElement(
                        "select",
                        attrs={"id": "toppings", "multiple": ""},
                        children=(
                            option("cheese", "Cheese", selected=True),
                            option("ham", "Ham"),
                            option("ham", "Ham  (extra)"),
                            option("olive", "  Olives "),
                        ),
                    ),
                    FakeElement("iframe", attrs={"id": "ads", "name": "ads-frame"}, content=frame_document),
                ),
            ),
        ),
    )


def build_other_page() -> FakeElement:
    return FakeElement(
        "html",
        attrs={"title": "Other"},
        children=(FakeElement("body", children=(FakeElement("h1", text="Other page"),)),),
    )


class FakeSession(RemoteSession):
    """In-memory remote session over :class:`FakeElement` documents."""

    def __init__(self, pages: dict[str, Callable[[], FakeElement]]) -> None:
        self.pages = pages
        self.document = FakeElement("html")
        self.root = self.document
        self.url = "about:blank"
        self.history: list[str] = []
        self.position = -1
        self.windows = {"main"}
        self.current_window = "main"
        self.active: Optional[FakeElement] = None
        self.jar: list[Cookie] = []
        self.started = False
        self.quit_calls = 0
        self.quit_error: Optional[Exception] = None
        self.start_error: Optional[Exception] = None
        self.broken = False

    def start(self) -> None:
        if self.start_error is not None:
            raise self.start_error
        self.started = True

    def close(self) -> None:
        self.windows.discard(self.current_window)
        if not self.windows:
            self.quit()
        else:
            self.current_window = sorted(self.windows)[0]

    def quit(self) -> None:
        self.quit_calls += 1
        if self.quit_error is not None:
            raise self.quit_error
        self.started = False

    def _load(self, url: str) -> None:
        self.document.detach()
        builder = self.pages.get(url, lambda: FakeElement("html"))
        self.document = builder()
        self.root = self.document
        self.url = url

    def navigate_to(self, url: str) -> None:
        del self.history[self.position + 1 :]
        self.history.append(url)
        self.position = len(self.history) - 1
        self._load(url)

    def back(self) -> None:
        if self.position > 0:
            self.position -= 1
            self._load(self.history[self.position])

    def forward(self) -> None:
        if self.position < len(self.history) - 1:
            self.position += 1
            self._load(self.history[self.position])

    def refresh(self) -> None:
        self._load(self.url)

    def current_url(self) -> str:
        return self.url

    def title(self) -> str:
        return self.document.attrs.get("title", "")

    def page_source(self) -> str:
        return f"<html><!-- {self.url} --></html>"

    def window_handles(self) -> Set[str]:
        return set(self.windows)

    def window_handle(self) -> str:
        return self.current_window

    def switch_to_window(self, handle: str) -> None:
        if handle not in self.windows:
            raise RemoteCommandError(f"no such window: {handle}")
        self.current_window = handle

    def switch_to_frame(self, frame: FrameTarget) -> None:
        frames = [element for element in self.root.descendants() if element.tag == "iframe"]
        target: Optional[FakeElement] = None
        if isinstance(frame, FakeElement):
            target = frame
        elif isinstance(frame, int):
            target = frames[frame] if 0 <= frame < len(frames) else None
        else:
            target = next(
                (item for item in frames if frame in (item.attrs.get("name"), item.attrs.get("id"))),
                None,
            )
        if target is None or target.content is None:
            raise RemoteCommandError(f"no such frame: {frame!r}")
        self.root = target.content

    def switch_to_default_content(self) -> None:
        self.root = self.document

    def active_element(self) -> RemoteElement:
        if self.active is not None:
            return self.active
        return self.root.find_element(Locator.by_tag_name("body"))

    def find_element(self, locator: Locator) -> RemoteElement:
        if self.broken:
            raise RemoteCommandError("invalid session id")
        return self.root.find_element(locator)

    def find_elements(self, locator: Locator) -> List[RemoteElement]:
        if self.broken:
            raise RemoteCommandError("invalid session id")
        return self.root.find_elements(locator)

    def add_cookie(self, cookie: Cookie) -> None:
        self.jar.append(cookie)

    def get_cookie(self, name: str) -> Cookie:
        for cookie in self.jar:
            if cookie.name == name:
                return cookie
        raise CookieNotFoundError(name)

    def get_cookies(self) -> List[Cookie]:
        return list(self.jar)

    def delete_cookie_named(self, name: str) -> None:
        self.jar = [cookie for cookie in self.jar if cookie.name != name]

    def delete_all_cookies(self) -> None:
        self.jar.clear()


@pytest.fixture
def session() -> FakeSession:
    fake = FakeSession({LOGIN_URL: build_login_page, OTHER_URL: build_other_page})
    fake.start()
    fake.navigate_to(LOGIN_URL)
    return fake


@pytest.fixture
def driver(session: FakeSession) -> Driver:
    return Driver(session)

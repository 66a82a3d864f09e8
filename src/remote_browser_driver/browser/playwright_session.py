"""Playwright-powered remote session implementation."""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Set
from urllib.parse import urlparse

from playwright.sync_api import ElementHandle, Frame, Page
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from ..config import BrowserConfig
from ..errors import CookieNotFoundError, ElementNotFoundError, RemoteCommandError
from ..models import Cookie, Locator, LocatorStrategy
from .base import FrameTarget, RemoteElement, RemoteSession

LOGGER = logging.getLogger(__name__)

_TAG_NAME = "el => el.tagName.toLowerCase()"
_VALUE = "el => (el.value === undefined || el.value === null) ? null : String(el.value)"
_IS_SELECTED = "el => el.tagName === 'OPTION' ? el.selected : Boolean(el.checked)"
_SET_OPTION_SELECTED = """
(option, selected) => {
    if (option.selected === selected) {
        return;
    }
    const select = option.closest('select');
    if (!selected && select && !select.multiple) {
        throw new Error('Cannot deselect an option of a single-select list');
    }
    option.selected = selected;
    if (select) {
        select.dispatchEvent(new Event('input', { bubbles: true }));
        select.dispatchEvent(new Event('change', { bubbles: true }));
    }
}
"""
_SUBMIT = """
el => {
    const form = el.tagName === 'FORM' ? el : el.form;
    if (!form) {
        throw new Error('Element is not inside a form');
    }
    const event = new Event('submit', { bubbles: true, cancelable: true });
    if (form.dispatchEvent(event)) {
        form.submit();
    }
}
"""
_ACTIVE_ELEMENT = "() => document.activeElement || document.body"


@contextmanager
def _remote_command(name: str) -> Iterator[None]:
    try:
        yield
    except PlaywrightError as exc:
        raise RemoteCommandError(f"{name} failed: {exc}") from exc


def to_playwright_selector(locator: Locator) -> str:
    """Express ``locator`` in Playwright's selector syntax."""

    strategy, value = locator.strategy, locator.value
    if strategy == LocatorStrategy.ID:
        return f"css=[id={_css_string(value)}]"
    if strategy == LocatorStrategy.NAME:
        return f"css=[name={_css_string(value)}]"
    if strategy == LocatorStrategy.CLASS_NAME:
        class_name = value.strip()
        if len(class_name.split()) > 1:
            raise RemoteCommandError(f"Compound class names are not permitted: {value!r}")
        return f"css=[class~={_css_string(class_name)}]"
    if strategy in (LocatorStrategy.TAG_NAME, LocatorStrategy.CSS_SELECTOR):
        return f"css={value}"
    if strategy == LocatorStrategy.XPATH:
        return f"xpath={value}"
    text = _xpath_literal(" ".join(value.split()))
    if strategy == LocatorStrategy.LINK_TEXT:
        return f"xpath=//a[normalize-space(.)={text}]"
    if strategy == LocatorStrategy.PARTIAL_LINK_TEXT:
        return f"xpath=//a[contains(normalize-space(.), {text})]"
    raise ValueError(f"Unsupported locator strategy: {strategy}")


def _css_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _xpath_literal(value: str) -> str:
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = ", '\"', ".join(f'"{part}"' for part in value.split('"'))
    return f"concat({parts})"


class PlaywrightRemoteElement(RemoteElement):
    """Remote element backed by a Playwright element handle."""

    def __init__(self, handle: ElementHandle) -> None:
        self._handle = handle

    @property
    def handle(self) -> ElementHandle:
        return self._handle

    def click(self) -> None:
        with _remote_command("click"):
            self._handle.click()

    def submit(self) -> None:
        with _remote_command("submit"):
            self._handle.evaluate(_SUBMIT)

    def clear(self) -> None:
        with _remote_command("clear"):
            self._handle.fill("")

    def send_keys(self, text: str) -> None:
        with _remote_command("send_keys"):
            self._handle.type(text)

    def get_text(self) -> str:
        with _remote_command("get_text"):
            return self._handle.inner_text()

    def get_tag_name(self) -> str:
        with _remote_command("get_tag_name"):
            return self._handle.evaluate(_TAG_NAME)

    def get_attribute(self, name: str) -> Optional[str]:
        with _remote_command("get_attribute"):
            return self._handle.get_attribute(name)

    def get_value(self) -> Optional[str]:
        with _remote_command("get_value"):
            return self._handle.evaluate(_VALUE)

    def is_enabled(self) -> bool:
        with _remote_command("is_enabled"):
            return self._handle.is_enabled()

    def is_selected(self) -> bool:
        with _remote_command("is_selected"):
            return bool(self._handle.evaluate(_IS_SELECTED))

    def set_selected(self, selected: bool) -> None:
        with _remote_command("set_selected"):
            if self._handle.evaluate(_TAG_NAME) == "option":
                self._handle.evaluate(_SET_OPTION_SELECTED, selected)
            else:
                self._handle.set_checked(selected)

    def find_element(self, locator: Locator) -> RemoteElement:
        with _remote_command("find_element"):
            found = self._handle.query_selector(to_playwright_selector(locator))
        if found is None:
            raise ElementNotFoundError(f"No element matches {locator}")
        return PlaywrightRemoteElement(found)

    def find_elements(self, locator: Locator) -> List[RemoteElement]:
        with _remote_command("find_elements"):
            found = self._handle.query_selector_all(to_playwright_selector(locator))
        return [PlaywrightRemoteElement(handle) for handle in found]


class PlaywrightRemoteSession(RemoteSession):
    """Remote session backed by Playwright's synchronous API."""

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        *,
        engine: str = "chromium",
        channel: Optional[str] = None,
    ) -> None:
        self._config = config or BrowserConfig()
        self._engine = engine
        self._channel = channel
        self._playwright = None
        self._browser = None
        self._context = None
        self._page: Optional[Page] = None
        self._frame: Optional[Frame] = None
        self._handles: Dict[str, Page] = {}

    def start(self) -> None:
        LOGGER.info("Starting Playwright %s session", self._engine)
        launch_kwargs: dict[str, Any] = {"headless": self._config.headless}
        if self._channel:
            launch_kwargs["channel"] = self._channel
        if self._config.slow_mo:
            launch_kwargs["slow_mo"] = self._config.slow_mo * 1000
        if self._engine == "chromium":
            launch_kwargs["args"] = ["--no-sandbox", "--disable-dev-shm-usage"]
        viewport = {"width": self._config.viewport_width, "height": self._config.viewport_height}
        user_data_dir: Optional[Path] = self._config.profile_path
        try:
            with _remote_command("start"):
                self._playwright = sync_playwright().start()
                browser_type = getattr(self._playwright, self._engine)
                if user_data_dir:
                    user_data_dir.mkdir(parents=True, exist_ok=True)
                    self._context = browser_type.launch_persistent_context(
                        str(user_data_dir),
                        **launch_kwargs,
                        viewport=viewport,
                    )
                    pages = self._context.pages
                    page = pages[0] if pages else self._context.new_page()
                else:
                    self._browser = browser_type.launch(**launch_kwargs)
                    self._context = self._browser.new_context(viewport=viewport)
                    page = self._context.new_page()
                if self._config.timeout is not None:
                    self._context.set_default_timeout(self._config.timeout * 1000)
        except RemoteCommandError:
            self._abandon_start()
            raise
        self._context.on("page", self._handle_for)
        self._activate(page)

    def close(self) -> None:
        page = self._require_page()
        LOGGER.debug("Closing window %s", self._handle_for(page))
        with _remote_command("close"):
            page.close()
        self._handles = {
            handle: known for handle, known in self._handles.items() if not known.is_closed()
        }
        remaining = [candidate for candidate in self._context.pages if not candidate.is_closed()]
        if remaining:
            self._activate(remaining[0])
        else:
            self.quit()

    def quit(self) -> None:
        LOGGER.info("Quitting Playwright %s session", self._engine)
        try:
            with _remote_command("quit"):
                try:
                    if self._context:
                        self._context.close()
                finally:
                    if self._browser:
                        self._browser.close()
                    if self._playwright:
                        self._playwright.stop()
        finally:
            self._context = None
            self._browser = None
            self._playwright = None
            self._page = None
            self._frame = None
            self._handles.clear()

    def navigate_to(self, url: str) -> None:
        page = self._require_page()
        LOGGER.debug("Navigating to %s", url)
        with _remote_command("navigate_to"):
            page.goto(url, wait_until="load")
        self._frame = page.main_frame

    def back(self) -> None:
        page = self._require_page()
        with _remote_command("back"):
            page.go_back()
        self._frame = page.main_frame

    def forward(self) -> None:
        page = self._require_page()
        with _remote_command("forward"):
            page.go_forward()
        self._frame = page.main_frame

    def refresh(self) -> None:
        page = self._require_page()
        with _remote_command("refresh"):
            page.reload()
        self._frame = page.main_frame

    def current_url(self) -> str:
        return self._require_page().url

    def title(self) -> str:
        page = self._require_page()
        with _remote_command("title"):
            return page.title()

    def page_source(self) -> str:
        frame = self._require_frame()
        with _remote_command("page_source"):
            return frame.content()

    def window_handles(self) -> Set[str]:
        self._require_page()
        return {self._handle_for(page) for page in self._context.pages if not page.is_closed()}

    def window_handle(self) -> str:
        return self._handle_for(self._require_page())

    def switch_to_window(self, handle: str) -> None:
        self._require_page()
        page = self._handles.get(handle)
        if page is None or page.is_closed():
            raise RemoteCommandError(f"No such window: {handle}")
        with _remote_command("switch_to_window"):
            page.bring_to_front()
        self._activate(page)

    def switch_to_frame(self, frame: FrameTarget) -> None:
        current = self._require_frame()
        target: Optional[Frame] = None
        with _remote_command("switch_to_frame"):
            if isinstance(frame, PlaywrightRemoteElement):
                target = frame.handle.content_frame()
            elif isinstance(frame, int):
                children = current.child_frames
                if 0 <= frame < len(children):
                    target = children[frame]
            elif isinstance(frame, str):
                target = next((child for child in current.child_frames if child.name == frame), None)
                if target is None:
                    quoted = _css_string(frame)
                    element = current.query_selector(f"css=iframe[id={quoted}], frame[id={quoted}]")
                    target = element.content_frame() if element else None
        if target is None:
            raise RemoteCommandError(f"No such frame: {frame!r}")
        self._frame = target

    def switch_to_default_content(self) -> None:
        self._frame = self._require_page().main_frame

    def active_element(self) -> RemoteElement:
        frame = self._require_frame()
        with _remote_command("active_element"):
            element = frame.evaluate_handle(_ACTIVE_ELEMENT).as_element()
        if element is None:
            raise RemoteCommandError("Document has no active element")
        return PlaywrightRemoteElement(element)

    def find_element(self, locator: Locator) -> RemoteElement:
        frame = self._require_frame()
        with _remote_command("find_element"):
            found = frame.query_selector(to_playwright_selector(locator))
        if found is None:
            raise ElementNotFoundError(f"No element matches {locator}")
        return PlaywrightRemoteElement(found)

    def find_elements(self, locator: Locator) -> List[RemoteElement]:
        frame = self._require_frame()
        with _remote_command("find_elements"):
            found = frame.query_selector_all(to_playwright_selector(locator))
        return [PlaywrightRemoteElement(handle) for handle in found]

    def add_cookie(self, cookie: Cookie) -> None:
        page = self._require_page()
        domain = cookie.domain or urlparse(page.url).hostname
        if not domain:
            raise RemoteCommandError(
                f"Cannot add cookie {cookie.name!r} without a domain before a page is loaded"
            )
        with _remote_command("add_cookie"):
            self._context.add_cookies([_cookie_to_playwright(cookie, domain)])

    def get_cookie(self, name: str) -> Cookie:
        for cookie in self.get_cookies():
            if cookie.name == name:
                return cookie
        raise CookieNotFoundError(f"No cookie named {name!r}")

    def get_cookies(self) -> List[Cookie]:
        page = self._require_page()
        with _remote_command("get_cookies"):
            if page.url.startswith(("http://", "https://")):
                raw = self._context.cookies(page.url)
            else:
                raw = self._context.cookies()
        return [_cookie_from_playwright(item) for item in raw]

    def delete_cookie_named(self, name: str) -> None:
        self._require_page()
        with _remote_command("delete_cookie_named"):
            self._context.clear_cookies(name=name)

    def delete_all_cookies(self) -> None:
        self._require_page()
        with _remote_command("delete_all_cookies"):
            self._context.clear_cookies()

    def _activate(self, page: Page) -> None:
        self._handle_for(page)
        self._page = page
        self._frame = page.main_frame

    def _handle_for(self, page: Page) -> str:
        for handle, known in self._handles.items():
            if known is page:
                return handle
        handle = uuid.uuid4().hex
        self._handles[handle] = page
        return handle

    def _require_page(self) -> Page:
        if not self._page or not self._context:
            raise RemoteCommandError("Browser session is not started")
        return self._page

    def _require_frame(self) -> Frame:
        self._require_page()
        if self._frame is None:
            raise RemoteCommandError("Browser session has no current frame")
        return self._frame

    def _abandon_start(self) -> None:
        try:
            self.quit()
        except RemoteCommandError:
            LOGGER.warning("Failed to clean up after unsuccessful start", exc_info=True)


def _cookie_to_playwright(cookie: Cookie, domain: str) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": cookie.name,
        "value": cookie.value,
        "domain": domain,
        "path": cookie.path,
        "secure": cookie.secure,
        "httpOnly": cookie.http_only,
    }
    if cookie.expiry is not None:
        payload["expires"] = cookie.expiry.timestamp()
    return payload


def _cookie_from_playwright(raw: dict[str, Any]) -> Cookie:
    expires = raw.get("expires")
    expiry = None
    if expires is not None and expires > 0:
        expiry = datetime.fromtimestamp(expires, tz=timezone.utc)
    return Cookie(
        name=raw["name"],
        value=raw["value"],
        path=raw.get("path") or "/",
        domain=raw.get("domain"),
        expiry=expiry,
        secure=bool(raw.get("secure", False)),
        http_only=bool(raw.get("httpOnly", False)),
    )

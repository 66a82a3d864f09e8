import pytest

from remote_browser_driver.browser.playwright_session import PlaywrightRemoteSession, to_playwright_selector
from remote_browser_driver.errors import RemoteCommandError
from remote_browser_driver.models import Locator


@pytest.mark.parametrize(
    ("locator", "expected"),
    [
        (Locator.by_id("main"), 'css=[id="main"]'),
        (Locator.by_id('say "hi"'), 'css=[id="say \\"hi\\""]'),
        (Locator.by_name("q"), 'css=[name="q"]'),
        (Locator.by_class_name(" btn "), 'css=[class~="btn"]'),
        (Locator.by_tag_name("select"), "css=select"),
        (Locator.by_css_selector("form > input"), "css=form > input"),
        (Locator.by_xpath("//div[@id='x']"), "xpath=//div[@id='x']"),
        (Locator.by_link_text("Sign  in"), 'xpath=//a[normalize-space(.)="Sign in"]'),
        (Locator.by_partial_link_text("Sign"), 'xpath=//a[contains(normalize-space(.), "Sign")]'),
    ],
)
def test_locators_map_to_playwright_selectors(locator, expected):
    assert to_playwright_selector(locator) == expected


def test_link_text_quoting():
    assert to_playwright_selector(Locator.by_link_text('say "hi"')) == (
        "xpath=//a[normalize-space(.)='say \"hi\"']"
    )
    assert to_playwright_selector(Locator.by_link_text("it's \"ok\"")) == (
        "xpath=//a[normalize-space(.)=concat(\"it's \", '\"', \"ok\", '\"', \"\")]"
    )


def test_commands_require_started_session():
    session = PlaywrightRemoteSession()
    with pytest.raises(RemoteCommandError, match="not started"):
        session.find_element(Locator.by_id("main"))
    with pytest.raises(RemoteCommandError, match="not started"):
        session.navigate_to("https://example.test")


def test_compound_class_name_is_rejected():
    with pytest.raises(RemoteCommandError, match="Compound class names"):
        to_playwright_selector(Locator.by_class_name("btn primary"))

"""Command line interface for remote-browser-driver."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import load_config
from .driver import Driver
from .errors import DriverError, InvalidStateError
from .factory import build_session
from .models import Locator, LocatorStrategy, TeardownPolicy

LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Remote Browser Driver entry point")

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to YAML configuration."),
]
EnvFileOption = Annotated[
    Optional[Path],
    typer.Option("--env-file", help="Path to an .env file with default configuration values."),
]
BrowserOption = Annotated[
    Optional[str],
    typer.Option("--browser", "-b", help="Browser to drive (chromium, chrome, firefox, ...)."),
]
HeadlessOption = Annotated[
    Optional[bool],
    typer.Option("--headless/--headed", help="Run the browser in headless mode (or headed)."),
]
StrategyOption = Annotated[
    LocatorStrategy,
    typer.Option("--by", help="Locator strategy."),
]
ValueOption = Annotated[str, typer.Option("--value", help="Value to locate.")]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before executing any command."""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Print the package version."""

    try:
        typer.echo(get_version("remote-browser-driver"))
    except PackageNotFoundError:  # pragma: no cover - when running from source tree
        typer.echo("0.0.0")


@app.command()
def find(
    url: Annotated[str, typer.Argument(help="Page to open.")],
    by: StrategyOption = LocatorStrategy.CSS_SELECTOR,
    value: ValueOption = "body",
    find_all: Annotated[bool, typer.Option("--all", help="List every match.")] = False,
    config_path: ConfigOption = None,
    env_file: EnvFileOption = None,
    browser: BrowserOption = None,
    headless: HeadlessOption = None,
) -> None:
    """Open a page and list the elements matching a locator."""

    locator = Locator(strategy=by, value=value)
    with _open(url, config_path, env_file, browser, headless) as driver:
        if find_all:
            elements = driver.find_elements(locator)
        else:
            element = driver.find_element(locator)
            elements = [element] if element is not None else []
        if not elements:
            typer.echo(f"No element matches {locator}", err=True)
            raise typer.Exit(code=1)
        table = Table("#", "Tag", "Id", "Text", title=str(locator))
        for position, element in enumerate(elements, start=1):
            table.add_row(
                str(position),
                element.get_tag_name(),
                element.get_attribute("id") or "",
                element.get_text().strip(),
            )
        Console().print(table)


@app.command()
def options(
    url: Annotated[str, typer.Argument(help="Page to open.")],
    by: StrategyOption = LocatorStrategy.CSS_SELECTOR,
    value: ValueOption = "select",
    config_path: ConfigOption = None,
    env_file: EnvFileOption = None,
    browser: BrowserOption = None,
    headless: HeadlessOption = None,
) -> None:
    """Open a page and list the options of a select list."""

    locator = Locator(strategy=by, value=value)
    with _open(url, config_path, env_file, browser, headless) as driver:
        try:
            select = driver.select_list(locator)
        except InvalidStateError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=2) from exc
        if select is None:
            typer.echo(f"No element matches {locator}", err=True)
            raise typer.Exit(code=1)
        title = f"{locator} ({'multiple' if select.is_multiple() else 'single'})"
        table = Table("#", "Value", "Text", "Selected", title=title)
        for option in select.all_options():
            table.add_row(
                str(option.index + 1),
                option.value,
                option.text,
                "yes" if option.selected else "",
            )
        Console().print(table)


@app.command()
def cookies(
    url: Annotated[str, typer.Argument(help="Page to open.")],
    config_path: ConfigOption = None,
    env_file: EnvFileOption = None,
    browser: BrowserOption = None,
    headless: HeadlessOption = None,
) -> None:
    """Open a page and list the cookies it sets."""

    with _open(url, config_path, env_file, browser, headless) as driver:
        table = Table("Name", "Value", "Path", "Domain", "Expiry", title=url)
        for cookie in sorted(driver.cookies.all(), key=lambda item: item.name):
            table.add_row(
                cookie.name,
                cookie.value,
                cookie.path,
                cookie.domain or "",
                cookie.expiry.isoformat() if cookie.expiry else "session",
            )
        Console().print(table)


def _open(
    url: str,
    config_path: Optional[Path],
    env_file: Optional[Path],
    browser: Optional[str],
    headless: Optional[bool],
) -> Driver:
    overrides: dict[str, Any] = {}
    if browser is not None or headless is not None:
        overrides.setdefault("browser", {})
        if browser is not None:
            overrides["browser"]["browser"] = browser
        if headless is not None:
            overrides["browser"]["headless"] = headless

    config = load_config(config_path, env_file=env_file, **overrides)
    try:
        session = build_session(config.browser)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc

    driver = Driver(session, teardown=config.teardown)
    try:
        session.start()
        driver.get(url)
    except DriverError as exc:
        LOGGER.error("Could not open %s: %s", url, exc)
        driver.quit(TeardownPolicy.BEST_EFFORT)
        raise typer.Exit(code=1) from exc
    return driver


if __name__ == "__main__":
    app()

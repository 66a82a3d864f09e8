"""Errors raised by the remote browser driver."""

from __future__ import annotations


class DriverError(RuntimeError):
    """Base class for all driver errors."""


class NotFoundError(DriverError):
    """Raised by a session when a lookup matched nothing."""


class ElementNotFoundError(NotFoundError):
    """Raised by a session when no element matches a locator."""


class CookieNotFoundError(NotFoundError):
    """Raised by a session when no cookie has the requested name."""


class RemoteCommandError(DriverError):
    """Raised when a remote command fails for any reason other than not-found.

    Stale element references, closed sessions and commands that are invalid
    for the target element all end up here.
    """


class OptionNotFoundError(DriverError):
    """Raised when a select list mutation targets a missing option."""


class InvalidStateError(DriverError):
    """Raised when an operation is not valid in the widget's current mode."""


class UnexpectedTagNameError(InvalidStateError):
    """Raised when an element is wrapped as a widget it does not implement."""


class NoSelectionError(DriverError):
    """Raised when a select list has no selected option."""

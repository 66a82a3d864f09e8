"""Interaction with ``<select>`` lists.

Indices accepted by the public methods count from 1, the way a person counts
the rows of a list. They are converted to 0-based positions on entry and
everything below that point is 0-based.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from .elements import ElementHandle
from .errors import InvalidStateError, NoSelectionError, OptionNotFoundError, UnexpectedTagNameError
from .models import Locator, SelectOption

LOGGER = logging.getLogger(__name__)

_OPTION = Locator.by_tag_name("option")


class SelectWidget:
    """View of an element known to be a ``<select>`` control.

    The widget holds no state of its own: each call re-reads the options from
    the session.
    """

    def __init__(self, element: ElementHandle) -> None:
        tag_name = element.get_tag_name().lower()
        if tag_name != "select":
            raise UnexpectedTagNameError(f"Element should have been 'select' but was {tag_name!r}")
        self._element = element

    @property
    def element(self) -> ElementHandle:
        return self._element

    def is_multiple(self) -> bool:
        value = self._element.get_attribute("multiple")
        return value is not None and value.lower() != "false"

    def all_options(self) -> List[SelectOption]:
        return [_snapshot(index, option) for index, option in enumerate(self._options())]

    def all_selected_options(self) -> List[SelectOption]:
        return [option for option in self.all_options() if option.selected]

    def first_selected_option(self) -> SelectOption:
        for index, option in enumerate(self._options()):
            if option.is_selected():
                return _snapshot(index, option)
        raise NoSelectionError("No options are selected")

    def select_by_index(self, index: int) -> None:
        """Select the option at 1-based position ``index``."""

        self._set_selected(self._option_at(index - 1, index), True)

    def deselect_by_index(self, index: int) -> None:
        """Deselect the option at 1-based position ``index``."""

        self._require_multiple("deselect an option")
        self._set_selected(self._option_at(index - 1, index), False)

    def select_by_value(self, value: str) -> None:
        """Select every option whose value is ``value``."""

        self._select_matching(lambda option: option.get_value() == value, f"value {value!r}")

    def deselect_by_value(self, value: str) -> None:
        """Deselect every option whose value is ``value``."""

        self._require_multiple("deselect an option")
        for option in self._matching(lambda option: option.get_value() == value, f"value {value!r}"):
            self._set_selected(option, False)

    def select_by_text(self, text: str) -> None:
        """Select every option whose visible text is ``text``."""

        wanted = _normalise(text)
        self._select_matching(lambda option: _normalise(option.get_text()) == wanted, f"text {text!r}")

    def deselect_by_text(self, text: str) -> None:
        """Deselect every option whose visible text is ``text``."""

        self._require_multiple("deselect an option")
        wanted = _normalise(text)
        for option in self._matching(
            lambda option: _normalise(option.get_text()) == wanted, f"text {text!r}"
        ):
            self._set_selected(option, False)

    def deselect_all(self) -> None:
        self._require_multiple("deselect all options")
        for option in self._options():
            self._set_selected(option, False)

    def _options(self) -> List[ElementHandle]:
        return self._element.find_elements(_OPTION)

    def _option_at(self, position: int, index: int) -> ElementHandle:
        options = self._options()
        if not 0 <= position < len(options):
            raise OptionNotFoundError(f"Cannot locate option with index {index}")
        return options[position]

    def _matching(self, predicate: Callable[[ElementHandle], bool], description: str) -> List[ElementHandle]:
        matches = [option for option in self._options() if predicate(option)]
        if not matches:
            raise OptionNotFoundError(f"Cannot locate option with {description}")
        return matches

    def _select_matching(self, predicate: Callable[[ElementHandle], bool], description: str) -> None:
        matches = self._matching(predicate, description)
        if not self.is_multiple():
            # a single-select list can only hold one of the matches
            matches = matches[:1]
        for option in matches:
            self._set_selected(option, True)

    def _require_multiple(self, action: str) -> None:
        if not self.is_multiple():
            raise InvalidStateError(f"You may only {action} of a multi-select list")

    @staticmethod
    def _set_selected(option: ElementHandle, selected: bool) -> None:
        if option.is_selected() != selected:
            LOGGER.debug("%s option %r", "Selecting" if selected else "Deselecting", option)
            option.toggle()


def _snapshot(index: int, option: ElementHandle) -> SelectOption:
    return SelectOption(
        index=index,
        value=option.get_value() or "",
        text=option.get_text(),
        selected=option.is_selected(),
    )


def _normalise(text: str) -> str:
    return " ".join(text.split())

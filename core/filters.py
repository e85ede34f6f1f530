"""Filter state: the read-only view consumed by the core and a mutable filter.

A filter state is a mapping of category name to ``{"value": ...}`` where the
value is either free text (``Keywords``) or a list of selected strings.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Optional, Union

from .config import DEFAULT_FILTER_STATE, KEYWORDS
from .signals import Notifier

logger = logging.getLogger(__name__)

FilterValue = Union[str, list[str]]
FilterStateDict = dict[str, dict[str, Any]]


def keyword_query(state: FilterStateDict) -> str:
    """Return the free-text keyword query of ``state`` (empty when unset)."""
    value = (state.get(KEYWORDS) or {}).get("value")
    return value if isinstance(value, str) else ""


def category_values(state: FilterStateDict, name: str) -> list[str]:
    """Return the selected values of a category filter (empty when inactive)."""
    value = (state.get(name) or {}).get("value")
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


class Filter:
    """Mutable filter state with a version counter and change notifications.

    ``initial_state`` is applied once at construction.  ``reset()`` returns to
    ``default_state`` (or :data:`DEFAULT_FILTER_STATE` when omitted).
    """

    def __init__(
        self,
        default_state: Optional[FilterStateDict] = None,
        initial_state: Optional[FilterStateDict] = None,
    ):
        base = DEFAULT_FILTER_STATE if default_state is None else default_state
        self._default = copy.deepcopy(base)
        start = self._default if initial_state is None else initial_state
        self._state: FilterStateDict = copy.deepcopy(start)
        self._version = 0
        self._notifier = Notifier()

    @property
    def version(self) -> int:
        return self._version

    def get_state(self) -> FilterStateDict:
        """Return a snapshot of the current state; mutating it has no effect."""
        return copy.deepcopy(self._state)

    def get_value(self, name: str) -> Optional[FilterValue]:
        entry = self._state.get(name)
        return copy.deepcopy(entry.get("value")) if entry else None

    def set_filter(self, name: str, value: Optional[FilterValue]) -> None:
        """Set (or with ``None``/empty value, clear) one category filter.

        Selections are stored as sorted lists so any iterable of the same
        values compares equal.
        """
        normalized = value if value is None or isinstance(value, str) else sorted(value)
        if not normalized:
            self.clear_filter(name)
            return
        if self.get_value(name) == normalized:
            return
        self._state[name] = {"value": normalized}
        self._changed(f"set {name}")

    def clear_filter(self, name: str) -> None:
        if name not in self._state:
            return
        del self._state[name]
        self._changed(f"cleared {name}")

    def reset(self) -> None:
        """Restore the default state."""
        if self._state == self._default:
            return
        self._state = copy.deepcopy(self._default)
        self._changed("reset")

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    def _changed(self, reason: str) -> None:
        self._version += 1
        logger.debug("Filter %s (version %d)", reason, self._version)
        self._notifier.notify()

"""Explicit version-counter primitives for pull-based derived values.

A :class:`Signal` holds a value and a version that advances on every change.
A :class:`Derived` caches a computed value together with the versions of its
inputs at the time of computation and recomputes only when one of them has
advanced.  Reads never observe a half-applied mutation because subscribers
run synchronously before :meth:`Signal.set` returns.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class Versioned(Protocol):
    """Anything exposing a monotonically increasing ``version``."""

    @property
    def version(self) -> int:
        ...


class Notifier:
    """Minimal subscription list shared by signals and state containers."""

    def __init__(self):
        self._subscribers: list[Callable[[], None]] = []

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback``; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def notify(self) -> None:
        for callback in list(self._subscribers):
            callback()


class Signal(Generic[T]):
    """A mutable value with a version counter."""

    def __init__(self, value: T):
        self._value = value
        self._version = 0
        self._notifier = Notifier()

    @property
    def version(self) -> int:
        return self._version

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Replace the value; identical objects are not treated as a change."""
        if value is self._value:
            return
        self._value = value
        self.touch()

    def touch(self) -> None:
        """Advance the version without replacing the value."""
        self._version += 1
        self._notifier.notify()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._notifier.subscribe(callback)


class Derived(Generic[T]):
    """A value computed from versioned inputs and cached until they change."""

    def __init__(self, compute: Callable[[], T], *inputs: Versioned, name: str = ""):
        self._compute = compute
        self._inputs = inputs
        self._name = name or getattr(compute, "__name__", "derived")
        self._value: Any = _UNSET
        self._seen: Optional[tuple[int, ...]] = None

    def _input_versions(self) -> tuple[int, ...]:
        return tuple(source.version for source in self._inputs)

    @property
    def is_stale(self) -> bool:
        return self._value is _UNSET or self._seen != self._input_versions()

    def get(self) -> T:
        versions = self._input_versions()
        if self._value is _UNSET or versions != self._seen:
            logger.debug("Recomputing %s at input versions %s", self._name, versions)
            self._value = self._compute()
            self._seen = versions
        return self._value

    def invalidate(self) -> None:
        """Drop the cached value so the next read recomputes."""
        self._value = _UNSET
        self._seen = None

"""Observable values: state that tracks its readers.

When an Observable is read inside a reaction, the dependency is registered
automatically. When the value changes, every dependent reaction re-runs.

There is no public setter. The owner of an Observable (a preference cell)
commits new values through _commit() once they are safely persisted. An
observer that raises is logged and skipped; the commit and the remaining
observers are not affected.
"""

from __future__ import annotations

import logging
import weakref
from typing import Generic, TypeVar

from prefcell import _anchor
from prefcell._tracking import schedule, track

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(Generic[T]):
    """A single observable value with automatic dependency tracking."""

    __slots__ = ("_id", "__weakref__")

    def __init__(self, value: T) -> None:
        self._id = _anchor.new_id()
        _anchor.values[self._id] = value
        _anchor.observers[self._id] = set()
        weakref.finalize(self, _anchor.forget, self._id)

    def get(self) -> T:
        """Read the value. If inside a reaction, registers the dependency."""
        track(self)
        return _anchor.values[self._id]

    def peek(self) -> T:
        """Read the value without registering a dependency."""
        return _anchor.values[self._id]

    def _commit(self, value: T) -> bool:
        """Store value and notify observers. Returns False if nothing changed."""
        old = _anchor.values[self._id]
        if old is value or old == value:
            return False
        _anchor.values[self._id] = value
        self._notify()
        return True

    def _notify(self) -> None:
        for observer in list(_anchor.observers[self._id]):
            try:
                schedule(observer)
            except Exception:
                logger.exception("Observer %r failed", observer)

    def _add_observer(self, observer) -> None:
        _anchor.observers[self._id].add(observer)

    def _remove_observer(self, observer) -> None:
        _anchor.observers[self._id].discard(observer)

    @property
    def observer_count(self) -> int:
        return len(_anchor.observers[self._id])

    def dispose(self) -> None:
        """Detach every observer. The last value stays readable."""
        for observer in list(_anchor.observers[self._id]):
            observer._dependencies.discard(self)
        _anchor.observers[self._id].clear()

    def __repr__(self) -> str:
        return f"Observable({_anchor.values[self._id]!r})"

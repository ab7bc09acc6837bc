"""Reactions: side effects triggered by observable state changes.

Preference consumers subscribe through these. Reading cell.value inside a
reaction registers the cell, and every committed update re-runs it.

Two flavors:
- autorun(fn): runs fn immediately, re-runs when any observable it read changes.
- reaction(data_fn, effect_fn): tracks data_fn, calls effect_fn with the new
  value only when data_fn's result changes.

All state lives in _anchor; instances are thin handles holding an _id.
"""

from __future__ import annotations

import weakref
from typing import Callable, TypeVar

from prefcell import _anchor
from prefcell._tracking import current_derivation

T = TypeVar("T")


class Reaction:
    """A reactive side effect that re-runs when its dependencies change."""

    __slots__ = ("_id", "__weakref__")

    def __init__(self, fn: Callable[[], object]) -> None:
        self._id = _anchor.new_id()
        _anchor.derivation_fns[self._id] = fn
        _anchor.dependencies[self._id] = set()
        _anchor.disposed[self._id] = False
        weakref.finalize(self, _anchor.forget, self._id)

    @property
    def _fn(self) -> Callable[[], object]:
        return _anchor.derivation_fns[self._id]

    @property
    def _dependencies(self) -> set:
        return _anchor.dependencies[self._id]

    @property
    def disposed(self) -> bool:
        return _anchor.disposed[self._id]

    def _untrack(self) -> None:
        deps = _anchor.dependencies.get(self._id, set())
        for dep in deps:
            dep._remove_observer(self)
        deps.clear()

    def _evaluate(self):
        """Call the tracked function with dependency collection switched on."""
        self._untrack()
        token = current_derivation.set(self)
        try:
            return self._fn()
        finally:
            current_derivation.reset(token)

    def _run(self) -> None:
        if self.disposed:
            return
        self._evaluate()

    def dispose(self) -> None:
        """Stop this reaction. Disconnects from all dependencies and drops its function."""
        _anchor.disposed[self._id] = True
        self._untrack()
        _anchor.dependencies.pop(self._id, None)
        _anchor.derivation_fns.pop(self._id, None)

    def __repr__(self) -> str:
        state = "disposed" if self.disposed else "active"
        name = getattr(_anchor.derivation_fns.get(self._id), "__name__", "fn")
        return f"{type(self).__name__}({name}, {state})"


class _DataReaction(Reaction):
    """reaction(data_fn, effect_fn): fire effect_fn only on a changed result."""

    __slots__ = ("_effect_fn", "_last_value", "_initialized")

    def __init__(self, data_fn: Callable[[], T], effect_fn: Callable[[T], None]) -> None:
        super().__init__(data_fn)
        self._effect_fn = effect_fn
        self._last_value = None
        self._initialized = False

    def _run(self) -> None:
        if self.disposed:
            return
        new_value = self._evaluate()
        if not self._initialized or new_value != self._last_value:
            self._last_value = new_value
            self._initialized = True
            self._effect_fn(new_value)

    def _prime(self) -> None:
        """Establish dependencies and remember the result without firing."""
        self._last_value = self._evaluate()
        self._initialized = True


def autorun(fn: Callable[[], object]) -> Reaction:
    """Run fn immediately, then re-run whenever any observable it reads changes.

    Returns the Reaction (call .dispose() to stop).

    Usage:
        dark_mode = scalar_pref(store, "darkMode", False)
        log = []

        r = autorun(lambda: log.append(dark_mode.value))
        # log == [False]

        await dark_mode.update(lambda v: not v)
        # log == [False, True]

        r.dispose()
    """
    r = Reaction(fn)
    r._run()
    return r


def reaction(
    data_fn: Callable[[], T],
    effect_fn: Callable[[T], None],
    *,
    fire_immediately: bool = False,
) -> _DataReaction:
    """Track data_fn's observables; call effect_fn when the result changes.

    Unlike autorun, effect_fn only fires when data_fn's *return value*
    changes, not on every dependency notification.

    Usage:
        font = scalar_pref(store, "fontSize", 12)
        sizes = []
        r = reaction(lambda: font.value, sizes.append)
        # sizes == []; data_fn ran to establish deps, effect held back

        await font.set(14)
        # sizes == [14]
    """
    r = _DataReaction(data_fn, effect_fn)
    if fire_immediately:
        r._run()
    else:
        r._prime()
    return r

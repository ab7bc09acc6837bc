"""Preference cells: observable values bound to one key of a ValueStore.

A cell is seeded from the store when it is built and written back through
update() only. The in-memory value advances after the store write has
completed, never before, and never when the write or the conversion
preceding it fails.

Overlapping updates are not serialized. Each computes its next value from
the state at the moment it was called, and whichever write finishes last
decides both the stored and the in-memory value.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, TypeVar

from prefcell.codec import Codec
from prefcell.exceptions import (
    PrefDecodeError,
    PrefDisposedError,
    PrefEncodeError,
    PrefKindError,
    PrefMutationError,
    PrefStoreError,
)
from prefcell.kinds import Scalar, ScalarKind
from prefcell.observable import Observable
from prefcell.store import ValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PrefCell(ABC, Generic[T]):
    """Shared update protocol. Subclasses decide how a value becomes a write.

    Readers and updaters get copies from _snapshot(); the committed value
    itself is never handed out.
    """

    __slots__ = ("_store", "_key", "_state", "_in_flight", "_disposed")

    def __init__(self, store: ValueStore, key: str, initial: T) -> None:
        self._store = store
        self._key = key
        self._state: Observable[T] = Observable(initial)
        self._in_flight = 0
        self._disposed = False

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> T:
        """Current value. Inside a reaction, registers the dependency."""
        return self._snapshot(self._state.get())

    @value.setter
    def value(self, _value: T) -> None:
        raise PrefMutationError(
            f"{type(self).__name__} {self._key!r} is read-only; "
            "use `await cell.update(fn)` or `await cell.set(value)`",
            key=self._key,
        )

    def peek(self) -> T:
        """Current value without dependency tracking."""
        return self._snapshot(self._state.peek())

    @property
    def in_flight(self) -> int:
        """Store writes issued by update() that have not completed yet."""
        return self._in_flight

    @property
    def is_mutating(self) -> bool:
        return self._in_flight > 0

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def update(self, updater: Callable[[T], T]) -> T:
        """Persist updater(current) and then publish it. Returns the new value.

        Raises PrefDisposedError after dispose(), the subclass's conversion
        error (PrefKindError / PrefEncodeError) before any write, and
        PrefStoreError if the write fails. The value is unchanged on failure.
        """
        if self._disposed:
            raise PrefDisposedError(f"cell {self._key!r} is disposed", key=self._key)

        value, payload = self._prepare(updater(self.peek()))

        self._in_flight += 1
        try:
            await self._write(payload)
        except Exception as exc:
            logger.warning("Store write failed for %r: %s", self._key, exc)
            raise PrefStoreError(
                f"could not persist {self._key!r}: {exc}", key=self._key
            ) from exc
        finally:
            self._in_flight -= 1

        self._state._commit(value)
        logger.debug("Committed %r = %r", self._key, value)
        return self._snapshot(value)

    async def set(self, value: T) -> T:
        """Shorthand for update(lambda _: value)."""
        return await self.update(lambda _current: value)

    def dispose(self) -> None:
        """Detach observers and refuse further updates. The store is untouched."""
        self._disposed = True
        self._state.dispose()

    def _snapshot(self, value: T) -> T:
        return value

    @abstractmethod
    def _prepare(self, value: T) -> tuple[T, Any]:
        """Validate or encode value; return (value to commit, write payload)."""

    @abstractmethod
    def _write(self, payload: Any) -> Awaitable[None]: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._key!r}, {self._state.peek()!r})"


class ScalarPrefCell(PrefCell[T]):
    """Cell over a built-in scalar kind, fixed by the default value.

    Usage:
        dark_mode = ScalarPrefCell(store, "darkMode", False)
        dark_mode.value               # stored bool, or False
        await dark_mode.update(lambda v: not v)
    """

    __slots__ = ("_default", "_kind")

    def __init__(self, store: ValueStore, key: str, default: T) -> None:
        try:
            kind = ScalarKind.of(default)
        except PrefKindError as exc:
            raise PrefKindError(
                f"default for {key!r}: {exc}", key=key, value=default
            ) from exc
        default = kind.normalize(default)

        stored = store.get(key)
        if stored is None:
            initial = default
        elif kind.accepts(stored):
            initial = kind.normalize(stored)
        else:
            logger.warning(
                "Ignoring stored %r for %r: expected %s", stored, key, kind.value
            )
            initial = default

        super().__init__(store, key, initial)
        self._default = default
        self._kind = kind
        logger.debug(
            "Created %s cell %r (from store: %s)", kind.value, key, initial is not default
        )

    @property
    def default(self) -> T:
        return self._kind.normalize(self._default)

    @property
    def kind(self) -> ScalarKind:
        return self._kind

    def _prepare(self, value: T) -> tuple[T, Scalar]:
        if not self._kind.accepts(value):
            raise PrefKindError(
                f"{self._key!r} holds {self._kind.value}, "
                f"updater returned {type(value).__name__}",
                key=self._key,
                value=value,
            )
        value = self._kind.normalize(value)
        return value, value

    def _snapshot(self, value: T) -> T:
        return self._kind.normalize(value)

    def _write(self, payload: Scalar) -> Awaitable[None]:
        return self._kind.write(self._store, self._key, payload)


class CodecPrefCell(PrefCell[T]):
    """Cell over any type T, persisted as the string codec.encode produces.

    Usage:
        theme = CodecPrefCell(store, "theme", Codec.for_enum(Theme, Theme.LIGHT))
        await theme.set(Theme.DARK)   # stores "DARK"
    """

    __slots__ = ("_codec",)

    def __init__(self, store: ValueStore, key: str, codec: Codec[T]) -> None:
        raw = store.get_string(key)
        try:
            initial = codec.decode(raw)
        except Exception as exc:
            raise PrefDecodeError(
                f"could not decode {key!r} from {raw!r}: {exc}", key=key
            ) from exc

        super().__init__(store, key, initial)
        self._codec = codec
        logger.debug("Created codec cell %r (from store: %s)", key, raw is not None)

    @property
    def codec(self) -> Codec[T]:
        return self._codec

    def _prepare(self, value: T) -> tuple[T, str]:
        try:
            encoded = self._codec.encode(value)
        except Exception as exc:
            raise PrefEncodeError(
                f"could not encode {value!r} for {self._key!r}: {exc}", key=self._key
            ) from exc
        if not isinstance(encoded, str):
            raise PrefEncodeError(
                f"encode for {self._key!r} returned {type(encoded).__name__}, not str",
                key=self._key,
            )
        return copy.deepcopy(value), encoded

    def _snapshot(self, value: T) -> T:
        return copy.deepcopy(value)

    def _write(self, payload: str) -> Awaitable[None]:
        return self._store.set_string(self._key, payload)

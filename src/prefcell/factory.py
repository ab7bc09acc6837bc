"""Cell construction helpers.

The store is always passed in, either directly or as a zero-argument
accessor returning it. Nothing here reaches for a process-wide instance.
"""

from __future__ import annotations

from typing import Callable, TypeVar, Union

from prefcell.cell import CodecPrefCell, PrefCell, ScalarPrefCell
from prefcell.codec import Codec
from prefcell.exceptions import PrefConfigError
from prefcell.store import ValueStore

T = TypeVar("T")

StoreSource = Union[ValueStore, Callable[[], ValueStore]]


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


def resolve_store(store: StoreSource) -> ValueStore:
    """Accept a ValueStore or an accessor returning one."""
    if isinstance(store, ValueStore):
        return store
    if callable(store):
        resolved = store()
        if not isinstance(resolved, ValueStore):
            raise PrefConfigError(f"store accessor returned {type(resolved).__name__}")
        return resolved
    raise PrefConfigError(f"{type(store).__name__} is not a ValueStore")


def validate_key(key: object) -> str:
    if not isinstance(key, str) or not key:
        raise PrefConfigError(f"preference key must be a non-empty str, got {key!r}")
    return key


def make_cell(
    store: StoreSource,
    key: str,
    *,
    default: object = UNSET,
    codec: Codec | None = None,
) -> PrefCell:
    """Build a scalar cell (default=...) or a codec cell (codec=...).

    Exactly one of default/codec must be given.
    """
    key = validate_key(key)
    has_default = default is not UNSET
    if has_default == (codec is not None):
        raise PrefConfigError(
            f"{key!r}: pass exactly one of default= or codec=", key=key
        )
    if codec is not None and not isinstance(codec, Codec):
        raise PrefConfigError(f"{key!r}: codec must be a Codec", key=key)

    resolved = resolve_store(store)
    if codec is not None:
        return CodecPrefCell(resolved, key, codec)
    return ScalarPrefCell(resolved, key, default)


def scalar_pref(store: StoreSource, key: str, default: T) -> ScalarPrefCell[T]:
    """Usage:
        dark_mode = scalar_pref(store, "darkMode", False)
    """
    return make_cell(store, key, default=default)


def codec_pref(store: StoreSource, key: str, codec: Codec[T]) -> CodecPrefCell[T]:
    """Usage:
        theme = codec_pref(store, "theme", Codec.for_enum(Theme, Theme.LIGHT))
    """
    return make_cell(store, key, codec=codec)

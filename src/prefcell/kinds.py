"""Scalar kinds a ValueStore can persist natively.

A scalar cell resolves its kind once, from the default value, and keeps it
for life. Updates are checked against that kind instead of re-inspecting
each produced value for a matching setter.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Awaitable, Union

from prefcell.exceptions import PrefKindError

if TYPE_CHECKING:
    from prefcell.store import ValueStore

Scalar = Union[bool, int, float, str, list[str]]


class ScalarKind(enum.Enum):
    BOOL = "bool"
    INT = "int"
    DOUBLE = "double"
    STRING = "string"
    STRING_LIST = "string_list"

    @classmethod
    def of(cls, value: object) -> ScalarKind:
        """Resolve the kind of value, or raise PrefKindError."""
        # bool before int: True is an int too
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, int):
            return cls.INT
        if isinstance(value, float):
            return cls.DOUBLE
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            return cls.STRING_LIST
        raise PrefKindError(
            f"{type(value).__name__} is not a storable scalar kind", value=value
        )

    def accepts(self, value: object) -> bool:
        try:
            return ScalarKind.of(value) is self
        except PrefKindError:
            return False

    def normalize(self, value: Scalar) -> Scalar:
        """Canonical in-memory form of an accepted value."""
        if self is ScalarKind.STRING_LIST:
            return list(value)
        return value

    def write(self, store: ValueStore, key: str, value: Scalar) -> Awaitable[None]:
        """Issue the store write matching this kind."""
        return getattr(store, _SETTERS[self])(key, value)


_SETTERS = {
    ScalarKind.BOOL: "set_bool",
    ScalarKind.INT: "set_int",
    ScalarKind.DOUBLE: "set_double",
    ScalarKind.STRING: "set_string",
    ScalarKind.STRING_LIST: "set_string_list",
}

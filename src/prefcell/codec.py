"""Codecs: bidirectional string conversion for values a store can't hold natively."""

from __future__ import annotations

import copy
import enum
import json
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=enum.Enum)


@dataclass(frozen=True)
class Codec(Generic[T]):
    """A pair of pure functions mapping T to and from its stored string.

    decode receives None when nothing is stored yet and must still return
    a T (typically a default).
    """

    decode: Callable[[str | None], T]
    encode: Callable[[T], str]

    def round_trip(self, value: T) -> T:
        return self.decode(self.encode(value))

    @classmethod
    def for_enum(cls, enum_cls: type[E], fallback: E) -> Codec[E]:
        """Store an enum member by name; unknown or missing names give fallback.

        Usage:
            class Theme(enum.Enum):
                LIGHT = 1
                DARK = 2

            theme = codec_pref(store, "theme", Codec.for_enum(Theme, Theme.LIGHT))
        """
        if not isinstance(fallback, enum_cls):
            raise TypeError(f"fallback {fallback!r} is not a {enum_cls.__name__}")

        def decode(raw: str | None) -> E:
            if raw is None:
                return fallback
            return enum_cls.__members__.get(raw, fallback)

        return cls(decode=decode, encode=lambda member: member.name)

    @classmethod
    def json(cls, default: T) -> Codec[T]:
        """Store a JSON-serializable value; missing or malformed text gives default."""

        def decode(raw: str | None) -> T:
            if raw is None:
                return copy.deepcopy(default)
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                return copy.deepcopy(default)

        return cls(decode=decode, encode=lambda value: json.dumps(value, sort_keys=True))

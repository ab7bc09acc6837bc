"""In-process ValueStore. Not durable; meant for tests and demos."""

from __future__ import annotations

import asyncio
import copy
from typing import Mapping, Sequence

from prefcell.kinds import Scalar, ScalarKind


class MemoryValueStore:
    """Dict-backed ValueStore that records every write.

    Setters are type-strict like a native preferences backend: set_int(True)
    and set_double(1) raise TypeError.
    """

    def __init__(self, initial: Mapping[str, Scalar] | None = None) -> None:
        self._data: dict[str, Scalar] = {}
        self.writes: list[tuple[str, str, Scalar]] = []
        for key, value in (initial or {}).items():
            self._data[key] = ScalarKind.of(value).normalize(value)

    def get(self, key: str) -> Scalar | None:
        return copy.copy(self._data.get(key))

    def get_string(self, key: str) -> str | None:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def contains(self, key: str) -> bool:
        return key in self._data

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, Scalar]:
        return copy.deepcopy(self._data)

    async def _write(self, method: str, kind: ScalarKind, key: str, value) -> None:
        if not kind.accepts(value):
            raise TypeError(f"{method}({key!r}) got {type(value).__name__}")
        await asyncio.sleep(0)
        value = kind.normalize(value)
        self._data[key] = value
        self.writes.append((method, key, copy.copy(value)))

    async def set_bool(self, key: str, value: bool) -> None:
        await self._write("set_bool", ScalarKind.BOOL, key, value)

    async def set_int(self, key: str, value: int) -> None:
        await self._write("set_int", ScalarKind.INT, key, value)

    async def set_double(self, key: str, value: float) -> None:
        await self._write("set_double", ScalarKind.DOUBLE, key, value)

    async def set_string(self, key: str, value: str) -> None:
        await self._write("set_string", ScalarKind.STRING, key, value)

    async def set_string_list(self, key: str, value: Sequence[str]) -> None:
        await self._write("set_string_list", ScalarKind.STRING_LIST, key, value)

    def __repr__(self) -> str:
        return f"MemoryValueStore({self._data!r})"

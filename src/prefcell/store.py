"""ValueStore: the persistence contract cells are written against.

prefcell does not implement durable storage. Any object with these methods
works: a wrapper over a settings file, a database table, a platform
preferences API. Setters fully overwrite the key and are durable once
awaited.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from prefcell.kinds import Scalar


@runtime_checkable
class ValueStore(Protocol):
    def get(self, key: str) -> Scalar | None: ...

    def get_string(self, key: str) -> str | None: ...

    async def set_bool(self, key: str, value: bool) -> None: ...

    async def set_int(self, key: str, value: int) -> None: ...

    async def set_double(self, key: str, value: float) -> None: ...

    async def set_string(self, key: str, value: str) -> None: ...

    async def set_string_list(self, key: str, value: Sequence[str]) -> None: ...

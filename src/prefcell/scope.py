"""PrefScope: key-based container of preference cells with a teardown lifecycle.

A scope is built over one store and owns every cell created through it,
plus any reactions handed to track(). dispose() tears all of them down
without writing anything back to the store.
"""

from __future__ import annotations

import logging
from typing import Iterator

from prefcell.cell import PrefCell
from prefcell.codec import Codec
from prefcell.exceptions import PrefConfigError
from prefcell.factory import UNSET, StoreSource, make_cell, resolve_store

logger = logging.getLogger(__name__)


class PrefScope:
    """Cells keyed by preference key, sharing one store.

    Usage:
        scope = PrefScope(store, {
            "boolValue": False,
            "enumValue": Codec.for_enum(EnumValues, EnumValues.FOO),
        })
        scope.get("boolValue")                       # tracked read
        await scope["boolValue"].update(lambda v: not v)
        scope.dispose()
    """

    def __init__(self, store: StoreSource, schema: dict[str, object] | None = None) -> None:
        self._store = resolve_store(store)
        self._cells: dict[str, PrefCell] = {}
        self._disposables: list = []
        self._disposed = False
        for key, declared in (schema or {}).items():
            if isinstance(declared, Codec):
                self.cell(key, codec=declared)
            else:
                self.cell(key, default=declared)

    @property
    def store(self):
        return self._store

    def cell(
        self,
        key: str,
        *,
        default: object = UNSET,
        codec: Codec | None = None,
        alias: bool = False,
    ) -> PrefCell:
        """Create and register a cell. alias=True returns an existing one instead."""
        if self._disposed:
            raise PrefConfigError(f"scope is disposed; cannot add {key!r}", key=key)
        existing = self._cells.get(key)
        if existing is not None:
            if alias:
                return existing
            raise PrefConfigError(f"{key!r} already has a cell in this scope", key=key)
        new_cell = make_cell(self._store, key, default=default, codec=codec)
        self._cells[key] = new_cell
        return new_cell

    def get_cell(self, key: str) -> PrefCell | None:
        return self._cells.get(key)

    def get(self, key: str) -> object:
        c = self._cells.get(key)
        return c.value if c is not None else None

    def __getitem__(self, key: str) -> PrefCell:
        return self._cells[key]

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def keys(self) -> Iterator[str]:
        return iter(self._cells)

    def track(self, *disposables):
        """Adopt reactions (anything with dispose()) so they end with the scope.

        Returns the first argument so calls can be inlined.
        """
        self._disposables.extend(disposables)
        return disposables[0] if disposables else None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Dispose tracked reactions, then every cell. Safe to call twice."""
        if self._disposed:
            return
        self._disposed = True
        for d in self._disposables:
            try:
                d.dispose()
            except Exception:
                logger.exception("Failed to dispose %r", d)
        self._disposables.clear()
        for c in self._cells.values():
            c.dispose()
        logger.info("Disposed scope with %d cells", len(self._cells))

    def __enter__(self) -> PrefScope:
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"PrefScope({list(self._cells)!r}, {state})"

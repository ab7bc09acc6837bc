"""Custom exception hierarchy for prefcell."""

from __future__ import annotations


class PrefError(Exception):
    """Base exception for all prefcell errors."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class PrefConfigError(PrefError):
    """Invalid cell declaration (key, default/codec combination, duplicate)."""


class PrefKindError(PrefError, TypeError):
    """Value is not one of the scalar kinds a ValueStore persists natively."""

    def __init__(self, message: str, *, key: str = "", value: object = None) -> None:
        self.value = value
        super().__init__(message, key=key)


class PrefCodecError(PrefError):
    """A caller-supplied codec failed."""


class PrefDecodeError(PrefCodecError):
    """codec.decode raised while seeding a cell from the store."""


class PrefEncodeError(PrefCodecError):
    """codec.encode raised or did not produce a string."""


class PrefStoreError(PrefError):
    """The store write itself failed. The original error is __cause__."""


class PrefDisposedError(PrefError):
    """update() called on a cell whose scope was torn down."""


class PrefMutationError(PrefError, AttributeError):
    """Direct assignment to a cell's value. Use `await cell.update(...)`."""

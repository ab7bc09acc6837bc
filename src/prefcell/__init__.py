"""prefcell: observable preference values persisted to a key-value store."""

from importlib.metadata import version as _version

__version__ = _version("prefcell")

from prefcell.exceptions import (
    PrefError,
    PrefConfigError,
    PrefKindError,
    PrefCodecError,
    PrefDecodeError,
    PrefEncodeError,
    PrefStoreError,
    PrefDisposedError,
    PrefMutationError,
)
from prefcell.kinds import Scalar, ScalarKind
from prefcell.store import ValueStore
from prefcell.memory import MemoryValueStore
from prefcell.codec import Codec
from prefcell.observable import Observable
from prefcell.reaction import Reaction, autorun, reaction
from prefcell.cell import PrefCell, ScalarPrefCell, CodecPrefCell
from prefcell.factory import UNSET, make_cell, scalar_pref, codec_pref
from prefcell.scope import PrefScope
# textual bridge NOT auto-imported; opt-in only

__all__ = [
    "PrefError",
    "PrefConfigError",
    "PrefKindError",
    "PrefCodecError",
    "PrefDecodeError",
    "PrefEncodeError",
    "PrefStoreError",
    "PrefDisposedError",
    "PrefMutationError",
    "Scalar",
    "ScalarKind",
    "ValueStore",
    "MemoryValueStore",
    "Codec",
    "Observable",
    "Reaction",
    "autorun",
    "reaction",
    "PrefCell",
    "ScalarPrefCell",
    "CodecPrefCell",
    "UNSET",
    "make_cell",
    "scalar_pref",
    "codec_pref",
    "PrefScope",
]

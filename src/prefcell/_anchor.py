"""Data anchor: plain Python structures that hold the reactive graph.

Observables and reactions are thin handles holding an _id. Their values,
observer sets and dependency sets live here, keyed by that id.
"""

import itertools

# Observable state
values: dict[int, object] = {}
observers: dict[int, set] = {}  # obs_id -> set of derivations

# Reaction state
dependencies: dict[int, set] = {}  # deriv_id -> set of observables
derivation_fns: dict[int, object] = {}  # deriv_id -> callable
disposed: dict[int, bool] = {}

_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)



def forget(id_: int) -> None:
    """Drop every entry for id_. Runs when its handle is garbage collected."""
    for table in (values, observers, dependencies, derivation_fns, disposed):
        table.pop(id_, None)

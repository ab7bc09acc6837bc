"""Dependency tracking.

current_derivation names the reaction being evaluated. Any Observable.get()
made while it is set registers the observable as a dependency of that
reaction. Notification is synchronous: schedule() re-runs the derivation
before returning.
"""

from __future__ import annotations

import contextvars
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prefcell.reaction import Reaction

current_derivation: contextvars.ContextVar[Reaction | None] = contextvars.ContextVar(
    "current_derivation", default=None
)


def track(observable) -> None:
    """Register observable with the running derivation, if any."""
    derivation = current_derivation.get()
    if derivation is not None:
        observable._add_observer(derivation)
        derivation._dependencies.add(observable)


def schedule(derivation: Reaction) -> None:
    """Re-run a derivation whose dependency changed."""
    derivation._run()

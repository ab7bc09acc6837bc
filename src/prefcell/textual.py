"""Textual integration for prefcell. Opt-in; requires textual.

bind() pushes a cell's value into widgets. submit() runs an update from a
widget event handler as a Textual worker so the handler need not await.
Guarding, NoMatches and thread marshaling are handled here, not at callsites.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from prefcell.reaction import reaction as _reaction

# Keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend bound effects during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def bind(app, cell, effect_fn, *, fire_immediately=True):
    """Call effect_fn(cell.value) now and whenever the cell commits a new value.

    Skips while the app is paused or not running, swallows NoMatches from
    widget queries, and marshals foreign-thread calls via call_from_thread.

    Usage:
        bind(app, dark_mode, lambda v: setattr(app, "dark", v))
    """
    _main = threading.get_ident()

    def _guarded(value):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, value)
        else:
            _safe(value)

    def _safe(value):
        try:
            effect_fn(value)
        except NoMatches:
            pass

    return _reaction(lambda: cell.value, _guarded, fire_immediately=fire_immediately)


def submit(app, cell, updater):
    """Run cell.update(updater) as a worker; failures are reported on the worker.

    Usage:
        def on_checkbox_changed(self, event):
            submit(self.app, dark_mode, lambda _: event.value)
    """
    return app.run_worker(
        cell.update(updater),
        name=f"pref:{cell.key}",
        group="prefcell",
        exit_on_error=False,
    )

"""Textual integration for sigfx. Opt-in — requires textual.

Subscribers run after a round settles, which may be while the app is
swapping widgets or from a worker thread that sent to an Input. subscribe()
here handles both so effects can query widgets directly.

// [LAW:locality-or-seam] Textual coupling isolated in this module — signal graph stays agnostic.
// [LAW:no-shared-mutable-globals] _paused_apps is owned here; id present ↔ inside pause().
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded subscribers during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def subscribe(app, signal, effect):
    """signal.subscribe() that safely bridges to Textual widgets.

    Guards against firing during pause/not-running, catches NoMatches
    from widget queries, and marshals cross-thread calls via call_from_thread.
    Returns the unsubscribe function.
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
            effect(value)
        except NoMatches:
            pass

    return signal.subscribe(_guarded)

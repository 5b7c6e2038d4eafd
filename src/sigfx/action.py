"""Actions and transactions — batched sends.

Wrapping sends in an @action or `with transaction()` defers propagation until
the outermost scope exits, then runs them all as one round. Every input sent
inside the scope updates in the same round, which is the only way two
independent inputs can collide. Sends outside a scope, including those made
from subscribers while a round runs, are always separate rounds.
"""

from __future__ import annotations

import functools
from typing import TypeVar, Callable, ParamSpec
from contextlib import contextmanager
from sigfx._round import begin_batch, end_batch

P = ParamSpec("P")
R = TypeVar("R")


def action(fn: Callable[P, R]) -> Callable[P, R]:
    """Decorator: run all sends made inside fn as a single round.

    Usage:
        clicks = Input(0)
        keys = Input("")

        @action
        def replay(click, key):
            clicks.send(click)
            keys.send(key)
            # subscribers see both updates from one round
    """

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        begin_batch()
        try:
            return fn(*args, **kwargs)
        finally:
            end_batch()

    return wrapper


@contextmanager
def transaction():
    """Context manager for sending several inputs in one round.

    Usage:
        with transaction():
            left.send(1)
            right.send(2)
            # the round runs here, with both inputs updated
    """
    begin_batch()
    try:
        yield
    finally:
        end_batch()

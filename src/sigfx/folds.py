"""Folds whose seed or state goes beyond a plain fold(step, seed).

foldp_first derives its seed from the input's initial value. foldps keeps a
hidden state next to the exposed output. foldps_first does both.
"""

from __future__ import annotations

from operator import itemgetter
from typing import Callable, TypeVar

from sigfx.gates import filter_some
from sigfx.maybe import Maybe, Some, from_some
from sigfx.signal import Signal, initial, map2, merge

A = TypeVar("A")
B = TypeVar("B")
S = TypeVar("S")


def foldp_first(
    step: Callable[[A, B], B],
    init_fn: Callable[[A], B],
    signal: Signal[A],
) -> Signal[B]:
    """Fold with a seed computed from signal's initial value.

    The result starts at init_fn(initial value of signal); every update a
    then moves the state s to step(a, s). The state is held as a Maybe so the
    first update is folded from the seed rather than being mistaken for it.

    Usage:
        clicks = Input(3)
        total = foldp_first(lambda n, acc: acc + n, lambda n: n * 10, clicks)
        total.value  # 30
        clicks.send(1)
        total.value  # 31
    """
    seed = initial(signal).map(init_fn)

    def accumulate(pair: tuple[A, B], state: Maybe[B]) -> Maybe[B]:
        value, first = pair
        return Some(step(value, first if state is None else state.value))

    rest = map2(lambda value, first: (value, first), signal, seed).fold(accumulate, None)
    return merge(seed.map(Some), rest).map(from_some)


def foldps(
    step: Callable[[A, S], tuple[B, S]],
    seeds: tuple[B, S],
    signal: Signal[A],
) -> Signal[B]:
    """Fold with hidden state: step(a, s) returns (output, next_state).

    Only the output is exposed; the state never leaves the fold.
    """
    return signal.fold(lambda value, pair: step(value, pair[1]), seeds).map(itemgetter(0))


def foldps_first(
    step: Callable[[A, S], tuple[B, S]],
    init_fn: Callable[[A], tuple[B, S]],
    signal: Signal[A],
) -> Signal[B]:
    """foldps whose (output, state) seed is init_fn(initial value of signal)."""
    return foldp_first(lambda value, pair: step(value, pair[1]), init_fn, signal).map(itemgetter(0))


def filter_fold(
    step: Callable[[A, S], Maybe[S]],
    seed: S,
    signal: Signal[A],
) -> Signal[S]:
    """Fold that only updates when step returns Some.

    A None from step leaves the state unchanged and emits nothing.
    """
    def hidden(value: A, state: S) -> tuple[Maybe[S], S]:
        result = step(value, state)
        return result, (state if result is None else result.value)

    return filter_some(seed, foldps(hidden, (Some(seed), seed), signal))

"""Structural helpers: tuples of signals, lists of signals, short histories."""

from __future__ import annotations

from functools import reduce
from operator import itemgetter
from typing import Callable, Sequence, TypeVar

from sigfx.folds import foldp_first, foldps
from sigfx.signal import Signal, constant, lift, map2, merge

T = TypeVar("T")
U = TypeVar("U")


def zip2(a: Signal, b: Signal) -> Signal[tuple]:
    return map2(lambda *values: values, a, b)


def zip3(a: Signal, b: Signal, c: Signal) -> Signal[tuple]:
    return lift(lambda *values: values, a, b, c)


def zip4(a: Signal, b: Signal, c: Signal, d: Signal) -> Signal[tuple]:
    return lift(lambda *values: values, a, b, c, d)


def _unzip(signal: Signal[tuple], width: int) -> tuple[Signal, ...]:
    # Each projection is a plain map, so it fires exactly when signal does.
    return tuple(signal.map(itemgetter(i)) for i in range(width))


def unzip2(signal: Signal[tuple]) -> tuple[Signal, Signal]:
    return _unzip(signal, 2)


def unzip3(signal: Signal[tuple]) -> tuple[Signal, Signal, Signal]:
    return _unzip(signal, 3)


def unzip4(signal: Signal[tuple]) -> tuple[Signal, Signal, Signal, Signal]:
    return _unzip(signal, 4)


def run_buffer(n: int, signal: Signal[T]) -> Signal[list[T]]:
    """The last n values of signal, oldest first. Starts empty."""
    return run_buffer_from([], n, signal)


def run_buffer_from(initial: Sequence[T], n: int, signal: Signal[T]) -> Signal[list[T]]:
    """Like run_buffer, starting from initial. A buffer with n <= 0 is always empty."""
    if n <= 0:
        return signal.fold(lambda value, buffer: [], [])

    def step(value: T, buffer: list[T]) -> list[T]:
        return [*buffer, value][-n:]

    return signal.fold(step, list(initial)[-n:])


def delay_round(seed: T, signal: Signal[T]) -> Signal[T]:
    """Lag signal by one round: each update emits the value held before it."""
    return foldps(lambda new, old: (old, new), (seed, seed), signal)


def deltas(signal: Signal[T]) -> Signal[tuple[T, T]]:
    """(previous, current) pairs. Starts as (initial, initial)."""
    return foldp_first(lambda value, pair: (pair[1], value), lambda value: (value, value), signal)


def combine(signals: Sequence[Signal[T]]) -> Signal[list[T]]:
    """One signal holding the current values of all signals, in order."""
    if not signals:
        return constant([])
    return lift(lambda *values: list(values), *signals)


def map_many(fn: Callable[[list[T]], U], signals: Sequence[Signal[T]]) -> Signal[U]:
    return combine(signals).map(fn)


def apply_many(fns: Signal[Callable[[list[T]], U]], signals: Sequence[Signal[T]]) -> Signal[U]:
    return map2(lambda fn, values: fn(values), fns, combine(signals))


def merge_many(first: Signal[T], *rest: Signal[T]) -> Signal[T]:
    """Merge several signals; on collision the leftmost wins."""
    return reduce(merge, rest, first)


def passive_map2(fn: Callable[[T, U], object], active: Signal[T], passive: Signal[U]) -> Signal:
    """map2 that only fires on active's updates.

    passive contributes its current value but its own updates are ignored.
    """
    return map2(fn, active, passive.sample_on(active))


def with_passive(fns: Signal[Callable[[T], U]], signal: Signal[T]) -> Signal[U]:
    return passive_map2(lambda fn, value: fn(value), fns, signal)

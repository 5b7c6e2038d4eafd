"""Switching — follow one of two signals depending on a boolean control.

switch_when hands off with a plain gate: after control flips, the newly
selected side shows up on its next update. switch_sample hands off with a
sampling gate: the newly selected side's current value is emitted in the
round control flips.
"""

from __future__ import annotations

import operator
from typing import Callable, TypeVar

from sigfx.gates import sample_when
from sigfx.maybe import Some, from_some
from sigfx.signal import Signal, constant, initial, map3, merge

T = TypeVar("T")

Gate = Callable[[Signal[bool], object, Signal], Signal]


def _keep_when(control: Signal[bool], default, signal: Signal) -> Signal:
    return signal.keep_when(control, default)


def _switch(gate: Gate, control: Signal[bool], on_true: Signal[T], on_false: Signal[T]) -> Signal[T]:
    base = map3(
        lambda flag, left, right: Some(left if flag else right),
        initial(control), initial(on_true), initial(on_false),
    )
    # Mapped, so it updates in the same round as control: exactly one side is open.
    negated = control.map(operator.not_)
    chosen = merge(
        gate(control, None, on_true.map(Some)),
        gate(negated, None, on_false.map(Some)),
    )
    return merge(base, chosen).map(from_some)


def switch_when(control: Signal[bool], on_true: Signal[T], on_false: Signal[T]) -> Signal[T]:
    """Follow on_true while control is true and on_false while it is false."""
    return _switch(_keep_when, control, on_true, on_false)


def switch_sample(control: Signal[bool], on_true: Signal[T], on_false: Signal[T]) -> Signal[T]:
    """Like switch_when, but sample the newly selected side when control flips."""
    return _switch(sample_when, control, on_true, on_false)


def keep_then(control: Signal[bool], base: T, signal: Signal[T]) -> Signal[T]:
    """Follow signal while control is true; show base as soon as it turns false."""
    return switch_sample(control, signal, constant(base))

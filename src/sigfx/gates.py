"""Gates — pass a signal's updates only while a condition holds."""

from __future__ import annotations

from functools import partial
from operator import itemgetter
from typing import TypeVar

from sigfx.maybe import Maybe, Some, is_some, with_default
from sigfx.signal import Signal, map2

T = TypeVar("T")


def filter_some(default: T, signal: Signal[Maybe[T]]) -> Signal[T]:
    """Pass only Some updates, unwrapped.

    The initial value is the unwrapped initial value if it is Some, else default.
    """
    return signal.keep_if(is_some, Some(default)).map(partial(with_default, default))


def keep_when_i(control: Signal[bool], signal: Signal[T]) -> Signal[T]:
    """keep_when whose initial value is always signal's initial value."""
    return signal.keep_when(control, signal.value)


def sample_when(control: Signal[bool], default: T, source: Signal[T]) -> Signal[T]:
    """Pass source's updates while control is true, sampling it as control turns on.

    When control goes from false to true, source's current value is emitted
    even if source did not update that round. Repeated true updates of
    control are not transitions.

    The initial value is source's initial value if control starts true,
    otherwise default.
    """
    pairs = map2(lambda on, value: (on, value), control.drop_repeats(), source)
    return pairs.keep_if(itemgetter(0), (True, default)).map(itemgetter(1))

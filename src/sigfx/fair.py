"""Fair merge — resolve same-round collisions instead of picking a side."""

from __future__ import annotations

from typing import Callable, TypeVar

from sigfx.gates import filter_some
from sigfx.maybe import Maybe, Some
from sigfx.signal import Signal, merge, simultaneous

T = TypeVar("T")


def fair_merge(resolve: Callable[[T, T], T], left: Signal[T], right: Signal[T]) -> Signal[T]:
    """Merge left and right, combining them with resolve when both update at once.

    Rounds where only one side updates pass that value through unchanged and
    never call resolve. A round where both update emits exactly one event,
    resolve(left_value, right_value). The initial value is left's.

    Usage:
        total = fair_merge(operator.add, deposits, withdrawals)
        with transaction():
            deposits.send(10)
            withdrawals.send(-3)
        total.value  # 7
    """
    merged = merge(left, right)

    def on_collision(updates: tuple[Maybe[T], Maybe[T]]) -> Maybe[T]:
        left_update, right_update = updates
        if left_update is None or right_update is None:
            return None
        return Some(resolve(left_update.value, right_update.value))

    resolved = filter_some(merged.value, simultaneous(left, right).map(on_collision))
    # resolved is listed first so it wins the collision round.
    return merge(resolved, merged)

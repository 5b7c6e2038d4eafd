"""Signals — values with a current state that update at discrete rounds.

A Signal always has a value: before its first update that is its initial
value, computed once from the initial values of its parents. Each primitive
below decides, per round, whether it fires and with what value.

All state lives in _anchor — instances are thin handles holding an _id.

Thread safety: call set_scheduler() once from the main thread. After that,
any Input.send() from a background thread is auto-marshaled. Main-thread
sends remain synchronous.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from sigfx import _anchor, _round
from sigfx.maybe import Maybe, Some

T = TypeVar("T")
U = TypeVar("U")
S = TypeVar("S")

Disposer = Callable[[], None]

# ─── Auto-marshal ────────────────────────────────────────────────────────────
_scheduler = None
_scheduler_thread = None


def set_scheduler(scheduler) -> None:
    """Set the global thread scheduler for cross-thread Input sends.

    Call once from the main/UI thread:
        sigfx.set_scheduler(app.call_from_thread)

    After this, any Input.send() from a background thread is automatically
    marshaled. Main-thread sends remain synchronous.
    """
    global _scheduler, _scheduler_thread
    _scheduler = scheduler
    _scheduler_thread = threading.current_thread()


class Signal(Generic[T]):
    """A node in the propagation graph."""

    __slots__ = ("_id", "_parents")

    def __init__(self, value: T, parents: tuple[Signal, ...] = ()) -> None:
        self._id = _anchor.new_id()
        self._parents = parents
        _anchor.values[self._id] = value
        _anchor.children[self._id] = []
        _anchor.subscribers[self._id] = []
        _anchor.disposed[self._id] = False
        _anchor.ranks[self._id] = 1 + max((p._rank for p in parents), default=-1)
        for parent in parents:
            _anchor.children[parent._id].append(self)

    @property
    def value(self) -> T:
        """Current value. Equals the initial value until the first update."""
        return _anchor.values[self._id]

    @property
    def _rank(self) -> int:
        return _anchor.ranks[self._id]

    def _fired(self, fired: set[int]) -> bool:
        return self._id in fired

    def _update(self, fired: set[int]) -> Maybe[T]:
        """Recompute for the current round. Return Some(value) to fire."""
        return None

    # --- Primitives ---

    def map(self, fn: Callable[[T], U]) -> Signal[U]:
        return lift(fn, self)

    def fold(self, step: Callable[[T, S], S], seed: S) -> Signal[S]:
        """Accumulate state across updates, starting from seed."""
        return _Fold(step, seed, self)

    def merge(self, other: Signal[T]) -> Signal[T]:
        return merge(self, other)

    def sample_on(self, trigger: Signal) -> Signal[T]:
        """Re-emit this signal's current value whenever trigger updates."""
        return _SampleOn(trigger, self)

    def keep_if(self, pred: Callable[[T], bool], default: T) -> Signal[T]:
        """Only pass updates satisfying pred.

        If the initial value fails pred, default is used instead.
        """
        return _KeepIf(pred, default, self)

    def keep_when(self, control: Signal[bool], default: T) -> Signal[T]:
        """Only pass updates that arrive while control is true."""
        return _KeepWhen(control, default, self)

    def drop_repeats(self) -> Signal[T]:
        """Drop updates equal to the previous value."""
        return _DropRepeats(self)

    # --- Consumers ---

    def subscribe(self, callback: Callable[[T], None]) -> Disposer:
        """Call callback with each update after its round settles.

        Returns a function that removes it.
        """
        _anchor.subscribers[self._id].append(callback)

        def _unsubscribe() -> None:
            try:
                _anchor.subscribers[self._id].remove(callback)
            except ValueError:
                pass  # already removed

        return _unsubscribe

    def dispose(self) -> None:
        """Detach from parents and tear down this signal and all downstream ones."""
        if _anchor.disposed[self._id]:
            return
        _anchor.disposed[self._id] = True
        _anchor.subscribers[self._id].clear()
        for parent in self._parents:
            try:
                _anchor.children[parent._id].remove(self)
            except ValueError:
                pass  # parent already torn down
        for child in list(_anchor.children[self._id]):
            child.dispose()
        _anchor.children[self._id].clear()

    @property
    def disposed(self) -> bool:
        return _anchor.disposed[self._id]

    def __repr__(self) -> str:
        return f"{type(self).__name__.lstrip('_')}({self.value!r})"


class Input(Signal[T]):
    """An external source. Each send() outside a transaction is one round."""

    __slots__ = ()

    def __init__(self, initial: T) -> None:
        super().__init__(initial)

    def send(self, value: T) -> None:
        """Push a value into the graph. Auto-marshals from background threads."""
        if _scheduler is not None and threading.current_thread() != _scheduler_thread:
            _scheduler(lambda v=value: _round.send(self, v))
        else:
            _round.send(self, value)


class _Constant(Signal[T]):
    __slots__ = ()


def constant(value: T) -> Signal[T]:
    """A signal that never updates."""
    return _Constant(value)


class _Lift(Signal):
    __slots__ = ("_fn",)

    def __init__(self, fn: Callable, signals: tuple[Signal, ...]) -> None:
        self._fn = fn
        super().__init__(fn(*(s.value for s in signals)), signals)

    def _update(self, fired):
        return Some(self._fn(*(p.value for p in self._parents)))


class _Fold(Signal):
    __slots__ = ("_step",)

    def __init__(self, step, seed, signal: Signal) -> None:
        self._step = step
        super().__init__(seed, (signal,))

    def _update(self, fired):
        return Some(self._step(self._parents[0].value, self.value))


class _Merge(Signal):
    __slots__ = ()

    def __init__(self, left: Signal, right: Signal) -> None:
        super().__init__(left.value, (left, right))

    def _update(self, fired):
        left, right = self._parents
        if left._fired(fired):
            return Some(left.value)
        return Some(right.value)


class _SampleOn(Signal):
    __slots__ = ()

    def __init__(self, trigger: Signal, source: Signal) -> None:
        super().__init__(source.value, (trigger, source))

    def _update(self, fired):
        trigger, source = self._parents
        if trigger._fired(fired):
            return Some(source.value)
        return None


class _KeepIf(Signal):
    __slots__ = ("_pred",)

    def __init__(self, pred, default, signal: Signal) -> None:
        self._pred = pred
        super().__init__(signal.value if pred(signal.value) else default, (signal,))

    def _update(self, fired):
        value = self._parents[0].value
        return Some(value) if self._pred(value) else None


class _KeepWhen(Signal):
    __slots__ = ()

    def __init__(self, control: Signal[bool], default, signal: Signal) -> None:
        super().__init__(signal.value if control.value else default, (control, signal))

    def _update(self, fired):
        control, signal = self._parents
        if signal._fired(fired) and control.value:
            return Some(signal.value)
        return None


class _DropRepeats(Signal):
    __slots__ = ()

    def __init__(self, signal: Signal) -> None:
        super().__init__(signal.value, (signal,))

    def _update(self, fired):
        value = self._parents[0].value
        return Some(value) if value != self.value else None


class _Simultaneous(Signal):
    __slots__ = ()

    def __init__(self, left: Signal, right: Signal) -> None:
        super().__init__((None, None), (left, right))

    def _update(self, fired):
        return Some(tuple(
            Some(p.value) if p._fired(fired) else None for p in self._parents
        ))


def lift(fn: Callable[..., U], *signals: Signal) -> Signal[U]:
    """Combine the latest values of signals; fires when any of them updates."""
    return _Lift(fn, signals)


def map2(fn, a: Signal, b: Signal) -> Signal:
    return _Lift(fn, (a, b))


def map3(fn, a: Signal, b: Signal, c: Signal) -> Signal:
    return _Lift(fn, (a, b, c))


def map4(fn, a: Signal, b: Signal, c: Signal, d: Signal) -> Signal:
    return _Lift(fn, (a, b, c, d))


def merge(left: Signal[T], right: Signal[T]) -> Signal[T]:
    """Merge updates of two signals.

    If both update in the same round, the left value wins and only one event
    is emitted. Use simultaneous() to see both.
    """
    return _Merge(left, right)


def simultaneous(left: Signal[T], right: Signal[U]) -> Signal[tuple[Maybe[T], Maybe[U]]]:
    """Per round, which of left and right updated and with what.

    Fires when either updates with (Some(left) or None, Some(right) or None).
    Initial value is (None, None).
    """
    return _Simultaneous(left, right)


def initial(signal: Signal[T]) -> Signal[T]:
    """A signal fixed at signal's current value that never updates."""
    return _SampleOn(constant(None), signal)

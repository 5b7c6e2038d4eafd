"""Round engine — the heart of sigfx.

A round starts from one or more Input sends and pushes the change through the
graph in rank order, so every affected signal recomputes exactly once and
always sees the final values of its parents for that round. Subscribers are
notified only after the whole round has settled.

Batching: sends inside an @action or `with transaction()` accumulate and run
as a single round when the outermost scope exits. Two inputs sent in the same
batch therefore update in the same round. Any other send is its own round;
sends made while a round runs are queued in order and run one at a time
after it.
"""

from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import TYPE_CHECKING

from sigfx import _anchor

if TYPE_CHECKING:
    from sigfx.signal import Input, Signal

logger = logging.getLogger("sigfx.round")

# Batch depth counter. When > 0, sends join the open batch.
_batch_depth: int = 0

# Inputs sent during the open batch. Insertion ordered.
_batch: dict[Input, object] = {}

# Rounds waiting to run, oldest first.
_rounds: deque[dict[Input, object]] = deque()

# True while _flush_pending is running rounds.
_flushing: bool = False

_round_count: int = 0


def begin_batch() -> None:
    """Enter a batching scope. Nested batches are supported."""
    global _batch_depth
    _batch_depth += 1


def end_batch() -> None:
    """Exit a batching scope. When the outermost scope exits, run its round."""
    global _batch_depth
    _batch_depth -= 1
    if _batch_depth == 0:
        if _batch:
            _rounds.append(dict(_batch))
            _batch.clear()
        if not _flushing:
            _flush_pending()


def send(source: Input, value: object) -> None:
    """Queue a value for an input. Runs a round immediately unless busy."""
    if _batch_depth > 0:
        if source in _batch:
            logger.warning("%r sent twice in one batch; keeping the last value", source)
        _batch[source] = value
        return
    _rounds.append({source: value})
    if not _flushing:
        _flush_pending()


def _flush_pending() -> None:
    """Run queued rounds until none are left.

    Sends made while a round runs (from node functions or subscribers) are
    queued behind it, each as its own round.
    """
    global _flushing
    _flushing = True
    try:
        while _rounds:
            _run_round(_rounds.popleft())
    except Exception:
        _rounds.clear()
        raise
    finally:
        _flushing = False


def _run_round(batch: dict[Input, object]) -> None:
    global _round_count
    _round_count += 1

    fired: set[int] = set()
    queue: list[tuple[int, int, Signal]] = []
    queued: set[int] = set()

    def _enqueue_children(signal: Signal) -> None:
        for child in _anchor.children[signal._id]:
            if child._id not in queued:
                queued.add(child._id)
                heapq.heappush(queue, (_anchor.ranks[child._id], child._id, child))

    for source, value in batch.items():
        if _anchor.disposed[source._id]:
            continue
        _anchor.values[source._id] = value
        fired.add(source._id)
        _enqueue_children(source)

    while queue:
        _, _, node = heapq.heappop(queue)
        if _anchor.disposed[node._id]:
            continue
        result = node._update(fired)
        if result is not None:
            _anchor.values[node._id] = result.value
            fired.add(node._id)
            _enqueue_children(node)

    logger.debug(
        "Round %d: %d input(s), %d signal(s) updated",
        _round_count, len(batch), len(fired),
    )

    for signal_id in sorted(fired):
        value = _anchor.values[signal_id]
        for callback in list(_anchor.subscribers[signal_id]):
            callback(value)


def get_pending_count() -> int:
    """Number of sends waiting to run. Useful for testing."""
    return len(_batch) + sum(len(batch) for batch in _rounds)

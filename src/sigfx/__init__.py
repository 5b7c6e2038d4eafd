"""sigfx: combinators for discrete-event signals."""

from importlib.metadata import version as _version

__version__ = _version("sigfx")

from sigfx._round import get_pending_count
from sigfx.signal import (
    Signal,
    Input,
    constant,
    lift,
    map2,
    map3,
    map4,
    merge,
    simultaneous,
    initial,
    set_scheduler,
)
from sigfx.maybe import Maybe, Some, from_some, is_some, with_default
from sigfx.action import action, transaction
from sigfx.structural import (
    zip2,
    zip3,
    zip4,
    unzip2,
    unzip3,
    unzip4,
    run_buffer,
    run_buffer_from,
    delay_round,
    deltas,
    combine,
    map_many,
    apply_many,
    merge_many,
    passive_map2,
    with_passive,
)
from sigfx.folds import foldp_first, foldps, foldps_first, filter_fold
from sigfx.gates import filter_some, keep_when_i, sample_when
from sigfx.fair import fair_merge
from sigfx.switching import switch_when, switch_sample, keep_then
# textual NOT auto-imported — opt-in only

__all__ = [
    "Signal",
    "Input",
    "constant",
    "lift",
    "map2",
    "map3",
    "map4",
    "merge",
    "simultaneous",
    "initial",
    "set_scheduler",
    "get_pending_count",
    "Maybe",
    "Some",
    "from_some",
    "is_some",
    "with_default",
    "action",
    "transaction",
    "zip2",
    "zip3",
    "zip4",
    "unzip2",
    "unzip3",
    "unzip4",
    "run_buffer",
    "run_buffer_from",
    "delay_round",
    "deltas",
    "combine",
    "map_many",
    "apply_many",
    "merge_many",
    "passive_map2",
    "with_passive",
    "foldp_first",
    "foldps",
    "foldps_first",
    "filter_fold",
    "filter_some",
    "keep_when_i",
    "sample_when",
    "fair_merge",
    "switch_when",
    "switch_sample",
    "keep_then",
]

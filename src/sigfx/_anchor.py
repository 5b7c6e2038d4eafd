"""Data anchor — plain Python structures that hold all signal state.

Every Signal handle stores only an _id; its current value, downstream edges,
subscribers and rank live here. Keeping the graph data apart from the node
classes means the behavior modules can be replaced while the data persists.
"""

import itertools

# Signal state
values: dict[int, object] = {}
children: dict[int, list] = {}  # signal id -> downstream Signal handles
subscribers: dict[int, list] = {}  # signal id -> callbacks
ranks: dict[int, int] = {}  # 0 for sources, 1 + max(parent ranks) otherwise
disposed: dict[int, bool] = {}

# ID generation — itertools.count is thread-safe (C-level GIL atomic)
_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)

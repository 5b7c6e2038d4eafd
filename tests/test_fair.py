"""Tests for fair_merge."""

import operator

from sigfx import Input, fair_merge, merge, transaction
from helper import record


class TestCollision:
    def test_emits_resolved_value_once(self):
        left = Input(0)
        right = Input(0)
        log = record(fair_merge(operator.add, left, right))
        with transaction():
            left.send(3)
            right.send(4)
        assert log == [7]

    def test_resolve_receives_left_then_right(self):
        left = Input("")
        right = Input("")
        log = record(fair_merge(lambda l, r: f"{l}|{r}", left, right))
        with transaction():
            right.send("r")
            left.send("l")
        assert log == ["l|r"]

    def test_same_signal_on_both_sides(self):
        i = Input(1)
        log = record(fair_merge(operator.mul, i, i))
        i.send(3)
        assert log == [9]


class TestNonCollision:
    def test_passes_raw_values_without_resolving(self):
        calls = []

        def resolve(l, r):
            calls.append((l, r))
            return l

        left = Input(0)
        right = Input(0)
        log = record(fair_merge(resolve, left, right))
        left.send(1)
        right.send(2)
        left.send(3)
        assert log == [1, 2, 3]
        assert calls == []

    def test_mixed_rounds(self):
        left = Input(0)
        right = Input(0)
        merged = fair_merge(max, left, right)
        log = record(merged)
        left.send(1)
        with transaction():
            left.send(5)
            right.send(9)
        right.send(2)
        assert log == [1, 9, 2]
        assert merged.value == 2


class TestInitialValue:
    def test_is_left_initial_value(self):
        calls = []
        merged = fair_merge(lambda l, r: calls.append(1), Input("l"), Input("r"))
        assert merged.value == "l"
        assert calls == []


class TestIdentity:
    def test_left_resolve_matches_plain_merge(self):
        left = Input(0)
        right = Input(0)
        fair_log = record(fair_merge(lambda l, r: l, left, right))
        plain_log = record(merge(left, right))
        for source, value in ((left, 1), (right, 2), (right, 3), (left, 4)):
            source.send(value)
        assert fair_log == plain_log == [1, 2, 3, 4]

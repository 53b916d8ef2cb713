"""Tests for loop_verdict.sequences: cursors, END, and capabilities."""

import pytest

from loop_verdict.schemas import UnsupportedCapability
from loop_verdict.sequences import (
    END,
    Cursor,
    ListSequence,
    PullSequence,
    ReplayableSequence,
    SinglePassSequence,
    as_sequence,
)


class TestEndMarker:
    """Tests for the END singleton."""

    def test_singleton(self):
        from loop_verdict.sequences import _End
        assert _End() is END

    def test_falsy_and_repr(self):
        assert not END
        assert repr(END) == "END"

    def test_distinct_from_none(self):
        """None is a legal value; END is not None."""
        assert END is not None
        cursor = ListSequence([None]).open()
        assert cursor.next() is None
        assert cursor.next() is END


class TestCursor:
    """Tests for Cursor pull semantics."""

    def test_values_then_end(self):
        cursor = Cursor(iter([1, 2]))
        assert cursor.next() == 1
        assert cursor.next() == 2
        assert cursor.next() is END

    def test_end_is_sticky(self):
        """next() after END keeps returning END without touching the iterator."""
        pulls = []

        def gen():
            pulls.append(1)
            yield "only"

        cursor = Cursor(gen())
        assert cursor.next() == "only"
        for _ in range(3):
            assert cursor.next() is END
        assert cursor.exhausted is True
        assert len(pulls) == 1

    def test_reads_count_values_only(self):
        cursor = Cursor(iter("abc"))
        while cursor.next() is not END:
            pass
        cursor.next()
        assert cursor.reads == 3

    def test_close_closes_generator(self, make_counter):
        counter = make_counter(lambda: iter(range(10)))
        cursor = Cursor(counter())
        cursor.next()
        cursor.close()
        assert counter.closed == 1
        assert cursor.next() is END

    def test_close_is_idempotent(self):
        calls = []
        cursor = Cursor(iter([1]), on_close=lambda: calls.append(1))
        cursor.close()
        cursor.close()
        assert calls == [1]

    def test_context_manager_closes_on_error(self, make_counter):
        counter = make_counter(lambda: iter(range(10)))
        with pytest.raises(RuntimeError):
            with Cursor(counter()) as cursor:
                cursor.next()
                raise RuntimeError("abandoned")
        assert counter.closed == 1


class TestReplayableSequence:
    """Tests for replayable sequences."""

    def test_independent_cursors(self):
        seq = ListSequence([1, 2, 3])
        a = seq.open()
        b = seq.open()
        assert a.next() == 1
        assert a.next() == 2
        assert b.next() == 1
        assert a.next() == 3
        assert b.next() == 2

    def test_flag(self):
        assert ListSequence([]).replayable is True
        assert ReplayableSequence(lambda: iter([])).replayable is True

    def test_factory_called_per_cursor(self):
        calls = []

        def factory():
            calls.append(1)
            return iter([1])

        seq = ReplayableSequence(factory)
        seq.open()
        seq.open()
        assert len(calls) == 2

    def test_iteration(self):
        seq = ListSequence("xyz")
        assert list(seq) == ["x", "y", "z"]
        assert list(seq) == ["x", "y", "z"]
        assert len(seq) == 3


class TestSinglePassSequence:
    """Tests for single-pass sequences."""

    def test_flag(self):
        assert SinglePassSequence([]).replayable is False

    def test_second_cursor_rejected(self):
        seq = SinglePassSequence(iter([1, 2]))
        seq.open()
        with pytest.raises(UnsupportedCapability):
            seq.open()

    def test_iterating_twice_rejected(self):
        seq = SinglePassSequence([1, 2])
        assert list(seq) == [1, 2]
        with pytest.raises(UnsupportedCapability):
            list(seq)


class TestAsSequence:
    """Tests for as_sequence lifting."""

    def test_passthrough(self):
        seq = ListSequence([1])
        assert as_sequence(seq) is seq

    def test_list_and_tuple_replayable(self):
        assert as_sequence([1, 2]).replayable is True
        assert as_sequence((1, 2)).replayable is True

    def test_generator_single_pass(self):
        seq = as_sequence(x for x in range(3))
        assert isinstance(seq, PullSequence)
        assert seq.replayable is False
        assert list(seq) == [0, 1, 2]

    @pytest.mark.parametrize("obj,replayable", [
        (range(4), True),
        ("abca", True),
        (b"ab", True),
        (frozenset({1, 2}), True),
        ({"a": 1}.keys(), True),
        ((x for x in range(3)), False),
        (iter([1, 2]), False),
        (map(str, [1, 2]), False),
    ])
    def test_capability_follows_iterable(self, obj, replayable):
        assert as_sequence(obj).replayable is replayable

    def test_range_independent_cursors(self):
        seq = as_sequence(range(3))
        a = seq.open()
        b = seq.open()
        assert [a.next(), a.next()] == [0, 1]
        assert [b.next(), b.next(), b.next(), b.next()] == [0, 1, 2, END]

    def test_rejects_non_iterable(self):
        with pytest.raises(TypeError):
            as_sequence(42)

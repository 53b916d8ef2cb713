"""Tests for loop_verdict.identity: what counts as the same state."""

import logging

from loop_verdict.board import Direction, Position
from loop_verdict.detectors import FloydDetector, TeleportingDetector, VisitedSetDetector
from loop_verdict.identity import (
    check_state_value,
    same_by,
    uses_identity_equality,
    value_equality,
)
from loop_verdict.schemas import CycleVerdict
from loop_verdict.sequences import ReplayableSequence


class Node:
    """Game state without __eq__: compares by identity."""

    def __init__(self, x, y):
        self.x = x
        self.y = y


def node_walk():
    """Fresh Node objects that revisit the same coordinates forever."""
    while True:
        yield Node(0, 0)
        yield Node(0, 1)


class TestPredicates:
    """Tests for equality predicates."""

    def test_value_equality_structural(self):
        assert value_equality(Position(1, 2), Position(1, 2))
        assert value_equality(Position(1, 2), (1, 2))
        assert not value_equality(Position(1, 2), Position(2, 1))

    def test_same_by_key(self):
        same = same_by(lambda n: (n.x, n.y))
        assert same(Node(3, 4), Node(3, 4))
        assert not same(Node(3, 4), Node(4, 3))


class TestIdentityGuard:
    """Tests for detecting reference-equality states."""

    def test_plain_object_uses_identity(self):
        assert uses_identity_equality(Node(0, 0)) is True

    def test_value_types_do_not(self):
        assert uses_identity_equality(Position(0, 0)) is False
        assert uses_identity_equality((0, 0)) is False
        assert uses_identity_equality("state") is False

    def test_singletons_do_not(self):
        assert uses_identity_equality(None) is False
        assert uses_identity_equality(Direction.UP) is False

    def test_warns_once_per_type(self, caplog):
        class Fresh:
            pass

        with caplog.at_level(logging.WARNING, logger="loop_verdict.identity"):
            check_state_value(Fresh())
            check_state_value(Fresh())

        warnings = [r for r in caplog.records if "Fresh" in r.getMessage()]
        assert len(warnings) == 1

    def test_no_warning_for_value_types(self, caplog):
        with caplog.at_level(logging.WARNING, logger="loop_verdict.identity"):
            check_state_value(Position(0, 0))
        assert caplog.records == []


class TestIdentityPitfall:
    """Identity equality hides cycles; structural equality finds them."""

    def test_identity_never_matches(self):
        """Fresh objects never compare equal, so within a budget no repeat is seen."""
        detector = VisitedSetDetector()
        seq = ReplayableSequence(lambda: (node for _, node in zip(range(50), node_walk())))
        assert detector.detect(seq) == CycleVerdict.TERMINATES

    def test_structural_predicate_finds_cycle(self):
        key = lambda n: (n.x, n.y)
        seq = ReplayableSequence(node_walk)
        for detector in (FloydDetector(), TeleportingDetector(), VisitedSetDetector()):
            verdict = detector.detect(seq, same_state=same_by(key), key=key)
            assert verdict == CycleVerdict.CYCLES

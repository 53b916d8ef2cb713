"""Shared test fixtures for loop-verdict tests."""

import itertools

import pytest

from loop_verdict.sequences import ReplayableSequence, SinglePassSequence


# ─────────────────────────────────────────────────────────────────────
# MOCK DATA
# ─────────────────────────────────────────────────────────────────────

SAMPLE_ROWS = ["↓←↑→", "↓→↓↓", "↓→→←", "↑→←↑"]


def rho_values(tail: int, cycle: int):
    """Infinite, eventually periodic: t0..t{tail-1}, then c0..c{cycle-1} forever."""
    tail_part = [("t", i) for i in range(tail)]
    cycle_part = [("c", i) for i in range(cycle)]
    return itertools.chain(tail_part, itertools.cycle(cycle_part))


class PullCounter:
    """Iterable factory that records how many values were pulled and closed."""

    def __init__(self, values):
        self._values = values
        self.pulls = 0
        self.closed = 0

    def __call__(self):
        return self._generate()

    def _generate(self):
        try:
            for value in self._values():
                self.pulls += 1
                yield value
        finally:
            self.closed += 1


# ─────────────────────────────────────────────────────────────────────
# FIXTURES
# ─────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_board():
    """The 4x4 arrow board used throughout the walk scenarios."""
    from loop_verdict.board import Board
    return Board.from_rows(SAMPLE_ROWS)


@pytest.fixture
def make_rho():
    """Build an eventually periodic sequence, replayable or single-pass."""

    def _make(tail: int, cycle: int, replayable: bool = False):
        if replayable:
            return ReplayableSequence(lambda: rho_values(tail, cycle))
        return SinglePassSequence(rho_values(tail, cycle))

    return _make


@pytest.fixture
def make_counter():
    """Build a PullCounter over a values factory."""

    def _make(values):
        return PullCounter(values)

    return _make


@pytest.fixture
def rho():
    """The rho_values generator function itself."""
    return rho_values

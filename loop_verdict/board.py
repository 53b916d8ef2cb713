"""
Arrow board - the producer side of the engine.

A rectangular board holds one arrow per cell. A player standing on a
cell calls out its arrow and moves that way; the call-out stream ends
just before the first move that would leave the board. Whether the walk
ends or loops forever is exactly what the detectors decide.

Coordinates are (x, y) with x the column and y the row, rows listed top
to bottom:

    ←: (x-1, y)   →: (x+1, y)   ↓: (x, y+1)   ↑: (x, y-1)
"""

from enum import Enum
from typing import Any, Iterator, NamedTuple, Optional

from pydantic import BaseModel, field_validator

from loop_verdict.schemas import CycleVerdict, MalformedTransition
from loop_verdict.sequences import PullSequence, ReplayableSequence, SinglePassSequence


class Direction(str, Enum):
    """The four arrow symbols."""
    LEFT = "←"
    RIGHT = "→"
    DOWN = "↓"
    UP = "↑"


class Position(NamedTuple):
    x: int
    y: int


_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.UP: (0, -1),
}


def parse_direction(token: Any) -> Direction:
    """
    Turn a Direction or arrow symbol into a Direction.

    Raises:
        MalformedTransition: If token is not one of the four arrows
    """
    if isinstance(token, Direction):
        return token
    try:
        return Direction(token)
    except ValueError:
        raise MalformedTransition(f"Not a direction: {token!r}") from None


def move(position: tuple[int, int], direction: Any) -> Position:
    """Apply one arrow to a position. Total over the four-symbol alphabet."""
    dx, dy = _OFFSETS[parse_direction(direction)]
    x, y = position
    return Position(x + dx, y + dy)


def movement_step(position: tuple[int, int], direction: Any) -> tuple[Position, Position]:
    """move() in (state, input) -> (state, output) form, for transform()."""
    new_position = move(position, direction)
    return new_position, new_position


class Board(BaseModel):
    """
    Rectangular grid of arrows, indexed rows[y][x].

    Build from strings with Board.from_rows(["↓←↑→", ...]).
    """

    rows: list[list[Direction]]

    @field_validator("rows")
    @classmethod
    def rows_rectangular(cls, v: list[list[Direction]]) -> list[list[Direction]]:
        """Fail-fast: board must be non-empty and rectangular."""
        if not v or not v[0]:
            raise ValueError("Board must have at least one cell")
        width = len(v[0])
        for y, row in enumerate(v):
            if len(row) != width:
                raise ValueError(
                    f"Row {y} has {len(row)} cells, expected {width}"
                )
        return v

    @classmethod
    def from_rows(cls, rows: list[str]) -> "Board":
        """Parse one string of arrow symbols per row."""
        return cls(rows=[[parse_direction(ch) for ch in row] for row in rows])

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def state_space_size(self) -> int:
        """Number of distinct positions a walk can visit."""
        return self.width * self.height

    def contains(self, position: tuple[int, int]) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def arrow_at(self, position: tuple[int, int]) -> Direction:
        if not self.contains(position):
            raise IndexError(f"{tuple(position)} is off a {self.width}x{self.height} board")
        x, y = position
        return self.rows[y][x]

    def _call_out(self, start: Position) -> Iterator[Direction]:
        position = start
        while True:
            arrow = self.arrow_at(position)
            next_position = move(position, arrow)
            if not self.contains(next_position):
                return
            yield arrow
            position = next_position

    def directions_from(self, start: tuple[int, int], replayable: bool = False) -> PullSequence:
        """
        The arrows a player starting at start calls out.

        Args:
            start: Starting cell, must be on the board
            replayable: Allow several independent cursors (needed by Floyd).
                The default models the real constraint: moves are called
                out once.
        """
        start = Position(*start)
        if not self.contains(start):
            raise ValueError(f"Start {tuple(start)} is off a {self.width}x{self.height} board")
        if replayable:
            return ReplayableSequence(lambda: self._call_out(start))
        return SinglePassSequence(self._call_out(start))

    def terminates(self, start: tuple[int, int], algorithm: Optional[Any] = None) -> CycleVerdict:
        """Decide whether the walk from start leaves the board."""
        from loop_verdict.engine import get_detector, terminates

        detector = get_detector(algorithm)
        directions = self.directions_from(start, replayable=detector.requires_replayable)
        return terminates(directions, move, Position(*start), algorithm)

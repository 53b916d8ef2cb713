"""
Stateful, lazy mapping from one PullSequence to another.

Used to turn a stream of directions into a stream of positions:

    positions = transform(start, movement_step, directions)

The accumulator lives inside each output cursor. Nothing is pulled from
the source until the matching output is requested.
"""

from typing import Callable, Iterator, Tuple, TypeVar

from loop_verdict.sequences import END, Cursor, PullSequence

S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")

TransitionFunction = Callable[[S, T], Tuple[S, U]]


class TransformedSequence(PullSequence[U]):
    """Output side of transform(). Replayable iff its source is."""

    def __init__(self, seed: S, fn: TransitionFunction, source: PullSequence[T]):
        self._seed = seed
        self._fn = fn
        self._source = source
        self.replayable = source.replayable

    def open(self) -> Cursor[U]:
        # Open eagerly so a second cursor on a single-pass source fails here
        source_cursor = self._source.open()
        return Cursor(self._outputs(source_cursor), on_close=source_cursor.close)

    def _outputs(self, cursor: Cursor[T]) -> Iterator[U]:
        state = self._seed
        while True:
            item = cursor.next()
            if item is END:
                return
            state, output = self._fn(state, item)
            yield output


def transform(seed: S, fn: TransitionFunction, source: PullSequence[T]) -> PullSequence[U]:
    """
    Lazily map source through fn, threading an accumulator.

    Args:
        seed: Initial accumulator
        fn: Pure function (state, item) -> (new_state, output)
        source: Input sequence

    Returns:
        A PullSequence emitting one output per input item
    """
    return TransformedSequence(seed, fn, source)

"""
Pull-based sequences with an explicit end marker.

A PullSequence hands out Cursors. Each Cursor.next() returns the next
value or END; once END has been returned it keeps returning END.

Sequences declare whether they are replayable. A replayable sequence can
open any number of independent cursors that all observe the same values.
A single-pass sequence (e.g. moves called out once by a player) opens
exactly one cursor; asking for a second raises UnsupportedCapability.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from loop_verdict.schemas import UnsupportedCapability

T = TypeVar("T")


class _End:
    """End-of-sequence marker. Falsy, singleton, compares by identity."""

    _instance: Optional["_End"] = None

    def __new__(cls) -> "_End":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "END"

    def __bool__(self) -> bool:
        return False


END = _End()


class Cursor(Generic[T]):
    """
    One advancing view over a sequence.

    Wraps a Python iterator and turns StopIteration into END. Use as a
    context manager so the underlying iterator (a generator, a live
    connection) is released on every exit path.
    """

    def __init__(self, iterator: Iterator[T], on_close: Optional[Callable[[], None]] = None):
        self._iterator = iterator
        self._on_close = on_close
        self.reads = 0  # values delivered, END not counted
        self.exhausted = False
        self.closed = False

    def next(self) -> Any:
        """Return the next value, or END."""
        if self.exhausted or self.closed:
            return END
        try:
            value = next(self._iterator)
        except StopIteration:
            self.exhausted = True
            return END
        self.reads += 1
        return value

    def close(self) -> None:
        """Release the underlying iterator. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        close = getattr(self._iterator, "close", None)
        try:
            if close is not None:
                close()
        finally:
            if self._on_close is not None:
                self._on_close()

    def __enter__(self) -> "Cursor[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class PullSequence(ABC, Generic[T]):
    """Producer of values consumed one at a time through cursors."""

    replayable: bool = False

    @abstractmethod
    def open(self) -> Cursor[T]:
        """Open a new cursor positioned before the first value."""
        ...

    def __iter__(self) -> Iterator[T]:
        with self.open() as cursor:
            while True:
                value = cursor.next()
                if value is END:
                    return
                yield value


class ReplayableSequence(PullSequence[T]):
    """Replayable sequence backed by an iterable factory.

    Every open() calls factory() for a fresh iterable, so the factory must
    produce the same values each time.
    """

    replayable = True

    def __init__(self, factory: Callable[[], Iterable[T]]):
        self._factory = factory

    def open(self) -> Cursor[T]:
        return Cursor(iter(self._factory()))


class ListSequence(ReplayableSequence[T]):
    """Replayable sequence over an in-memory list."""

    def __init__(self, values: Iterable[T]):
        self.values = list(values)
        super().__init__(lambda: self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"ListSequence({self.values!r})"


class SinglePassSequence(PullSequence[T]):
    """Sequence whose values can be observed once, through one cursor."""

    replayable = False

    def __init__(self, iterable: Iterable[T]):
        self._iterable = iterable
        self._opened = False

    def open(self) -> Cursor[T]:
        if self._opened:
            raise UnsupportedCapability(
                "Single-pass sequence already has a cursor; "
                "values cannot be observed twice"
            )
        self._opened = True
        return Cursor(iter(self._iterable))


def as_sequence(obj: Any) -> PullSequence:
    """
    Lift obj into a PullSequence.

    PullSequences pass through. Containers that hand out a fresh iterator
    on every iter() call (lists, ranges, strings, sets, ...) become
    replayable. Iterators and generators are their own iterator and are
    treated as single-pass.
    """
    if isinstance(obj, PullSequence):
        return obj
    if isinstance(obj, (list, tuple)):
        return ListSequence(obj)
    if not isinstance(obj, Iterable):
        raise TypeError(f"Cannot build a sequence from {type(obj).__name__}")
    if isinstance(obj, Iterator) or iter(obj) is obj:
        return SinglePassSequence(obj)
    return ReplayableSequence(lambda: obj)

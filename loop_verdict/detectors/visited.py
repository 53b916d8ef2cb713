"""
Set-based visited tracking.

Remember every state seen so far; the first state already in the set is
the repeat. Memory grows with the number of distinct states, which on a
finite board is at most the number of cells. The simplest and usually
fastest choice when the state space is known to be small.
"""

from typing import Any, Hashable, Optional

from loop_verdict.detectors.base import CycleDetector
from loop_verdict.identity import SameState, StateKey, check_state_value, state_identity
from loop_verdict.schemas import CycleVerdict, DetectionResult
from loop_verdict.sequences import END, PullSequence


class VisitedSetDetector(CycleDetector):
    """
    Single-pass detection with a visited map.

    States are bucketed by key(state) (the state itself by default) and
    confirmed with same_state, so key must agree with same_state: states
    that are the same must share a key.
    """

    name = "set_based"

    def _run(
        self,
        source: PullSequence,
        same_state: SameState,
        key: Optional[StateKey],
    ) -> DetectionResult:
        key_fn = key or state_identity
        # key -> [(first index, state), ...]
        seen: dict[Hashable, list[tuple[int, Any]]] = {}
        visited = 0

        with source.open() as cursor:
            index = 0
            while True:
                value = cursor.next()
                if value is END:
                    return self._result(
                        CycleVerdict.TERMINATES, reads=cursor.reads, visited=visited
                    )
                if index == 0:
                    check_state_value(value)

                bucket = seen.setdefault(key_fn(value), [])
                for first_index, earlier in bucket:
                    if same_state(earlier, value):
                        return self._result(
                            CycleVerdict.CYCLES,
                            reads=cursor.reads,
                            visited=visited,
                            cycle_start=first_index,
                            cycle_length=index - first_index,
                            repeated=value,
                        )

                bucket.append((index, value))
                visited += 1
                index += 1

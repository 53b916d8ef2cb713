"""
Floyd's tortoise and hare.

Two cursors over the same sequence: the tortoise advances one value per
round, the hare two. If the sequence is eventually periodic the hare
laps the tortoise inside the cycle and the two values match.

Only valid for replayable sources. A stream that can be observed once
(moves called out by a player) cannot be walked by two cursors; use the
teleporting or set-based detector there.
"""

from contextlib import ExitStack
from typing import Optional

from loop_verdict.detectors.base import CycleDetector
from loop_verdict.identity import SameState, StateKey, check_state_value
from loop_verdict.schemas import CycleVerdict, DetectionResult
from loop_verdict.sequences import END, PullSequence


class FloydDetector(CycleDetector):
    """Constant-space, dual-cursor detection."""

    name = "floyd"
    requires_replayable = True

    def _run(
        self,
        source: PullSequence,
        same_state: SameState,
        key: Optional[StateKey],
    ) -> DetectionResult:
        with ExitStack() as stack:
            slow = stack.enter_context(source.open())
            fast = stack.enter_context(source.open())

            first = True
            while True:
                tortoise = slow.next()
                if tortoise is END:
                    break
                if first:
                    check_state_value(tortoise)
                    first = False

                hare = fast.next()
                if hare is END:
                    break
                hare = fast.next()
                if hare is END:
                    break

                if same_state(tortoise, hare):
                    return self._result(
                        CycleVerdict.CYCLES,
                        reads=slow.reads + fast.reads,
                        repeated=tortoise,
                    )

            return self._result(CycleVerdict.TERMINATES, reads=slow.reads + fast.reads)

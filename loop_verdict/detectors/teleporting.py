"""
Teleporting tortoise (Brent-style, single cursor).

Read one value as the anchor, then compare up to `distance` further
values against it. No match: double the distance and take the next
unread value as the new anchor. Once the anchor sits inside the cycle
and the window is at least the cycle length, the first match is exactly
one period after the anchor.

Needs one cursor and O(1) state, so it works on single-pass streams.
Values read before a verdict are bounded by a small multiple of
tail length + cycle length.
"""

from typing import Optional

from loop_verdict.detectors.base import CycleDetector
from loop_verdict.identity import SameState, StateKey, check_state_value
from loop_verdict.schemas import CycleVerdict, DetectionResult
from loop_verdict.sequences import END, PullSequence


class TeleportingDetector(CycleDetector):
    """Single-pass detection with an exponentially growing window."""

    name = "teleporting"
    initial_distance: int = 1

    def _run(
        self,
        source: PullSequence,
        same_state: SameState,
        key: Optional[StateKey],
    ) -> DetectionResult:
        distance = self.initial_distance

        with source.open() as cursor:
            anchor = cursor.next()
            if anchor is not END:
                check_state_value(anchor)

            while anchor is not END:
                for step in range(1, distance + 1):
                    candidate = cursor.next()
                    if candidate is END:
                        return self._result(CycleVerdict.TERMINATES, reads=cursor.reads)
                    if same_state(anchor, candidate):
                        return self._result(
                            CycleVerdict.CYCLES,
                            reads=cursor.reads,
                            cycle_length=step,
                            repeated=anchor,
                        )
                distance *= 2
                anchor = cursor.next()

            return self._result(CycleVerdict.TERMINATES, reads=cursor.reads)

"""
CycleDetector base class - the contract shared by all algorithms.

Every detector answers the same question over a PullSequence: does some
state repeat before the sequence ends? Detectors differ in how many
cursors they need and how much memory they hold.

State machine (all detectors):
    RUNNING --END before any repeat--> TERMINATES
    RUNNING --first repeat-----------> CYCLES
Both outcomes are terminal; no next() is issued after reaching one.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from loop_verdict.identity import SameState, StateKey, value_equality
from loop_verdict.schemas import CycleVerdict, DetectionResult, UnsupportedCapability
from loop_verdict.sequences import PullSequence, as_sequence

logger = logging.getLogger(__name__)


class CycleDetector(ABC):
    """
    Base class for cycle detection algorithms.

    Subclasses implement _run() and declare requires_replayable when they
    need more than one independent cursor over the source.
    """

    name: str = ""
    requires_replayable: bool = False

    def detect(
        self,
        source: Any,
        same_state: SameState = value_equality,
        key: Optional[StateKey] = None,
    ) -> CycleVerdict:
        """Return the verdict for source."""
        return self.run(source, same_state=same_state, key=key).verdict

    def run(
        self,
        source: Any,
        same_state: SameState = value_equality,
        key: Optional[StateKey] = None,
    ) -> DetectionResult:
        """
        Run detection and return the verdict with diagnostics.

        Args:
            source: PullSequence (lists and iterables are lifted via as_sequence)
            same_state: Equality predicate between two states
            key: Hashable projection of a state; only set-based detection uses it

        Raises:
            UnsupportedCapability: If the algorithm needs a replayable source
                and source is single-pass. Raised before anything is read.
        """
        sequence = as_sequence(source)
        self.check_capability(sequence)
        result = self._run(sequence, same_state, key)
        logger.debug("%s: %s", self.name, result.display_cell)
        return result

    def check_capability(self, source: PullSequence) -> None:
        if self.requires_replayable and not source.replayable:
            raise UnsupportedCapability(
                f"{self.name} needs two independent cursors, but the source is "
                "single-pass. Use a replayable source, or the teleporting or "
                "set-based detector."
            )

    @abstractmethod
    def _run(
        self,
        source: PullSequence,
        same_state: SameState,
        key: Optional[StateKey],
    ) -> DetectionResult:
        ...

    def _result(self, verdict: CycleVerdict, reads: int, **extra: Any) -> DetectionResult:
        return DetectionResult(algorithm=self.name, verdict=verdict, reads=reads, **extra)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

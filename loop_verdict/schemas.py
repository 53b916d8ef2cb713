"""
Verdict and result schemas.

Pydantic models for detection results, plus the exception hierarchy
shared by the detectors, the transformer and the budget layer.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class CycleVerdict(str, Enum):
    """Terminal classification of a detection run."""
    TERMINATES = "terminates"
    CYCLES = "cycles"

    @property
    def terminated(self) -> bool:
        """Boolean answer of the terminates() predicate."""
        return self is CycleVerdict.TERMINATES


class DetectionResult(BaseModel):
    """
    Outcome of one detector run over one sequence.

    reads counts values delivered by every cursor the detector opened,
    so Floyd reports roughly 1.5x the values a single-pass detector does.
    """

    algorithm: str
    verdict: CycleVerdict
    reads: int = 0
    visited: Optional[int] = None  # Set-based only: distinct states held
    cycle_start: Optional[int] = None  # Index of first occurrence of the repeated state
    cycle_length: Optional[int] = None
    repeated: Optional[Any] = None  # The state that was seen twice

    @property
    def terminated(self) -> bool:
        return self.verdict.terminated

    @property
    def display_cell(self) -> str:
        """Short summary, e.g. for log lines."""
        if self.verdict is CycleVerdict.CYCLES:
            if self.cycle_length is not None:
                return f"⟳ {self.algorithm} (period {self.cycle_length}, {self.reads} reads)"
            return f"⟳ {self.algorithm} ({self.reads} reads)"
        return f"✓ {self.algorithm} ({self.reads} reads)"


# ─────────────────────────────────────────────────────────────────────
# Exception hierarchy
# ─────────────────────────────────────────────────────────────────────


class LoopVerdictError(Exception):
    """Base exception for loop-verdict."""
    pass


class MalformedTransition(LoopVerdictError, ValueError):
    """Transition invoked with a token outside its alphabet."""
    pass


class UnsupportedCapability(LoopVerdictError):
    """Sequence lacks a capability the caller requires (e.g. replay)."""
    pass


class Undetermined(LoopVerdictError):
    """Caller-imposed step budget ran out before a verdict was reached."""
    pass

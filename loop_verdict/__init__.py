"""
Cycle detection for lazily produced sequences.

Decides whether a sequence pulled one value at a time ever revisits a
state (CYCLES) or ends first (TERMINATES), using Floyd's tortoise and
hare, a teleporting tortoise, or a visited set.
"""

from loop_verdict.engine import Algorithm, check, detect, terminates
from loop_verdict.schemas import (
    CycleVerdict,
    DetectionResult,
    LoopVerdictError,
    MalformedTransition,
    Undetermined,
    UnsupportedCapability,
)
from loop_verdict.sequences import END, ListSequence, PullSequence, ReplayableSequence, SinglePassSequence
from loop_verdict.transform import transform

__all__ = [
    "Algorithm",
    "check",
    "detect",
    "terminates",
    "transform",
    "CycleVerdict",
    "DetectionResult",
    "LoopVerdictError",
    "MalformedTransition",
    "Undetermined",
    "UnsupportedCapability",
    "END",
    "ListSequence",
    "PullSequence",
    "ReplayableSequence",
    "SinglePassSequence",
]

"""
Cycle detection algorithms.

Three interchangeable detectors share the CycleDetector contract:
- FloydDetector: two cursors, O(1) memory, replayable sources only
- TeleportingDetector: one cursor, O(1) memory
- VisitedSetDetector: one cursor, memory grows with distinct states
"""

from loop_verdict.detectors.base import CycleDetector
from loop_verdict.detectors.floyd import FloydDetector
from loop_verdict.detectors.teleporting import TeleportingDetector
from loop_verdict.detectors.visited import VisitedSetDetector

__all__ = [
    "CycleDetector",
    "FloydDetector",
    "TeleportingDetector",
    "VisitedSetDetector",
]

"""
Engine - public entry points and the detector registry.

Usage:
    from loop_verdict.engine import Algorithm, terminates
    from loop_verdict.board import move

    verdict = terminates(directions, move, start, Algorithm.TELEPORTING)

Data flow:
    directions --transform(initial, transition)--> positions --detector--> verdict

The registry maps algorithm names to detector instances. Defaults are
registered at import; register_detector() adds or replaces entries.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional, Union

from loop_verdict.config import SMALL_STATE_SPACE, get_default_algorithm
from loop_verdict.detectors import (
    CycleDetector,
    FloydDetector,
    TeleportingDetector,
    VisitedSetDetector,
)
from loop_verdict.identity import SameState, StateKey, value_equality
from loop_verdict.schemas import CycleVerdict, DetectionResult
from loop_verdict.sequences import PullSequence, as_sequence
from loop_verdict.transform import transform

logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    """Built-in detection strategies."""
    FLOYD = "floyd"
    TELEPORTING = "teleporting"
    SET_BASED = "set_based"


AlgorithmName = Union[Algorithm, str]

_detectors: dict[str, CycleDetector] = {}


# ─────────────────────────────────────────────────────────────────────
# REGISTRY
# ─────────────────────────────────────────────────────────────────────


def _name(algorithm: AlgorithmName) -> str:
    if isinstance(algorithm, Algorithm):
        return algorithm.value
    return str(algorithm).strip().lower()


def register_detector(detector: CycleDetector, name: Optional[AlgorithmName] = None) -> None:
    """
    Register a detector instance.

    Args:
        detector: A CycleDetector implementation
        name: Registry key (defaults to detector.name)
    """
    _detectors[_name(name if name is not None else detector.name)] = detector


def get_detector(algorithm: Optional[AlgorithmName] = None) -> CycleDetector:
    """
    Look up a registered detector.

    None falls back to the configured default (LOOP_VERDICT_ALGORITHM).

    Raises:
        ValueError: If no detector is registered under that name
    """
    name = _name(algorithm if algorithm is not None else get_default_algorithm())
    detector = _detectors.get(name)
    if detector is None:
        raise ValueError(
            f"Unknown algorithm '{name}'. Available: {', '.join(sorted(_detectors))}"
        )
    return detector


def list_algorithms() -> list[str]:
    return sorted(_detectors)


def reset_detectors() -> None:
    """Drop custom registrations and restore the built-in detectors."""
    _detectors.clear()
    register_detector(FloydDetector())
    register_detector(TeleportingDetector())
    register_detector(VisitedSetDetector())


reset_detectors()


def recommend_algorithm(
    state_space_size: Optional[int] = None,
    memory_limit: Optional[int] = None,
) -> Algorithm:
    """
    Pick a single-pass strategy.

    Set-based when the number of distinct states is known and fits in
    memory_limit states (default SMALL_STATE_SPACE), teleporting otherwise.
    Floyd is never recommended: it needs a replayable source, which the
    caller has to opt into explicitly.
    """
    if state_space_size is None:
        return Algorithm.TELEPORTING
    limit = memory_limit if memory_limit is not None else SMALL_STATE_SPACE
    if state_space_size <= limit:
        return Algorithm.SET_BASED
    return Algorithm.TELEPORTING


# ─────────────────────────────────────────────────────────────────────
# OPERATIONS
# ─────────────────────────────────────────────────────────────────────


def positions(
    directions: Any,
    transition: Callable[[Any, Any], Any],
    initial: Any,
) -> PullSequence:
    """Lazily turn a direction sequence into the positions it visits."""

    def step(position: Any, direction: Any) -> tuple[Any, Any]:
        new_position = transition(position, direction)
        return new_position, new_position

    return transform(initial, step, as_sequence(directions))


def detect(
    source: Any,
    algorithm: Optional[AlgorithmName] = None,
    *,
    same_state: SameState = value_equality,
    key: Optional[StateKey] = None,
) -> DetectionResult:
    """Run a registered detector directly over a sequence of states."""
    detector = get_detector(algorithm)
    result = detector.run(source, same_state=same_state, key=key)
    logger.info("%s verdict: %s after %d reads", detector.name, result.verdict.value, result.reads)
    return result


def check(
    directions: Any,
    transition: Callable[[Any, Any], Any],
    initial: Any,
    algorithm: Optional[AlgorithmName] = None,
    *,
    same_state: SameState = value_equality,
    key: Optional[StateKey] = None,
) -> DetectionResult:
    """
    Walk directions from initial and report whether positions repeat.

    Args:
        directions: PullSequence (or list/iterable) of direction tokens
        transition: (position, direction) -> next position
        initial: Starting position
        algorithm: Detector to use (default: configured algorithm)
        same_state: Position equality
        key: Hashable projection of a position, for set-based detection

    Returns:
        DetectionResult with the verdict and run diagnostics

    Raises:
        UnsupportedCapability: Floyd requested over a single-pass source
        MalformedTransition: transition rejected a token
    """
    return detect(
        positions(directions, transition, initial),
        algorithm,
        same_state=same_state,
        key=key,
    )


def terminates(
    directions: Any,
    transition: Callable[[Any, Any], Any],
    initial: Any,
    algorithm: Optional[AlgorithmName] = None,
    *,
    same_state: SameState = value_equality,
    key: Optional[StateKey] = None,
) -> CycleVerdict:
    """Verdict-only form of check()."""
    return check(
        directions, transition, initial, algorithm, same_state=same_state, key=key
    ).verdict

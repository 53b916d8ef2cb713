"""
Caller-level step budget.

Detectors only ever answer TERMINATES or CYCLES. A caller that wants to
bound the work wraps the source in a BudgetedSequence; when the budget
runs out the run is abandoned (cursors closed) and reported as
UNDETERMINED, which is a policy outcome, not a verdict.
"""

import logging
from enum import Enum
from typing import Any, Callable, Iterator, Optional

from pydantic import BaseModel

from loop_verdict.config import get_step_budget
from loop_verdict.engine import AlgorithmName, detect, positions
from loop_verdict.identity import SameState, StateKey, value_equality
from loop_verdict.schemas import CycleVerdict, DetectionResult, Undetermined
from loop_verdict.sequences import END, Cursor, PullSequence, as_sequence

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """Result of a budgeted run."""
    TERMINATES = "terminates"
    CYCLES = "cycles"
    UNDETERMINED = "undetermined"


class StepBudgetExceeded(Exception):
    """Raised inside a BudgetedSequence cursor; caught by detect_within()."""
    pass


class BudgetedSequence(PullSequence):
    """
    Wraps a sequence so that all of its cursors share one value budget.

    Pulling more than max_steps values in total (across cursors) raises
    StepBudgetExceeded. Observing END never counts against the budget.
    """

    def __init__(self, source: Any, max_steps: int):
        if max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")
        self._source = as_sequence(source)
        self.replayable = self._source.replayable
        self.max_steps = max_steps
        self.steps = 0

    def open(self) -> Cursor:
        cursor = self._source.open()
        return Cursor(self._counted(cursor), on_close=cursor.close)

    def _counted(self, cursor: Cursor) -> Iterator:
        while True:
            value = cursor.next()
            if value is END:
                return
            if self.steps >= self.max_steps:
                raise StepBudgetExceeded(self.steps)
            self.steps += 1
            yield value


class BoundedResult(BaseModel):
    """Outcome of detect_within()."""

    outcome: Outcome
    max_steps: Optional[int] = None
    steps: int = 0
    result: Optional[DetectionResult] = None  # None when UNDETERMINED

    @property
    def undetermined(self) -> bool:
        return self.outcome is Outcome.UNDETERMINED

    def require_verdict(self) -> CycleVerdict:
        """
        Return the verdict, or raise if the budget ran out.

        Raises:
            Undetermined: If the run hit max_steps before a verdict
        """
        if self.result is None:
            raise Undetermined(
                f"No verdict after {self.steps} steps (budget {self.max_steps})"
            )
        return self.result.verdict


def detect_within(
    source: Any,
    max_steps: Optional[int] = None,
    algorithm: Optional[AlgorithmName] = None,
    *,
    same_state: SameState = value_equality,
    key: Optional[StateKey] = None,
) -> BoundedResult:
    """
    Run a detector with a cap on values read.

    Args:
        source: Sequence of states
        max_steps: Value budget across all cursors
            (default LOOP_VERDICT_STEP_BUDGET; None means unbounded)
        algorithm: Detector to use (default: configured algorithm)
    """
    budget = max_steps if max_steps is not None else get_step_budget()
    if budget is None:
        result = detect(source, algorithm, same_state=same_state, key=key)
        return BoundedResult(
            outcome=Outcome(result.verdict.value), steps=result.reads, result=result
        )

    budgeted = BudgetedSequence(source, budget)
    try:
        result = detect(budgeted, algorithm, same_state=same_state, key=key)
    except StepBudgetExceeded:
        logger.warning("Step budget of %d exhausted before a verdict", budget)
        return BoundedResult(
            outcome=Outcome.UNDETERMINED, max_steps=budget, steps=budgeted.steps
        )

    return BoundedResult(
        outcome=Outcome(result.verdict.value),
        max_steps=budget,
        steps=budgeted.steps,
        result=result,
    )


def check_within(
    directions: Any,
    transition: Callable[[Any, Any], Any],
    initial: Any,
    max_steps: Optional[int] = None,
    algorithm: Optional[AlgorithmName] = None,
    *,
    same_state: SameState = value_equality,
    key: Optional[StateKey] = None,
) -> BoundedResult:
    """Budgeted form of engine.check()."""
    return detect_within(
        positions(directions, transition, initial),
        max_steps,
        algorithm,
        same_state=same_state,
        key=key,
    )

"""
Configuration constants and settings for loop-verdict.
"""

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


# ─────────────────────────────────────────────────────────────────────
# DEFAULTS
# ─────────────────────────────────────────────────────────────────────

DEFAULT_ALGORITHM: str = "set_based"
DEFAULT_LOG_LEVEL: str = "WARNING"
LOG_FORMAT: str = "%(name)s %(message)s"

# Largest state space for which set-based detection is recommended
# when the caller gives no memory limit.
SMALL_STATE_SPACE: int = 1_000_000


# ─────────────────────────────────────────────────────────────────────
# ENVIRONMENT LOADING
# ─────────────────────────────────────────────────────────────────────

def load_env(env_file: Optional[str] = None) -> bool:
    """
    Load LOOP_VERDICT_* variables from a .env file.

    Existing environment variables win over values in the file.
    Returns True if a file was found and loaded.
    """
    return load_dotenv(env_file) if env_file else load_dotenv()


def get_default_algorithm() -> str:
    """
    Get the detector used when callers don't pick one.

    Set LOOP_VERDICT_ALGORITHM in .env (default: set_based).
    """
    value = os.environ.get("LOOP_VERDICT_ALGORITHM", "").strip().lower()
    return value or DEFAULT_ALGORITHM


def get_step_budget() -> Optional[int]:
    """
    Get the default step budget for bounded detection.

    Set LOOP_VERDICT_STEP_BUDGET in .env (default: no budget).
    Non-positive or malformed values mean no budget.
    """
    try:
        budget = int(os.environ.get("LOOP_VERDICT_STEP_BUDGET", ""))
    except ValueError:
        return None
    return budget if budget > 0 else None


def get_log_level() -> int:
    """
    Get the log level from LOOP_VERDICT_LOG_LEVEL (default: WARNING).
    """
    name = os.environ.get("LOOP_VERDICT_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose: bool = False) -> None:
    """Send package logs to stderr. verbose forces DEBUG."""
    level = logging.DEBUG if verbose else get_log_level()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


# ─────────────────────────────────────────────────────────────────────
# DATA MODELS
# ─────────────────────────────────────────────────────────────────────


class EngineSettings(BaseModel):
    """Snapshot of the environment-driven settings."""
    algorithm: str = DEFAULT_ALGORITHM
    step_budget: Optional[int] = None
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls) -> "EngineSettings":
        return cls(
            algorithm=get_default_algorithm(),
            step_budget=get_step_budget(),
            log_level=get_log_level(),
        )

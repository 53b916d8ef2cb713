"""
What counts as "the same state".

Every detector compares states with a SameState predicate. The default is
structural equality (==). Types that never override __eq__ fall back to
object identity, which makes two equal positions look different; such
values are flagged with a warning the first time a detector sees them.
"""

import logging
from enum import Enum
from typing import Any, Callable, Hashable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SameState = Callable[[Any, Any], bool]
StateKey = Callable[[Any], Hashable]

_warned_types: set[type] = set()


def value_equality(a: Any, b: Any) -> bool:
    """Structural equality."""
    return a == b


def same_by(key: StateKey) -> SameState:
    """Build a predicate that compares key(a) with key(b)."""

    def _same(a: Any, b: Any) -> bool:
        return key(a) == key(b)

    return _same


def state_identity(value: T) -> T:
    """Default hash key for set-based detection: the value itself."""
    return value


def uses_identity_equality(value: Any) -> bool:
    """True if value's type inherits object.__eq__ (reference equality).

    None and enum members are singletons, so identity is value equality.
    """
    if value is None or isinstance(value, Enum):
        return False
    return type(value).__eq__ is object.__eq__


def check_state_value(value: Any) -> None:
    """Warn once per type when states compare by object identity."""
    value_type = type(value)
    if value_type in _warned_types or not uses_identity_equality(value):
        return
    _warned_types.add(value_type)
    logger.warning(
        "%s compares by identity; equal states built separately will "
        "never match. Define __eq__/__hash__ or pass same_state/key.",
        value_type.__name__,
    )

"""Input validation for the pool math.

Each helper returns the value converted to float so callers can wrap
their inputs at entry and work with plain floats afterwards.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from stablesurge.constants import PERCENT_SCALE
from stablesurge.errors import (
    InvalidAmplificationError,
    InvalidBalanceError,
    InvalidInvariantError,
    InvalidPercentageError,
)


def require_amplification(amplification: float) -> float:
    """Validate an amplification coefficient.

    Raises:
        InvalidAmplificationError: If not finite or not strictly positive
    """
    value = float(amplification)
    if not math.isfinite(value) or value <= 0:
        raise InvalidAmplificationError(f"Amplification must be positive and finite, got {amplification}")
    return value


def require_balance(balance: float, index: int) -> float:
    """Validate a single balance at position ``index``.

    Raises:
        InvalidBalanceError: If negative or not finite
    """
    value = float(balance)
    if not math.isfinite(value):
        raise InvalidBalanceError(f"Balance at index {index} must be finite, got {balance}")
    if value < 0:
        raise InvalidBalanceError(f"Balance at index {index} cannot be negative: {balance}")
    return value


def require_balance_count(balances: Sequence[float]) -> int:
    """Validate that a balance set holds at least two tokens.

    Returns:
        The number of tokens
    """
    n_coins = len(balances)
    if n_coins < 2:
        raise InvalidBalanceError(f"Pools need at least 2 balances, got {n_coins}")
    return n_coins


def require_balances(balances: Sequence[float]) -> list[float]:
    """Validate a full balance set and return it as a list of floats."""
    require_balance_count(balances)
    return [require_balance(balance, i) for i, balance in enumerate(balances)]


def require_invariant(invariant: float) -> float:
    """Validate an invariant D supplied by a caller.

    Raises:
        InvalidInvariantError: If not finite or not strictly positive
    """
    value = float(invariant)
    if not math.isfinite(value) or value <= 0:
        raise InvalidInvariantError(f"Invariant must be positive and finite, got {invariant}")
    return value


def require_percentage(name: str, percentage: float) -> float:
    """Validate a percentage on the 0-100 scale.

    Args:
        name: Parameter name used in the error message
        percentage: Value to validate

    Raises:
        InvalidPercentageError: If not finite or outside [0, 100]
    """
    value = float(percentage)
    if not math.isfinite(value) or not 0 <= value <= PERCENT_SCALE:
        raise InvalidPercentageError(f"{name} must be within [0, 100], got {percentage}")
    return value

"""Pool imbalance measure used by the StableSurge hook."""

from __future__ import annotations

import statistics
from collections.abc import Sequence

from stablesurge.constants import PERCENT_SCALE

from .checks import require_balances


def calculate_imbalance(balances: Sequence[float]) -> float:
    """Calculate how far a balance set sits from its median.

    Sums |balance - median| over all balances and divides by the total
    balance. The median (not the mean) is the reference point, matching
    the hook contract.

    Args:
        balances: Token balances, at least two, all non-negative

    Returns:
        Imbalance as a percentage in [0, 100]; 0.0 for an empty pool

    Raises:
        InvalidBalanceError: If the balance set is malformed
    """
    balances = require_balances(balances)

    median = statistics.median(balances)

    total_balance = sum(balances)
    if total_balance == 0:
        return 0.0

    total_differences = sum(abs(balance - median) for balance in balances)

    # Half-zero pools sit exactly on the bound; rounding may overshoot it
    return min(PERCENT_SCALE, (PERCENT_SCALE * total_differences) / total_balance)

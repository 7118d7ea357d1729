"""Mathematical core of the StableSurge engine.

This package provides the stable pool primitives:
- calculate_invariant: solve the invariant D from balances
- get_token_balance_given_invariant_and_all_other_balances: recover one balance
- calculate_imbalance: median-based imbalance percentage
"""

from stablesurge.math.imbalance import calculate_imbalance
from stablesurge.math.stable_math import (
    calculate_invariant,
    get_token_balance_given_invariant_and_all_other_balances,
)

__all__ = [
    "calculate_invariant",
    "get_token_balance_given_invariant_and_all_other_balances",
    "calculate_imbalance",
]

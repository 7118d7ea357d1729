"""StableSurge - stable-swap invariant math and imbalance-driven surge fees."""

from stablesurge.errors import (
    DomainError,
    InvalidAmplificationError,
    InvalidBalanceError,
    InvalidInvariantError,
    InvalidPercentageError,
    StableSurgeError,
    ZeroBalanceError,
)
from stablesurge.fees import (
    SurgeFeeCalculator,
    SurgeFeeConfig,
    SurgeFeeResult,
    get_surge_fee_percentage,
    is_surging,
)
from stablesurge.math import (
    calculate_imbalance,
    calculate_invariant,
    get_token_balance_given_invariant_and_all_other_balances,
)
from stablesurge.simulator import PoolState, SwapPreview, apply_swap, preview_swap, run_swaps

__version__ = "0.1.0"
__all__ = [
    # Pool math
    "calculate_invariant",
    "get_token_balance_given_invariant_and_all_other_balances",
    "calculate_imbalance",
    # Surge fee
    "is_surging",
    "get_surge_fee_percentage",
    "SurgeFeeCalculator",
    "SurgeFeeConfig",
    "SurgeFeeResult",
    # Simulation
    "PoolState",
    "SwapPreview",
    "preview_swap",
    "apply_swap",
    "run_swaps",
    # Errors
    "StableSurgeError",
    "DomainError",
    "InvalidAmplificationError",
    "InvalidBalanceError",
    "ZeroBalanceError",
    "InvalidInvariantError",
    "InvalidPercentageError",
    "__version__",
]

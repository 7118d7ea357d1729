"""Surge fee module for StableSurge pools.

This module provides the dynamic fee logic including:
- Imbalance-based surge detection
- Linear surge fee ramp between static and max fee
- Configurable fee parameters

Usage:
    from stablesurge.fees import SurgeFeeCalculator, SurgeFeeConfig

    calculator = SurgeFeeCalculator(SurgeFeeConfig(static_fee_percentage=0.5))
    result = calculator.calculate(new_balances, current_balances)

    if result.surging:
        fee = result.fee_percentage
"""

from stablesurge.fees.config import DEFAULT_SURGE_FEE_CONFIG, SurgeFeeConfig
from stablesurge.fees.result import SurgeFeeResult
from stablesurge.fees.surge import (
    DEFAULT_SURGE_FEE_CALCULATOR,
    SurgeFeeCalculator,
    get_surge_fee_percentage,
    is_surging,
)

__all__ = [
    # Calculator
    "SurgeFeeCalculator",
    "DEFAULT_SURGE_FEE_CALCULATOR",
    "get_surge_fee_percentage",
    "is_surging",
    # Config
    "SurgeFeeConfig",
    "DEFAULT_SURGE_FEE_CONFIG",
    # Result
    "SurgeFeeResult",
]

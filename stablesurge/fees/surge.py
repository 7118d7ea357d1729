"""StableSurge dynamic fee.

The hook charges its static fee unless a swap both worsens the pool's
imbalance and leaves it above the surge threshold. While surging, the
fee ramps linearly from the static fee at the threshold up to the max
surge fee at 100% imbalance:

    fee = static + (max - static) * (imbalance - threshold) / (100 - threshold)
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from stablesurge.constants import PERCENT_SCALE
from stablesurge.errors import InvalidPercentageError
from stablesurge.fees.config import DEFAULT_SURGE_FEE_CONFIG, SurgeFeeConfig
from stablesurge.fees.result import SurgeFeeResult
from stablesurge.math.checks import require_percentage
from stablesurge.math.imbalance import calculate_imbalance

logger = structlog.get_logger()


def is_surging(
    surge_threshold_percentage: float,
    current_balances: Sequence[float],
    new_total_imbalance: float,
) -> bool:
    """Decide whether a swap puts the pool in a surging state.

    Args:
        surge_threshold_percentage: Imbalance threshold (0-100)
        current_balances: Pool balances before the swap
        new_total_imbalance: Imbalance of the balances after the swap

    Returns:
        True only if the new imbalance is worse than the current one and
        above the threshold
    """
    threshold = require_percentage("surge_threshold_percentage", surge_threshold_percentage)
    new_imbalance = require_percentage("new_total_imbalance", new_total_imbalance)

    # A perfectly balanced result never surges
    if new_imbalance == 0:
        return False

    return _surges(threshold, new_imbalance, calculate_imbalance(current_balances))


def _surges(threshold: float, new_imbalance: float, current_imbalance: float) -> bool:
    if new_imbalance == 0:
        return False
    return new_imbalance > current_imbalance and new_imbalance > threshold


def _ramp_fee(
    max_surge_fee_percentage: float,
    surge_threshold_percentage: float,
    static_fee_percentage: float,
    new_imbalance: float,
) -> float:
    if surge_threshold_percentage >= PERCENT_SCALE:
        raise InvalidPercentageError("surge_threshold_percentage must be below 100 while surging")
    return (
        static_fee_percentage
        + (max_surge_fee_percentage - static_fee_percentage)
        * (new_imbalance - surge_threshold_percentage)
        / (PERCENT_SCALE - surge_threshold_percentage)
    )


def get_surge_fee_percentage(
    max_surge_fee_percentage: float,
    surge_threshold_percentage: float,
    static_fee_percentage: float,
    new_balances: Sequence[float],
    current_balances: Sequence[float],
) -> float:
    """Calculate the fee percentage for a swap.

    Args:
        max_surge_fee_percentage: Fee reached at 100% imbalance (e.g. 10 for 10%)
        surge_threshold_percentage: Imbalance at which surging starts (e.g. 20)
        static_fee_percentage: Fee that always applies (e.g. 1)
        new_balances: Projected pool balances after the swap
        current_balances: Pool balances before the swap

    Returns:
        The fee percentage to charge (e.g. 5.0 for 5%)

    Raises:
        InvalidPercentageError: If a fee parameter is outside [0, 100]
        InvalidBalanceError: If a balance set is malformed
    """
    max_fee = require_percentage("max_surge_fee_percentage", max_surge_fee_percentage)
    threshold = require_percentage("surge_threshold_percentage", surge_threshold_percentage)
    static_fee = require_percentage("static_fee_percentage", static_fee_percentage)

    # Surge disabled by configuration
    if max_fee < static_fee:
        return static_fee

    new_imbalance = calculate_imbalance(new_balances)

    if not is_surging(threshold, current_balances, new_imbalance):
        return static_fee

    fee = _ramp_fee(max_fee, threshold, static_fee, new_imbalance)
    logger.debug(
        "surge_fee_applied",
        new_imbalance=new_imbalance,
        threshold=threshold,
        fee_percentage=fee,
    )
    return fee


class SurgeFeeCalculator:
    """Surge fee calculation bound to a pool's fee configuration.

    Produces the same fee as get_surge_fee_percentage() along with the
    imbalances that drove the decision.

    Attributes:
        config: Fee configuration settings
    """

    def __init__(self, config: SurgeFeeConfig | None = None):
        """Initialize with optional configuration.

        Args:
            config: Fee configuration. Uses DEFAULT_SURGE_FEE_CONFIG if not provided.
        """
        self.config = config or DEFAULT_SURGE_FEE_CONFIG

    def calculate(
        self,
        new_balances: Sequence[float],
        current_balances: Sequence[float],
    ) -> SurgeFeeResult:
        """Calculate the fee for moving the pool from current to new balances.

        Args:
            new_balances: Projected pool balances after the swap
            current_balances: Pool balances before the swap

        Returns:
            SurgeFeeResult with the fee and the measured imbalances
        """
        config = self.config
        if not config.surge_enabled:
            return SurgeFeeResult.static(config.static_fee_percentage)

        new_imbalance = calculate_imbalance(new_balances)
        current_imbalance = calculate_imbalance(current_balances)
        surging = _surges(config.surge_threshold_percentage, new_imbalance, current_imbalance)

        if surging:
            fee = _ramp_fee(
                config.max_surge_fee_percentage,
                config.surge_threshold_percentage,
                config.static_fee_percentage,
                new_imbalance,
            )
        else:
            fee = config.static_fee_percentage

        return SurgeFeeResult(
            fee_percentage=fee,
            static_fee_percentage=config.static_fee_percentage,
            new_imbalance=new_imbalance,
            current_imbalance=current_imbalance,
            surging=surging,
        )


# Default calculator instance
DEFAULT_SURGE_FEE_CALCULATOR = SurgeFeeCalculator()

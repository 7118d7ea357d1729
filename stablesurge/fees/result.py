"""Surge fee calculation result types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SurgeFeeResult:
    """Breakdown of a surge fee calculation.

    Attributes:
        fee_percentage: Effective fee to charge, on the 0-100 scale.
        static_fee_percentage: The pool's static fee.
        new_imbalance: Imbalance of the proposed balances, or None when the
            surge mechanism is disabled and no imbalance was measured.
        current_imbalance: Imbalance of the current balances, or None when
            not measured.
        surging: Whether the swap worsens imbalance past the threshold.

    Examples:
        # Surge disabled by configuration
        result = SurgeFeeResult.static(1.0)
        assert not result.surging
        assert result.surge_component == 0.0
        assert result.new_imbalance is None
    """

    fee_percentage: float
    static_fee_percentage: float
    new_imbalance: float | None = None
    current_imbalance: float | None = None
    surging: bool = False

    @property
    def surge_component(self) -> float:
        """Fee charged on top of the static fee."""
        return self.fee_percentage - self.static_fee_percentage

    @classmethod
    def static(cls, static_fee_percentage: float) -> "SurgeFeeResult":
        """Create a result for a pool whose surge mechanism is disabled."""
        return cls(fee_percentage=static_fee_percentage, static_fee_percentage=static_fee_percentage)

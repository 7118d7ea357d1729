"""Surge fee configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from stablesurge.constants import (
    DEFAULT_MAX_SURGE_FEE_PERCENTAGE,
    DEFAULT_STATIC_FEE_PERCENTAGE,
    DEFAULT_SURGE_THRESHOLD_PERCENTAGE,
)
from stablesurge.math.checks import require_percentage

# Environment variables read by SurgeFeeConfig.from_env()
ENV_STATIC_FEE = "STABLESURGE_STATIC_FEE"
ENV_MAX_SURGE_FEE = "STABLESURGE_MAX_SURGE_FEE"
ENV_SURGE_THRESHOLD = "STABLESURGE_SURGE_THRESHOLD"


@dataclass(frozen=True)
class SurgeFeeConfig:
    """Fee parameters of a StableSurge pool.

    All values are percentages on the 0-100 scale (1.0 means 1%).

    Attributes:
        static_fee_percentage: Fee always charged (default: 1)
        max_surge_fee_percentage: Fee reached as imbalance approaches 100%
            (default: 10). Below the static fee, surging is disabled.
        surge_threshold_percentage: Imbalance above which a worsening swap
            starts to surge (default: 20)
    """

    static_fee_percentage: float = DEFAULT_STATIC_FEE_PERCENTAGE
    max_surge_fee_percentage: float = DEFAULT_MAX_SURGE_FEE_PERCENTAGE
    surge_threshold_percentage: float = DEFAULT_SURGE_THRESHOLD_PERCENTAGE

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        for name in (
            "static_fee_percentage",
            "max_surge_fee_percentage",
            "surge_threshold_percentage",
        ):
            object.__setattr__(self, name, require_percentage(name, getattr(self, name)))

    @property
    def surge_enabled(self) -> bool:
        """False when the max surge fee is below the static fee."""
        return self.max_surge_fee_percentage >= self.static_fee_percentage

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SurgeFeeConfig:
        """Build a config from environment variables.

        Configuration via environment variables:
        - STABLESURGE_STATIC_FEE: Static fee percentage (default: 1)
        - STABLESURGE_MAX_SURGE_FEE: Max surge fee percentage (default: 10)
        - STABLESURGE_SURGE_THRESHOLD: Surge threshold percentage (default: 20)

        Raises:
            InvalidPercentageError: If a value is outside [0, 100]
            ValueError: If a value is not a number
        """
        env = os.environ if environ is None else environ
        return cls(
            static_fee_percentage=float(env.get(ENV_STATIC_FEE, DEFAULT_STATIC_FEE_PERCENTAGE)),
            max_surge_fee_percentage=float(
                env.get(ENV_MAX_SURGE_FEE, DEFAULT_MAX_SURGE_FEE_PERCENTAGE)
            ),
            surge_threshold_percentage=float(
                env.get(ENV_SURGE_THRESHOLD, DEFAULT_SURGE_THRESHOLD_PERCENTAGE)
            ),
        )


# Default configuration instance
DEFAULT_SURGE_FEE_CONFIG = SurgeFeeConfig()

"""Scenario models for StableSurge simulations.

A scenario describes a pool (amplification, balances, fee parameters)
and an ordered list of swaps to run against it. Field names follow the
camelCase used by the hook's configuration; snake_case names are
accepted too.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field, model_validator

from stablesurge.constants import (
    DEFAULT_AMPLIFICATION,
    DEFAULT_MAX_SURGE_FEE_PERCENTAGE,
    DEFAULT_STATIC_FEE_PERCENTAGE,
    DEFAULT_SURGE_THRESHOLD_PERCENTAGE,
)
from stablesurge.fees.config import SurgeFeeConfig
from stablesurge.simulator import PoolState, SwapPreview, run_swaps

# Percentage on the 0-100 scale
Percentage = Annotated[float, Field(ge=0, le=100, allow_inf_nan=False)]

# Non-negative finite token balance
Balance = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class SwapRequest(BaseModel):
    """A swap selling amount_in of token_in for token_out."""

    token_in: int = Field(alias="tokenIn", ge=0)
    token_out: int = Field(alias="tokenOut", ge=0)
    amount_in: Balance = Field(alias="amountIn")

    model_config = {"populate_by_name": True}

    def as_tuple(self) -> tuple[int, int, float]:
        return self.token_in, self.token_out, self.amount_in


class PoolScenario(BaseModel):
    """A StableSurge pool and the swaps to simulate on it."""

    amplification: float = Field(default=DEFAULT_AMPLIFICATION, gt=0, allow_inf_nan=False)
    balances: list[Balance] = Field(min_length=2)
    static_fee_percentage: Percentage = Field(
        default=DEFAULT_STATIC_FEE_PERCENTAGE, alias="staticFeePercentage"
    )
    max_surge_fee_percentage: Percentage = Field(
        default=DEFAULT_MAX_SURGE_FEE_PERCENTAGE, alias="maxSurgeFeePercentage"
    )
    surge_threshold_percentage: Percentage = Field(
        default=DEFAULT_SURGE_THRESHOLD_PERCENTAGE, alias="surgeThresholdPercentage"
    )
    swaps: list[SwapRequest] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_swap_indices(self) -> PoolScenario:
        n_coins = len(self.balances)
        for i, swap in enumerate(self.swaps):
            if swap.token_in >= n_coins or swap.token_out >= n_coins:
                raise ValueError(f"swap {i} references a token outside the {n_coins}-token pool")
            if swap.token_in == swap.token_out:
                raise ValueError(f"swap {i} sells and buys the same token")
        return self

    def fee_config(self) -> SurgeFeeConfig:
        return SurgeFeeConfig(
            static_fee_percentage=self.static_fee_percentage,
            max_surge_fee_percentage=self.max_surge_fee_percentage,
            surge_threshold_percentage=self.surge_threshold_percentage,
        )

    def pool_state(self) -> PoolState:
        """Initial pool snapshot described by this scenario."""
        return PoolState.create(
            self.balances,
            amplification=self.amplification,
            fee_config=self.fee_config(),
        )

    def run(self) -> tuple[list[SwapPreview], PoolState]:
        """Apply every swap in order, starting from the initial pool."""
        return run_swaps(self.pool_state(), (swap.as_tuple() for swap in self.swaps))


def load_scenario(path: Path | str) -> PoolScenario:
    """Load a scenario from a JSON file.

    Raises:
        pydantic.ValidationError: If the file does not describe a valid scenario
    """
    with open(path) as f:
        data = json.load(f)
    return PoolScenario.model_validate(data)

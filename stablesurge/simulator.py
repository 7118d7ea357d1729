"""Swap simulation against a StableSurge pool.

A PoolState is an immutable snapshot of the pool. Previewing a swap
never changes it; applying a swap returns a new state with updated
balances and the fee credited to the input token's collected fees.

Swap flow:
    1. D = invariant of the current balances
    2. Proposed balances: add amount_in to token_in, solve token_out on D
    3. Fee percentage from the surge fee on proposed vs current balances
    4. Post-fee balances: add amount_in - fee to token_in, solve token_out on D
    5. amount_out = current[token_out] - post-fee balance of token_out
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

import structlog

from stablesurge.constants import DEFAULT_AMPLIFICATION, PERCENT_SCALE
from stablesurge.errors import DomainError
from stablesurge.fees.config import DEFAULT_SURGE_FEE_CONFIG, SurgeFeeConfig
from stablesurge.fees.surge import get_surge_fee_percentage
from stablesurge.math.checks import require_amplification, require_balances
from stablesurge.math.imbalance import calculate_imbalance
from stablesurge.math.stable_math import (
    calculate_invariant,
    get_token_balance_given_invariant_and_all_other_balances,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolState:
    """Snapshot of a StableSurge pool.

    Attributes:
        amplification: Amplification coefficient A
        balances: Token balances, indexed by token position
        collected_fees: Fees collected per token, kept outside the balances
        fee_config: Static/max/threshold fee parameters
    """

    amplification: float
    balances: tuple[float, ...]
    collected_fees: tuple[float, ...] = ()
    fee_config: SurgeFeeConfig = field(default=DEFAULT_SURGE_FEE_CONFIG)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amplification", require_amplification(self.amplification))
        object.__setattr__(self, "balances", tuple(require_balances(self.balances)))
        if not self.collected_fees:
            object.__setattr__(self, "collected_fees", (0.0,) * len(self.balances))
        elif len(self.collected_fees) != len(self.balances):
            raise ValueError(
                f"collected_fees has {len(self.collected_fees)} entries for {len(self.balances)} tokens"
            )

    @classmethod
    def create(
        cls,
        balances: Sequence[float],
        amplification: float = DEFAULT_AMPLIFICATION,
        fee_config: SurgeFeeConfig | None = None,
    ) -> PoolState:
        """Create a fresh pool with no collected fees."""
        return cls(
            amplification=amplification,
            balances=tuple(balances),
            fee_config=fee_config or DEFAULT_SURGE_FEE_CONFIG,
        )

    @property
    def n_coins(self) -> int:
        return len(self.balances)

    @property
    def invariant(self) -> float:
        """The invariant D of the current balances."""
        return calculate_invariant(self.amplification, self.balances)

    @property
    def imbalance(self) -> float:
        """Imbalance percentage of the current balances."""
        return calculate_imbalance(self.balances)

    def solve_balance(self, balances: Sequence[float], invariant: float, token_index: int) -> float:
        """Solve ``balances[token_index]`` on ``invariant`` with this pool's amplification."""
        return get_token_balance_given_invariant_and_all_other_balances(
            self.amplification, balances, invariant, token_index
        )


@dataclass(frozen=True)
class SwapPreview:
    """Result of simulating a swap without applying it.

    Attributes:
        token_in: Index of the token sold to the pool
        token_out: Index of the token bought from the pool
        amount_in: Amount of token_in sent, fee included
        amount_out: Amount of token_out received
        fee: Fee charged in token_in units
        fee_percentage: Fee percentage applied (0-100 scale)
        balances_after: Pool balances once the swap settles
    """

    token_in: int
    token_out: int
    amount_in: float
    amount_out: float
    fee: float
    fee_percentage: float
    balances_after: tuple[float, ...]

    @classmethod
    def empty(cls, state: PoolState, token_in: int, token_out: int) -> SwapPreview:
        """Preview for a zero-amount swap: nothing moves."""
        return cls(
            token_in=token_in,
            token_out=token_out,
            amount_in=0.0,
            amount_out=0.0,
            fee=0.0,
            fee_percentage=0.0,
            balances_after=state.balances,
        )


def validate_swap_indices(n_coins: int, token_in: int, token_out: int) -> None:
    """Validate a swap's token indices.

    Raises:
        IndexError: If an index is out of range
        ValueError: If token_in == token_out
    """
    if token_in < 0 or token_in >= n_coins:
        raise IndexError(f"token_in {token_in} out of range for {n_coins} tokens")
    if token_out < 0 or token_out >= n_coins:
        raise IndexError(f"token_out {token_out} out of range for {n_coins} tokens")
    if token_in == token_out:
        raise ValueError("Cannot swap token with itself")


def preview_swap(state: PoolState, token_in: int, token_out: int, amount_in: float) -> SwapPreview:
    """Simulate selling ``amount_in`` of token_in for token_out.

    Args:
        state: Pool snapshot
        token_in: Index of the token sold to the pool
        token_out: Index of the token bought from the pool
        amount_in: Amount sold, fee included

    Returns:
        SwapPreview with amount out, fee and post-swap balances

    Raises:
        IndexError: If a token index is out of range
        ValueError: If token_in == token_out
        DomainError: If amount_in is negative or not finite
    """
    validate_swap_indices(state.n_coins, token_in, token_out)
    amount_in = float(amount_in)
    if not math.isfinite(amount_in) or amount_in < 0:
        raise DomainError(f"amount_in must be non-negative and finite, got {amount_in}")
    if amount_in == 0:
        return SwapPreview.empty(state, token_in, token_out)

    current_balances = state.balances
    invariant = state.invariant
    config = state.fee_config

    proposed = list(current_balances)
    proposed[token_in] += amount_in
    proposed[token_out] = state.solve_balance(proposed, invariant, token_out)

    fee_percentage = get_surge_fee_percentage(
        config.max_surge_fee_percentage,
        config.surge_threshold_percentage,
        config.static_fee_percentage,
        proposed,
        current_balances,
    )
    fee = (amount_in * fee_percentage) / PERCENT_SCALE

    balances_after = list(current_balances)
    balances_after[token_in] += amount_in - fee
    balances_after[token_out] = state.solve_balance(balances_after, invariant, token_out)

    return SwapPreview(
        token_in=token_in,
        token_out=token_out,
        amount_in=amount_in,
        amount_out=current_balances[token_out] - balances_after[token_out],
        fee=fee,
        fee_percentage=fee_percentage,
        balances_after=tuple(balances_after),
    )


def settle_swap(state: PoolState, preview: SwapPreview) -> PoolState:
    """Move a pool to the balances of a previewed swap.

    The fee is credited to ``collected_fees[token_in]`` and does not stay
    in the pool balances.
    """
    collected_fees = list(state.collected_fees)
    collected_fees[preview.token_in] += preview.fee

    logger.debug(
        "swap_applied",
        token_in=preview.token_in,
        token_out=preview.token_out,
        amount_in=preview.amount_in,
        amount_out=preview.amount_out,
        fee_percentage=preview.fee_percentage,
    )
    return replace(state, balances=preview.balances_after, collected_fees=tuple(collected_fees))


def apply_swap(state: PoolState, token_in: int, token_out: int, amount_in: float) -> PoolState:
    """Execute a swap and return the resulting pool state."""
    return settle_swap(state, preview_swap(state, token_in, token_out, amount_in))


def run_swaps(
    state: PoolState,
    swaps: Iterable[tuple[int, int, float]],
) -> tuple[list[SwapPreview], PoolState]:
    """Apply swaps one after another.

    Args:
        state: Initial pool snapshot
        swaps: (token_in, token_out, amount_in) triples

    Returns:
        The preview of each swap as executed, and the final state
    """
    previews: list[SwapPreview] = []
    for token_in, token_out, amount_in in swaps:
        preview = preview_swap(state, token_in, token_out, amount_in)
        state = settle_swap(state, preview)
        previews.append(preview)
    return previews, state

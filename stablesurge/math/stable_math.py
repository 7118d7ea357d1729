"""Stable pool math.

Core math functions for stable (StableSwap/Curve-style) pools, computed
with ordinary floats the same way the StableSurge simulator does. The
formulas follow Balancer's StableMath.sol:
https://github.com/balancer-labs/balancer-core-v2/blob/master/contracts/pools/stable/StableMath.sol

Unlike the on-chain version there are no rounding-direction variants;
every division is a plain float division.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import structlog

from stablesurge.constants import INVARIANT_TOLERANCE, STABLE_MAX_ITERATIONS
from stablesurge.errors import ZeroBalanceError

from .checks import (
    require_amplification,
    require_balance,
    require_balance_count,
    require_balances,
    require_invariant,
)

logger = structlog.get_logger()


def calculate_invariant(amplification: float, balances: Sequence[float]) -> float:
    """Calculate the StableSwap invariant D by fixed-point iteration.

    Iteration:
        P_D = n * b[0], then P_D = P_D * b[j] * n / D for each later balance
        D = (n*D^2 + A*n^n*S*P_D) / ((n+1)*D + (A*n^n - 1)*P_D)

    Starts from D = sum(balances) and stops once consecutive values differ
    by less than one unit, or after 255 iterations. In the latter case the
    last value is returned as is.

    Args:
        amplification: Amplification coefficient A (> 0)
        balances: Token balances, at least two, all non-negative

    Returns:
        The invariant D, or 0.0 if every balance is zero

    Raises:
        InvalidAmplificationError: If amplification is not positive
        InvalidBalanceError: If the balance set is malformed
    """
    amp = require_amplification(amplification)
    balances = require_balances(balances)
    n_coins = len(balances)

    sum_balances = sum(balances)
    if sum_balances == 0:
        return 0.0

    # A * n^n
    amp_times_n_pow_n = amp * n_coins**n_coins

    invariant = sum_balances
    for _ in range(STABLE_MAX_ITERATIONS):
        p_d = n_coins * balances[0]
        for balance in balances[1:]:
            p_d = (p_d * balance * n_coins) / invariant

        prev_invariant = invariant
        invariant = (n_coins * invariant * invariant + amp_times_n_pow_n * sum_balances * p_d) / (
            (n_coins + 1) * invariant + (amp_times_n_pow_n - 1) * p_d
        )

        if abs(invariant - prev_invariant) < INVARIANT_TOLERANCE:
            return invariant

    logger.warning(
        "stable_invariant_max_iterations_reached",
        iterations=STABLE_MAX_ITERATIONS,
        n_coins=n_coins,
        invariant=invariant,
    )
    return invariant


def get_token_balance_given_invariant_and_all_other_balances(
    amplification: float,
    balances: Sequence[float],
    invariant: float,
    token_index: int,
) -> float:
    """Solve for balance[token_index] given D and all other balances.

    ``balances`` is the full balance set; the entry at ``token_index`` is
    the unknown and its value is ignored.

    Args:
        amplification: Amplification coefficient A (> 0)
        balances: Full balance set including the unknown slot
        invariant: The invariant D to preserve
        token_index: Index of the token whose balance we're solving for

    Returns:
        The balance of ``token_index`` that keeps the pool on D

    Raises:
        InvalidAmplificationError: If amplification is not positive
        InvalidInvariantError: If invariant is not positive
        InvalidBalanceError: If a known balance is negative or not finite
        ZeroBalanceError: If a known balance is zero
        IndexError: If token_index is out of range
    """
    amp = require_amplification(amplification)
    d = require_invariant(invariant)
    n_coins = require_balance_count(balances)
    if token_index < 0 or token_index >= n_coins:
        raise IndexError(f"token_index {token_index} out of range for {n_coins} tokens")

    p = d
    sum_others = 0.0
    n_pow_n = 1
    for i in range(n_coins):
        n_pow_n = n_pow_n * n_coins
        if i == token_index:
            continue
        balance = require_balance(balances[i], i)
        if balance == 0:
            raise ZeroBalanceError(f"Balance at index {i} must be positive")
        sum_others = sum_others + balance
        p = (p * d) / balance

    return _solve_analytical_balance(sum_others, d, amp, n_pow_n, p)


def _solve_analytical_balance(
    sum_others: float,
    invariant: float,
    amplification: float,
    n_pow_n: int,
    p: float,
) -> float:
    """Closed-form root of the invariant equation in the unknown balance.

    The invariant reduces to y^2 + (b - D) * y - c = 0 with
    b = S' + D / (A * n^n) and c = D^(n+1) / (A * n^2n * P'), where S' and
    P' are the sum and product of the known balances. ``p`` arrives as
    D^n / P'.
    """
    p = (p * invariant) / (amplification * n_pow_n * n_pow_n)
    b = sum_others + invariant / (amplification * n_pow_n)
    c = invariant - b + math.sqrt((invariant - b) ** 2 + 4 * p)
    return c / 2

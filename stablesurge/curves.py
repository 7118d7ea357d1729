"""Invariant curve sampling for charting a StableSurge pool.

Curves are traced in the (token_in balance, token_out balance) plane with
every other balance held at its current value.
"""

from __future__ import annotations

from dataclasses import dataclass

from stablesurge.constants import (
    CURVE_POINTS,
    CURVE_POINTS_WITH_FEES,
    CURVE_RANGE_OUT_DIVISOR,
    CURVE_RANGE_SCAN_STEPS,
    CURVE_RANGE_STEP_DIVISOR,
    IMBALANCE_SWEEP_STEPS,
    PERCENT_SCALE,
)
from stablesurge.fees.surge import get_surge_fee_percentage
from stablesurge.math.imbalance import calculate_imbalance
from stablesurge.simulator import PoolState, validate_swap_indices


@dataclass(frozen=True)
class CurvePoint:
    """A point on a pool curve: x = token_in balance, y = token_out balance."""

    x: float
    y: float


def _require_positive_count(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")


def curve_upper_bound(state: PoolState, invariant: float, token_in: int, token_out: int) -> float:
    """Find how far along token_in a curve should be drawn.

    Scans token_in balances in steps of balances[token_out] / 10 until the
    solved token_out balance drops below 1% of its current value. Falls back
    to the current token_in balance when the scan never gets there.
    """
    balances = state.balances
    floor_out = balances[token_out] / CURVE_RANGE_OUT_DIVISOR
    for i in range(1, CURVE_RANGE_SCAN_STEPS):
        trial = list(balances)
        trial[token_in] = (i * balances[token_out]) / CURVE_RANGE_STEP_DIVISOR
        if state.solve_balance(trial, invariant, token_out) < floor_out:
            return trial[token_in]
    return balances[token_in]


def invariant_curve(
    state: PoolState,
    token_in: int,
    token_out: int,
    num_points: int = CURVE_POINTS,
) -> list[CurvePoint]:
    """Sample the pool's invariant curve.

    Args:
        state: Pool snapshot; its balances fix the invariant
        token_in: Index plotted on the x axis
        token_out: Index plotted on the y axis
        num_points: Number of evenly spaced samples

    Returns:
        Points ordered by increasing token_in balance
    """
    validate_swap_indices(state.n_coins, token_in, token_out)
    _require_positive_count("num_points", num_points)

    invariant = state.invariant
    step = curve_upper_bound(state, invariant, token_in, token_out) / num_points

    points = []
    for i in range(num_points):
        balances = list(state.balances)
        balances[token_in] = (i + 1) * step
        y = state.solve_balance(balances, invariant, token_out)
        points.append(CurvePoint(x=balances[token_in], y=y))
    return points


def invariant_curve_with_fees(
    state: PoolState,
    token_in: int,
    token_out: int,
    num_points: int = CURVE_POINTS_WITH_FEES,
) -> list[CurvePoint]:
    """Sample the curve a trader actually moves along once fees are paid.

    Left of the current point the trader sells token_out, so the fee is
    added to the token_out balance. Right of it the trader sells token_in
    and the fee is added to token_in. Fees stay in the pool.
    """
    validate_swap_indices(state.n_coins, token_in, token_out)
    _require_positive_count("num_points", num_points)

    config = state.fee_config
    current = state.balances
    invariant = state.invariant
    step = curve_upper_bound(state, invariant, token_in, token_out) / num_points

    points = []
    for i in range(num_points):
        x = (i + 1) * step
        proposed = list(current)
        proposed[token_in] = x
        y = state.solve_balance(proposed, invariant, token_out)
        proposed[token_out] = y

        fee_percentage = get_surge_fee_percentage(
            config.max_surge_fee_percentage,
            config.surge_threshold_percentage,
            config.static_fee_percentage,
            proposed,
            current,
        )
        if x < current[token_in]:
            y = y + ((y - current[token_out]) * fee_percentage) / PERCENT_SCALE
        else:
            x = x + ((x - current[token_in]) * fee_percentage) / PERCENT_SCALE
        points.append(CurvePoint(x=x, y=y))
    return points


def imbalance_threshold_points(
    state: PoolState,
    token_in: int,
    token_out: int,
    steps: int = IMBALANCE_SWEEP_STEPS,
) -> tuple[CurvePoint | None, CurvePoint | None]:
    """Locate where the invariant curve crosses the surge threshold.

    Sweeps token_in from 1% of the pair's mean balance upward, solving
    token_out on the pool's invariant at each step.

    Returns:
        (lower, upper): lower is the first point whose imbalance falls below
        the threshold; upper is the first point after it whose imbalance
        rises above the threshold. Either is None when not reached.
    """
    validate_swap_indices(state.n_coins, token_in, token_out)
    _require_positive_count("steps", steps)

    threshold = state.fee_config.surge_threshold_percentage
    invariant = state.invariant
    pair_mean = (state.balances[token_in] + state.balances[token_out]) / 2

    lower: CurvePoint | None = None
    upper: CurvePoint | None = None
    for i in range(1, steps + 1):
        balances = list(state.balances)
        balances[token_in] = (i * pair_mean) / PERCENT_SCALE
        balances[token_out] = state.solve_balance(balances, invariant, token_out)

        imbalance = calculate_imbalance(balances)
        if lower is None and imbalance < threshold:
            lower = CurvePoint(x=balances[token_in], y=balances[token_out])
        elif lower is not None and imbalance > threshold:
            upper = CurvePoint(x=balances[token_in], y=balances[token_out])
            break
    return lower, upper

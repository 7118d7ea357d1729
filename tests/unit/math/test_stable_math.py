"""Tests for stable pool invariant and balance math."""

import math

import pytest
from structlog.testing import capture_logs

from stablesurge.errors import (
    InvalidAmplificationError,
    InvalidBalanceError,
    InvalidInvariantError,
    ZeroBalanceError,
)
from stablesurge.math import stable_math
from stablesurge.math.stable_math import (
    _solve_analytical_balance,
    calculate_invariant,
    get_token_balance_given_invariant_and_all_other_balances,
)


class TestCalculateInvariant:
    """Tests for stable pool invariant calculation."""

    def test_two_token_equal_balances(self) -> None:
        """Balanced pool: D equals the sum of balances."""
        d = calculate_invariant(100, [1000, 1000])
        assert d == pytest.approx(2000.0)

    def test_three_token_equal_balances(self) -> None:
        """Balanced 3-token pool: D equals the sum of balances."""
        d = calculate_invariant(2000, [1_000_000, 1_000_000, 1_000_000])
        assert d == pytest.approx(3_000_000.0)

    def test_asymmetric_balances(self) -> None:
        """D lies between the constant-product and constant-sum values."""
        d = calculate_invariant(200, [100, 200])

        # n * sqrt(prod) <= D <= sum
        assert 2 * math.sqrt(100 * 200) < d < 300

    def test_higher_amplification_approaches_sum(self) -> None:
        """Larger A flattens the curve, pushing D toward the sum."""
        low = calculate_invariant(1, [100, 200])
        high = calculate_invariant(1000, [100, 200])
        assert low < high < 300

    def test_all_zero_balances_returns_zero(self) -> None:
        """Empty pool has a zero invariant."""
        assert calculate_invariant(100, [0, 0, 0]) == 0.0

    def test_single_zero_balance_is_non_negative(self) -> None:
        """A drained token still yields a finite, non-negative D."""
        d = calculate_invariant(100, [0, 1000])
        assert 0 <= d < 1000

    def test_non_negative_for_various_pools(self) -> None:
        """Invariant is never negative."""
        pools = [[1, 1], [1, 10**6], [500, 0, 250], [3, 7, 11, 13]]
        for balances in pools:
            for amp in (0.5, 1, 100, 5000):
                assert calculate_invariant(amp, balances) >= 0

    def test_accepts_tuple_and_ints(self) -> None:
        """Any sequence of numbers is accepted."""
        assert calculate_invariant(100, (1000, 1000)) == pytest.approx(2000.0)

    def test_max_iterations_returns_last_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Exhausting the iteration budget returns the last D and logs a warning."""
        monkeypatch.setattr(stable_math, "STABLE_MAX_ITERATIONS", 1)

        with capture_logs() as logs:
            d = calculate_invariant(1, [1, 1_000_000])

        assert 0 < d < 1_000_001
        assert any(log["event"] == "stable_invariant_max_iterations_reached" for log in logs)

    def test_zero_amplification_raises(self) -> None:
        """Amplification must be positive."""
        with pytest.raises(InvalidAmplificationError):
            calculate_invariant(0, [1000, 1000])

    def test_negative_amplification_raises(self) -> None:
        """Negative amplification is rejected."""
        with pytest.raises(InvalidAmplificationError):
            calculate_invariant(-5, [1000, 1000])

    def test_nan_amplification_raises(self) -> None:
        """NaN amplification is rejected."""
        with pytest.raises(InvalidAmplificationError):
            calculate_invariant(float("nan"), [1000, 1000])

    def test_single_balance_raises(self) -> None:
        """Pools need at least two tokens."""
        with pytest.raises(InvalidBalanceError):
            calculate_invariant(100, [1000])

    def test_negative_balance_raises(self) -> None:
        """Negative balances are rejected."""
        with pytest.raises(InvalidBalanceError):
            calculate_invariant(100, [1000, -1])

    def test_infinite_balance_raises(self) -> None:
        """Non-finite balances are rejected."""
        with pytest.raises(InvalidBalanceError):
            calculate_invariant(100, [1000, float("inf")])


class TestGetTokenBalance:
    """Tests for get_token_balance_given_invariant_and_all_other_balances."""

    def test_recovers_balance_in_balanced_pool(self) -> None:
        """[1000, 1000] with A = 100: solving either slot gives back 1000."""
        balances = [1000.0, 1000.0]
        d = calculate_invariant(100, balances)

        for index in range(2):
            recovered = get_token_balance_given_invariant_and_all_other_balances(
                100, balances, d, index
            )
            assert recovered == pytest.approx(1000.0, rel=1e-9)

    @pytest.mark.parametrize(
        ("amp", "balances"),
        [
            (100, [1500.0, 500.0]),
            (10, [1000.0, 2000.0, 3000.0]),
            (2000, [1_000_000.0, 2_000_000.0, 500_000.0, 1_000_000.0]),
            (50, [12_345.0, 67_890.0]),
        ],
    )
    def test_round_trip(self, amp: float, balances: list[float]) -> None:
        """Every balance is recovered from D and the others."""
        d = calculate_invariant(amp, balances)

        for index, expected in enumerate(balances):
            recovered = get_token_balance_given_invariant_and_all_other_balances(
                amp, balances, d, index
            )
            assert recovered == pytest.approx(expected, rel=1e-6)

    def test_unknown_slot_value_is_ignored(self) -> None:
        """The value at token_index does not affect the result."""
        d = calculate_invariant(100, [1500.0, 500.0])

        a = get_token_balance_given_invariant_and_all_other_balances(100, [1500.0, 500.0], d, 1)
        b = get_token_balance_given_invariant_and_all_other_balances(100, [1500.0, 0.0], d, 1)
        assert a == b

    def test_more_input_means_less_output(self) -> None:
        """Adding to one balance lowers the solved balance of another."""
        d = calculate_invariant(100, [1000.0, 1000.0])

        y = get_token_balance_given_invariant_and_all_other_balances(100, [1100.0, 0.0], d, 1)
        assert 900.0 < y < 1000.0

    def test_zero_known_balance_raises(self) -> None:
        """A zero known balance cannot be divided through."""
        with pytest.raises(ZeroBalanceError):
            get_token_balance_given_invariant_and_all_other_balances(100, [0.0, 1000.0], 2000.0, 1)

    def test_zero_balance_is_an_invalid_balance(self) -> None:
        """ZeroBalanceError is part of the InvalidBalanceError family."""
        assert issubclass(ZeroBalanceError, InvalidBalanceError)

    def test_zero_invariant_raises(self) -> None:
        """Invariant must be positive."""
        with pytest.raises(InvalidInvariantError):
            get_token_balance_given_invariant_and_all_other_balances(100, [1000.0, 1000.0], 0.0, 1)

    def test_index_out_of_range_raises(self) -> None:
        """Token index must address a pool token."""
        with pytest.raises(IndexError):
            get_token_balance_given_invariant_and_all_other_balances(100, [1000.0, 1000.0], 2000.0, 2)

    def test_negative_index_raises(self) -> None:
        """Negative indices are not wrapped around."""
        with pytest.raises(IndexError):
            get_token_balance_given_invariant_and_all_other_balances(100, [1000.0, 1000.0], 2000.0, -1)


class TestSolveAnalyticalBalance:
    """Tests for the closed-form quadratic step."""

    def test_balanced_two_token_root(self) -> None:
        """sum=1000, D=2000, A=100, n^n=4, p=D^2/1000 gives y = 1000."""
        y = _solve_analytical_balance(1000.0, 2000.0, 100.0, 4, 4000.0)
        assert y == pytest.approx(1000.0)

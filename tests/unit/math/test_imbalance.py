"""Tests for the median-based imbalance measure."""

import pytest

from stablesurge.errors import InvalidBalanceError
from stablesurge.math.imbalance import calculate_imbalance


class TestCalculateImbalance:
    """Tests for calculate_imbalance."""

    def test_equal_balances_are_balanced(self):
        """[1000, 1000] has zero imbalance."""
        assert calculate_imbalance([1000, 1000]) == 0.0

    def test_two_token_skewed(self):
        """[1900, 100]: median 1000, deviations 1800 of 2000."""
        assert calculate_imbalance([1900, 100]) == pytest.approx(90.0)

    def test_two_token_mild(self):
        """[1050, 950] is 5% imbalanced."""
        assert calculate_imbalance([1050, 950]) == pytest.approx(5.0)

    def test_odd_count_uses_middle_element(self):
        """[100, 200, 600]: median 200, deviations 500 of 900."""
        assert calculate_imbalance([100, 200, 600]) == pytest.approx(500 / 9)

    def test_even_count_averages_middle_elements(self):
        """[100, 200, 300, 1000]: median 250, deviations 1000 of 1600."""
        assert calculate_imbalance([100, 200, 300, 1000]) == pytest.approx(62.5)

    def test_median_not_mean(self):
        """[100, 100, 400] measures from the median 100, not the mean 200."""
        assert calculate_imbalance([100, 100, 400]) == pytest.approx(50.0)

    def test_order_does_not_matter(self):
        """Imbalance depends only on the multiset of balances."""
        assert calculate_imbalance([600, 100, 200]) == calculate_imbalance([100, 200, 600])

    def test_input_not_mutated(self):
        """The caller's list is left unsorted."""
        balances = [600.0, 100.0, 200.0]
        calculate_imbalance(balances)
        assert balances == [600.0, 100.0, 200.0]

    def test_all_zero_returns_zero(self):
        """Empty pool avoids division by zero."""
        assert calculate_imbalance([0, 0]) == 0.0

    def test_fully_drained_token_is_maximal(self):
        """[0, 1000] reaches the 100% upper bound."""
        assert calculate_imbalance([0, 1000]) == pytest.approx(100.0)

    def test_bounds(self):
        """Imbalance stays within [0, 100]."""
        pools = [
            [1, 1],
            [1, 10**9],
            [0, 0, 5],
            [7, 3, 11, 2, 900],
            [0.001, 1000, 1000],
        ]
        for balances in pools:
            assert 0.0 <= calculate_imbalance(balances) <= 100.0

    @pytest.mark.parametrize(
        "balances",
        [
            [0, 0, 221.69166627303505, 437.88759365057206],
            [0, 0, 0, 0.1, 0.7, 13.37],
            [0, 0, 3.3, 1e-7],
            [0, 0, 0, 1234.5678, 9.87654321, 0.333],
        ],
    )
    def test_half_drained_pool_capped_at_100(self, balances):
        """With half the tokens drained the deviations add up to the whole pool."""
        imbalance = calculate_imbalance(balances)
        assert imbalance <= 100.0
        assert imbalance == pytest.approx(100.0)

    def test_single_balance_raises(self):
        """A balance set needs at least two tokens."""
        with pytest.raises(InvalidBalanceError):
            calculate_imbalance([1000])

    def test_negative_balance_raises(self):
        """Negative balances are rejected."""
        with pytest.raises(InvalidBalanceError):
            calculate_imbalance([1000, -10])

    def test_nan_balance_raises(self):
        """NaN balances are rejected."""
        with pytest.raises(InvalidBalanceError):
            calculate_imbalance([1000, float("nan")])

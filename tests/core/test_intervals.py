"""Unit tests for highest density intervals."""

import pytest
import numpy as np
from hurdle_stopping.core import intervals


class TestHDI:
    """Tests for hdi."""

    def test_normal_hdi(self):
        """HDI of a standard normal is about +/-1.96."""
        np.random.seed(42)
        samples = np.random.normal(0, 1, 100000)

        lower, upper = intervals.hdi(samples, prob=0.95)

        assert upper - lower == pytest.approx(2 * 1.96, abs=0.06)
        assert abs((lower + upper) / 2) < 0.05

    @pytest.mark.parametrize("n", [37, 101, 1000, 4000])
    def test_contains_required_mass(self, n):
        """The interval always holds at least prob of the samples."""
        np.random.seed(n)
        samples = np.random.lognormal(0, 1, n)

        lower, upper = intervals.hdi(samples, prob=0.95)

        assert intervals.interval_mass(samples, lower, upper) >= 0.95

    def test_skewed_hdi_narrower_than_equal_tailed(self):
        """For right-skewed data the HDI shifts left and is narrower."""
        np.random.seed(42)
        samples = np.random.lognormal(0, 1, 50000)

        lower, upper = intervals.hdi(samples)
        eq_lower, eq_upper = intervals.equal_tailed_interval(samples)

        assert upper - lower < eq_upper - eq_lower
        assert lower < eq_lower

    def test_width_converges_with_more_draws(self):
        """More draws give an HDI width close to the true one."""
        np.random.seed(0)
        small = np.random.normal(0, 1, 1000)
        large = np.random.normal(0, 1, 100000)

        lower, upper = intervals.hdi(small)
        width_small = upper - lower
        lower, upper = intervals.hdi(large)
        width_large = upper - lower

        assert abs(width_large - 3.92) < abs(width_small - 3.92) + 0.05
        assert abs(width_large - 3.92) < 0.06

    def test_small_samples(self):
        """Hand-checkable cases."""
        assert intervals.hdi([5.0]) == (5.0, 5.0)
        # Window of 2 points; narrowest is [1, 2]
        assert intervals.hdi([100.0, 2.0, 1.0, 3.0], prob=0.5) == (1.0, 2.0)

    def test_invalid_inputs(self):
        """Empty, non-finite and bad prob are rejected."""
        with pytest.raises(ValueError, match="at least 1 sample"):
            intervals.hdi([])

        with pytest.raises(ValueError, match="finite"):
            intervals.hdi([1.0, np.nan, 2.0])

        with pytest.raises(ValueError, match="prob must be in"):
            intervals.hdi([1.0, 2.0], prob=1.0)

        with pytest.raises(ValueError, match="prob must be in"):
            intervals.hdi([1.0, 2.0], prob=0.0)


class TestEqualTailedInterval:
    """Tests for equal_tailed_interval."""

    def test_percentiles(self):
        """Uses the 2.5th and 97.5th percentiles."""
        lower, upper = intervals.equal_tailed_interval(np.arange(101), prob=0.95)

        assert lower == pytest.approx(2.5)
        assert upper == pytest.approx(97.5)


class TestIntervalMass:
    """Tests for interval_mass."""

    def test_closed_interval(self):
        """Both bounds are included."""
        assert intervals.interval_mass(np.arange(10), 2, 5) == pytest.approx(0.4)

    def test_invalid_inputs(self):
        """Reversed bounds and empty samples are rejected."""
        with pytest.raises(ValueError):
            intervals.interval_mass(np.arange(10), 5, 2)

        with pytest.raises(ValueError):
            intervals.interval_mass([], 0, 1)

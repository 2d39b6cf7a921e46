"""
Tests for A/A validation of the stopping rule.
"""

import pytest
import numpy as np
from hurdle_stopping.diagnostics import aa_tests


class TestRunStoppingSimulation:
    """Tests for run_stopping_simulation."""

    def test_structure(self):
        """Per-run arrays and summary counts are returned."""
        result = aa_tests.run_stopping_simulation(
            n_runs=3, n_per_group=2000, sample_size=500, n_draws=200, random_state=42
        )

        assert result['n_runs'] == 3
        assert len(result['hdi_lowers']) == 3
        assert len(result['hdi_uppers']) == 3
        assert len(result['expected_costs']) == 3
        assert np.all(result['hdi_lowers'] <= result['hdi_uppers'])
        assert 0 <= result['stop_rate'] <= 1
        lower, upper = result['stop_rate_ci']
        assert lower <= result['stop_rate'] <= upper

    def test_real_loss_is_detected(self):
        """A large drop in basket size stops every run."""
        result = aa_tests.run_stopping_simulation(
            n_runs=3, n_per_group=2000, sample_size=2000, n_draws=200,
            treatment_log_mean=2.5, random_state=42
        )

        assert result['stop_rate'] == 1.0
        assert np.all(result['expected_costs'] > 5000)

    def test_invalid_runs(self):
        """At least one run is needed."""
        with pytest.raises(ValueError, match="at least 1 run"):
            aa_tests.run_stopping_simulation(n_runs=0)


class TestValidateStoppingRule:
    """Tests for validate_stopping_rule."""

    def test_aa_rarely_stops(self):
        """Identical arms do not trigger a stop at a 5,000 threshold."""
        result = aa_tests.validate_stopping_rule(
            n_runs=3, n_per_group=2000, threshold=5000, sample_size=500,
            n_draws=200, random_state=42
        )

        assert result['false_stop_rate'] == result['stop_rate']
        assert result['passed']
        assert result['false_stop_rate'] <= result['max_false_stop_rate']

    def test_rejects_treatment_effect(self):
        """A/A validation cannot take a treatment log-mean."""
        with pytest.raises(ValueError, match="identical arms"):
            aa_tests.validate_stopping_rule(n_runs=2, treatment_log_mean=2.8)


class TestCostSymmetryCheck:
    """Tests for cost_symmetry_check."""

    def test_symmetric_costs_centred(self):
        """Mirror-image costs have zero mean and skew."""
        np.random.seed(42)
        half = np.random.normal(0, 1000, 1000)
        costs = np.concatenate([half, -half])

        result = aa_tests.cost_symmetry_check(costs)

        assert result['centred']
        assert result['mean'] == pytest.approx(0, abs=1e-6)
        assert result['skewness'] == pytest.approx(0, abs=1e-6)

    def test_shifted_costs_not_centred(self):
        """A clear offset is flagged."""
        np.random.seed(42)
        costs = np.random.normal(500, 100, 1000)

        result = aa_tests.cost_symmetry_check(costs)

        assert not result['centred']
        assert result['p_value'] < 0.05

    def test_insufficient_data(self):
        """Need at least two costs."""
        with pytest.raises(ValueError, match="at least 2"):
            aa_tests.cost_symmetry_check(np.array([1.0]))

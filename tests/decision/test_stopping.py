"""Unit tests for the early-stopping decision rule."""

import pytest
import numpy as np
import pandas as pd
from hurdle_stopping.decision import stopping


class TestComputeCosts:
    """Tests for compute_costs."""

    def test_control_minus_treatment(self):
        """Positive cost means the treatment earned less."""
        sims = pd.DataFrame({'control_sum': [100.0, 50.0], 'treatment_sum': [80.0, 70.0]})

        np.testing.assert_allclose(stopping.compute_costs(sims), [20.0, -20.0])

    def test_missing_column(self):
        """Both totals are required."""
        with pytest.raises(ValueError, match="treatment_sum"):
            stopping.compute_costs(pd.DataFrame({'control_sum': [1.0]}))


class TestStoppingRuleHDI:
    """Tests for stopping_rule_hdi."""

    def test_overlap_rule(self):
        """Stop as soon as the upper bound reaches the threshold."""
        assert stopping.stopping_rule_hdi(-3000, 3500, 5000) == (False, 'continue')
        assert stopping.stopping_rule_hdi(500, 6800, 5000) == (True, 'stop')
        assert stopping.stopping_rule_hdi(6000, 9000, 5000) == (True, 'stop')

    def test_boundary_counts_as_overlap(self):
        """Touching the threshold is an overlap."""
        assert stopping.stopping_rule_hdi(0, 5000, 5000) == (True, 'stop')

    def test_majority_rule(self):
        """Stop when the HDI midpoint is beyond the threshold."""
        assert stopping.stopping_rule_hdi(500, 6800, 5000, rule='majority') == (False, 'continue')
        assert stopping.stopping_rule_hdi(4000, 8000, 5000, rule='majority') == (True, 'stop')

    def test_contained_rule(self):
        """Stop only when the whole HDI is beyond the threshold."""
        assert stopping.stopping_rule_hdi(4000, 8000, 5000, rule='contained') == (False, 'continue')
        assert stopping.stopping_rule_hdi(5000, 8000, 5000, rule='contained') == (True, 'stop')

    def test_invalid_inputs(self):
        """Unknown rule, reversed bounds and infinite threshold are rejected."""
        with pytest.raises(ValueError, match="Unknown rule"):
            stopping.stopping_rule_hdi(0, 1, 5000, rule='strict')

        with pytest.raises(ValueError, match="must not exceed"):
            stopping.stopping_rule_hdi(2, 1, 5000)

        with pytest.raises(ValueError, match="finite"):
            stopping.stopping_rule_hdi(0, 1, np.inf)


class TestEvaluateStopping:
    """Tests for evaluate_stopping."""

    def test_symmetric_null_continues(self):
        """A cost distribution symmetric around 0 clears a 5,000 threshold."""
        np.random.seed(42)
        half = np.random.normal(0, 1500, 2000)
        costs = np.concatenate([half, -half])

        result = stopping.evaluate_stopping(costs, threshold=5000)

        assert result['decision'] == 'continue'
        assert not result['should_stop']
        assert result['expected_cost'] == pytest.approx(0, abs=1e-6)
        assert result['hdi_upper'] < 5000
        assert result['hdi_lower'] == pytest.approx(-result['hdi_upper'], rel=0.05)

    def test_large_loss_stops(self):
        """Costs far beyond the threshold stop under every rule."""
        np.random.seed(42)
        costs = np.random.normal(20000, 1500, 4000)

        for rule in stopping.RULES:
            result = stopping.evaluate_stopping(costs, threshold=5000, rule=rule)
            assert result['decision'] == 'stop'

        assert result['prob_exceeds_threshold'] > 0.99

    def test_partial_overlap_depends_on_rule(self):
        """Partial overlap stops only under the overlap rule."""
        np.random.seed(42)
        costs = np.random.normal(3000, 1500, 4000)

        overlap = stopping.evaluate_stopping(costs, threshold=5000, rule='overlap')
        majority = stopping.evaluate_stopping(costs, threshold=5000, rule='majority')
        contained = stopping.evaluate_stopping(costs, threshold=5000, rule='contained')

        assert overlap['decision'] == 'stop'
        assert majority['decision'] == 'continue'
        assert contained['decision'] == 'continue'

    def test_result_keys(self):
        """Result carries the inputs and explanation."""
        result = stopping.evaluate_stopping(np.arange(100.0), threshold=50, hdi_prob=0.9)

        for key in ['decision', 'should_stop', 'hdi_lower', 'hdi_upper', 'hdi_prob',
                    'threshold', 'rule', 'expected_cost', 'prob_exceeds_threshold',
                    'rationale', 'next_steps']:
            assert key in result
        assert result['hdi_prob'] == 0.9
        assert result['rule'] == 'overlap'
        assert result['prob_exceeds_threshold'] == pytest.approx(0.5)
        assert len(result['next_steps']) > 0

    def test_empty_costs(self):
        """No costs, no decision."""
        with pytest.raises(ValueError):
            stopping.evaluate_stopping(np.array([]), threshold=5000)

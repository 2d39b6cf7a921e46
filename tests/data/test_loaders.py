"""Unit tests for experiment data loading and validation."""

import pytest
import numpy as np
import pandas as pd
from hurdle_stopping.data import loaders


def make_df(control, treatment):
    return pd.DataFrame({
        'group': ['control'] * len(control) + ['treatment'] * len(treatment),
        'revenue': list(control) + list(treatment),
    })


class TestValidateObservations:
    """Tests for validate_observations."""

    def test_valid_dataset(self):
        """A well-formed dataset is returned unchanged."""
        df = make_df([0.0, 12.5, 30.0], [0.0, 8.0, 0.0])

        assert loaders.validate_observations(df) is df

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="Missing required columns"):
            loaders.validate_observations(pd.DataFrame({'group': ['control']}))

    def test_empty(self):
        with pytest.raises(ValueError, match="empty"):
            loaders.validate_observations(pd.DataFrame({'group': [], 'revenue': []}))

    def test_wrong_groups(self):
        """Exactly control and treatment are required."""
        df = make_df([1.0, 2.0], [3.0, 4.0])
        df.loc[0, 'group'] = 'variant_b'

        with pytest.raises(ValueError, match="Groups must be exactly"):
            loaders.validate_observations(df)

        with pytest.raises(ValueError, match="Groups must be exactly"):
            loaders.validate_observations(make_df([1.0, 2.0, 3.0], []))

    def test_group_too_small(self):
        with pytest.raises(ValueError, match="at least 2 observations"):
            loaders.validate_observations(make_df([1.0, 2.0, 3.0], [4.0]))

    def test_negative_revenue(self):
        with pytest.raises(ValueError, match="non-negative"):
            loaders.validate_observations(make_df([1.0, -2.0], [3.0, 4.0]))

    def test_non_finite_revenue(self):
        with pytest.raises(ValueError, match="finite"):
            loaders.validate_observations(make_df([1.0, np.nan], [3.0, 4.0]))

    def test_group_without_purchasers(self):
        with pytest.raises(ValueError, match="has no purchasers"):
            loaders.validate_observations(make_df([1.0, 2.0], [0.0, 0.0]))

    def test_too_few_purchasers(self):
        with pytest.raises(ValueError, match="at least 3 purchasers"):
            loaders.validate_observations(make_df([0.0, 5.0], [0.0, 3.0]))


class TestLoadObservations:
    """Tests for load_observations."""

    def test_load_csv(self, tmp_path):
        """Group labels are normalised on load."""
        path = tmp_path / 'experiment.csv'
        pd.DataFrame({
            'group': ['Control', ' control', 'TREATMENT', 'treatment '],
            'revenue': [0.0, 10.0, 5.0, 7.5],
        }).to_csv(path, index=False)

        df = loaders.load_observations(path)

        assert set(df['group']) == {'control', 'treatment'}
        assert len(df) == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            loaders.load_observations(tmp_path / 'nope.csv')


class TestSummarizeObservations:
    """Tests for summarize_observations."""

    def test_summary_values(self):
        df = make_df([0.0, 10.0, 30.0, 0.0], [0.0, 0.0, 20.0, 20.0])

        summary = loaders.summarize_observations(df)

        assert summary.loc['control', 'n'] == 4
        assert summary.loc['control', 'purchase_rate'] == pytest.approx(0.5)
        assert summary.loc['control', 'total_revenue'] == pytest.approx(40.0)
        assert summary.loc['treatment', 'mean_revenue'] == pytest.approx(10.0)
        assert summary.loc['treatment', 'mean_log_revenue'] == pytest.approx(np.log(20.0))

"""
Posterior Predictive Revenue Simulation
=======================================

Turns posterior parameter draws into projected revenue. For each draw we
simulate a hypothetical batch of future customers in both arms using that
draw's parameters and sum the revenue per arm. Repeating this over all draws
carries both parameter uncertainty and sampling noise into the projection.

Example Usage:
--------------
>>> from hurdle_stopping.core import model, outcomes
>>>
>>> fit = model.fit_hurdle_lognormal(df, random_state=42)
>>> sims = outcomes.simulate_outcomes(fit['draws'], sample_size=1000, random_state=42)
>>> print(sims[['control_sum', 'treatment_sum']].describe())
"""

import numpy as np
import pandas as pd
from scipy.special import expit, logit
from typing import Iterable, Optional

from hurdle_stopping.core.hurdle import draw_hurdle
from hurdle_stopping.core.intervals import hdi


REQUIRED_DRAW_COLUMNS = ['hurdle_probability', 'log_mean', 'treatment_offset', 'log_sd']


def _check_draws(draws: pd.DataFrame) -> None:
    missing = [col for col in REQUIRED_DRAW_COLUMNS if col not in draws.columns]
    if missing:
        raise ValueError(f"Draws missing required columns: {missing}")
    if len(draws) == 0:
        raise ValueError("Need at least 1 posterior draw")
    if (draws['log_sd'] <= 0).any():
        raise ValueError("log_sd must be positive in every draw")
    if ((draws['hurdle_probability'] < 0) | (draws['hurdle_probability'] > 1)).any():
        raise ValueError("hurdle_probability must be in [0, 1] in every draw")


def _treatment_hurdle(draws: pd.DataFrame) -> np.ndarray:
    p_control = draws['hurdle_probability'].to_numpy(dtype=float)
    if 'hurdle_offset' not in draws.columns:
        return p_control
    offset = draws['hurdle_offset'].to_numpy(dtype=float)
    # A zero offset keeps p exactly, including the 0 and 1 endpoints
    with np.errstate(divide='ignore'):
        shifted = expit(logit(p_control) + offset)
    return np.where(offset == 0, p_control, shifted)


def simulate_outcomes(
    draws: pd.DataFrame,
    sample_size: int,
    random_state: Optional[int] = None,
) -> pd.DataFrame:
    """
    Simulate total control and treatment revenue for each posterior draw.

    Parameters
    ----------
    draws : pd.DataFrame
        Posterior draws with columns hurdle_probability, log_mean,
        treatment_offset, log_sd and optionally hurdle_offset
    sample_size : int
        Hypothetical number of customers per arm
    random_state : int, optional
        Random seed for reproducibility

    Returns
    -------
    pd.DataFrame
        One row per draw with columns:
        - control_sum: simulated total control revenue
        - treatment_sum: simulated total treatment revenue

    Notes
    -----
    - Control uses (hurdle_probability, log_mean, log_sd)
    - Treatment uses log_mean + treatment_offset, and the hurdle
      probability shifted by hurdle_offset on the logit scale
    """
    if sample_size <= 0:
        raise ValueError("Sample size must be positive")
    _check_draws(draws)

    if random_state is not None:
        np.random.seed(random_state)

    n = int(sample_size)
    p_control = draws['hurdle_probability'].to_numpy(dtype=float)
    p_treatment = _treatment_hurdle(draws)
    mu_control = draws['log_mean'].to_numpy(dtype=float)
    mu_treatment = mu_control + draws['treatment_offset'].to_numpy(dtype=float)
    sigma = draws['log_sd'].to_numpy(dtype=float)

    control_sum = np.empty(len(draws))
    treatment_sum = np.empty(len(draws))

    for i in range(len(draws)):
        control_sum[i] = draw_hurdle(n, p_control[i], mu_control[i], sigma[i]).sum()
        treatment_sum[i] = draw_hurdle(n, p_treatment[i], mu_treatment[i], sigma[i]).sum()

    return pd.DataFrame({
        'control_sum': control_sum,
        'treatment_sum': treatment_sum,
    }, index=draws.index)


def simulate_cost_curve(
    draws: pd.DataFrame,
    sample_sizes: Iterable[int],
    threshold: float,
    hdi_prob: float = 0.95,
    rule: str = 'overlap',
    random_state: Optional[int] = None,
) -> pd.DataFrame:
    """
    Projected cost HDI and verdict across several hypothetical sample sizes.

    Answers "how much traffic can we still send before the loss becomes
    unacceptable?".

    Parameters
    ----------
    draws : pd.DataFrame
        Posterior draws
    sample_sizes : iterable of int
        Hypothetical customers per arm to evaluate
    threshold : float
        Maximum acceptable loss
    hdi_prob : float, default=0.95
        HDI mass
    rule : str, default='overlap'
        Stopping predicate (see decision.stopping.stopping_rule_hdi)
    random_state : int, optional
        Random seed for reproducibility

    Returns
    -------
    pd.DataFrame
        One row per sample size with columns sample_size, expected_cost,
        hdi_lower, hdi_upper, should_stop
    """
    from hurdle_stopping.decision.stopping import compute_costs, stopping_rule_hdi

    sample_sizes = list(sample_sizes)
    if not sample_sizes:
        raise ValueError("Need at least 1 sample size")

    if random_state is not None:
        np.random.seed(random_state)

    rows = []
    for n in sample_sizes:
        costs = compute_costs(simulate_outcomes(draws, n))
        lower, upper = hdi(costs, prob=hdi_prob)
        should_stop, _ = stopping_rule_hdi(lower, upper, threshold, rule=rule)
        rows.append({
            'sample_size': int(n),
            'expected_cost': costs.mean(),
            'hdi_lower': lower,
            'hdi_upper': upper,
            'should_stop': should_stop,
        })

    return pd.DataFrame(rows)

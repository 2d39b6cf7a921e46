"""
Early-Stopping Decision Rule
============================

Decides whether a running experiment should be stopped because the
treatment is costing too much revenue.

Cost is control revenue minus treatment revenue over a hypothetical batch of
customers, so a positive cost means the treatment loses money. The decision
compares the 95% HDI of the simulated cost distribution against a
business-chosen maximum acceptable loss.

Stopping Rules:
- **overlap** (default): STOP if the HDI reaches the threshold
  (hdi_upper >= threshold), i.e. an unacceptable loss is still credible
- **majority**: STOP if the HDI midpoint is at or beyond the threshold
- **contained**: STOP only if the whole HDI is at or beyond the threshold

Example Usage:
--------------
>>> from hurdle_stopping.decision import stopping
>>>
>>> costs = stopping.compute_costs(outcomes)
>>> result = stopping.evaluate_stopping(costs, threshold=5000)
>>> print(result['decision'])  # 'stop' or 'continue'
>>> print(result['rationale'])
"""

import numpy as np
import pandas as pd
from typing import Any, Dict, Tuple

from hurdle_stopping.core.intervals import hdi


RULES = ('overlap', 'majority', 'contained')


def compute_costs(outcomes: pd.DataFrame) -> np.ndarray:
    """
    Per-draw cost: control_sum - treatment_sum.

    Parameters
    ----------
    outcomes : pd.DataFrame
        Output of core.outcomes.simulate_outcomes

    Returns
    -------
    np.ndarray
        Simulated costs, positive when the treatment loses revenue
    """
    for col in ('control_sum', 'treatment_sum'):
        if col not in outcomes.columns:
            raise ValueError(f"Outcomes missing required column '{col}'")
    return (outcomes['control_sum'] - outcomes['treatment_sum']).to_numpy(dtype=float)


def stopping_rule_hdi(
    hdi_lower: float,
    hdi_upper: float,
    threshold: float,
    rule: str = 'overlap',
) -> Tuple[bool, str]:
    """
    Compare a cost HDI against the maximum acceptable loss.

    Parameters
    ----------
    hdi_lower, hdi_upper : float
        Bounds of the cost HDI
    threshold : float
        Maximum acceptable loss; costs at or above it are unacceptable
    rule : {'overlap', 'majority', 'contained'}, default='overlap'
        How much of the HDI must reach the unacceptable region to stop

    Returns
    -------
    tuple
        (should_stop: bool, decision: str)
        decision is 'stop' or 'continue'

    Example
    -------
    >>> stopping_rule_hdi(-3000, 3500, threshold=5000)
    (False, 'continue')
    >>> stopping_rule_hdi(500, 6800, threshold=5000)
    (True, 'stop')
    """
    if rule not in RULES:
        raise ValueError(f"Unknown rule '{rule}'. Available: {list(RULES)}")
    if hdi_lower > hdi_upper:
        raise ValueError("hdi_lower must not exceed hdi_upper")
    if not np.isfinite(threshold):
        raise ValueError("threshold must be finite")

    if rule == 'overlap':
        should_stop = hdi_upper >= threshold
    elif rule == 'majority':
        should_stop = (hdi_lower + hdi_upper) / 2 >= threshold
    else:
        should_stop = hdi_lower >= threshold

    should_stop = bool(should_stop)
    return (should_stop, 'stop' if should_stop else 'continue')


def evaluate_stopping(
    costs: np.ndarray,
    threshold: float,
    hdi_prob: float = 0.95,
    rule: str = 'overlap',
) -> Dict[str, Any]:
    """
    Full stopping decision from a simulated cost distribution.

    Parameters
    ----------
    costs : np.ndarray
        Simulated costs (control total - treatment total), one per draw
    threshold : float
        Maximum acceptable loss
    hdi_prob : float, default=0.95
        Mass of the HDI used as decision statistic
    rule : {'overlap', 'majority', 'contained'}, default='overlap'
        Stopping predicate

    Returns
    -------
    dict
        Dictionary with:
        - decision: 'stop' or 'continue'
        - should_stop: bool
        - hdi_lower, hdi_upper: cost HDI
        - hdi_prob, threshold, rule: inputs echoed back
        - expected_cost: mean simulated cost
        - prob_exceeds_threshold: P(cost >= threshold)
        - rationale: Explanation of decision
        - next_steps: Recommended actions

    Notes
    -----
    - Under no true effect the cost distribution is centred on 0, so a
      threshold well outside the sampling noise yields 'continue'
    - The HDI, not a percentile interval, is used because revenue totals
      are right-skewed
    """
    costs = np.asarray(costs, dtype=float)
    lower, upper = hdi(costs, prob=hdi_prob)
    should_stop, decision = stopping_rule_hdi(lower, upper, threshold, rule=rule)

    expected_cost = float(costs.mean())
    prob_exceeds = float((costs >= threshold).mean())

    if should_stop:
        rationale = (
            f"The {hdi_prob:.0%} HDI of the projected loss [{lower:,.0f}, {upper:,.0f}] "
            f"reaches the maximum acceptable loss of {threshold:,.0f} under the "
            f"'{rule}' rule. Continuing risks an unacceptable revenue loss."
        )
        next_steps = [
            "Stop the experiment and roll traffic back to control",
            "Investigate why the treatment underperforms",
            "Document the projected loss for stakeholders",
        ]
    else:
        rationale = (
            f"The {hdi_prob:.0%} HDI of the projected loss [{lower:,.0f}, {upper:,.0f}] "
            f"stays clear of the maximum acceptable loss of {threshold:,.0f} under the "
            f"'{rule}' rule. Safe to keep collecting data."
        )
        next_steps = [
            "Continue the experiment as planned",
            "Re-run this check as more data arrives",
        ]

    return {
        'decision': decision,
        'should_stop': should_stop,
        'hdi_lower': lower,
        'hdi_upper': upper,
        'hdi_prob': hdi_prob,
        'threshold': threshold,
        'rule': rule,
        'expected_cost': expected_cost,
        'prob_exceeds_threshold': prob_exceeds,
        'rationale': rationale,
        'next_steps': next_steps,
    }

"""
Hurdle Stopping - Early Stopping for Revenue Experiments
========================================================

Decide whether to stop a running A/B test early because the treatment is
losing too much revenue. Revenue is modelled with a Bayesian hurdle
log-normal model. Posterior draws drive simulations of future revenue, and
the 95% HDI of the projected loss is compared with a maximum acceptable loss.

Modules:
--------
- core: Hurdle simulator, model fitter, HDI, outcome simulator
- decision: Stopping rule
- diagnostics: A/A validation of the stopping rule
- data: Loading and validating (group, revenue) datasets
- reporting: Posterior and cost figures
- pipelines: End-to-end analysis

Example Usage:
--------------
>>> from hurdle_stopping.core import hurdle, model, outcomes
>>> from hurdle_stopping.decision import stopping
>>>
>>> df = hurdle.simulate_experiment(
...     10000, 10000,
...     control=hurdle.HurdleParams(0.6, 3.0, 1.0),
...     treatment=hurdle.HurdleParams(0.6, 2.8, 1.0),
...     random_state=42
... )
>>> fit = model.fit_hurdle_lognormal(df)
>>> sims = outcomes.simulate_outcomes(fit['draws'], sample_size=1000)
>>> result = stopping.evaluate_stopping(stopping.compute_costs(sims), threshold=5000)
>>> print(result['decision'])  # 'stop'

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__license__ = "MIT"

from hurdle_stopping.data import loaders
from hurdle_stopping.core import hurdle, intervals, model, outcomes
from hurdle_stopping.decision import stopping

__all__ = [
    "loaders",
    "hurdle",
    "intervals",
    "model",
    "outcomes",
    "stopping",
]

"""
Report Figures
==============

Matplotlib figures for the early-stopping report:

- Posterior histograms for each model parameter, with HDI bounds
- Histogram of the simulated cost with the HDI and stopping threshold marked

Example Usage:
--------------
>>> from hurdle_stopping.reporting import plots
>>>
>>> fig = plots.plot_cost_distribution(costs, threshold=5000,
...                                    hdi_lower=-3000, hdi_upper=3400)
>>> plots.save_figure(fig, 'reports/cost.png')
"""

from pathlib import Path
from typing import Optional, Union

import matplotlib
matplotlib.use('Agg')  # headless rendering
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import numpy as np
import pandas as pd

from hurdle_stopping.core.intervals import hdi


LABELS = {
    'hurdle_probability': 'P(purchase), control',
    'hurdle_offset': 'Treatment offset, logit P(purchase)',
    'log_mean': 'Log-mean basket, control',
    'treatment_offset': 'Treatment offset, log-mean',
    'log_sd': 'Log-sd basket',
}


def plot_parameter_posteriors(
    draws: pd.DataFrame,
    summary: Optional[pd.DataFrame] = None,
    hdi_prob: float = 0.95,
    bins: int = 50,
):
    """
    One histogram per posterior parameter with its HDI marked.

    Parameters
    ----------
    draws : pd.DataFrame
        Posterior draws, one column per parameter
    summary : pd.DataFrame, optional
        Output of core.model.summarize_draws; computed if omitted
    hdi_prob : float, default=0.95
        HDI mass when summary is computed here
    bins : int, default=50
        Histogram bins

    Returns
    -------
    matplotlib.figure.Figure
    """
    columns = list(draws.columns)
    if not columns:
        raise ValueError("Draws have no columns to plot")

    fig, axes = plt.subplots(1, len(columns), figsize=(4 * len(columns), 3.5))
    axes = np.atleast_1d(axes)

    for ax, col in zip(axes, columns):
        values = draws[col].to_numpy(dtype=float)
        if summary is not None and col in summary.index:
            lower, upper = summary.loc[col, 'hdi_lower'], summary.loc[col, 'hdi_upper']
        else:
            lower, upper = hdi(values, prob=hdi_prob)

        ax.hist(values, bins=bins, color='#4C72B0', alpha=0.8)
        ax.axvline(lower, color='black', linestyle='--', linewidth=1)
        ax.axvline(upper, color='black', linestyle='--', linewidth=1)
        ax.set_title(LABELS.get(col, col), fontsize=10)
        ax.set_yticks([])

    fig.suptitle(f"Posterior distributions ({hdi_prob:.0%} HDI dashed)")
    fig.tight_layout()
    return fig


def plot_cost_distribution(
    costs: np.ndarray,
    threshold: float,
    hdi_lower: float,
    hdi_upper: float,
    bins: int = 60,
):
    """
    Histogram of simulated cost with the HDI shaded and threshold marked.

    Returns
    -------
    matplotlib.figure.Figure
    """
    costs = np.asarray(costs, dtype=float)
    if costs.size == 0:
        raise ValueError("Need at least 1 cost")

    fig, ax = plt.subplots(figsize=(8, 4.5))
    ax.hist(costs, bins=bins, color='#4C72B0', alpha=0.8)
    ax.axvspan(hdi_lower, hdi_upper, color='grey', alpha=0.2, label='95% HDI')
    ax.axvline(threshold, color='#C44E52', linewidth=2, label=f'Max acceptable loss ({threshold:,.0f})')
    ax.axvline(0, color='black', linewidth=1, linestyle=':')

    ax.xaxis.set_major_formatter(mticker.StrMethodFormatter('{x:,.0f}'))
    ax.set_xlabel('Control revenue - treatment revenue')
    ax.set_yticks([])
    ax.set_title('Projected loss from keeping the treatment running')
    ax.legend(loc='upper left')
    fig.tight_layout()
    return fig


def save_figure(fig, path: Union[str, Path], dpi: int = 120) -> Path:
    """Write a figure to disk (creating parent dirs) and close it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
    return path

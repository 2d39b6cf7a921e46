"""
Early-Stopping Analysis Pipeline
================================

End-to-end check of whether a running revenue experiment should be stopped
because the treatment is losing too much money.

Pipeline Steps:
1. Load (or simulate) and validate data
2. Find a best guess: maximum-likelihood hurdle log-normal fit
3. Draw posterior samples of the model parameters
4. Simulate future revenue for each posterior draw
5. Compare the cost HDI with the maximum acceptable loss
6. Render figures (optional)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd

from hurdle_stopping import config
from hurdle_stopping.core import hurdle, model, outcomes
from hurdle_stopping.data import loaders
from hurdle_stopping.decision import stopping


def run_early_stopping_analysis(
    df: Optional[pd.DataFrame] = None,
    threshold: float = config.STOPPING_THRESHOLD,
    sample_size: int = config.SAMPLE_SIZE,
    n_draws: int = config.N_DRAWS,
    hdi_prob: float = config.HDI_PROB,
    rule: str = config.STOPPING_RULE,
    output_dir: Optional[Union[str, Path]] = None,
    verbose: bool = True,
    random_state: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Run the complete early-stopping analysis.

    Parameters
    ----------
    df : pd.DataFrame, optional
        Observations with 'group' and 'revenue'. If None, the null
        scenario is simulated.
    threshold : float, default=config.STOPPING_THRESHOLD
        Maximum acceptable revenue loss
    sample_size : int, default=config.SAMPLE_SIZE
        Hypothetical customers per arm the loss is projected over
    n_draws : int, default=config.N_DRAWS
        Posterior draws
    hdi_prob : float, default=config.HDI_PROB
        HDI mass for the decision
    rule : str, default=config.STOPPING_RULE
        Stopping predicate ('overlap', 'majority' or 'contained')
    output_dir : str or Path, optional
        Directory for the report figures. No figures if None.
    verbose : bool, default=True
        Print detailed progress and results.
    random_state : int, optional
        Random seed for reproducibility

    Returns
    -------
    Dict[str, Any]
        Complete analysis results including:
        - data_summary: per-group summary table
        - model: output of fit_hurdle_lognormal
        - outcomes: simulated control/treatment totals per draw
        - costs: simulated costs
        - decision: output of evaluate_stopping
        - figures: paths of saved figures (empty without output_dir)

    Examples
    --------
    >>> results = run_early_stopping_analysis(threshold=5000, random_state=42)
    >>> print(results['decision']['decision'])
    'continue'
    """
    results = {}

    if random_state is not None:
        np.random.seed(random_state)

    # ========================================================================
    # STEP 1: Load and Validate Data
    # ========================================================================
    if verbose:
        print("=" * 70)
        print("EARLY-STOPPING ANALYSIS PIPELINE")
        print("=" * 70)
        print("\n[1/6] Loading and validating experiment data...")

    if df is None:
        scenario = config.SCENARIOS['null']
        df = hurdle.simulate_experiment(
            config.N_PER_GROUP, config.N_PER_GROUP,
            scenario['control'], scenario['treatment'],
        )
        if verbose:
            print(f"   No data given - simulated: {scenario['description']}")

    loaders.validate_observations(df)
    summary = loaders.summarize_observations(df)
    results['data_summary'] = summary

    if verbose:
        for group, row in summary.iterrows():
            print(f"   {group:>9}: n={int(row['n']):,}  purchase rate={row['purchase_rate']:.2%}  "
                  f"mean revenue={row['mean_revenue']:.2f}  total={row['total_revenue']:,.0f}")
        print("\n📚 LEARNING: Why a hurdle model?")
        print("   - Most customers spend nothing; buyers spend a right-skewed amount")
        print("   - One part models WHETHER they buy, the other HOW MUCH")
        print("   - A single normal model would badly misdescribe both")

    # ========================================================================
    # STEP 2: Best Guess
    # ========================================================================
    if verbose:
        print("\n[2/6] Finding our best guess (maximum likelihood)...")

    best = model.point_estimates(df, alpha=1 - hdi_prob)

    if verbose:
        print(f"   P(purchase) control:   {best['hurdle_probability']:.3f}")
        print(f"   P(purchase) treatment: {best['treatment_hurdle_probability']:.3f}")
        print(f"   Log-mean (control):    {best['log_mean']:.3f}")
        print(f"   Treatment offset:      {best['treatment_offset']:+.3f} "
              f"(p={best['treatment_offset_p_value']:.4f})")
        print(f"   Log-sd:                {best['log_sd']:.3f}")
        print("\n💡 INTERPRETATION:")
        print("   - A single best guess ignores how unsure we are about it")
        print("   - Next: sample the plausible parameter values instead")

    # ========================================================================
    # STEP 3: Posterior Draws
    # ========================================================================
    if verbose:
        print(f"\n[3/6] Drawing {n_draws:,} posterior samples...")

    fit = model.fit_hurdle_lognormal(df, n_draws=n_draws, hdi_prob=hdi_prob)
    results['model'] = fit

    if verbose:
        print(fit['summary'].round(4).to_string())

    # ========================================================================
    # STEP 4: Simulate Outcomes
    # ========================================================================
    if verbose:
        print(f"\n[4/6] Simulating {sample_size:,} future customers per arm for each draw...")

    sims = outcomes.simulate_outcomes(fit['draws'], sample_size)
    costs = stopping.compute_costs(sims)
    results['outcomes'] = sims
    results['costs'] = costs

    if verbose:
        print(f"   Mean control total:   {sims['control_sum'].mean():,.0f}")
        print(f"   Mean treatment total: {sims['treatment_sum'].mean():,.0f}")
        print(f"   Mean cost:            {costs.mean():,.0f}")

    # ========================================================================
    # STEP 5: Decision
    # ========================================================================
    if verbose:
        print(f"\n[5/6] Comparing the {hdi_prob:.0%} HDI of the cost with the threshold...")

    decision = stopping.evaluate_stopping(costs, threshold, hdi_prob=hdi_prob, rule=rule)
    results['decision'] = decision

    if verbose:
        print(f"   Cost HDI: [{decision['hdi_lower']:,.0f}, {decision['hdi_upper']:,.0f}]")
        print(f"   Max acceptable loss: {threshold:,.0f}")
        print(f"   P(cost >= threshold): {decision['prob_exceeds_threshold']:.2%}")
        print(f"\n{'⚠️ ' if decision['should_stop'] else '✓'} DECISION: {decision['decision'].upper()}")
        print(f"   {decision['rationale']}")
        for step in decision['next_steps']:
            print(f"   - {step}")

    # ========================================================================
    # STEP 6: Figures
    # ========================================================================
    results['figures'] = {}
    if output_dir is not None:
        from hurdle_stopping.reporting import plots

        if verbose:
            print(f"\n[6/6] Rendering figures to {output_dir}...")

        output_dir = Path(output_dir)
        results['figures']['posteriors'] = plots.save_figure(
            plots.plot_parameter_posteriors(fit['draws'], fit['summary'], hdi_prob=hdi_prob),
            output_dir / 'posteriors.png',
        )
        results['figures']['cost'] = plots.save_figure(
            plots.plot_cost_distribution(
                costs, threshold, decision['hdi_lower'], decision['hdi_upper']
            ),
            output_dir / 'cost_distribution.png',
        )

        if verbose:
            for path in results['figures'].values():
                print(f"   ✓ {path}")
    elif verbose:
        print("\n[6/6] No output directory given - skipping figures")

    return results


def run_scenario(
    name: str,
    n_per_group: int = config.N_PER_GROUP,
    random_state: Optional[int] = config.RANDOM_STATE,
    **kwargs,
) -> Dict[str, Any]:
    """
    Simulate one of the demonstration scenarios and analyse it.

    Parameters
    ----------
    name : {'null', 'effect'}
        Scenario from config.SCENARIOS
    n_per_group : int, default=config.N_PER_GROUP
        Observed customers per arm
    random_state : int, optional
        Random seed for reproducibility
    **kwargs
        Passed to run_early_stopping_analysis

    Returns
    -------
    Dict[str, Any]
        Analysis results plus 'scenario' (the name)
    """
    if name not in config.SCENARIOS:
        raise ValueError(
            f"Unknown scenario '{name}'. Available: {list(config.SCENARIOS.keys())}"
        )
    scenario = config.SCENARIOS[name]

    df = hurdle.simulate_experiment(
        n_per_group, n_per_group,
        scenario['control'], scenario['treatment'],
        random_state=random_state,
    )

    if kwargs.get('verbose', True):
        print(f"\nScenario '{name}': {scenario['description']}")

    results = run_early_stopping_analysis(df=df, **kwargs)
    results['scenario'] = name
    return results

"""
Run the Early-Stopping Analysis

Runs the hurdle-model early-stopping check on a demonstration scenario or on
a CSV of (group, revenue) observations.

Usage:
    # Run both demonstration scenarios
    python run_pipelines.py

    # Run one scenario
    python run_pipelines.py --scenario effect

    # Analyse your own data and save the figures
    python run_pipelines.py --data experiment.csv --output-dir reports/

    # Run quietly
    python run_pipelines.py --quiet
"""

import argparse
import sys
from pathlib import Path

from hurdle_stopping import config
from hurdle_stopping.data import loaders
from hurdle_stopping.decision.stopping import RULES
from hurdle_stopping.pipelines import run_early_stopping_analysis, run_scenario


def run_all_scenarios(verbose: bool = True, **kwargs):
    """Run every demonstration scenario and print a summary."""
    results = {}
    output_dir = kwargs.pop('output_dir', None)

    for i, name in enumerate(config.SCENARIOS, start=1):
        if verbose:
            print("\n" + "█" * 80)
            print(f"SCENARIO {i}/{len(config.SCENARIOS)}: {name.upper()}")
            print("█" * 80 + "\n")

        scenario_dir = None if output_dir is None else Path(output_dir) / name
        results[name] = run_scenario(name, verbose=verbose, output_dir=scenario_dir, **kwargs)

    if verbose:
        print("\n" + "=" * 80)
        print(" " * 30 + "FINAL SUMMARY")
        print("=" * 80)

        for name, result in results.items():
            decision = result['decision']
            print(f"\n{name.upper()}: Decision = {decision['decision'].upper()}")
            print(f"  Cost HDI: [{decision['hdi_lower']:,.0f}, {decision['hdi_upper']:,.0f}] "
                  f"| Threshold: {decision['threshold']:,.0f}")

        print("\n" + "=" * 80 + "\n")

    return results


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Decide whether to stop a revenue A/B test early",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_pipelines.py --scenario null
  python run_pipelines.py --scenario effect --sample-size 2000
  python run_pipelines.py --data experiment.csv --threshold 10000 --rule contained
        """
    )

    parser.add_argument(
        '--scenario',
        choices=['all'] + list(config.SCENARIOS.keys()),
        default='all',
        help='Demonstration scenario to run (default: all; ignored with --data)'
    )
    parser.add_argument('--data', default=None, help='CSV with group and revenue columns')
    parser.add_argument(
        '--threshold', type=float, default=config.STOPPING_THRESHOLD,
        help=f'Maximum acceptable loss (default: {config.STOPPING_THRESHOLD:,.0f})'
    )
    parser.add_argument(
        '--sample-size', type=int, default=config.SAMPLE_SIZE,
        help=f'Hypothetical customers per arm (default: {config.SAMPLE_SIZE:,})'
    )
    parser.add_argument(
        '--draws', type=int, default=config.N_DRAWS,
        help=f'Posterior draws (default: {config.N_DRAWS:,})'
    )
    parser.add_argument('--rule', choices=list(RULES), default=config.STOPPING_RULE)
    parser.add_argument('--output-dir', default=None, help='Directory for report figures')
    parser.add_argument('--seed', type=int, default=config.RANDOM_STATE, help='Random seed')
    parser.add_argument('--quiet', action='store_true', help='Suppress verbose output')

    args = parser.parse_args(argv)
    verbose = not args.quiet

    options = dict(
        threshold=args.threshold,
        sample_size=args.sample_size,
        n_draws=args.draws,
        rule=args.rule,
        output_dir=args.output_dir,
    )

    try:
        if args.data is not None:
            df = loaders.load_observations(args.data)
            result = run_early_stopping_analysis(
                df=df, verbose=verbose, random_state=args.seed, **options
            )
            print(f"Decision: {result['decision']['decision'].upper()}")

        elif args.scenario == 'all':
            results = run_all_scenarios(verbose=verbose, random_state=args.seed, **options)
            if not verbose:
                for name, result in results.items():
                    print(f"{name}: {result['decision']['decision'].upper()}")

        else:
            result = run_scenario(args.scenario, verbose=verbose, random_state=args.seed, **options)
            print(f"Decision: {result['decision']['decision'].upper()}")

        return 0

    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        if verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())

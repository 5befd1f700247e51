#!/usr/bin/env python3
"""Command-line interface for running checkout simulations."""

import argparse
import json
import logging
import sys
import numpy as np
from scipy import stats
from typing import Dict, List, Optional, Sequence

from checkout_system.config import ARRIVAL_MODELS, SimulationConfig, load_config
from checkout_system.core import POLICY_NAMES, ConfigurationError, SimulationReport
from checkout_system.system import CheckoutSystem

# Report fields that are labels rather than measurements
NON_NUMERIC_FIELDS = ('policy',)

DEFAULT_SEED = 42


def run_simulation(config: SimulationConfig,
                   random_seed: Optional[int] = None) -> SimulationReport:
    """Run a single simulation and return its report."""
    if random_seed is not None:
        config = config.replace(seed=random_seed)

    system = CheckoutSystem(config)
    system.simulate()
    return system.get_report()


def confidence_interval(values: Sequence[float], confidence: float = 0.95) -> List[float]:
    """Student-t confidence interval for the mean of `values`."""
    values = np.asarray(values, dtype=float)
    mean = float(np.mean(values))
    if len(values) < 2:
        return [mean, mean]

    sem = stats.sem(values)
    if sem == 0:
        return [mean, mean]

    low, high = stats.t.interval(confidence, len(values) - 1, loc=mean, scale=sem)
    return [float(low), float(high)]


def summarize_reports(reports: List[SimulationReport]) -> Dict:
    """Compute mean/std/min/max and a 95% interval for every report field."""
    rows = [report.as_dict() for report in reports]
    summary = {}
    for key in rows[0]:
        if key in NON_NUMERIC_FIELDS:
            continue
        values = [row[key] for row in rows]
        summary[key] = {
            'mean': np.mean(values),
            'std': np.std(values),
            'min': np.min(values),
            'max': np.max(values),
            'ci95': confidence_interval(values),
        }
    return summary


def run_replications(config: SimulationConfig,
                     num_replications: int,
                     base_seed: int = DEFAULT_SEED) -> Dict:
    """Run independent replications seeded base_seed + i and compute statistics."""
    if num_replications < 1:
        raise ConfigurationError(f"num_replications must be at least 1, got {num_replications}")
    reports = [run_simulation(config, base_seed + i) for i in range(num_replications)]

    return {
        'policy': config.policy,
        'replications': num_replications,
        'simulation_time': config.run_duration,
        'num_stations': config.num_stations,
        'metrics': summarize_reports(reports),
    }


def compare_policies(config: SimulationConfig,
                     num_replications: int,
                     base_seed: int = DEFAULT_SEED) -> Dict[str, Dict]:
    """Run the same replications under every queueing policy."""
    if num_replications < 1:
        raise ConfigurationError(f"num_replications must be at least 1, got {num_replications}")
    return {
        policy: run_replications(config.replace(policy=policy), num_replications, base_seed)
        for policy in POLICY_NAMES
    }


def convert_numpy_types(obj):
    """Convert numpy types to Python native types for JSON serialization."""
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, SimulationReport):
        return obj.as_dict()
    elif isinstance(obj, dict):
        return {key: convert_numpy_types(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [convert_numpy_types(item) for item in obj]
    else:
        return obj


def save_results(results, output_path: str) -> None:
    """Save results to JSON file."""
    with open(output_path, 'w') as f:
        json.dump(convert_numpy_types(results), f, indent=2)


POLICY_TITLES = {
    'single': "1 queue, {stations} checkouts",
    'shortest': "N queues (customer picks the smallest), {stations} checkouts",
    'random': "N queues (customer picks random), {stations} checkouts",
}


def print_report(report: SimulationReport) -> None:
    """Print a single-run report to console."""
    print(f"Customer arrived: {report.arrival_rate_per_hour:.2f}/hr")
    print(f"Customer left: {report.departure_rate_per_hour:.2f}/hr")
    print(f"Customer moved to checkout: {report.checkout_rate_per_hour:.2f}/hr")
    print(f"Avg customers in the queue: {report.average_customers_in_queue:.2f}")
    print(f"Avg customers in the store: {report.average_customers_in_store:.2f}")
    print(f"Wait time in queue: {report.average_wait_time:.2f} sec")
    print(f"Wait time in store: {report.average_time_in_store:.2f} sec")
    print(f"Checkout was busy: {report.checkout_busy_percentage:.2f}% of the time")
    print(f"Max number of customers in the queue: {report.max_queue_length}")
    print(f"Max number of customers in the store: {report.max_customers_in_store}")


def print_summary(summary: Dict, detailed: bool = False) -> None:
    """Print replication statistics to console."""
    print(f"Replications: {summary['replications']}")
    print(f"Simulation Time: {summary['simulation_time']}")
    for metric, values in summary['metrics'].items():
        print(f"  {metric}: {values['mean']:.4f} (±{values['std']:.4f})")
        if detailed:
            low, high = values['ci95']
            print(f"    Min: {values['min']:.4f}, Max: {values['max']:.4f}, "
                  f"95% CI: [{low:.4f}, {high:.4f}]")


def print_results(results, stations: int, detailed: bool = False) -> None:
    """Print results of a single policy run, replications, or a comparison."""
    print("\n=== Simulation Results ===")
    if isinstance(results, SimulationReport):
        print(f"Model {results.policy}: " + POLICY_TITLES[results.policy].format(stations=stations))
        print_report(results)
    elif 'replications' in results:
        print(f"Model {results['policy']}: " + POLICY_TITLES[results['policy']].format(stations=stations))
        print_summary(results, detailed)
    else:
        for policy, summary in results.items():
            print(f"\nModel {policy}: " + POLICY_TITLES[policy].format(stations=stations))
            print_summary(summary, detailed)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Merge an optional JSON config file with command-line overrides."""
    config = load_config(args.config) if args.config else SimulationConfig()

    overrides = {
        'run_duration': args.time,
        'num_stations': args.stations,
        'inter_arrival_time': args.inter_arrival,
        'arrival_model': args.arrival_model,
        'item_range': tuple(args.items) if args.items else None,
        'payment_range': tuple(args.payment) if args.payment else None,
        'scan_range': tuple(args.scan) if args.scan else None,
        'seed': args.seed,
    }
    if args.seed is None and config.seed is None:
        overrides['seed'] = DEFAULT_SEED
    if args.type != 'compare':
        overrides['policy'] = args.type
    changes = {key: value for key, value in overrides.items() if value is not None}
    return config.replace(**changes).validate()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run grocery checkout simulations')

    # Queueing policy
    parser.add_argument('type', choices=list(POLICY_NAMES) + ['compare'],
                        help='Queueing policy to simulate, or compare all of them')

    # Common parameters
    parser.add_argument('-t', '--time', type=int,
                        help='Simulation time in seconds (default: 7200)')
    parser.add_argument('-r', '--replications', type=int, default=1,
                        help='Number of replications (default: 1)')
    parser.add_argument('-s', '--seed', type=int,
                        help=f'Random seed (default: {DEFAULT_SEED})')

    # Store parameters
    parser.add_argument('--stations', type=int,
                        help='Number of checkout stations (default: 5)')
    parser.add_argument('--inter-arrival', type=int,
                        help='Mean seconds between customer arrivals (default: 30)')
    parser.add_argument('--arrival-model', choices=ARRIVAL_MODELS,
                        help='Per-second random arrivals or a fixed interval (default: bernoulli)')
    parser.add_argument('--items', type=int, nargs=2, metavar=('MIN', 'MAX'),
                        help='Items per customer in [MIN, MAX) (default: 1 20)')
    parser.add_argument('--payment', type=int, nargs=2, metavar=('MIN', 'MAX'),
                        help='Payment seconds in [MIN, MAX) (default: 10 30)')
    parser.add_argument('--scan', type=int, nargs=2, metavar=('MIN', 'MAX'),
                        help='Scan seconds per item in [MIN, MAX) (default: 8 10)')
    parser.add_argument('--config', type=str,
                        help='JSON configuration file')

    # Output options
    parser.add_argument('-o', '--output', type=str,
                        help='Output file for results (JSON)')
    parser.add_argument('-d', '--detailed', action='store_true',
                        help='Show detailed statistics')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Suppress console output')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log every simulated second')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.replications < 1:
        parser.error("--replications must be at least 1")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(message)s')

    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.type == 'compare':
        results = compare_policies(config, args.replications, config.seed)
    elif args.replications > 1:
        results = run_replications(config, args.replications, config.seed)
    else:
        results = run_simulation(config)

    if not args.quiet:
        print_results(results, config.num_stations, args.detailed)

    if args.output:
        save_results(results, args.output)
        if not args.quiet:
            print(f"\nResults saved to: {args.output}")

    return 0


if __name__ == '__main__':
    sys.exit(main())

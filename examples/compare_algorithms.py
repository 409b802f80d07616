#!/usr/bin/env python3
"""
Compare SimpleGA and CHC on one De Jong function.

Runs replicate batches of both algorithms, prints the convergence summary,
tests whether their final best values differ, and writes summary tables
and plots.

Usage:
    python examples/compare_algorithms.py [options]

Options:
    --function NAME     Test function (default: dejong1)
    --runs N            Replicates per algorithm (default: 10)
    --generations N     Generations per run (default: 75)
    --workers N         Parallel workers (default: cpu_count - 1)
    --seed N            Root seed (default: 0)
    --output DIR        Output directory for tables and plots (default: results/plots)
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from galab.analysis.aggregator import (
    aggregate_runs,
    compare_algorithms,
    export_summary_csv,
    print_summary,
)
from galab.core.jobs import run_trials
from galab.evolution.algorithm import AlgorithmConfig
from galab.functions import FUNCTIONS, get_function
from galab.visualization.plots import plot_convergence, plot_final_values


def main():
    parser = argparse.ArgumentParser(description='Compare SimpleGA and CHC')
    parser.add_argument('--function', choices=sorted(FUNCTIONS.keys()), default='dejong1')
    parser.add_argument('--runs', type=int, default=10)
    parser.add_argument('--generations', type=int, default=75)
    parser.add_argument('--workers', type=int, default=None)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--output', type=str, default='results/plots')
    args = parser.parse_args()

    function = get_function(args.function)
    output_dir = Path(args.output)

    settings = {
        'simple_ga': AlgorithmConfig(100, args.generations, 0.7, 0.005, 32, function.num_variables()),
        'chc': AlgorithmConfig(50, args.generations, 0.95, 0.05, 32, function.num_variables()),
    }

    histories = {}
    summaries = {}
    for offset, (algorithm, config) in enumerate(settings.items()):
        print(f"\nRunning {algorithm} x {args.runs} on {args.function}...")
        histories[algorithm] = run_trials(
            algorithm, config, function, args.runs,
            n_workers=args.workers, seed=args.seed + offset,
        )
        summaries[algorithm] = aggregate_runs(histories[algorithm])
        print_summary(f"{algorithm} / {args.function}", summaries[algorithm])

        summary_path = output_dir / f'{args.function}_{algorithm}_summary.csv'
        export_summary_csv(summaries[algorithm], summary_path)
        print(f"Saved: {summary_path}")

    result = compare_algorithms(histories['simple_ga'], histories['chc'])
    print(f"\n{'='*60}")
    print("SIMPLE_GA vs CHC (final best value)")
    print(f"{'='*60}")
    print(f"  Test:        {result.test_name}")
    print(f"  Statistic:   {result.statistic:.4f}")
    print(f"  p-value:     {result.p_value:.4g}")
    if result.effect_size is not None:
        print(f"  Effect size: {result.effect_size:.3f} ({result.effect_size_name})")
    print(f"  Significant: {'yes' if result.significant else 'no'}")

    convergence_path = plot_convergence(
        summaries,
        output_dir / f'{args.function}_convergence.png',
        title=f"{args.function}: SimpleGA vs CHC",
        max_fitness=function.max_y() - function.min_y(),
    )
    print(f"\nSaved: {convergence_path}")
    final_path = plot_final_values(
        histories,
        output_dir / f'{args.function}_final_values.png',
        title=f"{args.function}: Final Best Value",
    )
    print(f"Saved: {final_path}")


if __name__ == '__main__':
    main()

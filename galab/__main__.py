"""
Command-line driver for the De Jong study.

Usage:
    python -m galab ga_performance
    python -m galab chc_performance --runs 5 --plot
    python -m galab parameter_search --functions dejong1 dejong2 --runs 100

Options:
    --functions F [F...]  Functions to run (default: all five)
    --runs N              Override the preset replicate count
    --workers N           Parallel workers (default: cpu_count - 1)
    --seed N              Root seed for reproducibility
    --output-dir PATH     Directory for report files (default: .)
    --plot                Also write a convergence chart per function
"""

import argparse
import sys
import time
from dataclasses import replace
from multiprocessing import cpu_count
from pathlib import Path
from typing import List, Optional

from .analysis.aggregator import aggregate_runs, print_summary
from .core.jobs import random_parameter_search, run_trials
from .core.persistence import write_parameter_search_csv, write_performance_csv
from .errors import ReportError
from .functions import FUNCTIONS, get_function
from .presets import Experiment, PRESETS, get_preset
from .visualization.plots import plot_convergence


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog='galab',
        description='Run the De Jong test suite with SimpleGA and CHC'
    )
    parser.add_argument(
        'preset', choices=sorted(PRESETS.keys()),
        help='Experiment preset to run'
    )
    parser.add_argument(
        '--functions', nargs='+', choices=sorted(FUNCTIONS.keys()), default=None,
        help='Functions to run (default: all)'
    )
    parser.add_argument(
        '--runs', type=int, default=None,
        help='Replicates per function (default: preset value)'
    )
    parser.add_argument(
        '--workers', type=int, default=None,
        help='Number of parallel workers (default: cpu_count - 1)'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for reproducibility'
    )
    parser.add_argument(
        '--output-dir', type=str, default='.',
        help='Directory for report files'
    )
    parser.add_argument(
        '--plot', action='store_true',
        help='Write a convergence chart per function'
    )
    return parser.parse_args(argv)


def print_banner(preset: str):
    print("=" * 70)
    print(f"   GALAB - {preset}")
    print("=" * 70)


def print_experiment(experiment: Experiment, n_workers: int):
    config = experiment.config
    print(f"\n{'='*60}")
    print(f"   {experiment.algorithm} on {experiment.function}")
    print(f"{'='*60}")
    print(f"   Population size:    {config.population_size}")
    print(f"   Generations:        {config.num_generations}")
    print(f"   Crossover prob:     {config.crossover_prob}")
    print(f"   Mutation prob:      {config.mutation_prob}")
    print(f"   Bits x variables:   {config.bits_per_variable} x {config.num_variables}")
    print(f"   Runs:               {experiment.n_runs}")
    print(f"   Workers:            {n_workers}")


def progress_callback(completed: int, total: int):
    """Print batch progress."""
    pct = 100 * completed / total
    print(f"\r   Run {completed:4d}/{total} ({pct:5.1f}%)", end='', flush=True)


def run_experiment(experiment: Experiment, args, seed: Optional[int]) -> None:
    function = get_function(experiment.function)
    output_path = Path(args.output_dir) / experiment.filename
    start_time = time.time()

    if experiment.kind == 'parameter_search':
        results = random_parameter_search(
            experiment.config, function, experiment.n_runs,
            algorithm=experiment.algorithm,
            n_workers=args.workers, seed=seed,
            progress_callback=progress_callback,
        )
        print()
        best = max(results, key=lambda r: r.best_fitness)
        print(f"   Best run:           {best.run_index} (fitness {best.best_fitness:.6g})")
        print(f"   Best parameters:    P={best.population_size} G={best.num_generations} "
              f"pc={best.crossover_prob:.4f} pm={best.mutation_prob:.4f}")
        write_parameter_search_csv(output_path, results)
        print(f"   Saved: {output_path}")
    else:
        histories = run_trials(
            experiment.algorithm, experiment.config, function, experiment.n_runs,
            n_workers=args.workers, seed=seed,
            progress_callback=progress_callback,
        )
        print()
        summaries = aggregate_runs(histories)
        print_summary(f"{experiment.algorithm} / {experiment.function}", summaries)
        write_performance_csv(output_path, histories)
        print(f"   Saved: {output_path}")

        if args.plot:
            plot_path = output_path.with_suffix('.png')
            plot_convergence(
                {experiment.algorithm: summaries},
                plot_path,
                title=f"{experiment.function}: Best Fitness by Generation",
                max_fitness=function.max_y() - function.min_y(),
            )
            print(f"   Saved: {plot_path}")

    print(f"   Runtime:            {time.time() - start_time:.1f}s")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    print_banner(args.preset)

    experiments = get_preset(args.preset)
    if args.functions:
        experiments = [e for e in experiments if e.function in args.functions]
    if args.runs is not None:
        experiments = [replace(e, n_runs=args.runs) for e in experiments]

    n_workers = args.workers or max(1, cpu_count() - 1)
    failures = 0

    for index, experiment in enumerate(experiments):
        print_experiment(experiment, n_workers)
        seed = None if args.seed is None else args.seed + index
        try:
            run_experiment(experiment, args, seed)
        except ReportError as e:
            print(f"\n   {e}", file=sys.stderr)
            failures += 1

    print(f"\n{'='*70}")
    print(f"   Done: {len(experiments) - failures}/{len(experiments)} reports written")
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())

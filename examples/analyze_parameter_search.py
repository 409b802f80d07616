#!/usr/bin/env python3
"""
Summarize a parameter-search report.

Reads a CSV written by `python -m galab parameter_search` and prints the
best-performing hyperparameter settings.

Usage:
    python examples/analyze_parameter_search.py dejong1.csv [--top N]
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from galab.core.persistence import read_parameter_search_csv
from galab.errors import ReportError


def main():
    parser = argparse.ArgumentParser(description='Summarize a parameter-search report')
    parser.add_argument('report', type=str, help='Parameter-search CSV file')
    parser.add_argument('--top', type=int, default=10, help='Number of settings to show')
    args = parser.parse_args()

    try:
        results = read_parameter_search_csv(args.report)
    except ReportError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not results:
        print("No runs in report")
        return

    results.sort(key=lambda r: r.best_fitness, reverse=True)

    print(f"\n{'='*70}")
    print(f"TOP {min(args.top, len(results))} OF {len(results)} RUNS: {Path(args.report).name}")
    print(f"{'='*70}")
    print(f"{'Run':>5}  {'Fitness':>14}  {'Pop':>4}  {'Gens':>4}  {'Pc':>7}  {'Pm':>7}")
    print("-" * 50)
    for r in results[:args.top]:
        print(f"{r.run_index:>5}  {r.best_fitness:>14.6g}  {r.population_size:>4}  "
              f"{r.num_generations:>4}  {r.crossover_prob:>7.4f}  {r.mutation_prob:>7.4f}")

    best = results[0]
    print(f"\nBest solution: {', '.join(f'{x:.5f}' for x in best.best_solution)}")


if __name__ == '__main__':
    main()

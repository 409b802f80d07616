"""
Result aggregation for replicate GA runs.

Aggregates the per-generation records of many runs of the same
configuration into statistical summaries.
"""

import csv
from collections import defaultdict
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import List, Dict, Sequence

from ..evolution.history import RunHistory
from .statistics import compute_confidence_interval, compare_distributions, ComparisonResult


@dataclass
class GenerationSummary:
    """Statistics for one generation index across replicate runs."""
    generation: int
    n_runs: int

    # Best fitness across runs
    mean_best_fitness: float
    std_best_fitness: float
    ci_lower: float
    ci_upper: float

    # Population averages
    mean_average_fitness: float

    # Raw objective values
    mean_best_value: float
    min_best_value: float

    confidence_level: float = 0.95


SUMMARY_COLUMNS = [
    'generation', 'n_runs',
    'mean_best_fitness', 'std_best_fitness', 'ci_lower', 'ci_upper',
    'mean_average_fitness',
    'mean_best_value', 'min_best_value',
    'confidence_level',
]


def aggregate_runs(
    histories: Sequence[RunHistory],
    confidence: float = 0.95
) -> List[GenerationSummary]:
    """
    Aggregate runs generation by generation.

    Runs of different lengths are allowed; each generation index is
    summarized over the runs that reached it.

    Args:
        histories: Replicate runs
        confidence: Confidence level for intervals

    Returns:
        One GenerationSummary per generation index, in order
    """
    grouped: Dict[int, list] = defaultdict(list)
    for history in histories:
        for record in history.generations:
            grouped[record.generation].append(record)

    summaries = []
    for generation in sorted(grouped):
        records = grouped[generation]
        ci = compute_confidence_interval([r.best_fitness for r in records], confidence)
        summaries.append(GenerationSummary(
            generation=generation,
            n_runs=len(records),
            mean_best_fitness=ci.mean,
            std_best_fitness=ci.std,
            ci_lower=ci.ci_lower,
            ci_upper=ci.ci_upper,
            mean_average_fitness=sum(r.average_fitness for r in records) / len(records),
            mean_best_value=sum(r.best_value for r in records) / len(records),
            min_best_value=min(r.best_value for r in records),
            confidence_level=confidence,
        ))
    return summaries


def final_best_values(histories: Sequence[RunHistory]) -> List[float]:
    """Best objective value of the last generation of every run."""
    return [h.final.best_value for h in histories if h.final is not None]


def compare_algorithms(
    histories_a: Sequence[RunHistory],
    histories_b: Sequence[RunHistory],
    test: str = 'auto'
) -> ComparisonResult:
    """
    Compare two batches of runs on their final best objective values.

    A negative effect size means batch A reached lower (better) values.
    """
    return compare_distributions(
        final_best_values(histories_a),
        final_best_values(histories_b),
        test=test,
    )


def export_summary_csv(summaries: List[GenerationSummary], filepath: Path) -> None:
    """
    Export generation summaries to CSV.

    Args:
        summaries: Output of aggregate_runs
        filepath: Path to write CSV file
    """
    if not summaries:
        return

    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=SUMMARY_COLUMNS)
        writer.writeheader()
        for summary in summaries:
            writer.writerow(asdict(summary))


def print_summary(label: str, summaries: List[GenerationSummary]) -> None:
    """Print a formatted summary of aggregated results."""
    if not summaries:
        return

    first, last = summaries[0], summaries[-1]
    print("=" * 60)
    print(f"{label.upper()} ({last.n_runs} runs, {len(summaries)} generations)")
    print("=" * 60)
    print(f"  Best fitness   gen {first.generation:4d}: {first.mean_best_fitness:.6g}")
    print(f"  Best fitness   gen {last.generation:4d}: {last.mean_best_fitness:.6g} "
          f"[{last.ci_lower:.6g}, {last.ci_upper:.6g}]")
    print(f"  Mean best value (final): {last.mean_best_value:.6g}")
    print(f"  Lowest best value (final): {last.min_best_value:.6g}")

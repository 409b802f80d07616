"""
Report files for GA experiments.

Writes the per-generation performance table and the parameter-search
table as CSV. Every write holds a FileLock on `<path>.lock` so concurrent
drivers never interleave rows in the same report.
"""

import csv
from pathlib import Path
from typing import Dict, List, NamedTuple, Sequence, Union
from filelock import FileLock

from ..errors import ReportError
from ..evolution.history import RunHistory
from .jobs import ParameterSearchResult


PathLike = Union[str, Path]

PERFORMANCE_HEADER = [
    'Run', 'Generation',
    'Best Fitness', 'Average Fitness', 'Worst Fitness',
    'Best Value', 'Average Value', 'Worst Value',
]

PARAMETER_SEARCH_HEADER = [
    'Run', 'Best Fitness', 'Best Solution',
    'Population Size', 'Generations', 'Crossover Prob.', 'Mutation Prob.',
]


class PerformanceRow(NamedTuple):
    """One row of a performance table."""
    run: int
    generation: int
    best_fitness: float
    average_fitness: float
    worst_fitness: float
    best_value: float
    average_value: float
    worst_value: float


def _get_lock(path: Path) -> FileLock:
    """Get file lock for a report file."""
    return FileLock(str(path) + '.lock')


def format_solution(solution: Sequence[float]) -> str:
    """Render a solution vector as '( x1 x2 ... )'."""
    return '( ' + ''.join(f'{x} ' for x in solution) + ')'


def parse_solution(text: str) -> List[float]:
    return [float(tok) for tok in text.strip().strip('()').split()]


def _write_rows(path: PathLike, header: List[str], rows: List[list]) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with _get_lock(path):
            with open(path, 'w', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(header)
                writer.writerows(rows)
    except OSError as e:
        raise ReportError(f"Could not open file {path}: {e}") from e
    return path


def write_performance_csv(path: PathLike, histories: Sequence[RunHistory]) -> Path:
    """
    Write the per-generation performance table of a batch of runs.

    Rows are ordered by run index, then generation.

    Raises:
        ReportError: If the file cannot be written
    """
    rows = []
    for history in sorted(histories, key=lambda h: h.run_index):
        for g in history.generations:
            rows.append([
                history.run_index, g.generation,
                g.best_fitness, g.average_fitness, g.worst_fitness,
                g.best_value, g.average_value, g.worst_value,
            ])
    return _write_rows(path, PERFORMANCE_HEADER, rows)


def write_parameter_search_csv(path: PathLike, results: Sequence[ParameterSearchResult]) -> Path:
    """
    Write one row per parameter-search run.

    Raises:
        ReportError: If the file cannot be written
    """
    rows = [
        [
            r.run_index, r.best_fitness, format_solution(r.best_solution),
            r.population_size, r.num_generations, r.crossover_prob, r.mutation_prob,
        ]
        for r in sorted(results, key=lambda r: r.run_index)
    ]
    return _write_rows(path, PARAMETER_SEARCH_HEADER, rows)


def _read_rows(path: PathLike, header: List[str]) -> List[List[str]]:
    path = Path(path)
    try:
        with _get_lock(path):
            with open(path, 'r', newline='') as f:
                rows = list(csv.reader(f))
    except OSError as e:
        raise ReportError(f"Could not open file {path}: {e}") from e

    if not rows or rows[0] != header:
        raise ReportError(f"Unexpected header in {path}")
    return rows[1:]


def read_performance_csv(path: PathLike) -> Dict[int, List[PerformanceRow]]:
    """
    Read a performance table back.

    Returns:
        Mapping of run index to its rows in generation order
    """
    runs: Dict[int, List[PerformanceRow]] = {}
    for row in _read_rows(path, PERFORMANCE_HEADER):
        record = PerformanceRow(
            int(row[0]), int(row[1]),
            *(float(v) for v in row[2:]),
        )
        runs.setdefault(record.run, []).append(record)

    for records in runs.values():
        records.sort(key=lambda r: r.generation)
    return runs


def read_parameter_search_csv(path: PathLike) -> List[ParameterSearchResult]:
    """Read a parameter-search table back, in file order."""
    results = []
    for row in _read_rows(path, PARAMETER_SEARCH_HEADER):
        results.append(ParameterSearchResult(
            run_index=int(row[0]),
            best_fitness=float(row[1]),
            best_solution=parse_solution(row[2]),
            population_size=int(row[3]),
            num_generations=int(row[4]),
            crossover_prob=float(row[5]),
            mutation_prob=float(row[6]),
        ))
    return results

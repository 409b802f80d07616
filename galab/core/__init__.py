"""Batch execution and report files."""

from .jobs import (
    ALGORITHMS,
    ParameterSearchResult,
    get_algorithm,
    run_trials,
    random_parameter_search,
)
from .persistence import (
    PerformanceRow,
    write_performance_csv,
    write_parameter_search_csv,
    read_performance_csv,
    read_parameter_search_csv,
)

__all__ = [
    'ALGORITHMS',
    'ParameterSearchResult',
    'get_algorithm',
    'run_trials',
    'random_parameter_search',
    'PerformanceRow',
    'write_performance_csv',
    'write_parameter_search_csv',
    'read_performance_csv',
    'read_parameter_search_csv',
]

"""Analysis module for replicate GA runs.

Provides tools for:
- Statistical analysis (confidence intervals, significance tests)
- Per-generation aggregation across runs
"""

from .statistics import (
    compute_confidence_interval,
    compare_distributions,
)
from .aggregator import (
    GenerationSummary,
    aggregate_runs,
    compare_algorithms,
    export_summary_csv,
    print_summary,
)

__all__ = [
    # Statistics
    'compute_confidence_interval',
    'compare_distributions',
    # Aggregation
    'GenerationSummary',
    'aggregate_runs',
    'compare_algorithms',
    'export_summary_csv',
    'print_summary',
]

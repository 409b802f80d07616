"""Visualization utilities for GA experiments."""

from .plots import plot_convergence, plot_final_values

__all__ = [
    'plot_convergence',
    'plot_final_values',
]

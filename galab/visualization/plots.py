"""
Matplotlib charts for GA experiments.

Creates static convergence charts with:
- Mean best fitness per generation
- Shaded confidence intervals across replicate runs
- Box plots of final objective values per algorithm
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

# Matplotlib imports with non-GUI backend
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from ..analysis.aggregator import GenerationSummary, final_best_values
from ..evolution.history import RunHistory


ALGORITHM_COLORS = {
    'simple_ga': '#3498db',  # Blue
    'chc': '#e74c3c',        # Red
}

ALGORITHM_LABELS = {
    'simple_ga': 'Simple GA',
    'chc': 'CHC',
}

DEFAULT_COLORS = ['#2ecc71', '#f39c12', '#9b59b6', '#1abc9c', '#888888']


def _color(label: str, index: int) -> str:
    return ALGORITHM_COLORS.get(label, DEFAULT_COLORS[index % len(DEFAULT_COLORS)])


def plot_convergence(
    summaries_by_label: Dict[str, List[GenerationSummary]],
    output_path: Union[str, Path],
    title: str = "Best Fitness by Generation (with 95% CI)",
    max_fitness: Optional[float] = None,
) -> Path:
    """
    Plot mean best fitness per generation with shaded CI bands.

    Args:
        summaries_by_label: Label (algorithm key or free text) -> aggregate_runs output
        output_path: PNG file to write
        title: Chart title
        max_fitness: Optional reference line (max_y - min_y of the function)

    Returns:
        Path of the written image
    """
    fig, ax = plt.subplots(figsize=(10, 6))

    for index, (label, summaries) in enumerate(summaries_by_label.items()):
        if not summaries:
            continue
        color = _color(label, index)
        generations = [s.generation for s in summaries]
        means = [s.mean_best_fitness for s in summaries]
        ci_lowers = [s.ci_lower for s in summaries]
        ci_uppers = [s.ci_upper for s in summaries]

        ax.fill_between(generations, ci_lowers, ci_uppers, color=color, alpha=0.2)
        ax.plot(generations, means, '-', color=color, linewidth=2,
                label=ALGORITHM_LABELS.get(label, label))

    if max_fitness is not None:
        ax.axhline(y=max_fitness, color='gray', linestyle='--', alpha=0.5, label='Optimum')

    ax.set_xlabel('Generation', fontsize=12, fontweight='bold')
    ax.set_ylabel('Best Fitness', fontsize=12, fontweight='bold')
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='lower right', fontsize=10)
    ax.grid(True, alpha=0.3)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white')
    plt.close(fig)
    return output_path


def plot_final_values(
    histories_by_label: Dict[str, Sequence[RunHistory]],
    output_path: Union[str, Path],
    title: str = "Final Best Objective Value",
) -> Path:
    """
    Box plot of the last-generation best objective value of every run.

    Returns:
        Path of the written image
    """
    labels = [label for label, runs in histories_by_label.items() if runs]
    data = [final_best_values(histories_by_label[label]) for label in labels]

    fig, ax = plt.subplots(figsize=(8, 6))
    if data:
        bp = ax.boxplot(data, patch_artist=True)
        for index, (patch, label) in enumerate(zip(bp['boxes'], labels)):
            patch.set_facecolor(_color(label, index))
            patch.set_alpha(0.6)
        ax.set_xticks(range(1, len(labels) + 1))
        ax.set_xticklabels([ALGORITHM_LABELS.get(l, l) for l in labels])

    ax.set_ylabel('Best Value (lower is better)', fontsize=12, fontweight='bold')
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3, axis='y')

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white')
    plt.close(fig)
    return output_path

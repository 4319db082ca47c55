"""
Plots for GA scheduler results.

Draws the champion schedule as a Gantt chart (one row per developer) and
the best fitness per generation.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .data_models import Schedule, HistoryPoint


def plot_schedule_gantt(
    schedule: Schedule,
    output_path: Union[str, Path],
    figsize: Tuple[int, int] = (12, 6),
    title: Optional[str] = None
) -> Path:
    """
    Save a Gantt chart of a schedule.

    Args:
        schedule: Decoded schedule
        output_path: Path to save PNG file
        figsize: Figure size (width, height) in inches
        title: Optional plot title

    Returns:
        Path to saved image
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    dev_ids = sorted({item.dev_id for item in schedule})
    row = {dev_id: i for i, dev_id in enumerate(dev_ids)}
    colors = plt.cm.tab20.colors

    fig, ax = plt.subplots(figsize=figsize)

    for i, item in enumerate(schedule):
        y = row[item.dev_id]
        ax.barh(y, item.duration, left=item.start, height=0.6,
                color=colors[i % len(colors)], edgecolor='black', linewidth=0.5)
        ax.text(item.start + item.duration / 2, y, item.task_id,
                ha='center', va='center', fontsize=8)

    ax.set_yticks(range(len(dev_ids)))
    ax.set_yticklabels(dev_ids)
    ax.invert_yaxis()
    ax.set_xlabel('Time (hours)')
    ax.set_ylabel('Developer')
    ax.set_title(title or 'Schedule')
    ax.grid(axis='x', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return output_path


def plot_convergence(
    history: List[HistoryPoint],
    output_path: Union[str, Path],
    figsize: Tuple[int, int] = (10, 5)
) -> Path:
    """
    Save a line plot of the best fitness per generation.

    Args:
        history: Fitness history of a run
        output_path: Path to save PNG file
        figsize: Figure size (width, height) in inches

    Returns:
        Path to saved image
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=figsize)

    generations = [point.generation for point in history]
    best = [point.best for point in history]

    ax.plot(generations, best, marker='o', markersize=3, linewidth=1.5)

    # Penalised runs span several orders of magnitude
    if best and min(best) > 0 and max(best) / min(best) > 100:
        ax.set_yscale('log')

    ax.set_xlabel('Generation')
    ax.set_ylabel('Best fitness')
    ax.set_title('Best fitness per generation')
    ax.grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return output_path

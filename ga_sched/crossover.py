"""
Crossover operator for the GA scheduler.

Order Crossover (OX) recombines the task order of two parents while keeping
each child a permutation of the task set. Inside the copied window the
children then exchange developer bindings position by position.
"""

from typing import Dict, List, Tuple
import numpy as np

from .data_models import Gene, Chromosome


def _fill_order(window_parent: Chromosome, order_parent: Chromosome, a: int, b: int) -> List[Gene]:
    """
    Build one OX child.

    Copies window_parent's genes at [a, b), then places the remaining genes
    in order_parent's order starting at position b and wrapping around.
    """
    n = len(window_parent)
    child: List[Gene] = [None] * n
    placed = set()

    for i in range(a, b):
        child[i] = window_parent[i].copy()
        placed.add(child[i].task_id)

    k = b
    for gene in order_parent:
        if gene.task_id in placed:
            continue
        child[k % n] = gene.copy()
        placed.add(gene.task_id)
        k += 1

    return child


def order_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: np.random.Generator,
    swap_rate: float = 0.5
) -> Tuple[Chromosome, Chromosome, Dict]:
    """
    Combine two parents with Order Crossover plus developer exchange.

    Algorithm:
        1. Draw two cut points in [0, n) and sort them into window [a, b)
        2. Child A keeps parent A's window, child B keeps parent B's window
        3. Remaining positions are filled from the other parent's order,
           starting at b and wrapping modulo n
        4. For each position in [a, b), with probability swap_rate, the
           children swap developer ids (task ids stay in place)

    The developer swap does not re-check skill compatibility; mismatches
    are left for the fitness penalty.

    Args:
        parent_a: First parent
        parent_b: Second parent (permutation of the same task set)
        rng: Random number generator
        swap_rate: Per-position probability of a developer exchange

    Returns:
        Tuple of (child_a, child_b, crossover_info)
        where crossover_info holds the window and the swapped positions

    Raises:
        ValueError: If the parents differ in length
    """
    n = len(parent_a)
    if len(parent_b) != n:
        raise ValueError(f"Parents must have equal length, got {n} and {len(parent_b)}")

    if n == 0:
        return parent_a.copy(), parent_b.copy(), {'window': (0, 0), 'swapped_positions': []}

    a, b = sorted((int(rng.integers(0, n)), int(rng.integers(0, n))))

    genes_a = _fill_order(parent_a, parent_b, a, b)
    genes_b = _fill_order(parent_b, parent_a, a, b)

    swapped = []
    for i in range(a, b):
        if rng.random() < swap_rate:
            genes_a[i].dev_id, genes_b[i].dev_id = genes_b[i].dev_id, genes_a[i].dev_id
            swapped.append(i)

    crossover_info = {'window': (a, b), 'swapped_positions': swapped}
    metadata = {'origin': 'crossover', 'window': (a, b)}

    child_a = Chromosome(genes=genes_a, metadata=dict(metadata))
    child_b = Chromosome(genes=genes_b, metadata=dict(metadata))

    return child_a, child_b, crossover_info

"""
Mutation operators for the GA scheduler.

Implements an order swap (changes scheduling priority) and a developer
reassignment (changes a resource binding). Each call to mutate() applies
exactly one of the two.
"""

from typing import List, Tuple
import numpy as np

from .data_models import Task, Developer, Chromosome
from .initialization import compatible_developers


def swap_order(
    chromosome: Chromosome,
    rng: np.random.Generator
) -> Tuple[Chromosome, List[str]]:
    """
    Exchange the genes at two random positions.

    Developer bindings travel with their tasks. The two positions may be
    equal, in which case the chromosome is unchanged.

    Args:
        chromosome: Chromosome to mutate (not modified)
        rng: Random number generator

    Returns:
        Tuple of (mutated_chromosome, operation_log)
    """
    mutated = chromosome.copy()

    if len(mutated) == 0:
        return mutated, ["swap_order: empty chromosome"]

    i = int(rng.integers(0, len(mutated)))
    j = int(rng.integers(0, len(mutated)))
    mutated.genes[i], mutated.genes[j] = mutated.genes[j], mutated.genes[i]

    op_log = [f"swap_order: positions {i} <-> {j} ({mutated[j].task_id} <-> {mutated[i].task_id})"]

    return mutated, op_log


def reassign_developer(
    chromosome: Chromosome,
    tasks: List[Task],
    developers: List[Developer],
    rng: np.random.Generator
) -> Tuple[Chromosome, List[str]]:
    """
    Rebind the task at one random position to a random compatible developer.

    The new developer is drawn uniformly from the developers whose skills
    cover the task, so this gene is skill-compatible afterwards. The draw
    may return the current developer.

    Args:
        chromosome: Chromosome to mutate (not modified)
        tasks: Task definitions
        developers: Developer definitions
        rng: Random number generator

    Returns:
        Tuple of (mutated_chromosome, operation_log)
    """
    mutated = chromosome.copy()

    if len(mutated) == 0:
        return mutated, ["reassign_developer: empty chromosome"]

    task_by_id = {task.id: task for task in tasks}

    i = int(rng.integers(0, len(mutated)))
    gene = mutated[i]
    pool = compatible_developers(task_by_id[gene.task_id], developers)

    old_dev = gene.dev_id
    gene.dev_id = pool[rng.integers(0, len(pool))].id

    op_log = [f"reassign_developer({gene.task_id}): {old_dev} -> {gene.dev_id}"]

    return mutated, op_log


def mutate(
    chromosome: Chromosome,
    tasks: List[Task],
    developers: List[Developer],
    rng: np.random.Generator
) -> Tuple[Chromosome, List[str]]:
    """
    Apply exactly one mutation operator, chosen by a fair coin flip.

    Callers decide whether to mutate at all (mutation_rate); this function
    always mutates.

    Returns:
        Tuple of (mutated_chromosome, operation_log)
    """
    if rng.random() < 0.5:
        mutated, op_log = swap_order(chromosome, rng)
    else:
        mutated, op_log = reassign_developer(chromosome, tasks, developers, rng)

    mutated.metadata['mutation_ops'] = list(mutated.metadata.get('mutation_ops', [])) + op_log

    return mutated, op_log

"""
Chromosome initialization.

Builds random chromosomes in which every task is bound to a developer
whose skills cover the task's requirements.
"""

from typing import List
import numpy as np

from .data_models import Task, Developer, Gene, Chromosome


def compatible_developers(task: Task, developers: List[Developer]) -> List[Developer]:
    """
    Get the developers able to take a task.

    Args:
        task: Task to staff
        developers: Candidate developers

    Returns:
        Developers whose skills are a superset of the task's skills, in
        input order
    """
    return [dev for dev in developers if dev.can_do(task)]


def random_chromosome(
    tasks: List[Task],
    developers: List[Developer],
    rng: np.random.Generator
) -> Chromosome:
    """
    Create one random chromosome.

    Gene order follows task input order; each gene's developer is drawn
    uniformly from the task's compatible pool.

    Args:
        tasks: Tasks to schedule
        developers: Available developers
        rng: Random number generator

    Returns:
        New Chromosome with one gene per task
    """
    genes = []
    for task in tasks:
        pool = compatible_developers(task, developers)
        dev = pool[rng.integers(0, len(pool))]
        genes.append(Gene(task.id, dev.id))

    return Chromosome(genes=genes, metadata={'origin': 'random'})


def initial_population(
    tasks: List[Task],
    developers: List[Developer],
    size: int,
    rng: np.random.Generator
) -> List[Chromosome]:
    """Create the starting population of `size` random chromosomes."""
    return [random_chromosome(tasks, developers, rng) for _ in range(size)]

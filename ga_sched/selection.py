"""
Parent selection for the GA scheduler.
"""

from typing import Callable, List
import numpy as np

from .data_models import Chromosome


def tournament_select(
    population: List[Chromosome],
    fitness_fn: Callable[[Chromosome], float],
    rng: np.random.Generator
) -> Chromosome:
    """
    Binary tournament: the better of two uniformly drawn chromosomes.

    Draws are made with replacement, so both contenders may be the same
    chromosome. Ties go to the first draw.

    Args:
        population: Current population
        fitness_fn: Maps a chromosome to its fitness (lower is better)
        rng: Random number generator

    Returns:
        The winning chromosome (not a copy)
    """
    first = population[rng.integers(0, len(population))]
    second = population[rng.integers(0, len(population))]

    if fitness_fn(second) < fitness_fn(first):
        return second
    return first

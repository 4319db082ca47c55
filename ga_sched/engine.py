"""
Generational loop of the GA scheduler.

genetic_schedule() is the public entry point: it validates the problem,
evolves a population for a fixed number of generations and returns the
decoded schedule of the best chromosome together with the per-generation
fitness history. It performs no file or console I/O.
"""

from typing import Callable, Dict, List, Optional, Tuple
import numpy as np

from .config import GAConfig
from .data_models import Task, Developer, Chromosome, HistoryPoint, SearchResult
from .crossover import order_crossover
from .decoder import decode
from .fitness import evaluate_fitness
from .initialization import initial_population
from .mutation import mutate
from .selection import tournament_select
from .validation import validate_problem


def score_population(
    population: List[Chromosome],
    tasks: List[Task],
    developers: List[Developer],
    config: GAConfig
) -> List[float]:
    """Fitness of every chromosome, in population order."""
    return [evaluate_fitness(ch, tasks, developers, config.weights) for ch in population]


def select_champion(population: List[Chromosome], scores: List[float]) -> Tuple[Chromosome, float]:
    """
    Pick the chromosome with the lowest fitness.

    Ties go to the chromosome encountered first.
    """
    best_idx = int(np.argmin(scores))
    return population[best_idx], scores[best_idx]


def next_generation(
    population: List[Chromosome],
    scores: List[float],
    tasks: List[Task],
    developers: List[Developer],
    config: GAConfig,
    rng: np.random.Generator
) -> List[Chromosome]:
    """
    Breed the next population.

    Algorithm:
        1. If elitism is on, copy the current best chromosome into slot 0
        2. Until the offspring reach population_size:
           a. Select two parents by binary tournament
           b. With probability crossover_rate recombine them, otherwise
              copy them through unchanged
           c. Mutate each child independently with probability mutation_rate
           d. Append both children
        3. Trim to exactly population_size

    Args:
        population: Current population
        scores: Fitness of each chromosome in population
        tasks: Task definitions
        developers: Developer definitions
        config: GA hyperparameters
        rng: Random number generator

    Returns:
        New population of config.population_size chromosomes
    """
    score_by_id: Dict[int, float] = {id(ch): score for ch, score in zip(population, scores)}

    def fitness_fn(chromosome: Chromosome) -> float:
        return score_by_id[id(chromosome)]

    offspring = []

    if config.elitism and population:
        elite, _ = select_champion(population, scores)
        elite = elite.copy()
        elite.metadata = {'origin': 'elite'}
        offspring.append(elite)

    while len(offspring) < config.population_size:
        parent_a = tournament_select(population, fitness_fn, rng)
        parent_b = tournament_select(population, fitness_fn, rng)

        if rng.random() < config.crossover_rate:
            child_a, child_b, _ = order_crossover(
                parent_a, parent_b, rng, swap_rate=config.resource_swap_rate
            )
        else:
            child_a, child_b = parent_a.copy(), parent_b.copy()
            child_a.metadata = {'origin': 'clone'}
            child_b.metadata = {'origin': 'clone'}

        if rng.random() < config.mutation_rate:
            child_a, _ = mutate(child_a, tasks, developers, rng)
        if rng.random() < config.mutation_rate:
            child_b, _ = mutate(child_b, tasks, developers, rng)

        offspring.extend([child_a, child_b])

    return offspring[:config.population_size]


def genetic_schedule(
    tasks: List[Task],
    developers: List[Developer],
    config: Optional[GAConfig] = None,
    rng: Optional[np.random.Generator] = None,
    progress: Optional[Callable[[HistoryPoint], None]] = None
) -> SearchResult:
    """
    Search for a low-cost assignment of tasks to developers.

    Args:
        tasks: Tasks to schedule
        developers: Available developers
        config: GA hyperparameters (defaults when None)
        rng: Random number generator; built from config.random_seed when None
        progress: Optional callback receiving each HistoryPoint as recorded

    Returns:
        SearchResult with the champion's schedule and the fitness history

    Raises:
        ConfigurationError: If a task has an unknown dependency or no
            compatible developer; raised before any population is built
    """
    config = config or GAConfig()

    validate_problem(tasks, developers)

    seed = None
    if rng is None:
        seed = config.random_seed
        if seed is None:
            seed = int(np.random.default_rng().integers(0, 2**31))
        rng = np.random.default_rng(seed)

    population = initial_population(tasks, developers, config.population_size, rng)
    scores = score_population(population, tasks, developers, config)
    history = []

    for generation in range(config.generations):
        population = next_generation(population, scores, tasks, developers, config, rng)
        scores = score_population(population, tasks, developers, config)

        point = HistoryPoint(generation=generation, best=min(scores))
        history.append(point)

        if progress is not None:
            progress(point)

    champion, best_fitness = select_champion(population, scores)

    return SearchResult(
        schedule=decode(champion, tasks, developers),
        history=history,
        champion=champion,
        best_fitness=best_fitness,
        seed=seed,
    )

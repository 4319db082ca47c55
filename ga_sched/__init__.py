"""
GA Scheduler

This package assigns tasks to developers under precedence, skill, deadline
and capacity constraints (a resource-constrained project scheduling
variant) using a genetic algorithm.

Key Features:
- Permutation + resource encoding (one gene per task)
- List-scheduling decoder (gene order is the priority)
- Weighted makespan / cost / load-balance objective with soft penalties
- Binary tournament, Order Crossover with developer exchange, two mutations
- Immutable, YAML-loadable hyperparameters and a seedable random source

Modules:
- data_models: Core data structures (Task, Developer, Chromosome, ScheduleItem)
- config: GA hyperparameters (GAConfig, FitnessWeights)
- validation: Pre-flight feasibility checks
- initialization: Random chromosome creation
- decoder: Chromosome to schedule
- fitness: Objective and penalties
- selection / crossover / mutation: Evolutionary operators
- engine: Generational loop and public entry point
- io_utils: JSON input and output
- visualization: Gantt and convergence plots
- cli: Command-line interface
"""

__version__ = "0.1.0"
__author__ = "Planning Tools Team"

from .config import GAConfig, FitnessWeights, ConfigValidationError, load_ga_config
from .data_models import (
    Task,
    Developer,
    Gene,
    Chromosome,
    ScheduleItem,
    HistoryPoint,
    SearchResult,
)
from .engine import genetic_schedule
from .validation import ConfigurationError, UnknownDependencyError, NoCompatibleDeveloperError

__all__ = [
    "GAConfig",
    "FitnessWeights",
    "ConfigValidationError",
    "load_ga_config",
    "Task",
    "Developer",
    "Gene",
    "Chromosome",
    "ScheduleItem",
    "HistoryPoint",
    "SearchResult",
    "genetic_schedule",
    "ConfigurationError",
    "UnknownDependencyError",
    "NoCompatibleDeveloperError",
]

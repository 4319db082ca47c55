"""
Hyperparameter configuration for the GA scheduler.

The search is tuned through an immutable GAConfig value that is passed into
the search entry point. Values can be read from a YAML file.
"""

import math
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, Any, Optional, Union
import yaml


DEFAULT_CONFIG_PATH = Path(__file__).parent / "ga_config.yaml"


class ConfigValidationError(Exception):
    """Raised when run or GA configuration is invalid."""
    pass


@dataclass(frozen=True)
class FitnessWeights:
    """
    Weights of the objective terms and penalty constants.

    Attributes:
        time: Weight of the makespan
        cost: Weight of the monetary cost
        load: Weight of the load standard deviation
        skill_penalty: Added once per skill-incompatible assignment
        overtime_penalty: Multiplied by the hours a developer is over capacity
        lateness_factor: Multiplied by lateness and task weight
    """
    time: float = 0.5
    cost: float = 0.3
    load: float = 0.2
    skill_penalty: float = 1_000_000.0
    overtime_penalty: float = 50_000.0
    lateness_factor: float = 10.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) \
                    or not math.isfinite(value) or value < 0:
                raise ConfigValidationError(
                    f"'weights.{f.name}' must be a non-negative number, got: {value}"
                )


@dataclass(frozen=True)
class GAConfig:
    """
    Hyperparameters of the genetic search.

    Attributes:
        population_size: Number of chromosomes per generation (N)
        generations: Number of generations to run (G)
        crossover_rate: Probability that a parent pair is recombined (Pc)
        mutation_rate: Probability that each child is mutated (Pm)
        resource_swap_rate: Per-position probability of exchanging developers
            inside the crossover window
        elitism: Carry the best chromosome unchanged into the next generation
        weights: Objective weights and penalty constants
        random_seed: Seed for the random generator (None for fresh entropy)
    """
    population_size: int = 50
    generations: int = 50
    crossover_rate: float = 0.8
    mutation_rate: float = 0.3
    resource_swap_rate: float = 0.5
    elitism: bool = False
    weights: FitnessWeights = field(default_factory=FitnessWeights)
    random_seed: Optional[int] = None

    def __post_init__(self):
        """Validate hyperparameter ranges."""
        if isinstance(self.population_size, bool) or not isinstance(self.population_size, int) \
                or self.population_size < 1:
            raise ConfigValidationError(
                f"'population_size' must be a positive integer, got: {self.population_size}"
            )

        if isinstance(self.generations, bool) or not isinstance(self.generations, int) \
                or self.generations < 0:
            raise ConfigValidationError(
                f"'generations' must be a non-negative integer, got: {self.generations}"
            )

        for name in ("crossover_rate", "mutation_rate", "resource_swap_rate"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) \
                    or not 0.0 <= value <= 1.0:
                raise ConfigValidationError(f"'{name}' must be within [0, 1], got: {value}")

        if self.random_seed is not None and (
            isinstance(self.random_seed, bool) or not isinstance(self.random_seed, int)
        ):
            raise ConfigValidationError(
                f"'random_seed' must be an integer or null, got: {self.random_seed}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GAConfig":
        """
        Build a configuration from a plain dictionary (e.g. parsed YAML).

        Args:
            data: Dictionary of hyperparameters; a nested 'weights' mapping is
                turned into FitnessWeights

        Returns:
            GAConfig instance

        Raises:
            ConfigValidationError: If unknown keys are present or values are invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown GA configuration keys: {', '.join(sorted(unknown))}"
            )

        values = dict(data)
        weights = values.pop("weights", None) or {}
        if not isinstance(weights, dict):
            raise ConfigValidationError("'weights' must be a dictionary")

        known_weights = {f.name for f in fields(FitnessWeights)}
        unknown_weights = set(weights) - known_weights
        if unknown_weights:
            raise ConfigValidationError(
                f"Unknown weight keys: {', '.join(sorted(unknown_weights))}"
            )

        return cls(weights=FitnessWeights(**weights), **values)

    def with_seed(self, seed: Optional[int]) -> "GAConfig":
        """Return a copy of this configuration with a different seed."""
        return replace(self, random_seed=seed)


def load_ga_config(config_path: Union[str, Path, None] = None) -> GAConfig:
    """
    Load GA hyperparameters from a YAML file.

    Args:
        config_path: Path to YAML file; the packaged defaults when None

    Returns:
        GAConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    if not config_file.exists():
        raise FileNotFoundError(f"GA configuration file not found: {config_file}")

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in GA configuration file: {e}")

    if data is None:
        return GAConfig()

    if not isinstance(data, dict):
        raise ConfigValidationError("GA configuration must be a mapping")

    return GAConfig.from_dict(data)

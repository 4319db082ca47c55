"""
Tests for the validator, the GA configuration and the generational loop.
"""

import unittest
import tempfile
import shutil
from pathlib import Path
import numpy as np

from ga_sched.config import GAConfig, FitnessWeights, ConfigValidationError, load_ga_config
from ga_sched.data_models import Task, Developer
from ga_sched.engine import genetic_schedule, next_generation, score_population, select_champion
from ga_sched.fitness import evaluate_fitness
from ga_sched.initialization import initial_population
from ga_sched.validation import (
    validate_problem,
    ConfigurationError,
    UnknownDependencyError,
    NoCompatibleDeveloperError,
)


def make_project():
    tasks = [
        Task("T1", 4, 20, skills={"python"}),
        Task("T2", 3, 20, skills={"python"}, deps=("T1",)),
        Task("T3", 2, 15, skills={"sql"}, weight=2),
        Task("T4", 5, 30, deps=("T2", "T3")),
        Task("T5", 1, 10, skills={"js"}),
        Task("T6", 2, 25, skills={"python", "sql"}, weight=3, deps=("T4",)),
    ]
    developers = [
        Developer("alice", rate=40, hours_available=12, skills={"python", "sql"}),
        Developer("bob", rate=25, hours_available=10, skills={"python"}),
        Developer("carol", rate=30, hours_available=10, skills={"sql", "js"}),
        Developer("dave", rate=20, hours_available=8),
    ]
    return tasks, developers


class TestValidation(unittest.TestCase):
    """Test pre-flight feasibility checks."""

    def setUp(self):
        self.developers = [Developer("D1", rate=10, hours_available=10, skills={"python"})]

    def test_valid_problem(self):
        """Test a well-formed problem passes."""
        tasks = [Task("T1", 2, 10, skills={"python"}), Task("T2", 3, 10, deps=("T1",))]
        validate_problem(tasks, self.developers)

    def test_unknown_dependency(self):
        """Test a reference to a missing task is rejected."""
        tasks = [Task("T1", 2, 10, deps=("T9",))]

        with self.assertRaises(UnknownDependencyError) as ctx:
            validate_problem(tasks, self.developers)

        self.assertEqual(ctx.exception.task_id, "T1")
        self.assertEqual(ctx.exception.dependency, "T9")
        self.assertIsInstance(ctx.exception, ConfigurationError)

    def test_no_compatible_developer(self):
        """Test a skill nobody has is rejected."""
        tasks = [Task("T1", 2, 10, skills={"python", "rust"})]

        with self.assertRaises(NoCompatibleDeveloperError) as ctx:
            validate_problem(tasks, self.developers)

        self.assertEqual(ctx.exception.skills, ["python", "rust"])

    def test_duplicate_task_ids(self):
        """Test duplicate task ids are rejected."""
        tasks = [Task("T1", 2, 10), Task("T1", 3, 10)]

        with self.assertRaises(ConfigurationError):
            validate_problem(tasks, self.developers)

    def test_search_rejects_before_population(self):
        """Test the search raises before building any population."""
        tasks = [Task("T1", 2, 10, deps=("missing",))]
        calls = []

        with self.assertRaises(ConfigurationError):
            genetic_schedule(tasks, self.developers, progress=calls.append)

        self.assertEqual(calls, [])


class TestGAConfig(unittest.TestCase):
    """Test hyperparameter configuration."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.temp_path = Path(self.temp_dir)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_defaults(self):
        """Test default hyperparameters."""
        config = GAConfig()

        self.assertEqual(config.population_size, 50)
        self.assertEqual(config.generations, 50)
        self.assertEqual(config.crossover_rate, 0.8)
        self.assertEqual(config.mutation_rate, 0.3)
        self.assertFalse(config.elitism)
        self.assertEqual(config.weights, FitnessWeights(0.5, 0.3, 0.2))

    def test_packaged_config_matches_defaults(self):
        """Test the packaged YAML file holds the default values."""
        self.assertEqual(load_ga_config(), GAConfig())

    def test_config_is_immutable(self):
        """Test configuration cannot be modified."""
        config = GAConfig()
        with self.assertRaises(AttributeError):
            config.population_size = 10

    def test_invalid_values(self):
        """Test out-of-range values are rejected."""
        with self.assertRaises(ConfigValidationError):
            GAConfig(population_size=0)
        with self.assertRaises(ConfigValidationError):
            GAConfig(crossover_rate=1.5)
        with self.assertRaises(ConfigValidationError):
            FitnessWeights(time=-1)

    def test_boolean_values_rejected(self):
        """Test booleans are not accepted where numbers are expected."""
        with self.assertRaises(ConfigValidationError):
            GAConfig(population_size=True)
        with self.assertRaises(ConfigValidationError):
            GAConfig(generations=False)
        with self.assertRaises(ConfigValidationError):
            GAConfig(crossover_rate=False)
        with self.assertRaises(ConfigValidationError):
            GAConfig(random_seed=True)
        with self.assertRaises(ConfigValidationError):
            FitnessWeights(cost=True)

    def test_non_finite_weight_rejected(self):
        """Test NaN weights are rejected."""
        with self.assertRaises(ConfigValidationError):
            FitnessWeights(load=float("nan"))

    def test_load_yaml(self):
        """Test loading hyperparameters from YAML."""
        path = self.temp_path / "ga.yaml"
        path.write_text(
            "population_size: 10\n"
            "generations: 5\n"
            "elitism: true\n"
            "weights:\n"
            "  time: 1.0\n"
            "random_seed: 7\n"
        )

        config = load_ga_config(path)

        self.assertEqual(config.population_size, 10)
        self.assertTrue(config.elitism)
        self.assertEqual(config.weights.time, 1.0)
        self.assertEqual(config.weights.cost, 0.3)
        self.assertEqual(config.random_seed, 7)

    def test_load_yaml_unknown_key(self):
        """Test unknown keys are rejected."""
        path = self.temp_path / "ga.yaml"
        path.write_text("populaton_size: 10\n")

        with self.assertRaises(ConfigValidationError):
            load_ga_config(path)

    def test_load_missing_file(self):
        """Test a missing configuration file."""
        with self.assertRaises(FileNotFoundError):
            load_ga_config(self.temp_path / "nope.yaml")

    def test_with_seed(self):
        """Test seed override keeps other values."""
        config = GAConfig(population_size=12).with_seed(99)

        self.assertEqual(config.random_seed, 99)
        self.assertEqual(config.population_size, 12)


class TestGenerationalLoop(unittest.TestCase):
    """Test the genetic search loop."""

    def setUp(self):
        self.tasks, self.developers = make_project()
        self.config = GAConfig(population_size=11, generations=8, random_seed=42)

    def test_reference_problem(self):
        """Test the two-task, one-developer problem has a single answer."""
        tasks = [Task("T1", 2, 10), Task("T2", 3, 10, deps=("T1",))]
        developers = [Developer("D1", rate=10, hours_available=10)]

        result = genetic_schedule(tasks, developers, GAConfig(population_size=4, generations=3, random_seed=1))

        self.assertEqual(len(result.history), 3)
        self.assertEqual(len(result.schedule), 2)
        self.assertTrue(all(item.dev_id == "D1" for item in result.schedule))
        self.assertAlmostEqual(result.best_fitness, 17.5)

    def test_history_and_result_shape(self):
        """Test one history point per generation and a full schedule."""
        result = genetic_schedule(self.tasks, self.developers, self.config)

        self.assertEqual([p.generation for p in result.history], list(range(8)))
        self.assertEqual(sorted(item.task_id for item in result.schedule),
                         sorted(t.id for t in self.tasks))
        self.assertEqual(result.seed, 42)
        self.assertAlmostEqual(
            result.best_fitness,
            evaluate_fitness(result.champion, self.tasks, self.developers)
        )
        self.assertAlmostEqual(result.best_fitness, result.history[-1].best)

    def test_seed_reproducibility(self):
        """Test the same seed yields the same run."""
        first = genetic_schedule(self.tasks, self.developers, self.config)
        second = genetic_schedule(self.tasks, self.developers, self.config)

        self.assertEqual(first.schedule, second.schedule)
        self.assertEqual(first.history, second.history)

    def test_injected_rng(self):
        """Test an injected generator is used instead of the config seed."""
        first = genetic_schedule(self.tasks, self.developers, self.config, rng=np.random.default_rng(5))
        second = genetic_schedule(self.tasks, self.developers, self.config, rng=np.random.default_rng(5))

        self.assertIsNone(first.seed)
        self.assertEqual(first.history, second.history)

    def test_population_size_stable(self):
        """Test every generation keeps exactly population_size chromosomes."""
        rng = np.random.default_rng(0)

        for size in (1, 2, 7, 10):
            config = GAConfig(population_size=size, generations=1)
            population = initial_population(self.tasks, self.developers, size, rng)

            for _ in range(5):
                scores = score_population(population, self.tasks, self.developers, config)
                population = next_generation(population, scores, self.tasks, self.developers, config, rng)
                self.assertEqual(len(population), size)

    def test_offspring_are_permutations(self):
        """Test every offspring is a permutation of the task set."""
        rng = np.random.default_rng(8)
        config = GAConfig(population_size=20, crossover_rate=1.0, mutation_rate=1.0)
        population = initial_population(self.tasks, self.developers, 20, rng)
        scores = score_population(population, self.tasks, self.developers, config)

        offspring = next_generation(population, scores, self.tasks, self.developers, config, rng)

        expected = sorted(t.id for t in self.tasks)
        for child in offspring:
            self.assertEqual(sorted(child.task_ids()), expected)
            self.assertFalse(any(child is parent for parent in population))

    def test_elitism_keeps_best(self):
        """Test elitism makes best fitness non-increasing."""
        config = GAConfig(population_size=10, generations=15, elitism=True,
                          mutation_rate=1.0, random_seed=3)

        result = genetic_schedule(self.tasks, self.developers, config)

        best = [p.best for p in result.history]
        for prev, nxt in zip(best, best[1:]):
            self.assertLessEqual(nxt, prev)

    def test_progress_callback(self):
        """Test progress receives every history point."""
        seen = []
        result = genetic_schedule(self.tasks, self.developers, self.config, progress=seen.append)

        self.assertEqual(seen, result.history)

    def test_zero_generations(self):
        """Test the champion comes from the initial population."""
        config = GAConfig(population_size=5, generations=0, random_seed=1)

        result = genetic_schedule(self.tasks, self.developers, config)

        self.assertEqual(result.history, [])
        self.assertEqual(len(result.schedule), len(self.tasks))

    def test_select_champion_ties(self):
        """Test ties go to the first chromosome."""
        population = initial_population(self.tasks, self.developers, 3, np.random.default_rng(0))

        champion, score = select_champion(population, [4.0, 2.0, 2.0])

        self.assertIs(champion, population[1])
        self.assertEqual(score, 2.0)


if __name__ == '__main__':
    unittest.main()

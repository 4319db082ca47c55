"""
CLI module for the GA scheduler.

Handles run configuration loading and validation, reads the problem files,
runs the search, and writes the schedule, history and optional plots.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional
import yaml

from .config import ConfigValidationError, load_ga_config
from .data_models import HistoryPoint, SearchResult
from .engine import genetic_schedule
from .fitness import schedule_breakdown
from .io_utils import load_tasks, load_developers, save_schedule, save_history


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Expected layout:
        input:
          tasks: tasks.json
          developers: devs.json
        output:
          root: results/
          overwrite: false
          plots: true
        ga_config: ga_sched/ga_config.yaml   # optional
        random_seed: 42                      # optional

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ConfigValidationError("Run configuration must be a mapping")

    for section in ['input', 'output']:
        if section not in config:
            raise ConfigValidationError(f"Missing required field: '{section}'")
        if not isinstance(config[section], dict):
            raise ConfigValidationError(f"'{section}' must be a dictionary")

    for field in ['tasks', 'developers']:
        if field not in config['input']:
            raise ConfigValidationError(f"Missing required field: 'input.{field}'")

        path = Path(config['input'][field])
        if not path.exists():
            raise ConfigValidationError(f"Input file not found: {path}")

    if 'root' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.root'")

    if 'ga_config' in config and not Path(config['ga_config']).exists():
        raise ConfigValidationError(f"GA config not found: {config['ga_config']}")

    seed = config.get('random_seed')
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise ConfigValidationError(f"'random_seed' must be an integer, got: {seed}")


def print_progress(point: HistoryPoint) -> None:
    print(f"Gen {point.generation}: best F = {point.best:.2f}")


def run_search(
    tasks_path: str,
    developers_path: str,
    output_root: str = ".",
    ga_config_path: Optional[str] = None,
    random_seed: Optional[int] = None,
    overwrite: bool = True,
    plots: bool = False,
    verbose: bool = True
) -> SearchResult:
    """
    Run one search from problem files and write the results.

    Writes schedule.json and log.json (and schedule.png / convergence.png
    when plots is set) into output_root.

    Args:
        tasks_path: JSON file with task definitions
        developers_path: JSON file with developer definitions
        output_root: Directory for output files
        ga_config_path: YAML file with GA hyperparameters (packaged defaults when None)
        random_seed: Overrides the seed of the GA config when given
        overwrite: Allow replacing existing output files
        plots: Also write PNG plots
        verbose: Print per-generation progress

    Returns:
        SearchResult of the run
    """
    print("=" * 70)
    print("GA SCHEDULER")
    print("=" * 70)

    ga_config = load_ga_config(ga_config_path)
    if random_seed is not None:
        ga_config = ga_config.with_seed(random_seed)

    print(f"Loading tasks from: {tasks_path}")
    tasks = load_tasks(tasks_path)
    print(f"Loading developers from: {developers_path}")
    developers = load_developers(developers_path)
    print(f"Problem: {len(tasks)} tasks, {len(developers)} developers")
    print(f"Population: {ga_config.population_size}, generations: {ga_config.generations}, "
          f"elitism: {'on' if ga_config.elitism else 'off'}")
    print()

    result = genetic_schedule(
        tasks,
        developers,
        config=ga_config,
        progress=print_progress if verbose else None
    )

    output_root = Path(output_root)
    output_root.mkdir(parents=True, exist_ok=True)

    schedule_path = save_schedule(result.schedule, output_root / 'schedule.json', overwrite=overwrite)
    history_path = save_history(result.history, output_root / 'log.json', overwrite=overwrite)
    written = [schedule_path, history_path]

    if plots:
        from .visualization import plot_schedule_gantt, plot_convergence
        written.append(plot_schedule_gantt(result.schedule, output_root / 'schedule.png'))
        written.append(plot_convergence(result.history, output_root / 'convergence.png'))

    breakdown = schedule_breakdown(result.schedule, tasks, developers, ga_config.weights)

    # Print summary
    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    if result.seed is not None:
        print(f"Random seed: {result.seed}")
    print(f"Best fitness: {result.best_fitness:.2f}")
    print(f"Makespan: {breakdown.makespan:.2f}")
    print(f"Cost: {breakdown.cost:.2f}")
    print(f"Load std-dev: {breakdown.load_std:.2f}")
    print(f"Penalty: {breakdown.penalty:.2f} "
          f"(skills {breakdown.skill_penalty:.0f}, capacity {breakdown.capacity_penalty:.0f}, "
          f"deadlines {breakdown.deadline_penalty:.2f})")
    print(f"Files saved: {', '.join(str(p) for p in written)}")

    return result


def run_from_config(config_path: str) -> SearchResult:
    """
    Load run configuration and execute a search.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        ConfigurationError: If the problem cannot be scheduled
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print("Validating configuration...")
    validate_run_config(config)

    return run_search(
        tasks_path=config['input']['tasks'],
        developers_path=config['input']['developers'],
        output_root=config['output']['root'],
        ga_config_path=config.get('ga_config'),
        random_seed=config.get('random_seed'),
        overwrite=config['output'].get('overwrite', False),
        plots=config['output'].get('plots', False),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ga-sched",
        description="Assign tasks to developers with a genetic algorithm",
        epilog=(
            "Examples:\n"
            "  ga-sched tasks.json devs.json\n"
            "  ga-sched tasks.json devs.json --seed 42 --plot --output results/\n"
            "  ga-sched --run run_config.yaml"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("tasks", nargs="?", help="JSON file with task definitions")
    parser.add_argument("developers", nargs="?", help="JSON file with developer definitions")
    parser.add_argument("--run", metavar="RUN_CONFIG", help="YAML run configuration")
    parser.add_argument("--config", metavar="GA_CONFIG", help="YAML file with GA hyperparameters")
    parser.add_argument("--output", default=".", help="Output directory (default: current directory)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--plot", action="store_true", help="Also write PNG plots")
    parser.add_argument("--quiet", action="store_true", help="Do not print per-generation progress")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the scheduler CLI. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.run is None and (not args.tasks or not args.developers):
        parser.print_usage(sys.stderr)
        print("Error: tasks and developers files are required (or --run RUN_CONFIG)", file=sys.stderr)
        return 1

    if args.run is not None and (args.tasks or args.developers):
        parser.print_usage(sys.stderr)
        print("Error: --run cannot be combined with tasks and developers files", file=sys.stderr)
        return 1

    try:
        if args.run is not None:
            run_from_config(args.run)
        else:
            run_search(
                args.tasks,
                args.developers,
                output_root=args.output,
                ga_config_path=args.config,
                random_seed=args.seed,
                plots=args.plot,
                verbose=not args.quiet,
            )
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    print("\nDone.")
    return 0

"""
Feasibility checks run once before the search starts.

Every task must reference only known predecessors and must be doable by at
least one developer. Any failure aborts the run.
"""

from typing import List, Iterable

from .data_models import Task, Developer


class ConfigurationError(Exception):
    """Raised when the problem definition cannot be scheduled"""
    pass


class UnknownDependencyError(ConfigurationError):
    """A task lists a predecessor that is not in the task set."""

    def __init__(self, task_id: str, dependency: str):
        self.task_id = task_id
        self.dependency = dependency
        super().__init__(f"Unknown dependency {dependency} in task {task_id}")


class NoCompatibleDeveloperError(ConfigurationError):
    """No developer has all the skills a task requires."""

    def __init__(self, task_id: str, skills: Iterable[str]):
        self.task_id = task_id
        self.skills = sorted(skills)
        super().__init__(
            f"No compatible dev for task {task_id} (requires: {', '.join(self.skills) or 'none'})"
        )


def validate_problem(tasks: List[Task], developers: List[Developer]) -> None:
    """
    Check that the search can build feasible-by-construction chromosomes.

    Args:
        tasks: Tasks to schedule
        developers: Available developers

    Raises:
        ConfigurationError: On duplicate task or developer identifiers
        UnknownDependencyError: If a task depends on an unknown task id
        NoCompatibleDeveloperError: If no developer covers a task's skills
    """
    task_ids = [task.id for task in tasks]
    if len(set(task_ids)) != len(task_ids):
        raise ConfigurationError("Duplicate task identifiers in task set")

    dev_ids = [dev.id for dev in developers]
    if len(set(dev_ids)) != len(dev_ids):
        raise ConfigurationError("Duplicate developer identifiers in developer set")

    known = set(task_ids)

    for task in tasks:
        for dep in task.deps:
            if dep not in known:
                raise UnknownDependencyError(task.id, dep)

        if not any(dev.can_do(task) for dev in developers):
            raise NoCompatibleDeveloperError(task.id, task.skills)

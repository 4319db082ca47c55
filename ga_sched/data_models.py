"""
Data models for the GA scheduler.

Core data structures representing the scheduling problem (tasks and
developers), the search encoding (genes and chromosomes) and the decoded
output (schedule items and fitness history).
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Any, Iterator


def _parse_number(record_kind: str, record_id: Any, key: str, value: Any) -> float:
    """Convert a record field to a finite float, raising ValueError otherwise."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric field '{key}' in {record_kind} {record_id}: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid numeric field '{key}' in {record_kind} {record_id}: {e}")
    if not math.isfinite(number):
        raise ValueError(f"Field '{key}' in {record_kind} {record_id} must be finite, got: {number}")
    return number


def _parse_id_list(record_kind: str, record_id: Any, key: str, value: Any) -> list[str]:
    """Accept a list of strings or null for skills and deps."""
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(
            f"Field '{key}' in {record_kind} {record_id} must be a list of strings, got: {value!r}"
        )
    return value


@dataclass(frozen=True)
class Task:
    """
    A unit of work to be scheduled.

    Attributes:
        id: Unique identifier (T1, T2, ...)
        duration: Duration in hours, positive
        deadline: Point in time the task should finish by (epoch-ms)
        skills: Skills a developer needs to take the task
        weight: Weight of the task in the lateness penalty
        deps: Identifiers of predecessor tasks
    """
    id: str
    duration: float
    deadline: float
    skills: frozenset[str] = frozenset()
    weight: float = 1.0
    deps: tuple[str, ...] = ()

    def __post_init__(self):
        """Normalise collections so the task stays hashable and immutable."""
        if not isinstance(self.skills, frozenset):
            object.__setattr__(self, "skills", frozenset(self.skills))
        if not isinstance(self.deps, tuple):
            object.__setattr__(self, "deps", tuple(self.deps or ()))

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "dur": self.duration,
            "deadline": self.deadline,
            "skills": sorted(self.skills),
            "weight": self.weight,
        }
        if self.deps:
            data["deps"] = list(self.deps)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """
        Create a task from its serialized form.

        Args:
            data: Dictionary with keys id, dur, deadline, skills, weight and
                optionally deps

        Returns:
            Task instance

        Raises:
            ValueError: If a required key is missing or a number is malformed
        """
        missing = [key for key in ("id", "dur", "deadline") if key not in data]
        if missing:
            raise ValueError(f"Task record is missing fields: {', '.join(missing)}")

        task_id = data["id"]
        duration = _parse_number("task", task_id, "dur", data["dur"])
        deadline = _parse_number("task", task_id, "deadline", data["deadline"])
        weight = _parse_number("task", task_id, "weight", data.get("weight", 1.0))
        skills = _parse_id_list("task", task_id, "skills", data.get("skills"))
        deps = _parse_id_list("task", task_id, "deps", data.get("deps"))

        if duration <= 0:
            raise ValueError(f"Task {data['id']} must have a positive duration, got: {duration}")
        if weight < 0:
            raise ValueError(f"Task {data['id']} must have a non-negative weight, got: {weight}")

        return cls(
            id=str(data["id"]),
            duration=duration,
            deadline=deadline,
            skills=frozenset(skills),
            weight=weight,
            deps=tuple(deps),
        )


@dataclass(frozen=True)
class Developer:
    """
    A resource that tasks are assigned to.

    Attributes:
        id: Unique identifier (name or login)
        rate: Hourly rate
        hours_available: Capacity in hours for the whole project
        skills: Skills the developer has
    """
    id: str
    rate: float
    hours_available: float
    skills: frozenset[str] = frozenset()

    def __post_init__(self):
        if not isinstance(self.skills, frozenset):
            object.__setattr__(self, "skills", frozenset(self.skills))

    def can_do(self, task: Task) -> bool:
        """True if this developer's skills cover the task's requirements."""
        return task.skills <= self.skills

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "rate": self.rate,
            "hoursAvail": self.hours_available,
            "skills": sorted(self.skills),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Developer":
        """
        Create a developer from its serialized form.

        Raises:
            ValueError: If a required key is missing or a number is malformed
        """
        missing = [key for key in ("id", "rate", "hoursAvail") if key not in data]
        if missing:
            raise ValueError(f"Developer record is missing fields: {', '.join(missing)}")

        dev_id = data["id"]
        rate = _parse_number("developer", dev_id, "rate", data["rate"])
        hours_available = _parse_number("developer", dev_id, "hoursAvail", data["hoursAvail"])
        skills = _parse_id_list("developer", dev_id, "skills", data.get("skills"))

        if rate < 0 or hours_available < 0:
            raise ValueError(
                f"Developer {data['id']} must have non-negative rate and hoursAvail"
            )

        return cls(
            id=str(data["id"]),
            rate=rate,
            hours_available=hours_available,
            skills=frozenset(skills),
        )


@dataclass
class Gene:
    """One task's resource binding at a chromosome position."""
    task_id: str
    dev_id: str

    def copy(self) -> "Gene":
        return Gene(self.task_id, self.dev_id)


@dataclass
class Chromosome:
    """
    A full candidate solution.

    The gene order is the scheduling priority used by the decoder; each gene
    binds one task to one developer. Every task appears exactly once.

    Attributes:
        genes: Ordered list of genes
        metadata: Free-form information (operators applied, origin, etc.)
    """
    genes: list[Gene]
    metadata: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.genes)

    def __iter__(self) -> Iterator[Gene]:
        return iter(self.genes)

    def __getitem__(self, index: int) -> Gene:
        return self.genes[index]

    def copy(self) -> "Chromosome":
        """
        Create a deep copy of this chromosome.

        Returns:
            New Chromosome whose genes are not shared with the original
        """
        return Chromosome(
            genes=[gene.copy() for gene in self.genes],
            metadata=self.metadata.copy(),
        )

    def task_ids(self) -> list[str]:
        """Task identifiers in gene order."""
        return [gene.task_id for gene in self.genes]

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, str]]) -> "Chromosome":
        """Build a chromosome from (task_id, dev_id) pairs."""
        return cls(genes=[Gene(task_id, dev_id) for task_id, dev_id in pairs])


@dataclass(frozen=True)
class ScheduleItem:
    """Decoded placement of one task on the timeline."""
    task_id: str
    dev_id: str
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.task_id, "dev": self.dev_id, "start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleItem":
        return cls(
            task_id=data["label"],
            dev_id=data["dev"],
            start=float(data["start"]),
            end=float(data["end"]),
        )


Schedule = list[ScheduleItem]


@dataclass(frozen=True)
class HistoryPoint:
    """Best fitness observed in one generation's population."""
    generation: int
    best: float

    def to_dict(self) -> dict[str, Any]:
        return {"generation": self.generation, "best": self.best}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryPoint":
        return cls(generation=int(data["generation"]), best=float(data["best"]))


@dataclass
class SearchResult:
    """
    Outcome of a complete genetic search.

    Attributes:
        schedule: Decoded schedule of the champion chromosome
        history: Best fitness per generation
        champion: Best chromosome of the final population
        best_fitness: Fitness of the champion
        seed: Seed the random generator was built from (None if injected)
    """
    schedule: Schedule
    history: list[HistoryPoint]
    champion: Chromosome
    best_fitness: float
    seed: Optional[int] = None

    def makespan(self) -> float:
        """Completion time of the last task in the schedule."""
        if not self.schedule:
            return 0.0
        return max(item.end for item in self.schedule)

"""
Fitness evaluation for the GA scheduler.

Fitness is a single non-negative cost (lower is better) combining the
makespan, the monetary cost, the load imbalance across developers and
additive penalties for skill mismatches, capacity overruns and missed
deadlines. Constraint violations are never raised; they are priced.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional
import numpy as np

from .config import FitnessWeights
from .data_models import Task, Developer, Chromosome, Schedule
from .decoder import decode


DEFAULT_WEIGHTS = FitnessWeights()


@dataclass(frozen=True)
class FitnessBreakdown:
    """Individual terms of a chromosome's fitness."""
    makespan: float
    cost: float
    load_std: float
    skill_penalty: float
    capacity_penalty: float
    deadline_penalty: float
    total: float

    @property
    def penalty(self) -> float:
        return self.skill_penalty + self.capacity_penalty + self.deadline_penalty

    def is_feasible(self) -> bool:
        """True when no penalty term was triggered."""
        return self.penalty == 0


def developer_loads(schedule: Schedule) -> Dict[str, float]:
    """
    Sum assigned hours per developer.

    Developers without any assigned task are absent from the result.
    """
    loads = defaultdict(float)
    for item in schedule:
        loads[item.dev_id] += item.duration
    return dict(loads)


def schedule_breakdown(
    schedule: Schedule,
    tasks: List[Task],
    developers: List[Developer],
    weights: Optional[FitnessWeights] = None
) -> FitnessBreakdown:
    """
    Price an already decoded schedule.

    Args:
        schedule: Decoded schedule, one item per task
        tasks: Task definitions
        developers: Developer definitions
        weights: Objective weights and penalty constants

    Returns:
        FitnessBreakdown with every term and the weighted total
    """
    weights = weights or DEFAULT_WEIGHTS
    task_by_id = {task.id: task for task in tasks}
    dev_by_id = {dev.id: dev for dev in developers}

    makespan = max((item.end for item in schedule), default=0.0)
    cost = sum(dev_by_id[item.dev_id].rate * item.duration for item in schedule)

    loads = developer_loads(schedule)
    load_std = float(np.std(list(loads.values()))) if loads else 0.0

    skill_penalty = 0.0
    for item in schedule:
        if not dev_by_id[item.dev_id].can_do(task_by_id[item.task_id]):
            skill_penalty += weights.skill_penalty

    capacity_penalty = 0.0
    for dev in developers:
        used = loads.get(dev.id, 0.0)
        if used > dev.hours_available:
            capacity_penalty += weights.overtime_penalty * (used - dev.hours_available)

    deadline_penalty = 0.0
    for item in schedule:
        task = task_by_id[item.task_id]
        if item.end > task.deadline:
            deadline_penalty += (item.end - task.deadline) * task.weight * weights.lateness_factor

    total = (
        weights.time * makespan
        + weights.cost * cost
        + weights.load * load_std
        + skill_penalty + capacity_penalty + deadline_penalty
    )

    return FitnessBreakdown(
        makespan=makespan,
        cost=cost,
        load_std=load_std,
        skill_penalty=skill_penalty,
        capacity_penalty=capacity_penalty,
        deadline_penalty=deadline_penalty,
        total=total,
    )


def fitness_breakdown(
    chromosome: Chromosome,
    tasks: List[Task],
    developers: List[Developer],
    weights: Optional[FitnessWeights] = None
) -> FitnessBreakdown:
    """Decode a chromosome and price the resulting schedule."""
    return schedule_breakdown(decode(chromosome, tasks, developers), tasks, developers, weights)


def evaluate_fitness(
    chromosome: Chromosome,
    tasks: List[Task],
    developers: List[Developer],
    weights: Optional[FitnessWeights] = None
) -> float:
    """
    Compute the scalar fitness of a chromosome (lower is better).

    Fitness = time * makespan + cost * cost + load * load_std + penalties.
    """
    return fitness_breakdown(chromosome, tasks, developers, weights).total

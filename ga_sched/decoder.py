"""
Schedule decoder.

Turns a chromosome into concrete start/end times with a list-scheduling
pass: genes are processed in chromosome order, each developer works
through its queue sequentially, and a task starts no earlier than the
completion of the predecessors decoded before it.
"""

from collections import defaultdict
from typing import List, Tuple

from .data_models import Task, Developer, Chromosome, ScheduleItem, Schedule


def decode(
    chromosome: Chromosome,
    tasks: List[Task],
    developers: List[Developer]
) -> Schedule:
    """
    Decode a chromosome into a schedule.

    Gene order is a priority list, not a topological order. A predecessor
    that appears later in the chromosome has no completion time yet and
    counts as finishing at 0.

    Args:
        chromosome: Chromosome to decode
        tasks: Task definitions
        developers: Developer definitions

    Returns:
        One ScheduleItem per gene, in gene order
    """
    task_by_id = {task.id: task for task in tasks}

    dev_free_at = defaultdict(float)
    task_done_at = defaultdict(float)
    schedule = []

    for gene in chromosome:
        task = task_by_id[gene.task_id]

        earliest = max((task_done_at[dep] for dep in task.deps), default=0.0)
        earliest = max(earliest, dev_free_at[gene.dev_id])

        start = earliest
        end = start + task.duration

        dev_free_at[gene.dev_id] = end
        task_done_at[task.id] = end
        schedule.append(ScheduleItem(task.id, gene.dev_id, start, end))

    return schedule


def precedence_inversions(chromosome: Chromosome, tasks: List[Task]) -> List[Tuple[str, str]]:
    """
    Find predecessor/successor pairs that the chromosome orders backwards.

    For such pairs the decoder ignores the dependency, so the successor's
    start time may be earlier than its predecessor's end.

    Returns:
        List of (predecessor_id, successor_id) pairs
    """
    task_by_id = {task.id: task for task in tasks}
    position = {task_id: i for i, task_id in enumerate(chromosome.task_ids())}

    inversions = []
    for gene in chromosome:
        for dep in task_by_id[gene.task_id].deps:
            if dep in position and position[dep] > position[gene.task_id]:
                inversions.append((dep, gene.task_id))

    return inversions

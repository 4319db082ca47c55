"""
I/O utilities for the GA scheduler.

Handles JSON parsing of task and developer definitions and serialization
of the resulting schedule and fitness history.
"""

import json
from pathlib import Path
from typing import Any, List, Union

from .data_models import Task, Developer, ScheduleItem, Schedule, HistoryPoint


def _load_json_array(json_path: Union[str, Path], kind: str) -> List[Any]:
    json_path = Path(json_path)

    if not json_path.exists():
        raise FileNotFoundError(f"{kind.capitalize()} file not found: {json_path}")

    try:
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {kind} file {json_path}: {e}")

    if not isinstance(data, list):
        raise ValueError(f"Invalid {kind} file {json_path}. Expected a JSON array")

    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ValueError(f"Invalid {kind} record at index {i} in {json_path}. Expected an object")

    return data


def _check_unique(ids: List[str], kind: str, json_path: Union[str, Path]) -> None:
    seen = set()
    for record_id in ids:
        if record_id in seen:
            raise ValueError(f"Duplicate {kind} id '{record_id}' in {json_path}")
        seen.add(record_id)


def load_tasks(json_path: Union[str, Path]) -> List[Task]:
    """
    Load task definitions from a JSON file.

    JSON format:
        [
          {"id": "T1", "dur": 2, "deadline": 1735689600000,
           "skills": ["python"], "weight": 1, "deps": []},
          ...
        ]

    Args:
        json_path: Path to JSON file

    Returns:
        List of Task objects in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the JSON or a record is malformed, or ids repeat
    """
    tasks = [Task.from_dict(record) for record in _load_json_array(json_path, "tasks")]
    _check_unique([task.id for task in tasks], "task", json_path)
    return tasks


def load_developers(json_path: Union[str, Path]) -> List[Developer]:
    """
    Load developer definitions from a JSON file.

    JSON format:
        [
          {"id": "alice", "rate": 40, "hoursAvail": 120, "skills": ["python"]},
          ...
        ]

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the JSON or a record is malformed, or ids repeat
    """
    developers = [Developer.from_dict(record) for record in _load_json_array(json_path, "developers")]
    _check_unique([dev.id for dev in developers], "developer", json_path)
    return developers


def _write_json(data: Any, output_path: Union[str, Path], overwrite: bool) -> Path:
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    return output_path


def save_schedule(schedule: Schedule, output_path: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Save a schedule as a JSON array of {label, dev, start, end}.

    Returns:
        Path to saved file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    return _write_json([item.to_dict() for item in schedule], output_path, overwrite)


def save_history(history: List[HistoryPoint], output_path: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Save the fitness history as a JSON array of {generation, best}.

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    return _write_json([point.to_dict() for point in history], output_path, overwrite)


def load_schedule(json_path: Union[str, Path]) -> Schedule:
    """Load a schedule previously written by save_schedule()."""
    return [ScheduleItem.from_dict(record) for record in _load_json_array(json_path, "schedule")]


def load_history(json_path: Union[str, Path]) -> List[HistoryPoint]:
    """Load a fitness history previously written by save_history()."""
    return [HistoryPoint.from_dict(record) for record in _load_json_array(json_path, "history")]

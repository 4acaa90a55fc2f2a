"""Built-in exercise documents: empty entries, a starter set and a demo history."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, NamedTuple

from gymweights.records import _format_timestamp

APP_VERSION = "1.0.0"

_SAMPLE_GROUPS: dict[str, tuple[str, ...]] = {
    "Chest": ("Bench Press", "Incline Bench Press", "Chest Fly"),
    "Legs": ("Squat", "Lunges", "Leg Press", "Deadlift"),
    "Back": ("Lat Pulldown", "Bent-over Row", "Seated Row", "Pull-up"),
    "Shoulders": ("Overhead Press", "Lateral Raise", "Front Raise"),
    "Arms": ("Bicep Curl", "Tricep Extension", "Hammer Curl"),
    "Core": ("Plank", "Russian Twist", "Crunch", "Leg Raise", "Hanging Knee Raise"),
}

_DEMO_GROUPS: dict[str, tuple[str, ...]] = {
    "Chest": ("Bench Press", "Incline Bench Press"),
    "Legs": ("Squat", "Lunges"),
    "Back": ("Deadlift", "Pull-up", "Bent-over Row"),
    "Shoulders": ("Overhead Press", "Lateral Raise"),
    "Arms": ("Bicep Curl", "Tricep Extension"),
    "Core": ("Plank", "Russian Twist", "Crunch", "Leg Raise"),
}


class _Progression(NamedTuple):
    unit: str
    initial: float
    increment: float


_DEMO_PROGRESSIONS: dict[str, _Progression] = {
    "Bench Press": _Progression("lb", 55.0, 5.0),
    "Incline Bench Press": _Progression("kg", 50.0, 5.0),
    "Squat": _Progression("kg", 100.0, 2.5),
    "Lunges": _Progression("kg", 45.0, 1.0),
    "Deadlift": _Progression("kg", 80.0, 1.0),
    "Pull-up": _Progression("-", 0.0, 0.0),
    "Bent-over Row": _Progression("lb", 60.0, 5.0),
    "Overhead Press": _Progression("kg", 40.0, 2.0),
    "Lateral Raise": _Progression("kg", 13.0, 1.0),
    "Bicep Curl": _Progression("kg", 9.0, 1.0),
    "Tricep Extension": _Progression("kg", 16.0, 2.0),
    "Plank": _Progression("-", 0.0, 0.0),
    "Russian Twist": _Progression("-", 0.0, 0.0),
    "Crunch": _Progression("-", 0.0, 0.0),
    "Leg Raise": _Progression("-", 0.0, 0.0),
}


def empty_exercise(muscle_group: str) -> dict[str, Any]:
    """An exercise entry with no values and no history."""
    return {
        "muscleGroup": muscle_group,
        "currentValue": 0,
        "unit": "-",
        "sets": 0,
        "repetitions": 0,
        "lastUpdated": "",
        "history": [],
    }


def _sorted_exercises(groups: dict[str, tuple[str, ...]]):
    for group in sorted(groups):
        for name in groups[group]:
            yield group, name


def sample_data(now: datetime) -> dict[str, Any]:
    """A starter document: common exercises with no history yet."""
    exercises = {
        name: empty_exercise(group) for group, name in _sorted_exercises(_SAMPLE_GROUPS)
    }
    return {
        "exercises": dict(sorted(exercises.items())),
        "lastSync": _format_timestamp(now),
        "appVersion": APP_VERSION,
    }


def _demo_repetitions(name: str) -> int:
    if "Press" in name or name == "Deadlift":
        return 6
    if name == "Pull-up":
        return 5
    if name == "Plank":
        return 1
    return 12


def _demo_schedule(name: str) -> tuple[int, int]:
    """Days back of the first entry and the number of entries."""
    if name == "Deadlift":
        return 60, 60
    if "Press" in name:
        return 180, 12
    return 30, 6


def _demo_history(name: str, now: datetime) -> list[dict[str, Any]]:
    progression = _DEMO_PROGRESSIONS[name]
    days_back, entry_count = _demo_schedule(name)
    value = progression.initial
    repetitions = _demo_repetitions(name)
    history = []
    for day in range(entry_count):
        history.append(
            {
                "timestamp": _format_timestamp(now - timedelta(days=days_back - day)),
                "value": value,
                "unit": progression.unit,
                "repetitions": repetitions,
                "sets": 3,
            }
        )
        if progression.increment > 0:
            value += progression.increment
            if day > entry_count - 5:
                value += progression.increment * 0.5
    return history


def demo_data(now: datetime) -> dict[str, Any]:
    """A demo document with a generated, rising history for every exercise."""
    exercises: dict[str, Any] = {}
    for group, name in _sorted_exercises(_DEMO_GROUPS):
        history = _demo_history(name, now)
        if history:
            last = history[-1]
            exercise = {
                "muscleGroup": group,
                "currentValue": float(last["value"]),
                "unit": last["unit"],
                "repetitions": last["repetitions"],
                "sets": last["sets"],
                "lastUpdated": last["timestamp"],
            }
        else:
            exercise = empty_exercise(group)
            del exercise["history"]
        exercise["history"] = history
        exercises[name] = exercise
    return {"exercises": dict(sorted(exercises.items()))}
"""Exercise and history records, and a list model over them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Any, Iterable, Mapping

_DEFAULT_SETS = 3


def _to_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _to_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _parse_timestamp(text: Any) -> datetime | None:
    """Parse an ISO 8601 timestamp; anything unreadable gives None."""
    if not isinstance(text, str) or not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _format_timestamp(moment: datetime | None) -> str:
    """Format a timestamp as ISO 8601 to the second; None gives an empty string."""
    if moment is None:
        return ""
    if moment.tzinfo is not None and moment.utcoffset() == timedelta(0):
        return moment.replace(tzinfo=None).isoformat(timespec="seconds") + "Z"
    return moment.isoformat(timespec="seconds")


def _sort_key(moment: datetime | None) -> tuple[bool, datetime]:
    # Missing timestamps order before every real one.
    return (moment is not None, moment or datetime.min)


@dataclass
class HistoryRecord:
    """One logged performance of an exercise."""

    timestamp: datetime | None = None
    value: float = 0.0
    unit: str = ""
    sets: int = 0
    repetitions: int = 0

    def to_json(self) -> dict[str, Any]:
        return {
            "timestamp": _format_timestamp(self.timestamp),
            "value": self.value,
            "unit": self.unit,
            "sets": self.sets,
            "repetitions": self.repetitions,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> HistoryRecord:
        return cls(
            timestamp=_parse_timestamp(data.get("timestamp")),
            value=_to_float(data.get("value")),
            unit=_to_str(data.get("unit")),
            sets=_to_int(data["sets"]) if "sets" in data else _DEFAULT_SETS,
            repetitions=_to_int(data.get("repetitions")),
        )


@dataclass
class Exercise:
    """An exercise with its current values and its history."""

    name: str = ""
    muscle_group: str = ""
    current_value: float = 0.0
    unit: str = ""
    repetitions: int = 0
    sets: int = 0
    last_updated: datetime | None = None
    history: list[HistoryRecord] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "muscleGroup": self.muscle_group,
            "currentValue": self.current_value,
            "unit": self.unit,
            "sets": self.sets,
            "repetitions": self.repetitions,
            "lastUpdated": _format_timestamp(self.last_updated),
            "history": [record.to_json() for record in self.history],
        }

    @classmethod
    def from_json(cls, key: str, data: Mapping[str, Any]) -> Exercise:
        history = data.get("history")
        records = [
            HistoryRecord.from_json(entry if isinstance(entry, Mapping) else {})
            for entry in (history if isinstance(history, list) else [])
        ]
        return cls(
            name=key,
            muscle_group=_to_str(data.get("muscleGroup")),
            current_value=_to_float(data.get("currentValue")),
            unit=_to_str(data.get("unit")),
            repetitions=_to_int(data.get("repetitions")),
            sets=_to_int(data["sets"]) if "sets" in data else _DEFAULT_SETS,
            last_updated=_parse_timestamp(data.get("lastUpdated")),
            history=records,
        )


class Role(IntEnum):
    """Data roles a view can ask the model for."""

    NAME = 257
    MUSCLE_GROUP = 258
    CURRENT_VALUE = 259
    UNIT = 260
    SETS = 261
    REPETITIONS = 262
    LAST_UPDATED = 263
    HISTORY = 264


_ROLE_NAMES = {
    Role.NAME: "name",
    Role.MUSCLE_GROUP: "muscleGroup",
    Role.CURRENT_VALUE: "currentValue",
    Role.UNIT: "unit",
    Role.SETS: "sets",
    Role.REPETITIONS: "repetitions",
    Role.LAST_UPDATED: "lastUpdated",
    Role.HISTORY: "history",
}


class ExerciseModel:
    """An ordered list of exercises addressed by row."""

    def __init__(self) -> None:
        self._exercises: list[Exercise] = []

    def __len__(self) -> int:
        return len(self._exercises)

    def __iter__(self):
        return iter(self._exercises)

    def data(self, index: int, role: int) -> Any:
        """Return one role of the exercise at a row, or None."""
        if not 0 <= index < len(self._exercises):
            return None
        try:
            role = Role(role)
        except ValueError:
            return None
        exercise = self._exercises[index]
        if role is Role.HISTORY:
            return [
                {
                    "timestamp": record.timestamp,
                    "value": record.value,
                    "unit": record.unit,
                    "repetitions": record.repetitions,
                    "sets": record.sets,
                }
                for record in exercise.history
            ]
        return {
            Role.NAME: exercise.name,
            Role.MUSCLE_GROUP: exercise.muscle_group,
            Role.CURRENT_VALUE: exercise.current_value,
            Role.UNIT: exercise.unit,
            Role.SETS: exercise.sets,
            Role.REPETITIONS: exercise.repetitions,
            Role.LAST_UPDATED: exercise.last_updated,
        }[role]

    def role_names(self) -> dict[Role, str]:
        return dict(_ROLE_NAMES)

    def load_from_json(self, data: Mapping[str, Any]) -> None:
        """Replace the contents with the exercises of a document, by sorted name."""
        exercises = data.get("exercises")
        if not isinstance(exercises, Mapping):
            exercises = {}
        self._exercises = [
            Exercise.from_json(key, value if isinstance(value, Mapping) else {})
            for key, value in sorted(exercises.items())
        ]

    def to_json(self) -> dict[str, Any]:
        return {
            "exercises": {exercise.name: exercise.to_json() for exercise in self._exercises}
        }

    def add_exercise(
        self, name: str, muscle_group: str, value: float, unit: str, sets: int, reps: int
    ) -> None:
        self._exercises.append(
            Exercise(
                name=name,
                muscle_group=muscle_group,
                current_value=value,
                unit=unit,
                sets=sets,
                repetitions=reps,
                last_updated=datetime.now(),
            )
        )

    def update_exercise(
        self, index: int, value: float, unit: str, sets: int, reps: int
    ) -> None:
        """Move the current values into history and set new ones; bad rows are ignored."""
        if not 0 <= index < len(self._exercises):
            return
        exercise = self._exercises[index]
        exercise.history.insert(
            0,
            HistoryRecord(
                timestamp=exercise.last_updated,
                value=exercise.current_value,
                unit=exercise.unit,
                sets=exercise.sets,
                repetitions=exercise.repetitions,
            ),
        )
        exercise.current_value = value
        exercise.sets = sets
        exercise.unit = unit
        exercise.repetitions = reps
        exercise.last_updated = datetime.now()
        exercise.history.sort(key=lambda record: _sort_key(record.timestamp), reverse=True)

    def remove_exercise(self, index: int) -> None:
        if 0 <= index < len(self._exercises):
            del self._exercises[index]
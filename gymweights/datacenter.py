"""The persistent store of exercises and their logged history."""

from __future__ import annotations

import copy
import json
import logging
import os
import random
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable
from urllib.parse import urlparse
from urllib.request import url2pathname

from gymweights.catalog import parse_exercise_list
from gymweights.records import (
    _format_timestamp,
    _parse_timestamp,
    _sort_key,
    _to_float,
    _to_int,
    _to_str,
)
from gymweights.samples import empty_exercise, sample_data

_log = logging.getLogger(__name__)

_FILE_NAME = "exercises.json"


@dataclass(frozen=True)
class Message:
    """A user-facing notice, in Spanish and English."""

    title: str
    english_title: str
    message: str
    english_message: str
    message_type: str = "info"


def _default_data_path() -> Path:
    base = os.environ.get("XDG_DATA_HOME") or os.path.join(
        os.path.expanduser("~"), ".local", "share"
    )
    return Path(base) / "gymweights" / _FILE_NAME


def _entry_order(entry: dict[str, Any]) -> tuple[bool, datetime]:
    moment = _parse_timestamp(entry.get("timestamp"))
    if moment is not None and moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return _sort_key(moment)


def _sorted_history(history: Any) -> list[dict[str, Any]]:
    entries = [
        entry if isinstance(entry, dict) else {}
        for entry in (history if isinstance(history, list) else [])
    ]
    return sorted(entries, key=_entry_order)


def _apply_latest(exercise: dict[str, Any], record: dict[str, Any]) -> None:
    exercise["currentValue"] = _to_float(record.get("value"))
    exercise["unit"] = _to_str(record.get("unit"))
    exercise["sets"] = _to_int(record.get("sets"))
    exercise["repetitions"] = _to_int(record.get("repetitions"))
    exercise["lastUpdated"] = _to_str(record.get("timestamp"))


def _reset_values(exercise: dict[str, Any]) -> None:
    exercise["currentValue"] = 0
    exercise["repetitions"] = 0
    exercise["sets"] = 0
    exercise["lastUpdated"] = ""
    exercise["unit"] = "-"


def _read_document(path: str | os.PathLike[str]) -> Any:
    """Read a JSON document; raise OSError if unreadable, return None if invalid."""
    with open(path, "rb") as handle:
        raw = handle.read()
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _local_path(file_path: str | os.PathLike[str]) -> str | os.PathLike[str]:
    if isinstance(file_path, str) and file_path.startswith("file:"):
        return url2pathname(urlparse(file_path).path)
    return file_path


class DataCenter:
    """Exercises kept in a JSON file, with change and message notifications."""

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        catalog_path: str | os.PathLike[str] | None = None,
        on_change: Callable[[], None] | None = None,
        on_message: Callable[[Message], None] | None = None,
        clock: Callable[[], datetime] = datetime.now,
        rng: random.Random | None = None,
    ) -> None:
        self._path = Path(path) if path is not None else _default_data_path()
        self._catalog_path = catalog_path
        self._on_change = on_change
        self._on_message = on_message
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self._data: dict[str, Any] = {"exercises": {}}
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    def data(self) -> dict[str, Any]:
        """A copy of the whole document."""
        return copy.deepcopy(self._data)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _notify(self, *args: str) -> None:
        if self._on_message is not None:
            self._on_message(Message(*args))

    def _exercises(self) -> dict[str, Any]:
        exercises = self._data.get("exercises")
        return exercises if isinstance(exercises, dict) else {}

    def _exercise(self, name: str) -> dict[str, Any] | None:
        exercise = self._exercises().get(name)
        if exercise is None and name not in self._exercises():
            return None
        return exercise if isinstance(exercise, dict) else {}

    def _store(self, exercises: dict[str, Any]) -> None:
        self._data["exercises"] = exercises
        self.save()
        self._changed()

    def load(self) -> None:
        """Read the data file, fixing current values from each history."""
        try:
            document = _read_document(self._path)
        except OSError:
            document = None
        if isinstance(document, dict) and isinstance(document.get("exercises"), dict):
            self._data = document
            self._normalise()
        else:
            self._load_empty()
        self.save()
        self._changed()

    def _normalise(self) -> None:
        exercises = self._exercises()
        for name, exercise in list(exercises.items()):
            if not isinstance(exercise, dict):
                exercise = {}
            history = _sorted_history(exercise.get("history"))
            if history:
                _apply_latest(exercise, history[-1])
                exercise["history"] = history
            else:
                _reset_values(exercise)
            exercises[name] = exercise
        self._data["exercises"] = exercises

    def _load_empty(self) -> None:
        self._data = {"exercises": {}}
        self.save()
        self._changed()

    def save(self) -> None:
        """Write the document to the data file; failures are logged."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._data, indent=4), encoding="utf-8")
        except OSError as error:
            _log.warning("could not save %s: %s", self._path, error)

    def add_exercise(
        self, name: str, muscle_group: str, value: float, unit: str, sets: int, reps: int
    ) -> None:
        """Add or replace an exercise; all-zero values start it with no history."""
        stamp = _format_timestamp(self._clock())
        only_name = value == 0 and sets == 0 and reps == 0
        history = (
            []
            if only_name
            else [
                {
                    "timestamp": stamp,
                    "value": float(value),
                    "unit": unit,
                    "sets": sets,
                    "repetitions": reps,
                }
            ]
        )
        exercises = self._exercises()
        exercises[name] = {
            "muscleGroup": muscle_group,
            "currentValue": float(value),
            "unit": unit,
            "sets": sets,
            "repetitions": reps,
            "lastUpdated": stamp,
            "history": history,
        }
        self._store(exercises)

    def add_random_exercises(self, number: int) -> None:
        """Add up to `number` exercises picked from the catalogue."""
        try:
            if self._catalog_path is None:
                raise OSError("no exercise catalogue configured")
            with open(self._catalog_path, encoding="utf-8") as handle:
                available = parse_exercise_list(handle)
        except (OSError, ValueError) as error:
            _log.warning("could not add random exercises: %s", error)
            self._notify("Error", "Error", "Error añadiendo ejercicios", "Error adding exercises")
            return

        count = max(0, min(number, len(available)))
        picked = sorted(self._rng.sample(range(len(available)), count))
        exercises = self._exercises()
        added = 0
        for position in picked:
            name, group = available[position]
            if name not in exercises:
                exercises[name] = empty_exercise(group)
                added += 1

        if added:
            self._store(exercises)
            self._notify(
                "Éxito",
                "Success",
                f"Añadidos {added} nuevos ejercicios",
                f"{added} new exercises added",
            )
        else:
            self._notify(
                "Info",
                "Info",
                "Todos los ejercicios aleatorios ya existían",
                "All the random exercises already existed",
            )

    def update_exercise(
        self, name: str, value: float, unit: str, sets: int, reps: int
    ) -> None:
        """Log a new record for an exercise; unknown names are ignored."""
        exercise = self._exercise(name)
        if exercise is None:
            return
        history = exercise.get("history")
        history = list(history) if isinstance(history, list) else []
        history.append(
            {
                "timestamp": _format_timestamp(self._clock()),
                "value": float(value),
                "unit": unit,
                "sets": sets,
                "repetitions": reps,
            }
        )
        history = _sorted_history(history)
        _apply_latest(exercise, history[-1])
        exercise["history"] = history
        exercises = self._exercises()
        exercises[name] = exercise
        self._store(exercises)

    def remove_exercise(self, name: str) -> None:
        exercises = self._exercises()
        if name not in exercises:
            _log.debug("exercise %s does not exist", name)
            return
        del exercises[name]
        self._store(exercises)

    def remove_history_entry(self, exercise_name: str, index: int) -> None:
        """Remove the entry at a position of the date-sorted history."""
        exercise = self._exercise(exercise_name)
        if exercise is None:
            return
        history = _sorted_history(exercise.get("history"))
        if not 0 <= index < len(history):
            return
        removed_stamp = _to_str(history.pop(index).get("timestamp"))
        exercise["history"] = history

        if not history:
            _reset_values(exercise)
        else:
            latest = history[-1]
            newest_stamp = _to_str(latest.get("timestamp"))
            last_updated = _to_str(exercise.get("lastUpdated"))
            if removed_stamp in (last_updated, newest_stamp):
                _apply_latest(exercise, latest)

        exercises = self._exercises()
        exercises[exercise_name] = exercise
        self._store(exercises)

    def reload_sample_data(self) -> None:
        """Replace everything with the starter set of exercises."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        except OSError as error:
            _log.warning("could not remove %s: %s", self._path, error)
        self._data = sample_data(self._clock())
        self.save()
        self._changed()

    def delete_all_exercises(self) -> None:
        """Delete the data file and start with no exercises."""
        if self._path.exists():
            try:
                self._path.unlink()
            except OSError:
                self._notify(
                    "Error en el borrado",
                    "Delete error",
                    "Los datos no se han podido eliminar",
                    "The data could not be deleted",
                    "error",
                )
                return
            self._notify(
                "Datos borrados",
                "Data deleted",
                "Todos los datos se han borrado correctamente",
                "All data has been successfully deleted",
            )
        self._load_empty()

    def _field(self, exercise_name: str, key: str, convert: Callable[[Any], Any], missing: Any) -> Any:
        exercise = self._exercise(exercise_name)
        if exercise is None:
            return missing
        return convert(exercise.get(key))

    def muscle_group(self, exercise_name: str) -> str:
        return self._field(exercise_name, "muscleGroup", _to_str, "")

    def current_value(self, exercise_name: str) -> float:
        return self._field(exercise_name, "currentValue", _to_float, 0.0)

    def unit(self, exercise_name: str) -> str:
        return self._field(exercise_name, "unit", _to_str, "")

    def repetitions(self, exercise_name: str) -> int:
        return self._field(exercise_name, "repetitions", _to_int, 0)

    def sets(self, exercise_name: str) -> int:
        return self._field(exercise_name, "sets", _to_int, 0)

    def has_history(self, exercise_name: str) -> bool:
        exercise = self._exercise(exercise_name)
        if exercise is None:
            return False
        history = exercise.get("history")
        return isinstance(history, list) and bool(history)

    def history_detailed(self, exercise_name: str) -> list[dict[str, Any]]:
        """The stored history as date, weight, unit, sets and reps."""
        exercise = self._exercise(exercise_name)
        if exercise is None:
            return []
        history = exercise.get("history")
        return [
            {
                "date": _to_str(entry.get("timestamp")),
                "weight": _to_float(entry.get("value")),
                "unit": _to_str(entry.get("unit")),
                "sets": _to_int(entry.get("sets")),
                "reps": _to_int(entry.get("repetitions")),
            }
            for entry in (
                item if isinstance(item, dict) else {}
                for item in (history if isinstance(history, list) else [])
            )
        ]

    def export_data(self, file_path: str | os.PathLike[str]) -> None:
        try:
            with open(file_path, "w", encoding="utf-8") as handle:
                handle.write(json.dumps(self._data, indent=4))
        except OSError as error:
            _log.warning("could not export data: %s", error)
            self._notify("Error", "Error", "No se pudo guardar el archivo", "Could not save the file")
            return
        self._notify(
            "Datos exportados",
            "Data exported",
            f"Los datos se han guardado en:\n{file_path}",
            f"The data has been saved in:\n{file_path}",
        )

    def import_data(self, file_path: str | os.PathLike[str]) -> None:
        """Replace the document with one read from a path or file URL."""
        try:
            document = _read_document(_local_path(file_path))
        except OSError:
            self._notify("Error", "Error", "No se pudo leer el archivo", "Could not read the file")
            return
        if not isinstance(document, dict):
            self._notify(
                "Error",
                "Error",
                "El archivo no contiene datos válidos",
                "The file does not contain valid data",
            )
            return
        self._data = document
        self.save()
        self._changed()
        self._notify(
            "Datos importados",
            "Data imported",
            "Los datos se han importado correctamente",
            "The data has been imported successfully",
        )
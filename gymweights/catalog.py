"""The catalogue of known exercises and their muscle groups."""

from __future__ import annotations

import os
from typing import Iterable


def parse_exercise_list(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Read "name | group" lines, skipping blank and malformed ones."""
    pairs = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        parts = line.split(" | ")
        if len(parts) != 2:
            continue
        name, group = (part.strip() for part in parts)
        if name and group:
            pairs.append((name, group))
    return pairs


class ExerciseProvider:
    """Exercise names and groups, with case-insensitive duplicates dropped."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._exercises: list[dict[str, str]] = []
        for line in lines:
            parts = line.strip().split("|")
            if len(parts) != 2:
                continue
            name, group = (part.strip() for part in parts)
            if not self.exists(name, group):
                self._exercises.append({"name": name, "group": group})

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> ExerciseProvider:
        with open(path, encoding="utf-8") as handle:
            return cls(handle)

    def exercises(self) -> list[dict[str, str]]:
        return [dict(entry) for entry in self._exercises]

    def exists(self, name: str, group: str) -> bool:
        name, group = name.casefold(), group.casefold()
        return any(
            entry["name"].casefold() == name and entry["group"].casefold() == group
            for entry in self._exercises
        )
# gymweights

Keep a record of your gym exercises: the muscle group each one trains, the
weight you currently lift, sets and repetitions, and a dated history of every
update. All data lives in one JSON file.

## Installation

```
pip install .
```

## Storing your exercises

`gymweights.datacenter.DataCenter` owns the JSON file. It loads the file when
it is created and rewrites it after every change. If the file is missing, is
not valid JSON, or has no `"exercises"` object, it starts with an empty set of
exercises. On loading, each exercise's current value, unit, sets, repetitions
and last-updated time are taken from the newest entry of its history (or
reset when it has none), and the history is sorted oldest first.

```python
from gymweights.datacenter import DataCenter

center = DataCenter("exercises.json", "exerciseList.txt")

center.add_exercise("Squat", "Legs", 100.0, "kg", 3, 8)
center.update_exercise("Squat", 102.5, "kg", 3, 8)

center.current_value("Squat")     # 102.5
center.history_detailed("Squat")  # list of {"date", "weight", "unit", "sets", "reps"}
center.remove_history_entry("Squat", 0)
```

When no path is given, the data file is `gymweights/exercises.json` under
`$XDG_DATA_HOME`, or under `~/.local/share` if that is not set.

Adding an exercise with value, sets and repetitions all zero records it with
no history. Adding one whose name already exists replaces it. Updating an
unknown exercise does nothing.

History is kept oldest first. `remove_history_entry(name, index)` counts
positions in that order. When the removed entry was the newest one, the
exercise's current value, unit, sets and repetitions fall back to the entry
that is now the newest; when the last entry is removed, they are reset to
zero and unit `"-"`.

Reading single fields: `muscle_group`, `current_value`, `unit`,
`repetitions`, `sets` and `has_history`, each taking an exercise name and
giving an empty or zero value for unknown names. `data()` returns a copy of
the whole document.

Other operations:

- `add_random_exercises(number)` picks up to `number` exercises at random
  from the catalogue file and adds those you do not have yet.
- `reload_sample_data()` replaces everything with a starter set of empty
  exercises grouped by muscle.
- `delete_all_exercises()` removes the data file and starts empty.
- `export_data(path)` writes the data to another JSON file;
  `import_data(path)` replaces the data with a JSON file given as a path or a
  `file:` URL.

Pass `on_change` and `on_message` callbacks to be told when the data changes
and to receive user-facing `Message` notices (title, message and type, in
Spanish and English). Failures to read, write or delete files are reported
through `on_message` or logged, not raised. `clock` and `rng` may be given to
fix the time stamps and the random choices.

## The exercise catalogue

The catalogue is a text file with one exercise per line:

```
Bench Press | Chest
Squat | Legs
```

```python
from gymweights.catalog import ExerciseProvider, parse_exercise_list

with open("exerciseList.txt", encoding="utf-8") as handle:
    pairs = parse_exercise_list(handle)   # [("Bench Press", "Chest"), ...]

provider = ExerciseProvider.from_file("exerciseList.txt")
provider.exercises()                      # [{"name": "Bench Press", "group": "Chest"}, ...]
provider.exists("bench press", "CHEST")   # True, the comparison ignores case
```

`parse_exercise_list` skips blank lines and lines that do not split into a
non-empty name and group on `" | "`. `ExerciseProvider` drops entries whose
name and group repeat an earlier one, ignoring case.

## In-memory list model

`gymweights.records.ExerciseModel` holds `Exercise` and `HistoryRecord`
objects addressed by row. Fill it from the same JSON layout with
`load_from_json` (exercises ordered by name), query it by row and `Role` with
`data` (which gives `None` for an unknown row or role), change it with
`add_exercise`, `update_exercise` and `remove_exercise`, and write it back
with `to_json`. `update_exercise` moves the current values into the history,
which the model keeps newest first.

## Sample data

`gymweights.samples` builds ready-made documents: `sample_data(now)` gives
empty exercises grouped by muscle, `demo_data(now)` gives exercises with a
generated, rising history, and `empty_exercise(group)` gives a single entry
with no values.

## What it does not do

This package is a library only. It has no graphical screens, no charts and no
command-line program; it stores, reads and reshapes the data that such an
interface would show.
import json
import random
from datetime import datetime

import pytest

from gymweights.datacenter import DataCenter, Message
from gymweights.samples import sample_data


class Clock:
    def __init__(self, moment):
        self.moment = moment

    def __call__(self):
        return self.moment


START = datetime(2024, 5, 1, 10, 0, 0)


@pytest.fixture
def messages():
    return []


@pytest.fixture
def clock():
    return Clock(START)


@pytest.fixture
def catalog(tmp_path):
    path = tmp_path / "exerciseList.txt"
    path.write_text(
        "Squat | Legs\nBench Press | Chest\n\nbroken line\nPlank | Core\n",
        encoding="utf-8",
    )
    return path


def make_center(tmp_path, messages, clock, catalog_path=None):
    return DataCenter(
        path=tmp_path / "data" / "exercises.json",
        catalog_path=catalog_path,
        on_message=messages.append,
        clock=clock,
        rng=random.Random(0),
    )


def record(timestamp, value, unit="kg", sets=3, reps=8):
    return {"timestamp": timestamp, "value": value, "unit": unit, "sets": sets, "repetitions": reps}


def test_missing_file_gives_empty_document_and_writes_it(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    assert center.data() == {"exercises": {}}
    assert json.loads(center.path.read_text(encoding="utf-8")) == {"exercises": {}}


def test_invalid_file_gives_empty_document(tmp_path, messages, clock):
    path = tmp_path / "data" / "exercises.json"
    path.parent.mkdir()
    path.write_text("not json", encoding="utf-8")
    center = make_center(tmp_path, messages, clock)
    assert center.data() == {"exercises": {}}


def test_load_sorts_history_and_takes_latest_values(tmp_path, messages, clock):
    path = tmp_path / "data" / "exercises.json"
    path.parent.mkdir()
    doc = {
        "exercises": {
            "Squat": {
                "muscleGroup": "Legs",
                "history": [
                    record("2024-03-02T09:00:00", 110, "lb", 4, 5),
                    record("2024-03-01T09:00:00", 100),
                ],
            },
            "Plank": {"muscleGroup": "Core", "currentValue": 7, "history": []},
        }
    }
    path.write_text(json.dumps(doc), encoding="utf-8")
    center = make_center(tmp_path, messages, clock)

    dates = [entry["date"] for entry in center.history_detailed("Squat")]
    assert dates == sorted(dates)
    assert center.current_value("Squat") == 110.0
    assert center.unit("Squat") == "lb"
    assert center.sets("Squat") == 4
    assert center.repetitions("Squat") == 5
    assert center.data()["exercises"]["Squat"]["lastUpdated"] == "2024-03-02T09:00:00"
    assert center.current_value("Plank") == 0.0
    assert center.unit("Plank") == "-"
    assert center.muscle_group("Plank") == "Core"


def test_add_exercise_with_values_records_history(tmp_path, messages, clock):
    changes = []
    center = DataCenter(
        path=tmp_path / "exercises.json", on_change=lambda: changes.append(1), clock=clock
    )
    before = len(changes)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    assert len(changes) == before + 1
    assert center.has_history("Row")
    assert center.history_detailed("Row") == [
        {"date": "2024-05-01T10:00:00", "weight": 40.0, "unit": "kg", "sets": 3, "reps": 10}
    ]
    reloaded = DataCenter(path=tmp_path / "exercises.json", clock=clock)
    assert reloaded.current_value("Row") == 40.0


def test_add_exercise_with_zeros_has_no_history(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 0, "kg", 0, 0)
    assert not center.has_history("Row")
    assert center.muscle_group("Row") == "Back"


def test_update_exercise_appends_and_updates(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    clock.moment = datetime(2024, 5, 2, 10, 0, 0)
    center.update_exercise("Row", 45, "lb", 4, 8)
    assert len(center.history_detailed("Row")) == 2
    assert center.current_value("Row") == 45.0
    assert center.unit("Row") == "lb"
    assert center.sets("Row") == 4
    assert center.repetitions("Row") == 8


def test_update_with_older_timestamp_keeps_latest_current(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    clock.moment = datetime(2024, 4, 1, 10, 0, 0)
    center.update_exercise("Row", 20, "kg", 3, 10)
    history = center.history_detailed("Row")
    assert [entry["weight"] for entry in history] == [20.0, 40.0]
    assert center.current_value("Row") == 40.0


def test_update_unknown_exercise_changes_nothing(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.update_exercise("Ghost", 20, "kg", 3, 10)
    assert center.data() == {"exercises": {}}


def test_remove_exercise(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    center.remove_exercise("Row")
    center.remove_exercise("Ghost")
    assert "Row" not in center.data()["exercises"]


def test_remove_latest_history_entry_updates_current(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    clock.moment = datetime(2024, 5, 2, 10, 0, 0)
    center.update_exercise("Row", 45, "lb", 4, 8)
    center.remove_history_entry("Row", 1)
    assert center.current_value("Row") == 40.0
    assert center.unit("Row") == "kg"
    assert len(center.history_detailed("Row")) == 1


def test_remove_older_history_entry_keeps_current(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    clock.moment = datetime(2024, 5, 2, 10, 0, 0)
    center.update_exercise("Row", 45, "lb", 4, 8)
    center.remove_history_entry("Row", 0)
    assert center.current_value("Row") == 45.0
    assert [entry["weight"] for entry in center.history_detailed("Row")] == [45.0]


def test_remove_only_entry_resets_values(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    center.remove_history_entry("Row", 0)
    exercise = center.data()["exercises"]["Row"]
    assert exercise["unit"] == "-"
    assert exercise["lastUpdated"] == ""
    assert center.current_value("Row") == 0.0
    assert not center.has_history("Row")


@pytest.mark.parametrize("index", [-1, 1, 5])
def test_remove_history_entry_bad_index_ignored(tmp_path, messages, clock, index):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    before = center.data()
    center.remove_history_entry("Row", index)
    assert center.data() == before


def test_getters_for_unknown_exercise(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    assert center.muscle_group("Ghost") == ""
    assert center.current_value("Ghost") == 0.0
    assert center.unit("Ghost") == ""
    assert center.repetitions("Ghost") == 0
    assert center.sets("Ghost") == 0
    assert center.has_history("Ghost") is False
    assert center.history_detailed("Ghost") == []


def test_add_random_exercises_adds_requested_number(tmp_path, messages, clock, catalog):
    center = make_center(tmp_path, messages, clock, catalog)
    center.add_random_exercises(2)
    names = set(center.data()["exercises"])
    assert len(names) == 2
    assert names <= {"Squat", "Bench Press", "Plank"}
    assert messages[-1] == Message("Éxito", "Success", "Añadidos 2 nuevos ejercicios", "2 new exercises added")


def test_add_random_exercises_all_existing(tmp_path, messages, clock, catalog):
    center = make_center(tmp_path, messages, clock, catalog)
    center.add_random_exercises(10)
    assert set(center.data()["exercises"]) == {"Squat", "Bench Press", "Plank"}
    assert center.muscle_group("Plank") == "Core"
    center.add_random_exercises(10)
    assert messages[-1].english_message == "All the random exercises already existed"


def test_add_random_exercises_without_catalog_reports_error(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock, tmp_path / "missing.txt")
    center.add_random_exercises(3)
    assert messages[-1] == Message("Error", "Error", "Error añadiendo ejercicios", "Error adding exercises")
    assert center.data() == {"exercises": {}}


def test_reload_sample_data(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Custom", "Back", 40, "kg", 3, 10)
    center.reload_sample_data()
    data = center.data()
    assert data == sample_data(START)
    assert data["appVersion"] == "1.0.0"
    assert json.loads(center.path.read_text(encoding="utf-8")) == data


def test_delete_all_exercises(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    center.delete_all_exercises()
    assert center.data() == {"exercises": {}}
    assert messages[-1].english_title == "Data deleted"
    assert messages[-1].message_type == "info"


def test_export_and_import_round_trip(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.add_exercise("Row", "Back", 40, "kg", 3, 10)
    target = tmp_path / "backup.json"
    center.export_data(str(target))
    assert messages[-1].english_title == "Data exported"
    exported = center.data()

    other = DataCenter(path=tmp_path / "other.json", on_message=messages.append, clock=clock)
    other.import_data(str(target))
    assert other.data() == exported
    assert messages[-1].english_message == "The data has been imported successfully"


def test_import_accepts_file_url(tmp_path, messages, clock):
    source = tmp_path / "in.json"
    source.write_text(json.dumps({"exercises": {"Row": {"muscleGroup": "Back"}}}), encoding="utf-8")
    center = make_center(tmp_path, messages, clock)
    center.import_data(source.as_uri())
    assert center.muscle_group("Row") == "Back"


def test_import_invalid_and_missing_files(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    center.import_data(str(bad))
    assert messages[-1].english_message == "The file does not contain valid data"
    center.import_data(str(tmp_path / "nope.json"))
    assert messages[-1].english_message == "Could not read the file"
    assert center.data() == {"exercises": {}}


def test_export_to_unwritable_path_reports_error(tmp_path, messages, clock):
    center = make_center(tmp_path, messages, clock)
    center.export_data(str(tmp_path / "no_dir" / "out.json"))
    assert messages[-1] == Message("Error", "Error", "No se pudo guardar el archivo", "Could not save the file")
"""Tests for output planning and the workout export service."""

import json
from pathlib import Path

import pytest

from garmin_workouts.workouts.export_service import (
    OutputMode,
    WorkoutExportService,
    determine_output,
    slugify,
)
from garmin_workouts.workouts.exporters.fit_exporter import FitWorkoutExporter
from garmin_workouts.workouts.exporters.json_exporter import JsonWorkoutExporter


class StubFitExporter(FitWorkoutExporter):
    """Skips fit_tool so export planning can be tested on its own."""

    def build(self, description):
        return b"FIT:" + description.name.encode("utf-8")


@pytest.fixture
def service():
    return WorkoutExportService(fit_exporter=StubFitExporter(verify=False), json_exporter=JsonWorkoutExporter())


def test_slugify():
    assert slugify("HIIT Session!") == "hiit-session-"
    assert slugify("Easy_Run-2") == "easy_run-2"
    assert slugify("Tempo 5×1km") == "tempo-5-1km"


def test_no_output_writes_both_with_slug():
    plan = determine_output(None, "HIIT Session!")
    assert plan.mode == OutputMode.BOTH
    assert plan.fit_path == Path("hiit-session-.fit")
    assert plan.json_path == Path("hiit-session-.json")


def test_directory_output_writes_both_inside(tmp_path):
    plan = determine_output(tmp_path, "Easy Run")
    assert plan.mode == OutputMode.BOTH
    assert plan.fit_path == tmp_path / "easy-run.fit"
    assert plan.json_path == tmp_path / "easy-run.json"


@pytest.mark.parametrize("path", ["out/workout.fit", "out/WORKOUT.FIT"])
def test_fit_extension_selects_fit_only(path):
    plan = determine_output(path, "Easy Run")
    assert plan.mode == OutputMode.FIT
    assert plan.fit_path == Path(path)
    assert plan.json_path is None


@pytest.mark.parametrize("path", ["out/workout.json", "out/Workout.Json"])
def test_json_extension_selects_json_only(path):
    plan = determine_output(path, "Easy Run")
    assert plan.mode == OutputMode.JSON
    assert plan.fit_path is None
    assert plan.json_path == Path(path)


def test_other_path_appends_both_extensions(tmp_path):
    base = tmp_path / "plans" / "tuesday"
    plan = determine_output(base, "Easy Run")
    assert plan.mode == OutputMode.BOTH
    assert plan.fit_path == Path(f"{base}.fit")
    assert plan.json_path == Path(f"{base}.json")


def test_export_without_output_writes_slug_files(service, easy_run, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = service.export(easy_run)

    assert result.plan.mode == OutputMode.BOTH
    assert [f.kind for f in result.files] == ["FIT", "JSON"]
    assert (tmp_path / "easy-run.fit").read_bytes() == b"FIT:Easy Run"

    written = json.loads((tmp_path / "easy-run.json").read_text(encoding="utf-8"))
    assert written["workoutName"] == "Easy Run"
    assert result.json_text == (tmp_path / "easy-run.json").read_text(encoding="utf-8")
    assert result.validation is not None and result.validation.valid


def test_json_is_indented(service, easy_run, tmp_path):
    result = service.export(easy_run, tmp_path / "run.json")
    assert result.json_text.startswith('{\n  "workoutName": "Easy Run"')


def test_fit_only_export(service, easy_run, tmp_path):
    result = service.export(easy_run, tmp_path / "run.fit")

    assert result.plan.mode == OutputMode.FIT
    assert [f.path for f in result.files] == [tmp_path / "run.fit"]
    assert result.json_text is None
    assert result.validation is None
    assert not (tmp_path / "run.json").exists()


def test_invalid_json_is_still_written(service, open_ride, tmp_path):
    """Validation findings are reported but never stop the export."""
    result = service.export(open_ride, tmp_path / "ride.json")

    assert (tmp_path / "ride.json").exists()
    assert result.validation is not None
    assert not result.validation.valid
    assert len(result.validation.errors) == 2
    assert result.files[0].size == len(result.json_text.encode("utf-8"))


def test_export_creates_parent_directories(service, easy_run, tmp_path):
    result = service.export(easy_run, tmp_path / "nested" / "dir" / "run.json")
    assert result.files[0].path.exists()

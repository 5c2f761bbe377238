"""Tests for FIT encoding and Garmin FIT SDK verification."""

import pytest

from garmin_workouts.workouts.exporters import fit_exporter
from garmin_workouts.workouts.exporters.fit_exporter import (
    FitVerification,
    FitWorkoutExporter,
    encode_records,
    verify_fit_bytes,
    verify_fit_file,
)
from garmin_workouts.workouts.intake import build_description
from garmin_workouts.workouts.records import build_workout_records
from garmin_workouts.workouts.tables import valid_sport_keys


def test_encoded_workout_decodes(hiit_session, fixed_clock):
    data = encode_records(build_workout_records(hiit_session, clock=fixed_clock))
    verification = verify_fit_bytes(data)

    assert verification.is_fit
    assert verification.integrity
    assert verification.errors == ()
    assert verification.size == len(data)
    assert verification.message_counts.get("workout_step_mesgs") == len(hiit_session.steps)
    assert verification.message_counts.get("file_id_mesgs") == 1


def test_exporter_records_verification(easy_run, fixed_clock):
    exporter = FitWorkoutExporter(clock=fixed_clock)
    data = exporter.build(easy_run)

    assert data
    assert exporter.last_verification is not None
    assert exporter.last_verification.ok


def test_exporter_without_verification(open_ride, fixed_clock):
    exporter = FitWorkoutExporter(clock=fixed_clock, verify=False)
    assert exporter.build(open_ride)
    assert exporter.last_verification is None


def test_every_sport_encodes(fixed_clock):
    for sport in valid_sport_keys():
        description = build_description(name=sport, sport=sport, steps=[{"name": "Go", "duration": 60}])
        assert verify_fit_bytes(encode_records(build_workout_records(description, clock=fixed_clock))).is_fit


def test_same_clock_gives_same_bytes(easy_run, fixed_clock):
    records = build_workout_records(easy_run, clock=fixed_clock)
    assert encode_records(records) == encode_records(build_workout_records(easy_run, clock=fixed_clock))


def test_non_fit_bytes_are_reported():
    verification = verify_fit_bytes(b'{"workoutName": "Easy Run"}')
    assert not verification.is_fit
    assert not verification.ok
    assert verification.errors == ("Not a FIT file",)


def test_verify_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="File not found"):
        verify_fit_file(tmp_path / "missing.fit")


def test_verify_file_from_disk(easy_run, fixed_clock, tmp_path):
    path = tmp_path / "easy.fit"
    path.write_bytes(FitWorkoutExporter(clock=fixed_clock, verify=False).build(easy_run))
    assert verify_fit_file(path).ok


def test_decoded_messages_match_the_workout(easy_run, fixed_clock):
    """Messages are counted even after the integrity check has read the file."""
    verification = verify_fit_bytes(encode_records(build_workout_records(easy_run, clock=fixed_clock)))
    assert verification.message_counts == {"file_id_mesgs": 1, "workout_mesgs": 1, "workout_step_mesgs": 1}


def test_verification_without_messages_is_not_ok():
    assert not FitVerification(size=14, is_fit=True, integrity=True).ok


def test_failed_verification_clears_previous_result(easy_run, fixed_clock, monkeypatch):
    exporter = FitWorkoutExporter(clock=fixed_clock)
    exporter.build(easy_run)
    assert exporter.last_verification is not None

    def broken_decode(data):
        raise RuntimeError("decoder crashed")

    monkeypatch.setattr(fit_exporter, "verify_fit_bytes", broken_decode)
    assert exporter.build(easy_run)
    assert exporter.last_verification is None

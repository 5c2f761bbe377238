"""Tests for the Garmin Connect import document builder."""

from garmin_workouts.workouts.interchange import build_interchange_document
from garmin_workouts.workouts.intake import build_description
from garmin_workouts.workouts.validation import validate_interchange_document


def test_easy_run_document(easy_run):
    document = build_interchange_document(easy_run)

    assert document["workoutName"] == "Easy Run"
    assert document["sportType"] == {"sportTypeId": 1, "sportTypeKey": "running"}
    assert len(document["workoutSegments"]) == 1

    segment = document["workoutSegments"][0]
    assert segment["segmentOrder"] == 1
    assert segment["workoutSteps"] == [
        {
            "stepId": None,
            "stepName": "Run",
            "stepType": {"stepTypeId": 3, "stepTypeKey": "time"},
            "duration": {"type": "time", "value": 1800},
            "intensity": {"intensityId": 1, "intensityKey": "active"},
            "targetType": {"stepTargetId": 3, "stepTargetKey": "speed"},
        }
    ]


def test_easy_run_document_is_valid(easy_run):
    report = validate_interchange_document(build_interchange_document(easy_run))
    assert report.valid
    assert report.errors == ()


def test_steps_keep_input_order(hiit_session):
    steps = build_interchange_document(hiit_session)["workoutSegments"][0]["workoutSteps"]

    assert [s["stepName"] for s in steps] == [s.name for s in hiit_session.steps]
    assert [s["intensity"]["intensityKey"] for s in steps] == ["warmup", "active", "rest", "active", "rest", "cooldown"]
    assert all(s["targetType"] == {"stepTargetId": 2, "stepTargetKey": "heartRate"} for s in steps)
    assert all(s["stepId"] is None for s in steps)


def test_step_without_target_omits_target_type(open_ride):
    steps = build_interchange_document(open_ride)["workoutSegments"][0]["workoutSteps"]
    assert all("targetType" not in s for s in steps)


def test_no_target_document_fails_validation(open_ride):
    """The validator requires targetType even though the builder omits it."""
    report = validate_interchange_document(build_interchange_document(open_ride))

    assert not report.valid
    assert report.errors == (
        "Segment 0, Step 0: Missing required field: targetType (object)",
        "Segment 0, Step 1: Missing required field: targetType (object)",
    )


def test_distance_step_type_is_honored(open_ride):
    ride = build_interchange_document(open_ride)["workoutSegments"][0]["workoutSteps"][1]
    assert ride["stepType"] == {"stepTypeId": 1, "stepTypeKey": "distance"}
    assert ride["duration"] == {"type": "time", "value": 20000}


def test_mixed_case_sport_matches_lowercase():
    mixed = build_description(name="Run", steps=[{"name": "Run", "duration": 60}], sport="Running")
    lower = build_description(name="Run", steps=[{"name": "Run", "duration": 60}], sport="running")
    assert build_interchange_document(mixed) == build_interchange_document(lower)


def test_unknown_target_type_emits_no_target_pair():
    description = build_description(name="Feel", steps=[{"name": "Run", "duration": 60, "targetType": "rpe"}])
    step = build_interchange_document(description)["workoutSegments"][0]["workoutSteps"][0]
    assert step["targetType"] == {"stepTargetId": 0, "stepTargetKey": "noTarget"}


def test_build_is_idempotent(hiit_session):
    assert build_interchange_document(hiit_session) == build_interchange_document(hiit_session)

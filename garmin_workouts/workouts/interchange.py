"""Garmin Connect import document builder.

Produces the JSON shape accepted by the share-your-garmin-workout importer:
a single segment whose steps mirror the description's steps in order.
"""

from __future__ import annotations

from typing import Any

from garmin_workouts.workouts.canonical import StepDescription, WorkoutDescription
from garmin_workouts.workouts.tables import duration_json, intensity_json, sport_json, target_json

SEGMENT_ORDER = 1


def _build_step(step: StepDescription) -> dict[str, Any]:
    step_obj: dict[str, Any] = {
        "stepId": None,  # assigned by Garmin Connect on import
        "stepName": step.name,
        "stepType": duration_json(step.duration_type),
        "duration": {
            "type": "time",
            "value": step.duration,
        },
        "intensity": intensity_json(step.intensity),
    }

    # Omitted entirely when the step has no target
    if step.has_target:
        step_obj["targetType"] = target_json(step.target_type)

    return step_obj


def build_interchange_document(description: WorkoutDescription) -> dict[str, Any]:
    """Build the Garmin Connect import document for a workout.

    Args:
        description: Validated workout description

    Returns:
        Document dict with workoutName, sportType and one workout segment
    """
    return {
        "workoutName": description.name,
        "sportType": sport_json(description.sport.value),
        "workoutSegments": [
            {
                "segmentOrder": SEGMENT_ORDER,
                "workoutSteps": [_build_step(step) for step in description.steps],
            }
        ],
    }

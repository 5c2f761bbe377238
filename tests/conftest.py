"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from datetime import UTC, datetime

import pytest

from garmin_workouts.workouts.canonical import WorkoutDescription
from garmin_workouts.workouts.intake import build_description

FIXED_TIME = datetime(2026, 1, 15, 7, 30, 0, tzinfo=UTC)


@pytest.fixture
def fixed_clock():
    """Clock returning a constant timestamp so FIT records are reproducible."""
    return lambda: FIXED_TIME


@pytest.fixture
def easy_run() -> WorkoutDescription:
    """Single-step 30 minute run with a speed target."""
    return build_description(
        name="Easy Run",
        steps=[{"name": "Run", "duration": 1800, "intensity": "active", "targetType": "speed", "targetMin": 8, "targetMax": 10}],
        sport="running",
    )


@pytest.fixture
def hiit_session() -> WorkoutDescription:
    """Interval session mixing every intensity, all with heart rate targets."""
    return build_description(
        name="HIIT Session",
        sport="running",
        sub_sport="trail",
        steps=[
            {"name": "Warm up", "duration": 300, "intensity": "warmup", "targetType": "heartRate", "targetMin": 110, "targetMax": 130},
            {"name": "Sprint", "duration": 60, "intensity": "active", "targetType": "heartRate", "targetMin": 160, "targetMax": 175},
            {"name": "Rest", "duration": 60, "intensity": "rest", "targetType": "heartRate", "targetMin": 100, "targetMax": 120},
            {"name": "Sprint", "duration": 60, "intensity": "active", "targetType": "heartRate", "targetMin": 160, "targetMax": 175},
            {"name": "Rest", "duration": 60, "intensity": "rest", "targetType": "heartRate", "targetMin": 100, "targetMax": 120},
            {"name": "Cool down", "duration": 300, "intensity": "cooldown", "targetType": "heartRate", "targetMin": 110, "targetMax": 130},
        ],
    )


@pytest.fixture
def open_ride() -> WorkoutDescription:
    """Cycling workout where no step declares a target."""
    return build_description(
        name="Open Ride",
        sport="cycling",
        steps=[
            {"name": "Spin", "duration": 600, "intensity": "warmup"},
            {"name": "Ride", "duration": 20000, "durationType": "distance"},
        ],
    )

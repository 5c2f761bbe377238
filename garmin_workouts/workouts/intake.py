"""Intake validation for raw workout requests.

Turns loosely-typed request fields (a workout name, a steps array given as
JSON text or as parsed data, a sport key) into a WorkoutDescription. Every
failure is a WorkoutIntakeError carrying a single descriptive message; nothing
is built or written when intake fails.
"""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from pydantic import ValidationError

from garmin_workouts.workouts.canonical import StepDescription, WorkoutDescription, WorkoutSport
from garmin_workouts.workouts.tables import parse_sport, valid_sport_keys


class WorkoutIntakeError(ValueError):
    """Raised when a workout request cannot be turned into a description."""


def validate_sport(sport: str) -> WorkoutSport:
    """Resolve a sport key case-insensitively.

    Raises:
        WorkoutIntakeError: If the key is not one of the supported sports
    """
    resolved = parse_sport(sport)
    if resolved is None:
        raise WorkoutIntakeError(f'Invalid sport: "{sport}". Valid sports: {", ".join(valid_sport_keys())}')
    return resolved


def parse_steps(raw_steps: str | list[Any] | None) -> list[dict[str, Any]]:
    """Parse the steps argument into a non-empty list of step objects.

    Args:
        raw_steps: JSON array text or an already parsed list

    Returns:
        List of raw step dictionaries

    Raises:
        WorkoutIntakeError: If steps are missing, unparseable, empty or not objects
    """
    if raw_steps is None or raw_steps == "":
        raise WorkoutIntakeError("--steps is required")

    steps: Any = raw_steps
    if isinstance(raw_steps, str):
        try:
            steps = json.loads(raw_steps)
        except json.JSONDecodeError as e:
            raise WorkoutIntakeError("Invalid JSON in --steps argument") from e

    if not isinstance(steps, list) or not steps:
        raise WorkoutIntakeError("--steps must be a non-empty JSON array")

    for idx, step in enumerate(steps):
        if not isinstance(step, dict):
            raise WorkoutIntakeError(f"Step {idx + 1}: must be a JSON object")

    return steps


def _build_step(raw: dict[str, Any], index: int) -> StepDescription:
    try:
        return StepDescription.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "step"
        raise WorkoutIntakeError(f"Step {index + 1}: invalid {field}: {first['msg']}") from e


def build_description(
    name: str | None,
    steps: str | list[Any] | None,
    sport: str = WorkoutSport.RUNNING.value,
    sub_sport: str = "generic",
) -> WorkoutDescription:
    """Validate a raw workout request.

    Args:
        name: Workout name (required, non-empty)
        steps: Steps as JSON array text or parsed list
        sport: Sport key, case-insensitive
        sub_sport: Free-form FIT sub-sport name

    Returns:
        Validated WorkoutDescription

    Raises:
        WorkoutIntakeError: On any missing or malformed field
    """
    if not name or not name.strip():
        raise WorkoutIntakeError("--name is required")

    raw_steps = parse_steps(steps)
    resolved_sport = validate_sport(sport)
    step_models = tuple(_build_step(raw, idx) for idx, raw in enumerate(raw_steps))

    description = WorkoutDescription(
        name=name,
        sport=resolved_sport,
        sub_sport=sub_sport or "generic",
        steps=step_models,
    )
    logger.debug(
        f"Accepted workout request: name={description.name!r}, sport={description.sport.value}, steps={len(description.steps)}"
    )
    return description

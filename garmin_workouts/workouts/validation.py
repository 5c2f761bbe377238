"""Schema validation for Garmin Connect import documents.

The validator does not trust the document builder: it takes any value and
re-derives every required field and type from scratch. All violations are
collected, so a single call reports everything wrong with a document.

Note: targetType is required on every step here, while the document builder
omits it for steps without a target. Documents for no-target steps therefore
fail validation. Both behaviors are intentional until the import contract is
settled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of validating one document."""

    valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _check_pair(
    obj: Any,
    field_name: str,
    id_field: str,
    key_field: str,
    prefix: str,
    errors: list[str],
) -> None:
    """Check an {id, key} object: numeric id, string key."""
    if not obj or not isinstance(obj, dict):
        errors.append(f"{prefix}Missing required field: {field_name} (object)")
        return
    if not _is_number(obj.get(id_field)):
        errors.append(f"{prefix}Missing required field: {field_name}.{id_field} (number)")
    if not isinstance(obj.get(key_field), str):
        errors.append(f"{prefix}Missing required field: {field_name}.{key_field} (string)")


def _validate_step(step: Any, prefix: str, errors: list[str]) -> None:
    if not isinstance(step, dict):
        errors.append(f"{prefix}Step must be an object")
        return

    # stepId may be null; Garmin Connect assigns it on import
    step_id = step.get("stepId")
    if step_id is not None and not _is_number(step_id):
        errors.append(f"{prefix}stepId must be null or number")

    if not _is_non_empty_string(step.get("stepName")):
        errors.append(f"{prefix}Missing required field: stepName (string)")

    _check_pair(step.get("stepType"), "stepType", "stepTypeId", "stepTypeKey", prefix, errors)

    duration = step.get("duration")
    if not duration or not isinstance(duration, dict):
        errors.append(f"{prefix}Missing required field: duration (object)")
    else:
        if not isinstance(duration.get("type"), str):
            errors.append(f"{prefix}Missing required field: duration.type (string)")
        if not _is_number(duration.get("value")):
            errors.append(f"{prefix}Missing required field: duration.value (number)")

    _check_pair(step.get("intensity"), "intensity", "intensityId", "intensityKey", prefix, errors)
    _check_pair(step.get("targetType"), "targetType", "stepTargetId", "stepTargetKey", prefix, errors)


def _validate_segment(segment: Any, seg_index: int, errors: list[str]) -> None:
    prefix = f"Segment {seg_index}: "
    if not isinstance(segment, dict):
        errors.append(f"{prefix}Segment must be an object")
        return

    if not _is_number(segment.get("segmentOrder")):
        errors.append(f"{prefix}Missing required field: segmentOrder (number)")

    steps = segment.get("workoutSteps")
    if not isinstance(steps, list):
        errors.append(f"{prefix}Missing or invalid field: workoutSteps (array)")
        return
    if not steps:
        errors.append(f"{prefix}workoutSteps must not be empty")

    for step_index, step in enumerate(steps):
        _validate_step(step, f"Segment {seg_index}, Step {step_index}: ", errors)


def validate_interchange_document(document: Any) -> ValidationReport:
    """Validate a document against the Garmin Connect import schema.

    Args:
        document: Any value; normally the output of build_interchange_document

    Returns:
        ValidationReport listing every violation found
    """
    errors: list[str] = []

    if not isinstance(document, dict):
        return ValidationReport(valid=False, errors=("Document must be a JSON object",))

    if not _is_non_empty_string(document.get("workoutName")):
        errors.append("Missing or invalid required field: workoutName (string)")

    sport_type = document.get("sportType")
    if not sport_type or not isinstance(sport_type, dict):
        errors.append("Missing or invalid required field: sportType (object)")
    else:
        if not _is_number(sport_type.get("sportTypeId")):
            errors.append("Missing required field: sportType.sportTypeId (number)")
        if not isinstance(sport_type.get("sportTypeKey"), str):
            errors.append("Missing required field: sportType.sportTypeKey (string)")

    segments = document.get("workoutSegments")
    if not isinstance(segments, list):
        errors.append("Missing or invalid required field: workoutSegments (array)")
    else:
        if not segments:
            errors.append("workoutSegments must not be empty")
        for seg_index, segment in enumerate(segments):
            _validate_segment(segment, seg_index, errors)

    return ValidationReport(valid=not errors, errors=tuple(errors))

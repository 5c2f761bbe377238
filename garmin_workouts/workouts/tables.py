"""Enumeration tables for both workout output formats.

Each category has one canonical enum (see canonical.py) and two projections:
the numeric code used by FIT workout records and the {id, key} pair used by
the Garmin Connect import JSON. Every lookup is total: unknown or missing
values resolve to the documented default instead of raising.
"""

from __future__ import annotations

from typing import ClassVar, TypeVar

from garmin_workouts.workouts.canonical import StepDurationType, StepIntensity, StepTargetType, WorkoutSport

E = TypeVar("E", StepIntensity, StepTargetType, StepDurationType, WorkoutSport)

NO_TARGET_CODE = 0
NO_TARGET_JSON: dict[str, int | str] = {"stepTargetId": 0, "stepTargetKey": "noTarget"}


def _parse_enum(enum_cls: type[E], value: str | None) -> E | None:
    """Resolve a raw category string against an enum, ignoring case."""
    if not value:
        return None
    lowered = value.strip().lower()
    for member in enum_cls:
        if member.value.lower() == lowered:
            return member
    return None


def parse_intensity(value: str | None) -> StepIntensity:
    return _parse_enum(StepIntensity, value) or StepIntensity.ACTIVE


def parse_target_type(value: str | None) -> StepTargetType | None:
    return _parse_enum(StepTargetType, value)


def parse_duration_type(value: str | None) -> StepDurationType:
    return _parse_enum(StepDurationType, value) or StepDurationType.TIME


def parse_sport(value: str | None) -> WorkoutSport | None:
    return _parse_enum(WorkoutSport, value)


class FitCodes:
    """Numeric codes written into FIT workout records."""

    INTENSITY: ClassVar[dict[StepIntensity, int]] = {
        StepIntensity.WARMUP: 0,
        StepIntensity.ACTIVE: 1,
        StepIntensity.COOLDOWN: 2,
        StepIntensity.REST: 3,
    }

    TARGET: ClassVar[dict[StepTargetType, int]] = {
        StepTargetType.HEART_RATE: 1,
        StepTargetType.SPEED: 3,
        StepTargetType.POWER: 5,
        StepTargetType.CADENCE: 7,
        StepTargetType.PACE: 9,
    }

    # FIT profile sport / sub-sport names used by the encoder
    SPORT: ClassVar[dict[WorkoutSport, tuple[str, str | None]]] = {
        WorkoutSport.RUNNING: ("RUNNING", None),
        WorkoutSport.CYCLING: ("CYCLING", None),
        WorkoutSport.SWIMMING: ("SWIMMING", None),
        WorkoutSport.WALKING: ("WALKING", None),
        WorkoutSport.FITNESS: ("FITNESS_EQUIPMENT", None),
        WorkoutSport.STRENGTH: ("TRAINING", "STRENGTH_TRAINING"),
        WorkoutSport.CARDIO: ("TRAINING", "CARDIO_TRAINING"),
        WorkoutSport.HIKING: ("HIKING", None),
        WorkoutSport.ROWING: ("ROWING", None),
        WorkoutSport.ELLIPTICAL: ("FITNESS_EQUIPMENT", "ELLIPTICAL"),
        WorkoutSport.STAIR_CLIMBING: ("FITNESS_EQUIPMENT", "STAIR_CLIMBING"),
    }


class ConnectKeys:
    """{id, key} pairs expected by the Garmin Connect import schema."""

    INTENSITY: ClassVar[dict[StepIntensity, int]] = {
        StepIntensity.WARMUP: 0,
        StepIntensity.ACTIVE: 1,
        StepIntensity.COOLDOWN: 2,
        StepIntensity.REST: 3,
    }

    TARGET: ClassVar[dict[StepTargetType, int]] = {
        StepTargetType.HEART_RATE: 2,
        StepTargetType.SPEED: 3,
        StepTargetType.POWER: 5,
        StepTargetType.CADENCE: 7,
        StepTargetType.PACE: 9,
    }

    SPORT: ClassVar[dict[WorkoutSport, int]] = {
        WorkoutSport.RUNNING: 1,
        WorkoutSport.CYCLING: 2,
        WorkoutSport.SWIMMING: 4,
        WorkoutSport.WALKING: 8,
        WorkoutSport.FITNESS: 12,
        WorkoutSport.STRENGTH: 13,
        WorkoutSport.CARDIO: 15,
        WorkoutSport.HIKING: 18,
        WorkoutSport.ROWING: 19,
        WorkoutSport.ELLIPTICAL: 21,
        WorkoutSport.STAIR_CLIMBING: 22,
    }

    DURATION: ClassVar[dict[StepDurationType, int]] = {
        StepDurationType.TIME: 3,
        StepDurationType.DISTANCE: 1,
    }


def intensity_fit_code(value: str | None) -> int:
    """FIT intensity code; unknown or missing intensity is active (1)."""
    return FitCodes.INTENSITY[parse_intensity(value)]


def target_fit_code(value: str | None) -> int:
    """FIT target code; unknown or missing target kind is 0 (no target)."""
    target = parse_target_type(value)
    if target is None:
        return NO_TARGET_CODE
    return FitCodes.TARGET[target]


def intensity_json(value: str | None) -> dict[str, int | str]:
    intensity = parse_intensity(value)
    return {"intensityId": ConnectKeys.INTENSITY[intensity], "intensityKey": intensity.value}


def target_json(value: str | None) -> dict[str, int | str]:
    """Connect target pair; unknown or missing target kind maps to noTarget."""
    target = parse_target_type(value)
    if target is None:
        return dict(NO_TARGET_JSON)
    return {"stepTargetId": ConnectKeys.TARGET[target], "stepTargetKey": target.value}


def sport_json(value: str | None) -> dict[str, int | str]:
    """Connect sport pair; falls back to running for keys intake would reject."""
    sport = parse_sport(value) or WorkoutSport.RUNNING
    return {"sportTypeId": ConnectKeys.SPORT[sport], "sportTypeKey": sport.value}


def duration_json(value: str | None) -> dict[str, int | str]:
    duration_type = parse_duration_type(value)
    return {"stepTypeId": ConnectKeys.DURATION[duration_type], "stepTypeKey": duration_type.value}


def sport_fit_names(value: str | None) -> tuple[str, str | None]:
    """FIT profile (sport, default sub-sport) names for a sport key."""
    sport = parse_sport(value) or WorkoutSport.RUNNING
    return FitCodes.SPORT[sport]


def valid_sport_keys() -> list[str]:
    return [sport.value for sport in WorkoutSport]

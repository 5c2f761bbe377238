"""Canonical workout description models.

A workout description is the sport-agnostic input both output formats are
built from. Category fields stay lenient strings here; the enumeration tables
resolve them (with documented fallbacks) when an output model is built.
"""

from __future__ import annotations

import math
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# FIT stores step time in milliseconds and custom targets as uint32
MAX_DURATION_SECONDS = 4_294_967
MAX_TARGET_VALUE = 4_294_967_295


class StepIntensity(StrEnum):
    """Qualitative intensity of a workout step."""

    WARMUP = "warmup"
    ACTIVE = "active"
    COOLDOWN = "cooldown"
    REST = "rest"


class StepTargetType(StrEnum):
    """Physiological signal a step aims to constrain."""

    HEART_RATE = "heartRate"
    SPEED = "speed"
    POWER = "power"
    CADENCE = "cadence"
    PACE = "pace"


class StepDurationType(StrEnum):
    """How a step's duration is measured."""

    TIME = "time"
    DISTANCE = "distance"


class WorkoutSport(StrEnum):
    """Sports accepted at intake."""

    RUNNING = "running"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    WALKING = "walking"
    FITNESS = "fitness"
    STRENGTH = "strength"
    CARDIO = "cardio"
    HIKING = "hiking"
    ROWING = "rowing"
    ELLIPTICAL = "elliptical"
    STAIR_CLIMBING = "stairClimbing"


class StepDescription(BaseModel):
    """One timed step of a workout description."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(default="", description="Step name shown on the device")
    duration: int | float = Field(description="Step duration in seconds")
    intensity: str | None = Field(default=None, description="warmup, active, cooldown or rest")
    duration_type: str | None = Field(default=None, alias="durationType", description="time or distance")
    target_type: str | None = Field(default=None, alias="targetType", description="Target kind, None for no target")
    target_min: int | float | None = Field(default=None, alias="targetMin")
    target_max: int | float | None = Field(default=None, alias="targetMax")

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, value: int | float) -> int | float:
        if not math.isfinite(value):
            raise ValueError(f"duration must be a finite number, got {value}")
        if value < 0 or value > MAX_DURATION_SECONDS:
            raise ValueError(f"duration must be between 0 and {MAX_DURATION_SECONDS}, got {value}")
        return value

    @field_validator("target_min", "target_max")
    @classmethod
    def validate_target_bound(cls, value: int | float | None, info: ValidationInfo) -> int | float | None:
        if value is None:
            return value
        if not math.isfinite(value):
            raise ValueError(f"{info.field_name} must be a finite number, got {value}")
        if value < 0 or value > MAX_TARGET_VALUE:
            raise ValueError(f"{info.field_name} must be between 0 and {MAX_TARGET_VALUE}, got {value}")
        return value

    @property
    def has_target(self) -> bool:
        return bool(self.target_type)


class WorkoutDescription(BaseModel):
    """A named, ordered sequence of workout steps for one sport."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    sport: WorkoutSport = WorkoutSport.RUNNING
    sub_sport: str = Field(default="generic", alias="subSport")
    steps: tuple[StepDescription, ...] = Field(min_length=1)

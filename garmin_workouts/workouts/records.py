"""FIT workout record model and builder.

A FIT workout file is a stream of typed messages: one file_id, one workout
header, then one workout_step per step. This module only produces those
records as immutable values; turning them into bytes is the job of
exporters/fit_exporter.py.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import ClassVar

from garmin_workouts.workouts.canonical import WorkoutDescription
from garmin_workouts.workouts.tables import intensity_fit_code, target_fit_code

Clock = Callable[[], datetime]

FILE_TYPE_WORKOUT = "workout"
MANUFACTURER_DEVELOPMENT = "development"
DEFAULT_PRODUCT = 1
DEFAULT_SERIAL_NUMBER = 12345
DURATION_TYPE_TIME = "time"


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class FileIdentity:
    """file_id message."""

    kind: ClassVar[str] = "file_id"

    time_created: datetime
    file_type: str = FILE_TYPE_WORKOUT
    manufacturer: str = MANUFACTURER_DEVELOPMENT
    product: int = DEFAULT_PRODUCT
    serial_number: int = DEFAULT_SERIAL_NUMBER


@dataclass(frozen=True)
class WorkoutHeader:
    """workout message."""

    kind: ClassVar[str] = "workout"

    sport: str
    sub_sport: str
    name: str
    num_steps: int
    num_valid_steps: int


@dataclass(frozen=True)
class WorkoutStepRecord:
    """workout_step message.

    Target fields are either all set or all None.
    """

    kind: ClassVar[str] = "workout_step"

    message_index: int
    step_name: str
    duration_value: float
    intensity: int
    duration_type: str = DURATION_TYPE_TIME
    target_type: int | None = None
    target_value_low: float | None = None
    target_value_high: float | None = None

    @property
    def has_target(self) -> bool:
        return self.target_type is not None


BinaryRecord = FileIdentity | WorkoutHeader | WorkoutStepRecord


def build_workout_records(
    description: WorkoutDescription,
    clock: Clock = utc_now,
    serial_number: int = DEFAULT_SERIAL_NUMBER,
    product: int = DEFAULT_PRODUCT,
) -> list[BinaryRecord]:
    """Build the ordered FIT record list for a workout.

    Duration is always written as time; distance steps are not distinguished
    in the FIT output.

    Args:
        description: Validated workout description
        clock: Source of the file creation time
        serial_number: file_id serial number
        product: file_id product number

    Returns:
        [FileIdentity, WorkoutHeader, WorkoutStepRecord...] in input step order
    """
    step_count = len(description.steps)
    records: list[BinaryRecord] = [
        FileIdentity(time_created=clock(), product=product, serial_number=serial_number),
        WorkoutHeader(
            sport=description.sport.value,
            sub_sport=description.sub_sport,
            name=description.name,
            num_steps=step_count,
            num_valid_steps=step_count,
        ),
    ]

    for index, step in enumerate(description.steps):
        if step.has_target:
            records.append(
                WorkoutStepRecord(
                    message_index=index,
                    step_name=step.name,
                    duration_value=step.duration,
                    intensity=intensity_fit_code(step.intensity),
                    target_type=target_fit_code(step.target_type),
                    target_value_low=step.target_min if step.target_min is not None else 0,
                    target_value_high=step.target_max if step.target_max is not None else 0,
                )
            )
        else:
            records.append(
                WorkoutStepRecord(
                    message_index=index,
                    step_name=step.name,
                    duration_value=step.duration,
                    intensity=intensity_fit_code(step.intensity),
                )
            )

    return records

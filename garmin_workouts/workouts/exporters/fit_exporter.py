"""FIT file exporter for Garmin-compatible workout files.

Encodes the record list from records.py with fit_tool and checks the result
with the Garmin FIT SDK decoder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fit_tool.fit_file_builder import FitFileBuilder
from fit_tool.profile.messages.file_id_message import FileIdMessage
from fit_tool.profile.messages.workout_message import WorkoutMessage
from fit_tool.profile.messages.workout_step_message import WorkoutStepMessage
from fit_tool.profile.profile_type import (
    FileType,
    Intensity,
    Manufacturer,
    Sport,
    SubSport,
    WorkoutStepDuration,
    WorkoutStepTarget,
)
from garmin_fit_sdk import Decoder, Stream
from loguru import logger

from garmin_workouts.workouts.canonical import WorkoutDescription
from garmin_workouts.workouts.exporters.base import WorkoutExporter
from garmin_workouts.workouts.records import (
    DEFAULT_PRODUCT,
    DEFAULT_SERIAL_NUMBER,
    BinaryRecord,
    Clock,
    FileIdentity,
    WorkoutHeader,
    WorkoutStepRecord,
    build_workout_records,
    utc_now,
)
from garmin_workouts.workouts.tables import sport_fit_names


@dataclass(frozen=True)
class FitVerification:
    """Summary of decoding a FIT file with the Garmin FIT SDK."""

    size: int
    is_fit: bool
    integrity: bool
    errors: tuple[str, ...] = ()
    message_counts: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.is_fit and self.integrity and not self.errors and bool(self.message_counts)


def _file_id_message(record: FileIdentity) -> FileIdMessage:
    message = FileIdMessage()
    message.type = FileType.WORKOUT
    message.manufacturer = Manufacturer.DEVELOPMENT.value
    message.product = record.product
    # fit_tool expects milliseconds since the Unix epoch
    message.time_created = round(record.time_created.timestamp() * 1000)
    message.serial_number = record.serial_number
    return message


def _workout_message(record: WorkoutHeader) -> WorkoutMessage:
    sport_name, default_sub_sport = sport_fit_names(record.sport)
    sub_sport_name = record.sub_sport.upper()
    if sub_sport_name == "GENERIC" and default_sub_sport:
        sub_sport_name = default_sub_sport

    message = WorkoutMessage()
    message.sport = Sport.__members__.get(sport_name, Sport.GENERIC)
    message.sub_sport = SubSport.__members__.get(sub_sport_name, SubSport.GENERIC)
    message.workout_name = record.name
    message.num_valid_steps = record.num_valid_steps
    return message


def _workout_step_message(record: WorkoutStepRecord) -> WorkoutStepMessage:
    message = WorkoutStepMessage()
    message.message_index = record.message_index
    message.workout_step_name = record.step_name
    message.duration_type = WorkoutStepDuration.TIME
    message.duration_time = float(record.duration_value)
    message.intensity = Intensity(record.intensity)

    if record.has_target:
        message.target_type = WorkoutStepTarget(record.target_type)
        message.custom_target_value_low = round(record.target_value_low or 0)
        message.custom_target_value_high = round(record.target_value_high or 0)

    return message


def encode_records(records: list[BinaryRecord]) -> bytes:
    """Encode FIT records to file bytes.

    Args:
        records: Records as produced by build_workout_records

    Returns:
        Complete FIT file (header, definitions, data and CRC)
    """
    builder = FitFileBuilder(auto_define=True, min_string_size=50)

    for record in records:
        if isinstance(record, FileIdentity):
            builder.add(_file_id_message(record))
        elif isinstance(record, WorkoutHeader):
            builder.add(_workout_message(record))
        else:
            builder.add(_workout_step_message(record))

    fit_file = builder.build()
    return fit_file.to_bytes()


def verify_fit_bytes(data: bytes) -> FitVerification:
    """Decode FIT bytes and summarize what the decoder found."""
    stream = Stream.from_byte_array(bytearray(data))
    decoder = Decoder(stream)

    if not decoder.is_fit():
        return FitVerification(size=len(data), is_fit=False, integrity=False, errors=("Not a FIT file",))

    integrity = decoder.check_integrity()

    # check_integrity consumes the stream, so messages need a fresh decoder
    messages, errors = Decoder(Stream.from_byte_array(bytearray(data))).read()
    return FitVerification(
        size=len(data),
        is_fit=True,
        integrity=integrity,
        errors=tuple(str(e) for e in errors),
        message_counts={mesg_type: len(mesgs) for mesg_type, mesgs in messages.items()},
    )


def verify_fit_file(path: str | Path) -> FitVerification:
    """Decode a FIT file from disk.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")
    return verify_fit_bytes(file_path.read_bytes())


class FitWorkoutExporter(WorkoutExporter):
    """FIT file exporter for Garmin workouts."""

    def __init__(
        self,
        clock: Clock = utc_now,
        serial_number: int = DEFAULT_SERIAL_NUMBER,
        product: int = DEFAULT_PRODUCT,
        verify: bool = True,
    ) -> None:
        self.clock = clock
        self.serial_number = serial_number
        self.product = product
        self.verify = verify
        self.last_verification: FitVerification | None = None

    def build(self, description: WorkoutDescription) -> bytes:
        """Build FIT workout file from a workout description.

        Args:
            description: Validated workout description

        Returns:
            FIT file data as bytes
        """
        logger.info(f"Generating FIT workout: {description.name!r} ({len(description.steps)} steps)")
        self.last_verification = None
        records = build_workout_records(
            description,
            clock=self.clock,
            serial_number=self.serial_number,
            product=self.product,
        )
        fit_bytes = encode_records(records)

        if self.verify:
            try:
                verification = verify_fit_bytes(fit_bytes)
            except Exception as e:
                logger.warning(f"Generated FIT file failed validation: {e}, but returning anyway")
            else:
                self.last_verification = verification
                if verification.ok:
                    logger.debug(f"Generated FIT file validated successfully ({len(fit_bytes)} bytes)")
                else:
                    logger.warning(f"Generated FIT file has decode issues: {list(verification.errors)}, but returning anyway")

        return fit_bytes

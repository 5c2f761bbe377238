"""Workout export service.

Decides which artifacts to produce for a destination, runs the exporters,
validates the JSON document and writes the files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from loguru import logger

from garmin_workouts.config.settings import settings
from garmin_workouts.workouts.canonical import WorkoutDescription
from garmin_workouts.workouts.exporters.fit_exporter import FitVerification, FitWorkoutExporter
from garmin_workouts.workouts.exporters.json_exporter import JsonWorkoutExporter, render_document
from garmin_workouts.workouts.validation import ValidationReport

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


class OutputMode(StrEnum):
    FIT = "fit"
    JSON = "json"
    BOTH = "both"


@dataclass(frozen=True)
class OutputPlan:
    """Where each artifact goes; a None path means the artifact is skipped."""

    fit_path: Path | None
    json_path: Path | None
    mode: OutputMode


@dataclass(frozen=True)
class WrittenFile:
    path: Path
    kind: str
    size: int


@dataclass
class ExportResult:
    """Everything produced by one export run."""

    plan: OutputPlan
    files: list[WrittenFile] = field(default_factory=list)
    json_text: str | None = None
    validation: ValidationReport | None = None
    fit_verification: FitVerification | None = None


def slugify(name: str) -> str:
    """Filesystem-safe file stem: unsafe characters become '-', then lowercase."""
    return _UNSAFE_FILENAME_CHARS.sub("-", name).lower()


def determine_output(output: str | Path | None, workout_name: str) -> OutputPlan:
    """Resolve a destination into output paths.

    - None: both files, named by slug, in the current directory
    - existing directory: both files, named by slug, inside it
    - *.fit / *.json (any case): only that artifact
    - anything else: both files, each extension appended to the path
    """
    slug = slugify(workout_name)

    if output is None or str(output) == "":
        return OutputPlan(fit_path=Path(f"{slug}.fit"), json_path=Path(f"{slug}.json"), mode=OutputMode.BOTH)

    output_path = Path(output)
    if output_path.is_dir():
        return OutputPlan(
            fit_path=output_path / f"{slug}.fit",
            json_path=output_path / f"{slug}.json",
            mode=OutputMode.BOTH,
        )

    lower_path = str(output).lower()
    if lower_path.endswith(".fit"):
        return OutputPlan(fit_path=output_path, json_path=None, mode=OutputMode.FIT)
    if lower_path.endswith(".json"):
        return OutputPlan(fit_path=None, json_path=output_path, mode=OutputMode.JSON)

    return OutputPlan(
        fit_path=Path(f"{output}.fit"),
        json_path=Path(f"{output}.json"),
        mode=OutputMode.BOTH,
    )


def save_binary(data: bytes, path: Path) -> int:
    """Write bytes, creating parent directories.

    Raises:
        OSError: If file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return len(data)


class WorkoutExportService:
    """Service running a full workout export."""

    def __init__(
        self,
        fit_exporter: FitWorkoutExporter | None = None,
        json_exporter: JsonWorkoutExporter | None = None,
    ) -> None:
        self.fit_exporter = fit_exporter or FitWorkoutExporter(
            serial_number=settings.fit_serial_number,
            product=settings.fit_product,
            verify=settings.verify_fit_output,
        )
        self.json_exporter = json_exporter or JsonWorkoutExporter()

    def export(self, description: WorkoutDescription, output: str | Path | None = None) -> ExportResult:
        """Produce and write the artifacts requested by output.

        Validation failures never stop the export; they are returned on the
        result and the JSON file is still written.

        Args:
            description: Validated workout description
            output: Destination specifier (see determine_output)

        Returns:
            ExportResult with the plan, written files and validation outcome
        """
        plan = determine_output(output, description.name)
        result = ExportResult(plan=plan)
        logger.info(f"Exporting workout {description.name!r}: mode={plan.mode.value}, steps={len(description.steps)}")

        # Build everything before writing anything
        fit_bytes: bytes | None = None
        if plan.fit_path is not None:
            fit_bytes = self.fit_exporter.build(description)
            result.fit_verification = self.fit_exporter.last_verification

        if plan.json_path is not None:
            document, report = self.json_exporter.build_document(description)
            result.json_text = render_document(document)
            result.validation = report

        if plan.fit_path is not None and fit_bytes is not None:
            size = save_binary(fit_bytes, plan.fit_path)
            result.files.append(WrittenFile(path=plan.fit_path, kind="FIT", size=size))
            logger.info(f"Wrote {plan.fit_path} ({size} bytes)")

        if plan.json_path is not None and result.json_text is not None:
            size = save_binary(result.json_text.encode("utf-8"), plan.json_path)
            result.files.append(WrittenFile(path=plan.json_path, kind="JSON", size=size))
            logger.info(f"Wrote {plan.json_path} ({size} bytes)")

        return result

"""JSON exporter for Garmin Connect workout imports."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger

from garmin_workouts.workouts.canonical import WorkoutDescription
from garmin_workouts.workouts.exporters.base import WorkoutExporter
from garmin_workouts.workouts.interchange import build_interchange_document
from garmin_workouts.workouts.validation import ValidationReport, validate_interchange_document


def render_document(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


class JsonWorkoutExporter(WorkoutExporter):
    """Garmin Connect import JSON exporter.

    Validation findings are advisory: they are logged and returned next to
    the document, but the document is always produced.
    """

    def build_document(self, description: WorkoutDescription) -> tuple[dict[str, Any], ValidationReport]:
        document = build_interchange_document(description)
        report = validate_interchange_document(document)
        if not report.valid:
            logger.warning(f"JSON output has {len(report.errors)} validation issue(s)")
            for error in report.errors:
                logger.warning(f"  - {error}")
        return document, report

    def build(self, description: WorkoutDescription) -> bytes:
        document, _ = self.build_document(description)
        return render_document(document).encode("utf-8")

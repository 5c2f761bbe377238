"""Base exporter abstraction for workout exports.

Provides a common interface for all workout export formats.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from garmin_workouts.workouts.canonical import WorkoutDescription


class WorkoutExporter(ABC):
    """Base class for workout exporters.

    All exporters must implement the build method to generate
    export data from a workout description.
    """

    @abstractmethod
    def build(self, description: WorkoutDescription) -> bytes:
        """Build export data from a workout description.

        Args:
            description: Validated workout description

        Returns:
            Export data as bytes
        """
        raise NotImplementedError

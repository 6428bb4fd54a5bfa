"""Built workouts and their structured segments."""

from __future__ import annotations

from dataclasses import dataclass, field

from training_engine.models.enums import (
    SegmentType,
    WorkoutCategory,
    WorkoutIntensity,
    WorkoutType,
)


@dataclass(frozen=True)
class SegmentTargets:
    """Pace, power and HR bounds for one segment.

    Pace values are in seconds per km, lower = faster. Power in watts.
    """

    pace_low: float | None = None    # faster bound (s/km)
    pace_high: float | None = None   # slower bound (s/km)
    power_low: float | None = None
    power_high: float | None = None
    hr_low: int | None = None
    hr_high: int | None = None


@dataclass(frozen=True)
class WorkoutSegment:
    """A single ordered step of a workout."""

    order: int
    segment_type: SegmentType
    duration_min: float | None = None
    distance_km: float | None = None
    zone: int | None = None
    targets: SegmentTargets | None = None
    exercise_id: str | None = None
    sets: int | None = None
    reps: str | None = None
    rest_seconds: int | None = None
    description: str = ""
    notes: str = ""


@dataclass(frozen=True)
class Workout:
    """A fully structured session ready to be stored."""

    category: WorkoutCategory
    workout_type: WorkoutType
    name: str
    intensity: WorkoutIntensity
    duration_min: float
    distance_km: float | None = None
    target_zone: int | None = None
    instructions: str = ""
    segments: tuple[WorkoutSegment, ...] = field(default_factory=tuple)
    session_label: str | None = None

    @property
    def main_targets(self) -> SegmentTargets | None:
        """Targets of the first work segment, if any."""
        for segment in self.segments:
            if segment.segment_type in (SegmentType.WORK, SegmentType.INTERVAL):
                return segment.targets
        return None

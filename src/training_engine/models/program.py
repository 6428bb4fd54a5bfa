"""Generated training program: days, weeks and the program itself."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from training_engine.models.enums import GoalType, MethodologyType, TrainingPhase
from training_engine.models.lactate import ThresholdResult
from training_engine.models.workout import Workout
from training_engine.models.zones import ZoneTable


@dataclass(frozen=True)
class TrainingDay:
    """One day of a week. No workouts means a rest day."""

    day_number: int  # 1 = Monday ... 7 = Sunday
    workouts: tuple[Workout, ...] = field(default_factory=tuple)
    notes: str = ""

    @property
    def is_rest_day(self) -> bool:
        return not self.workouts


@dataclass(frozen=True)
class TrainingWeek:
    week_number: int
    phase: TrainingPhase
    volume_percentage: float
    volume: float
    focus: str
    training_days: int
    is_deload: bool = False
    days: tuple[TrainingDay, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TrainingProgram:
    """A complete periodized program for one athlete."""

    name: str
    athlete_id: str
    goal_type: GoalType
    methodology: MethodologyType
    start_date: date
    end_date: date
    zones: ZoneTable
    weeks: tuple[TrainingWeek, ...]
    test_id: str | None = None
    threshold: ThresholdResult | None = None
    target_race_date: date | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)
    notes: str = ""

    @property
    def duration_weeks(self) -> int:
        return len(self.weeks)

"""Generation inputs: test record, race result, reference paces, request."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from training_engine.models.enums import (
    AthleteLevel,
    Confidence,
    ExperienceLevel,
    GoalType,
    IntensityUnit,
    MethodologyType,
)
from training_engine.models.lactate import LactateTestData
from training_engine.models.zones import TrainingZone


@dataclass(frozen=True)
class TestRecord:
    """A stored lactate test: stages plus any zones computed earlier."""

    __test__ = False  # not a pytest class

    test_id: str
    stages: LactateTestData | None = None
    stored_zones: tuple[TrainingZone, ...] = field(default_factory=tuple)
    max_hr: int | None = None
    stored_unit: IntensityUnit | None = None  # None = POWER for cycling, else SPEED


@dataclass(frozen=True)
class RaceResult:
    """A recent race performance."""

    distance_km: float
    time_seconds: float
    race_date: date | None = None


@dataclass(frozen=True)
class ElitePaces:
    """Externally supplied reference paces (km/h) and athlete classification.

    Any core pace may be missing; ``validate_elite_paces`` decides whether
    the set is usable.
    """

    easy_low_kmh: float | None
    easy_high_kmh: float | None
    marathon_kmh: float | None
    threshold_kmh: float | None
    interval_kmh: float | None
    repetition_kmh: float | None
    athlete_level: AthleteLevel | None = None
    metabolic_type: str | None = None
    source: str = "reference"
    confidence: Confidence = Confidence.MEDIUM


@dataclass(frozen=True)
class ProgramGenerationParams:
    """A request to generate a training program."""

    athlete_id: str
    goal_type: GoalType
    duration_weeks: int
    training_days_per_week: int
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    start_date: date | None = None
    target_race_date: date | None = None
    target_time: str | None = None  # "H:MM:SS", "H:MM" or "MM:SS"
    current_weekly_volume: float | None = None
    methodology: MethodologyType | str | None = None  # None / "AUTO" = select
    athlete_level: AthleteLevel | None = None
    recent_race: RaceResult | None = None
    strength_sessions_per_week: int | None = None
    core_sessions_per_week: int | None = None
    schedule_strength_after_running: bool = True
    schedule_core_after_running: bool = True
    longest_long_run_km: float | None = None
    has_lactate_meter: bool = False
    notes: str = ""

"""Intermediate planning models: phases, volume curve, deloads, week plans."""

from __future__ import annotations

from dataclasses import dataclass, field

from training_engine.models.enums import (
    AthleteLevel,
    ExperienceLevel,
    GoalType,
    StrengthFocus,
    TrainingPhase,
    WorkoutCategory,
)
from training_engine.models.methodology import MethodologyConfig

_PHASE_ORDER = (
    TrainingPhase.BASE,
    TrainingPhase.BUILD,
    TrainingPhase.PEAK,
    TrainingPhase.TAPER,
)


@dataclass(frozen=True)
class PhaseDistribution:
    """Number of weeks in each phase. Phases run BASE → BUILD → PEAK → TAPER."""

    base: int
    build: int
    peak: int
    taper: int

    @property
    def total(self) -> int:
        return self.base + self.build + self.peak + self.taper

    def weeks_in(self, phase: TrainingPhase) -> int:
        return {
            TrainingPhase.BASE: self.base,
            TrainingPhase.BUILD: self.build,
            TrainingPhase.PEAK: self.peak,
            TrainingPhase.TAPER: self.taper,
        }[phase]

    def as_week_list(self) -> list[TrainingPhase]:
        """Phase of every week, index 0 = week 1."""
        weeks: list[TrainingPhase] = []
        for phase in _PHASE_ORDER:
            weeks.extend([phase] * self.weeks_in(phase))
        return weeks

    def phase_for_week(self, week_number: int) -> TrainingPhase:
        """Phase of a 1-indexed week.

        Raises:
            ValueError: If the week is outside the plan.
        """
        weeks = self.as_week_list()
        if not 1 <= week_number <= len(weeks):
            raise ValueError(
                f"Week {week_number} is outside plan range (1-{len(weeks)})"
            )
        return weeks[week_number - 1]

    def week_in_phase(self, week_number: int) -> int:
        """0-indexed position of a week inside its phase."""
        phase = self.phase_for_week(week_number)
        start = 1
        for p in _PHASE_ORDER:
            if p == phase:
                break
            start += self.weeks_in(p)
        return week_number - start


@dataclass(frozen=True)
class VolumeProgressionEntry:
    """Planned volume of one week as a percentage of peak volume."""

    week_number: int
    phase: TrainingPhase
    volume_percentage: float
    focus: str


@dataclass(frozen=True)
class DeloadWeek:
    week_number: int
    reduction_factor: float  # 0.25 = 25% less volume


@dataclass(frozen=True)
class DeloadSchedule:
    """Deload weeks of a program plus the policy values that produced them."""

    weeks: tuple[DeloadWeek, ...] = field(default_factory=tuple)
    cadence_weeks: int = 4
    floor_percentage: float = 40.0

    def get(self, week_number: int) -> DeloadWeek | None:
        for week in self.weeks:
            if week.week_number == week_number:
                return week
        return None

    @property
    def week_numbers(self) -> tuple[int, ...]:
        return tuple(w.week_number for w in self.weeks)


@dataclass(frozen=True)
class SessionParams:
    """Category-specific parameters of a planned session.

    Only the fields relevant to the entry's category are set.
    """

    duration_min: float | None = None
    distance_km: float | None = None
    zone: int | None = None
    reps: int | None = None
    work_min: float | None = None
    rest_min: float | None = None
    work_seconds: int | None = None
    work_distance_km: float | None = None
    pace_percent: float | None = None           # % of marathon pace
    recovery_distance_km: float | None = None
    recovery_pace_percent: float | None = None
    marathon_pace_kmh: float | None = None
    strength_focus: StrengthFocus | None = None
    session_label: str | None = None            # "AM" / "PM"
    description: str = ""


@dataclass(frozen=True)
class WorkoutPlanEntry:
    """One planned session on one day of the week (1 = Monday)."""

    day_number: int
    category: WorkoutCategory
    params: SessionParams = field(default_factory=SessionParams)


@dataclass(frozen=True)
class WeekDistributionParams:
    """Everything the distribution engine needs to lay out one week.

    ``volume`` is in km for running goals and hours for cycling.
    """

    week_number: int
    total_weeks: int
    phase: TrainingPhase
    week_in_phase: int  # 0-indexed
    training_days: int
    experience: ExperienceLevel
    goal: GoalType
    methodology: MethodologyConfig
    athlete_level: AthleteLevel
    volume: float
    volume_percentage: float
    is_deload: bool = False
    easy_speed_kmh: float | None = None
    marathon_pace_kmh: float | None = None
    strength_sessions: int | None = None
    core_sessions: int | None = None
    strength_after_running: bool = True
    core_after_running: bool = True
    longest_long_run_km: float | None = None

    @property
    def is_cycling(self) -> bool:
        return self.goal == GoalType.CYCLING

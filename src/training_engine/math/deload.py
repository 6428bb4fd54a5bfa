"""Deload (recovery week) scheduling.

Cadence and depth start from the methodology's settings and are adjusted
per athlete level: advanced athletes deload more often and more deeply.
Consecutive loaded weeks are counted across phase boundaries so a phase
change never resets the fatigue count. TAPER weeks are never deloads.

References:
    Pfitzinger & Douglas (2009), Advanced Marathoning: 3:1 / 2:1 cycles.
    Issurin (2010): accumulated fatigue across mesocycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from training_engine.models.enums import (
    DELOAD_CADENCE_OFFSET,
    DELOAD_DEPTH_BONUS_PCT,
    DELOAD_VOLUME_FLOOR_PCT,
    MAX_DELOAD_CADENCE_WEEKS,
    MIN_DELOAD_CADENCE_WEEKS,
    AthleteLevel,
    TrainingPhase,
)
from training_engine.models.methodology import MethodologyConfig
from training_engine.models.plan import DeloadSchedule, DeloadWeek, PhaseDistribution


@dataclass(frozen=True)
class DeloadPolicy:
    """Tunable deload constants. Defaults come from ``models.enums``."""

    cadence_offset: dict[AthleteLevel, int] = field(
        default_factory=lambda: dict(DELOAD_CADENCE_OFFSET)
    )
    depth_bonus_pct: dict[AthleteLevel, float] = field(
        default_factory=lambda: dict(DELOAD_DEPTH_BONUS_PCT)
    )
    min_cadence_weeks: int = MIN_DELOAD_CADENCE_WEEKS
    max_cadence_weeks: int = MAX_DELOAD_CADENCE_WEEKS
    floor_percentage: float = DELOAD_VOLUME_FLOOR_PCT
    max_reduction_pct: float = 50.0

    def cadence_for(self, level: AthleteLevel, base_frequency: int) -> int:
        cadence = base_frequency + self.cadence_offset.get(level, 0)
        return min(max(cadence, self.min_cadence_weeks), self.max_cadence_weeks)

    def reduction_for(self, level: AthleteLevel, base_reduction_pct: float) -> float:
        """Volume reduction as a fraction (0.25 = 25% less)."""
        pct = base_reduction_pct + self.depth_bonus_pct.get(level, 0.0)
        return min(max(pct, 0.0), self.max_reduction_pct) / 100.0


DEFAULT_DELOAD_POLICY = DeloadPolicy()


def calculate_deload_schedule(
    duration_weeks: int,
    athlete_level: AthleteLevel,
    methodology: MethodologyConfig,
    phases: PhaseDistribution,
    policy: DeloadPolicy = DEFAULT_DELOAD_POLICY,
) -> DeloadSchedule:
    """Pick the deload weeks of a plan.

    Every ``cadence``-th consecutive loaded week becomes a deload, e.g. with
    a cadence of 4: three loaded weeks, then one deload. Week 1 and TAPER
    weeks are never deloads.

    Args:
        duration_weeks: Plan length.
        athlete_level: Drives cadence and depth adjustments.
        methodology: Supplies the base frequency and volume reduction.
        phases: Phase allocation of the plan.
        policy: Overridable cadence/depth constants.

    Returns:
        DeloadSchedule listing the deload weeks.
    """
    cadence = policy.cadence_for(athlete_level, methodology.deload_frequency_weeks)
    reduction = policy.reduction_for(athlete_level, methodology.volume_reduction_percent)
    week_phases = phases.as_week_list()

    weeks: list[DeloadWeek] = []
    loaded_streak = 0
    for week_number in range(1, duration_weeks + 1):
        phase = week_phases[week_number - 1]
        if phase == TrainingPhase.TAPER:
            break
        if loaded_streak >= cadence - 1 and week_number > 1:
            weeks.append(DeloadWeek(week_number=week_number, reduction_factor=reduction))
            loaded_streak = 0
        else:
            loaded_streak += 1

    return DeloadSchedule(
        weeks=tuple(weeks),
        cadence_weeks=cadence,
        floor_percentage=policy.floor_percentage,
    )


def apply_deload(
    week_number: int,
    volume_percentage: float,
    schedule: DeloadSchedule,
) -> tuple[float, bool]:
    """Apply the schedule to one week's volume.

    A deload never takes volume below the schedule's floor, and never raises
    a week that was already below it.

    Returns:
        (volume_percentage, is_deload)
    """
    deload = schedule.get(week_number)
    if deload is None:
        return volume_percentage, False
    reduced = volume_percentage * (1.0 - deload.reduction_factor)
    floor = min(volume_percentage, schedule.floor_percentage)
    return round(max(reduced, floor), 1), True

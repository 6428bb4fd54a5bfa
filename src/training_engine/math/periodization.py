"""Periodization math: phase allocation, volume targets, weekly volume curve.

Implements a hybrid fixed/proportional model:
- TAPER fixed by plan length (1-3 weeks)
- PEAK proportional to the pre-taper weeks
- BASE/BUILD split the remainder, BASE share growing with plan length

References:
    Pfitzinger & Douglas (2009), Advanced Marathoning, 2nd ed.
    Bosquet et al. (2007), Effects of tapering on performance: a meta-analysis.
    Mujika & Padilla (2003), Scientific bases for precompetition tapering.
    Issurin (2010), New horizons for the methodology and physiology of training
        periodization.
"""

from __future__ import annotations

import math
from datetime import date

from training_engine.exceptions import ValidationError
from training_engine.models.enums import (
    BASE_SHARE_ADJUSTMENT,
    BASE_SHARE_LONG,
    BASE_SHARE_MEDIUM,
    BASE_SHARE_SHORT,
    CANOVA_PEAK_SHARE,
    GOAL_VOLUME_MULTIPLIER,
    LONG_RUN_SHARE,
    MAX_PLAN_WEEKS,
    MEDIUM_PLAN_WEEKS,
    MIN_PLAN_WEEKS,
    PEAK_SHARE,
    SHORT_PLAN_WEEKS,
    TAPER_END_FRACTION,
    TAPER_START_FRACTION,
    VOLUME_TARGETS_HOURS,
    VOLUME_TARGETS_KM,
    ExperienceLevel,
    GoalType,
    MethodologyType,
    TrainingPhase,
)
from training_engine.models.plan import PhaseDistribution, VolumeProgressionEntry

_PHASE_FOCUS = {
    TrainingPhase.BASE: "Aerobic base and running economy",
    TrainingPhase.BUILD: "Threshold development and volume build",
    TrainingPhase.PEAK: "Race-specific intensity",
    TrainingPhase.TAPER: "Recovery and sharpening",
}


def calculate_phases(
    duration_weeks: int,
    methodology: MethodologyType = MethodologyType.POLARIZED,
) -> PhaseDistribution:
    """Allocate BASE/BUILD/PEAK/TAPER weeks across the plan.

    - TAPER: 1 week up to 8 weeks, 2 up to 20, 3 beyond.
    - PEAK: 20% of the pre-taper weeks (25% for Canova), at least 1.
    - BASE: 40/45/50% of what remains for plans up to 12 / 20 / longer,
      shifted per methodology; BUILD takes the rest.

    Every phase gets at least one week and the counts always sum to
    ``duration_weeks``.

    Args:
        duration_weeks: Plan length, 4-52.
        methodology: Methodology in use.

    Returns:
        PhaseDistribution with week counts per phase.

    Raises:
        ValidationError: If ``duration_weeks`` is outside 4-52.
    """
    if not MIN_PLAN_WEEKS <= duration_weeks <= MAX_PLAN_WEEKS:
        raise ValidationError(
            f"Plan must be {MIN_PLAN_WEEKS}-{MAX_PLAN_WEEKS} weeks, "
            f"got {duration_weeks}"
        )

    if duration_weeks <= SHORT_PLAN_WEEKS:
        taper = 1
    elif duration_weeks <= MEDIUM_PLAN_WEEKS:
        taper = 2
    else:
        taper = 3

    pre_taper = duration_weeks - taper
    peak_share = CANOVA_PEAK_SHARE if methodology == MethodologyType.CANOVA else PEAK_SHARE
    peak = max(1, round(pre_taper * peak_share))

    remaining = pre_taper - peak
    if duration_weeks <= 12:
        base_share = BASE_SHARE_SHORT
    elif duration_weeks <= MEDIUM_PLAN_WEEKS:
        base_share = BASE_SHARE_MEDIUM
    else:
        base_share = BASE_SHARE_LONG
    base_share += BASE_SHARE_ADJUSTMENT[methodology]

    base = max(1, round(remaining * base_share))
    build = remaining - base
    if build < 1:
        # Shortest plans: borrow the week from whichever phase can spare it
        if base > 1:
            base -= 1
        else:
            peak -= 1
        build = 1

    return PhaseDistribution(base=base, build=build, peak=peak, taper=taper)


def calculate_volume_targets(
    experience: ExperienceLevel,
    goal: GoalType,
    current_volume: float | None = None,
) -> tuple[float, float]:
    """Starting and peak weekly volume for an athlete.

    Running goals are in km, cycling in hours. The default starting volume
    is replaced by the athlete's current volume when that is lower. Peak is
    scaled by the goal's multiplier and never falls below the start.

    Returns:
        (base_volume, peak_volume), each rounded to 0.1.
    """
    table = VOLUME_TARGETS_HOURS if goal == GoalType.CYCLING else VOLUME_TARGETS_KM
    default_base, default_peak = table[experience]
    multiplier = GOAL_VOLUME_MULTIPLIER[goal]

    base = default_base * multiplier
    if current_volume is not None and current_volume > 0:
        base = min(current_volume, base)
    peak = max(default_peak * multiplier, base)
    return round(base, 1), round(peak, 1)


def calculate_weekly_volume_progression(
    duration_weeks: int,
    base_volume: float,
    peak_volume: float,
    phases: PhaseDistribution,
) -> list[VolumeProgressionEntry]:
    """Weekly volume as a percentage of peak volume.

    BASE and BUILD ramp linearly from ``base_volume / peak_volume`` towards
    100%, PEAK holds 100%, TAPER decays exponentially from 85% to 55%.

    Returns:
        Exactly ``duration_weeks`` entries, week 1 first.

    Raises:
        ValidationError: If the phase counts do not match the plan length or
            the peak volume is not positive.
    """
    if phases.total != duration_weeks:
        raise ValidationError(
            f"Phase weeks ({phases.total}) do not match plan length "
            f"({duration_weeks})"
        )
    if peak_volume <= 0:
        raise ValidationError(f"Peak volume must be positive, got {peak_volume}")

    start_pct = min(100.0, max(0.0, base_volume / peak_volume * 100.0))
    ramp_weeks = phases.base + phases.build

    entries: list[VolumeProgressionEntry] = []
    for week_number, phase in enumerate(phases.as_week_list(), start=1):
        if phase in (TrainingPhase.BASE, TrainingPhase.BUILD):
            progress = (week_number - 1) / ramp_weeks
            pct = start_pct + (100.0 - start_pct) * progress
        elif phase == TrainingPhase.PEAK:
            pct = 100.0
        else:
            taper_index = week_number - ramp_weeks - phases.peak
            pct = _taper_fraction(taper_index, phases.taper) * 100.0
        entries.append(VolumeProgressionEntry(
            week_number=week_number,
            phase=phase,
            volume_percentage=round(pct, 1),
            focus=get_phase_focus(phase),
        ))
    return entries


def _taper_fraction(taper_week: int, taper_weeks: int) -> float:
    """Exponential decay from TAPER_START_FRACTION to TAPER_END_FRACTION.

    ``taper_week`` is 1-indexed; the last taper week lands on the end value.
    """
    if taper_weeks <= 1:
        return TAPER_END_FRACTION
    k = math.log(TAPER_START_FRACTION / TAPER_END_FRACTION)
    progress = (taper_week - 1) / (taper_weeks - 1)
    return TAPER_START_FRACTION * math.exp(-k * progress)


def calculate_training_days_per_week(
    experience: ExperienceLevel,
    phase: TrainingPhase,
    requested: int,
) -> int:
    """Training days for one week.

    Beginners are held to five days. TAPER drops one day (never below two)
    so it never exceeds the BASE value.
    """
    days = min(requested, 5) if experience == ExperienceLevel.BEGINNER else requested
    if phase == TrainingPhase.TAPER:
        days = max(2, days - 1)
    return days


def get_phase_focus(phase: TrainingPhase) -> str:
    return _PHASE_FOCUS[phase]


def get_long_run_percentage(experience: ExperienceLevel) -> float:
    """Share of weekly volume assigned to the long run."""
    return LONG_RUN_SHARE[experience]


def compute_plan_weeks(start_date: date, race_date: date) -> int:
    """Number of whole weeks from ``start_date`` up to and including race week.

    Raises:
        ValidationError: If the race is before the start.
    """
    if race_date < start_date:
        raise ValidationError(
            f"Race date {race_date} is before start date {start_date}"
        )
    return (race_date - start_date).days // 7 + 1

"""Shared weekly scheduling: day selection, quality sizing, volume fill.

Days are numbered 1 (Monday) to 7 (Sunday). The long session is always on
day 7. Hard days are spread so that no two land back-to-back, or on the day
before the long session, whenever the week leaves room for that.

References:
    Seiler (2010): time-in-zone based intensity distribution.
    Pfitzinger & Douglas (2009): hard/easy day alternation, long-run share.
"""

from __future__ import annotations

from itertools import combinations

from training_engine.math.periodization import get_long_run_percentage
from training_engine.models.enums import (
    EASY_RUN_MAX_DURATION,
    EASY_RUN_MIN_DURATION,
    INTERVAL_COOLDOWN_MIN,
    INTERVAL_WARMUP_MIN,
    LONG_RUN_CAP_KM,
    TEMPO_COOLDOWN_MIN,
    TEMPO_WARMUP_MIN,
    ExperienceLevel,
    StrengthFocus,
    TrainingPhase,
    WorkoutCategory,
)
from training_engine.models.plan import SessionParams, WeekDistributionParams, WorkoutPlanEntry

LONG_DAY = 7

# Order in which days become training days as the week fills up
_DAY_PRIORITY = (7, 2, 4, 6, 3, 5, 1)

# Tie-break preference for quality days
_QUALITY_DAY_PREFERENCE = (2, 4, 5, 3, 6, 1)

# Work minutes a typical quality session contributes, by phase
_QUALITY_WORK_MIN = {
    TrainingPhase.BASE: 20.0,
    TrainingPhase.BUILD: 25.0,
    TrainingPhase.PEAK: 30.0,
    TrainingPhase.TAPER: 15.0,
}

_STRENGTH_FOCUS_ROTATION = (StrengthFocus.LOWER, StrengthFocus.FULL, StrengthFocus.UPPER)

_DEFAULT_STRENGTH_SESSIONS = {
    TrainingPhase.BASE: 2,
    TrainingPhase.BUILD: 2,
    TrainingPhase.PEAK: 1,
    TrainingPhase.TAPER: 1,
}

_DEFAULT_CORE_SESSIONS = {
    TrainingPhase.BASE: 2,
    TrainingPhase.BUILD: 2,
    TrainingPhase.PEAK: 2,
    TrainingPhase.TAPER: 1,
}

# Fallback easy speed when no zone table speed is available
_DEFAULT_EASY_SPEED_KMH = 10.0


def select_training_days(count: int) -> list[int]:
    """The ``count`` days of the week that carry running sessions."""
    count = max(1, min(count, 7))
    return sorted(_DAY_PRIORITY[:count])


def select_quality_days(training_days: list[int], count: int) -> list[int]:
    """Choose ``count`` quality days among the training days.

    Minimises hard-day adjacency (the long day counts as hard), then prefers
    the conventional Tuesday/Thursday layout.
    """
    candidates = [d for d in training_days if d != LONG_DAY]
    count = min(count, len(candidates))
    if count <= 0:
        return []

    def score(days: tuple[int, ...]) -> tuple[int, list[int]]:
        hard = sorted({*days, LONG_DAY})
        adjacent = sum(1 for a, b in zip(hard, hard[1:]) if b - a == 1)
        preference = sorted(_QUALITY_DAY_PREFERENCE.index(d) for d in days)
        return adjacent, preference

    best = min(combinations(candidates, count), key=score)
    return sorted(best)


def weekly_minutes(ctx: WeekDistributionParams) -> float:
    """Estimated total endurance minutes of the week."""
    if ctx.is_cycling:
        return ctx.volume * 60.0
    return ctx.volume / easy_speed(ctx) * 60.0


def easy_speed(ctx: WeekDistributionParams) -> float:
    return ctx.easy_speed_kmh or _DEFAULT_EASY_SPEED_KMH


def quality_session_count(ctx: WeekDistributionParams, available: int) -> int:
    """Number of quality sessions sized to the methodology's intensity split.

    The methodology's moderate + hard share of the week's minutes is divided
    by the typical work time of one session, then clamped to the weekly
    structure and to the days available. Deload and taper weeks keep at most
    one and two, beginners one during BASE.
    """
    target_minutes = weekly_minutes(ctx) * ctx.methodology.zone_distribution.quality_share
    count = round(target_minutes / _QUALITY_WORK_MIN[ctx.phase])
    count = max(1, min(count, ctx.methodology.weekly_structure.quality_sessions))

    # Keep at least one easy day once the week has four or more sessions
    max_by_days = available - 1 if ctx.training_days >= 4 else available
    count = min(count, max(0, max_by_days))

    if ctx.is_deload:
        count = min(count, 1)
    if ctx.phase == TrainingPhase.TAPER:
        count = min(count, 2)
    if ctx.experience == ExperienceLevel.BEGINNER and ctx.phase == TrainingPhase.BASE:
        count = min(count, 1)
    return count


def estimate_session_minutes(category: WorkoutCategory, params: SessionParams) -> float:
    """Rough total duration of a planned endurance session."""
    if category == WorkoutCategory.TEMPO:
        return TEMPO_WARMUP_MIN + (params.duration_min or 20.0) + TEMPO_COOLDOWN_MIN
    if category == WorkoutCategory.INTERVALS:
        reps = params.reps or 1
        work = reps * (params.work_min or 0.0) + (reps - 1) * (params.rest_min or 0.0)
        return INTERVAL_WARMUP_MIN + work + INTERVAL_COOLDOWN_MIN
    if category == WorkoutCategory.HILL_SPRINTS:
        reps = params.reps or 1
        work = reps * (params.work_seconds or 0) / 60.0 + (reps - 1) * (params.rest_min or 0.0)
        return INTERVAL_WARMUP_MIN + work + INTERVAL_COOLDOWN_MIN
    if category == WorkoutCategory.CANOVA_INTERVALS:
        # Canova sessions are distance-based; assume ~4 min/km at pace
        reps = params.reps or 1
        km = reps * (params.work_distance_km or 0.0) + (reps - 1) * (params.recovery_distance_km or 0.0)
        return INTERVAL_WARMUP_MIN + km * 4.0 + INTERVAL_COOLDOWN_MIN
    return params.duration_min or 0.0


def long_session_params(ctx: WeekDistributionParams, pace_percent: float | None = None) -> SessionParams:
    """Long run (km) or long ride (minutes) for the week."""
    share = get_long_run_percentage(ctx.experience)
    if ctx.is_cycling:
        minutes = round(ctx.volume * 60.0 * share)
        return SessionParams(duration_min=max(minutes, 60), zone=2, description="Long endurance ride")

    distance = ctx.volume * share
    distance = min(distance, LONG_RUN_CAP_KM[ctx.goal])
    if ctx.longest_long_run_km:
        distance = min(distance, ctx.longest_long_run_km * 1.1)
    distance = round(max(distance, 5.0), 1)
    return SessionParams(
        distance_km=distance,
        zone=2,
        pace_percent=pace_percent,
        marathon_pace_kmh=ctx.marathon_pace_kmh if pace_percent else None,
        description="Long run",
    )


def fill_easy_sessions(
    ctx: WeekDistributionParams,
    easy_days: list[int],
    used_minutes: float,
) -> list[WorkoutPlanEntry]:
    """Spread the week's remaining volume evenly over the easy days.

    Each easy session is clamped to 20-75 minutes. In deload weeks the last
    easy day becomes a recovery session.
    """
    if not easy_days:
        return []
    remaining = max(0.0, weekly_minutes(ctx) - used_minutes)
    per_session = min(max(remaining / len(easy_days), EASY_RUN_MIN_DURATION), EASY_RUN_MAX_DURATION)
    per_session = float(round(per_session))

    entries = []
    for i, day in enumerate(easy_days):
        if ctx.is_deload and i == len(easy_days) - 1 and len(easy_days) > 1:
            entries.append(WorkoutPlanEntry(
                day, WorkoutCategory.RECOVERY, SessionParams(description="Deload mobility"),
            ))
            continue
        distance = None if ctx.is_cycling else round(per_session * easy_speed(ctx) / 60.0, 1)
        entries.append(WorkoutPlanEntry(
            day,
            WorkoutCategory.EASY,
            SessionParams(duration_min=per_session, distance_km=distance, zone=2),
        ))
    return entries


def place_secondary_sessions(
    ctx: WeekDistributionParams,
    training_days: list[int],
    quality_days: list[int],
) -> list[WorkoutPlanEntry]:
    """Strength, plyometric and core sessions for the week.

    With ``*_after_running`` set they are same-day PM sessions, preferring
    quality days (hard days hard), then easy days. Otherwise rest days are
    used first. Non-beginners swap their second BUILD/PEAK strength session
    for plyometrics.
    """
    entries: list[WorkoutPlanEntry] = []
    easy_days = [d for d in training_days if d not in quality_days and d != LONG_DAY]
    rest_days = [d for d in range(1, 8) if d not in training_days]

    strength_count = _session_count(ctx.strength_sessions, _DEFAULT_STRENGTH_SESSIONS, ctx)
    strength_order = (
        quality_days + easy_days if ctx.strength_after_running else rest_days + easy_days + quality_days
    )
    strength_days = _spread(strength_order, strength_count)

    plyometric_allowed = (
        ctx.experience != ExperienceLevel.BEGINNER
        and ctx.phase in (TrainingPhase.BUILD, TrainingPhase.PEAK)
        and not ctx.is_deload
    )
    for i, day in enumerate(strength_days):
        if i == 1 and plyometric_allowed:
            entries.append(WorkoutPlanEntry(
                day, WorkoutCategory.PLYOMETRIC, SessionParams(session_label="PM"),
            ))
            continue
        focus = _STRENGTH_FOCUS_ROTATION[i % len(_STRENGTH_FOCUS_ROTATION)]
        entries.append(WorkoutPlanEntry(
            day,
            WorkoutCategory.STRENGTH,
            SessionParams(strength_focus=focus, session_label="PM"),
        ))

    core_count = _session_count(ctx.core_sessions, _DEFAULT_CORE_SESSIONS, ctx)
    core_base = easy_days + quality_days if ctx.core_after_running else rest_days + easy_days + quality_days
    # Days without strength first
    core_order = [d for d in core_base if d not in strength_days] + [
        d for d in core_base if d in strength_days
    ]
    for day in _spread(core_order, core_count):
        entries.append(WorkoutPlanEntry(
            day, WorkoutCategory.CORE, SessionParams(session_label="PM"),
        ))
    return entries


def _session_count(
    requested: int | None,
    defaults: dict[TrainingPhase, int],
    ctx: WeekDistributionParams,
) -> int:
    count = defaults[ctx.phase] if requested is None else max(0, requested)
    if ctx.is_deload or ctx.phase == TrainingPhase.TAPER:
        count = min(count, 1)
    return count


def _spread(order: list[int], count: int) -> list[int]:
    """Pick ``count`` days from ``order``, avoiding consecutive days if possible."""
    chosen: list[int] = []
    for day in order:
        if len(chosen) >= count:
            break
        if all(abs(day - c) > 1 for c in chosen):
            chosen.append(day)
    for day in order:
        if len(chosen) >= count:
            break
        if day not in chosen:
            chosen.append(day)
    return sorted(chosen)

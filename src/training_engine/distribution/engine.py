"""Workout distribution engine: lays out one week of planned sessions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from training_engine.distribution.methodologies import (
    CANOVA_LONG_RUN_PACE,
    QualitySession,
    canova_phase,
    canova_sessions,
    norwegian_sessions,
    polarized_sessions,
    pyramidal_sessions,
)
from training_engine.distribution.scheduling import (
    LONG_DAY,
    easy_speed,
    estimate_session_minutes,
    fill_easy_sessions,
    long_session_params,
    place_secondary_sessions,
    quality_session_count,
    select_quality_days,
    select_training_days,
)
from training_engine.models.enums import MethodologyType, TrainingPhase, WorkoutCategory
from training_engine.models.plan import WeekDistributionParams, WorkoutPlanEntry

logger = logging.getLogger(__name__)

_MENUS: dict[MethodologyType, Callable[[WeekDistributionParams], list[QualitySession]]] = {
    MethodologyType.POLARIZED: polarized_sessions,
    MethodologyType.PYRAMIDAL: pyramidal_sessions,
    MethodologyType.NORWEGIAN: norwegian_sessions,
    MethodologyType.NORWEGIAN_SINGLE: norwegian_sessions,
    MethodologyType.CANOVA: canova_sessions,
}


def determine_workout_distribution(ctx: WeekDistributionParams) -> list[WorkoutPlanEntry]:
    """Plan every session of one week.

    Steps:
    1. Pick the training days (long session on day 7).
    2. Size the quality-session count to the methodology's intensity split
       and place the sessions on well-spaced days.
    3. Norwegian double-threshold weeks get AM and PM threshold sessions on
       their double days.
    4. Fill the remaining training days with easy volume.
    5. Add strength, plyometric and core sessions.

    Returns:
        Entries ordered by day; primary sessions precede same-day secondaries.
    """
    training_days = select_training_days(ctx.training_days)
    available = len([d for d in training_days if d != LONG_DAY])
    menu = _MENUS[ctx.methodology.type](ctx)
    count = min(quality_session_count(ctx, available), len(menu))
    quality_days = select_quality_days(training_days, count)

    entries: list[WorkoutPlanEntry] = []
    used_minutes = 0.0

    doubles = 0
    if (
        ctx.methodology.type == MethodologyType.NORWEGIAN
        and not ctx.is_deload
        and ctx.phase != TrainingPhase.TAPER
        and len(menu) >= 2
    ):
        doubles = ctx.methodology.weekly_structure.double_threshold_days

    for i, day in enumerate(quality_days):
        if i < doubles:
            day_sessions = [
                (menu[0][0], replace(menu[0][1], session_label="AM")),
                (menu[1][0], replace(menu[1][1], session_label="PM")),
            ]
        else:
            day_sessions = [menu[i % len(menu)]]
        for category, params in day_sessions:
            entries.append(WorkoutPlanEntry(day, category, params))
            used_minutes += estimate_session_minutes(category, params)

    if LONG_DAY in training_days:
        pace_percent = None
        if ctx.methodology.type == MethodologyType.CANOVA and ctx.marathon_pace_kmh:
            pace_percent = CANOVA_LONG_RUN_PACE[canova_phase(ctx.phase, ctx.week_in_phase)]
        long_params = long_session_params(ctx, pace_percent)
        entries.append(WorkoutPlanEntry(LONG_DAY, WorkoutCategory.LONG, long_params))
        if long_params.distance_km is not None:
            used_minutes += long_params.distance_km / easy_speed(ctx) * 60.0
        else:
            used_minutes += long_params.duration_min or 0.0

    easy_days = [d for d in training_days if d not in quality_days and d != LONG_DAY]
    entries.extend(fill_easy_sessions(ctx, easy_days, used_minutes))
    entries.extend(place_secondary_sessions(ctx, training_days, quality_days))

    entries.sort(key=lambda e: e.day_number)
    logger.debug(
        "Week %d (%s): %d quality on days %s, %d entries",
        ctx.week_number,
        ctx.phase.name,
        len(quality_days),
        quality_days,
        len(entries),
    )
    return entries

"""Endurance session builders: long, tempo, intervals, hills, Canova, easy.

All builders are pure: a planned entry's params plus the zone table in, a
fully structured Workout out.
"""

from __future__ import annotations

from training_engine.distribution.methodologies import canova_zone
from training_engine.models.enums import (
    INTERVAL_COOLDOWN_MIN,
    INTERVAL_WARMUP_MIN,
    LONG_RUN_COOLDOWN_MIN,
    LONG_RUN_WARMUP_MIN,
    TEMPO_COOLDOWN_MIN,
    TEMPO_WARMUP_MIN,
    SegmentType,
    WorkoutCategory,
    WorkoutIntensity,
    WorkoutType,
)
from training_engine.models.plan import SessionParams
from training_engine.models.workout import SegmentTargets, Workout, WorkoutSegment
from training_engine.models.zones import ZoneTable
from training_engine.workout_builder.coaching_cues import get_coaching_cue
from training_engine.workout_builder.targets import (
    format_pace,
    marathon_pace_targets,
    zone_speed,
    zone_targets,
)

# Distance covered in warm-up and cool-down of a long run is taken off the main block
_LONG_RUN_EASY_KM = 2.0


def _segment(
    order: int,
    category: WorkoutCategory,
    segment_type: SegmentType,
    duration_min: float | None,
    zone: int | None,
    targets: SegmentTargets | None,
    distance_km: float | None = None,
    description: str = "",
) -> WorkoutSegment:
    return WorkoutSegment(
        order=order,
        segment_type=segment_type,
        duration_min=round(duration_min, 1) if duration_min is not None else None,
        distance_km=round(distance_km, 2) if distance_km is not None else None,
        zone=zone,
        targets=targets,
        description=description,
        notes=get_coaching_cue(category, segment_type),
    )


def _minutes_for(distance_km: float, speed_kmh: float | None, fallback_min_per_km: float) -> float:
    if speed_kmh:
        return distance_km / speed_kmh * 60.0
    return distance_km * fallback_min_per_km


def build_long_run(
    params: SessionParams,
    zones: ZoneTable,
    workout_type: WorkoutType = WorkoutType.RUNNING,
) -> Workout:
    """10 min Z1 warm-up, aerobic main block, 10 min Z1 cool-down.

    Running long runs are distance-based; the main block covers the distance
    minus 2 km. With ``pace_percent`` and a marathon pace the main block is
    paced as a percentage of marathon pace instead of zone 2.
    """
    category = WorkoutCategory.LONG
    zone = params.zone or 2
    use_mp = bool(params.pace_percent and params.marathon_pace_kmh and zone_speed(zones, zone))
    if use_mp:
        main_targets = marathon_pace_targets(zones, params.marathon_pace_kmh, params.pace_percent, zone)
        main_speed = params.marathon_pace_kmh * params.pace_percent / 100.0
    else:
        main_targets = zone_targets(zones, zone)
        main_speed = zone_speed(zones, zone)

    if params.distance_km is not None:
        main_km = max(params.distance_km - _LONG_RUN_EASY_KM, 1.0)
        main_min = _minutes_for(main_km, main_speed, 6.0)
        distance = params.distance_km
        name = f"Long run {distance:g} km"
    else:
        main_km = None
        main_min = max((params.duration_min or 90.0) - LONG_RUN_WARMUP_MIN - LONG_RUN_COOLDOWN_MIN, 20.0)
        distance = None
        name = f"Long ride {round(main_min + LONG_RUN_WARMUP_MIN + LONG_RUN_COOLDOWN_MIN)} min"

    warm = zone_targets(zones, 1)
    segments = (
        _segment(1, category, SegmentType.WARMUP, LONG_RUN_WARMUP_MIN, 1, warm),
        _segment(2, category, SegmentType.WORK, main_min, zone, main_targets, main_km,
                 f"{params.pace_percent:g}% marathon pace" if use_mp else f"Zone {zone}"),
        _segment(3, category, SegmentType.COOLDOWN, LONG_RUN_COOLDOWN_MIN, 1, warm),
    )
    return Workout(
        category=category,
        workout_type=workout_type,
        name=name,
        intensity=WorkoutIntensity.MODERATE if use_mp else WorkoutIntensity.EASY,
        duration_min=round(sum(s.duration_min for s in segments), 1),
        distance_km=distance,
        target_zone=zone,
        instructions=params.description or "Long aerobic session",
        segments=segments,
        session_label=params.session_label,
    )


def build_tempo_run(
    params: SessionParams,
    zones: ZoneTable,
    workout_type: WorkoutType = WorkoutType.RUNNING,
) -> Workout:
    """15 min warm-up, continuous tempo block, 10 min cool-down."""
    category = WorkoutCategory.TEMPO
    zone = params.zone or 4
    work_min = params.duration_min or 20.0
    if params.pace_percent and params.marathon_pace_kmh and zone_speed(zones, zone):
        targets = marathon_pace_targets(zones, params.marathon_pace_kmh, params.pace_percent, zone)
        label = f"{work_min:g} min at {params.pace_percent:g}% marathon pace"
    else:
        targets = zone_targets(zones, zone)
        label = f"{work_min:g} min tempo Z{zone}"

    warm = zone_targets(zones, 1)
    segments = (
        _segment(1, category, SegmentType.WARMUP, TEMPO_WARMUP_MIN, 1, warm),
        _segment(2, category, SegmentType.WORK, work_min, zone, targets),
        _segment(3, category, SegmentType.COOLDOWN, TEMPO_COOLDOWN_MIN, 1, warm),
    )
    return Workout(
        category=category,
        workout_type=workout_type,
        name=label,
        intensity=WorkoutIntensity.THRESHOLD if zone >= 4 else WorkoutIntensity.MODERATE,
        duration_min=round(sum(s.duration_min for s in segments), 1),
        target_zone=zone,
        instructions=params.description or label,
        segments=segments,
        session_label=params.session_label,
    )


def build_intervals(
    params: SessionParams,
    zones: ZoneTable,
    workout_type: WorkoutType = WorkoutType.RUNNING,
) -> Workout:
    """20 min warm-up, reps × work with rests between (none after the last), 10 min cool-down."""
    category = WorkoutCategory.INTERVALS
    zone = params.zone or 4
    reps = params.reps or 1
    work_min = params.work_min or 3.0
    rest_min = params.rest_min or 0.0

    work_targets = zone_targets(zones, zone)
    easy = zone_targets(zones, 1)
    segments = [_segment(1, category, SegmentType.WARMUP, INTERVAL_WARMUP_MIN, 1, easy)]
    for rep in range(reps):
        segments.append(_segment(
            len(segments) + 1, category, SegmentType.INTERVAL, work_min, zone, work_targets,
            description=f"Rep {rep + 1}/{reps}",
        ))
        if rep < reps - 1 and rest_min > 0:
            segments.append(_segment(len(segments) + 1, category, SegmentType.REST, rest_min, 1, easy))
    segments.append(_segment(len(segments) + 1, category, SegmentType.COOLDOWN, INTERVAL_COOLDOWN_MIN, 1, easy))

    name = f"{reps}x{work_min:g} min Z{zone}"
    return Workout(
        category=category,
        workout_type=workout_type,
        name=name,
        intensity=WorkoutIntensity.INTERVAL if zone >= 5 else WorkoutIntensity.THRESHOLD,
        duration_min=round(sum(s.duration_min for s in segments), 1),
        target_zone=zone,
        instructions=params.description or name,
        segments=tuple(segments),
        session_label=params.session_label,
    )


def build_hill_sprints(
    params: SessionParams,
    zones: ZoneTable,
    workout_type: WorkoutType = WorkoutType.RUNNING,
) -> Workout:
    """Short maximal uphill reps. Effort-based: HR guidance only, no pace target."""
    category = WorkoutCategory.HILL_SPRINTS
    reps = params.reps or 8
    seconds = params.work_seconds or 10
    rest_min = params.rest_min or 2.0

    easy = zone_targets(zones, 1)
    segments = [_segment(1, category, SegmentType.WARMUP, INTERVAL_WARMUP_MIN, 1, easy)]
    for rep in range(reps):
        segments.append(_segment(
            len(segments) + 1, category, SegmentType.INTERVAL, seconds / 60.0, 5, None,
            description=f"Sprint {rep + 1}/{reps}, {seconds} s uphill",
        ))
        if rep < reps - 1:
            segments.append(_segment(len(segments) + 1, category, SegmentType.REST, rest_min, 1, None))
    segments.append(_segment(len(segments) + 1, category, SegmentType.COOLDOWN, INTERVAL_COOLDOWN_MIN, 1, easy))

    name = f"Hill sprints {reps}x{seconds}s"
    return Workout(
        category=category,
        workout_type=workout_type,
        name=name,
        intensity=WorkoutIntensity.MAX,
        duration_min=round(sum(s.duration_min for s in segments), 1),
        target_zone=5,
        instructions=params.description or name,
        segments=tuple(segments),
        session_label=params.session_label,
    )


def build_canova_intervals(
    params: SessionParams,
    zones: ZoneTable,
    workout_type: WorkoutType = WorkoutType.RUNNING,
) -> Workout:
    """Distance reps at a % of marathon pace with active recovery at a set %.

    Without a marathon pace the zone 3 midpoint stands in for it.
    """
    category = WorkoutCategory.CANOVA_INTERVALS
    reps = params.reps or 1
    rep_km = params.work_distance_km or 1.0
    pct = params.pace_percent or 100.0
    rec_km = params.recovery_distance_km or 0.0
    rec_pct = params.recovery_pace_percent or 85.0
    mp = params.marathon_pace_kmh or zone_speed(zones, 3) or 12.0
    zone = canova_zone(pct)

    work_targets = marathon_pace_targets(zones, mp, pct, zone)
    rec_targets = marathon_pace_targets(zones, mp, rec_pct, 2)
    work_min = _minutes_for(rep_km, mp * pct / 100.0, 4.0)
    rec_min = _minutes_for(rec_km, mp * rec_pct / 100.0, 5.0)

    easy = zone_targets(zones, 1)
    segments = [_segment(1, category, SegmentType.WARMUP, INTERVAL_WARMUP_MIN, 1, easy)]
    for rep in range(reps):
        segments.append(_segment(
            len(segments) + 1, category, SegmentType.INTERVAL, work_min, zone, work_targets, rep_km,
            description=f"{rep_km:g} km at {pct:g}% MP ({format_pace(work_targets.pace_low)})",
        ))
        if rep < reps - 1 and rec_km > 0:
            segments.append(_segment(
                len(segments) + 1, category, SegmentType.REST, rec_min, 2, rec_targets, rec_km,
                description=f"{rec_km:g} km at {rec_pct:g}% MP",
            ))
    segments.append(_segment(len(segments) + 1, category, SegmentType.COOLDOWN, INTERVAL_COOLDOWN_MIN, 1, easy))

    total_km = reps * rep_km + (reps - 1) * rec_km
    name = f"{reps}x{rep_km:g} km @ {pct:g}% MP"
    return Workout(
        category=category,
        workout_type=workout_type,
        name=name,
        intensity=WorkoutIntensity.THRESHOLD if zone >= 4 else WorkoutIntensity.MODERATE,
        duration_min=round(sum(s.duration_min for s in segments), 1),
        distance_km=round(total_km, 1),
        target_zone=zone,
        instructions=params.description or name,
        segments=tuple(segments),
        session_label=params.session_label,
    )


def build_easy_run(
    params: SessionParams,
    zones: ZoneTable,
    workout_type: WorkoutType = WorkoutType.RUNNING,
) -> Workout:
    """A single zone 2 segment."""
    category = WorkoutCategory.EASY
    zone = params.zone or 2
    duration = params.duration_min or 30.0
    segments = (
        _segment(1, category, SegmentType.WORK, duration, zone, zone_targets(zones, zone),
                 params.distance_km),
    )
    return Workout(
        category=category,
        workout_type=workout_type,
        name=f"Easy {round(duration)} min",
        intensity=WorkoutIntensity.EASY,
        duration_min=round(duration, 1),
        distance_km=params.distance_km,
        target_zone=zone,
        instructions=params.description or "Easy aerobic session",
        segments=segments,
        session_label=params.session_label,
    )

"""Strength, core, plyometric and recovery session builders.

References:
    Rønnestad & Mujika (2014). Optimizing strength training for running and
        cycling endurance performance. Scand J Med Sci Sports 24(4):603-612.
    Blagrove et al. (2018). Effects of strength training on the physiological
        determinants of middle- and long-distance running performance.
        Sports Med 48(5):1117-1149.
"""

from __future__ import annotations

from collections.abc import Sequence

from training_engine.models.enums import (
    CORE_SCHEME,
    CORE_SESSION_DURATION,
    MINUTES_PER_STRENGTH_SET,
    PLYOMETRIC_SCHEME,
    PLYOMETRIC_SESSION_DURATION,
    RECOVERY_SESSION_DURATION,
    STRENGTH_SCHEME,
    SegmentType,
    StrengthFocus,
    TrainingPhase,
    WorkoutCategory,
    WorkoutIntensity,
    WorkoutType,
)
from training_engine.models.workout import Workout, WorkoutSegment
from training_engine.workout_builder.coaching_cues import get_coaching_cue

# Assumed exercise count when the catalogue returned nothing
_PLACEHOLDER_EXERCISES = 4

_PHASE_GOAL = {
    TrainingPhase.BASE: "Anatomical adaptation",
    TrainingPhase.BUILD: "Maximal strength",
    TrainingPhase.PEAK: "Power and neuromuscular transfer",
    TrainingPhase.TAPER: "Maintenance",
}


def _exercise_segments(
    category: WorkoutCategory,
    exercises: Sequence[str],
    sets: int,
    reps: str,
    rest_seconds: int,
) -> tuple[WorkoutSegment, ...]:
    return tuple(
        WorkoutSegment(
            order=i,
            segment_type=SegmentType.EXERCISE,
            exercise_id=exercise_id,
            sets=sets,
            reps=reps,
            rest_seconds=rest_seconds,
            notes=get_coaching_cue(category, SegmentType.EXERCISE),
        )
        for i, exercise_id in enumerate(exercises, start=1)
    )


def build_strength_workout(
    phase: TrainingPhase,
    focus: StrengthFocus,
    exercises: Sequence[str],
    session_label: str | None = None,
) -> Workout:
    """Strength session with the phase's rep scheme.

    Duration is exercises × sets × 3 min. An empty exercise list still
    yields a session, sized for four exercises of the athlete's choice.
    """
    sets, reps, rest = STRENGTH_SCHEME[phase]
    count = len(exercises) or _PLACEHOLDER_EXERCISES
    instructions = f"{_PHASE_GOAL[phase]}: {sets}x{reps}, {rest}s rest"
    if not exercises:
        instructions += ". Choose exercises for the focus area."
    return Workout(
        category=WorkoutCategory.STRENGTH,
        workout_type=WorkoutType.STRENGTH,
        name=f"Strength ({focus.name.lower()})",
        intensity=WorkoutIntensity.MODERATE,
        duration_min=float(count * sets * MINUTES_PER_STRENGTH_SET),
        instructions=instructions,
        segments=_exercise_segments(WorkoutCategory.STRENGTH, exercises, sets, reps, rest),
        session_label=session_label,
    )


def build_core_workout(
    exercises: Sequence[str],
    session_label: str | None = None,
) -> Workout:
    sets, reps, rest = CORE_SCHEME
    return Workout(
        category=WorkoutCategory.CORE,
        workout_type=WorkoutType.CORE,
        name="Core stability",
        intensity=WorkoutIntensity.EASY,
        duration_min=float(CORE_SESSION_DURATION),
        instructions=f"{sets} rounds of {reps} per exercise, {rest}s rest",
        segments=_exercise_segments(WorkoutCategory.CORE, exercises, sets, reps, rest),
        session_label=session_label,
    )


def build_plyometric_workout(
    exercises: Sequence[str],
    session_label: str | None = None,
) -> Workout:
    sets, reps, rest = PLYOMETRIC_SCHEME
    return Workout(
        category=WorkoutCategory.PLYOMETRIC,
        workout_type=WorkoutType.PLYOMETRIC,
        name="Plyometrics",
        intensity=WorkoutIntensity.INTERVAL,
        duration_min=float(PLYOMETRIC_SESSION_DURATION),
        instructions=f"{sets}x{reps} contacts, {rest}s rest. Stop when contacts slow down.",
        segments=_exercise_segments(WorkoutCategory.PLYOMETRIC, exercises, sets, reps, rest),
        session_label=session_label,
    )


def build_recovery_workout(session_label: str | None = None) -> Workout:
    """30 min mobility session."""
    category = WorkoutCategory.RECOVERY
    return Workout(
        category=category,
        workout_type=WorkoutType.RECOVERY,
        name="Mobility and recovery",
        intensity=WorkoutIntensity.RECOVERY,
        duration_min=float(RECOVERY_SESSION_DURATION),
        instructions="Foam rolling, mobility flow and light stretching",
        segments=(
            WorkoutSegment(
                order=1,
                segment_type=SegmentType.WORK,
                duration_min=float(RECOVERY_SESSION_DURATION),
                notes=get_coaching_cue(category, SegmentType.WORK),
            ),
        ),
        session_label=session_label,
    )

"""WorkoutBuilder — turns planned week entries into structured workouts."""

from __future__ import annotations

from collections.abc import Sequence

from training_engine.models.enums import (
    StrengthFocus,
    TrainingPhase,
    WorkoutCategory,
    WorkoutType,
)
from training_engine.models.plan import WorkoutPlanEntry
from training_engine.models.workout import Workout
from training_engine.models.zones import ZoneTable
from training_engine.workout_builder.endurance import (
    build_canova_intervals,
    build_easy_run,
    build_hill_sprints,
    build_intervals,
    build_long_run,
    build_tempo_run,
)
from training_engine.workout_builder.strength import (
    build_core_workout,
    build_plyometric_workout,
    build_recovery_workout,
    build_strength_workout,
)

_ENDURANCE_BUILDERS = {
    WorkoutCategory.LONG: build_long_run,
    WorkoutCategory.TEMPO: build_tempo_run,
    WorkoutCategory.INTERVALS: build_intervals,
    WorkoutCategory.HILL_SPRINTS: build_hill_sprints,
    WorkoutCategory.CANOVA_INTERVALS: build_canova_intervals,
    WorkoutCategory.EASY: build_easy_run,
}

EXERCISE_CATEGORIES = (
    WorkoutCategory.STRENGTH,
    WorkoutCategory.CORE,
    WorkoutCategory.PLYOMETRIC,
)


def build_workout(
    entry: WorkoutPlanEntry,
    zones: ZoneTable,
    phase: TrainingPhase,
    exercises: Sequence[str] = (),
    endurance_type: WorkoutType = WorkoutType.RUNNING,
) -> Workout:
    """Build the workout for one planned entry.

    Args:
        entry: Planned session from the distribution engine.
        zones: Zone table supplying pace/power and HR targets.
        phase: Phase of the week (drives strength rep schemes).
        exercises: Exercise ids for strength/core/plyometric sessions.
        endurance_type: Sport of the endurance sessions.

    Returns:
        A fully structured Workout.

    Raises:
        ValueError: If no builder handles the entry's category.
    """
    category = entry.category
    params = entry.params
    if category in _ENDURANCE_BUILDERS:
        return _ENDURANCE_BUILDERS[category](params, zones, endurance_type)
    if category == WorkoutCategory.STRENGTH:
        return build_strength_workout(
            phase,
            params.strength_focus or StrengthFocus.FULL,
            exercises,
            params.session_label,
        )
    if category == WorkoutCategory.CORE:
        return build_core_workout(exercises, params.session_label)
    if category == WorkoutCategory.PLYOMETRIC:
        return build_plyometric_workout(exercises, params.session_label)
    if category == WorkoutCategory.RECOVERY:
        return build_recovery_workout(params.session_label)
    raise ValueError(f"No builder for workout category {category!r}")


class WorkoutBuilder:
    """Builds structured workouts against one zone table.

    Usage::

        builder = WorkoutBuilder(zones, WorkoutType.RUNNING)
        workout = builder.build(entry, TrainingPhase.BUILD, exercises)
    """

    def __init__(
        self,
        zones: ZoneTable,
        endurance_type: WorkoutType = WorkoutType.RUNNING,
    ) -> None:
        self.zones = zones
        self.endurance_type = endurance_type

    def build(
        self,
        entry: WorkoutPlanEntry,
        phase: TrainingPhase,
        exercises: Sequence[str] = (),
    ) -> Workout:
        return build_workout(entry, self.zones, phase, exercises, self.endurance_type)

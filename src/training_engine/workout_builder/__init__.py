"""Workout builder — turns planned entries into structured workouts."""

from training_engine.workout_builder.builder import EXERCISE_CATEGORIES, WorkoutBuilder, build_workout

__all__ = ["EXERCISE_CATEGORIES", "WorkoutBuilder", "build_workout"]

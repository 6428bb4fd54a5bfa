"""Tests for coaching cues — per-segment notes with RPE guidance."""

from __future__ import annotations

import pytest

from training_engine.models.enums import SegmentType, WorkoutCategory
from training_engine.workout_builder.coaching_cues import get_coaching_cue


class TestCoachingCues:
    def test_warmup_cue_for_any_category(self) -> None:
        cue = get_coaching_cue(WorkoutCategory.TEMPO, SegmentType.WARMUP)
        assert "easy" in cue.lower()

    def test_cooldown_cue_for_any_category(self) -> None:
        cue = get_coaching_cue(WorkoutCategory.INTERVALS, SegmentType.COOLDOWN)
        assert "hr" in cue.lower()

    @pytest.mark.parametrize(
        "category, segment_type",
        [
            (WorkoutCategory.EASY, SegmentType.WORK),
            (WorkoutCategory.LONG, SegmentType.WORK),
            (WorkoutCategory.TEMPO, SegmentType.WORK),
            (WorkoutCategory.INTERVALS, SegmentType.INTERVAL),
            (WorkoutCategory.HILL_SPRINTS, SegmentType.INTERVAL),
            (WorkoutCategory.CANOVA_INTERVALS, SegmentType.INTERVAL),
        ],
    )
    def test_main_sets_include_rpe(self, category: WorkoutCategory, segment_type: SegmentType) -> None:
        assert "RPE" in get_coaching_cue(category, segment_type)

    def test_long_run_mentions_fuel(self) -> None:
        assert "Fuel" in get_coaching_cue(WorkoutCategory.LONG, SegmentType.WORK)

    def test_category_cue_overrides_default(self) -> None:
        hills = get_coaching_cue(WorkoutCategory.HILL_SPRINTS, SegmentType.REST)
        generic = get_coaching_cue(WorkoutCategory.INTERVALS, SegmentType.REST)
        assert hills != generic
        assert "Walk down" in hills

    def test_canova_recovery_is_active(self) -> None:
        assert "Active recovery" in get_coaching_cue(WorkoutCategory.CANOVA_INTERVALS, SegmentType.REST)

    def test_exercise_default(self) -> None:
        assert get_coaching_cue(WorkoutCategory.STRENGTH, SegmentType.EXERCISE)

    def test_unknown_combination_is_empty(self) -> None:
        assert get_coaching_cue(WorkoutCategory.STRENGTH, SegmentType.WORK) == ""

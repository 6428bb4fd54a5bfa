"""Tests for the workout builders and their dispatch."""

from __future__ import annotations

from dataclasses import replace

import pytest

from training_engine.models.enums import (
    IntensityUnit,
    SegmentType,
    StrengthFocus,
    TrainingPhase,
    WorkoutCategory,
    WorkoutIntensity,
    WorkoutType,
)
from training_engine.models.plan import SessionParams, WorkoutPlanEntry
from training_engine.models.zones import TrainingZone, ZoneTable
from training_engine.workout_builder import WorkoutBuilder, build_workout
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
    build_recovery_workout,
    build_strength_workout,
)
from training_engine.workout_builder.targets import format_pace, speed_to_pace, zone_targets


@pytest.fixture
def speed_zones() -> ZoneTable:
    return ZoneTable(
        zones=(
            TrainingZone(1, "Recovery", 8.0, 9.5, 120, 135),
            TrainingZone(2, "Endurance", 9.5, 11.0, 136, 150),
            TrainingZone(3, "Tempo", 11.0, 13.0, 151, 165),
            TrainingZone(4, "Threshold", 13.0, 14.0, 166, 175),
            TrainingZone(5, "VO2max", 14.0, 17.0, 176, 188),
        ),
        unit=IntensityUnit.SPEED,
        threshold_intensity=13.6,
    )


@pytest.fixture
def power_zones() -> ZoneTable:
    return ZoneTable(
        zones=(
            TrainingZone(1, "Recovery", 110.0, 150.0, 110, 125),
            TrainingZone(2, "Endurance", 150.0, 190.0, 126, 140),
            TrainingZone(3, "Tempo", 190.0, 220.0, 141, 155),
            TrainingZone(4, "Threshold", 220.0, 240.0, 156, 165),
            TrainingZone(5, "VO2max", 240.0, 280.0, 166, 180),
        ),
        unit=IntensityUnit.POWER,
        threshold_intensity=230.0,
    )


def _types(workout) -> list[SegmentType]:
    return [s.segment_type for s in workout.segments]


class TestIntervals:
    def test_no_rest_after_last_rep(self, speed_zones: ZoneTable) -> None:
        workout = build_intervals(SessionParams(reps=5, work_min=3, rest_min=2, zone=5), speed_zones)
        types = _types(workout)
        assert types.count(SegmentType.INTERVAL) == 5
        assert types.count(SegmentType.REST) == 4
        assert types[0] == SegmentType.WARMUP
        assert types[-2] == SegmentType.INTERVAL
        assert types[-1] == SegmentType.COOLDOWN

    def test_duration_sums_segments(self, speed_zones: ZoneTable) -> None:
        workout = build_intervals(SessionParams(reps=5, work_min=3, rest_min=2, zone=5), speed_zones)
        assert workout.duration_min == 20 + 15 + 8 + 10

    def test_segments_ordered(self, speed_zones: ZoneTable) -> None:
        workout = build_intervals(SessionParams(reps=3, work_min=4, rest_min=2, zone=4), speed_zones)
        assert [s.order for s in workout.segments] == list(range(1, len(workout.segments) + 1))

    @pytest.mark.parametrize("zone, intensity", [(5, WorkoutIntensity.INTERVAL), (4, WorkoutIntensity.THRESHOLD)])
    def test_intensity_label(self, speed_zones: ZoneTable, zone: int, intensity: WorkoutIntensity) -> None:
        workout = build_intervals(SessionParams(reps=3, work_min=4, rest_min=2, zone=zone), speed_zones)
        assert workout.intensity == intensity

    def test_pace_targets_from_speed_zone(self, speed_zones: ZoneTable) -> None:
        workout = build_intervals(SessionParams(reps=3, work_min=8, rest_min=2, zone=4), speed_zones)
        targets = workout.main_targets
        assert targets.pace_low == pytest.approx(3600 / 14.0, abs=0.1)
        assert targets.pace_high == pytest.approx(3600 / 13.0, abs=0.1)
        assert (targets.hr_low, targets.hr_high) == (166, 175)
        assert targets.power_low is None

    def test_power_targets_from_power_zone(self, power_zones: ZoneTable) -> None:
        workout = build_intervals(
            SessionParams(reps=3, work_min=8, rest_min=2, zone=4), power_zones, WorkoutType.CYCLING
        )
        targets = workout.main_targets
        assert (targets.power_low, targets.power_high) == (220, 240)
        assert targets.pace_low is None
        assert workout.workout_type == WorkoutType.CYCLING


class TestHillSprints:
    def test_effort_based_without_pace(self, speed_zones: ZoneTable) -> None:
        workout = build_hill_sprints(SessionParams(reps=8, work_seconds=10, rest_min=2.0), speed_zones)
        sprints = [s for s in workout.segments if s.segment_type == SegmentType.INTERVAL]
        assert len(sprints) == 8
        assert all(s.targets is None for s in sprints)
        assert workout.intensity == WorkoutIntensity.MAX
        assert _types(workout).count(SegmentType.REST) == 7


class TestLongRun:
    def test_distance_based(self, speed_zones: ZoneTable) -> None:
        workout = build_long_run(SessionParams(distance_km=20.0, zone=2), speed_zones)
        assert workout.distance_km == 20.0
        assert workout.name == "Long run 20 km"
        assert workout.segments[1].distance_km == 18.0
        assert workout.intensity == WorkoutIntensity.EASY

    def test_marathon_pace_main_block(self, speed_zones: ZoneTable) -> None:
        params = SessionParams(distance_km=24.0, zone=2, pace_percent=85.0, marathon_pace_kmh=12.5)
        workout = build_long_run(params, speed_zones)
        main = workout.segments[1]
        assert main.targets.pace_low < speed_to_pace(12.5 * 0.85) < main.targets.pace_high
        assert workout.intensity == WorkoutIntensity.MODERATE

    def test_long_ride_in_minutes(self, power_zones: ZoneTable) -> None:
        workout = build_long_run(SessionParams(duration_min=120, zone=2), power_zones, WorkoutType.CYCLING)
        assert workout.distance_km is None
        assert workout.duration_min == 120.0
        assert workout.workout_type == WorkoutType.CYCLING


class TestOtherEndurance:
    def test_tempo_at_marathon_pace(self, speed_zones: ZoneTable) -> None:
        params = SessionParams(duration_min=30, zone=3, pace_percent=100.0, marathon_pace_kmh=12.5)
        workout = build_tempo_run(params, speed_zones)
        assert "marathon pace" in workout.name
        assert workout.duration_min == 15 + 30 + 10

    def test_canova_reps_with_active_recovery(self, speed_zones: ZoneTable) -> None:
        params = SessionParams(
            reps=4, work_distance_km=2.0, pace_percent=97.0,
            recovery_distance_km=0.8, recovery_pace_percent=80.0, marathon_pace_kmh=12.5,
        )
        workout = build_canova_intervals(params, speed_zones)
        assert _types(workout).count(SegmentType.INTERVAL) == 4
        assert _types(workout).count(SegmentType.REST) == 3
        assert workout.distance_km == 10.4
        rest = next(s for s in workout.segments if s.segment_type == SegmentType.REST)
        assert rest.distance_km == 0.8

    def test_easy_run_single_segment(self, speed_zones: ZoneTable) -> None:
        workout = build_easy_run(SessionParams(duration_min=45, distance_km=7.8, zone=2), speed_zones)
        assert len(workout.segments) == 1
        assert workout.segments[0].zone == 2
        assert workout.intensity == WorkoutIntensity.EASY

    def test_every_segment_has_a_cue(self, speed_zones: ZoneTable) -> None:
        workout = build_intervals(SessionParams(reps=3, work_min=4, rest_min=2, zone=4), speed_zones)
        assert all(s.notes for s in workout.segments)


class TestStrengthBuilders:
    def test_duration_from_sets(self) -> None:
        workout = build_strength_workout(TrainingPhase.BUILD, StrengthFocus.LOWER, ["a", "b", "c", "d"])
        assert workout.duration_min == 4 * 4 * 3
        assert all(s.sets == 4 and s.reps == "8-10" for s in workout.segments)

    def test_phase_changes_scheme(self) -> None:
        base = build_strength_workout(TrainingPhase.BASE, StrengthFocus.FULL, ["a", "b", "c"])
        assert base.duration_min == 3 * 3 * 3
        assert base.segments[0].reps == "12-15"

    def test_empty_exercise_list_still_a_session(self) -> None:
        workout = build_strength_workout(TrainingPhase.BUILD, StrengthFocus.UPPER, [])
        assert workout.segments == ()
        assert workout.duration_min == 48.0
        assert "Choose exercises" in workout.instructions

    def test_core_session(self) -> None:
        workout = build_core_workout(["c1", "c2", "c3", "c4"], "PM")
        assert workout.duration_min == 30.0
        assert workout.session_label == "PM"
        assert [s.exercise_id for s in workout.segments] == ["c1", "c2", "c3", "c4"]

    def test_recovery_session(self) -> None:
        workout = build_recovery_workout()
        assert workout.workout_type == WorkoutType.RECOVERY
        assert workout.duration_min == 30.0


class TestDispatch:
    @pytest.mark.parametrize("category", list(WorkoutCategory))
    def test_every_category_has_a_builder(self, speed_zones: ZoneTable, category: WorkoutCategory) -> None:
        entry = WorkoutPlanEntry(3, category, SessionParams())
        workout = build_workout(entry, speed_zones, TrainingPhase.BUILD)
        assert workout.category == category

    def test_builder_class_uses_endurance_type(self, power_zones: ZoneTable) -> None:
        builder = WorkoutBuilder(power_zones, WorkoutType.CYCLING)
        entry = WorkoutPlanEntry(2, WorkoutCategory.EASY, SessionParams(duration_min=60, zone=2))
        assert builder.build(entry, TrainingPhase.BASE).workout_type == WorkoutType.CYCLING

    def test_exercises_passed_through(self, speed_zones: ZoneTable) -> None:
        entry = WorkoutPlanEntry(
            2, WorkoutCategory.STRENGTH, SessionParams(strength_focus=StrengthFocus.LOWER, session_label="PM")
        )
        workout = WorkoutBuilder(speed_zones).build(entry, TrainingPhase.PEAK, ["x", "y"])
        assert [s.exercise_id for s in workout.segments] == ["x", "y"]
        assert workout.session_label == "PM"


class TestPaceFormatting:
    def test_format_pace(self) -> None:
        assert format_pace(305.0) == "5:05/km"

    def test_speed_to_pace(self) -> None:
        assert speed_to_pace(12.0) == 300.0

    def test_speed_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            speed_to_pace(0.0)

    def test_zone_from_zero_has_open_slow_bound(self, speed_zones: ZoneTable) -> None:
        zones = replace(
            speed_zones,
            zones=(TrainingZone(1, "Recovery", 0.0, 9.5, 120, 135),) + speed_zones.zones[1:],
        )
        targets = zone_targets(zones, 1)
        assert targets.pace_high is None
        assert targets.pace_low == round(speed_to_pace(9.5), 1)

"""Tests for the program creation payload."""

from __future__ import annotations

import json
from datetime import date

import pytest

from training_engine.models.enums import (
    Confidence,
    GoalType,
    IntensityUnit,
    MethodologyType,
    SegmentType,
    ThresholdMethod,
    TrainingPhase,
    WorkoutCategory,
    WorkoutIntensity,
    WorkoutType,
    ZoneSource,
)
from training_engine.models.lactate import ThresholdResult
from training_engine.models.program import TrainingDay, TrainingProgram, TrainingWeek
from training_engine.models.workout import SegmentTargets, Workout, WorkoutSegment
from training_engine.models.zones import TrainingZone, ZoneTable
from training_engine.serialization import to_program_json, to_program_payload, to_threshold_payload


def _make_threshold(warning: str | None = None) -> ThresholdResult:
    return ThresholdResult(
        intensity=14.2,
        lactate=3.1,
        heart_rate=171,
        method=ThresholdMethod.DMAX,
        r2=0.994,
        confidence=Confidence.HIGH,
        coefficients=(1.0, 0.1, 0.01, 0.001),
        distance=1.8,
        warning=warning,
    )


def _make_program(**overrides) -> TrainingProgram:
    easy = Workout(
        category=WorkoutCategory.EASY,
        workout_type=WorkoutType.RUNNING,
        name="Easy 45 min",
        intensity=WorkoutIntensity.EASY,
        duration_min=45.0,
        target_zone=2,
        segments=(
            WorkoutSegment(
                order=1,
                segment_type=SegmentType.WORK,
                duration_min=45.0,
                zone=2,
                targets=SegmentTargets(pace_low=327.3, pace_high=378.9, hr_low=136, hr_high=150),
            ),
        ),
    )
    week = TrainingWeek(
        week_number=1,
        phase=TrainingPhase.BASE,
        volume_percentage=70.0,
        volume=42.0,
        focus="Aerobic base",
        training_days=1,
        days=(
            TrainingDay(1, notes="Rest day"),
            TrainingDay(2, (easy,)),
        ),
    )
    values = dict(
        name="Marathon program (1 weeks)",
        athlete_id="athlete-1",
        goal_type=GoalType.MARATHON,
        methodology=MethodologyType.POLARIZED,
        start_date=date(2026, 1, 5),
        end_date=date(2026, 1, 11),
        zones=ZoneTable(
            zones=(TrainingZone(1, "Recovery", 8.0, 9.5, 120, 135, 55.0, 65.0),),
            unit=IntensityUnit.SPEED,
            source=ZoneSource.TEST,
            threshold_intensity=14.2,
        ),
        weeks=(week,),
    )
    values.update(overrides)
    return TrainingProgram(**values)


class TestProgramPayload:
    def test_top_level_keys(self) -> None:
        payload = to_program_payload(_make_program())
        assert payload["athleteId"] == "athlete-1"
        assert payload["goalType"] == "MARATHON"
        assert payload["methodology"] == "POLARIZED"
        assert payload["startDate"] == "2026-01-05"
        assert payload["endDate"] == "2026-01-11"
        assert payload["durationWeeks"] == 1
        assert payload["warnings"] == []

    def test_optional_fields_omitted(self) -> None:
        payload = to_program_payload(_make_program())
        for key in ("testId", "threshold", "targetRaceDate", "notes"):
            assert key not in payload

    def test_optional_fields_present(self) -> None:
        program = _make_program(
            test_id="run-1",
            threshold=_make_threshold(),
            target_race_date=date(2026, 4, 26),
            notes="Spring marathon",
        )
        payload = to_program_payload(program)
        assert payload["testId"] == "run-1"
        assert payload["threshold"]["method"] == "DMAX"
        assert payload["targetRaceDate"] == "2026-04-26"
        assert payload["notes"] == "Spring marathon"

    def test_zone_table(self) -> None:
        zones = to_program_payload(_make_program())["zones"]
        assert zones["unit"] == "SPEED"
        assert zones["source"] == "TEST"
        assert zones["thresholdIntensity"] == 14.2
        assert zones["zones"][0] == {
            "zone": 1,
            "name": "Recovery",
            "intensityLow": 8.0,
            "intensityHigh": 9.5,
            "hrLow": 120,
            "hrHigh": 135,
            "percentLow": 55.0,
            "percentHigh": 65.0,
        }

    def test_week_and_days(self) -> None:
        week = to_program_payload(_make_program())["weeks"][0]
        assert week["weekNumber"] == 1
        assert week["phase"] == "BASE"
        assert week["isDeload"] is False
        rest, run = week["days"]
        assert rest == {"dayNumber": 1, "workouts": [], "notes": "Rest day"}
        assert "notes" not in run

    def test_workout_drops_unset_fields(self) -> None:
        workout = to_program_payload(_make_program())["weeks"][0]["days"][1]["workouts"][0]
        assert workout["category"] == "EASY"
        assert workout["type"] == "RUNNING"
        assert "distanceKm" not in workout
        assert "sessionLabel" not in workout
        assert "instructions" not in workout
        segment = workout["segments"][0]
        assert segment["segmentType"] == "WORK"
        assert segment["targets"] == {"paceLow": 327.3, "paceHigh": 378.9, "hrLow": 136, "hrHigh": 150}
        assert "exerciseId" not in segment

    def test_json_is_parseable(self) -> None:
        text = to_program_json(_make_program(threshold=_make_threshold()))
        assert json.loads(text) == to_program_payload(_make_program(threshold=_make_threshold()))


class TestThresholdPayload:
    def test_fields(self) -> None:
        payload = to_threshold_payload(_make_threshold())
        assert payload["intensity"] == 14.2
        assert payload["heartRate"] == 171
        assert payload["confidence"] == "HIGH"
        assert payload["coefficients"] == [1.0, 0.1, 0.01, 0.001]
        assert "warning" not in payload

    def test_warning_included(self) -> None:
        payload = to_threshold_payload(_make_threshold("Poor polynomial fit"))
        assert payload["warning"] == "Poor polynomial fit"

    @pytest.mark.parametrize("method", list(ThresholdMethod))
    def test_method_name(self, method: ThresholdMethod) -> None:
        result = ThresholdResult(10.0, 2.0, 150, method, 0.9, Confidence.MEDIUM)
        assert to_threshold_payload(result)["method"] == method.name

"""Tests for parsing JSON input documents."""

from __future__ import annotations

from datetime import date

import pytest

from training_engine.exceptions import ValidationError
from training_engine.models.enums import AthleteLevel, ExperienceLevel, GoalType, IntensityUnit
from training_engine.serialization import parse_params, parse_test_record


class TestParseTestRecord:
    def test_stages(self) -> None:
        record = parse_test_record({
            "testId": "t1",
            "unit": "power",
            "maxHr": 188,
            "intensity": [100, 150, 200, 250],
            "lactate": [1.1, 1.6, 3.0, 6.2],
            "heartRate": [120, 140, 160, 178],
        })
        assert record.test_id == "t1"
        assert record.max_hr == 188
        assert record.stages.unit == IntensityUnit.POWER
        assert record.stages.intensity == (100.0, 150.0, 200.0, 250.0)
        assert record.stored_zones == ()
        assert record.stored_unit == IntensityUnit.POWER

    def test_stored_zones_only(self) -> None:
        record = parse_test_record({
            "testId": "t2",
            "storedZones": [
                {"zone": 1, "name": "Recovery", "intensityLow": 8.0, "intensityHigh": 9.5, "hrLow": 120},
                {"zone": 2, "intensityLow": 9.5, "intensityHigh": 11.0},
            ],
        })
        assert record.stages is None
        assert record.stored_zones[0].hr_low == 120
        assert record.stored_zones[1].name == "Zone 2"
        assert record.stored_zones[1].hr_low is None
        assert record.stored_unit is None

    def test_stored_zones_keep_their_unit(self) -> None:
        record = parse_test_record({
            "testId": "t3",
            "unit": "PACE",
            "storedZones": [{"zone": 1, "intensityLow": 7.0, "intensityHigh": 6.0}],
        })
        assert record.stored_unit == IntensityUnit.PACE

    def test_unknown_unit(self) -> None:
        with pytest.raises(ValidationError, match="Malformed test record"):
            parse_test_record({"unit": "furlongs"})

    def test_missing_lactate(self) -> None:
        with pytest.raises(ValidationError):
            parse_test_record({"intensity": [10, 11, 12], "heartRate": [140, 150, 160]})

    def test_unordered_stages(self) -> None:
        with pytest.raises(ValidationError):
            parse_test_record({
                "intensity": [12, 11, 10],
                "lactate": [1.0, 2.0, 3.0],
                "heartRate": [140, 150, 160],
            })


class TestParseParams:
    def test_minimal(self) -> None:
        params = parse_params({
            "athleteId": "a1",
            "goalType": "half_marathon",
            "durationWeeks": 12,
            "trainingDaysPerWeek": 5,
        })
        assert params.goal_type == GoalType.HALF_MARATHON
        assert params.experience_level == ExperienceLevel.INTERMEDIATE
        assert params.start_date is None
        assert params.recent_race is None
        assert params.schedule_strength_after_running is True

    def test_full(self) -> None:
        params = parse_params({
            "athleteId": "a1",
            "goalType": "MARATHON",
            "durationWeeks": 16,
            "trainingDaysPerWeek": 6,
            "experienceLevel": "advanced",
            "startDate": "2026-01-05",
            "targetRaceDate": "2026-04-26",
            "targetTime": "2:59:00",
            "methodology": "CANOVA",
            "athleteLevel": "elite",
            "recentRace": {"distanceKm": 21.0975, "timeSeconds": 5100, "raceDate": "2025-11-02"},
            "strengthSessionsPerWeek": 1,
            "hasLactateMeter": True,
            "notes": "Spring block",
        })
        assert params.start_date == date(2026, 1, 5)
        assert params.athlete_level == AthleteLevel.ELITE
        assert params.recent_race.race_date == date(2025, 11, 2)
        assert params.recent_race.time_seconds == 5100.0
        assert params.methodology == "CANOVA"
        assert params.has_lactate_meter is True
        assert params.notes == "Spring block"

    @pytest.mark.parametrize(
        "data",
        [
            {"goalType": "MARATHON", "durationWeeks": 16, "trainingDaysPerWeek": 4},
            {"athleteId": "a", "goalType": "ULTRA", "durationWeeks": 16, "trainingDaysPerWeek": 4},
            {"athleteId": "a", "goalType": "MARATHON", "durationWeeks": "many", "trainingDaysPerWeek": 4},
            {"athleteId": "a", "goalType": "MARATHON", "durationWeeks": 16, "trainingDaysPerWeek": 4,
             "startDate": "05/01/2026"},
        ],
    )
    def test_malformed(self, data: dict) -> None:
        with pytest.raises(ValidationError, match="Malformed generation request"):
            parse_params(data)

    def test_numeric_strings_coerced(self) -> None:
        params = parse_params({
            "athleteId": "a1",
            "goalType": "MARATHON",
            "durationWeeks": 16,
            "trainingDaysPerWeek": 4,
            "currentWeeklyVolume": "40",
            "coreSessionsPerWeek": "2",
            "longestLongRunKm": 18,
        })
        assert params.current_weekly_volume == 40.0
        assert params.core_sessions_per_week == 2
        assert params.longest_long_run_km == 18.0

    @pytest.mark.parametrize(
        "key, value",
        [
            ("currentWeeklyVolume", "lots"),
            ("strengthSessionsPerWeek", "twice"),
            ("longestLongRunKm", [20]),
        ],
    )
    def test_non_numeric_rejected(self, key: str, value) -> None:
        data = {"athleteId": "a", "goalType": "MARATHON", "durationWeeks": 16, "trainingDaysPerWeek": 4}
        with pytest.raises(ValidationError, match="Malformed generation request"):
            parse_params({**data, key: value})

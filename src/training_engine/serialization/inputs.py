"""Parse camelCase JSON input documents into model objects.

Test record document::

    {"testId": "t1", "unit": "POWER", "maxHr": 190,
     "intensity": [...], "lactate": [...], "heartRate": [...],
     "storedZones": [{"zone": 1, "name": "Recovery",
                      "intensityLow": 8.0, "intensityHigh": 9.5, ...}]}

Generation request document mirrors ``ProgramGenerationParams`` with
camelCase keys; enums are given by name and dates as ISO strings.
"""

from __future__ import annotations

from datetime import date

from training_engine.exceptions import ValidationError
from training_engine.models.enums import AthleteLevel, ExperienceLevel, GoalType, IntensityUnit
from training_engine.models.lactate import LactateTestData
from training_engine.models.params import ProgramGenerationParams, RaceResult, TestRecord
from training_engine.models.zones import TrainingZone


def parse_test_record(data: dict) -> TestRecord:
    """Build a TestRecord from a parsed JSON document.

    Raises:
        ValidationError: On missing keys, unknown enum names or bad values.
    """
    try:
        unit = IntensityUnit[data.get("unit", "SPEED").upper()]
        stages = None
        if data.get("intensity"):
            stages = LactateTestData(
                intensity=tuple(float(v) for v in data["intensity"]),
                lactate=tuple(float(v) for v in data["lactate"]),
                heart_rate=tuple(float(v) for v in data["heartRate"]),
                unit=unit,
            )
        stored = tuple(
            TrainingZone(
                zone=int(z["zone"]),
                name=z.get("name", f"Zone {z['zone']}"),
                intensity_low=float(z["intensityLow"]),
                intensity_high=float(z["intensityHigh"]),
                hr_low=z.get("hrLow"),
                hr_high=z.get("hrHigh"),
                percent_low=z.get("percentLow"),
                percent_high=z.get("percentHigh"),
            )
            for z in data.get("storedZones", ())
        )
        max_hr = data.get("maxHr")
        return TestRecord(
            test_id=str(data.get("testId", "")),
            stages=stages,
            stored_zones=stored,
            max_hr=int(max_hr) if max_hr is not None else None,
            stored_unit=unit if "unit" in data else None,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValidationError(f"Malformed test record: {exc!r}") from exc


def parse_params(data: dict) -> ProgramGenerationParams:
    """Build ProgramGenerationParams from a parsed JSON document.

    Raises:
        ValidationError: On missing keys, unknown enum names or bad values.
    """
    try:
        race = data.get("recentRace")
        level = data.get("athleteLevel")
        return ProgramGenerationParams(
            athlete_id=str(data["athleteId"]),
            goal_type=GoalType[data["goalType"].upper()],
            duration_weeks=int(data["durationWeeks"]),
            training_days_per_week=int(data["trainingDaysPerWeek"]),
            experience_level=ExperienceLevel[data.get("experienceLevel", "INTERMEDIATE").upper()],
            start_date=_parse_date(data.get("startDate")),
            target_race_date=_parse_date(data.get("targetRaceDate")),
            target_time=_optional(data, "targetTime", str),
            current_weekly_volume=_optional(data, "currentWeeklyVolume", float),
            methodology=_optional(data, "methodology", str),
            athlete_level=AthleteLevel[level.upper()] if level else None,
            recent_race=RaceResult(
                distance_km=float(race["distanceKm"]),
                time_seconds=float(race["timeSeconds"]),
                race_date=_parse_date(race.get("raceDate")),
            ) if race else None,
            strength_sessions_per_week=_optional(data, "strengthSessionsPerWeek", int),
            core_sessions_per_week=_optional(data, "coreSessionsPerWeek", int),
            schedule_strength_after_running=bool(data.get("scheduleStrengthAfterRunning", True)),
            schedule_core_after_running=bool(data.get("scheduleCoreAfterRunning", True)),
            longest_long_run_km=_optional(data, "longestLongRunKm", float),
            has_lactate_meter=bool(data.get("hasLactateMeter", False)),
            notes=str(data.get("notes", "")),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValidationError(f"Malformed generation request: {exc!r}") from exc


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _optional(data: dict, key: str, cast):
    """``cast(data[key])``, or None when the key is missing or null."""
    value = data.get(key)
    return cast(value) if value is not None else None

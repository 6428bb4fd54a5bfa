"""Program creation payload for an external store.

Converts a TrainingProgram into a JSON-ready dict with camelCase keys, ISO
dates and enum names. Unset optional fields are omitted.

All functions are pure (no I/O, no network calls).
"""

from __future__ import annotations

import json

from training_engine.models.lactate import ThresholdResult
from training_engine.models.program import TrainingDay, TrainingProgram, TrainingWeek
from training_engine.models.workout import SegmentTargets, Workout, WorkoutSegment
from training_engine.models.zones import TrainingZone, ZoneTable


def to_program_payload(program: TrainingProgram) -> dict:
    """Convert a TrainingProgram to a creation payload dict."""
    payload = {
        "name": program.name,
        "athleteId": program.athlete_id,
        "goalType": program.goal_type.name,
        "methodology": program.methodology.name,
        "startDate": program.start_date.isoformat(),
        "endDate": program.end_date.isoformat(),
        "durationWeeks": program.duration_weeks,
        "zones": _convert_zone_table(program.zones),
        "weeks": [_convert_week(w) for w in program.weeks],
        "warnings": list(program.warnings),
    }
    if program.test_id is not None:
        payload["testId"] = program.test_id
    if program.threshold is not None:
        payload["threshold"] = to_threshold_payload(program.threshold)
    if program.target_race_date is not None:
        payload["targetRaceDate"] = program.target_race_date.isoformat()
    if program.notes:
        payload["notes"] = program.notes
    return payload


def to_program_json(program: TrainingProgram, indent: int = 2) -> str:
    """Convert a TrainingProgram to a JSON string."""
    return json.dumps(to_program_payload(program), indent=indent)


def to_threshold_payload(result: ThresholdResult) -> dict:
    payload = {
        "intensity": result.intensity,
        "lactate": result.lactate,
        "heartRate": result.heart_rate,
        "method": result.method.name,
        "r2": result.r2,
        "confidence": result.confidence.name,
        "coefficients": list(result.coefficients),
        "distance": result.distance,
    }
    if result.warning:
        payload["warning"] = result.warning
    return payload


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _convert_zone_table(table: ZoneTable) -> dict:
    result = {
        "unit": table.unit.name,
        "source": table.source.name,
        "zones": [_convert_zone(z) for z in table.zones],
    }
    if table.threshold_intensity is not None:
        result["thresholdIntensity"] = table.threshold_intensity
    return result


def _convert_zone(zone: TrainingZone) -> dict:
    return _compact({
        "zone": zone.zone,
        "name": zone.name,
        "intensityLow": zone.intensity_low,
        "intensityHigh": zone.intensity_high,
        "hrLow": zone.hr_low,
        "hrHigh": zone.hr_high,
        "percentLow": zone.percent_low,
        "percentHigh": zone.percent_high,
    })


def _convert_week(week: TrainingWeek) -> dict:
    return {
        "weekNumber": week.week_number,
        "phase": week.phase.name,
        "volumePercentage": week.volume_percentage,
        "volume": week.volume,
        "focus": week.focus,
        "trainingDays": week.training_days,
        "isDeload": week.is_deload,
        "days": [_convert_day(d) for d in week.days],
    }


def _convert_day(day: TrainingDay) -> dict:
    result = {
        "dayNumber": day.day_number,
        "workouts": [_convert_workout(w) for w in day.workouts],
    }
    if day.notes:
        result["notes"] = day.notes
    return result


def _convert_workout(workout: Workout) -> dict:
    return _compact({
        "category": workout.category.name,
        "type": workout.workout_type.name,
        "name": workout.name,
        "intensity": workout.intensity.name,
        "durationMin": workout.duration_min,
        "distanceKm": workout.distance_km,
        "targetZone": workout.target_zone,
        "instructions": workout.instructions or None,
        "sessionLabel": workout.session_label,
        "segments": [_convert_segment(s) for s in workout.segments],
    })


def _convert_segment(segment: WorkoutSegment) -> dict:
    return _compact({
        "order": segment.order,
        "segmentType": segment.segment_type.name,
        "durationMin": segment.duration_min,
        "distanceKm": segment.distance_km,
        "zone": segment.zone,
        "targets": _convert_targets(segment.targets) if segment.targets else None,
        "exerciseId": segment.exercise_id,
        "sets": segment.sets,
        "reps": segment.reps,
        "restSeconds": segment.rest_seconds,
        "description": segment.description or None,
        "notes": segment.notes or None,
    })


def _convert_targets(targets: SegmentTargets) -> dict:
    """Pace bounds in s/km (low = faster), power in watts, HR in bpm."""
    return _compact({
        "paceLow": targets.pace_low,
        "paceHigh": targets.pace_high,
        "powerLow": targets.power_low,
        "powerHigh": targets.power_high,
        "hrLow": targets.hr_low,
        "hrHigh": targets.hr_high,
    })


def _compact(d: dict) -> dict:
    return {k: v for k, v in d.items() if v is not None}

"""Marathon-pace selection and progression for running plans.

Marathon pace anchors the Canova percentages and long-run pacing. The most
reliable available source wins: a recent race result, then the lactate
threshold, then the zone table, then a conservative default.

References:
    Riegel (1981). Athletic records and human endurance. Am Sci 69(3):285-290.
    Jones (2006). The physiology of the world record holder for the women's
        marathon. Int J Sports Sci Coach 1(2):101-116.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from training_engine.models.enums import (
    DEFAULT_MARATHON_PACE_KMH,
    HALF_MARATHON_DISTANCE_KM,
    MARATHON_DISTANCE_KM,
    MARATHON_PACE_FRACTION_OF_THRESHOLD,
    RACE_TEST_MISMATCH_TOLERANCE,
    RIEGEL_EXPONENT,
    Confidence,
    GoalType,
    IntensityUnit,
)
from training_engine.models.params import RaceResult
from training_engine.models.zones import ZoneTable

logger = logging.getLogger(__name__)

# Realistic improvement over one training block
_MAX_TARGET_IMPROVEMENT = 0.05

_RACE_DISTANCE_KM = {
    GoalType.MARATHON: MARATHON_DISTANCE_KM,
    GoalType.HALF_MARATHON: HALF_MARATHON_DISTANCE_KM,
    GoalType.TEN_K: 10.0,
    GoalType.FIVE_K: 5.0,
}


@dataclass(frozen=True)
class MarathonPaceEstimate:
    speed_kmh: float
    source: str  # RACE_RESULT, LACTATE_TEST, TRAINING_ZONES, DEFAULT
    confidence: Confidence
    warning: str | None = None


def race_distance_km(goal: GoalType) -> float | None:
    return _RACE_DISTANCE_KM.get(goal)


def riegel_time(time_seconds: float, from_km: float, to_km: float) -> float:
    """Predict a race time at another distance: T2 = T1 · (D2/D1)^1.06."""
    return time_seconds * (to_km / from_km) ** RIEGEL_EXPONENT


def marathon_speed_from_race(race: RaceResult) -> float:
    """Equivalent marathon speed (km/h) of a race result."""
    seconds = riegel_time(race.time_seconds, race.distance_km, MARATHON_DISTANCE_KM)
    return MARATHON_DISTANCE_KM / (seconds / 3600.0)


def parse_goal_time(target_time: str | None, goal: GoalType) -> float | None:
    """Parse a goal time into seconds.

    Accepts "H:MM:SS", or two-part times read as "H:MM" for marathon and
    half marathon and "MM:SS" for shorter races. Returns None when the
    string cannot be parsed.
    """
    if not target_time:
        return None
    try:
        parts = [int(p) for p in target_time.strip().split(":")]
    except ValueError:
        logger.warning("Unparseable goal time %r", target_time)
        return None
    if any(p < 0 for p in parts):
        return None
    if len(parts) == 3:
        hours, minutes, seconds = parts
    elif len(parts) == 2 and goal in (GoalType.MARATHON, GoalType.HALF_MARATHON):
        hours, minutes = parts
        seconds = 0
    elif len(parts) == 2:
        hours = 0
        minutes, seconds = parts
    else:
        logger.warning("Unparseable goal time %r", target_time)
        return None
    total = hours * 3600 + minutes * 60 + seconds
    return float(total) if total > 0 else None


def select_reliable_marathon_pace(
    zones: ZoneTable | None,
    threshold_speed_kmh: float | None = None,
    race: RaceResult | None = None,
) -> MarathonPaceEstimate:
    """Choose the most reliable marathon pace (km/h).

    Priority: recent race result (Riegel-converted), lactate threshold speed
    × 0.90, zone 3 midpoint, then a 12 km/h default. When both a race and a
    threshold are available and disagree by more than 10%, the race wins and
    the mismatch is reported.
    """
    test_speed = (
        threshold_speed_kmh * MARATHON_PACE_FRACTION_OF_THRESHOLD
        if threshold_speed_kmh
        else None
    )

    if race is not None and race.distance_km > 0 and race.time_seconds > 0:
        speed = marathon_speed_from_race(race)
        warning = None
        if test_speed and abs(speed - test_speed) / test_speed > RACE_TEST_MISMATCH_TOLERANCE:
            warning = (
                f"Race-derived marathon pace ({speed:.2f} km/h) differs from "
                f"lactate test ({test_speed:.2f} km/h) by more than "
                f"{RACE_TEST_MISMATCH_TOLERANCE:.0%}"
            )
            logger.warning(warning)
        return MarathonPaceEstimate(round(speed, 2), "RACE_RESULT", Confidence.HIGH, warning)

    if test_speed:
        return MarathonPaceEstimate(round(test_speed, 2), "LACTATE_TEST", Confidence.HIGH)

    if zones is not None and zones.unit == IntensityUnit.SPEED:
        zone3 = zones.get(3)
        if zone3 is not None and zone3.intensity_mid > 0:
            return MarathonPaceEstimate(
                round(zone3.intensity_mid, 2), "TRAINING_ZONES", Confidence.MEDIUM
            )

    return MarathonPaceEstimate(
        DEFAULT_MARATHON_PACE_KMH,
        "DEFAULT",
        Confidence.LOW,
        "No race, threshold or zones for marathon pace; using default",
    )


def target_marathon_speed(target_time: str | None, goal: GoalType) -> float | None:
    """Marathon-equivalent speed (km/h) of a goal time, if it parses."""
    distance = race_distance_km(goal)
    seconds = parse_goal_time(target_time, goal)
    if distance is None or seconds is None:
        return None
    marathon_seconds = riegel_time(seconds, distance, MARATHON_DISTANCE_KM)
    return MARATHON_DISTANCE_KM / (marathon_seconds / 3600.0)


def progressive_marathon_pace(
    current_kmh: float,
    target_kmh: float | None,
    week_number: int,
    total_weeks: int,
) -> float:
    """Marathon pace for a given week, moving linearly toward the target.

    Targets slower than current fitness are ignored; targets more than 5%
    faster are capped.
    """
    if target_kmh is None or target_kmh <= current_kmh or total_weeks <= 1:
        return round(current_kmh, 2)
    target = min(target_kmh, current_kmh * (1 + _MAX_TARGET_IMPROVEMENT))
    progress = (week_number - 1) / (total_weeks - 1)
    return round(current_kmh + (target - current_kmh) * progress, 2)

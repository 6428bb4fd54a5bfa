"""Methodology selection from the request, athlete level and goal.

Automatic selection prefers the safest option: POLARIZED unless the athlete
is clearly advanced with a long-distance goal.
"""

from __future__ import annotations

import logging

from training_engine.math.zones import validate_elite_paces
from training_engine.methodology.configs import get_methodology_config
from training_engine.models.enums import (
    AthleteLevel,
    ExperienceLevel,
    GoalType,
    MethodologyType,
)
from training_engine.models.methodology import MethodologySelection
from training_engine.models.params import ElitePaces

logger = logging.getLogger(__name__)

_AUTO = "AUTO"

# Requested names without an implementation of their own
_ALIASES = {
    "LYDIARD": MethodologyType.CANOVA,
    "THRESHOLD": MethodologyType.NORWEGIAN_SINGLE,
    "DOUBLE_THRESHOLD": MethodologyType.NORWEGIAN,
    "80_20": MethodologyType.POLARIZED,
}

_LONG_DISTANCE_GOALS = (GoalType.MARATHON, GoalType.HALF_MARATHON)
_SHORT_RACE_GOALS = (GoalType.TEN_K, GoalType.FIVE_K)
_EXPERIENCED = (AthleteLevel.ADVANCED, AthleteLevel.ELITE)

# Metabolic profiles that respond better to high-intensity work
_FAST_TWITCH_TYPES = {"FAST_TWITCH", "SPEED", "ANAEROBIC"}


def map_experience_to_athlete_level(experience: ExperienceLevel) -> AthleteLevel:
    return {
        ExperienceLevel.BEGINNER: AthleteLevel.BEGINNER,
        ExperienceLevel.INTERMEDIATE: AthleteLevel.RECREATIONAL,
        ExperienceLevel.ADVANCED: AthleteLevel.ADVANCED,
    }[experience]


def recommend_methodology(
    level: AthleteLevel,
    goal: GoalType,
    metabolic_type: str | None = None,
    has_lactate_meter: bool = False,
) -> MethodologySelection:
    """Recommend a methodology from a reference-pace athlete classification."""
    fast_twitch = (metabolic_type or "").upper() in _FAST_TWITCH_TYPES

    if level in _EXPERIENCED and goal in _LONG_DISTANCE_GOALS:
        return MethodologySelection(
            MethodologyType.CANOVA,
            f"{level.name} athlete with {goal.name} goal: marathon-specific",
        )
    if level in _EXPERIENCED and goal in _SHORT_RACE_GOALS and not fast_twitch:
        if has_lactate_meter:
            return MethodologySelection(
                MethodologyType.NORWEGIAN_SINGLE,
                f"{level.name} athlete with lactate meter: threshold-controlled",
            )
        return MethodologySelection(
            MethodologyType.PYRAMIDAL,
            f"{level.name} athlete without lactate meter: pyramidal",
        )
    if level == AthleteLevel.RECREATIONAL and goal in (*_LONG_DISTANCE_GOALS, *_SHORT_RACE_GOALS):
        return MethodologySelection(
            MethodologyType.PYRAMIDAL,
            f"Recreational athlete with {goal.name} goal: pyramidal",
        )
    return MethodologySelection(MethodologyType.POLARIZED, "Default: polarized")


def select_methodology(
    requested: MethodologyType | str | None,
    athlete_level: AthleteLevel,
    goal: GoalType,
    elite: ElitePaces | None = None,
    has_lactate_meter: bool = False,
) -> MethodologySelection:
    """Resolve the methodology a program is built with.

    - An implemented methodology is used as requested.
    - Known aliases (e.g. LYDIARD) map to their nearest implemented
      equivalent.
    - None or "AUTO" selects automatically: from the reference-pace
      classification when valid reference paces exist, otherwise advanced
      and elite athletes with a marathon or half-marathon goal get CANOVA
      and everyone else POLARIZED.
    - Anything else falls back to POLARIZED with a warning.
    """
    if isinstance(requested, MethodologyType):
        _warn_if_underqualified(requested, athlete_level)
        return MethodologySelection(requested, f"Requested {requested.name}")

    name = (requested or _AUTO).strip().upper()
    if name in MethodologyType.__members__:
        chosen = MethodologyType[name]
        _warn_if_underqualified(chosen, athlete_level)
        return MethodologySelection(chosen, f"Requested {chosen.name}")
    if name in _ALIASES:
        chosen = _ALIASES[name]
        logger.info("Methodology %s mapped to %s", name, chosen.name)
        return MethodologySelection(chosen, f"{name} mapped to {chosen.name}")
    if name != _AUTO:
        logger.warning("Unknown methodology %r, using POLARIZED", requested)
        return MethodologySelection(
            MethodologyType.POLARIZED, f"Unknown methodology {requested!r}: polarized"
        )

    if validate_elite_paces(elite):
        level = elite.athlete_level or athlete_level
        selection = recommend_methodology(
            level, goal, elite.metabolic_type, has_lactate_meter
        )
    elif athlete_level in _EXPERIENCED and goal in _LONG_DISTANCE_GOALS:
        selection = MethodologySelection(
            MethodologyType.CANOVA,
            f"{athlete_level.name} athlete with {goal.name} goal",
        )
    else:
        selection = MethodologySelection(MethodologyType.POLARIZED, "Default: polarized")
    logger.info("Auto-selected %s (%s)", selection.type.name, selection.reason)
    return selection


def _warn_if_underqualified(methodology: MethodologyType, level: AthleteLevel) -> None:
    config = get_methodology_config(methodology)
    if level < config.min_athlete_level:
        logger.warning(
            "%s is intended for %s athletes and above, athlete is %s",
            config.name,
            config.min_athlete_level.name,
            level.name,
        )

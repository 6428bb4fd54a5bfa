"""Methodology configurations.

References:
    Seiler (2010). What is best practice for training intensity and duration
        distribution in endurance athletes? Int J Sports Physiol Perform 5(3).
    Stöggl & Sperlich (2015). The training intensity distribution among
        well-trained and elite endurance athletes. Front Physiol 6:295.
    Casado et al. (2023). Training periodization, methods, intensity
        distribution, and volume in highly trained and elite distance runners:
        a systematic review (Norwegian double-threshold model).
    Canova (1999). Marathon Training: A Scientific Approach.
"""

from __future__ import annotations

from dataclasses import replace

from training_engine.models.enums import AthleteLevel, MethodologyType
from training_engine.models.methodology import (
    MethodologyConfig,
    WeeklyStructure,
    ZoneDistribution,
)

_CONFIGS: dict[MethodologyType, MethodologyConfig] = {
    MethodologyType.POLARIZED: MethodologyConfig(
        type=MethodologyType.POLARIZED,
        name="Polarized 80/20",
        zone_distribution=ZoneDistribution(easy=80.0, moderate=5.0, hard=15.0),
        weekly_structure=WeeklyStructure(
            total_sessions=5, easy_runs=2, quality_sessions=2, rest_days=2,
        ),
        min_weekly_sessions=3,
        max_weekly_sessions=7,
        deload_frequency_weeks=4,
        volume_reduction_percent=20.0,
    ),
    MethodologyType.PYRAMIDAL: MethodologyConfig(
        type=MethodologyType.PYRAMIDAL,
        name="Pyramidal",
        zone_distribution=ZoneDistribution(easy=72.0, moderate=18.0, hard=10.0),
        weekly_structure=WeeklyStructure(
            total_sessions=5, easy_runs=2, quality_sessions=2, rest_days=2,
        ),
        min_weekly_sessions=3,
        max_weekly_sessions=7,
        deload_frequency_weeks=3,
        volume_reduction_percent=20.0,
    ),
    MethodologyType.NORWEGIAN_SINGLE: MethodologyConfig(
        type=MethodologyType.NORWEGIAN_SINGLE,
        name="Norwegian single threshold",
        zone_distribution=ZoneDistribution(easy=87.5, moderate=11.5, hard=1.0),
        weekly_structure=WeeklyStructure(
            total_sessions=6, easy_runs=3, quality_sessions=2, rest_days=1,
        ),
        min_weekly_sessions=4,
        max_weekly_sessions=7,
        deload_frequency_weeks=4,
        volume_reduction_percent=30.0,
        requires_lactate_test=True,
        min_athlete_level=AthleteLevel.RECREATIONAL,
    ),
    MethodologyType.NORWEGIAN: MethodologyConfig(
        type=MethodologyType.NORWEGIAN,
        name="Norwegian double threshold",
        zone_distribution=ZoneDistribution(easy=80.0, moderate=19.0, hard=1.0),
        weekly_structure=WeeklyStructure(
            total_sessions=6,
            easy_runs=3,
            quality_sessions=2,
            rest_days=1,
            double_threshold_days=2,
        ),
        min_weekly_sessions=5,
        max_weekly_sessions=7,
        deload_frequency_weeks=4,
        volume_reduction_percent=30.0,
        requires_lactate_test=True,
        min_athlete_level=AthleteLevel.ADVANCED,
    ),
    MethodologyType.CANOVA: MethodologyConfig(
        type=MethodologyType.CANOVA,
        name="Canova marathon-specific",
        zone_distribution=ZoneDistribution(easy=70.0, moderate=20.0, hard=10.0),
        weekly_structure=WeeklyStructure(
            total_sessions=6, easy_runs=2, quality_sessions=3, rest_days=1,
        ),
        min_weekly_sessions=4,
        max_weekly_sessions=7,
        deload_frequency_weeks=3,
        volume_reduction_percent=25.0,
        min_athlete_level=AthleteLevel.ADVANCED,
    ),
}


def get_methodology_config(
    methodology: MethodologyType,
    weekly_sessions: int | None = None,
) -> MethodologyConfig:
    """Return the configuration of a methodology.

    When ``weekly_sessions`` is given, the weekly structure is rescaled to it
    (clamped to the methodology's min/max sessions), keeping one long run and
    at least one easy run where the week allows.
    """
    config = _CONFIGS[methodology]
    if weekly_sessions is None:
        return config

    total = min(max(weekly_sessions, config.min_weekly_sessions), config.max_weekly_sessions)
    structure = config.weekly_structure
    quality = min(structure.quality_sessions, max(1, total - 2))
    long_run = 1 if structure.long_run else 0
    easy = max(0, total - quality - long_run)
    return replace(
        config,
        weekly_structure=replace(
            structure,
            total_sessions=total,
            easy_runs=easy,
            quality_sessions=quality,
            rest_days=7 - total,
            double_threshold_days=min(structure.double_threshold_days, quality),
        ),
    )

"""Methodology configuration models."""

from __future__ import annotations

from dataclasses import dataclass

from training_engine.models.enums import AthleteLevel, MethodologyType


@dataclass(frozen=True)
class ZoneDistribution:
    """Target share of training time per intensity domain (percent)."""

    easy: float
    moderate: float
    hard: float

    @property
    def quality_share(self) -> float:
        """Fraction (0-1) of weekly time above the aerobic threshold."""
        return (self.moderate + self.hard) / 100.0


@dataclass(frozen=True)
class WeeklyStructure:
    """Session layout of a typical week."""

    total_sessions: int
    easy_runs: int
    quality_sessions: int
    long_run: bool = True
    rest_days: int = 1
    double_threshold_days: int = 0


@dataclass(frozen=True)
class MethodologyConfig:
    """Full configuration of one training methodology."""

    type: MethodologyType
    name: str
    zone_distribution: ZoneDistribution
    weekly_structure: WeeklyStructure
    min_weekly_sessions: int
    max_weekly_sessions: int
    deload_frequency_weeks: int
    volume_reduction_percent: float
    requires_lactate_test: bool = False
    min_athlete_level: AthleteLevel = AthleteLevel.BEGINNER


@dataclass(frozen=True)
class MethodologySelection:
    """Outcome of methodology selection with a human-readable reason."""

    type: MethodologyType
    reason: str

"""Tests for methodology configurations and selection."""

from __future__ import annotations

import logging

import pytest

from training_engine.methodology.configs import get_methodology_config
from training_engine.methodology.selector import (
    map_experience_to_athlete_level,
    recommend_methodology,
    select_methodology,
)
from training_engine.models.enums import AthleteLevel, ExperienceLevel, GoalType, MethodologyType
from training_engine.models.params import ElitePaces


def _make_elite(level: AthleteLevel, metabolic_type: str | None = None) -> ElitePaces:
    return ElitePaces(9.0, 11.0, 13.5, 15.0, 17.0, 18.5, athlete_level=level, metabolic_type=metabolic_type)


class TestMethodologyConfigs:
    @pytest.mark.parametrize("methodology", list(MethodologyType))
    def test_distribution_sums_to_100(self, methodology: MethodologyType) -> None:
        dist = get_methodology_config(methodology).zone_distribution
        assert dist.easy + dist.moderate + dist.hard == pytest.approx(100.0)

    @pytest.mark.parametrize("methodology", list(MethodologyType))
    def test_every_methodology_configured(self, methodology: MethodologyType) -> None:
        assert get_methodology_config(methodology).type == methodology

    def test_polarized_is_80_20(self) -> None:
        dist = get_methodology_config(MethodologyType.POLARIZED).zone_distribution
        assert dist.easy == 80.0
        assert dist.quality_share == pytest.approx(0.20)

    def test_only_norwegian_doubles(self) -> None:
        for methodology in MethodologyType:
            doubles = get_methodology_config(methodology).weekly_structure.double_threshold_days
            assert (doubles > 0) == (methodology == MethodologyType.NORWEGIAN)

    @pytest.mark.parametrize("sessions", range(2, 8))
    def test_rescaled_structure_fills_week(self, sessions: int) -> None:
        config = get_methodology_config(MethodologyType.POLARIZED, sessions)
        structure = config.weekly_structure
        assert structure.total_sessions + structure.rest_days == 7
        assert structure.easy_runs + structure.quality_sessions + 1 == structure.total_sessions

    def test_rescale_clamped_to_minimum(self) -> None:
        config = get_methodology_config(MethodologyType.NORWEGIAN, 3)
        assert config.weekly_structure.total_sessions == config.min_weekly_sessions


class TestRecommendMethodology:
    def test_advanced_marathoner_gets_canova(self) -> None:
        assert recommend_methodology(AthleteLevel.ELITE, GoalType.MARATHON).type == MethodologyType.CANOVA

    def test_advanced_10k_with_lactate_meter(self) -> None:
        selection = recommend_methodology(AthleteLevel.ADVANCED, GoalType.TEN_K, has_lactate_meter=True)
        assert selection.type == MethodologyType.NORWEGIAN_SINGLE

    def test_advanced_10k_without_lactate_meter(self) -> None:
        assert recommend_methodology(AthleteLevel.ADVANCED, GoalType.TEN_K).type == MethodologyType.PYRAMIDAL

    def test_fast_twitch_short_race_gets_polarized(self) -> None:
        selection = recommend_methodology(AthleteLevel.ADVANCED, GoalType.FIVE_K, "fast_twitch", True)
        assert selection.type == MethodologyType.POLARIZED

    def test_recreational_racer_gets_pyramidal(self) -> None:
        assert recommend_methodology(AthleteLevel.RECREATIONAL, GoalType.HALF_MARATHON).type == (
            MethodologyType.PYRAMIDAL
        )

    def test_beginner_gets_polarized(self) -> None:
        assert recommend_methodology(AthleteLevel.BEGINNER, GoalType.MARATHON).type == MethodologyType.POLARIZED


class TestSelectMethodology:
    def test_enum_request_honoured(self) -> None:
        selection = select_methodology(MethodologyType.PYRAMIDAL, AthleteLevel.RECREATIONAL, GoalType.TEN_K)
        assert selection.type == MethodologyType.PYRAMIDAL

    def test_string_request_case_insensitive(self) -> None:
        selection = select_methodology("norwegian_single", AthleteLevel.ADVANCED, GoalType.TEN_K)
        assert selection.type == MethodologyType.NORWEGIAN_SINGLE

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("LYDIARD", MethodologyType.CANOVA),
            ("THRESHOLD", MethodologyType.NORWEGIAN_SINGLE),
            ("DOUBLE_THRESHOLD", MethodologyType.NORWEGIAN),
            ("80_20", MethodologyType.POLARIZED),
        ],
    )
    def test_aliases(self, name: str, expected: MethodologyType) -> None:
        assert select_methodology(name, AthleteLevel.ADVANCED, GoalType.MARATHON).type == expected

    def test_unknown_falls_back_to_polarized(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            selection = select_methodology("HADD", AthleteLevel.ADVANCED, GoalType.MARATHON)
        assert selection.type == MethodologyType.POLARIZED
        assert "Unknown methodology" in caplog.text

    @pytest.mark.parametrize("requested", [None, "AUTO", "auto"])
    def test_auto_for_advanced_marathoner(self, requested: str | None) -> None:
        selection = select_methodology(requested, AthleteLevel.ADVANCED, GoalType.MARATHON)
        assert selection.type == MethodologyType.CANOVA

    def test_auto_defaults_to_polarized(self) -> None:
        selection = select_methodology(None, AthleteLevel.RECREATIONAL, GoalType.TEN_K)
        assert selection.type == MethodologyType.POLARIZED

    def test_auto_uses_reference_classification(self) -> None:
        elite = _make_elite(AthleteLevel.ADVANCED)
        selection = select_methodology(None, AthleteLevel.RECREATIONAL, GoalType.TEN_K, elite, True)
        assert selection.type == MethodologyType.NORWEGIAN_SINGLE

    def test_underqualified_request_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            selection = select_methodology(MethodologyType.NORWEGIAN, AthleteLevel.BEGINNER, GoalType.TEN_K)
        assert selection.type == MethodologyType.NORWEGIAN
        assert "intended for" in caplog.text


class TestExperienceMapping:
    @pytest.mark.parametrize(
        "experience, level",
        [
            (ExperienceLevel.BEGINNER, AthleteLevel.BEGINNER),
            (ExperienceLevel.INTERMEDIATE, AthleteLevel.RECREATIONAL),
            (ExperienceLevel.ADVANCED, AthleteLevel.ADVANCED),
        ],
    )
    def test_mapping(self, experience: ExperienceLevel, level: AthleteLevel) -> None:
        assert map_experience_to_athlete_level(experience) == level

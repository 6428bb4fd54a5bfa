"""Tests for zone tables from thresholds, stored zones and reference paces."""

from __future__ import annotations

import pytest

from training_engine.exceptions import ValidationError
from training_engine.math.dmax import detect_aerobic_threshold, detect_dmax
from training_engine.math.zones import (
    calculate_training_zones,
    elite_zone_table,
    resolve_zones,
    validate_elite_paces,
    zone_confidence_warnings,
    zone_table_from_stored,
)
from training_engine.models.enums import Confidence, IntensityUnit, ZoneSource
from training_engine.models.lactate import LactateTestData
from training_engine.models.params import ElitePaces
from training_engine.models.zones import TrainingZone, ZoneTable


def _make_elite(**overrides) -> ElitePaces:
    values = dict(
        easy_low_kmh=9.0,
        easy_high_kmh=11.0,
        marathon_kmh=13.5,
        threshold_kmh=15.0,
        interval_kmh=17.0,
        repetition_kmh=18.5,
    )
    values.update(overrides)
    return ElitePaces(**values)


def _zones_for(test: LactateTestData, max_hr: int | None = None) -> ZoneTable:
    return calculate_training_zones(
        test, detect_dmax(test), detect_aerobic_threshold(test), max_hr=max_hr
    )


class TestCalculateTrainingZones:
    def test_five_zones_returned(self, running_test: LactateTestData) -> None:
        table = _zones_for(running_test)
        assert [z.zone for z in table.zones] == [1, 2, 3, 4, 5]

    def test_intensity_bands_are_contiguous(self, cubic_power_test: LactateTestData) -> None:
        zones = _zones_for(cubic_power_test).zones
        for lower, upper in zip(zones, zones[1:]):
            assert lower.intensity_high == upper.intensity_low
            assert lower.intensity_low < lower.intensity_high

    def test_hr_bands_do_not_overlap(self, cubic_power_test: LactateTestData) -> None:
        zones = _zones_for(cubic_power_test).zones
        for lower, upper in zip(zones, zones[1:]):
            assert upper.hr_low > lower.hr_high

    def test_zone_4_contains_threshold(self, cubic_power_test: LactateTestData) -> None:
        table = _zones_for(cubic_power_test)
        z4 = table.get(4)
        assert z4.intensity_low <= table.threshold_intensity <= z4.intensity_high
        assert table.threshold_intensity == pytest.approx(200.0, abs=0.5)

    def test_power_test_gives_power_table(self, cubic_power_test: LactateTestData) -> None:
        assert _zones_for(cubic_power_test).unit == IntensityUnit.POWER

    def test_zone_5_capped_at_highest_recorded_hr(self, cubic_power_test: LactateTestData) -> None:
        assert _zones_for(cubic_power_test).get(5).hr_high == 186

    def test_max_hr_caps_every_band(self, running_test: LactateTestData) -> None:
        table = _zones_for(running_test, max_hr=180)
        assert table.max_hr == 180
        assert all(z.hr_high <= 180 for z in table.zones)

    def test_aerobic_threshold_clamped_as_z2_z3_boundary(self, cubic_power_test: LactateTestData) -> None:
        # LT1 at ~55% of LT2 is below the 70% floor
        z3 = _zones_for(cubic_power_test).get(3)
        assert z3.percent_low == 70.0

    def test_without_aerobic_threshold_uses_default_fractions(self, running_test: LactateTestData) -> None:
        table = calculate_training_zones(running_test, detect_dmax(running_test))
        assert [z.percent_low for z in table.zones] == [55.0, 75.0, 87.0, 95.0, 103.0]

    def test_pace_test_gives_speed_table(self, running_test: LactateTestData) -> None:
        pace_test = LactateTestData(
            intensity=tuple(60.0 / s for s in running_test.intensity),
            lactate=running_test.lactate,
            heart_rate=running_test.heart_rate,
            unit=IntensityUnit.PACE,
        )
        table = calculate_training_zones(pace_test, detect_dmax(pace_test))
        assert table.unit == IntensityUnit.SPEED
        assert table.threshold_intensity == pytest.approx(detect_dmax(running_test).intensity, abs=0.05)


class TestStoredZones:
    def test_sorted_and_threshold_from_zone_4(self) -> None:
        zones = [
            TrainingZone(2, "Endurance", 10.0, 11.5),
            TrainingZone(4, "Threshold", 13.0, 14.5),
            TrainingZone(1, "Recovery", 8.0, 10.0),
        ]
        table = zone_table_from_stored(zones)
        assert [z.zone for z in table.zones] == [1, 2, 4]
        assert table.source == ZoneSource.STORED
        assert table.threshold_intensity == 14.5

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValidationError):
            zone_table_from_stored([])

    def test_zone_1_may_start_at_zero(self) -> None:
        table = zone_table_from_stored([
            TrainingZone(1, "Recovery", 0.0, 9.5),
            TrainingZone(2, "Endurance", 9.5, 11.0),
        ])
        assert table.zones[0].intensity_low == 0.0

    @pytest.mark.parametrize(
        "zones",
        [
            [TrainingZone(1, "Recovery", 9.5, 8.0)],
            [TrainingZone(1, "Recovery", 9.0, 9.0)],
            [TrainingZone(1, "Recovery", -1.0, 9.0)],
            [TrainingZone(1, "Recovery", 10.0, 11.0), TrainingZone(2, "Endurance", 8.0, 9.5)],
        ],
    )
    def test_bad_bounds_rejected(self, zones: list[TrainingZone]) -> None:
        with pytest.raises(ValidationError, match="bad bounds"):
            zone_table_from_stored(zones)

    def test_pace_table_converted_to_speed(self) -> None:
        zones = [
            TrainingZone(1, "Recovery", 7.5, 6.0),
            TrainingZone(4, "Threshold", 4.5, 4.0),
        ]
        table = zone_table_from_stored(zones, IntensityUnit.PACE)
        assert table.unit == IntensityUnit.SPEED
        assert (table.zones[0].intensity_low, table.zones[0].intensity_high) == (8.0, 10.0)
        assert table.threshold_intensity == 15.0

    def test_zero_pace_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-positive pace"):
            zone_table_from_stored([TrainingZone(1, "Recovery", 0.0, 6.0)], IntensityUnit.PACE)

    def test_power_unit_kept(self) -> None:
        table = zone_table_from_stored([TrainingZone(1, "Recovery", 110.0, 150.0)], IntensityUnit.POWER)
        assert table.unit == IntensityUnit.POWER


class TestElitePaces:
    def test_valid_paces(self) -> None:
        assert validate_elite_paces(_make_elite())

    @pytest.mark.parametrize(
        "overrides",
        [
            {"marathon_kmh": None},
            {"threshold_kmh": 0.0},
            {"marathon_kmh": 15.5},  # slower than threshold required
            {"easy_high_kmh": 8.0},
        ],
    )
    def test_inconsistent_paces_rejected(self, overrides: dict) -> None:
        assert not validate_elite_paces(_make_elite(**overrides))

    def test_none_rejected(self) -> None:
        assert not validate_elite_paces(None)

    def test_elite_table_brackets_reference_paces(self) -> None:
        table = elite_zone_table(_make_elite())
        assert table.source == ZoneSource.ELITE
        assert table.get(2).intensity_high == 11.0
        assert table.get(3).intensity_low <= 13.5 <= table.get(3).intensity_high
        assert table.get(4).intensity_low <= 15.0 <= table.get(4).intensity_high
        assert table.get(5).intensity_high == 18.5

    def test_low_confidence_warning(self) -> None:
        warnings = zone_confidence_warnings(_make_elite(confidence=Confidence.LOW))
        assert len(warnings) == 1


class TestResolveZones:
    def test_elite_supersedes_test_zones(self, running_test: LactateTestData) -> None:
        test_zones = _zones_for(running_test)
        table = resolve_zones(test_zones, _make_elite())
        assert table.source == ZoneSource.ELITE
        # HR bands are borrowed from the test
        assert table.get(2).hr_low == test_zones.get(2).hr_low

    def test_same_shape_either_way(self, running_test: LactateTestData) -> None:
        test_zones = _zones_for(running_test)
        elite = resolve_zones(test_zones, _make_elite())
        assert [z.zone for z in elite.zones] == [z.zone for z in test_zones.zones]
        assert elite.unit == test_zones.unit

    def test_invalid_elite_falls_back_to_test(self, running_test: LactateTestData) -> None:
        test_zones = _zones_for(running_test)
        assert resolve_zones(test_zones, _make_elite(interval_kmh=None)) is test_zones

    def test_power_table_ignores_running_paces(self, cubic_power_test: LactateTestData) -> None:
        test_zones = _zones_for(cubic_power_test)
        assert resolve_zones(test_zones, _make_elite()) is test_zones

    def test_no_source_raises(self) -> None:
        with pytest.raises(ValidationError):
            resolve_zones(None, None)

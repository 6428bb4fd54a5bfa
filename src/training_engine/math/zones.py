"""Five-zone training tables from lactate thresholds or reference paces.

Test-derived zones are expressed as fractions of the anaerobic threshold
intensity; HR bands are read off the test stages by linear interpolation.
Valid external reference paces supersede test-derived intensity bands.

References:
    Seiler & Kjerland (2006). Quantifying training intensity distribution in
        elite endurance athletes. Scand J Med Sci Sports 16(1):49-56.
    Coggan & Allen (2010). Training and Racing with a Power Meter.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from training_engine.exceptions import ValidationError
from training_engine.math.interpolation import interpolate_linear
from training_engine.models.enums import (
    AEROBIC_BOUNDARY_MAX_FRACTION,
    AEROBIC_BOUNDARY_MIN_FRACTION,
    ZONE_FRACTION_OF_THRESHOLD,
    ZONE_NAMES,
    Confidence,
    IntensityUnit,
    ZoneSource,
)
from training_engine.models.lactate import LactateTestData, ThresholdResult
from training_engine.models.params import ElitePaces
from training_engine.models.zones import TrainingZone, ZoneTable

logger = logging.getLogger(__name__)

# Minimum gap kept between Z1/Z2 and Z2/Z3 boundaries when LT1 moves Z2/Z3
_MIN_Z2_WIDTH = 0.08


def calculate_training_zones(
    test: LactateTestData,
    anaerobic: ThresholdResult,
    aerobic: ThresholdResult | None = None,
    max_hr: int | None = None,
) -> ZoneTable:
    """Build a five-zone table from a detected anaerobic threshold.

    Args:
        test: The test the thresholds were detected on (HR source).
        anaerobic: Anaerobic threshold (LT2), intensity in the test's unit.
        aerobic: Optional aerobic threshold (LT1). Moves the Z2/Z3 boundary.
        max_hr: Optional maximum heart rate. Caps every HR bound; defaults
            to the highest HR recorded in the test.

    Returns:
        ZoneTable on the test's effort axis (km/h for PACE tests).

    Raises:
        ValidationError: If the threshold intensity is not positive.
    """
    threshold = _to_effort(test, anaerobic.intensity)
    if threshold <= 0:
        raise ValidationError(
            f"Threshold intensity must be positive, got {anaerobic.intensity}"
        )

    bounds = [ZONE_FRACTION_OF_THRESHOLD[1][0]] + [
        ZONE_FRACTION_OF_THRESHOLD[z][1] for z in range(1, 6)
    ]
    if aerobic is not None:
        fraction = _to_effort(test, aerobic.intensity) / threshold
        fraction = min(
            max(fraction, AEROBIC_BOUNDARY_MIN_FRACTION),
            AEROBIC_BOUNDARY_MAX_FRACTION,
        )
        bounds[2] = fraction
        if bounds[1] >= fraction - _MIN_Z2_WIDTH / 2:
            bounds[1] = fraction - _MIN_Z2_WIDTH

    hr_cap = max_hr if max_hr is not None else round(max(test.heart_rate))
    xs = test.effort_intensity

    def hr_at(fraction: float) -> int:
        hr = interpolate_linear(fraction * threshold, xs, test.heart_rate, extrapolate=True)
        return max(0, min(round(hr), hr_cap))

    zones: list[TrainingZone] = []
    previous_high: int | None = None
    for zone in range(1, 6):
        low, high = bounds[zone - 1], bounds[zone]
        hr_low = hr_at(low) if previous_high is None else min(previous_high + 1, hr_cap)
        hr_high = hr_cap if zone == 5 else max(hr_at(high), hr_low)
        previous_high = hr_high
        zones.append(TrainingZone(
            zone=zone,
            name=ZONE_NAMES[zone],
            intensity_low=round(low * threshold, 2),
            intensity_high=round(high * threshold, 2),
            hr_low=hr_low,
            hr_high=hr_high,
            percent_low=round(low * 100, 1),
            percent_high=round(high * 100, 1),
        ))

    return ZoneTable(
        zones=tuple(zones),
        unit=test.working_unit,
        source=ZoneSource.TEST,
        threshold_intensity=round(threshold, 2),
    )


def zone_table_from_stored(
    zones: Iterable[TrainingZone],
    unit: IntensityUnit = IntensityUnit.SPEED,
) -> ZoneTable:
    """Wrap zones previously stored on a test record.

    PACE tables (min/km) are converted to km/h and returned as SPEED tables.
    Bounds must be non-negative (zone 1 may start at zero), each zone
    must have ``intensity_low < intensity_high`` and zones must not step
    down in intensity.

    Raises:
        ValidationError: If no zones are given or the bounds are malformed.
    """
    ordered = tuple(sorted(zones, key=lambda z: z.zone))
    if not ordered:
        raise ValidationError("Stored zone list is empty")
    if unit == IntensityUnit.PACE:
        ordered = tuple(_pace_zone_to_speed(z) for z in ordered)
        unit = IntensityUnit.SPEED
    previous_low = 0.0
    for z in ordered:
        if z.intensity_low < previous_low or z.intensity_low >= z.intensity_high:
            raise ValidationError(
                f"Stored zone {z.zone} has bad bounds "
                f"{z.intensity_low}-{z.intensity_high}"
            )
        previous_low = z.intensity_low
    threshold = next((z.intensity_high for z in ordered if z.zone == 4), None)
    return ZoneTable(
        zones=ordered,
        unit=unit,
        source=ZoneSource.STORED,
        threshold_intensity=threshold,
    )


def _pace_zone_to_speed(zone: TrainingZone) -> TrainingZone:
    if zone.intensity_low <= 0 or zone.intensity_high <= 0:
        raise ValidationError(f"Stored zone {zone.zone} has a non-positive pace")
    low, high = sorted((60.0 / zone.intensity_low, 60.0 / zone.intensity_high))
    return replace(zone, intensity_low=round(low, 2), intensity_high=round(high, 2))


def validate_elite_paces(elite: ElitePaces | None) -> bool:
    """True when every core pace is present, positive and internally ordered.

    Required order: easy_low < easy_high <= marathon < threshold <
    interval <= repetition.
    """
    if elite is None:
        return False
    paces = (
        elite.easy_low_kmh,
        elite.easy_high_kmh,
        elite.marathon_kmh,
        elite.threshold_kmh,
        elite.interval_kmh,
        elite.repetition_kmh,
    )
    if any(p is None or p <= 0 for p in paces):
        return False
    easy_low, easy_high, marathon, threshold, interval, repetition = paces
    return (
        easy_low < easy_high <= marathon < threshold < interval <= repetition
    )


def elite_zone_table(
    elite: ElitePaces,
    hr_reference: ZoneTable | None = None,
) -> ZoneTable:
    """Build a five-zone SPEED table from reference paces.

    Zone 3 brackets marathon pace, zone 4 threshold pace and zone 5 runs from
    between threshold and interval pace up to repetition pace. HR bands are
    borrowed zone-by-zone from ``hr_reference`` when given.

    Raises:
        ValidationError: If the paces fail ``validate_elite_paces``.
    """
    if not validate_elite_paces(elite):
        raise ValidationError("Reference paces are incomplete or inconsistent")

    bounds = (
        elite.easy_low_kmh * 0.9,
        elite.easy_low_kmh,
        elite.easy_high_kmh,
        (elite.marathon_kmh + elite.threshold_kmh) / 2,
        (elite.threshold_kmh + elite.interval_kmh) / 2,
        elite.repetition_kmh,
    )
    threshold = elite.threshold_kmh
    zones = []
    for zone in range(1, 6):
        reference = hr_reference.get(zone) if hr_reference is not None else None
        low, high = bounds[zone - 1], bounds[zone]
        zones.append(TrainingZone(
            zone=zone,
            name=ZONE_NAMES[zone],
            intensity_low=round(low, 2),
            intensity_high=round(high, 2),
            hr_low=reference.hr_low if reference else None,
            hr_high=reference.hr_high if reference else None,
            percent_low=round(low / threshold * 100, 1),
            percent_high=round(high / threshold * 100, 1),
        ))
    return ZoneTable(
        zones=tuple(zones),
        unit=IntensityUnit.SPEED,
        source=ZoneSource.ELITE,
        threshold_intensity=round(threshold, 2),
    )


def resolve_zones(
    test_zones: ZoneTable | None,
    elite: ElitePaces | None,
) -> ZoneTable:
    """Pick the zone table a program is built on.

    Valid reference paces supersede test-derived zones, except for power
    tables where running paces do not apply.

    Raises:
        ValidationError: If neither source yields zones.
    """
    power_table = test_zones is not None and test_zones.unit == IntensityUnit.POWER
    if validate_elite_paces(elite) and not power_table:
        logger.info("Using reference paces (%s) for training zones", elite.source)
        return elite_zone_table(elite, hr_reference=test_zones)
    if elite is not None and not power_table:
        logger.warning("Reference paces are inconsistent, using test zones")
    if test_zones is None:
        raise ValidationError(
            "No training zones available: test has neither stages, stored "
            "zones nor usable reference paces"
        )
    return test_zones


def zone_confidence_warnings(elite: ElitePaces | None) -> list[str]:
    """Warnings about reference paces worth surfacing on the program."""
    if elite is None:
        return []
    warnings = []
    if not validate_elite_paces(elite):
        warnings.append("Reference paces ignored: incomplete or inconsistent")
    elif elite.confidence == Confidence.LOW:
        warnings.append(f"Reference paces from {elite.source} have LOW confidence")
    return warnings


def _to_effort(test: LactateTestData, value: float) -> float:
    if test.unit == IntensityUnit.PACE:
        return 60.0 / value
    return value

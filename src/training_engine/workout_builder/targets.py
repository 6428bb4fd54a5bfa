"""Target assignment — pace/power and HR bounds per zone or % of marathon pace.

Speed tables produce pace targets (s/km), power tables produce watt
targets. HR bounds always come from the zone table when it has them.
"""

from __future__ import annotations

from training_engine.models.enums import IntensityUnit
from training_engine.models.workout import SegmentTargets
from training_engine.models.zones import ZoneTable

# Half-width of a % of marathon pace band
_MP_BAND = 0.01


def speed_to_pace(speed_kmh: float) -> float:
    """km/h → seconds per km."""
    if speed_kmh <= 0:
        raise ValueError(f"Speed must be positive, got {speed_kmh}")
    return 3600.0 / speed_kmh


def format_pace(seconds_per_km: float) -> str:
    """Seconds per km → "M:SS/km"."""
    total = round(seconds_per_km)
    return f"{total // 60}:{total % 60:02d}/km"


def zone_targets(zones: ZoneTable, zone: int, with_intensity: bool = True) -> SegmentTargets:
    """Targets for a zone of the table.

    Args:
        zones: Zone table (speed or power).
        zone: Zone number 1-5; out-of-range numbers use the nearest zone.
        with_intensity: False drops pace/power targets and keeps HR only.
    """
    z = zones.clamp_zone(zone)
    if not with_intensity:
        return SegmentTargets(hr_low=z.hr_low, hr_high=z.hr_high)
    if zones.unit == IntensityUnit.POWER:
        return SegmentTargets(
            power_low=round(z.intensity_low),
            power_high=round(z.intensity_high),
            hr_low=z.hr_low,
            hr_high=z.hr_high,
        )
    # A zone starting at 0 km/h has no slow pace bound
    return SegmentTargets(
        pace_low=round(speed_to_pace(z.intensity_high), 1),
        pace_high=round(speed_to_pace(z.intensity_low), 1) if z.intensity_low > 0 else None,
        hr_low=z.hr_low,
        hr_high=z.hr_high,
    )


def marathon_pace_targets(
    zones: ZoneTable,
    marathon_pace_kmh: float,
    pace_percent: float,
    hr_zone: int,
) -> SegmentTargets:
    """A ±1% pace band around ``pace_percent`` of marathon pace.

    HR bounds come from ``hr_zone`` of the table.
    """
    speed = marathon_pace_kmh * pace_percent / 100.0
    z = zones.clamp_zone(hr_zone)
    return SegmentTargets(
        pace_low=round(speed_to_pace(speed * (1 + _MP_BAND)), 1),
        pace_high=round(speed_to_pace(speed * (1 - _MP_BAND)), 1),
        hr_low=z.hr_low,
        hr_high=z.hr_high,
    )


def zone_speed(zones: ZoneTable, zone: int) -> float | None:
    """Mid-zone speed (km/h) of a speed table, None for power tables."""
    if zones.unit == IntensityUnit.POWER:
        return None
    return zones.clamp_zone(zone).intensity_mid

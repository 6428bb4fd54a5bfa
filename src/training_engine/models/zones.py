"""Training zone tables."""

from __future__ import annotations

from dataclasses import dataclass

from training_engine.models.enums import IntensityUnit, ZoneSource


@dataclass(frozen=True)
class TrainingZone:
    """One of five training zones.

    Intensity bounds are on the effort axis of the table's unit (km/h for
    SPEED tables, watts for POWER tables). HR bounds are None when no heart
    rate reference exists.
    """

    zone: int  # 1-5
    name: str
    intensity_low: float
    intensity_high: float
    hr_low: int | None = None
    hr_high: int | None = None
    percent_low: float | None = None   # % of threshold intensity
    percent_high: float | None = None

    @property
    def intensity_mid(self) -> float:
        return (self.intensity_low + self.intensity_high) / 2


@dataclass(frozen=True)
class ZoneTable:
    """A complete five-zone table from a single source."""

    zones: tuple[TrainingZone, ...]
    unit: IntensityUnit = IntensityUnit.SPEED
    source: ZoneSource = ZoneSource.TEST
    threshold_intensity: float | None = None

    def get(self, zone: int) -> TrainingZone | None:
        """Return the zone with the given number, or None."""
        for z in self.zones:
            if z.zone == zone:
                return z
        return None

    def clamp_zone(self, zone: int) -> TrainingZone:
        """Return the requested zone, or the nearest one the table has."""
        found = self.get(zone)
        if found is not None:
            return found
        return min(self.zones, key=lambda z: abs(z.zone - zone))

    @property
    def max_hr(self) -> int | None:
        highs = [z.hr_high for z in self.zones if z.hr_high is not None]
        return max(highs) if highs else None

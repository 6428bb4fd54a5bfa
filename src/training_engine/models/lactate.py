"""Lactate step-test input and threshold detection results."""

from __future__ import annotations

from dataclasses import dataclass, field

from training_engine.exceptions import ValidationError
from training_engine.models.enums import Confidence, IntensityUnit, ThresholdMethod


@dataclass(frozen=True)
class LactateTestData:
    """Ordered stages of an incremental lactate test.

    For SPEED and POWER tests intensity must be strictly increasing. PACE
    tests (min/km) must be strictly decreasing, i.e. getting faster. All
    three sequences have one value per stage.
    """

    intensity: tuple[float, ...]
    lactate: tuple[float, ...]
    heart_rate: tuple[float, ...]
    unit: IntensityUnit = IntensityUnit.SPEED

    def __post_init__(self) -> None:
        n = len(self.intensity)
        if len(self.lactate) != n or len(self.heart_rate) != n:
            raise ValidationError(
                "intensity, lactate and heart_rate must have equal length, got "
                f"{n}, {len(self.lactate)}, {len(self.heart_rate)}"
            )
        if self.unit == IntensityUnit.PACE and any(p <= 0 for p in self.intensity):
            raise ValidationError("Pace values must be positive")
        effort = self.effort_intensity
        for prev, cur in zip(effort, effort[1:]):
            if cur <= prev:
                raise ValidationError(
                    "Test stages must be ordered by increasing effort"
                )

    @property
    def stage_count(self) -> int:
        return len(self.intensity)

    @property
    def effort_intensity(self) -> tuple[float, ...]:
        """Intensity on an axis that grows with effort (pace → km/h)."""
        if self.unit == IntensityUnit.PACE:
            return tuple(60.0 / p for p in self.intensity)
        return self.intensity

    @property
    def working_unit(self) -> IntensityUnit:
        """Unit of ``effort_intensity``: PACE tests are fitted as SPEED."""
        return IntensityUnit.SPEED if self.unit == IntensityUnit.PACE else self.unit

    def to_native(self, effort_value: float) -> float:
        """Convert a value on the effort axis back to the test's own unit."""
        if self.unit == IntensityUnit.PACE:
            return 60.0 / effort_value
        return effort_value


@dataclass(frozen=True)
class PolynomialFit:
    """Third-order least-squares fit ``y = a·x³ + b·x² + c·x + d``."""

    coefficients: tuple[float, float, float, float]  # (a, b, c, d)
    predictions: tuple[float, ...]
    r2: float


@dataclass(frozen=True)
class ThresholdResult:
    """Detected lactate threshold.

    ``intensity`` is in the unit of the originating test. ``warning`` is set
    whenever the value is degraded (fallback, out-of-range, noisy curve).
    """

    intensity: float
    lactate: float
    heart_rate: int
    method: ThresholdMethod
    r2: float
    confidence: Confidence
    coefficients: tuple[float, float, float, float] = field(
        default=(0.0, 0.0, 0.0, 0.0)
    )
    distance: float = 0.0
    warning: str | None = None

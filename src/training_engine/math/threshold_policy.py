"""Threshold confidence and plausibility policy.

All cut-offs live in ``models.enums`` so the grading can be tuned without
touching the detector.
"""

from __future__ import annotations

from collections.abc import Sequence

from training_engine.models.enums import (
    CONFIDENCE_HIGH_R2,
    CONFIDENCE_HIGH_RELATIVE_DISTANCE,
    CONFIDENCE_LOW_RELATIVE_DISTANCE,
    DMAX_MIN_R2,
    MAX_MONOTONIC_VIOLATIONS,
    MOD_DMAX_MAX_LACTATE_MMOL,
    MOD_DMAX_MIN_LACTATE_MMOL,
    MONOTONIC_DROP_TOLERANCE_MMOL,
    Confidence,
)


def relative_distance(distance: float, lactate: Sequence[float]) -> float:
    """D-max distance as a fraction of the lactate range (0 for a flat curve)."""
    lactate_range = max(lactate) - min(lactate)
    if lactate_range <= 0:
        return 0.0
    return distance / lactate_range


def classify_confidence(r2: float, rel_distance: float) -> Confidence:
    """Grade a D-max result.

    LOW when the fit is poor or the curve is nearly straight, HIGH when the
    fit is good and the curve clearly bends, MEDIUM otherwise.
    """
    if r2 < DMAX_MIN_R2 or rel_distance < CONFIDENCE_LOW_RELATIVE_DISTANCE:
        return Confidence.LOW
    if r2 >= CONFIDENCE_HIGH_R2 and rel_distance >= CONFIDENCE_HIGH_RELATIVE_DISTANCE:
        return Confidence.HIGH
    return Confidence.MEDIUM


def is_fit_acceptable(r2: float) -> bool:
    return r2 >= DMAX_MIN_R2


def count_monotonic_violations(lactate: Sequence[float]) -> int:
    """Number of stage-to-stage drops larger than the tolerance."""
    return sum(
        1
        for prev, cur in zip(lactate, lactate[1:])
        if prev - cur > MONOTONIC_DROP_TOLERANCE_MMOL
    )


def is_nearly_monotonic(lactate: Sequence[float]) -> bool:
    return count_monotonic_violations(lactate) <= MAX_MONOTONIC_VIOLATIONS


def is_within_mod_dmax_bounds(lactate: float) -> bool:
    return MOD_DMAX_MIN_LACTATE_MMOL <= lactate <= MOD_DMAX_MAX_LACTATE_MMOL

"""Lactate threshold detection: D-max, Modified D-max and fixed-lactate fallbacks.

D-max is the point on a fitted 3rd-order lactate curve with the greatest
perpendicular distance from the straight line joining the first and last
test stages. When the curve cannot be trusted the detector falls back to a
fixed blood-lactate concentration.

References:
    Cheng et al. (1992). A new approach for the determination of ventilatory
        and lactate thresholds. Int J Sports Med 13(7):518-522.
    Bishop, Jenkins & Mackinnon (1998). The relationship between plasma
        lactate parameters, Wpeak and 1-h cycling performance in women.
        Med Sci Sports Exerc 30(8):1270-1275.
    Heck et al. (1985). Justification of the 4-mmol/l lactate threshold.
        Int J Sports Med 6(3):117-130.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace

import numpy as np

from training_engine.math.interpolation import find_first_crossing, interpolate_linear
from training_engine.math.polynomial import evaluate_polynomial3, fit_polynomial3
from training_engine.math.threshold_policy import (
    classify_confidence,
    count_monotonic_violations,
    is_fit_acceptable,
    is_nearly_monotonic,
    is_within_mod_dmax_bounds,
    relative_distance,
)
from training_engine.models.enums import (
    AEROBIC_THRESHOLD_LACTATE_MMOL,
    DMAX_MIN_R2,
    DMAX_SAMPLE_INTERVALS,
    MOD_DMAX_MAX_LACTATE_MMOL,
    MOD_DMAX_MIN_LACTATE_MMOL,
    OBLA_LACTATE_MMOL,
    Confidence,
    ThresholdMethod,
)
from training_engine.models.lactate import LactateTestData, ThresholdResult

logger = logging.getLogger(__name__)


def detect_dmax(test: LactateTestData) -> ThresholdResult:
    """Detect the anaerobic threshold with the D-max method.

    Algorithm:
    1. Fit a 3rd-order polynomial to (intensity, lactate).
    2. If R² < 0.90, fall back to the first 4.0 mmol/L crossing.
    3. Join the first and last measured stages with a straight baseline.
    4. Sample the fitted curve at 1001 evenly spaced points.
    5. Take the sample with the largest perpendicular distance to the
       baseline; ties resolve to the first.
    6. Interpolate heart rate between the bracketing stages.
    7. Grade confidence from R² and the relative distance.

    Args:
        test: Incremental test with at least 4 stages.

    Returns:
        ThresholdResult with method DMAX, or FALLBACK when the fit is poor.

    Raises:
        InsufficientDataError: If the test has fewer than 4 stages.
    """
    xs = test.effort_intensity
    lactate = test.lactate
    fit = fit_polynomial3(xs, lactate)

    warnings: list[str] = []
    if not is_nearly_monotonic(lactate):
        msg = (
            f"Lactate curve is not monotonic "
            f"({count_monotonic_violations(lactate)} drops > 0.2 mmol/L)"
        )
        logger.warning(msg)
        warnings.append(msg)

    if not is_fit_acceptable(fit.r2):
        warnings.append(
            f"Poor polynomial fit (R²={fit.r2:.3f} < {DMAX_MIN_R2:.2f}); "
            f"using {OBLA_LACTATE_MMOL} mmol/L fixed threshold"
        )
        logger.warning("D-max fit rejected (R²=%.3f), using OBLA fallback", fit.r2)
        return _fixed_lactate_threshold(
            test,
            target=OBLA_LACTATE_MMOL,
            method=ThresholdMethod.FALLBACK,
            confidence=Confidence.LOW,
            r2=fit.r2,
            coefficients=fit.coefficients,
            warnings=warnings,
        )

    x1, x2 = xs[0], xs[-1]
    y1, y2 = lactate[0], lactate[-1]
    slope = (y2 - y1) / (x2 - x1)
    intercept = y1 - slope * x1

    samples = np.linspace(x1, x2, DMAX_SAMPLE_INTERVALS + 1)
    curve = evaluate_polynomial3(fit.coefficients, samples)
    baseline = slope * samples + intercept
    distances = np.abs(curve - baseline) / math.sqrt(1.0 + slope**2)

    best = int(np.argmax(distances))
    threshold_x = float(samples[best])
    threshold_lactate = float(curve[best])
    max_distance = float(distances[best])

    heart_rate = interpolate_linear(threshold_x, xs, test.heart_rate)
    confidence = classify_confidence(
        fit.r2, relative_distance(max_distance, lactate)
    )

    logger.info(
        "D-max threshold at %.2f (lactate %.2f mmol/L, R²=%.3f, %s)",
        test.to_native(threshold_x),
        threshold_lactate,
        fit.r2,
        confidence.name,
    )

    return ThresholdResult(
        intensity=round(test.to_native(threshold_x), 2),
        lactate=round(threshold_lactate, 2),
        heart_rate=round(heart_rate),
        method=ThresholdMethod.DMAX,
        r2=round(fit.r2, 4),
        confidence=confidence,
        coefficients=fit.coefficients,
        distance=round(max_distance, 4),
        warning="; ".join(warnings) or None,
    )


def detect_mod_dmax(test: LactateTestData) -> ThresholdResult:
    """Detect the threshold with D-max bounded to a physiological lactate band.

    A D-max result outside 1.5-4.5 mmol/L is discarded and replaced by the
    first 2.0 mmol/L crossing (confidence MEDIUM, with a warning naming the
    discarded value). In-band results keep their confidence and are tagged
    MOD_DMAX. A FALLBACK result already sits at 4.0 mmol/L and passes
    through unchanged.

    Raises:
        InsufficientDataError: If the test has fewer than 4 stages.
    """
    result = detect_dmax(test)
    if result.method == ThresholdMethod.FALLBACK:
        return result
    if is_within_mod_dmax_bounds(result.lactate):
        return replace(result, method=ThresholdMethod.MOD_DMAX)

    warnings = [result.warning] if result.warning else []
    warnings.append(
        f"D-max lactate {result.lactate:.2f} mmol/L outside "
        f"{MOD_DMAX_MIN_LACTATE_MMOL}-{MOD_DMAX_MAX_LACTATE_MMOL} mmol/L; "
        f"using {AEROBIC_THRESHOLD_LACTATE_MMOL} mmol/L crossing"
    )
    logger.warning(
        "Discarding D-max lactate %.2f mmol/L, outside physiological range",
        result.lactate,
    )
    return _fixed_lactate_threshold(
        test,
        target=AEROBIC_THRESHOLD_LACTATE_MMOL,
        method=ThresholdMethod.MOD_DMAX,
        confidence=Confidence.MEDIUM,
        r2=result.r2,
        coefficients=result.coefficients,
        warnings=warnings,
    )


def detect_aerobic_threshold(test: LactateTestData) -> ThresholdResult | None:
    """Aerobic threshold (LT1) as the first 2.0 mmol/L crossing.

    Returns None when the measured curve never crosses 2.0 mmol/L between
    two stages. No curve is fitted, so ``r2`` is 0.
    """
    crossing = find_first_crossing(
        test.effort_intensity, test.lactate, AEROBIC_THRESHOLD_LACTATE_MMOL
    )
    if not crossing.observed:
        return None
    heart_rate = interpolate_linear(crossing.x, test.effort_intensity, test.heart_rate)
    return ThresholdResult(
        intensity=round(test.to_native(crossing.x), 2),
        lactate=AEROBIC_THRESHOLD_LACTATE_MMOL,
        heart_rate=round(heart_rate),
        method=ThresholdMethod.FALLBACK,
        r2=0.0,
        confidence=Confidence.MEDIUM,
    )


def _fixed_lactate_threshold(
    test: LactateTestData,
    target: float,
    method: ThresholdMethod,
    confidence: Confidence,
    r2: float,
    coefficients: tuple[float, float, float, float],
    warnings: list[str],
) -> ThresholdResult:
    """Threshold at the first crossing of a fixed lactate concentration."""
    xs = test.effort_intensity
    crossing = find_first_crossing(xs, test.lactate, target)
    if not crossing.observed:
        edge = "first" if crossing.index == 0 else "last"
        warnings = [
            *warnings,
            f"Lactate never crossed {target} mmol/L; clamped to {edge} stage",
        ]
    heart_rate = interpolate_linear(crossing.x, xs, test.heart_rate)
    return ThresholdResult(
        intensity=round(test.to_native(crossing.x), 2),
        lactate=target,
        heart_rate=round(heart_rate),
        method=method,
        r2=round(r2, 4),
        confidence=confidence,
        coefficients=coefficients,
        distance=0.0,
        warning="; ".join(warnings) or None,
    )

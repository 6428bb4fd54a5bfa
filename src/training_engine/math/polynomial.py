"""Third-order polynomial least-squares fit of a lactate curve.

References:
    Cheng et al. (1992). A new approach for the determination of ventilatory
    and lactate thresholds. Int J Sports Med 13(7):518-522.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from training_engine.exceptions import InsufficientDataError, ValidationError
from training_engine.models.enums import DMAX_MIN_POINTS
from training_engine.models.lactate import PolynomialFit


def fit_polynomial3(x: Sequence[float], y: Sequence[float]) -> PolynomialFit:
    """Fit ``y = a·x³ + b·x² + c·x + d`` by least squares.

    Args:
        x: Independent values (intensity).
        y: Dependent values (lactate), same length as ``x``.

    Returns:
        PolynomialFit with coefficients (a, b, c, d), per-point predictions,
        and R² (0 when the data has no variance).

    Raises:
        ValidationError: If ``x`` and ``y`` differ in length.
        InsufficientDataError: If fewer than 4 points are given.
    """
    if len(x) != len(y):
        raise ValidationError(
            f"x and y must have equal length, got {len(x)} and {len(y)}"
        )
    if len(x) < DMAX_MIN_POINTS:
        raise InsufficientDataError(
            f"Need at least {DMAX_MIN_POINTS} points for a 3rd-order fit, "
            f"got {len(x)}",
            points=len(x),
        )

    xs = np.asarray(x, dtype=np.float64)
    ys = np.asarray(y, dtype=np.float64)

    # numpy.polyfit returns the highest power first: [a, b, c, d]
    coeffs = np.polyfit(xs, ys, 3)
    predicted = np.polyval(coeffs, xs)

    ss_res = float(np.sum((ys - predicted) ** 2))
    ss_tot = float(np.sum((ys - np.mean(ys)) ** 2))
    r2 = 1.0 - (ss_res / ss_tot) if ss_tot > 0 else 0.0

    a, b, c, d = (float(v) for v in coeffs)
    return PolynomialFit(
        coefficients=(a, b, c, d),
        predictions=tuple(float(p) for p in predicted),
        r2=r2,
    )


def evaluate_polynomial3(
    coefficients: tuple[float, float, float, float],
    x: float | np.ndarray,
) -> float | np.ndarray:
    """Evaluate a fitted cubic at a scalar or an array of points."""
    result = np.polyval(np.asarray(coefficients, dtype=np.float64), x)
    if np.ndim(result) == 0:
        return float(result)
    return result

"""Piecewise-linear interpolation over test stages."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Crossing:
    """Where a stage series first reaches a target value.

    ``observed`` is False when the series never crosses the target and the
    position was clamped to the first or last stage.
    """

    x: float
    index: int  # index of the first stage at or above the target
    observed: bool


def interpolate_linear(
    x: float,
    xs: Sequence[float],
    ys: Sequence[float],
    extrapolate: bool = False,
) -> float:
    """Linearly interpolate ``y`` at ``x`` between the bracketing stages.

    ``xs`` must be strictly increasing. Outside the tested range the end
    value is returned, or the end segment is extended when ``extrapolate``
    is set.
    """
    if len(xs) == 1:
        return float(ys[0])
    if x <= xs[0]:
        if not extrapolate:
            return float(ys[0])
        return _on_segment(x, xs[0], xs[1], ys[0], ys[1])
    if x >= xs[-1]:
        if not extrapolate:
            return float(ys[-1])
        return _on_segment(x, xs[-2], xs[-1], ys[-2], ys[-1])
    for i in range(1, len(xs)):
        if x <= xs[i]:
            return _on_segment(x, xs[i - 1], xs[i], ys[i - 1], ys[i])
    return float(ys[-1])


def find_first_crossing(
    xs: Sequence[float],
    ys: Sequence[float],
    target: float,
) -> Crossing:
    """Find the first consecutive pair of stages where ``ys`` reaches ``target``.

    The crossing position is linearly interpolated between the pair. Without
    such a pair the position is clamped (``observed=False``) to the first
    stage when the series starts at or above the target, else to the last.
    """
    for i in range(1, len(ys)):
        if ys[i] >= target and ys[i - 1] < target:
            ratio = (target - ys[i - 1]) / (ys[i] - ys[i - 1])
            x = xs[i - 1] + ratio * (xs[i] - xs[i - 1])
            return Crossing(x=float(x), index=i, observed=True)
    if ys[0] >= target:
        return Crossing(x=float(xs[0]), index=0, observed=False)
    return Crossing(x=float(xs[-1]), index=len(xs) - 1, observed=False)


def _on_segment(x: float, x0: float, x1: float, y0: float, y1: float) -> float:
    if x1 == x0:
        return float(y0)
    return float(y0 + (x - x0) / (x1 - x0) * (y1 - y0))

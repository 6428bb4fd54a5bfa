"""Quality-session menus per methodology.

Each function returns the week's candidate quality sessions in priority
order; the engine keeps as many as the week's quality count allows. Session
formats progress every two weeks within a phase.

References:
    Seiler (2010); Stöggl & Sperlich (2014): polarized interval formats.
    Esteve-Lanao et al. (2007): pyramidal distributions in sub-elite runners.
    Casado et al. (2023): Norwegian threshold formats (2-4 mmol/L).
    Canova (1999): marathon-specific extensive and intensive work.
"""

from __future__ import annotations

from training_engine.models.enums import CanovaPhase, GoalType, TrainingPhase, WorkoutCategory
from training_engine.models.plan import SessionParams, WeekDistributionParams

QualitySession = tuple[WorkoutCategory, SessionParams]


def _progress(ctx: WeekDistributionParams, steps: int) -> int:
    """Index into a progression of ``steps`` options, advancing every two weeks."""
    return min(ctx.week_in_phase // 2, steps - 1)


def _intervals(reps: int, work: float, rest: float, zone: int, description: str) -> QualitySession:
    return (
        WorkoutCategory.INTERVALS,
        SessionParams(reps=reps, work_min=work, rest_min=rest, zone=zone, description=description),
    )


def _tempo(minutes: float, zone: int, description: str, pace_percent: float | None = None,
           marathon_pace_kmh: float | None = None) -> QualitySession:
    return (
        WorkoutCategory.TEMPO,
        SessionParams(
            duration_min=minutes,
            zone=zone,
            pace_percent=pace_percent,
            marathon_pace_kmh=marathon_pace_kmh if pace_percent else None,
            description=description,
        ),
    )


def _hill_sprints(reps: int, seconds: int, rest_min: float) -> QualitySession:
    return (
        WorkoutCategory.HILL_SPRINTS,
        SessionParams(reps=reps, work_seconds=seconds, rest_min=rest_min, zone=5,
                      description="Hill sprints"),
    )


# ---------------------------------------------------------------------------
# Polarized
# ---------------------------------------------------------------------------


def polarized_sessions(ctx: WeekDistributionParams) -> list[QualitySession]:
    """High-intensity work above LT2, little threshold running."""
    step = _progress(ctx, 3)
    if ctx.phase == TrainingPhase.BASE:
        return [
            _intervals(4 + step, 3, 3, 5, "VO2max intro"),
            _hill_sprints(6 + min(4, ctx.week_in_phase), 10, 2.0),
        ]
    if ctx.phase == TrainingPhase.BUILD:
        return [
            _intervals(4 + step, 4, 3, 5, "VO2max long intervals"),
            _intervals(5 + step, 3, 2, 5, "VO2max short intervals"),
        ]
    if ctx.phase == TrainingPhase.PEAK:
        second = (
            _tempo(20 + 5 * step, 3, "Marathon pace block", 100.0, ctx.marathon_pace_kmh)
            if ctx.goal == GoalType.MARATHON and ctx.marathon_pace_kmh
            else _intervals(6, 3, 2, 5, "Race sharpening")
        )
        return [_intervals(5, 4, 3, 5, "VO2max long intervals"), second]
    return [_intervals(3, 3, 3, 5, "Taper sharpener")]


# ---------------------------------------------------------------------------
# Pyramidal
# ---------------------------------------------------------------------------


def pyramidal_sessions(ctx: WeekDistributionParams) -> list[QualitySession]:
    """Tempo and threshold volume with less time above LT2."""
    step = _progress(ctx, 3)
    if ctx.phase == TrainingPhase.BASE:
        return [
            _tempo(20 + 5 * step, 3, "Steady tempo"),
            _intervals(3, 8, 2, 4, "Cruise intervals"),
        ]
    if ctx.phase == TrainingPhase.BUILD:
        return [
            _intervals(3 + step, 8, 2, 4, "Cruise intervals"),
            _tempo(30 + 5 * step, 3, "Long tempo"),
        ]
    if ctx.phase == TrainingPhase.PEAK:
        return [
            _intervals(5, 3, 3, 5, "VO2max intervals"),
            _tempo(20, 4, "Threshold tempo"),
        ]
    return [_intervals(3, 6, 2, 4, "Taper threshold")]


# ---------------------------------------------------------------------------
# Norwegian (threshold-controlled)
# ---------------------------------------------------------------------------

# (reps, work minutes, rest minutes), all in zone 4 at 2-4 mmol/L
_NORWEGIAN_LONG = ((4, 8, 1), (5, 8, 1), (4, 10, 1), (5, 10, 1))
_NORWEGIAN_SHORT = ((10, 3, 1), (12, 3, 1), (15, 2, 0.5), (20, 1, 0.5))


def norwegian_sessions(ctx: WeekDistributionParams) -> list[QualitySession]:
    """Two sub-threshold interval sessions, long and short reps."""
    if ctx.phase == TrainingPhase.TAPER:
        return [_intervals(3, 8, 1, 4, "Taper threshold")]
    long_reps, long_work, long_rest = _NORWEGIAN_LONG[_progress(ctx, len(_NORWEGIAN_LONG))]
    short_reps, short_work, short_rest = _NORWEGIAN_SHORT[_progress(ctx, len(_NORWEGIAN_SHORT))]
    return [
        _intervals(long_reps, long_work, long_rest, 4, "Threshold long reps"),
        _intervals(short_reps, short_work, short_rest, 4, "Threshold short reps"),
    ]


# ---------------------------------------------------------------------------
# Canova
# ---------------------------------------------------------------------------

# (reps, km per rep, % marathon pace)
_CANOVA_FUNDAMENTAL = ((3, 2.0, 95.0), (4, 2.0, 97.0), (3, 3.0, 98.0), (4, 3.0, 98.0))
_CANOVA_SPECIAL = ((3, 4.0, 98.0), (4, 4.0, 99.0), (4, 5.0, 100.0), (5, 5.0, 100.0))
_CANOVA_SPECIFIC = ((4, 5.0, 100.0), (5, 5.0, 100.0), (4, 6.0, 100.0), (5, 6.0, 100.0))
_CANOVA_INTENSIVE = ((8, 1.0, 103.0), (10, 1.0, 103.0), (12, 1.0, 105.0))

# (recovery km, recovery % marathon pace)
_CANOVA_RECOVERY = {
    CanovaPhase.FUNDAMENTAL: (0.8, 80.0),
    CanovaPhase.SPECIAL: (1.0, 85.0),
    CanovaPhase.SPECIFIC: (1.0, 90.0),
    CanovaPhase.TAPER: (1.0, 85.0),
}
_INTENSIVE_RECOVERY = (0.4, 90.0)

# Weeks of BASE treated as the general period
_CANOVA_GENERAL_WEEKS = 4

# Long-run pace as % of marathon pace per period
CANOVA_LONG_RUN_PACE = {
    CanovaPhase.GENERAL: None,
    CanovaPhase.FUNDAMENTAL: 80.0,
    CanovaPhase.SPECIAL: 85.0,
    CanovaPhase.SPECIFIC: 90.0,
    CanovaPhase.TAPER: None,
}


def canova_phase(phase: TrainingPhase, week_in_phase: int) -> CanovaPhase:
    """Map a macrocycle phase onto Canova's periods."""
    if phase == TrainingPhase.BASE:
        return CanovaPhase.GENERAL if week_in_phase < _CANOVA_GENERAL_WEEKS else CanovaPhase.FUNDAMENTAL
    return {
        TrainingPhase.BUILD: CanovaPhase.SPECIAL,
        TrainingPhase.PEAK: CanovaPhase.SPECIFIC,
        TrainingPhase.TAPER: CanovaPhase.TAPER,
    }[phase]


def _canova_intervals(
    option: tuple[int, float, float],
    recovery: tuple[float, float],
    marathon_pace_kmh: float | None,
    description: str,
) -> QualitySession:
    reps, km, pct = option
    recovery_km, recovery_pct = recovery
    return (
        WorkoutCategory.CANOVA_INTERVALS,
        SessionParams(
            reps=reps,
            work_distance_km=km,
            pace_percent=pct,
            recovery_distance_km=recovery_km,
            recovery_pace_percent=recovery_pct,
            marathon_pace_kmh=marathon_pace_kmh,
            zone=canova_zone(pct),
            description=description,
        ),
    )


def canova_zone(pace_percent: float) -> int:
    """Zone of a Canova rep from its % of marathon pace."""
    if pace_percent >= 105.0:
        return 4
    if pace_percent >= 100.0:
        return 3
    return 2


def canova_sessions(ctx: WeekDistributionParams) -> list[QualitySession]:
    """Marathon-pace-anchored extensive and intensive work."""
    period = canova_phase(ctx.phase, ctx.week_in_phase)
    mp = ctx.marathon_pace_kmh
    hills = _hill_sprints(8 + min(4, ctx.week_in_phase), 35, 3.0)

    if period == CanovaPhase.GENERAL:
        return [hills, _tempo(30, 3, "Progressive fundamental run", 90.0, mp)]
    if period == CanovaPhase.FUNDAMENTAL:
        option = _CANOVA_FUNDAMENTAL[_progress(ctx, len(_CANOVA_FUNDAMENTAL))]
        return [
            _canova_intervals(option, _CANOVA_RECOVERY[period], mp, "Fundamental extensive reps"),
            hills,
        ]
    intensive = _canova_intervals(
        _CANOVA_INTENSIVE[_progress(ctx, len(_CANOVA_INTENSIVE))],
        _INTENSIVE_RECOVERY,
        mp,
        "Intensive 1 km reps",
    )
    if period == CanovaPhase.SPECIAL:
        option = _CANOVA_SPECIAL[_progress(ctx, len(_CANOVA_SPECIAL))]
        return [
            _canova_intervals(option, _CANOVA_RECOVERY[period], mp, "Special extensive reps"),
            intensive,
            hills,
        ]
    if period == CanovaPhase.SPECIFIC:
        option = _CANOVA_SPECIFIC[_progress(ctx, len(_CANOVA_SPECIFIC))]
        return [
            _canova_intervals(option, _CANOVA_RECOVERY[period], mp, "Specific marathon-pace reps"),
            intensive,
            _tempo(20, 3, "Marathon pace block", 100.0, mp),
        ]
    return [_canova_intervals((3, 3.0, 100.0), _CANOVA_RECOVERY[period], mp, "Taper marathon-pace reps")]

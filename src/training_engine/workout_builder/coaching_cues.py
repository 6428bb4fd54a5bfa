"""Coaching cues — per-segment notes keyed by (WorkoutCategory, SegmentType).

Each cue carries RPE guidance so the athlete can gauge effort without
relying only on pace, power or HR.
"""

from __future__ import annotations

from training_engine.models.enums import SegmentType, WorkoutCategory

# A None category key means "default for any category".
_CUES: dict[tuple[WorkoutCategory | None, SegmentType], str] = {
    (None, SegmentType.WARMUP): "Easy start, gradually raise the effort.",
    (None, SegmentType.COOLDOWN): "Relaxed, let HR come down gradually.",
    (None, SegmentType.REST): "Easy jog or walk. Recover fully for the next rep.",
    (None, SegmentType.EXERCISE): "Controlled tempo, full range of motion.",

    (WorkoutCategory.EASY, SegmentType.WORK): "Conversational pace. RPE 3-4/10.",
    (WorkoutCategory.LONG, SegmentType.WORK): "Steady aerobic effort. Fuel every 45 min. RPE 4-5/10.",
    (WorkoutCategory.TEMPO, SegmentType.WORK): "Comfortably hard, controlled breathing. RPE 6-7/10.",
    (WorkoutCategory.INTERVALS, SegmentType.INTERVAL): "Strong, even effort across reps. RPE 7-9/10.",
    (WorkoutCategory.HILL_SPRINTS, SegmentType.INTERVAL): (
        "Maximal uphill drive, tall posture. Walk back down. RPE 9/10."
    ),
    (WorkoutCategory.HILL_SPRINTS, SegmentType.REST): "Walk down, full recovery.",
    (WorkoutCategory.CANOVA_INTERVALS, SegmentType.INTERVAL): "Lock onto the target pace. RPE 7-8/10.",
    (WorkoutCategory.CANOVA_INTERVALS, SegmentType.REST): (
        "Active recovery at the set pace, do not stop."
    ),
    (WorkoutCategory.RECOVERY, SegmentType.WORK): "Gentle mobility and stretching. RPE 1-2/10.",
    (WorkoutCategory.PLYOMETRIC, SegmentType.EXERCISE): "Quick ground contact, stop before form fades.",
    (WorkoutCategory.CORE, SegmentType.EXERCISE): "Brace, breathe, no sagging hips.",
}


def get_coaching_cue(category: WorkoutCategory, segment_type: SegmentType) -> str:
    """Cue for a segment: category-specific first, then the generic one."""
    cue = _CUES.get((category, segment_type))
    if cue is not None:
        return cue
    return _CUES.get((None, segment_type), "")

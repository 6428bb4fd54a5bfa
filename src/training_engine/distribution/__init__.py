"""Weekly workout distribution and pace validation."""

from training_engine.distribution.engine import determine_workout_distribution
from training_engine.distribution.pace_validation import (
    MarathonPaceEstimate,
    progressive_marathon_pace,
    select_reliable_marathon_pace,
    target_marathon_speed,
)

__all__ = [
    "MarathonPaceEstimate",
    "determine_workout_distribution",
    "progressive_marathon_pace",
    "select_reliable_marathon_pace",
    "target_marathon_speed",
]

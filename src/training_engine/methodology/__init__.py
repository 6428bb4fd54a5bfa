"""Methodology configurations and selection."""

from training_engine.methodology.configs import get_methodology_config
from training_engine.methodology.selector import (
    map_experience_to_athlete_level,
    recommend_methodology,
    select_methodology,
)

__all__ = [
    "get_methodology_config",
    "map_experience_to_athlete_level",
    "recommend_methodology",
    "select_methodology",
]

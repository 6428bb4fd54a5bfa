"""Environment-variable-based configuration for the CLI."""

from __future__ import annotations

import os
from pathlib import Path

LOG_LEVEL: str = os.environ.get("TRAINING_ENGINE_LOG_LEVEL", "INFO").upper()
EXERCISE_CATALOGUE_PATH: Path | None = (
    Path(os.environ["TRAINING_ENGINE_CATALOGUE"]).expanduser()
    if os.environ.get("TRAINING_ENGINE_CATALOGUE")
    else None
)
OUTPUT_INDENT: int = int(os.environ.get("TRAINING_ENGINE_OUTPUT_INDENT", "2"))

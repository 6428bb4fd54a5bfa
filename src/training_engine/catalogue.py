"""Read-only data sources: exercise catalogue and athlete lookups.

The engine depends only on the two protocols; in-memory and JSON-file
implementations are provided for tests and the CLI. Adapters signal lookup
failures with ``CatalogueError``, which the exercise lookup degrades to an
empty list.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from training_engine.exceptions import CatalogueError
from training_engine.models.enums import (
    CORE_EXERCISE_COUNT,
    PLYOMETRIC_EXERCISE_COUNT,
    BodyRegion,
    ExerciseCategory,
    StrengthFocus,
    WorkoutCategory,
)
from training_engine.models.params import ElitePaces, RaceResult

logger = logging.getLogger(__name__)

_STRENGTH_REGIONS = {
    StrengthFocus.UPPER: (BodyRegion.UPPER_BODY, BodyRegion.CORE),
    StrengthFocus.LOWER: (
        BodyRegion.POSTERIOR_CHAIN,
        BodyRegion.KNEE_DOMINANCE,
        BodyRegion.UNILATERAL,
        BodyRegion.FOOT_ANKLE,
    ),
    StrengthFocus.FULL: (
        BodyRegion.POSTERIOR_CHAIN,
        BodyRegion.KNEE_DOMINANCE,
        BodyRegion.UNILATERAL,
        BodyRegion.CORE,
    ),
}


@dataclass(frozen=True)
class ExerciseRecord:
    """A catalogue exercise. Higher ``added_order`` = added more recently."""

    exercise_id: str
    name: str
    category: ExerciseCategory
    region: BodyRegion | None = None
    added_order: int = 0


class ExerciseCatalogue(Protocol):
    def find(
        self,
        category: ExerciseCategory,
        region: BodyRegion | None = None,
        limit: int = 1,
    ) -> list[ExerciseRecord]:
        """Most recently added exercises matching the filter."""
        ...


class AthleteDataSource(Protocol):
    def get_recent_race_result(self, athlete_id: str) -> RaceResult | None: ...

    def get_elite_paces(self, athlete_id: str) -> ElitePaces | None: ...


class InMemoryExerciseCatalogue:
    """Catalogue over a fixed list of records."""

    def __init__(self, records: list[ExerciseRecord] | tuple[ExerciseRecord, ...] = ()) -> None:
        self._records = sorted(records, key=lambda r: r.added_order, reverse=True)

    def find(
        self,
        category: ExerciseCategory,
        region: BodyRegion | None = None,
        limit: int = 1,
    ) -> list[ExerciseRecord]:
        matches = [
            r for r in self._records
            if r.category == category and (region is None or r.region == region)
        ]
        return matches[:limit]


class JsonExerciseCatalogue(InMemoryExerciseCatalogue):
    """Catalogue loaded from a JSON list of exercise objects.

    Each object needs ``id``, ``name`` and ``category``; ``region`` and
    ``added_order`` are optional (file order is used when absent).

    Raises:
        CatalogueError: If the file cannot be read or parsed.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        try:
            with open(self.path) as f:
                raw = json.load(f)
            records = [
                ExerciseRecord(
                    exercise_id=str(item["id"]),
                    name=item["name"],
                    category=ExerciseCategory[item["category"].upper()],
                    region=BodyRegion[item["region"].upper()] if item.get("region") else None,
                    added_order=int(item.get("added_order", i)),
                )
                for i, item in enumerate(raw)
            ]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            raise CatalogueError(f"Cannot load exercise catalogue {self.path}: {exc}") from exc
        super().__init__(records)


class InMemoryAthleteDataSource:
    """Athlete lookups backed by dictionaries keyed by athlete id."""

    def __init__(
        self,
        race_results: dict[str, RaceResult] | None = None,
        elite_paces: dict[str, ElitePaces] | None = None,
    ) -> None:
        self._race_results = race_results or {}
        self._elite_paces = elite_paces or {}

    def get_recent_race_result(self, athlete_id: str) -> RaceResult | None:
        return self._race_results.get(athlete_id)

    def get_elite_paces(self, athlete_id: str) -> ElitePaces | None:
        return self._elite_paces.get(athlete_id)


def get_default_exercises(
    catalogue: ExerciseCatalogue | None,
    category: WorkoutCategory,
    focus: StrengthFocus | None = None,
) -> list[str]:
    """Exercise ids for a strength, core or plyometric session.

    Strength sessions take the newest exercise of each body region of the
    focus, queried one region at a time. Core takes four, plyometrics three.
    A failing catalogue yields an empty list and a warning; it never aborts
    program generation.
    """
    if catalogue is None:
        return []
    try:
        if category == WorkoutCategory.STRENGTH:
            ids: list[str] = []
            for region in _STRENGTH_REGIONS[focus or StrengthFocus.FULL]:
                ids.extend(r.exercise_id for r in catalogue.find(ExerciseCategory.STRENGTH, region, 1))
        elif category == WorkoutCategory.CORE:
            ids = [r.exercise_id for r in catalogue.find(ExerciseCategory.CORE, None, CORE_EXERCISE_COUNT)]
        elif category == WorkoutCategory.PLYOMETRIC:
            ids = [
                r.exercise_id
                for r in catalogue.find(ExerciseCategory.PLYOMETRIC, None, PLYOMETRIC_EXERCISE_COUNT)
            ]
        else:
            return []
    except CatalogueError as exc:
        logger.warning("Exercise lookup for %s failed: %s", category.name, exc)
        return []

    if not ids:
        logger.info("No %s exercises in catalogue", category.name)
    return ids

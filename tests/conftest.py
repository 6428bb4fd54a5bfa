"""Shared test fixtures: lactate tests, stored records, catalogues, requests."""

from __future__ import annotations

from datetime import date

import pytest

from training_engine.catalogue import ExerciseRecord, InMemoryExerciseCatalogue
from training_engine.models.enums import (
    BodyRegion,
    ExerciseCategory,
    ExperienceLevel,
    GoalType,
    IntensityUnit,
)
from training_engine.models.lactate import LactateTestData
from training_engine.models.params import ProgramGenerationParams, TestRecord


@pytest.fixture
def cubic_power_test() -> LactateTestData:
    """Cycling step test whose lactate lies exactly on a cubic.

    L(t) = 1.5 + 11t - 24t² + 24t³ with t = (W - 100) / 150, so D-max sits
    at t = 2/3 (200 W, 5.28 mmol/L).
    """
    return LactateTestData(
        intensity=(100.0, 130.0, 160.0, 190.0, 220.0, 250.0),
        lactate=(1.5, 2.932, 3.596, 4.644, 7.228, 12.5),
        heart_rate=(125.0, 137.0, 149.0, 161.0, 174.0, 186.0),
        unit=IntensityUnit.POWER,
    )


@pytest.fixture
def running_test() -> LactateTestData:
    """Treadmill test, 10-16 km/h in 1 km/h stages."""
    return LactateTestData(
        intensity=(10.0, 11.0, 12.0, 13.0, 14.0, 15.0, 16.0),
        lactate=(1.2, 1.3, 1.6, 2.1, 2.9, 4.3, 6.8),
        heart_rate=(140.0, 148.0, 155.0, 162.0, 169.0, 176.0, 183.0),
        unit=IntensityUnit.SPEED,
    )


@pytest.fixture
def running_record(running_test: LactateTestData) -> TestRecord:
    return TestRecord(test_id="run-1", stages=running_test, max_hr=190)


@pytest.fixture
def cycling_record(cubic_power_test: LactateTestData) -> TestRecord:
    return TestRecord(test_id="bike-1", stages=cubic_power_test)


@pytest.fixture
def catalogue() -> InMemoryExerciseCatalogue:
    """Two exercises per strength region plus core and plyometric work."""
    records = []
    order = 0
    for region in BodyRegion:
        for suffix in ("old", "new"):
            order += 1
            records.append(ExerciseRecord(
                exercise_id=f"{region.name.lower()}-{suffix}",
                name=f"{region.name.title()} {suffix}",
                category=ExerciseCategory.STRENGTH,
                region=region,
                added_order=order,
            ))
    for i in range(5):
        order += 1
        records.append(ExerciseRecord(f"core-{i}", f"Core {i}", ExerciseCategory.CORE, added_order=order))
    for i in range(4):
        order += 1
        records.append(ExerciseRecord(f"plyo-{i}", f"Plyo {i}", ExerciseCategory.PLYOMETRIC, added_order=order))
    return InMemoryExerciseCatalogue(records)


@pytest.fixture
def marathon_params() -> ProgramGenerationParams:
    """16-week marathon block, 4 days a week, intermediate runner."""
    return ProgramGenerationParams(
        athlete_id="athlete-1",
        goal_type=GoalType.MARATHON,
        duration_weeks=16,
        training_days_per_week=4,
        experience_level=ExperienceLevel.INTERMEDIATE,
        start_date=date(2026, 1, 5),
        target_race_date=date(2026, 4, 26),
        methodology="POLARIZED",
    )

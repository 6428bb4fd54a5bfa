"""Data models for the training engine."""

from training_engine.models.enums import (
    AthleteLevel,
    Confidence,
    ExperienceLevel,
    GoalType,
    IntensityUnit,
    MethodologyType,
    SegmentType,
    ThresholdMethod,
    TrainingPhase,
    WorkoutCategory,
    WorkoutIntensity,
    WorkoutType,
    ZoneSource,
)
from training_engine.models.lactate import LactateTestData, PolynomialFit, ThresholdResult
from training_engine.models.methodology import (
    MethodologyConfig,
    MethodologySelection,
    WeeklyStructure,
    ZoneDistribution,
)
from training_engine.models.params import (
    ElitePaces,
    ProgramGenerationParams,
    RaceResult,
    TestRecord,
)
from training_engine.models.plan import (
    DeloadSchedule,
    DeloadWeek,
    PhaseDistribution,
    SessionParams,
    VolumeProgressionEntry,
    WorkoutPlanEntry,
)
from training_engine.models.program import TrainingDay, TrainingProgram, TrainingWeek
from training_engine.models.workout import SegmentTargets, Workout, WorkoutSegment
from training_engine.models.zones import TrainingZone, ZoneTable

__all__ = [
    "AthleteLevel",
    "Confidence",
    "DeloadSchedule",
    "DeloadWeek",
    "ElitePaces",
    "ExperienceLevel",
    "GoalType",
    "IntensityUnit",
    "LactateTestData",
    "MethodologyConfig",
    "MethodologySelection",
    "MethodologyType",
    "PhaseDistribution",
    "PolynomialFit",
    "ProgramGenerationParams",
    "RaceResult",
    "SegmentTargets",
    "SegmentType",
    "SessionParams",
    "TestRecord",
    "ThresholdMethod",
    "ThresholdResult",
    "TrainingDay",
    "TrainingPhase",
    "TrainingProgram",
    "TrainingWeek",
    "TrainingZone",
    "VolumeProgressionEntry",
    "WeeklyStructure",
    "Workout",
    "WorkoutCategory",
    "WorkoutIntensity",
    "WorkoutPlanEntry",
    "WorkoutSegment",
    "WorkoutType",
    "ZoneDistribution",
    "ZoneSource",
    "ZoneTable",
]

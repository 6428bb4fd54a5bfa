"""Custom exception hierarchy for the training engine."""

from __future__ import annotations


class TrainingEngineError(Exception):
    """Base exception for all training engine errors."""


class ValidationError(TrainingEngineError):
    """Test data or generation parameters are malformed."""


class InsufficientDataError(ValidationError):
    """Too few test stages to fit a curve."""

    def __init__(self, message: str, points: int) -> None:
        super().__init__(message)
        self.points = points


class CatalogueError(TrainingEngineError):
    """The exercise catalogue could not be queried."""


class ProgramGenerationError(TrainingEngineError):
    """An internal invariant broke while assembling a program."""

    def __init__(self, message: str, week_number: int | None = None) -> None:
        super().__init__(message)
        self.week_number = week_number

"""Serialization module — parse input documents, export creation payloads."""

from training_engine.serialization.inputs import parse_params, parse_test_record
from training_engine.serialization.payload import (
    to_program_json,
    to_program_payload,
    to_threshold_payload,
)

__all__ = [
    "parse_params",
    "parse_test_record",
    "to_program_json",
    "to_program_payload",
    "to_threshold_payload",
]

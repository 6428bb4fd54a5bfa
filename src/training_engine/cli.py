"""Command-line entry point.

Usage:
    training-engine detect TEST.json
    training-engine generate TEST.json PARAMS.json [--catalogue CAT.json] [--output OUT.json]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from training_engine.catalogue import JsonExerciseCatalogue
from training_engine.config import EXERCISE_CATALOGUE_PATH, LOG_LEVEL, OUTPUT_INDENT
from training_engine.engine import ProgramGenerator
from training_engine.exceptions import TrainingEngineError, ValidationError
from training_engine.math.dmax import detect_aerobic_threshold, detect_dmax, detect_mod_dmax
from training_engine.serialization import (
    parse_params,
    parse_test_record,
    to_program_json,
    to_threshold_payload,
)

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> dict:
    try:
        with open(path) as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        raise ValidationError(f"Cannot read {path}: {exc}") from exc


def run_detect(args: argparse.Namespace) -> int:
    """Print D-max, Mod-Dmax and aerobic threshold results as JSON."""
    record = parse_test_record(_load_json(args.test))
    if record.stages is None:
        raise ValidationError(f"{args.test} has no test stages")

    aerobic = detect_aerobic_threshold(record.stages)
    result = {
        "testId": record.test_id,
        "dmax": to_threshold_payload(detect_dmax(record.stages)),
        "modDmax": to_threshold_payload(detect_mod_dmax(record.stages)),
        "aerobicThreshold": to_threshold_payload(aerobic) if aerobic else None,
    }
    print(json.dumps(result, indent=OUTPUT_INDENT))
    return 0


def run_generate(args: argparse.Namespace) -> int:
    """Generate a program and write its creation payload."""
    record = parse_test_record(_load_json(args.test))
    params = parse_params(_load_json(args.params))

    catalogue_path = args.catalogue or EXERCISE_CATALOGUE_PATH
    catalogue = JsonExerciseCatalogue(catalogue_path) if catalogue_path else None

    program = ProgramGenerator(catalogue).generate(record, params)
    for warning in program.warnings:
        logger.warning(warning)

    output = to_program_json(program, indent=OUTPUT_INDENT)
    if args.output:
        args.output.write_text(output + "\n")
        logger.info("Wrote %s (%d weeks) to %s", program.name, program.duration_weeks, args.output)
    else:
        print(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="training-engine",
        description="Lactate threshold detection and training program generation",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    detect = sub.add_parser("detect", help="Detect thresholds from a lactate test")
    detect.add_argument("test", type=Path, help="Test record JSON file")
    detect.set_defaults(func=run_detect)

    generate = sub.add_parser("generate", help="Generate a periodized program")
    generate.add_argument("test", type=Path, help="Test record JSON file")
    generate.add_argument("params", type=Path, help="Generation request JSON file")
    generate.add_argument("--catalogue", type=Path, help="Exercise catalogue JSON file")
    generate.add_argument("--output", type=Path, help="Write payload here instead of stdout")
    generate.set_defaults(func=run_generate)
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except TrainingEngineError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())

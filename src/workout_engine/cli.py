"""Command-line entry point for inspecting stored workouts.

Usage:
    workout-engine summarize record.json --five-k-pace 7:00/mi --easy-pace 9:45/mi
    workout-engine summarize record.json --metric --json
    workout-engine zones samples.json --ftp 250
    workout-engine zones samples.json --threshold-pace 7:30/mi
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from workout_engine.config import LOG_LEVEL, EngineConfig
from workout_engine.engine import WorkoutEngine
from workout_engine.exceptions import RecordParseError
from workout_engine.math.units import format_duration, parse_pace, trim_number
from workout_engine.math.zones import classify, classify_pace, zone_frame
from workout_engine.models.enums import METERS_PER_KM, METERS_PER_MILE, UnitSystem
from workout_engine.models.workout_spec import Baselines
from workout_engine.normalizer.record_parser import load_record
from workout_engine.serialization import to_facts_json_string

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workout-engine",
        description="Normalize workout specifications and analyse sample series",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    summarize = subparsers.add_parser("summarize", help="Print title, totals and summary lines")
    summarize.add_argument("record", help="Path to a JSON workout record")
    summarize.add_argument("--metric", action="store_true", help="Render km and /km paces")
    summarize.add_argument("--ftp", type=float, help="Functional threshold power in watts")
    summarize.add_argument("--five-k-pace", help="5K pace, e.g. 7:00/mi")
    summarize.add_argument("--ten-k-pace", help="10K pace, e.g. 7:20/mi")
    summarize.add_argument("--easy-pace", help="Easy pace, e.g. 9:45/mi")
    summarize.add_argument("--marathon-pace", help="Marathon pace, e.g. 8:10/mi")
    summarize.add_argument("--swim-pace", help="Swim pace per 100, e.g. 1:45/100yd or a bare 1:45")
    summarize.add_argument("--json", action="store_true", help="Emit the facts as JSON")

    zones = subparsers.add_parser("zones", help="Print time-in-zone for a sample series")
    zones.add_argument("samples", help="Path to a JSON list of samples")
    reference = zones.add_mutually_exclusive_group(required=True)
    reference.add_argument("--ftp", type=float, help="Power samples against this FTP")
    reference.add_argument("--threshold-pace", help="Pace samples against this threshold pace")
    return parser


def _summarize(args: argparse.Namespace) -> int:
    try:
        spec = load_record(args.record)
    except RecordParseError as exc:
        logger.error("%s", exc)
        return 1

    config = EngineConfig.from_env()
    unit_system = UnitSystem.METRIC if args.metric else config.unit_system
    baselines = Baselines(
        ftp=args.ftp,
        five_k_pace=args.five_k_pace,
        ten_k_pace=args.ten_k_pace,
        easy_pace=args.easy_pace,
        marathon_pace=args.marathon_pace,
        swim_pace_per_100=args.swim_pace,
    )
    facts = WorkoutEngine(config).normalize(spec, baselines, unit_system)

    if args.json:
        print(to_facts_json_string(facts))
        return 0

    print(facts.title if not facts.optional else f"{facts.title} (optional)")
    totals = [facts.code]
    if facts.total_seconds:
        totals.append(f"{format_duration(facts.total_seconds)} ({facts.duration_source})")
    if facts.total_meters:
        if unit_system == UnitSystem.METRIC:
            totals.append(f"{trim_number(facts.total_meters / METERS_PER_KM)} km")
        else:
            totals.append(f"{trim_number(facts.total_meters / METERS_PER_MILE)} mi")
    print(" | ".join(totals))
    for line in facts.lines:
        print(f"  {line.text}")
    if not facts.lines and facts.token_lines:
        print(" • ".join(facts.token_lines))
    if facts.skipped_tokens:
        print(f"Skipped tokens: {', '.join(facts.skipped_tokens)}")
    return 0


def _zones(args: argparse.Namespace) -> int:
    try:
        with open(args.samples, encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Cannot read samples %s: %s", args.samples, exc)
        return 1

    samples = payload.get("samples") if isinstance(payload, dict) else payload
    if not isinstance(samples, list):
        logger.error("Samples file %s holds no sample list", args.samples)
        return 1

    if args.threshold_pace is not None:
        parsed = parse_pace(args.threshold_pace)
        if parsed is None:
            logger.error("Unrecognised threshold pace %r", args.threshold_pace)
            return 1
        distribution = classify_pace(samples, parsed[0])
    else:
        distribution = classify(samples, args.ftp)

    print(zone_frame(distribution).to_string(index=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = _build_parser().parse_args(argv)
    if args.command == "summarize":
        return _summarize(args)
    return _zones(args)


if __name__ == "__main__":
    sys.exit(main())

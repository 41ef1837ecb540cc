"""JSON serialization of WorkoutFacts for the rendering collaborator.

Enum values are emitted as lower-case names. All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from enum import Enum

from workout_engine.models.facts import WorkoutFacts
from workout_engine.models.summary import DisplayLine
from workout_engine.models.target_range import TargetRange
from workout_engine.models.workout_spec import Step


def to_facts_dict(facts: WorkoutFacts) -> dict:
    """Convert WorkoutFacts to a JSON-ready dict."""
    steps = [
        _convert_step(step, seconds, target_range)
        for step, seconds, target_range in zip(facts.steps, facts.step_seconds, facts.step_ranges)
    ]
    return {
        "title": facts.title,
        "code": facts.code,
        "discipline": _enum_name(facts.discipline),
        "optional": facts.optional,
        "totalSeconds": facts.total_seconds,
        "totalMeters": round(facts.total_meters, 1) if facts.total_meters is not None else None,
        "durationSource": facts.duration_source,
        "steps": steps,
        "lines": [_convert_line(line) for line in facts.lines],
        "tokenLines": list(facts.token_lines),
        "skippedTokens": list(facts.skipped_tokens),
    }


def to_facts_json_string(facts: WorkoutFacts, indent: int = 2) -> str:
    """Convert WorkoutFacts to a JSON string."""
    return json.dumps(to_facts_dict(facts), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _convert_step(step: Step, seconds: int | None, target_range: TargetRange | None) -> dict:
    result = {
        "id": step.step_id,
        "kind": _enum_name(step.kind),
        "seconds": seconds,
        "distanceMeters": round(step.distance_meters, 1) if step.distance_meters else None,
        "label": step.label or None,
        "range": _convert_range(target_range),
    }
    # Authored distance, so the client can show '50 yd' rather than '45.7 m'
    if step.original_amount is not None and step.original_unit is not None:
        result["authoredDistance"] = {
            "amount": step.original_amount,
            "unit": _enum_name(step.original_unit),
        }
    return result


def _convert_range(target_range: TargetRange | None) -> dict | None:
    if target_range is None:
        return None
    return {
        "lower": target_range.lower,
        "upper": target_range.upper,
        "unit": _enum_name(target_range.unit),
    }


def _convert_line(line: DisplayLine) -> dict:
    return {
        "text": line.text,
        "repeatCount": line.block.repeat_count if line.block is not None else None,
    }


def _enum_name(value: Enum | None) -> str | None:
    return value.name.lower() if value is not None else None

"""Record parser — raw storage rows into WorkoutSpec.

Stored rows are loosely shaped: the same field may arrive as a list, a JSON
string, or not at all, and step fields have several spellings. Every field
is normalised here so downstream code only sees typed values or an explicit
``None``/empty.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from workout_engine.exceptions import RecordParseError
from workout_engine.math.units import (
    is_positive_number,
    parse_distance_unit,
    to_meters,
)
from workout_engine.models.enums import (
    MAX_EXPANDED_STEPS,
    MAX_REPEAT_COUNT,
    Discipline,
    DistanceUnit,
    IntensityKind,
    RangeUnit,
    StepKind,
)
from workout_engine.models.workout_spec import NO_TARGET, IntensityTarget, Step, WorkoutSpec

logger = logging.getLogger(__name__)

_DISCIPLINE_ALIASES: dict[str, Discipline] = {
    "run": Discipline.RUN,
    "running": Discipline.RUN,
    "ride": Discipline.RIDE,
    "bike": Discipline.RIDE,
    "cycling": Discipline.RIDE,
    "swim": Discipline.SWIM,
    "swimming": Discipline.SWIM,
    "strength": Discipline.STRENGTH,
    "mobility": Discipline.MOBILITY,
    "pilates": Discipline.PILATES_YOGA,
    "yoga": Discipline.PILATES_YOGA,
    "pilates_yoga": Discipline.PILATES_YOGA,
}

_STEP_KIND_ALIASES: dict[str, StepKind] = {
    "warmup": StepKind.WARMUP,
    "warm_up": StepKind.WARMUP,
    "wu": StepKind.WARMUP,
    "cooldown": StepKind.COOLDOWN,
    "cool_down": StepKind.COOLDOWN,
    "cd": StepKind.COOLDOWN,
    "work": StepKind.WORK,
    "interval": StepKind.WORK,
    "active": StepKind.WORK,
    "main": StepKind.WORK,
    "recovery": StepKind.RECOVERY,
    "rest": StepKind.RECOVERY,
    "recover": StepKind.RECOVERY,
    "jog": StepKind.RECOVERY,
    "steady": StepKind.STEADY,
    "easy": StepKind.STEADY,
    "endurance": StepKind.STEADY,
}

_DURATION_KEYS = ("durationSeconds", "duration_seconds", "duration_s", "seconds", "duration")
_DISTANCE_KEYS = ("distanceMeters", "distance_meters", "distance_m", "meters")
_KIND_KEYS = ("kind", "type", "effortLabel")
_REPEAT_COUNT_KEYS = ("repeatCount", "repeat_count", "reps")
_REPEAT_BODY_KEYS = ("segments", "steps")

# Range-shaped target fields, most specific first
_RANGE_TARGET_FIELDS: tuple[tuple[str, IntensityKind, RangeUnit], ...] = (
    ("pace_range", IntensityKind.PACE, RangeUnit.SEC_PER_MI),
    ("power_range", IntensityKind.POWER, RangeUnit.WATTS),
    ("heart_rate_range", IntensityKind.HEART_RATE, RangeUnit.BPM),
    ("hr_range", IntensityKind.HEART_RATE, RangeUnit.BPM),
    ("rpe_range", IntensityKind.RPE, RangeUnit.RPE),
)

# Single-value target fields
_VALUE_TARGET_FIELDS: tuple[tuple[str, IntensityKind, RangeUnit | None], ...] = (
    ("paceTarget", IntensityKind.PACE, None),
    ("pace", IntensityKind.PACE, None),
    ("pace_sec_per_mi", IntensityKind.PACE, RangeUnit.SEC_PER_MI),
    ("pace_sec_per_km", IntensityKind.PACE, RangeUnit.SEC_PER_KM),
    ("target_watts", IntensityKind.POWER, RangeUnit.WATTS),
    ("power", IntensityKind.POWER, RangeUnit.WATTS),
)


def parse_record(raw: Any) -> WorkoutSpec:
    """Normalise one stored workout row.

    Args:
        raw: Mapping as read from storage. Anything else is treated as an
            empty record.

    Returns:
        A WorkoutSpec. Malformed embedded JSON fields are logged and treated
        as absent; this function never raises on bad data.
    """
    if not isinstance(raw, Mapping):
        logger.warning("Workout record is %s, not a mapping; treating as empty", type(raw).__name__)
        return WorkoutSpec()

    computed = _json_field(raw, "computed")
    computed = computed if isinstance(computed, Mapping) else {}

    raw_steps = _json_field(raw, "steps")
    if raw_steps is None:
        raw_steps = _json_field(raw, "intervals")
    if raw_steps is None:
        raw_steps = computed.get("steps")

    total_seconds = _number(raw.get("total_duration_seconds"))
    if total_seconds is None:
        total_seconds = _number(computed.get("total_duration_seconds"))

    hints = _json_field(raw, "export_hints")

    return WorkoutSpec(
        discipline=parse_discipline(raw.get("type") or raw.get("discipline")),
        steps=parse_steps(raw_steps),
        steps_preset_tokens=_string_tuple(_json_field(raw, "steps_preset")),
        total_duration_seconds=total_seconds,
        stored_duration_minutes=_number(raw.get("duration")),
        description=_text(raw.get("rendered_description") or raw.get("description")),
        name=_text(raw.get("name")),
        tags=frozenset(tag.lower() for tag in _string_tuple(_json_field(raw, "tags"))),
        ftp=_positive(raw.get("ftp")),
        pool_length_meters=_pool_length(raw),
        export_hints=dict(hints) if isinstance(hints, Mapping) else {},
    )


def load_record(path: str | Path) -> WorkoutSpec:
    """Read a JSON record file and parse it.

    Raises:
        RecordParseError: If the file cannot be read, is not valid JSON, or
            does not hold a JSON object.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise RecordParseError(f"Cannot read workout record {path}: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise RecordParseError(f"Workout record {path} is not a JSON object")
    return parse_record(payload)


def parse_discipline(value: Any) -> Discipline | None:
    if not isinstance(value, str):
        return None
    return _DISCIPLINE_ALIASES.get(value.strip().lower())


def parse_steps(raw_steps: Any) -> tuple[Step, ...]:
    """Parse a stored step list, flattening ``{repeatCount, segments}`` groups.

    Groups repeating more than ``MAX_REPEAT_COUNT`` times, or expanding past
    ``MAX_EXPANDED_STEPS`` steps, are malformed: logged and skipped.
    """
    if not isinstance(raw_steps, (list, tuple)):
        return ()
    steps: list[Step] = []
    for item in raw_steps:
        if not isinstance(item, Mapping):
            continue
        repeat = _repeat_group(item)
        if repeat is not None:
            count, body = repeat
            body_steps = parse_steps(body)
            if count > MAX_REPEAT_COUNT or count * len(body_steps) > MAX_EXPANDED_STEPS:
                logger.warning(
                    "Repeat group of %d x %d steps is too large; skipping it", count, len(body_steps),
                )
                continue
            steps.extend(body_steps * count)
        else:
            steps.append(parse_step(item))
    return tuple(steps)


def parse_step(raw: Mapping[str, Any]) -> Step:
    """Parse one stored step, accepting the spellings seen in storage."""
    amount, unit = _authored_distance(raw)
    distance = _first_number(raw, _DISTANCE_KEYS)
    if distance is None and amount is not None:
        distance = to_meters(amount, unit)

    label = raw.get("label")
    step_id = raw.get("id")
    return Step(
        kind=_step_kind(raw),
        duration_seconds=_first_number(raw, _DURATION_KEYS),
        distance_meters=distance,
        target=parse_target(raw),
        label=label.strip() if isinstance(label, str) else "",
        original_amount=amount,
        original_unit=unit,
        step_id=str(step_id) if step_id is not None else None,
    )


def parse_target(raw: Mapping[str, Any]) -> IntensityTarget:
    """Pick the step's intensity target from the first populated field."""
    for key, kind, unit in _RANGE_TARGET_FIELDS:
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            pace_unit = _pace_unit(value.get("unit")) if kind == IntensityKind.PACE else None
            lower, upper = value.get("lower"), value.get("upper")
            if isinstance(lower, str) or isinstance(upper, str):
                # Encoded bounds ('7:24/mi') resolve as a pair
                value = (lower, upper)
            return IntensityTarget(kind=kind, value=value, unit=pace_unit or unit)
        return IntensityTarget(kind=kind, value=value, unit=unit)

    for key, kind, unit in _VALUE_TARGET_FIELDS:
        value = raw.get(key)
        if value is not None and value != "":
            return IntensityTarget(kind=kind, value=value, unit=unit)
    return NO_TARGET


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _json_field(raw: Mapping[str, Any], key: str) -> Any:
    """Return a field, decoding it first if it was stored as a JSON string."""
    value = raw.get(key)
    if not isinstance(value, str):
        return value
    if not value.strip():
        return None
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError, ValueError):
        logger.warning("Malformed JSON in field %r; treating as absent", key)
        return None


def _repeat_group(item: Mapping[str, Any]) -> tuple[int, Any] | None:
    count = _first_number(item, _REPEAT_COUNT_KEYS)
    if count is None:
        return None
    for key in _REPEAT_BODY_KEYS:
        body = item.get(key)
        if isinstance(body, (list, tuple)):
            return int(count), body
    return None


def _step_kind(raw: Mapping[str, Any]) -> StepKind | None:
    for key in _KIND_KEYS:
        value = raw.get(key)
        if isinstance(value, str):
            kind = _STEP_KIND_ALIASES.get(value.strip().lower().replace(" ", "_").replace("-", "_"))
            if kind is not None:
                return kind
    return None


def _authored_distance(raw: Mapping[str, Any]) -> tuple[float | None, DistanceUnit | None]:
    """Authored (amount, unit) such as ``{"distance": 50, "distance_unit": "yd"}``."""
    amount = _positive(raw.get("distance"))
    unit = parse_distance_unit(raw.get("distance_unit") or raw.get("distanceUnit"))
    if amount is None or unit is None:
        return None, None
    return amount, unit


def _pace_unit(text: Any) -> RangeUnit | None:
    if not isinstance(text, str):
        return None
    lowered = text.lower().replace(" ", "")
    if "100yd" in lowered:
        return RangeUnit.SEC_PER_100YD
    if "100m" in lowered:
        return RangeUnit.SEC_PER_100M
    if "km" in lowered:
        return RangeUnit.SEC_PER_KM
    if "mi" in lowered:
        return RangeUnit.SEC_PER_MI
    return None


def _pool_length(raw: Mapping[str, Any]) -> float | None:
    meters = _positive(raw.get("pool_length_meters"))
    if meters is not None:
        return meters
    length = _positive(raw.get("pool_length"))
    if length is None:
        return None
    unit = parse_distance_unit(raw.get("pool_unit")) or DistanceUnit.METERS
    return to_meters(length, unit)


def _first_number(raw: Mapping[str, Any], keys: tuple[str, ...]) -> float | None:
    for key in keys:
        value = _positive(raw.get(key))
        if value is not None:
            return value
    return None


def _number(value: Any) -> float | None:
    """Positive number from a number or numeric string; None otherwise."""
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    return _positive(value)


def _positive(value: Any) -> float | None:
    return value if is_positive_number(value) else None


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _string_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item is not None and str(item).strip())

"""Target range resolver — turns a raw intensity target into a TargetRange.

Resolution order (first match wins, sources are never merged):
    1. An already-structured range with numeric ``lower``/``upper``.
    2. A two-element tuple (numbers, or two encoded paces).
    3. A single encoded pace string ('m:ss/mi', 'm:ss/km', 'm:ss/100yd').
    4. A single seconds-per-unit (or watts) number.

Single values are widened by a tolerance band: the easy band for
warmup/cooldown/recovery steps, the quality band for everything else.
Nothing resolvable means no range; a fabricated number is never returned.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from workout_engine.config import ToleranceConfig
from workout_engine.math.units import (
    convert_pace,
    display_pace_unit,
    format_clock,
    is_positive_number,
    pace_suffix,
    parse_pace,
    round_half_up,
    trim_number,
)
from workout_engine.models.enums import (
    EASY_STEP_KINDS,
    PACE_UNITS,
    IntensityKind,
    RangeUnit,
    StepKind,
    UnitSystem,
)
from workout_engine.models.target_range import TargetRange
from workout_engine.models.workout_spec import IntensityTarget, Step

_DEFAULT_UNIT: dict[IntensityKind, RangeUnit] = {
    IntensityKind.NONE: RangeUnit.SEC_PER_MI,
    IntensityKind.PACE: RangeUnit.SEC_PER_MI,
    IntensityKind.POWER: RangeUnit.WATTS,
    IntensityKind.HEART_RATE: RangeUnit.BPM,
    IntensityKind.RPE: RangeUnit.RPE,
}


def tolerance_for(kind: StepKind | None, tolerance: ToleranceConfig | None = None) -> float:
    """Easy band for WU/CD/recovery kinds, quality band otherwise."""
    tolerance = tolerance or ToleranceConfig()
    if kind in EASY_STEP_KINDS:
        return tolerance.easy
    return tolerance.quality


def resolve(
    target: IntensityTarget | Any,
    segment_kind: StepKind | None,
    tolerance: ToleranceConfig | None = None,
) -> TargetRange | None:
    """Resolve a raw target into a canonical range.

    Args:
        target: An IntensityTarget, or the raw stored value itself.
        segment_kind: Kind of the owning step; selects the tolerance band.
        tolerance: Quality/easy tolerance fractions (defaults if omitted).

    Returns:
        A TargetRange with ``0 < lower <= upper``, or None when nothing
        resolves.
    """
    if isinstance(target, IntensityTarget):
        if target.is_empty:
            return None
        raw = target.value
        unit = target.unit or _DEFAULT_UNIT[target.kind]
    else:
        raw = target
        unit = RangeUnit.SEC_PER_MI
    if raw is None:
        return None

    # 1. Structured range
    bounds = _structured_bounds(raw)
    if bounds is not None:
        lower, upper, own_unit = bounds
        return _ordered(lower, upper, own_unit or unit)

    # 2. Two-element tuple
    if isinstance(raw, Sequence) and not isinstance(raw, str):
        return _resolve_pair(raw, unit)

    band = tolerance_for(segment_kind, tolerance)

    # 3. Encoded pace string
    if isinstance(raw, str):
        parsed = parse_pace(raw)
        if parsed is None:
            return None
        seconds, pace_unit = parsed
        return _widen(seconds, pace_unit, band)

    # 4. Single number
    if is_positive_number(raw):
        return _widen(float(raw), unit, band)
    return None


def resolve_step(step: Step, tolerance: ToleranceConfig | None = None) -> TargetRange | None:
    """Resolve the target of *step* using the step's own kind."""
    return resolve(step.target, step.kind, tolerance)


def format_range(target_range: TargetRange, unit_system: UnitSystem = UnitSystem.IMPERIAL) -> str:
    """Render a range for display, e.g. '7:24–8:02/mi', '190–210 W'.

    Run paces follow the caller's unit system; swim paces keep their unit.
    """
    lower, upper, unit = target_range.lower, target_range.upper, target_range.unit
    if unit in PACE_UNITS:
        shown = display_pace_unit(unit, unit_system)
        lo_text = format_clock(convert_pace(lower, unit, shown))
        hi_text = format_clock(convert_pace(upper, unit, shown))
        body = lo_text if lo_text == hi_text else f"{lo_text}–{hi_text}"
        return f"{body}{pace_suffix(shown)}"
    if unit == RangeUnit.RPE:
        lo_text, hi_text = trim_number(lower, 1), trim_number(upper, 1)
        return f"RPE {lo_text}" if lo_text == hi_text else f"RPE {lo_text}–{hi_text}"
    suffix = "W" if unit == RangeUnit.WATTS else "bpm"
    lo_text, hi_text = str(round_half_up(lower)), str(round_half_up(upper))
    body = lo_text if lo_text == hi_text else f"{lo_text}–{hi_text}"
    return f"{body} {suffix}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _structured_bounds(raw: Any) -> tuple[float, float, RangeUnit | None] | None:
    """Pull numeric lower/upper from a mapping or a range-like object."""
    if isinstance(raw, Mapping):
        lower, upper = raw.get("lower"), raw.get("upper")
        unit = raw.get("unit") if isinstance(raw.get("unit"), RangeUnit) else None
    elif not isinstance(raw, str) and hasattr(raw, "lower") and hasattr(raw, "upper"):
        lower, upper = raw.lower, raw.upper
        unit = getattr(raw, "unit", None)
        unit = unit if isinstance(unit, RangeUnit) else None
    else:
        return None
    if not (_is_number(lower) and _is_number(upper)):
        return None
    return float(lower), float(upper), unit


def _resolve_pair(raw: Sequence[Any], unit: RangeUnit) -> TargetRange | None:
    if len(raw) != 2:
        return None
    first, second = raw
    if _is_number(first) and _is_number(second):
        return _ordered(float(first), float(second), unit)
    first_pace, second_pace = parse_pace(first), parse_pace(second)
    if first_pace is None or second_pace is None:
        return None
    if first_pace[1] != second_pace[1]:
        return None
    return _ordered(first_pace[0], second_pace[0], first_pace[1])


def _widen(center: float, unit: RangeUnit, band: float) -> TargetRange | None:
    lower = round_half_up(center * (1 - band))
    upper = round_half_up(center * (1 + band))
    return _ordered(lower, upper, unit)


def _ordered(lower: float, upper: float, unit: RangeUnit) -> TargetRange | None:
    if lower > upper:
        lower, upper = upper, lower
    if lower <= 0:
        return None
    return TargetRange(lower=lower, upper=upper, unit=unit)


def _is_number(value: Any) -> bool:
    return is_positive_number(value) or value == 0

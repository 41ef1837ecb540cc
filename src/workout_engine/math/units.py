"""Unit and time helpers: clock strings, paces, and distance conversion.

All functions are pure and never raise on malformed text; parsers return
None when the input does not match.
"""

from __future__ import annotations

import math
import numbers
import re

from workout_engine.models.enums import (
    METERS_PER_DISTANCE_UNIT,
    METERS_PER_MILE,
    METERS_PER_PACE_UNIT,
    METERS_PER_YARD,
    SWIM_PACE_UNITS,
    DistanceUnit,
    RangeUnit,
    UnitSystem,
)

_CLOCK_RE = re.compile(r"^\s*(?:(\d+):)?(\d*):(\d{2})\s*$")
_PACE_RE = re.compile(
    r"(\d+):(\d{2})\s*(?:(?:/|per)\s*(mi|km|100\s*yd|100\s*m)\b)?",
    re.IGNORECASE,
)

_PACE_SUFFIX: dict[RangeUnit, str] = {
    RangeUnit.SEC_PER_MI: "/mi",
    RangeUnit.SEC_PER_KM: "/km",
    RangeUnit.SEC_PER_100YD: "/100yd",
    RangeUnit.SEC_PER_100M: "/100m",
}

_PACE_UNIT_BY_TEXT: dict[str, RangeUnit] = {
    "mi": RangeUnit.SEC_PER_MI,
    "km": RangeUnit.SEC_PER_KM,
    "100yd": RangeUnit.SEC_PER_100YD,
    "100m": RangeUnit.SEC_PER_100M,
}

DISTANCE_SYMBOLS: dict[DistanceUnit, str] = {
    DistanceUnit.METERS: "m",
    DistanceUnit.YARDS: "yd",
    DistanceUnit.KILOMETERS: "km",
    DistanceUnit.MILES: "mi",
}

_DISTANCE_UNIT_BY_TEXT: dict[str, DistanceUnit] = {
    "m": DistanceUnit.METERS,
    "yd": DistanceUnit.YARDS,
    "km": DistanceUnit.KILOMETERS,
    "mi": DistanceUnit.MILES,
}

# Authored distance units that display as written in each system
_SYSTEM_UNITS: dict[UnitSystem, frozenset[DistanceUnit]] = {
    UnitSystem.IMPERIAL: frozenset({DistanceUnit.YARDS, DistanceUnit.MILES}),
    UnitSystem.METRIC: frozenset({DistanceUnit.METERS, DistanceUnit.KILOMETERS}),
}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def is_positive_number(value: object) -> bool:
    """True for finite numbers > 0 (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value) and value > 0


def trim_number(value: float, places: int = 2) -> str:
    """Format with at most *places* decimals, dropping trailing zeros."""
    text = f"{value:.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


# ---------------------------------------------------------------------------
# Clock time
# ---------------------------------------------------------------------------


def parse_clock(text: str | None) -> int | None:
    """Parse 'm:ss', 'h:mm:ss' or ':ss' into whole seconds."""
    if not isinstance(text, str):
        return None
    match = _CLOCK_RE.match(text)
    if match is None:
        return None
    hours = int(match.group(1)) if match.group(1) else 0
    minutes = int(match.group(2)) if match.group(2) else 0
    seconds = int(match.group(3))
    if seconds >= 60:
        return None
    return hours * 3600 + minutes * 60 + seconds


def format_clock(seconds: float) -> str:
    """Convert seconds to 'm:ss' (or 'h:mm:ss' from one hour). 600 -> '10:00'."""
    total = max(0, round_half_up(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_duration(seconds: float) -> str:
    """Convert seconds to a compact volume string. e.g. 5400 -> '1h 30m'."""
    minutes = round_half_up(seconds / 60) if seconds > 0 else 0
    if minutes <= 0:
        return "0m"
    hours, mins = divmod(minutes, 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"


# ---------------------------------------------------------------------------
# Pace
# ---------------------------------------------------------------------------


def parse_pace(text: str | None) -> tuple[int, RangeUnit] | None:
    """Parse an encoded pace such as '7:43/mi' into (seconds, unit).

    A pace without a unit suffix is taken as per-mile.
    """
    if not isinstance(text, str):
        return None
    match = _PACE_RE.search(text)
    if match is None:
        return None
    seconds = int(match.group(1)) * 60 + int(match.group(2))
    if seconds <= 0:
        return None
    unit_text = re.sub(r"\s+", "", (match.group(3) or "mi").lower())
    return seconds, _PACE_UNIT_BY_TEXT[unit_text]


def parse_swim_pace(
    text: str | None, default_unit: RangeUnit = RangeUnit.SEC_PER_100YD,
) -> tuple[int, RangeUnit] | None:
    """Parse a per-100 swim pace. A bare 'm:ss' is per *default_unit*.

    Run paces (/mi, /km) are not swim paces and give None.
    """
    parsed = parse_pace(text)
    if parsed is None:
        return None
    seconds, unit = parsed
    if unit in SWIM_PACE_UNITS:
        return parsed
    if _PACE_RE.search(text).group(3) is None:
        return seconds, default_unit
    return None


def pace_suffix(unit: RangeUnit) -> str:
    return _PACE_SUFFIX.get(unit, "")


def format_pace(seconds: float, unit: RangeUnit) -> str:
    """Seconds per unit distance -> 'm:ss/unit'. e.g. 463, /mi -> '7:43/mi'."""
    return f"{format_clock(seconds)}{pace_suffix(unit)}"


def convert_pace(seconds: float, from_unit: RangeUnit, to_unit: RangeUnit) -> float:
    """Re-express a pace in another distance unit (e.g. s/mi -> s/km)."""
    if from_unit == to_unit:
        return seconds
    return seconds * METERS_PER_PACE_UNIT[to_unit] / METERS_PER_PACE_UNIT[from_unit]


def seconds_per_meter(seconds: float, unit: RangeUnit) -> float:
    """Pace in seconds per metre (the aggregation substrate)."""
    return seconds / METERS_PER_PACE_UNIT[unit]


def display_pace_unit(unit: RangeUnit, unit_system: UnitSystem) -> RangeUnit:
    """Pick the pace unit to render in; swim paces are never converted."""
    if unit == RangeUnit.SEC_PER_MI and unit_system == UnitSystem.METRIC:
        return RangeUnit.SEC_PER_KM
    if unit == RangeUnit.SEC_PER_KM and unit_system == UnitSystem.IMPERIAL:
        return RangeUnit.SEC_PER_MI
    return unit


# ---------------------------------------------------------------------------
# Distance
# ---------------------------------------------------------------------------


def parse_distance_unit(text: str | None) -> DistanceUnit | None:
    if not isinstance(text, str):
        return None
    return _DISTANCE_UNIT_BY_TEXT.get(text.strip().lower())


def to_meters(amount: float, unit: DistanceUnit) -> float:
    return amount * METERS_PER_DISTANCE_UNIT[unit]


def from_meters(meters: float, unit: DistanceUnit) -> float:
    return meters / METERS_PER_DISTANCE_UNIT[unit]


def format_distance(
    meters: float,
    unit_system: UnitSystem = UnitSystem.IMPERIAL,
    original_amount: float | None = None,
    original_unit: DistanceUnit | None = None,
    keep_authored: bool = False,
) -> str:
    """Render a distance in the requested unit system.

    The authored amount and unit are shown as written when *keep_authored*
    is set (swim yardage) or when the unit already belongs to *unit_system*.
    Otherwise imperial shows whole or fractional miles from one mile up and
    metres below; metric shows km from 1000 m up.
    """
    if original_amount is not None and original_unit is not None:
        if keep_authored or original_unit in _SYSTEM_UNITS[unit_system]:
            return f"{trim_number(original_amount)}{DISTANCE_SYMBOLS[original_unit]}"
    if unit_system == UnitSystem.IMPERIAL:
        if meters >= METERS_PER_MILE - 1:
            return f"{trim_number(meters / METERS_PER_MILE)} mi"
        return f"{round_half_up(meters)}m"
    if meters >= 1000:
        return f"{trim_number(meters / 1000)} km"
    return f"{round_half_up(meters)}m"


def pool_pace_unit(pool_length_meters: float | None) -> RangeUnit:
    """Per-100 pace unit for a pool: yards unless its length is whole metres.

    Without a known pool length, yards.
    """
    if not is_positive_number(pool_length_meters):
        return RangeUnit.SEC_PER_100YD
    yards = pool_length_meters / METERS_PER_YARD
    whole_yards = abs(yards - round(yards)) < 0.01
    whole_meters = abs(pool_length_meters - round(pool_length_meters)) < 0.01
    return RangeUnit.SEC_PER_100YD if whole_yards and not whole_meters else RangeUnit.SEC_PER_100M

"""Title and calendar-code resolver.

Titles come from per-discipline rule tables. Tag rules are always checked
before any text rule: tags are authoritative metadata, while description,
name and token text are only a hint.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from workout_engine.math.units import format_duration, trim_number
from workout_engine.models.enums import (
    METERS_PER_KM,
    METERS_PER_MILE,
    Discipline,
    UnitSystem,
)
from workout_engine.models.workout_spec import WorkoutSpec


@dataclass(frozen=True)
class TitleRule:
    """One row of a title table: match on a tag, or on a text pattern."""

    category: str
    tag: str | None = None
    pattern: re.Pattern[str] | None = None


_DISCIPLINE_LABELS: dict[Discipline, str] = {
    Discipline.RUN: "Run",
    Discipline.RIDE: "Ride",
    Discipline.SWIM: "Swim",
    Discipline.STRENGTH: "Strength",
    Discipline.MOBILITY: "Mobility",
    Discipline.PILATES_YOGA: "Pilates & Yoga",
}

TITLE_RULES: dict[Discipline, tuple[TitleRule, ...]] = {
    Discipline.RIDE: (
        TitleRule("Long Ride", tag="long_ride"),
        TitleRule("VO2", pattern=re.compile(r"vo2")),
        TitleRule("Threshold", pattern=re.compile(r"threshold|thr_")),
        TitleRule("Sweet Spot", pattern=re.compile(r"sweet\s*spot|\bss\b|bike_ss_")),
        TitleRule("Recovery", pattern=re.compile(r"recovery")),
        TitleRule("Endurance", pattern=re.compile(r"endurance|z2")),
    ),
    Discipline.RUN: (
        TitleRule("Long Run", tag="long_run"),
        TitleRule("Tempo", pattern=re.compile(r"tempo")),
        TitleRule("Intervals", pattern=re.compile(r"intervals?|\d+\s*[x×]\s*\d+")),
    ),
    Discipline.SWIM: (
        TitleRule("Technique", tag="opt_kind:technique"),
        TitleRule("Drills", pattern=re.compile(r"drills?")),
        TitleRule("Technique", pattern=re.compile(r"technique")),
    ),
}

# Used when no rule matches and the workout has no name
_FALLBACK_TITLES: dict[Discipline, str] = {
    Discipline.SWIM: "Swim — Endurance",
}

# Keyword -> code, first substring hit wins (table order matters)
CALENDAR_CODES: dict[Discipline, tuple[tuple[str, str], ...]] = {
    Discipline.RUN: (
        ("easy", "RN-EZ"),
        ("recovery", "RN-EZ"),
        ("long", "RN-LR"),
        ("tempo", "RN-TR"),
        ("vo2", "RN-VO2"),
        ("interval", "RN-VO2"),
        ("hill", "RN-HILL"),
        ("brick", "RN-BRK"),
    ),
    Discipline.RIDE: (
        ("easy", "BK-EZ"),
        ("long", "BK-LR"),
        ("sweet spot", "BK-SS"),
        ("tempo", "BK-SS"),
        ("vo2", "BK-VO2"),
        ("interval", "BK-VO2"),
        ("climb", "BK-CLB"),
        ("sprint", "BK-SPR"),
    ),
    Discipline.SWIM: (
        ("easy", "SM-EZ"),
        ("drill", "SM-DRL"),
        ("technique", "SM-DRL"),
        ("interval", "SM-INT"),
        ("endurance", "SM-END"),
        ("open water", "OWS"),
    ),
    Discipline.STRENGTH: (
        ("5x5", "ST-5x5"),
        ("barbell", "ST-5x5"),
        ("upper", "ST-UPP"),
        ("lower", "ST-LOW"),
        ("olympic", "ST-OLY"),
        ("power", "ST-PWR"),
        ("plyo", "ST-PWR"),
        ("core", "ST-COR"),
        ("conditioning", "ST-CND"),
        ("accessories", "ST-ACC"),
        ("strength", "ST-STR"),
        ("general", "ST-STR"),
    ),
    Discipline.MOBILITY: (
        ("recovery", "MB-REC"),
        ("yoga", "MB-REC"),
        ("stretch", "MB-REC"),
        ("foam roll", "MB-REC"),
        ("mobility", "MB-MOB"),
        ("activation", "MB-MOB"),
        ("range of motion", "MB-MOB"),
    ),
}

_DISCIPLINE_CODES: dict[Discipline, str] = {
    Discipline.RUN: "RN",
    Discipline.RIDE: "BK",
    Discipline.SWIM: "SM",
    Discipline.STRENGTH: "ST",
    Discipline.MOBILITY: "MB",
    Discipline.PILATES_YOGA: "PY",
}


def title(spec: WorkoutSpec) -> str:
    """Short category label such as 'Run — Tempo' or 'Swim — Drills'.

    Args:
        spec: The workout to classify.

    Returns:
        '<Discipline> — <Category>' for the first matching rule; otherwise
        the workout's name, then a generic label for the discipline.
    """
    if spec.discipline is None:
        return spec.name or "Session"

    category = _match_category(spec, TITLE_RULES.get(spec.discipline, ()))
    if category is not None:
        return f"{_DISCIPLINE_LABELS[spec.discipline]} — {category}"
    if spec.name:
        return spec.name
    return _FALLBACK_TITLES.get(spec.discipline, _DISCIPLINE_LABELS[spec.discipline])


def calendar_code(
    spec: WorkoutSpec,
    total_seconds: int | None = None,
    total_meters: float | None = None,
    unit_system: UnitSystem = UnitSystem.IMPERIAL,
) -> str:
    """Compact calendar-cell code, e.g. 'RN-TR 45m' or 'SM-DRL 1.1k'.

    The volume is distance when known, otherwise duration; the code alone
    is returned when neither is known.
    """
    code = _keyword_code(spec)
    volume = _volume(spec.discipline, total_seconds, total_meters, unit_system)
    return f"{code} {volume}" if volume else code


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _match_category(spec: WorkoutSpec, rules: tuple[TitleRule, ...]) -> str | None:
    tags = {tag.lower() for tag in spec.tags}
    for rule in rules:
        if rule.tag is not None and rule.tag in tags:
            return rule.category

    text = _search_text(spec)
    for rule in rules:
        if rule.pattern is not None and rule.pattern.search(text):
            return rule.category
    return None


def _search_text(spec: WorkoutSpec) -> str:
    parts = [spec.description, spec.name, " ".join(spec.steps_preset_tokens)]
    return " ".join(part for part in parts if part).lower()


def _keyword_code(spec: WorkoutSpec) -> str:
    if spec.discipline is None:
        return "WO"
    text = f"{spec.description} {spec.name}".lower()
    for keyword, code in CALENDAR_CODES.get(spec.discipline, ()):
        if keyword in text:
            return code
    return _DISCIPLINE_CODES[spec.discipline]


def _volume(
    discipline: Discipline | None,
    total_seconds: int | None,
    total_meters: float | None,
    unit_system: UnitSystem,
) -> str:
    if total_meters:
        if discipline == Discipline.SWIM:
            return f"{total_meters / METERS_PER_KM:.1f}k"
        if unit_system == UnitSystem.METRIC:
            return f"{trim_number(total_meters / METERS_PER_KM, 1)}km"
        return f"{trim_number(total_meters / METERS_PER_MILE, 1)}mi"
    if total_seconds:
        return format_duration(total_seconds)
    return ""

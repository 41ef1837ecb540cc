"""Token decoder — compact authoring tokens to Step runs and display phrases.

Two vocabularies are understood:

* Discipline-prefixed sets:
  ``<disc>_<kind>[_<qualifier>]_<count>x<amount><unit>[_r<rest>][_<qualifier>]``
  and singles ``<disc>_<kind>_<amount><unit>[_<qualifier>]``
  (e.g. ``swim_drill_catchup_4x50yd_r15``, ``swim_warmup_200yd``).
* Plan-library run/ride tokens: ``warmup_*``, ``cooldown_*``,
  ``interval_*``, ``tempo_*``, ``longrun_*``, ``run_easy_*``,
  ``cruise_*``, ``strides_*``, ``speed_*``, ``strength_main_*``,
  ``bike_(ss|thr|vo2)_*`` and ``bike_endurance_*``.

Tokens are advisory. Anything that does not parse is skipped and reported
back to the caller; decoding never raises.

Rests: a bare ``_r<n>`` is minutes on interval and cruise tokens and
seconds on discipline sets; ``s``/``min`` suffixes are explicit, and a
range ``_r2-3min`` takes its rounded midpoint. When a pace reference has
no baseline, an ``@ m:ss/mi`` (or ``/km``) in the workout description
stands in for it.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Callable, Iterable

from workout_engine.config import TOKEN_CACHE_SIZE
from workout_engine.exceptions import TokenDecodeError
from workout_engine.math.units import (
    format_clock,
    format_pace,
    is_positive_number,
    parse_distance_unit,
    parse_pace,
    parse_swim_pace,
    round_half_up,
    to_meters,
    trim_number,
)
from workout_engine.models.enums import (
    BIKE_SET_FTP_FRACTION,
    EASY_STEP_KINDS,
    MAX_REPEAT_COUNT,
    POWER_TOLERANCE_ENDURANCE,
    POWER_TOLERANCE_SS_THR,
    POWER_TOLERANCE_VO2,
    SWIM_EASY_OFFSET_SECONDS,
    IntensityKind,
    RangeUnit,
    StepKind,
)
from workout_engine.models.token_fragment import DecodedTokens, TokenFragment
from workout_engine.models.workout_spec import NO_TARGET, Baselines, IntensityTarget, Step

logger = logging.getLogger(__name__)

_Handler = Callable[[re.Match, Baselines | None, IntensityTarget], TokenFragment]

_UNIT = r"(?P<unit>yd|mi|min|km|m|s)"
_AMOUNT = r"(?P<amount>\d+(?:\.\d+)?)"
_REST = r"(?:_r(?P<rest>\d+)(?:-(?P<rest_b>\d+))?(?P<rest_unit>s|min)?)"
_PLUS = r"(?:_plus(?P<plus>\d+(?::\d{2})?s?))"

_WARMUP_RE = re.compile(
    r"^(?P<phase>warmup|cooldown)_(?P<body>(?:[a-z0-9]+_)*?)"
    r"(?P<a>\d+(?:\.\d+)?)(?:to(?P<b>\d+(?:\.\d+)?))?(?P<unit>min|mi|km)(?:_[a-z0-9_]+)?$"
)
_INTERVAL_RE = re.compile(
    rf"^interval_(?P<count>\d+)x{_AMOUNT}(?P<unit>mi|km|m)_(?P<ref>[a-z0-9_]+?){_PLUS}?{_REST}?$"
)
_TEMPO_DISTANCE_RE = re.compile(
    rf"^tempo_{_AMOUNT}(?P<unit>mi|km)_(?P<ref>[a-z0-9_]+?){_PLUS}?$"
)
_TEMPO_TIME_RE = re.compile(
    rf"^tempo_(?P<minutes>\d+)min(?:_(?P<ref>[a-z0-9_]+?))?{_PLUS}?$"
)
_LONGRUN_RE = re.compile(r"^longrun_(?P<minutes>\d+)min(?:_(?P<ref>[a-z0-9_]+))?$")
_RUN_EASY_RE = re.compile(r"^run_easy_(?P<minutes>\d+)min(?:_[a-z0-9_]+)?$")
_CRUISE_RE = re.compile(
    r"^cruise_(?P<count>\d+)x(?P<amount>\d+(?:[._]\d+)?)mi_(?P<ref>[a-z0-9_]+?)"
    rf"{_PLUS}?{_REST}?$"
)
_STRIDES_RE = re.compile(rf"^strides_(?P<count>\d+)x{_AMOUNT}(?P<unit>s|m)$")
_SPEED_RE = re.compile(
    r"^speed_(?P<count>\d+)x(?P<amount>\d+)s(?:_(?P<tail>[a-z][a-z0-9_]*?))?_r(?P<rest>\d+)s$"
)
_STRENGTH_MAIN_RE = re.compile(r"^strength_main_(?P<minutes>\d+)min(?:_[a-z0-9_]+)?$")
_BIKE_SET_RE = re.compile(
    r"^bike_(?P<kind>ss|thr|vo2)_(?P<count>\d+)x(?P<minutes>\d+)min"
    r"(?:_r(?P<rest>\d+)min)?(?:_[a-z0-9_]+)?$"
)
_BIKE_ENDURANCE_RE = re.compile(r"^bike_endurance_(?P<minutes>\d+)min(?:_[a-z0-9_]+)?$")
_SET_RE = re.compile(
    rf"^(?P<disc>swim|run|bike|ride)_(?P<kind>[a-z]+)(?:_(?P<qual>[a-z][a-z0-9_]*?))?"
    rf"_(?P<count>\d+)x{_AMOUNT}{_UNIT}{_REST}?(?:_(?P<tail>[a-z][a-z0-9_]*))?$"
)
_SINGLE_RE = re.compile(
    rf"^(?P<disc>swim|run|bike|ride)_(?P<kind>[a-z]+)_{_AMOUNT}{_UNIT}"
    rf"(?:_(?P<tail>[a-z][a-z0-9_]*))?$"
)
_OFFSET_RE = re.compile(r"^(?P<a>\d+)(?::(?P<b>\d{2}))?(?P<sec>s)?$")
_DESCRIPTION_PACE_RE = re.compile(r"@\s*(?P<clock>\d+:\d{2})\s*/\s*(?P<unit>mi|km)\b", re.IGNORECASE)

_PACE_REFS: dict[str, str] = {
    "5kpace": "five_k_pace",
    "10kpace": "ten_k_pace",
    "easypace": "easy_pace",
    "marathon_pace": "marathon_pace",
    "mppace": "marathon_pace",
}

# Swim kinds that collect onto one shared display line
_SWIM_SET_GROUPS: dict[str, str] = {
    "drill": "drills",
    "drills": "drills",
    "pull": "pull",
    "kick": "kick",
    "aerobic": "aerobic",
}

_EDGE_KINDS: dict[str, StepKind] = {
    "warmup": StepKind.WARMUP,
    "cooldown": StepKind.COOLDOWN,
}

_GROUP_ORDER = ("warmup", "drills", "pull", "kick", "aerobic", "main", "cooldown")
_GROUP_PREFIX: dict[str, str] = {
    "warmup": "WU ",
    "drills": "Drills: ",
    "pull": "Pull ",
    "kick": "Kick ",
    "aerobic": "Aerobic ",
    "cooldown": "CD ",
}


def decode_token(
    token: str, baselines: Baselines | None = None, description: str | None = None,
) -> TokenFragment | None:
    """Decode a single token.

    Args:
        token: Authoring token; matching is case-insensitive.
        baselines: Athlete paces/FTP used to attach intensity targets.
            Without them, steps are decoded untargeted.
        description: Workout description; an ``@ m:ss/mi`` pace in it
            targets run tokens whose pace reference has no baseline.

    Returns:
        The decoded fragment, or None if the token is not recognised.
    """
    if not isinstance(token, str) or not token.strip():
        return None
    return _decode_cached(token.strip().lower(), baselines, description_pace(description))


def decode_tokens(
    tokens: Iterable[object] | None,
    baselines: Baselines | None = None,
    description: str | None = None,
) -> DecodedTokens:
    """Decode an ordered token list, keeping order and collecting skips."""
    fragments: list[TokenFragment] = []
    skipped: list[str] = []
    for token in tokens or ():
        fragment = decode_token(token, baselines, description)
        if fragment is None:
            skipped.append(str(token))
            continue
        fragments.append(fragment)
    if skipped:
        logger.debug("Skipped %d of %d tokens: %s", len(skipped), len(skipped) + len(fragments), skipped)
    return DecodedTokens(fragments=tuple(fragments), skipped=tuple(skipped))


def token_lines(fragments: Iterable[TokenFragment]) -> tuple[str, ...]:
    """Group fragment phrases into display lines.

    Set groups (WU, drills, pull, kick, aerobic, CD) collapse onto one line
    each, unique phrases in first-seen order. Main-set phrases get a line
    apiece.
    """
    grouped: dict[str, list[str]] = {group: [] for group in _GROUP_ORDER}
    for fragment in fragments:
        phrases = grouped.setdefault(fragment.group, [])
        if fragment.group == "main" or fragment.phrase not in phrases:
            phrases.append(fragment.phrase)

    lines: list[str] = []
    for group, phrases in grouped.items():
        if not phrases:
            continue
        if group == "main":
            lines.extend(phrases)
        else:
            lines.append(_GROUP_PREFIX.get(group, "") + ", ".join(phrases))
    return tuple(lines)


def description_pace(description: str | None) -> IntensityTarget:
    """First ``@ m:ss/mi`` or ``@ m:ss/km`` pace written in a description."""
    if not isinstance(description, str):
        return NO_TARGET
    match = _DESCRIPTION_PACE_RE.search(description)
    if match is None:
        return NO_TARGET
    parsed = parse_pace(f"{match.group('clock')}/{match.group('unit').lower()}")
    if parsed is None:
        return NO_TARGET
    seconds, unit = parsed
    return IntensityTarget(kind=IntensityKind.PACE, value=seconds, unit=unit)


def clear_token_cache() -> None:
    """Drop all memoised decodes."""
    _decode_cached.cache_clear()


# ---------------------------------------------------------------------------
# Strict parser
# ---------------------------------------------------------------------------


@lru_cache(maxsize=TOKEN_CACHE_SIZE)
def _decode_cached(
    token: str, baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment | None:
    try:
        return _parse(token, baselines, fallback)
    except TokenDecodeError as exc:
        logger.debug("Token %r not decoded: %s", exc.token, exc.reason)
        return None


def parse_token(
    token: str, baselines: Baselines | None = None, description: str | None = None,
) -> TokenFragment:
    """Strict form of :func:`decode_token`.

    Raises:
        TokenDecodeError: If no grammar matches, an amount is non-positive,
            or a repeat count is above the accepted maximum.
    """
    return _parse(token, baselines, description_pace(description))


def _parse(token: str, baselines: Baselines | None, fallback: IntensityTarget) -> TokenFragment:
    for pattern, handler in _RULES:
        match = pattern.match(token)
        if match is not None:
            return handler(match, baselines, fallback)
    raise TokenDecodeError(token)


def _warmup(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    phase = match.group("phase")
    first = _positive(match, "a")
    second = _positive(match, "b") if match.group("b") else None
    unit = match.group("unit")
    amount = round_half_up((first + second) / 2) if second is not None else first

    is_ride = "bike" in match.group("body") or "ride" in match.group("body")
    target = NO_TARGET if is_ride else _pace_target("easypace", baselines)
    step = _amount_step(_EDGE_KINDS[phase], amount, unit, target=target)

    if second is not None:
        phrase = f"{trim_number(first)}–{trim_number(second)} {unit}"
    else:
        phrase = _amount_text(first, unit)
    return TokenFragment(token=match.string, group=phase, phrase=phrase, steps=(step,))


def _interval(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    count = _count(match)
    amount = _positive(match, "amount")
    unit = match.group("unit")
    rest = _rest_seconds(match, bare_unit="min")

    target = _pace_target(match.group("ref"), baselines, match.group("plus"), fallback)
    work = _amount_step(StepKind.WORK, amount, unit, target=target)
    steps = _repeat(work, count, rest, rest_target=_pace_target("easypace", baselines))

    phrase = f"{count} × {_amount_text(amount, unit)}{_pace_text(target)}"
    if rest:
        phrase += f" w {format_clock(rest)} jog"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=steps)


def _cruise(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    count = _count(match)
    amount = _positive(match, "amount")
    rest = _rest_seconds(match, bare_unit="min")

    target = _pace_target(match.group("ref"), baselines, match.group("plus"), fallback)
    work = _amount_step(StepKind.WORK, amount, "mi", target=target)
    steps = _repeat(work, count, rest, rest_target=_pace_target("easypace", baselines))

    phrase = f"{count} × {_amount_text(amount, 'mi')}{_pace_text(target)}"
    if rest:
        phrase += f" with {format_clock(rest)} jog rest"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=steps)


def _tempo_distance(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    amount = _positive(match, "amount")
    unit = match.group("unit")
    target = _pace_target(match.group("ref"), baselines, match.group("plus"), fallback)
    step = _amount_step(StepKind.WORK, amount, unit, target=target)
    phrase = f"Tempo {_amount_text(amount, unit)}{_pace_text(target)}"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=(step,))


def _tempo_time(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    minutes = _positive(match, "minutes")
    target = _pace_target(match.group("ref"), baselines, match.group("plus"))
    step = _amount_step(StepKind.WORK, minutes, "min", target=target)
    phrase = f"Tempo {_amount_text(minutes, 'min')}{_pace_text(target)}"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=(step,))


def _longrun(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    minutes = _positive(match, "minutes")
    target = _pace_target(match.group("ref") or "easypace", baselines)
    step = _amount_step(StepKind.STEADY, minutes, "min", target=target)
    phrase = f"Long run {_amount_text(minutes, 'min')}"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=(step,))


def _run_easy(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    minutes = _positive(match, "minutes")
    step = _amount_step(StepKind.STEADY, minutes, "min", target=_pace_target("easypace", baselines))
    phrase = f"Easy {_amount_text(minutes, 'min')}"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=(step,))


def _strides(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    count = _count(match)
    amount = _positive(match, "amount")
    unit = match.group("unit")
    work = _amount_step(StepKind.WORK, amount, unit, label="stride")
    phrase = f"{count} × {trim_number(amount)}{unit} strides"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=(work,) * count)


def _speed(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    count = _count(match)
    seconds = _positive(match, "amount")
    rest = int(match.group("rest"))
    label = (match.group("tail") or "").replace("_", " ")
    work = _amount_step(StepKind.WORK, seconds, "s", label=label)
    steps = _repeat(work, count, rest)

    phrase = f"{count} × {seconds}s"
    if rest:
        phrase += f" with {rest}s easy"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=steps)


def _strength_main(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    minutes = _positive(match, "minutes")
    step = _amount_step(StepKind.STEADY, minutes, "min")
    phrase = f"Strength {_amount_text(minutes, 'min')}"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=(step,))


def _bike_set(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    kind = match.group("kind")
    count = _count(match)
    minutes = _positive(match, "minutes")
    rest = int(match.group("rest")) * 60 if match.group("rest") else 0

    band = POWER_TOLERANCE_VO2 if kind == "vo2" else POWER_TOLERANCE_SS_THR
    target, center = _power_target(BIKE_SET_FTP_FRACTION[kind], band, baselines)
    work = _amount_step(StepKind.WORK, minutes, "min", target=target)
    steps = _repeat(work, count, rest)

    phrase = f"{count} × {_amount_text(minutes, 'min')}"
    if center is not None:
        phrase += f" @ {center} W"
    if rest:
        phrase += f" w {format_clock(rest)} easy"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=steps)


def _bike_endurance(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    minutes = _positive(match, "minutes")
    target, _ = _power_target(
        BIKE_SET_FTP_FRACTION["endurance"], POWER_TOLERANCE_ENDURANCE, baselines,
    )
    step = _amount_step(StepKind.STEADY, minutes, "min", target=target)
    phrase = f"Endurance {_amount_text(minutes, 'min')} (Z2)"
    return TokenFragment(token=match.string, group="main", phrase=phrase, steps=(step,))


def _discipline_set(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    is_swim = match.group("disc") == "swim"
    kind = match.group("kind")
    count = _count(match)
    amount = _positive(match, "amount")
    unit = match.group("unit")
    rest = _rest_seconds(match)
    name = (match.group("qual") or match.group("tail") or "").replace("_", " ")

    group = _group_for(kind, is_swim)
    label = kind if group in ("pull", "kick") else name
    step_kind = _EDGE_KINDS.get(kind, StepKind.WORK)
    target = _swim_target(step_kind, baselines) if is_swim else NO_TARGET
    work = _amount_step(step_kind, amount, unit, target=target, label=label)
    steps = _repeat(work, count, rest)

    body = f"{count}x{trim_number(amount)}" + ("" if is_swim else unit)
    if rest:
        body += f" @ {_rest_clock(rest)}r"
    if group == "drills":
        phrase = f"{name} {body}" if name else body
    elif group == "main":
        phrase = f"{kind.capitalize()} {body}"
    else:
        phrase = body
    return TokenFragment(token=match.string, group=group, phrase=phrase, steps=steps)


def _discipline_single(
    match: re.Match[str], baselines: Baselines | None, fallback: IntensityTarget,
) -> TokenFragment:
    is_swim = match.group("disc") == "swim"
    kind = match.group("kind")
    amount = _positive(match, "amount")
    unit = match.group("unit")
    name = (match.group("tail") or "").replace("_", " ")

    group = _group_for(kind, is_swim)
    step_kind = _EDGE_KINDS.get(kind, StepKind.WORK)
    label = "" if step_kind != StepKind.WORK else (kind if group in ("pull", "kick") else name)
    target = _swim_target(step_kind, baselines) if is_swim else NO_TARGET
    step = _amount_step(step_kind, amount, unit, target=target, label=label)

    if group in _EDGE_KINDS:
        phrase = _amount_text(amount, unit)
    elif group == "main":
        phrase = f"{kind.capitalize()} {_amount_text(amount, unit)}"
    else:
        phrase = trim_number(amount) if is_swim else _amount_text(amount, unit)
    return TokenFragment(token=match.string, group=group, phrase=phrase, steps=(step,))


_RULES: tuple[tuple[re.Pattern[str], _Handler], ...] = (
    (_WARMUP_RE, _warmup),
    (_INTERVAL_RE, _interval),
    (_CRUISE_RE, _cruise),
    (_TEMPO_DISTANCE_RE, _tempo_distance),
    (_TEMPO_TIME_RE, _tempo_time),
    (_LONGRUN_RE, _longrun),
    (_RUN_EASY_RE, _run_easy),
    (_STRIDES_RE, _strides),
    (_SPEED_RE, _speed),
    (_STRENGTH_MAIN_RE, _strength_main),
    (_BIKE_SET_RE, _bike_set),
    (_BIKE_ENDURANCE_RE, _bike_endurance),
    (_SET_RE, _discipline_set),
    (_SINGLE_RE, _discipline_single),
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _positive(match: re.Match[str], name: str) -> int | float:
    # Cruise distances spell 1.5 as 1_5
    value = float(match.group(name).replace("_", "."))
    if value <= 0:
        raise TokenDecodeError(match.string, f"non-positive {name}")
    return int(value) if value.is_integer() else value


def _count(match: re.Match[str]) -> int:
    count = int(_positive(match, "count"))
    if count > MAX_REPEAT_COUNT:
        raise TokenDecodeError(match.string, f"repeat count above {MAX_REPEAT_COUNT}")
    return count


def _rest_seconds(match: re.Match[str], bare_unit: str = "s") -> int:
    """Rest after each rep; a ``2-3`` range rests for its rounded midpoint."""
    if not match.group("rest"):
        return 0
    first = int(match.group("rest"))
    second = int(match.group("rest_b")) if match.group("rest_b") else first
    rest = round_half_up((first + second) / 2)
    unit = match.group("rest_unit") or bare_unit
    return rest * 60 if unit == "min" else rest


def _rest_clock(seconds: int) -> str:
    return f":{seconds:02d}" if seconds < 60 else format_clock(seconds)


def _group_for(kind: str, is_swim: bool) -> str:
    if kind in _EDGE_KINDS:
        return kind
    if is_swim:
        return _SWIM_SET_GROUPS.get(kind, "main")
    return "main"


def _amount_step(
    kind: StepKind,
    amount: float,
    unit: str,
    *,
    target: IntensityTarget = NO_TARGET,
    label: str = "",
) -> Step:
    if unit in ("s", "min"):
        seconds = amount * 60 if unit == "min" else amount
        return Step(kind=kind, duration_seconds=seconds, target=target, label=label)
    distance_unit = parse_distance_unit(unit)
    return Step(
        kind=kind,
        distance_meters=to_meters(amount, distance_unit),
        target=target,
        label=label,
        original_amount=amount,
        original_unit=distance_unit,
    )


def _repeat(
    work: Step, count: int, rest_seconds: float, rest_target: IntensityTarget = NO_TARGET,
) -> tuple[Step, ...]:
    if not rest_seconds:
        return (work,) * count
    rest = Step(kind=StepKind.RECOVERY, duration_seconds=rest_seconds, target=rest_target)
    return (work, rest) * count


def _amount_text(amount: float, unit: str) -> str:
    return f"{trim_number(amount)} {unit}"


def _offset_seconds(plus: str | None) -> int:
    if not plus:
        return 0
    match = _OFFSET_RE.match(plus)
    if match is None:
        return 0
    if match.group("b") is not None:
        return int(match.group("a")) * 60 + int(match.group("b"))
    if match.group("sec"):
        return int(match.group("a"))
    return int(match.group("a")) * 60


def _pace_target(
    ref: str | None,
    baselines: Baselines | None,
    plus: str | None = None,
    fallback: IntensityTarget = NO_TARGET,
) -> IntensityTarget:
    """Look up a pace reference on *baselines*.

    A reference with no usable baseline takes *fallback* as written (no
    offset applied); without one it stays untargeted.
    """
    if baselines is None or ref not in _PACE_REFS:
        return fallback
    parsed = parse_pace(getattr(baselines, _PACE_REFS[ref]))
    if parsed is None:
        return fallback
    seconds, unit = parsed
    return IntensityTarget(
        kind=IntensityKind.PACE, value=seconds + _offset_seconds(plus), unit=unit,
    )


def _swim_target(kind: StepKind, baselines: Baselines | None) -> IntensityTarget:
    """Per-100 pace from the swim baseline; easy kinds swim slightly slower."""
    if baselines is None:
        return NO_TARGET
    parsed = parse_swim_pace(baselines.swim_pace_per_100)
    if parsed is None:
        return NO_TARGET
    seconds, unit = parsed
    if kind in EASY_STEP_KINDS:
        seconds += SWIM_EASY_OFFSET_SECONDS
    return IntensityTarget(kind=IntensityKind.PACE, value=seconds, unit=unit)


def _power_target(
    fraction: float, band: float, baselines: Baselines | None,
) -> tuple[IntensityTarget, int | None]:
    """Watts band around ``fraction * FTP``; untargeted without an FTP."""
    ftp = baselines.ftp if baselines is not None else None
    if not is_positive_number(ftp):
        return NO_TARGET, None
    center = ftp * fraction
    bounds = {
        "lower": round_half_up(center * (1 - band)),
        "upper": round_half_up(center * (1 + band)),
    }
    target = IntensityTarget(kind=IntensityKind.POWER, value=bounds, unit=RangeUnit.WATTS)
    return target, round_half_up(center)


def _pace_text(target: IntensityTarget) -> str:
    if target.is_empty:
        return ""
    return f" @ {format_pace(target.value, target.unit)}"

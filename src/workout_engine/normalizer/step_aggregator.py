"""Step aggregator — total duration and distance for a step list.

Per-step duration, most precise source first:
    1. explicit positive ``duration_seconds``
    2. explicit distance x midpoint of the resolved pace range
    3. unknown (contributes zero; never guessed)

Distance only ever sums explicit distances. It is never back-filled from
duration and pace.
"""

from __future__ import annotations

from typing import Callable, Iterable

from workout_engine.config import ToleranceConfig
from workout_engine.math.units import is_positive_number, round_half_up, seconds_per_meter
from workout_engine.models.facts import StepTotals
from workout_engine.models.workout_spec import Step, WorkoutSpec
from workout_engine.normalizer.target_resolver import resolve_step

DURATION_FROM_STEPS = "steps"
DURATION_FROM_STORED_TOTAL = "total_duration_seconds"
DURATION_FROM_STORED_MINUTES = "duration_minutes"
DURATION_UNKNOWN = "unknown"


def step_seconds(step: Step, tolerance: ToleranceConfig | None = None) -> int | None:
    """Resolved duration of one step in whole seconds, or None if unknown."""
    if is_positive_number(step.duration_seconds):
        return round_half_up(step.duration_seconds)
    if not is_positive_number(step.distance_meters):
        return None
    target_range = resolve_step(step, tolerance)
    if target_range is None or not target_range.is_pace:
        return None
    estimate = step.distance_meters * seconds_per_meter(target_range.midpoint, target_range.unit)
    return round_half_up(estimate)


def aggregate(steps: Iterable[Step], tolerance: ToleranceConfig | None = None) -> StepTotals:
    """Walk *steps* and total their duration and explicit distance.

    Args:
        steps: Ordered steps; not mutated.
        tolerance: Tolerance bands used when a pace has to be resolved for a
            distance-only step.

    Returns:
        StepTotals with per-step resolved seconds in input order.
    """
    per_step: list[int | None] = []
    total_meters = 0.0
    for step in steps:
        per_step.append(step_seconds(step, tolerance))
        if is_positive_number(step.distance_meters):
            total_meters += float(step.distance_meters)

    return StepTotals(
        total_seconds=sum(seconds for seconds in per_step if seconds is not None),
        total_meters=total_meters,
        step_seconds=tuple(per_step),
    )


# ---------------------------------------------------------------------------
# Top-level duration cascade
# ---------------------------------------------------------------------------


def _from_steps(spec: WorkoutSpec, totals: StepTotals) -> int | None:
    return totals.total_seconds if totals.total_seconds > 0 else None


def _from_stored_total(spec: WorkoutSpec, totals: StepTotals) -> int | None:
    if is_positive_number(spec.total_duration_seconds):
        return round_half_up(spec.total_duration_seconds)
    return None


def _from_stored_minutes(spec: WorkoutSpec, totals: StepTotals) -> int | None:
    if is_positive_number(spec.stored_duration_minutes):
        return round_half_up(spec.stored_duration_minutes * 60)
    return None


# First non-None wins; sources are never averaged
DURATION_RESOLVERS: tuple[tuple[str, Callable[[WorkoutSpec, StepTotals], int | None]], ...] = (
    (DURATION_FROM_STEPS, _from_steps),
    (DURATION_FROM_STORED_TOTAL, _from_stored_total),
    (DURATION_FROM_STORED_MINUTES, _from_stored_minutes),
)


def resolve_total_duration(spec: WorkoutSpec, totals: StepTotals) -> tuple[int | None, str]:
    """Pick the workout's total duration from the first source that has one.

    Returns:
        ``(seconds, source)``; ``(None, "unknown")`` when no source resolves.
    """
    for source, resolver in DURATION_RESOLVERS:
        seconds = resolver(spec, totals)
        if seconds is not None:
            return seconds, source
    return None, DURATION_UNKNOWN

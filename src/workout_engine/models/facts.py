"""Derived, display-ready facts for one workout."""

from __future__ import annotations

from dataclasses import dataclass

from workout_engine.models.enums import Discipline
from workout_engine.models.summary import DisplayLine
from workout_engine.models.target_range import TargetRange
from workout_engine.models.workout_spec import Step


@dataclass(frozen=True)
class StepTotals:
    """Result of walking a step list.

    ``step_seconds`` holds the resolved duration per step (None when the
    step's duration could not be resolved).
    """

    total_seconds: int = 0
    total_meters: float = 0.0
    step_seconds: tuple[int | None, ...] = ()


@dataclass(frozen=True)
class WorkoutFacts:
    """Everything the rendering collaborator needs for one workout.

    All fields are recomputed on every call; nothing here is persisted.
    """

    title: str
    code: str
    discipline: Discipline | None
    optional: bool
    steps: tuple[Step, ...]
    step_ranges: tuple[TargetRange | None, ...]
    step_seconds: tuple[int | None, ...]
    total_seconds: int | None
    total_meters: float | None
    duration_source: str
    lines: tuple[DisplayLine, ...]
    token_lines: tuple[str, ...] = ()
    skipped_tokens: tuple[str, ...] = ()

    @property
    def summary_text(self) -> str:
        return "\n".join(line.text for line in self.lines)

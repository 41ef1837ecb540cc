"""Run-length summarizer — compresses repeated work/recovery pairs for display.

A single left-to-right scan with no backtracking:

* warmup / cooldown steps each become ``WU <amount> (<range>)`` /
  ``CD <amount> (<range>)``;
* a work step plus an optional following recovery is a pattern; contiguous
  repeats of the same pattern become ``N × <work> (<range>) <rest> (<range>)``;
* anything else is ``1 × <amount> (<range>)``, or a bare ``1 × <amount>``
  when the step has no kind at all.

Patterns are compared on their rendered text, so ranges that differ only
below display precision still compress into one line.
"""

from __future__ import annotations

from typing import Sequence

from workout_engine.config import ToleranceConfig
from workout_engine.math.units import format_clock, format_distance, is_positive_number
from workout_engine.models.enums import Discipline, StepKind, UnitSystem
from workout_engine.models.summary import DisplayLine, RepeatBlock
from workout_engine.models.workout_spec import Step
from workout_engine.normalizer.target_resolver import format_range, resolve_step

_EDGE_PREFIX: dict[StepKind, str] = {
    StepKind.WARMUP: "WU",
    StepKind.COOLDOWN: "CD",
}

_REST_WORDS: dict[Discipline, str] = {
    Discipline.RUN: "jog",
    Discipline.RIDE: "easy",
}


def rest_word(discipline: Discipline | None) -> str:
    """Default recovery wording: jog for runs, easy for rides, rest otherwise.

    With no discipline the run wording ("jog") is used.
    """
    if discipline is None:
        return "jog"
    return _REST_WORDS.get(discipline, "rest")


def summarize(
    steps: Sequence[Step],
    unit_system: UnitSystem = UnitSystem.IMPERIAL,
    tolerance: ToleranceConfig | None = None,
    discipline: Discipline | None = None,
) -> list[DisplayLine]:
    """Render *steps* as compressed display lines.

    Args:
        steps: Ordered steps; not mutated.
        unit_system: Controls distance and run pace rendering.
        tolerance: Bands used to widen single-value targets.
        discipline: Picks the default recovery wording. Swims keep their
            authored distances (yardage) in either unit system.

    Returns:
        One DisplayLine per logical group. Work patterns carry the
        RepeatBlock they compress.
    """
    renderer = _Renderer(
        unit_system, tolerance, rest_word(discipline), keep_authored=discipline == Discipline.SWIM,
    )
    lines: list[DisplayLine] = []
    index = 0
    while index < len(steps):
        step = steps[index]

        if step.kind in _EDGE_PREFIX:
            lines.append(DisplayLine(f"{_EDGE_PREFIX[step.kind]} {renderer.segment(step)}"))
            index += 1
            continue

        if step.kind == StepKind.WORK:
            line, index = _compress(steps, index, renderer)
            lines.append(line)
            continue

        if step.kind is None:
            lines.append(DisplayLine(f"1 × {renderer.amount(step)}"))
        else:
            lines.append(DisplayLine(f"1 × {renderer.segment(step)}"))
        index += 1
    return lines


def expand_block(block: RepeatBlock) -> tuple[Step, ...]:
    """Undo compression: the exact steps a RepeatBlock was built from."""
    return block.expand()


def summary_text(lines: Sequence[DisplayLine]) -> str:
    return "\n".join(line.text for line in lines)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


class _Renderer:
    """Step-to-text rendering with the caller's display settings bound."""

    def __init__(
        self,
        unit_system: UnitSystem,
        tolerance: ToleranceConfig | None,
        default_rest_word: str,
        keep_authored: bool = False,
    ) -> None:
        self.unit_system = unit_system
        self.tolerance = tolerance
        self.default_rest_word = default_rest_word
        self.keep_authored = keep_authored

    def amount(self, step: Step) -> str:
        """Distance if the step has one, else time, else 'open'."""
        if is_positive_number(step.distance_meters):
            return format_distance(
                step.distance_meters,
                self.unit_system,
                step.original_amount,
                step.original_unit,
                self.keep_authored,
            )
        if is_positive_number(step.duration_seconds):
            return format_clock(step.duration_seconds)
        return "open"

    def range_text(self, step: Step) -> str | None:
        target_range = resolve_step(step, self.tolerance)
        if target_range is None:
            return None
        return format_range(target_range, self.unit_system)

    def segment(self, step: Step) -> str:
        return self._with_range(self.amount(step), step)

    def work(self, step: Step) -> str:
        text = self.amount(step)
        if step.label:
            text = f"{step.label} {text}"
        return self._with_range(text, step)

    def rest(self, step: Step) -> str:
        word = step.label or self.default_rest_word
        return self._with_range(f"{word} {self.amount(step)}", step)

    def _with_range(self, text: str, step: Step) -> str:
        range_text = self.range_text(step)
        return f"{text} ({range_text})" if range_text else text


def _pattern_at(
    steps: Sequence[Step], index: int, renderer: _Renderer,
) -> tuple[tuple[str, str | None], int]:
    """Rendered (work, rest) key of the work pattern at *index*, and its width."""
    work_text = renderer.work(steps[index])
    follower = steps[index + 1] if index + 1 < len(steps) else None
    if follower is not None and follower.kind == StepKind.RECOVERY:
        return (work_text, renderer.rest(follower)), 2
    return (work_text, None), 1


def _compress(
    steps: Sequence[Step], start: int, renderer: _Renderer,
) -> tuple[DisplayLine, int]:
    """Fold contiguous identical patterns from *start*; return the line and next index."""
    key, width = _pattern_at(steps, start, renderer)
    count = 1
    cursor = start + width
    while cursor < len(steps) and steps[cursor].kind == StepKind.WORK:
        candidate, candidate_width = _pattern_at(steps, cursor, renderer)
        if candidate != key:
            break
        count += 1
        cursor += candidate_width

    work_text, rest_text = key
    text = f"{count} × {work_text}"
    if rest_text is not None:
        text += f" {rest_text}"
    block = RepeatBlock(
        repeat_count=count,
        original_segments=tuple(steps[start:cursor]),
        label=text,
    )
    return DisplayLine(text, block), cursor

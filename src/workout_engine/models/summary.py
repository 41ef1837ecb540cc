"""Display-only entities produced by the run-length summarizer."""

from __future__ import annotations

from dataclasses import dataclass

from workout_engine.models.workout_spec import Step


@dataclass(frozen=True)
class RepeatBlock:
    """N consecutive structurally identical (work, recovery?) pairs.

    ``original_segments`` is the exact pre-compression step run, kept so
    the block can be expanded back into individual steps.
    """

    repeat_count: int
    original_segments: tuple[Step, ...]
    label: str

    def expand(self) -> tuple[Step, ...]:
        return self.original_segments


@dataclass(frozen=True)
class DisplayLine:
    """One rendered summary line, plus the block it compresses (if any)."""

    text: str
    block: RepeatBlock | None = None

"""Decoded authoring tokens."""

from __future__ import annotations

from dataclasses import dataclass

from workout_engine.models.workout_spec import Step


@dataclass(frozen=True)
class TokenFragment:
    """One decoded token.

    ``steps`` is the expanded segment run (reps already unrolled, a
    recovery after every rep when the token carries a rest). ``group``
    decides which display line the ``phrase`` lands on.
    """

    token: str
    group: str
    phrase: str
    steps: tuple[Step, ...] = ()


@dataclass(frozen=True)
class DecodedTokens:
    """Result of decoding an ordered token list."""

    fragments: tuple[TokenFragment, ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def steps(self) -> tuple[Step, ...]:
        return tuple(step for fragment in self.fragments for step in fragment.steps)

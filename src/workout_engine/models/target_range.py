"""Resolved intensity band for a single step."""

from __future__ import annotations

from dataclasses import dataclass

from workout_engine.models.enums import PACE_UNITS, RangeUnit


@dataclass(frozen=True)
class TargetRange:
    """A canonical lower/upper intensity band.

    For paces, ``lower`` is the faster bound (fewer seconds per unit).
    Resolvers only ever build instances with ``0 < lower <= upper``.
    """

    lower: float
    upper: float
    unit: RangeUnit

    @property
    def is_pace(self) -> bool:
        return self.unit in PACE_UNITS

    @property
    def midpoint(self) -> float:
        return (self.lower + self.upper) / 2.0

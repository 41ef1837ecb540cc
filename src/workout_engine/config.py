"""Environment-variable-based configuration for the workout engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from workout_engine.models.enums import (
    PACE_TOLERANCE_EASY,
    PACE_TOLERANCE_QUALITY,
    UnitSystem,
)

PACE_TOLERANCE_QUALITY_DEFAULT: float = float(
    os.environ.get("WORKOUT_PACE_TOLERANCE_QUALITY", PACE_TOLERANCE_QUALITY)
)
PACE_TOLERANCE_EASY_DEFAULT: float = float(
    os.environ.get("WORKOUT_PACE_TOLERANCE_EASY", PACE_TOLERANCE_EASY)
)
UNIT_SYSTEM_NAME: str = os.environ.get("WORKOUT_UNIT_SYSTEM", "imperial")
TOKEN_CACHE_SIZE: int = int(os.environ.get("WORKOUT_TOKEN_CACHE_SIZE", "512"))
LOG_LEVEL: str = os.environ.get("WORKOUT_LOG_LEVEL", "INFO")


def parse_unit_system(name: str | None, default: UnitSystem = UnitSystem.IMPERIAL) -> UnitSystem:
    """Map 'imperial'/'metric' (any case) to a UnitSystem, else *default*."""
    if not name:
        return default
    try:
        return UnitSystem[name.strip().upper()]
    except KeyError:
        return default


@dataclass(frozen=True)
class ToleranceConfig:
    """Fractional pace bands: ``quality`` for work, ``easy`` for WU/CD/recovery."""

    quality: float = PACE_TOLERANCE_QUALITY_DEFAULT
    easy: float = PACE_TOLERANCE_EASY_DEFAULT

    @classmethod
    def from_hints(
        cls, hints: Mapping[str, Any] | None, base: ToleranceConfig | None = None,
    ) -> ToleranceConfig:
        """Overlay per-workout export hints on *base* (or the defaults).

        Missing or non-numeric hint values keep the base value.
        """
        base = base or cls()
        if not hints:
            return base
        quality = hints.get("pace_tolerance_quality")
        easy = hints.get("pace_tolerance_easy")
        return cls(
            quality=_as_fraction(quality, base.quality),
            easy=_as_fraction(easy, base.easy),
        )


def _as_fraction(value: Any, fallback: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    if not 0 <= value < 1:
        return fallback
    return float(value)


@dataclass(frozen=True)
class EngineConfig:
    """Settings threaded explicitly through every engine call."""

    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    unit_system: UnitSystem = UnitSystem.IMPERIAL

    @classmethod
    def from_env(cls) -> EngineConfig:
        return cls(
            tolerance=ToleranceConfig(),
            unit_system=parse_unit_system(UNIT_SYSTEM_NAME),
        )

"""Time-in-zone distribution for an executed workout."""

from __future__ import annotations

from dataclasses import dataclass, field

from workout_engine.models.enums import PowerZone


def _zero_zones() -> dict[PowerZone, float]:
    return {zone: 0.0 for zone in PowerZone}


@dataclass(frozen=True)
class ZoneDistribution:
    """Percentage and seconds of elapsed time spent in each of the 7 zones.

    Percentages sum to 100.0 when any sample exists, otherwise all zero.
    """

    percentages: dict[PowerZone, float] = field(default_factory=_zero_zones)
    seconds: dict[PowerZone, float] = field(default_factory=_zero_zones)
    total_seconds: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.total_seconds <= 0

    def dominant_zone(self) -> PowerZone | None:
        """Zone holding the most time, or None for an empty series."""
        if self.is_empty:
            return None
        return max(PowerZone, key=lambda z: (self.seconds[z], -z.value))

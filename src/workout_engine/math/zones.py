"""Time-in-zone classification for executed workouts.

Zone model: Coggan 7-level power zones as a fraction of FTP.
Reference: Coggan & Allen (2010), Training and Racing with a Power Meter.

Samples may be a bare sequence of values (1 s apart) or explicit
``{t, v}`` pairs; both shapes are classified identically.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

from workout_engine.math.units import is_positive_number
from workout_engine.models.enums import (
    REFERENCE_VALUE_FLOOR,
    ZONE_LABELS,
    ZONE_UPPER_EDGES,
    PowerZone,
)
from workout_engine.models.zone_distribution import ZoneDistribution

_ZONES = tuple(PowerZone)


def classify(samples: Iterable[Any] | None, reference_value: float | None) -> ZoneDistribution:
    """Bucket a sample series into the 7 fixed zones.

    Args:
        samples: Values, ``(t, v)`` pairs, or mappings with ``t``/``v``
            (``timestamp``/``value`` also accepted). Samples without a
            finite value are ignored.
        reference_value: FTP or equivalent threshold. Missing or
            non-positive values fall back to a floor of 1.

    Returns:
        ZoneDistribution with percentages rounded to one decimal that sum
        to exactly 100.0, or an all-zero distribution for an empty series.
    """
    reference = reference_value if is_positive_number(reference_value) else REFERENCE_VALUE_FLOOR
    values, dt = _normalize_samples(samples)
    return _distribute(values / reference, dt)


def classify_pace(
    samples: Iterable[Any] | None, threshold_pace_seconds: float | None,
) -> ZoneDistribution:
    """Classify pace samples (seconds per unit, lower = faster).

    Implied intensity is ``threshold / pace`` so a pace equal to threshold
    lands in Z4. Non-positive paces (stopped) are ignored.
    """
    threshold = (
        threshold_pace_seconds
        if is_positive_number(threshold_pace_seconds)
        else REFERENCE_VALUE_FLOOR
    )
    paces, dt = _normalize_samples(samples)
    moving = paces > 0
    return _distribute(threshold / paces[moving], dt[moving])


def zone_for(value: float, reference_value: float | None) -> PowerZone:
    """Zone of a single value relative to *reference_value*."""
    reference = reference_value if is_positive_number(reference_value) else REFERENCE_VALUE_FLOOR
    index = int(np.digitize([value / reference], ZONE_UPPER_EDGES)[0])
    return _ZONES[index]


def zone_frame(distribution: ZoneDistribution) -> pd.DataFrame:
    """Tabulate a distribution for charting: zone, label, seconds, percent."""
    return pd.DataFrame(
        {
            "zone": [zone.name for zone in _ZONES],
            "label": [ZONE_LABELS[zone] for zone in _ZONES],
            "seconds": [float(distribution.seconds[zone]) for zone in _ZONES],
            "percent": [float(distribution.percentages[zone]) for zone in _ZONES],
        }
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _distribute(ratios: np.ndarray, dt: np.ndarray) -> ZoneDistribution:
    if ratios.size == 0:
        return ZoneDistribution()
    total = float(dt.sum())
    if total <= 0:
        return ZoneDistribution()

    indices = np.digitize(ratios, ZONE_UPPER_EDGES)
    seconds = np.bincount(indices, weights=dt, minlength=len(_ZONES))
    percents = _round_percentages(seconds / total * 100.0)

    return ZoneDistribution(
        percentages={zone: float(percents[i]) for i, zone in enumerate(_ZONES)},
        seconds={zone: float(seconds[i]) for i, zone in enumerate(_ZONES)},
        total_seconds=total,
    )


def _round_percentages(raw: np.ndarray) -> np.ndarray:
    """Round to tenths with largest-remainder so the result sums to 100.0."""
    scaled = raw * 10.0
    floors = np.floor(scaled)
    shortfall = int(round(1000.0 - float(floors.sum())))
    if shortfall > 0:
        order = np.argsort(-(scaled - floors), kind="stable")
        floors[order[:shortfall]] += 1
    return floors / 10.0


def _normalize_samples(samples: Iterable[Any] | None) -> tuple[np.ndarray, np.ndarray]:
    """Return (values, dt) arrays; dt is each sample's elapsed seconds."""
    if samples is None:
        return np.array([], dtype=np.float64), np.array([], dtype=np.float64)

    times: list[float] = []
    values: list[float] = []
    for index, sample in enumerate(samples):
        t, v = _split_sample(sample)
        if v is None:
            continue
        times.append(float(index) if t is None else t)
        values.append(v)

    value_arr = np.array(values, dtype=np.float64)
    if value_arr.size == 0:
        return value_arr, np.array([], dtype=np.float64)

    time_arr = np.array(times, dtype=np.float64)
    gaps = np.diff(time_arr)
    # Non-increasing timestamps count as one second
    gaps = np.where(gaps > 0, gaps, 1.0)
    dt = np.append(gaps, 1.0)
    return value_arr, dt


def _split_sample(sample: Any) -> tuple[float | None, float | None]:
    """Pull (timestamp, value) out of one sample in any accepted shape."""
    if isinstance(sample, Mapping):
        t = sample.get("t", sample.get("timestamp"))
        v = sample.get("v", sample.get("value"))
    elif isinstance(sample, (list, tuple)):
        if len(sample) != 2:
            return None, None
        t, v = sample
    else:
        t, v = None, sample
    return _finite(t), _finite(v)


def _finite(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    value = float(value)
    return value if math.isfinite(value) else None

"""Enumerations and unit/tolerance constants for the workout engine."""

from enum import IntEnum, auto


class Discipline(IntEnum):
    """Workout disciplines a stored session can belong to."""

    RUN = auto()
    RIDE = auto()
    SWIM = auto()
    STRENGTH = auto()
    MOBILITY = auto()
    PILATES_YOGA = auto()


class StepKind(IntEnum):
    """Role of a single segment inside a workout."""

    WARMUP = auto()
    WORK = auto()
    RECOVERY = auto()
    COOLDOWN = auto()
    STEADY = auto()


class IntensityKind(IntEnum):
    """Which physiological quantity an intensity target describes."""

    NONE = auto()
    PACE = auto()
    POWER = auto()
    HEART_RATE = auto()
    RPE = auto()


class RangeUnit(IntEnum):
    """Unit of a resolved TargetRange."""

    SEC_PER_MI = auto()
    SEC_PER_KM = auto()
    SEC_PER_100YD = auto()
    SEC_PER_100M = auto()
    WATTS = auto()
    BPM = auto()
    RPE = auto()


class DistanceUnit(IntEnum):
    """Authoring units for distances found in tokens and stored steps."""

    METERS = auto()
    YARDS = auto()
    KILOMETERS = auto()
    MILES = auto()


class UnitSystem(IntEnum):
    """Caller-supplied display preference for distances and paces."""

    IMPERIAL = auto()
    METRIC = auto()


class PowerZone(IntEnum):
    """Seven-band intensity zones relative to a threshold reference."""

    Z1 = 1
    Z2 = 2
    Z3 = 3
    Z4 = 4
    Z5 = 5
    Z6 = 6
    Z7 = 7


# Step kinds that take the wider (easy) tolerance band
EASY_STEP_KINDS = frozenset({
    StepKind.WARMUP,
    StepKind.COOLDOWN,
    StepKind.RECOVERY,
})

PACE_UNITS = frozenset({
    RangeUnit.SEC_PER_MI,
    RangeUnit.SEC_PER_KM,
    RangeUnit.SEC_PER_100YD,
    RangeUnit.SEC_PER_100M,
})

SWIM_PACE_UNITS = frozenset({
    RangeUnit.SEC_PER_100YD,
    RangeUnit.SEC_PER_100M,
})

# Largest repeat/rep count accepted from a stored group or a token
MAX_REPEAT_COUNT = 100
# Largest step list a stored repeat group may expand to, nesting included
MAX_EXPANDED_STEPS = 10_000

# ---------------------------------------------------------------------------
# Length constants
# ---------------------------------------------------------------------------
METERS_PER_MILE = 1609.34
METERS_PER_KM = 1000.0
METERS_PER_YARD = 0.9144

METERS_PER_DISTANCE_UNIT = {
    DistanceUnit.METERS: 1.0,
    DistanceUnit.YARDS: METERS_PER_YARD,
    DistanceUnit.KILOMETERS: METERS_PER_KM,
    DistanceUnit.MILES: METERS_PER_MILE,
}

# Meters covered by one "unit distance" of a pace unit
METERS_PER_PACE_UNIT = {
    RangeUnit.SEC_PER_MI: METERS_PER_MILE,
    RangeUnit.SEC_PER_KM: METERS_PER_KM,
    RangeUnit.SEC_PER_100YD: 100 * METERS_PER_YARD,
    RangeUnit.SEC_PER_100M: 100.0,
}

# ---------------------------------------------------------------------------
# Pace/power tolerance bands
# ---------------------------------------------------------------------------
PACE_TOLERANCE_QUALITY = 0.04
PACE_TOLERANCE_EASY = 0.06
POWER_TOLERANCE_SS_THR = 0.05
POWER_TOLERANCE_VO2 = 0.10
# Endurance rides span Z2 around their centre
POWER_TOLERANCE_ENDURANCE = 0.15

# Bike set centres as fraction of FTP
BIKE_SET_FTP_FRACTION = {
    "ss": 0.91,
    "thr": 0.98,
    "vo2": 1.10,
    "endurance": 0.65,
}

# Seconds per 100 added to the swim baseline for easy (warm-up, cool-down) swimming
SWIM_EASY_OFFSET_SECONDS = 7

# ---------------------------------------------------------------------------
# Zone table — Coggan 7-level power model, as fraction of FTP.
# Each edge is the exclusive upper bound of the zone below it.
# ---------------------------------------------------------------------------
ZONE_UPPER_EDGES = (0.55, 0.76, 0.91, 1.06, 1.21, 1.51)

ZONE_LABELS = {
    PowerZone.Z1: "Z1 <55%",
    PowerZone.Z2: "Z2 55–75%",
    PowerZone.Z3: "Z3 76–90%",
    PowerZone.Z4: "Z4 91–105%",
    PowerZone.Z5: "Z5 106–120%",
    PowerZone.Z6: "Z6 121–150%",
    PowerZone.Z7: "Z7 >150%",
}

# Floor applied when an athlete's reference value is missing or non-positive
REFERENCE_VALUE_FLOOR = 1.0

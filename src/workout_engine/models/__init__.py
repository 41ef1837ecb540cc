"""Data models for the workout engine."""

from workout_engine.models.enums import (
    Discipline,
    DistanceUnit,
    IntensityKind,
    PowerZone,
    RangeUnit,
    StepKind,
    UnitSystem,
)
from workout_engine.models.facts import StepTotals, WorkoutFacts
from workout_engine.models.summary import DisplayLine, RepeatBlock
from workout_engine.models.target_range import TargetRange
from workout_engine.models.token_fragment import DecodedTokens, TokenFragment
from workout_engine.models.workout_spec import (
    NO_TARGET,
    Baselines,
    IntensityTarget,
    Step,
    WorkoutSpec,
)
from workout_engine.models.zone_distribution import ZoneDistribution

__all__ = [
    "NO_TARGET",
    "Baselines",
    "DecodedTokens",
    "Discipline",
    "DisplayLine",
    "DistanceUnit",
    "IntensityKind",
    "IntensityTarget",
    "PowerZone",
    "RangeUnit",
    "RepeatBlock",
    "Step",
    "StepKind",
    "StepTotals",
    "TargetRange",
    "TokenFragment",
    "UnitSystem",
    "WorkoutFacts",
    "WorkoutSpec",
    "ZoneDistribution",
]

"""WorkoutEngine — wires record parsing, decoding, totals, targets and display text."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, Mapping

import pandas as pd

from workout_engine.config import EngineConfig, ToleranceConfig
from workout_engine.math.units import format_pace, is_positive_number, parse_swim_pace, pool_pace_unit
from workout_engine.math.zones import classify
from workout_engine.models.enums import UnitSystem
from workout_engine.models.facts import WorkoutFacts
from workout_engine.models.workout_spec import Baselines, WorkoutSpec
from workout_engine.models.zone_distribution import ZoneDistribution
from workout_engine.normalizer.record_parser import parse_record
from workout_engine.normalizer.step_aggregator import aggregate, resolve_total_duration
from workout_engine.normalizer.summarizer import summarize
from workout_engine.normalizer.target_resolver import resolve_step
from workout_engine.normalizer.title_resolver import calendar_code, title
from workout_engine.normalizer.token_decoder import decode_tokens, token_lines

logger = logging.getLogger(__name__)

FACTS_FRAME_COLUMNS = (
    "title",
    "code",
    "discipline",
    "optional",
    "total_seconds",
    "total_meters",
    "duration_source",
    "line_count",
    "skipped_tokens",
)


class WorkoutEngine:
    """Derives display-ready facts from stored workout specifications.

    Every call is a pure function of its arguments; the engine holds only
    its configuration.

    Usage:
        engine = WorkoutEngine()
        facts = engine.normalize(record, baselines)
        distribution = engine.classify_zones(power_samples, ftp)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def normalize(
        self,
        workout: WorkoutSpec | Mapping[str, Any],
        baselines: Baselines | None = None,
        unit_system: UnitSystem | None = None,
    ) -> WorkoutFacts:
        """Compute the canonical facts for one workout.

        Args:
            workout: A parsed WorkoutSpec, or a raw stored record.
            baselines: Athlete paces/FTP for token targets. The record's own
                FTP fills in when the baselines carry none, and a bare swim
                pace is per 100 of the record's pool unit.
            unit_system: Display units; defaults to the engine config.

        Returns:
            WorkoutFacts recomputed from scratch.
        """
        spec = workout if isinstance(workout, WorkoutSpec) else parse_record(workout)
        unit_system = unit_system or self.config.unit_system
        tolerance = ToleranceConfig.from_hints(spec.export_hints, self.config.tolerance)
        baselines = _effective_baselines(spec, baselines)

        # Explicit steps win over steps decoded from tokens
        decoded = decode_tokens(spec.steps_preset_tokens, baselines, spec.description)
        steps = spec.steps or decoded.steps

        totals = aggregate(steps, tolerance)
        total_seconds, duration_source = resolve_total_duration(spec, totals)
        total_meters = totals.total_meters if totals.total_meters > 0 else None

        facts = WorkoutFacts(
            title=title(spec),
            code=calendar_code(spec, total_seconds, total_meters, unit_system),
            discipline=spec.discipline,
            optional=spec.is_optional,
            steps=steps,
            step_ranges=tuple(resolve_step(step, tolerance) for step in steps),
            step_seconds=totals.step_seconds,
            total_seconds=total_seconds,
            total_meters=total_meters,
            duration_source=duration_source,
            lines=tuple(summarize(steps, unit_system, tolerance, spec.discipline)),
            token_lines=token_lines(decoded.fragments),
            skipped_tokens=decoded.skipped,
        )
        logger.debug(
            "Normalized %r: %d steps, %s s from %s, %d skipped tokens",
            facts.title, len(steps), total_seconds, duration_source, len(decoded.skipped),
        )
        return facts

    def classify_zones(
        self, samples: Iterable[Any] | None, reference_value: float | None,
    ) -> ZoneDistribution:
        """Time-in-zone for an executed workout's sample series."""
        return classify(samples, reference_value)

    def facts_frame(
        self,
        workouts: Iterable[WorkoutSpec | Mapping[str, Any]],
        baselines: Baselines | None = None,
        unit_system: UnitSystem | None = None,
    ) -> pd.DataFrame:
        """One row per workout, e.g. for a week of calendar cells."""
        rows = []
        for workout in workouts:
            facts = self.normalize(workout, baselines, unit_system)
            rows.append({
                "title": facts.title,
                "code": facts.code,
                "discipline": facts.discipline.name.lower() if facts.discipline else None,
                "optional": facts.optional,
                "total_seconds": facts.total_seconds,
                "total_meters": facts.total_meters,
                "duration_source": facts.duration_source,
                "line_count": len(facts.lines),
                "skipped_tokens": len(facts.skipped_tokens),
            })
        return pd.DataFrame(rows, columns=list(FACTS_FRAME_COLUMNS))


def _effective_baselines(spec: WorkoutSpec, baselines: Baselines | None) -> Baselines:
    """Fill in the record's FTP and pin a bare swim pace to the pool's unit."""
    baselines = baselines or Baselines()
    if not is_positive_number(baselines.ftp) and spec.ftp is not None:
        baselines = dataclasses.replace(baselines, ftp=spec.ftp)
    swim_pace = parse_swim_pace(baselines.swim_pace_per_100, pool_pace_unit(spec.pool_length_meters))
    if swim_pace is not None:
        baselines = dataclasses.replace(baselines, swim_pace_per_100=format_pace(*swim_pace))
    return baselines

"""Tests for titles and calendar codes."""

from __future__ import annotations

from workout_engine.models.enums import Discipline, UnitSystem
from workout_engine.models.workout_spec import WorkoutSpec
from workout_engine.normalizer.title_resolver import calendar_code, title


def _spec(discipline: Discipline | None, **kwargs) -> WorkoutSpec:
    if "tags" in kwargs:
        kwargs["tags"] = frozenset(kwargs["tags"])
    return WorkoutSpec(discipline=discipline, **kwargs)


class TestRunTitles:
    def test_intervals_from_description(self, interval_spec: WorkoutSpec) -> None:
        assert title(interval_spec) == "Run — Intervals"

    def test_tempo(self) -> None:
        assert title(_spec(Discipline.RUN, description="20 min tempo")) == "Run — Tempo"

    def test_tag_beats_text(self) -> None:
        spec = _spec(Discipline.RUN, description="long run with tempo finish", tags={"long_run"})
        assert title(spec) == "Run — Long Run"

    def test_token_text_is_searched(self) -> None:
        spec = _spec(Discipline.RUN, steps_preset_tokens=("tempo_20min_10kpace",))
        assert title(spec) == "Run — Tempo"

    def test_name_when_nothing_matches(self) -> None:
        assert title(_spec(Discipline.RUN, name="Shakeout")) == "Shakeout"

    def test_discipline_label_last(self) -> None:
        assert title(_spec(Discipline.RUN)) == "Run"


class TestRideTitles:
    def test_sweet_spot(self) -> None:
        assert title(_spec(Discipline.RIDE, description="Sweet spot 2x20")) == "Ride — Sweet Spot"

    def test_vo2_from_tokens(self) -> None:
        spec = _spec(Discipline.RIDE, steps_preset_tokens=("bike_vo2_5x4min",))
        assert title(spec) == "Ride — VO2"

    def test_long_ride_tag(self) -> None:
        spec = _spec(Discipline.RIDE, description="endurance", tags={"long_ride"})
        assert title(spec) == "Ride — Long Ride"

    def test_no_match_uses_name(self) -> None:
        assert title(_spec(Discipline.RIDE, name="Coffee spin")) == "Coffee spin"


class TestSwimTitles:
    def test_technique_tag(self) -> None:
        spec = _spec(Discipline.SWIM, description="drills", tags={"opt_kind:technique"})
        assert title(spec) == "Swim — Technique"

    def test_drills_before_technique_text(self) -> None:
        spec = _spec(Discipline.SWIM, description="Technique focus: drills")
        assert title(spec) == "Swim — Drills"

    def test_technique_text(self) -> None:
        assert title(_spec(Discipline.SWIM, description="technique work")) == "Swim — Technique"

    def test_fallback(self) -> None:
        assert title(_spec(Discipline.SWIM)) == "Swim — Endurance"

    def test_name_before_fallback(self) -> None:
        assert title(_spec(Discipline.SWIM, name="Masters")) == "Masters"


class TestOtherTitles:
    def test_strength_without_rules(self) -> None:
        assert title(_spec(Discipline.STRENGTH)) == "Strength"

    def test_no_discipline(self) -> None:
        assert title(_spec(None)) == "Session"
        assert title(_spec(None, name="Mystery")) == "Mystery"


class TestCalendarCode:
    def test_run_with_distance(self, interval_spec: WorkoutSpec) -> None:
        assert calendar_code(interval_spec, 3300, 4800) == "RN-VO2 3mi"

    def test_run_metric(self, interval_spec: WorkoutSpec) -> None:
        assert calendar_code(interval_spec, 3300, 4800, UnitSystem.METRIC) == "RN-VO2 4.8km"

    def test_duration_when_no_distance(self) -> None:
        assert calendar_code(_spec(Discipline.RUN, name="Easy run"), 2700) == "RN-EZ 45m"

    def test_swim_kilometres(self) -> None:
        spec = _spec(Discipline.SWIM, description="drill set")
        assert calendar_code(spec, None, 1097.28) == "SM-DRL 1.1k"

    def test_code_alone_without_volume(self) -> None:
        assert calendar_code(_spec(Discipline.STRENGTH, name="Upper body")) == "ST-UPP"

    def test_discipline_code_when_no_keyword(self) -> None:
        assert calendar_code(_spec(Discipline.PILATES_YOGA), 3600) == "PY 1h"

    def test_unknown_discipline(self) -> None:
        assert calendar_code(_spec(None), 1800) == "WO 30m"

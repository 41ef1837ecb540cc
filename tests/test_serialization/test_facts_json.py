"""Tests for WorkoutFacts JSON serialization."""

from __future__ import annotations

import json

import pytest

from workout_engine.engine import WorkoutEngine
from workout_engine.models.facts import WorkoutFacts
from workout_engine.models.workout_spec import WorkoutSpec
from workout_engine.serialization import to_facts_dict, to_facts_json_string


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def interval_facts(interval_spec: WorkoutSpec) -> WorkoutFacts:
    return WorkoutEngine().normalize(interval_spec)


@pytest.fixture
def swim_facts(swim_record: dict) -> WorkoutFacts:
    return WorkoutEngine().normalize(swim_record)


class TestToFactsDict:
    def test_top_level_keys(self, interval_facts: WorkoutFacts) -> None:
        result = to_facts_dict(interval_facts)
        assert result["title"] == "Run — Intervals"
        assert result["discipline"] == "run"
        assert result["totalSeconds"] == 3300
        assert result["totalMeters"] == 4800
        assert result["durationSource"] == "steps"
        assert result["optional"] is False

    def test_step_entry(self, interval_facts: WorkoutFacts) -> None:
        warmup = to_facts_dict(interval_facts)["steps"][0]
        assert warmup == {
            "id": None,
            "kind": "warmup",
            "seconds": 600,
            "distanceMeters": None,
            "label": None,
            "range": {"lower": 550, "upper": 620, "unit": "sec_per_mi"},
        }

    def test_lines_carry_repeat_count(self, interval_facts: WorkoutFacts) -> None:
        lines = to_facts_dict(interval_facts)["lines"]
        assert [line["repeatCount"] for line in lines] == [None, 6, None]

    def test_authored_distance_kept(self, swim_facts: WorkoutFacts) -> None:
        result = to_facts_dict(swim_facts)
        assert result["steps"][0]["authoredDistance"] == {"amount": 200, "unit": "yards"}
        assert result["steps"][0]["distanceMeters"] == 182.9
        assert result["totalMeters"] == 365.8
        assert result["tokenLines"] == ["WU 200 yd", "Drills: catchup 4x50 @ :15r"]

    def test_unknown_duration_is_null(self) -> None:
        result = to_facts_dict(WorkoutEngine().normalize(WorkoutSpec()))
        assert result["totalSeconds"] is None
        assert result["totalMeters"] is None
        assert result["discipline"] is None
        assert result["steps"] == []


class TestToFactsJsonString:
    def test_round_trips_through_json(self, interval_facts: WorkoutFacts) -> None:
        text = to_facts_json_string(interval_facts)
        assert json.loads(text) == to_facts_dict(interval_facts)

    def test_non_ascii_kept(self, interval_facts: WorkoutFacts) -> None:
        text = to_facts_json_string(interval_facts, indent=None)
        assert "6 × 800m" in text
        assert "\n" not in text

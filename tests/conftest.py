"""Shared test fixtures: step lists, token lists, athlete baselines, stored records."""

from __future__ import annotations

import pytest

from workout_engine.models.enums import Discipline, IntensityKind, RangeUnit, StepKind
from workout_engine.models.workout_spec import Baselines, IntensityTarget, Step, WorkoutSpec
from workout_engine.normalizer.token_decoder import clear_token_cache


def pace(seconds: float, unit: RangeUnit = RangeUnit.SEC_PER_MI) -> IntensityTarget:
    return IntensityTarget(kind=IntensityKind.PACE, value=seconds, unit=unit)


EASY = pace(585)  # 9:45/mi
QUALITY = pace(463)  # 7:43/mi


@pytest.fixture(autouse=True)
def _fresh_token_cache() -> None:
    clear_token_cache()


@pytest.fixture
def interval_steps() -> tuple[Step, ...]:
    """WU 10:00 easy, 6 x (800m @ 7:43/mi + 2:00 jog), CD 10:00 easy."""
    work = Step(kind=StepKind.WORK, duration_seconds=230, distance_meters=800, target=QUALITY)
    rec = Step(kind=StepKind.RECOVERY, duration_seconds=120, target=EASY)
    return (
        Step(kind=StepKind.WARMUP, duration_seconds=600, target=EASY),
        *((work, rec) * 6),
        Step(kind=StepKind.COOLDOWN, duration_seconds=600, target=EASY),
    )


@pytest.fixture
def interval_spec(interval_steps: tuple[Step, ...]) -> WorkoutSpec:
    return WorkoutSpec(
        discipline=Discipline.RUN,
        steps=interval_steps,
        description="6 x 800m intervals at 5K pace",
        name="Track Tuesday",
    )


@pytest.fixture
def swim_tokens() -> list[str]:
    return ["swim_warmup_200yd", "swim_drill_catchup_4x50yd_r15"]


@pytest.fixture
def baselines() -> Baselines:
    """FTP 250 W; 5K 7:00/mi, 10K 7:20/mi, marathon 8:10/mi, easy 9:45/mi."""
    return Baselines(
        ftp=250,
        five_k_pace="7:00/mi",
        ten_k_pace="7:20/mi",
        easy_pace="9:45/mi",
        marathon_pace="8:10/mi",
    )


@pytest.fixture
def run_record() -> dict:
    """Stored row for a planned interval run, authored only as tokens."""
    return {
        "type": "run",
        "name": "Intervals",
        "description": "6x800m @ 5K pace with 90s jog",
        "tags": '["quality", "optional"]',
        "steps_preset": [
            "warmup_run_quality_12min",
            "interval_6x800m_5kpace_r90s",
            "cooldown_easy_10min",
        ],
        "export_hints": {"pace_tolerance_quality": 0.04, "pace_tolerance_easy": 0.06},
    }


@pytest.fixture
def swim_record(swim_tokens: list[str]) -> dict:
    return {
        "type": "swimming",
        "description": "Technique focus: drills",
        "steps_preset": swim_tokens,
        "pool_length": 25,
        "pool_unit": "yd",
    }

"""Tests for unit, clock and pace helpers."""

from __future__ import annotations

import pytest

from workout_engine.math.units import (
    convert_pace,
    display_pace_unit,
    format_clock,
    format_distance,
    format_duration,
    format_pace,
    is_positive_number,
    parse_clock,
    parse_distance_unit,
    parse_pace,
    parse_swim_pace,
    pool_pace_unit,
    round_half_up,
    seconds_per_meter,
    to_meters,
    trim_number,
)
from workout_engine.models.enums import DistanceUnit, RangeUnit, UnitSystem


class TestNumbers:
    def test_round_half_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(444.48) == 444
        assert round_half_up(481.52) == 482

    def test_is_positive_number(self) -> None:
        assert is_positive_number(3)
        assert is_positive_number(0.5)
        assert not is_positive_number(0)
        assert not is_positive_number(-1)
        assert not is_positive_number(True)
        assert not is_positive_number(float("nan"))
        assert not is_positive_number("5")
        assert not is_positive_number(None)

    def test_trim_number(self) -> None:
        assert trim_number(1.50) == "1.5"
        assert trim_number(4.0) == "4"
        assert trim_number(3.14159) == "3.14"


class TestClock:
    def test_parse_minutes_seconds(self) -> None:
        assert parse_clock("7:43") == 463

    def test_parse_hours(self) -> None:
        assert parse_clock("1:02:03") == 3723

    def test_parse_bare_seconds(self) -> None:
        assert parse_clock(":15") == 15

    def test_parse_rejects_bad_input(self) -> None:
        assert parse_clock("7:75") is None
        assert parse_clock("abc") is None
        assert parse_clock(None) is None

    def test_format_clock(self) -> None:
        assert format_clock(600) == "10:00"
        assert format_clock(90) == "1:30"
        assert format_clock(3723) == "1:02:03"
        assert format_clock(59.6) == "1:00"

    def test_format_duration(self) -> None:
        assert format_duration(5400) == "1h 30m"
        assert format_duration(2700) == "45m"
        assert format_duration(3600) == "1h"
        assert format_duration(0) == "0m"


class TestPace:
    def test_parse_per_mile(self) -> None:
        assert parse_pace("7:43/mi") == (463, RangeUnit.SEC_PER_MI)

    def test_parse_per_km(self) -> None:
        assert parse_pace("4:48/km") == (288, RangeUnit.SEC_PER_KM)

    def test_parse_swim_pace(self) -> None:
        assert parse_pace("1:45/100yd") == (105, RangeUnit.SEC_PER_100YD)
        assert parse_pace("1:55 /100m") == (115, RangeUnit.SEC_PER_100M)

    def test_missing_unit_defaults_to_mile(self) -> None:
        assert parse_pace("7:43") == (463, RangeUnit.SEC_PER_MI)

    def test_parse_rejects_bad_input(self) -> None:
        assert parse_pace("fast") is None
        assert parse_pace("0:00/mi") is None
        assert parse_pace(463) is None

    def test_format_pace(self) -> None:
        assert format_pace(463, RangeUnit.SEC_PER_MI) == "7:43/mi"
        assert format_pace(105, RangeUnit.SEC_PER_100YD) == "1:45/100yd"

    def test_convert_mile_to_km(self) -> None:
        assert convert_pace(463, RangeUnit.SEC_PER_MI, RangeUnit.SEC_PER_KM) == pytest.approx(287.7, abs=0.01)

    def test_convert_same_unit_is_identity(self) -> None:
        assert convert_pace(300, RangeUnit.SEC_PER_KM, RangeUnit.SEC_PER_KM) == 300

    def test_seconds_per_meter(self) -> None:
        assert seconds_per_meter(300, RangeUnit.SEC_PER_KM) == pytest.approx(0.3)

    def test_display_unit_follows_unit_system(self) -> None:
        assert display_pace_unit(RangeUnit.SEC_PER_MI, UnitSystem.METRIC) == RangeUnit.SEC_PER_KM
        assert display_pace_unit(RangeUnit.SEC_PER_KM, UnitSystem.IMPERIAL) == RangeUnit.SEC_PER_MI

    def test_swim_pace_never_converted(self) -> None:
        assert display_pace_unit(RangeUnit.SEC_PER_100YD, UnitSystem.METRIC) == RangeUnit.SEC_PER_100YD


class TestSwimPace:
    def test_suffixed_swim_pace(self) -> None:
        assert parse_swim_pace("1:45/100m") == (105, RangeUnit.SEC_PER_100M)

    def test_bare_pace_takes_default_unit(self) -> None:
        assert parse_swim_pace("1:45") == (105, RangeUnit.SEC_PER_100YD)
        assert parse_swim_pace("1:45", RangeUnit.SEC_PER_100M) == (105, RangeUnit.SEC_PER_100M)

    def test_run_pace_is_not_a_swim_pace(self) -> None:
        assert parse_swim_pace("7:00/mi") is None
        assert parse_swim_pace(None) is None

    def test_pool_unit(self) -> None:
        assert pool_pace_unit(22.86) == RangeUnit.SEC_PER_100YD
        assert pool_pace_unit(25) == RangeUnit.SEC_PER_100M
        assert pool_pace_unit(50) == RangeUnit.SEC_PER_100M
        assert pool_pace_unit(None) == RangeUnit.SEC_PER_100YD


class TestDistance:
    def test_parse_distance_unit(self) -> None:
        assert parse_distance_unit("yd") == DistanceUnit.YARDS
        assert parse_distance_unit(" MI ") == DistanceUnit.MILES
        assert parse_distance_unit("furlong") is None

    def test_yards_to_meters(self) -> None:
        assert to_meters(50, DistanceUnit.YARDS) == pytest.approx(45.72)

    def test_imperial_short_distance_in_meters(self) -> None:
        assert format_distance(800) == "800m"

    def test_imperial_miles(self) -> None:
        assert format_distance(1609.34) == "1 mi"
        assert format_distance(8046.7) == "5 mi"

    def test_metric_kilometers(self) -> None:
        assert format_distance(5000, UnitSystem.METRIC) == "5 km"
        assert format_distance(400, UnitSystem.METRIC) == "400m"

    def test_swim_yardage_kept_in_metric(self) -> None:
        # 50 yd must not drift through a metre round-trip
        assert format_distance(45.72, UnitSystem.METRIC, 50, DistanceUnit.YARDS, keep_authored=True) == "50yd"

    def test_authored_unit_kept_within_its_system(self) -> None:
        assert format_distance(6437.36, UnitSystem.IMPERIAL, 4, DistanceUnit.MILES) == "4mi"
        assert format_distance(800, UnitSystem.METRIC, 800, DistanceUnit.METERS) == "800m"

    def test_authored_unit_converted_across_systems(self) -> None:
        assert format_distance(6437.36, UnitSystem.METRIC, 4, DistanceUnit.MILES) == "6.44 km"
        assert format_distance(45.72, UnitSystem.METRIC, 50, DistanceUnit.YARDS) == "46m"
        assert format_distance(5000, UnitSystem.IMPERIAL, 5, DistanceUnit.KILOMETERS) == "3.11 mi"

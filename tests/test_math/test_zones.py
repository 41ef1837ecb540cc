"""Tests for time-in-zone classification."""

from __future__ import annotations

import pytest

from workout_engine.math.zones import classify, classify_pace, zone_for, zone_frame
from workout_engine.models.enums import PowerZone
from workout_engine.models.zone_distribution import ZoneDistribution


def _others_zero(distribution: ZoneDistribution, *non_zero: PowerZone) -> bool:
    return all(
        distribution.percentages[zone] == 0.0 for zone in PowerZone if zone not in non_zero
    )


class TestClassify:
    def test_constant_power_lands_in_one_zone(self) -> None:
        # 200 W at FTP 250 = 80% -> Z3 (76-90%)
        distribution = classify([200] * 1800, 250)
        assert distribution.percentages[PowerZone.Z3] == 100.0
        assert _others_zero(distribution, PowerZone.Z3)
        assert distribution.total_seconds == 1800

    def test_empty_series_is_all_zero(self) -> None:
        distribution = classify([], 250)
        assert distribution.is_empty
        assert all(value == 0.0 for value in distribution.percentages.values())
        assert distribution.dominant_zone() is None

    def test_none_samples_is_all_zero(self) -> None:
        assert classify(None, 250).is_empty

    def test_pairs_match_bare_values(self) -> None:
        values = [100, 150, 200, 260, 300, 400]
        pairs = [{"t": i, "v": v} for i, v in enumerate(values)]
        assert classify(pairs, 250) == classify(values, 250)

    def test_tuple_and_long_key_samples(self) -> None:
        tuples = [(0, 200), (1, 200)]
        long_keys = [{"timestamp": 0, "value": 200}, {"timestamp": 1, "value": 200}]
        assert classify(tuples, 250) == classify(long_keys, 250)

    def test_split_between_zones(self) -> None:
        # 3 s at 40% (Z1), 1 s at 120% (Z5)
        distribution = classify([100, 100, 100, 300], 250)
        assert distribution.percentages[PowerZone.Z1] == 75.0
        assert distribution.percentages[PowerZone.Z5] == 25.0

    def test_timestamps_weight_samples(self) -> None:
        # First sample lasts 10 s, the last sample counts 1 s
        distribution = classify([{"t": 0, "v": 200}, {"t": 10, "v": 300}], 250)
        assert distribution.seconds[PowerZone.Z3] == 10.0
        assert distribution.seconds[PowerZone.Z5] == 1.0
        assert distribution.percentages[PowerZone.Z3] == 90.9
        assert distribution.percentages[PowerZone.Z5] == 9.1

    def test_non_increasing_timestamps_count_one_second(self) -> None:
        distribution = classify([{"t": 5, "v": 200}, {"t": 5, "v": 200}, {"t": 3, "v": 200}], 250)
        assert distribution.total_seconds == 3.0

    def test_percentages_sum_to_100(self) -> None:
        distribution = classify([100, 200, 400], 250)
        assert sum(distribution.percentages.values()) == pytest.approx(100.0)
        assert sorted(distribution.percentages.values(), reverse=True)[:3] == [33.4, 33.3, 33.3]

    def test_missing_reference_uses_floor(self) -> None:
        distribution = classify([200] * 10, None)
        assert distribution.percentages[PowerZone.Z7] == 100.0

    def test_non_positive_reference_uses_floor(self) -> None:
        distribution = classify([0.5] * 10, 0)
        assert distribution.percentages[PowerZone.Z1] == 100.0

    def test_non_numeric_samples_ignored(self) -> None:
        # Bare values imply t = index, so the gap stays with the first sample
        distribution = classify([200, None, "x", float("nan"), 200], 250)
        assert distribution.total_seconds == 5.0
        assert distribution.percentages[PowerZone.Z3] == 100.0

    def test_dominant_zone(self) -> None:
        distribution = classify([100, 100, 100, 300], 250)
        assert distribution.dominant_zone() == PowerZone.Z1


class TestZoneFor:
    def test_lower_edge_belongs_to_upper_zone(self) -> None:
        assert zone_for(55, 100) == PowerZone.Z2
        assert zone_for(54.9, 100) == PowerZone.Z1

    def test_threshold_is_z4(self) -> None:
        assert zone_for(250, 250) == PowerZone.Z4

    def test_above_150_percent_is_z7(self) -> None:
        assert zone_for(400, 250) == PowerZone.Z7


class TestClassifyPace:
    def test_threshold_pace_is_z4(self) -> None:
        distribution = classify_pace([450] * 60, 450)
        assert distribution.percentages[PowerZone.Z4] == 100.0

    def test_slower_pace_is_lower_zone(self) -> None:
        # 450 / 900 = 50% -> Z1
        distribution = classify_pace([900] * 60, 450)
        assert distribution.percentages[PowerZone.Z1] == 100.0

    def test_stopped_samples_ignored(self) -> None:
        distribution = classify_pace([0, 450], 450)
        assert distribution.total_seconds == 1.0
        assert distribution.percentages[PowerZone.Z4] == 100.0


class TestZoneFrame:
    def test_seven_rows_in_zone_order(self) -> None:
        frame = zone_frame(classify([200] * 60, 250))
        assert list(frame.columns) == ["zone", "label", "seconds", "percent"]
        assert list(frame["zone"]) == ["Z1", "Z2", "Z3", "Z4", "Z5", "Z6", "Z7"]
        assert frame["percent"].sum() == pytest.approx(100.0)

    def test_empty_distribution_frame(self) -> None:
        frame = zone_frame(ZoneDistribution())
        assert len(frame) == 7
        assert frame["seconds"].sum() == 0.0

"""Tests for the workout-engine command line."""

from __future__ import annotations

import json

import pytest

from workout_engine.cli import main


@pytest.fixture
def run_record_path(tmp_path, run_record: dict):
    path = tmp_path / "run.json"
    path.write_text(json.dumps(run_record), encoding="utf-8")
    return path


class TestSummarize:
    def test_prints_title_totals_and_lines(self, run_record_path, capsys) -> None:
        code = main([
            "summarize", str(run_record_path),
            "--five-k-pace", "7:00/mi",
            "--easy-pace", "9:45/mi",
        ])
        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert out[0] == "Run — Intervals (optional)"
        assert out[1] == "RN-VO2 3mi | 52m (steps) | 2.98 mi"
        assert out[2] == "  WU 12:00 (9:10–10:20/mi)"
        assert out[3] == "  6 × 800m (6:43–7:17/mi) jog 1:30 (9:10–10:20/mi)"

    def test_json_output(self, run_record_path, capsys) -> None:
        assert main(["summarize", str(run_record_path), "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["title"] == "Run — Intervals"
        assert payload["totalSeconds"] == 1860

    def test_metric(self, run_record_path, capsys) -> None:
        assert main(["summarize", str(run_record_path), "--metric"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[1] == "RN-VO2 4.8km | 31m (steps) | 4.8 km"

    def test_skipped_tokens_listed(self, tmp_path, capsys) -> None:
        path = tmp_path / "swim.json"
        path.write_text(json.dumps({"type": "swim", "steps_preset": ["swim_warmup_200yd", "banana"]}))
        assert main(["summarize", str(path)]) == 0
        assert "Skipped tokens: banana" in capsys.readouterr().out

    def test_swim_pace_option(self, tmp_path, capsys) -> None:
        path = tmp_path / "swim.json"
        record = {"type": "swim", "pool_length": 25, "pool_unit": "yd", "steps_preset": ["swim_warmup_200yd"]}
        path.write_text(json.dumps(record))
        assert main(["summarize", str(path), "--swim-pace", "1:45"]) == 0
        assert "  WU 200yd (1:45–1:59/100yd)" in capsys.readouterr().out.splitlines()

    def test_missing_record(self, tmp_path) -> None:
        assert main(["summarize", str(tmp_path / "missing.json")]) == 1


class TestZones:
    def test_power_samples(self, tmp_path, capsys) -> None:
        path = tmp_path / "power.json"
        path.write_text(json.dumps([200] * 60))
        assert main(["zones", str(path), "--ftp", "250"]) == 0
        rows = capsys.readouterr().out.splitlines()
        assert len(rows) == 8
        z3 = next(row for row in rows if row.strip().startswith("Z3"))
        assert "100.0" in z3

    def test_wrapped_pace_samples(self, tmp_path, capsys) -> None:
        path = tmp_path / "pace.json"
        path.write_text(json.dumps({"samples": [{"t": i, "v": 450} for i in range(30)]}))
        assert main(["zones", str(path), "--threshold-pace", "7:30/mi"]) == 0
        z4 = next(row for row in capsys.readouterr().out.splitlines() if row.strip().startswith("Z4"))
        assert "100.0" in z4

    def test_bad_threshold_pace(self, tmp_path) -> None:
        path = tmp_path / "pace.json"
        path.write_text("[450, 450]")
        assert main(["zones", str(path), "--threshold-pace", "fast"]) == 1

    def test_no_sample_list(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text('{"values": []}')
        assert main(["zones", str(path), "--ftp", "250"]) == 1

    def test_reference_required(self, tmp_path) -> None:
        with pytest.raises(SystemExit):
            main(["zones", str(tmp_path / "x.json")])

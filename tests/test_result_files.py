"""Tests for reading and writing result files."""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from app.results.result_files import (
    list_result_files,
    parse_result_file,
    result_file_name,
    write_result_file,
)
from contracts.versioning import SCHEMA_VERSION
from exceptions import ParseError

from conftest import raw_result


class TestListResultFiles:
    def test_sorted_json_files_only(self, results_dir, write_result):
        write_result("b.json", raw_result([[1, 2]]))
        write_result("a.json", raw_result([[1, 2]]))
        write_result("notes.txt", "not a result")
        (results_dir / "nested.json").mkdir()

        files = list_result_files(results_dir)

        assert [p.name for p in files] == ["a.json", "b.json"]

    def test_missing_directory(self, tmp_path):
        assert list_result_files(tmp_path / "missing") == []


class TestParseResultFile:
    def test_parses_player_output(self, write_result):
        path = write_result("island.json", raw_result([[10, 20, 30], [20, 20, 20]], frames=5))

        results = parse_result_file(path)

        assert results.file_name == "island.json"
        assert len(results.perf_stats) == 1
        perf = results.perf_stats[0]
        assert perf.frames == 5
        assert perf.info.benchmark_name == "Island"
        assert perf.info.gpu == "Test GPU"
        assert [run.raw_samples for run in perf.run_data] == [(10.0, 20.0, 30.0), (20.0, 20.0, 20.0)]
        assert [run.run_time for run in perf.run_data] == [10.0, 11.0]

    def test_info_is_optional(self, write_result):
        data = raw_result([[1, 2]])
        del data["perfStats"][0]["info"]

        results = parse_result_file(write_result("bare.json", data))

        assert results.perf_stats[0].info.benchmark_name == ""

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[]",
            json.dumps({"perfStats": []}),
            json.dumps({"perfStats": [{"frames": 3, "runData": []}]}),
            json.dumps({"perfStats": [{"frames": 3, "runData": [{"runTime": 1.0, "rawSamples": []}]}]}),
            json.dumps({"perfStats": [{"frames": 3, "runData": [{"runTime": 1.0, "rawSamples": [1, -2]}]}]}),
            json.dumps({"perfStats": [{"frames": 0, "runData": [{"runTime": 1.0, "rawSamples": [1]}]}]}),
            json.dumps({"perfStats": [{"frames": 3, "runData": [{"rawSamples": [1]}]}]}),
            '{"perfStats": [{"frames": 3, "runData": [{"runTime": 1.0, "rawSamples": [10, NaN, 30]}]}]}',
            '{"perfStats": [{"frames": 1, "runData": [{"runTime": Infinity, "rawSamples": [1]}]}]}',
            '{"perfStats": [{"frames": 1, "runData": [{"runTime": 1.0, "rawSamples": [-Infinity]}]}]}',
            '{"perfStats": [{"frames": 1, "runData": [{"runTime": 1.0, "rawSamples": [1e999]}]}]}',
        ],
    )
    def test_malformed_files_raise(self, write_result, content):
        path = write_result("bad.json", content)

        with pytest.raises(ParseError) as excinfo:
            parse_result_file(path)

        assert excinfo.value.path == path

    def test_unequal_run_lengths_raise(self, write_result):
        path = write_result("mismatch.json", raw_result([[1, 2, 3], [1, 2]]))

        with pytest.raises(ParseError, match="different sample counts"):
            parse_result_file(path)

    def test_unreadable_file_raises(self, results_dir):
        with pytest.raises(ParseError):
            parse_result_file(results_dir / "does_not_exist.json")


class TestWriteResultFile:
    def test_round_trip_preserves_samples(self, tmp_path, sample_results):
        path = write_result_file(sample_results, tmp_path / "out" / "sample.json")

        loaded = parse_result_file(path)

        assert loaded == sample_results

    def test_written_file_is_versioned(self, tmp_path, sample_results):
        path = write_result_file(sample_results, tmp_path / "sample.json")

        data = json.loads(path.read_text())

        assert data["schema_version"] == SCHEMA_VERSION
        assert "perfStats" in data["payload"]


def test_result_file_name() -> None:
    name = result_file_name("Island Flythrough", datetime(2026, 10, 19, 14, 5, 9))

    assert name == "Island_Flythrough_20261019_140509.json"


def test_result_file_name_without_usable_characters() -> None:
    assert result_file_name("!!!", datetime(2026, 1, 2, 3, 4, 5)) == "benchmark_20260102_030405.json"

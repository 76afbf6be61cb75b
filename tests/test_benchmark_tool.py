"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from benchmark_tool import main
from log_config.logger import configure_logging

from conftest import raw_result


@pytest.fixture
def config_path(tmp_path: Path, results_dir: Path):
    data = {
        "benchmark": {
            "launch_settings": str(tmp_path / "launch.json"),
            "suite": [{"name": "Island Flythrough", "scene": "scenes/island"}],
        },
        "results": {"directory": str(results_dir)},
        "logging": {"level": "WARNING", "directory": None},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    yield path
    # main() swaps the log sinks; put back the console default
    configure_logging()


def test_summary_without_results(config_path, capsys):
    assert main(["--config", str(config_path), "summary"]) == 0

    assert "No Stats found, please run a benchmark." in capsys.readouterr().out


def test_summary_aggregate(config_path, write_result, capsys):
    write_result("island.json", raw_result([[10, 20, 30], [20, 20, 20]]))

    assert main(["--config", str(config_path), "summary"]) == 0

    out = capsys.readouterr().out
    assert "island.json" in out
    assert "Average: 20.00ms" in out
    assert "Runtime: 10.50s" in out
    assert "Minimum(fastest): n/a" in out


def test_summary_single_run(config_path, write_result, capsys):
    write_result("island.json", raw_result([[10, 20, 30], [20, 20, 20]]))

    assert main(["--config", str(config_path), "summary", "--file", "island.json", "--run", "1"]) == 0

    out = capsys.readouterr().out
    assert "Minimum(fastest): 10.00ms (@frame: 0)" in out
    assert "Maximum(slowest): 30.00ms (@frame: 2)" in out


def test_summary_reports_skipped_files(config_path, write_result, capsys):
    write_result("good.json", raw_result([[1, 2]]))
    write_result("bad.json", json.dumps({"perfStats": "nope"}))

    assert main(["--config", str(config_path), "summary"]) == 0

    assert "Skipped 1 unreadable result file(s)" in capsys.readouterr().out


def test_summary_unknown_file(config_path, write_result, capsys):
    write_result("island.json", raw_result([[1, 2]]))

    assert main(["--config", str(config_path), "summary", "--file", "other.json"]) == 1


def test_missing_config_is_an_error(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "nope.yaml"), "summary"]) == 1

    assert "Error:" in capsys.readouterr().err


def test_build_without_command_is_an_error(config_path, capsys):
    assert main(["--config", str(config_path), "build", "--target", "Android"]) == 1

    assert "No build command" in capsys.readouterr().err

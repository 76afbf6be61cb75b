"""Tests for benchmark build and launch orchestration."""

from __future__ import annotations

import json
import subprocess
from datetime import datetime
from pathlib import Path

import pytest
import yaml

from benchmarks.orchestrator import BenchmarkOrchestrator
from configs.settings import AppConfig, load_config
from exceptions import BuildError, LaunchError


def write_config(tmp_path: Path, command=None, run_command=None, auto_run=True) -> AppConfig:
    data = {
        "benchmark": {
            "loader_scene": "scenes/loader",
            "menu_scene": "scenes/menu",
            "launch_settings": str(tmp_path / "settings" / "launch.json"),
            "suite": [
                {"name": "Island Flythrough", "scene": "scenes/island"},
                {"name": "Storm", "scene": "scenes/storm"},
            ],
        },
        "results": {"directory": str(tmp_path / "results")},
        "build": {
            "output_root": str(tmp_path / "Builds"),
            "product_name": "Bench",
            "command": command or [],
            "run_command": run_command or [],
            "auto_run": auto_run,
            "development": False,
        },
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return load_config(path)


class FakeRunner:
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = ""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[list[str]] = []

    def __call__(self, argv, **kwargs):
        self.calls.append(list(argv))
        return subprocess.CompletedProcess(argv, self.returncode, self.stdout, self.stderr)


BUILD_COMMAND = ["unity", "-buildTarget", "{target}", "-out", "{output}", "-scenes", "{scenes}"]


class TestSceneLists:
    def test_suite_scenes_start_with_menu(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path))

        assert orchestrator.suite_scenes() == ["scenes/menu", "scenes/island", "scenes/storm"]

    def test_single_scene_list(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path))

        assert orchestrator.single_scene_list(1) == ["scenes/loader", "scenes/storm"]

    @pytest.mark.parametrize("index", [-1, 2])
    def test_single_scene_out_of_range(self, tmp_path, index):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path))

        with pytest.raises(IndexError):
            orchestrator.single_scene_list(index)


class TestPaths:
    def test_output_path(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path))

        assert orchestrator.output_path("StandaloneLinux64") == tmp_path / "Builds" / "StandaloneLinux64" / "Bench"
        assert orchestrator.output_path("Android") == tmp_path / "Builds" / "Android" / "Bench.apk"

    def test_expected_result_path(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path))

        path = orchestrator.expected_result_path("Storm", datetime(2026, 10, 19, 8, 0, 0))

        assert path == tmp_path / "results" / "Storm_20261019_080000.json"


class TestLaunchSettings:
    def test_single_scene(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path))

        path = orchestrator.write_launch_settings(1)

        settings = json.loads(path.read_text())
        assert settings["simpleRun"] is True
        assert settings["simpleRunScene"] == 1
        assert settings["resultsDirectory"] == str(tmp_path / "results")

    def test_full_suite(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path))

        settings = json.loads(orchestrator.write_launch_settings(None).read_text())

        assert settings["simpleRun"] is False
        assert settings["simpleRunScene"] == -1


class TestPackageBuild:
    def test_build_suite(self, tmp_path):
        runner = FakeRunner(stdout="compiling\ndone")
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path, command=BUILD_COMMAND), run=runner)

        report = orchestrator.build_suite("Android")

        assert report.succeeded
        assert report.output_path == tmp_path / "Builds" / "Android" / "Bench.apk"
        assert report.scenes == ("scenes/menu", "scenes/island", "scenes/storm")
        assert report.return_code == 0
        assert "done" in report.log_tail
        assert runner.calls == [
            [
                "unity",
                "-buildTarget",
                "Android",
                "-out",
                str(report.output_path),
                "-scenes",
                "scenes/menu,scenes/island,scenes/storm",
            ]
        ]
        assert json.loads(orchestrator.launch_settings_path.read_text())["simpleRun"] is False

    def test_build_scene_starts_player(self, tmp_path):
        spawned = []
        orchestrator = BenchmarkOrchestrator(
            write_config(tmp_path, command=BUILD_COMMAND),
            run=FakeRunner(),
            spawn=lambda argv: spawned.append(argv),
        )

        report = orchestrator.build_scene("StandaloneLinux64", 0)

        assert report.scenes == ("scenes/loader", "scenes/island")
        assert report.launched
        assert spawned == [[str(report.output_path)]]
        assert json.loads(orchestrator.launch_settings_path.read_text())["simpleRunScene"] == 0

    def test_auto_run_disabled(self, tmp_path):
        spawned = []
        orchestrator = BenchmarkOrchestrator(
            write_config(tmp_path, command=BUILD_COMMAND, auto_run=False),
            run=FakeRunner(),
            spawn=lambda argv: spawned.append(argv),
        )

        report = orchestrator.build_scene("StandaloneLinux64", 1)

        assert report.succeeded
        assert not report.launched
        assert spawned == []

    def test_player_start_failure_keeps_build_result(self, tmp_path):
        def broken(argv):
            raise PermissionError("not executable")

        orchestrator = BenchmarkOrchestrator(
            write_config(tmp_path, command=BUILD_COMMAND), run=FakeRunner(), spawn=broken
        )

        report = orchestrator.build_suite("StandaloneLinux64")

        assert report.succeeded
        assert not report.launched

    def test_development_placeholder(self, tmp_path):
        runner = FakeRunner()
        orchestrator = BenchmarkOrchestrator(
            write_config(tmp_path, command=["unity", "-development", "{development}"]), run=runner
        )

        orchestrator.build_suite("Android")

        assert runner.calls == [["unity", "-development", "false"]]

    def test_failed_build_is_reported(self, tmp_path):
        spawned = []
        runner = FakeRunner(returncode=3, stderr="missing license")
        orchestrator = BenchmarkOrchestrator(
            write_config(tmp_path, command=BUILD_COMMAND), run=runner, spawn=lambda argv: spawned.append(argv)
        )

        report = orchestrator.package_build("StandaloneLinux64", ["scenes/island"])

        assert not report.succeeded
        assert report.return_code == 3
        assert "missing license" in report.log_tail
        assert spawned == []

    def test_unknown_target(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path, command=BUILD_COMMAND), run=FakeRunner())

        with pytest.raises(BuildError, match="Unknown build target"):
            orchestrator.package_build("Dreamcast", ["scenes/island"])

    def test_no_scenes(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path, command=BUILD_COMMAND), run=FakeRunner())

        with pytest.raises(BuildError):
            orchestrator.package_build("Android", [])

    def test_no_command_configured(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path), run=FakeRunner())

        with pytest.raises(BuildError, match="No build command"):
            orchestrator.build_suite("Android")

    def test_bad_placeholder(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path, command=["unity", "{platform}"]), run=FakeRunner())

        with pytest.raises(BuildError, match="placeholder"):
            orchestrator.build_suite("Android")

    def test_build_tool_missing(self, tmp_path):
        def missing(argv, **kwargs):
            raise FileNotFoundError(argv[0])

        orchestrator = BenchmarkOrchestrator(write_config(tmp_path, command=BUILD_COMMAND), run=missing)

        with pytest.raises(BuildError, match="Failed to start build"):
            orchestrator.build_suite("Android")


class TestLaunchInteractive:
    def test_launches_with_settings(self, tmp_path):
        spawned = []
        orchestrator = BenchmarkOrchestrator(
            write_config(tmp_path, run_command=["unity", "-settings", "{settings}"]),
            spawn=lambda argv: spawned.append(argv) or "process",
        )

        process = orchestrator.launch_interactive(1)

        assert process == "process"
        assert spawned == [["unity", "-settings", str(orchestrator.launch_settings_path)]]
        assert json.loads(orchestrator.launch_settings_path.read_text())["simpleRunScene"] == 1

    def test_no_run_command(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path))

        with pytest.raises(LaunchError):
            orchestrator.launch_interactive()

    def test_spawn_failure(self, tmp_path):
        def broken(argv):
            raise PermissionError("not executable")

        orchestrator = BenchmarkOrchestrator(write_config(tmp_path, run_command=["unity"]), spawn=broken)

        with pytest.raises(LaunchError, match="Failed to launch"):
            orchestrator.launch_interactive()

    def test_invalid_scene(self, tmp_path):
        orchestrator = BenchmarkOrchestrator(write_config(tmp_path, run_command=["unity"]))

        with pytest.raises(IndexError):
            orchestrator.launch_interactive(5)

"""Launching benchmark runs and packaging benchmark builds.

The engine itself is driven through command templates from the ``build``
section of the configuration. Each template argument may reference
``{target}``, ``{output}``, ``{scenes}`` (comma separated), ``{settings}``
(the launch settings handoff file) and ``{development}`` (``true`` or
``false``). With ``build.auto_run`` set, a successful desktop build is
started right away.
"""

from __future__ import annotations

import json
import subprocess
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Sequence

from app.results.result_files import result_file_name
from configs.settings import AppConfig
from configs.validator import BUILD_TARGETS
from exceptions import BuildError, LaunchError
from log_config.logger import get_logger

logger = get_logger(__name__)

# Executable extension per build target; everything else has none
TARGET_EXTENSIONS = {"Android": ".apk"}

# Targets whose player can be started on the build machine
LOCAL_TARGETS = ("StandaloneWindows64", "StandaloneOSX", "StandaloneLinux64")


@dataclass(frozen=True)
class BuildReport:
    """Outcome of a packaged benchmark build."""

    succeeded: bool
    output_path: Path
    target: str
    scenes: tuple[str, ...]
    return_code: Optional[int] = None
    duration_s: float = 0.0
    log_tail: str = ""
    launched: bool = False


class BenchmarkOrchestrator:
    """Starts benchmark runs in the editor or as packaged builds."""

    def __init__(
        self,
        config: AppConfig,
        run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        spawn: Callable[..., subprocess.Popen] = subprocess.Popen,
    ):
        self.config = config
        self._run = run
        self._spawn = spawn

    @property
    def launch_settings_path(self) -> Path:
        return Path(self.config.benchmark.launch_settings)

    def suite_scenes(self) -> list[str]:
        """Scenes of a full-suite build: the benchmark menu, then every suite scene."""
        bench = self.config.benchmark
        return [bench.menu_scene] + [entry.scene for entry in bench.suite]

    def single_scene_list(self, index: int) -> list[str]:
        """Scenes of a single-benchmark build: the loader and the chosen scene."""
        bench = self.config.benchmark
        if not 0 <= index < len(bench.suite):
            raise IndexError(f"Benchmark index {index} out of range (0..{len(bench.suite) - 1})")
        return [bench.loader_scene, bench.suite[index].scene]

    def output_path(self, target: str) -> Path:
        build = self.config.build
        ext = TARGET_EXTENSIONS.get(target, "")
        return Path(build.output_root) / target / f"{build.product_name}{ext}"

    def expected_result_path(self, benchmark_name: str, timestamp: datetime) -> Path:
        """Where a run of the named benchmark finishing at timestamp writes its results."""
        return self.config.results_dir / result_file_name(benchmark_name, timestamp)

    def write_launch_settings(self, scene_index: Optional[int]) -> Path:
        """Tell the benchmark player whether to run one scene or the whole suite.

        Args:
            scene_index: Suite index for a single-scene run, None for the full suite

        Returns:
            Path of the written settings file
        """
        settings = {
            "simpleRun": scene_index is not None,
            "simpleRunScene": scene_index if scene_index is not None else -1,
            "resultsDirectory": str(self.config.results_dir),
        }
        path = self.launch_settings_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(settings, indent=2))
        logger.debug(f"Wrote launch settings to {path}: {settings}")
        return path

    def _format_command(self, template: Sequence[str], target: str, scenes: Sequence[str]) -> list[str]:
        values = {
            "target": target,
            "output": str(self.output_path(target)),
            "scenes": ",".join(scenes),
            "settings": str(self.launch_settings_path),
            "development": "true" if self.config.build.development else "false",
        }
        try:
            return [arg.format(**values) for arg in template]
        except (KeyError, IndexError) as e:
            raise BuildError(f"Unknown placeholder in command template: {e}") from e

    def launch_interactive(self, scene_selector: Optional[int] = None) -> subprocess.Popen:
        """Start an interactive benchmark run.

        Args:
            scene_selector: Suite index to run a single scene, None for the full suite

        Returns:
            The started process

        Raises:
            LaunchError: If no run command is configured or it cannot be started
        """
        if scene_selector is not None:
            self.single_scene_list(scene_selector)

        template = self.config.build.run_command
        if not template:
            raise LaunchError("No run command configured (build.run_command)")

        self.write_launch_settings(scene_selector)
        target = self.config.build.default_target
        try:
            argv = self._format_command(template, target, [self.config.benchmark.loader_scene])
        except BuildError as e:
            raise LaunchError(str(e)) from e

        what = "full suite" if scene_selector is None else self.config.benchmark.suite[scene_selector].name
        logger.info(f"Launching interactive benchmark run ({what})")
        try:
            return self._spawn(argv)
        except OSError as e:
            logger.error(f"Failed to launch benchmark: {e}")
            raise LaunchError(f"Failed to launch benchmark: {e}") from e

    def package_build(self, platform: str, scene_list: Sequence[str]) -> BuildReport:
        """Package a benchmark build for a target platform.

        Args:
            platform: Build target name
            scene_list: Scenes to include, in load order

        Returns:
            BuildReport with the outcome and output path

        Raises:
            BuildError: If the target is unknown, no build command is
                configured, or the build tool cannot be started
        """
        if platform not in BUILD_TARGETS:
            raise BuildError(f"Unknown build target: {platform}")
        if not scene_list:
            raise BuildError("Cannot build without scenes")

        template = self.config.build.command
        if not template:
            raise BuildError("No build command configured (build.command)")

        argv = self._format_command(template, platform, scene_list)
        output = self.output_path(platform)
        output.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Building benchmark for {platform} with {len(scene_list)} scenes -> {output}")
        start = time.perf_counter()
        try:
            completed = self._run(argv, capture_output=True, text=True, check=False)
        except OSError as e:
            logger.error(f"Failed to start build: {e}")
            raise BuildError(f"Failed to start build: {e}") from e
        duration = time.perf_counter() - start

        log_tail = "\n".join((completed.stdout or "").splitlines()[-20:] + (completed.stderr or "").splitlines()[-20:])
        succeeded = completed.returncode == 0
        if succeeded:
            logger.info(f"Benchmark Build Complete ({duration:.1f}s)")
        else:
            logger.error(f"Benchmark Build Failed (exit code {completed.returncode})")

        launched = False
        if succeeded and self.config.build.auto_run and platform in LOCAL_TARGETS:
            launched = self._auto_run(output)

        return BuildReport(
            succeeded=succeeded,
            output_path=output,
            target=platform,
            scenes=tuple(scene_list),
            return_code=completed.returncode,
            duration_s=duration,
            log_tail=log_tail,
            launched=launched,
        )

    def _auto_run(self, player: Path) -> bool:
        try:
            self._spawn([str(player)])
        except OSError as e:
            logger.warning(f"Build succeeded but the player could not be started: {e}")
            return False
        logger.info(f"Started benchmark player {player}")
        return True

    def build_suite(self, platform: str) -> BuildReport:
        self.write_launch_settings(None)
        return self.package_build(platform, self.suite_scenes())

    def build_scene(self, platform: str, index: int) -> BuildReport:
        scenes = self.single_scene_list(index)
        self.write_launch_settings(index)
        return self.package_build(platform, scenes)


__all__ = ["BenchmarkOrchestrator", "BuildReport", "LOCAL_TARGETS", "TARGET_EXTENSIONS"]

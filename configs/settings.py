"""Configuration loading for the benchmark tool."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml

from configs.validator import validate_config
from exceptions import ConfigError, InvalidConfigError
from log_config.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


@dataclass(frozen=True)
class SuiteEntry:
    name: str
    scene: str


@dataclass(frozen=True)
class BenchmarkSettings:
    loader_scene: str
    menu_scene: str
    launch_settings: str  # handoff file read by the benchmark player
    suite: Tuple[SuiteEntry, ...]

    def suite_names(self) -> list[str]:
        return [entry.name for entry in self.suite]


@dataclass(frozen=True)
class ResultsConfig:
    directory: str


@dataclass(frozen=True)
class BuildConfig:
    output_root: str
    product_name: str
    default_target: str
    development: bool
    auto_run: bool
    command: Tuple[str, ...]  # argv template for packaging a build
    run_command: Tuple[str, ...]  # argv template for an interactive run


@dataclass(frozen=True)
class ViewerConfig:
    gridlines: int
    padding_px: float
    label_gutter_px: float
    graph_height_px: int


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    directory: Optional[str]  # None logs to the console only


@dataclass(frozen=True)
class AppConfig:
    benchmark: BenchmarkSettings
    results: ResultsConfig
    build: BuildConfig
    viewer: ViewerConfig
    logging: LoggingConfig

    @property
    def results_dir(self) -> Path:
        return Path(self.results.directory)

    @property
    def log_dir(self) -> Optional[Path]:
        return Path(self.logging.directory) if self.logging.directory else None


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    try:
        logger.info(f"Loading configuration from {path}")
        if not path.exists():
            raise InvalidConfigError(f"Configuration file not found: {path}")

        data = yaml.safe_load(path.read_text())
        if not isinstance(data, dict):
            raise InvalidConfigError(f"Configuration file is empty or not a mapping: {path}")

        validate_config(data)

    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise InvalidConfigError(f"Failed to parse configuration file: {e}")

    try:
        bench = data["benchmark"]
        benchmark = BenchmarkSettings(
            loader_scene=bench["loader_scene"],
            menu_scene=bench["menu_scene"],
            launch_settings=bench["launch_settings"],
            suite=tuple(SuiteEntry(name=e["name"], scene=e["scene"]) for e in bench["suite"]),
        )
        results = ResultsConfig(**data["results"])
        build_data = data["build"]
        build = BuildConfig(
            output_root=build_data["output_root"],
            product_name=build_data["product_name"],
            default_target=build_data["default_target"],
            development=build_data["development"],
            auto_run=build_data["auto_run"],
            command=tuple(build_data["command"]),
            run_command=tuple(build_data["run_command"]),
        )
        viewer = ViewerConfig(**data["viewer"])
        logging_config = LoggingConfig(**data["logging"])

        config = AppConfig(
            benchmark=benchmark,
            results=results,
            build=build,
            viewer=viewer,
            logging=logging_config,
        )
        logger.info(
            f"Configuration loaded successfully: {len(benchmark.suite)} benchmarks, results in {results.directory}"
        )
        return config

    except (KeyError, TypeError) as e:
        logger.error(f"Failed to construct configuration objects: {e}")
        raise InvalidConfigError(f"Failed to construct configuration: {e}")


__all__ = [
    "AppConfig",
    "BenchmarkSettings",
    "BuildConfig",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "LoggingConfig",
    "ResultsConfig",
    "SuiteEntry",
    "ViewerConfig",
    "load_config",
]

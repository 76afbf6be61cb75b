from pathlib import Path

import pytest

from configs.settings import load_config
from configs.validator import validate_config
from exceptions import ConfigError, ConfigValidationError, InvalidConfigError

DEFAULT_CONFIG = Path(__file__).parent.parent / "configs" / "default.yaml"

MINIMAL = """
benchmark:
  suite:
    - name: Only
      scene: scenes/only
"""


def test_load_config() -> None:
    config = load_config(DEFAULT_CONFIG)

    assert config.benchmark.suite_names() == ["Island Flythrough", "Race Start", "Storm"]
    assert config.benchmark.loader_scene == "scenes/benchmark/loader"
    assert config.results_dir == Path("results")
    assert config.build.default_target == "StandaloneLinux64"
    assert config.build.command == ()
    assert config.viewer.gridlines == 5
    assert config.viewer.padding_px == 20
    assert config.viewer.label_gutter_px == 40
    assert config.logging.level == "INFO"
    assert config.log_dir == Path("logs")


def test_console_only_logging(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(MINIMAL + "logging:\n  directory: null\n")

    assert load_config(path).log_dir is None


def test_defaults_filled_in(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(MINIMAL)

    config = load_config(path)

    assert config.benchmark.menu_scene == "scenes/menu_benchmark"
    assert config.benchmark.launch_settings == "benchmark_settings.json"
    assert config.results.directory == "results"
    assert config.build.product_name == "Benchmark"
    assert config.build.development is True
    assert config.viewer.graph_height_px == 500


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")

    with pytest.raises(InvalidConfigError):
        load_config(path)


def test_malformed_yaml(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("benchmark: [unclosed")

    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"benchmark": {"suite": []}},
        {"benchmark": {"suite": [{"name": "No scene"}]}},
        {"benchmark": {"suite": [{"name": "A", "scene": "a"}]}, "build": {"default_target": "Dreamcast"}},
        {"benchmark": {"suite": [{"name": "A", "scene": "a"}]}, "viewer": {"gridlines": 1}},
    ],
)
def test_invalid_config_rejected(data) -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        validate_config(data)

    assert excinfo.value.validation_errors


def test_validate_config_fills_defaults() -> None:
    data = {"benchmark": {"suite": [{"name": "A", "scene": "a"}]}}

    validate_config(data)

    assert data["viewer"]["gridlines"] == 5
    assert data["build"]["run_command"] == []
    assert data["results"] == {"directory": "results"}


def test_validation_errors_name_the_setting() -> None:
    data = {"benchmark": {"suite": [{"name": "A", "scene": "a"}, {"name": "No scene"}]}}

    with pytest.raises(ConfigValidationError) as excinfo:
        validate_config(data)

    assert excinfo.value.validation_errors == ["benchmark.suite[1]: 'scene' is a required property"]

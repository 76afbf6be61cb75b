"""Configuration validation using JSON Schema."""

from __future__ import annotations

import copy
from typing import Any, Dict

import jsonschema
from jsonschema import Draft7Validator, validators

from exceptions import ConfigValidationError
from log_config.logger import get_logger

logger = get_logger(__name__)

BUILD_TARGETS = (
    "StandaloneWindows64",
    "StandaloneOSX",
    "StandaloneLinux64",
    "Android",
    "iOS",
)

_ARGV = {"type": "array", "items": {"type": "string"}, "default": []}

# JSON Schema for default.yaml configuration
CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["benchmark"],
    "properties": {
        "benchmark": {
            "type": "object",
            "required": ["suite"],
            "properties": {
                "loader_scene": {"type": "string", "default": "scenes/benchmark/loader"},
                "menu_scene": {"type": "string", "default": "scenes/menu_benchmark"},
                "launch_settings": {"type": "string", "default": "benchmark_settings.json"},
                "suite": {
                    "type": "array",
                    "minItems": 1,
                    "items": {
                        "type": "object",
                        "required": ["name", "scene"],
                        "properties": {
                            "name": {"type": "string", "minLength": 1},
                            "scene": {"type": "string", "minLength": 1},
                        },
                    },
                },
            },
        },
        "results": {
            "type": "object",
            "default": {},
            "properties": {
                "directory": {"type": "string", "default": "results"},
            },
        },
        "build": {
            "type": "object",
            "default": {},
            "properties": {
                "output_root": {"type": "string", "default": "Builds/Benchmark"},
                "product_name": {"type": "string", "minLength": 1, "default": "Benchmark"},
                "default_target": {"type": "string", "enum": list(BUILD_TARGETS), "default": "StandaloneLinux64"},
                "development": {"type": "boolean", "default": True},
                "auto_run": {"type": "boolean", "default": True},
                "command": _ARGV,
                "run_command": _ARGV,
            },
        },
        "viewer": {
            "type": "object",
            "default": {},
            "properties": {
                "gridlines": {"type": "integer", "minimum": 2, "maximum": 20, "default": 5},
                "padding_px": {"type": "number", "minimum": 0, "default": 20},
                "label_gutter_px": {"type": "number", "minimum": 0, "default": 40},
                "graph_height_px": {"type": "integer", "minimum": 100, "maximum": 2000, "default": 500},
            },
        },
        "logging": {
            "type": "object",
            "default": {},
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
                    "default": "INFO",
                },
                "directory": {"type": ["string", "null"], "default": "logs"},
            },
        },
    },
}


def extend_with_default(validator_class):
    """Extend a validator so it fills in schema defaults while validating."""
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        if isinstance(instance, dict):
            for prop, subschema in properties.items():
                if "default" in subschema:
                    instance.setdefault(prop, copy.deepcopy(subschema["default"]))

        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultValidatingValidator = extend_with_default(Draft7Validator)


def _config_location(path) -> str:
    """Render an error path the way it reads in default.yaml, e.g. ``benchmark.suite[1].scene``."""
    location = ""
    for part in path:
        location += f"[{part}]" if isinstance(part, int) else (f".{part}" if location else str(part))
    return location or "<root>"


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration against JSON Schema, filling in defaults.

    Args:
        config: Configuration dictionary (updated in place with defaults)

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    try:
        errors = sorted(
            DefaultValidatingValidator(CONFIG_SCHEMA).iter_errors(config),
            key=lambda error: _config_location(error.path),
        )
    except jsonschema.exceptions.SchemaError as e:
        raise ConfigValidationError(f"Invalid schema definition: {e}")

    if not errors:
        logger.debug("Configuration validation passed")
        return

    messages = [f"{_config_location(error.path)}: {error.message}" for error in errors]
    for message in messages:
        logger.error(f"Invalid configuration: {message}")
    raise ConfigValidationError(
        f"Invalid configuration ({len(messages)} problem(s)): {messages[0]}",
        validation_errors=messages,
    )


__all__ = ["BUILD_TARGETS", "CONFIG_SCHEMA", "DefaultValidatingValidator", "validate_config"]

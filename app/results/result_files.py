"""Reading and writing benchmark result files.

A result file is JSON holding one or more named tests, each with the raw
per-frame samples of every run::

    {"perfStats": [{"info": {"benchmark_name": "...", ...},
                    "frames": 2000,
                    "runData": [{"runTime": 31.2, "rawSamples": [16.6, ...]}]}]}

Files written by this tool wrap that document in a version envelope (see
``contracts.versioning``); both forms are accepted on read.
"""

from __future__ import annotations

import json
import math
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from contracts import PerfBasic, PerfResults, RunData, TestInfo
from contracts.versioning import make_envelope, unwrap_envelope
from exceptions import DataIntegrityError, ParseError
from log_config.logger import get_logger

logger = get_logger(__name__)

RESULT_SUFFIX = ".json"

RESULT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["perfStats"],
    "properties": {
        "perfStats": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["frames", "runData"],
                "properties": {
                    "info": {
                        "type": "object",
                        "additionalProperties": {"type": ["string", "number", "boolean", "null"]},
                    },
                    "frames": {"type": "integer", "minimum": 1},
                    "runData": {
                        "type": "array",
                        "minItems": 1,
                        "items": {
                            "type": "object",
                            "required": ["runTime", "rawSamples"],
                            "properties": {
                                "runTime": {"type": "number", "minimum": 0},
                                "rawSamples": {
                                    "type": "array",
                                    "minItems": 1,
                                    "items": {"type": "number", "minimum": 0},
                                },
                            },
                        },
                    },
                },
            },
        },
    },
}

_validator = Draft7Validator(RESULT_SCHEMA)


def list_result_files(results_dir: Path) -> list[Path]:
    """List result files in a directory, sorted by file name.

    Args:
        results_dir: Directory benchmark runs write their results to

    Returns:
        Sorted list of result file paths (empty if the directory is missing)
    """
    if not results_dir.exists():
        logger.warning(f"Results directory does not exist: {results_dir}")
        return []

    files = [p for p in results_dir.iterdir() if p.is_file() and p.suffix == RESULT_SUFFIX]
    files.sort(key=lambda p: p.name)
    logger.debug(f"Found {len(files)} result files in {results_dir}")
    return files


def _validate(data: Any, path: Path) -> None:
    error = best_match(_validator.iter_errors(data))
    if error is not None:
        location = "/".join(str(p) for p in error.path) or "<root>"
        raise ParseError(f"{path.name}: {location}: {error.message}", path=path)


def _reject_constant(name: str) -> None:
    raise ValueError(f"non-finite number {name} is not allowed")


def _finite(value: Any, field: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise DataIntegrityError(f"{field} must be finite, got {number}")
    return number


def _build_perf_basic(entry: Dict[str, Any]) -> PerfBasic:
    runs = tuple(
        RunData(
            raw_samples=tuple(_finite(v, "rawSamples") for v in run["rawSamples"]),
            run_time=_finite(run["runTime"], "runTime"),
        )
        for run in entry["runData"]
    )
    return PerfBasic(
        info=TestInfo.from_dict(entry.get("info") or {}),
        frames=int(entry["frames"]),
        run_data=runs,
    )


def parse_result_file(path: Path) -> PerfResults:
    """Parse a result file.

    Args:
        path: Result file to read

    Returns:
        Parsed results, one PerfBasic per test in the file

    Raises:
        ParseError: If the file cannot be read, is not valid JSON, does not
            match the result schema, holds a non-finite number, or its runs
            differ in length
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"), parse_constant=_reject_constant)
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read {path.name}: {e}", path=path) from e
    except ValueError as e:
        raise ParseError(f"{path.name} is not valid JSON: {e}", path=path) from e

    if isinstance(data, dict):
        data = unwrap_envelope(data)
    _validate(data, path)

    try:
        stats = tuple(_build_perf_basic(entry) for entry in data["perfStats"])
    except DataIntegrityError as e:
        raise ParseError(f"{path.name}: {e}", path=path) from e

    return PerfResults(file_name=path.name, perf_stats=stats)


def results_to_dict(results: PerfResults) -> Dict[str, Any]:
    return {
        "perfStats": [
            {
                "info": perf.info.to_dict(),
                "frames": perf.frames,
                "runData": [
                    {"runTime": run.run_time, "rawSamples": list(run.raw_samples)}
                    for run in perf.run_data
                ],
            }
            for perf in results.perf_stats
        ]
    }


def write_result_file(results: PerfResults, path: Path) -> Path:
    """Write results to disk in the versioned result format."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(make_envelope(results_to_dict(results)), indent=2), encoding="utf-8")
    logger.info(f"Results saved to: {path}")
    return path


def result_file_name(benchmark_name: str, timestamp: datetime) -> str:
    """File name a completed benchmark run writes its results to."""
    slug = re.sub(r"[^A-Za-z0-9]+", "_", benchmark_name).strip("_") or "benchmark"
    return f"{slug}_{timestamp.strftime('%Y%m%d_%H%M%S')}{RESULT_SUFFIX}"

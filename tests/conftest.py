"""Shared fixtures for benchmark tool tests."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Sequence

import pytest

# Qt widgets render without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from contracts import PerfBasic, PerfResults, RunData, TestInfo


def make_run(samples: Sequence[float], run_time: float = 1.0) -> RunData:
    return RunData(raw_samples=tuple(float(s) for s in samples), run_time=run_time)


def make_perf(runs: Sequence[Sequence[float]], frames: int | None = None, name: str = "Island") -> PerfBasic:
    run_data = tuple(make_run(samples, run_time=float(i + 1)) for i, samples in enumerate(runs))
    return PerfBasic(
        info=TestInfo(benchmark_name=name, scene=f"scenes/{name.lower()}", platform="Linux"),
        frames=frames if frames is not None else len(runs[0]),
        run_data=run_data,
    )


def raw_result(runs: Sequence[Sequence[float]], frames: int | None = None, name: str = "Island") -> dict:
    """Result document as the benchmark player writes it."""
    return {
        "perfStats": [
            {
                "info": {"benchmark_name": name, "platform": "Linux", "gpu": "Test GPU"},
                "frames": frames if frames is not None else len(runs[0]),
                "runData": [
                    {"runTime": 10.0 + i, "rawSamples": list(samples)} for i, samples in enumerate(runs)
                ],
            }
        ]
    }


@pytest.fixture
def results_dir(tmp_path: Path) -> Path:
    path = tmp_path / "results"
    path.mkdir()
    return path


@pytest.fixture
def write_result(results_dir: Path):
    """Write a raw result document (dict) or text into the results directory."""

    def _write(name: str, content) -> Path:
        path = results_dir / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_results() -> PerfResults:
    return PerfResults(file_name="sample.json", perf_stats=(make_perf([[10, 20, 30], [20, 20, 20]]),))

"""Shared data contracts for benchmark results."""

from .types import (
    INFO_FIELDS,
    FrameSample,
    PerfBasic,
    PerfResults,
    RunData,
    Selection,
    TestInfo,
    split_columns,
)

__all__ = [
    "INFO_FIELDS",
    "FrameSample",
    "PerfBasic",
    "PerfResults",
    "RunData",
    "Selection",
    "TestInfo",
    "split_columns",
]

"""Custom exception classes for the benchmark tool."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class BenchmarkToolError(Exception):
    """Base exception for all benchmark tool errors."""

    pass


class ParseError(BenchmarkToolError):
    """Raised when a result file is malformed or unreadable."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class DataIntegrityError(BenchmarkToolError):
    """Base exception for benchmark data that violates an invariant."""

    pass


class EmptyRunError(DataIntegrityError):
    """Raised when a run has no recorded samples."""

    pass


class DegenerateSeriesError(DataIntegrityError):
    """Raised when a series has no horizontal span to plot against."""

    pass


class RunLengthMismatchError(DataIntegrityError):
    """Raised when runs of the same test differ in sample count."""

    def __init__(self, message: str, lengths: Optional[list[int]] = None):
        self.lengths = lengths or []
        super().__init__(message)


class NotLoadedError(BenchmarkToolError):
    """Raised when results are queried before any successful load."""

    pass


class ConfigError(BenchmarkToolError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigError):
    """Raised when configuration file is invalid or corrupted."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        self.validation_errors = validation_errors or []
        super().__init__(message)


class OrchestrationError(BenchmarkToolError):
    """Base exception for build and launch errors."""

    pass


class BuildError(OrchestrationError):
    """Raised when a benchmark build cannot be started."""

    pass


class LaunchError(OrchestrationError):
    """Raised when an interactive benchmark run cannot be started."""

    pass

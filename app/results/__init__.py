"""Loading, selecting and summarizing recorded benchmark results."""

from .result_files import list_result_files, parse_result_file, result_file_name, write_result_file
from .series import SeriesStats, SeriesView, compute_series_to_render, format_summary, series_for_view
from .store import BenchmarkResultStore, NoData, ResultView, SkippedFile

__all__ = [
    "BenchmarkResultStore",
    "NoData",
    "ResultView",
    "SeriesStats",
    "SeriesView",
    "SkippedFile",
    "compute_series_to_render",
    "format_summary",
    "list_result_files",
    "parse_result_file",
    "result_file_name",
    "series_for_view",
    "write_result_file",
]

"""In-memory store of loaded benchmark result files."""

from __future__ import annotations

import time
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from app.results.result_files import list_result_files, parse_result_file
from contracts import PerfBasic, PerfResults, RunData, Selection
from exceptions import NotLoadedError, ParseError
from log_config.logger import get_logger, log_performance
from metrics.aggregate import AggregateRun, aggregate

logger = get_logger(__name__)

NO_DATA_MESSAGE = "No Stats found, please run a benchmark."


@dataclass(frozen=True)
class SkippedFile:
    path: Path
    reason: str


@dataclass(frozen=True)
class NoData:
    """Selection result when no benchmark results exist."""

    message: str = NO_DATA_MESSAGE


@dataclass(frozen=True)
class ResultView:
    """A resolved selection: one file, one test and optionally one run.

    Attributes:
        results: The selected result file
        perf: The selected test within the file
        run_index: Zero-based run index, or None for the average of all runs
    """

    results: PerfResults
    perf: PerfBasic
    run_index: Optional[int]

    @property
    def run(self) -> Optional[RunData]:
        if self.run_index is None:
            return None
        return self.perf.run_data[self.run_index]

    @property
    def is_aggregate(self) -> bool:
        return self.run_index is None

    @cached_property
    def aggregate(self) -> AggregateRun:
        return aggregate(self.perf.run_data)


Lister = Callable[[Path], Sequence[Path]]
Parser = Callable[[Path], PerfResults]


class BenchmarkResultStore:
    """Loads result files and resolves viewer selections against them.

    The loaded set is replaced as a whole on every ``load_all``; views handed
    out earlier keep referring to the set they came from.
    """

    def __init__(
        self,
        results_dir: Path,
        lister: Lister = list_result_files,
        parser: Parser = parse_result_file,
    ):
        self.results_dir = Path(results_dir)
        self._lister = lister
        self._parser = parser
        self._results: Optional[tuple[PerfResults, ...]] = None
        self._skipped: tuple[SkippedFile, ...] = ()

    @property
    def is_loaded(self) -> bool:
        return self._results is not None

    @property
    def results(self) -> tuple[PerfResults, ...]:
        if self._results is None:
            raise NotLoadedError("Benchmark results have not been loaded yet")
        return self._results

    @property
    def skipped_files(self) -> tuple[SkippedFile, ...]:
        return self._skipped

    @property
    def skipped_count(self) -> int:
        return len(self._skipped)

    def load_all(self) -> tuple[PerfResults, ...]:
        """Scan the results directory and parse every result file.

        Malformed files are skipped and reported through ``skipped_files``.

        Returns:
            Loaded results sorted by file name (possibly empty)
        """
        start = time.perf_counter()
        loaded: list[PerfResults] = []
        skipped: list[SkippedFile] = []

        for path in self._lister(self.results_dir):
            try:
                loaded.append(self._parser(path))
            except ParseError as e:
                logger.warning(f"Skipping result file {path.name}: {e}")
                skipped.append(SkippedFile(path=path, reason=str(e)))

        loaded.sort(key=lambda r: r.file_name)

        self._results = tuple(loaded)
        self._skipped = tuple(skipped)

        log_performance("load benchmark results", (time.perf_counter() - start) * 1000.0)
        logger.info(f"Loaded {len(loaded)} result files from {self.results_dir} ({len(skipped)} skipped)")
        return self._results

    def file_names(self) -> list[str]:
        return [r.file_name for r in self.results]

    def index_of(self, file_name: Optional[str]) -> Optional[int]:
        """Position of a file in the loaded set, or None if it is not loaded."""
        if file_name is None:
            return None
        for index, name in enumerate(self.file_names()):
            if name == file_name:
                return index
        return None

    def select(
        self,
        file_index: int = 0,
        test_index: int = 0,
        run_index: Optional[int] = None,
    ) -> Union[ResultView, NoData]:
        """Resolve a selection against the loaded results.

        Args:
            file_index: Index into the loaded files
            test_index: Index of the test within the file
            run_index: Zero-based run, or None for the average of all runs

        Returns:
            The resolved view, or NoData if nothing has been recorded yet

        Raises:
            NotLoadedError: If load_all has not completed yet
            IndexError: If any index is out of range
        """
        results = self.results
        if not results:
            return NoData()

        file = _checked(results, file_index, "file")
        perf = _checked(file.perf_stats, test_index, "test")
        if run_index is not None:
            _checked(perf.run_data, run_index, "run")

        return ResultView(results=file, perf=perf, run_index=run_index)

    def select_view(self, selection: Selection) -> Union[ResultView, NoData]:
        return self.select(selection.file_index, selection.test_index, selection.run_index)


def _checked(items: Sequence, index: int, what: str):
    if not 0 <= index < len(items):
        raise IndexError(f"{what} index {index} out of range (0..{len(items) - 1})")
    return items[index]

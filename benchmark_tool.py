#!/usr/bin/env python3
"""Benchmark tool launcher.

Usage:
    python benchmark_tool.py view                 # Open the benchmark window
    python benchmark_tool.py summary              # Print statistics of every result file
    python benchmark_tool.py summary --file NAME --run 2
    python benchmark_tool.py build --target Android --scene 0
    python benchmark_tool.py run                  # Run the full suite interactively
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from app.results.series import compute_series_to_render, format_summary
from app.results.store import BenchmarkResultStore, NoData
from benchmarks.orchestrator import BenchmarkOrchestrator
from configs.settings import DEFAULT_CONFIG_PATH, AppConfig, load_config
from configs.validator import BUILD_TARGETS
from contracts import Selection
from exceptions import BenchmarkToolError, DataIntegrityError
from log_config.logger import configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run benchmarks and inspect frame-time results.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Configuration file")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("view", help="Open the benchmark window")

    summary = sub.add_parser("summary", help="Print result statistics")
    summary.add_argument("--file", help="Result file name (default: all files)")
    summary.add_argument("--test", type=int, default=0, help="Test index within the file")
    summary.add_argument("--run", type=int, default=None, help="1-based run number (default: average of all runs)")

    build = sub.add_parser("build", help="Package a benchmark build")
    build.add_argument("--target", choices=BUILD_TARGETS, default=None)
    build.add_argument("--scene", type=int, default=None, help="Suite index (default: full suite)")

    run = sub.add_parser("run", help="Start an interactive benchmark run")
    run.add_argument("--scene", type=int, default=None, help="Suite index (default: full suite)")

    return parser.parse_args(argv)


def print_summary(config: AppConfig, file_name: Optional[str], test_index: int, run_number: Optional[int]) -> int:
    store = BenchmarkResultStore(config.results_dir)
    store.load_all()
    if store.skipped_count:
        print(f"Skipped {store.skipped_count} unreadable result file(s)")

    names = store.file_names()
    if not names:
        print(NoData().message)
        return 0

    if file_name is not None:
        index = store.index_of(file_name)
        if index is None:
            print(f"Result file not found: {file_name}")
            return 1
        indices = [index]
    else:
        indices = list(range(len(names)))

    run_index = run_number - 1 if run_number is not None else None
    for index in indices:
        print(f"\n{'='*60}")
        print(names[index])
        print(f"{'='*60}")
        selection = Selection(file_index=index, test_index=test_index, run_index=run_index)
        try:
            view = compute_series_to_render(store, selection)
        except DataIntegrityError as e:
            print(f"  Invalid data: {e}")
            continue
        except IndexError as e:
            print(f"  {e}")
            continue
        if isinstance(view, NoData):
            print(f"  {view.message}")
            continue
        for line in format_summary(view.stats):
            print(f"  {line}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config)
        configure_logging(config.logging.level, config.log_dir)

        if args.command == "view":
            from PySide6 import QtWidgets

            from ui.benchmark_window import BenchmarkWindow

            app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv[:1])
            window = BenchmarkWindow(config)
            window.show()
            return app.exec()

        if args.command == "summary":
            return print_summary(config, args.file, args.test, args.run)

        orchestrator = BenchmarkOrchestrator(config)
        if args.command == "build":
            target = args.target or config.build.default_target
            if args.scene is None:
                report = orchestrator.build_suite(target)
            else:
                report = orchestrator.build_scene(target, args.scene)
            status = "succeeded" if report.succeeded else "failed"
            print(f"Build {status}: {report.output_path}")
            return 0 if report.succeeded else 1

        if args.command == "run":
            orchestrator.launch_interactive(args.scene)
            print("Benchmark started; results will appear in " + str(config.results_dir))
            return 0

    except (BenchmarkToolError, IndexError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 2


if __name__ == "__main__":
    sys.exit(main())

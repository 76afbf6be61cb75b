"""Benchmark window: launch benchmark runs and browse their results."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6 import QtCore, QtWidgets

from app.results.series import compute_series_to_render, format_summary
from app.results.store import BenchmarkResultStore, NoData
from benchmarks.orchestrator import BenchmarkOrchestrator, BuildReport
from configs.app_state import ViewerState, load_state, save_state
from configs.settings import AppConfig
from configs.validator import BUILD_TARGETS
from contracts import Selection, split_columns
from exceptions import DataIntegrityError, OrchestrationError
from log_config.logger import get_logger
from ui.graph_render import GraphStyle, render_selection
from ui.widgets import FrameTimeGraph

logger = get_logger(__name__)


class BenchmarkWindow(QtWidgets.QMainWindow):
    """Two-tab benchmark window.

    Tools: build or run the benchmark suite or a single benchmark scene.
    Results: pick a result file, inspect the test info and plot the frame
    times of one run or the average of all runs.
    """

    def __init__(
        self,
        config: AppConfig,
        store: Optional[BenchmarkResultStore] = None,
        orchestrator: Optional[BenchmarkOrchestrator] = None,
        state_root: Optional[Path] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Benchmark")
        self.resize(900, 900)

        self._config = config
        self._store = store or BenchmarkResultStore(config.results_dir)
        self._orchestrator = orchestrator or BenchmarkOrchestrator(config)
        self._state_root = state_root
        self._state = load_state(state_root)
        self._style = GraphStyle(
            gridline_count=config.viewer.gridlines,
            padding_px=config.viewer.padding_px,
            label_gutter_px=config.viewer.label_gutter_px,
        )
        self._selection = Selection()

        self._build_ui()
        self.reload_results()

        logger.info("BenchmarkWindow initialized")

    # ------------------------------------------------------------------ layout

    def _build_ui(self) -> None:
        tabs = QtWidgets.QTabWidget()
        tabs.addTab(self._build_tools_tab(), "Tools")
        tabs.addTab(self._build_results_tab(), "Results")
        self.setCentralWidget(tabs)
        self._tabs = tabs

        self._status_bar = QtWidgets.QStatusBar()
        self.setStatusBar(self._status_bar)

    def _build_tools_tab(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(page)

        build_group = QtWidgets.QGroupBox("Build")
        build_layout = QtWidgets.QGridLayout(build_group)

        self._target_combo = QtWidgets.QComboBox()
        self._target_combo.addItems(list(BUILD_TARGETS))
        self._target_combo.setCurrentText(self._config.build.default_target)
        build_layout.addWidget(QtWidgets.QLabel("Target"), 0, 0)
        build_layout.addWidget(self._target_combo, 0, 1, 1, 3)

        build_layout.addWidget(QtWidgets.QLabel("Benchmark Suite"), 1, 0)
        suite_label = QtWidgets.QLabel(", ".join(self._config.benchmark.suite_names()))
        suite_label.setWordWrap(True)
        build_layout.addWidget(suite_label, 1, 1)
        self._suite_build_button = QtWidgets.QPushButton("Build && Run")
        self._suite_build_button.clicked.connect(self._build_suite)
        self._suite_run_button = QtWidgets.QPushButton("Run in Editor")
        self._suite_run_button.clicked.connect(lambda: self._run_interactive(None))
        build_layout.addWidget(self._suite_build_button, 1, 2)
        build_layout.addWidget(self._suite_run_button, 1, 3)

        build_layout.addWidget(QtWidgets.QLabel("Benchmark Scene"), 2, 0)
        self._scene_combo = QtWidgets.QComboBox()
        self._scene_combo.addItems(self._config.benchmark.suite_names())
        build_layout.addWidget(self._scene_combo, 2, 1)
        self._scene_build_button = QtWidgets.QPushButton("Build && Run")
        self._scene_build_button.clicked.connect(self._build_scene)
        self._scene_run_button = QtWidgets.QPushButton("Run in Editor")
        self._scene_run_button.clicked.connect(lambda: self._run_interactive(self._scene_combo.currentIndex()))
        build_layout.addWidget(self._scene_build_button, 2, 2)
        build_layout.addWidget(self._scene_run_button, 2, 3)

        layout.addWidget(build_group)

        settings_group = QtWidgets.QGroupBox("Benchmark Settings")
        settings_layout = QtWidgets.QFormLayout(settings_group)
        settings_layout.addRow("Results directory", QtWidgets.QLabel(str(self._config.results_dir)))
        settings_layout.addRow("Loader scene", QtWidgets.QLabel(self._config.benchmark.loader_scene))
        for entry in self._config.benchmark.suite:
            settings_layout.addRow(entry.name, QtWidgets.QLabel(entry.scene))
        layout.addWidget(settings_group)

        layout.addStretch(1)
        return page

    def _build_results_tab(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(page)

        file_row = QtWidgets.QHBoxLayout()
        file_row.addWidget(QtWidgets.QLabel("File"))
        self._file_combo = QtWidgets.QComboBox()
        self._file_combo.currentIndexChanged.connect(self._on_file_changed)
        file_row.addWidget(self._file_combo, 1)
        self._reload_button = QtWidgets.QPushButton("reload")
        self._reload_button.setFixedWidth(100)
        self._reload_button.clicked.connect(self.reload_results)
        file_row.addWidget(self._reload_button)
        layout.addLayout(file_row)

        self._load_status = QtWidgets.QLabel()
        layout.addWidget(self._load_status)

        self._info_group = QtWidgets.QGroupBox("Info")
        self._info_layout = QtWidgets.QGridLayout(self._info_group)
        layout.addWidget(self._info_group)

        data_group = QtWidgets.QGroupBox("Data")
        data_layout = QtWidgets.QVBoxLayout(data_group)

        selector_row = QtWidgets.QHBoxLayout()
        selector_row.addWidget(QtWidgets.QLabel("Test"))
        self._test_combo = QtWidgets.QComboBox()
        self._test_combo.currentIndexChanged.connect(self._on_test_changed)
        selector_row.addWidget(self._test_combo, 1)
        selector_row.addWidget(QtWidgets.QLabel("Display"))
        self._display_combo = QtWidgets.QComboBox()
        self._display_combo.currentIndexChanged.connect(self._on_display_changed)
        selector_row.addWidget(self._display_combo, 1)
        data_layout.addLayout(selector_row)

        self._graph = FrameTimeGraph(height=self._config.viewer.graph_height_px)
        data_layout.addWidget(self._graph)

        summary_row = QtWidgets.QHBoxLayout()
        self._summary_labels = [QtWidgets.QLabel() for _ in range(4)]
        for label in self._summary_labels:
            label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
            summary_row.addWidget(label)
        data_layout.addLayout(summary_row)

        layout.addWidget(data_group)
        layout.addStretch(1)
        return page

    # ----------------------------------------------------------------- results

    @property
    def selection(self) -> Selection:
        return self._selection

    def summary_texts(self) -> list[str]:
        return [label.text() for label in self._summary_labels]

    def reload_results(self) -> None:
        """Rescan the results directory and refresh the Results tab."""
        try:
            self._store.load_all()
        except OSError as e:
            # Previous result set stays loaded
            logger.error(f"Failed to load benchmark results: {e}")
            self._load_status.setText(f"Failed to load results, showing the previous set: {e}")
            self._status_bar.showMessage("Reload failed")
            return

        names = self._store.file_names()
        skipped = self._store.skipped_count
        self._load_status.setText(f"{skipped} result file(s) could not be read and were skipped." if skipped else "")

        restored = self._store.index_of(self._state.last_result_file)
        self._file_combo.blockSignals(True)
        self._file_combo.clear()
        self._file_combo.addItems(names)
        if names:
            self._file_combo.setCurrentIndex(restored if restored is not None else 0)
        self._file_combo.blockSignals(False)

        self._selection = Selection(file_index=max(self._file_combo.currentIndex(), 0))
        self._populate_tests()
        self._refresh_data()
        self._status_bar.showMessage(f"Loaded {len(names)} result file(s)")

    def _on_file_changed(self, index: int) -> None:
        if index < 0:
            return
        self._selection = Selection(file_index=index)
        self._state = ViewerState(last_result_file=self._file_combo.itemText(index))
        save_state(self._state, self._state_root)
        self._populate_tests()
        self._refresh_data()

    def _on_test_changed(self, index: int) -> None:
        if index < 0:
            return
        self._selection = Selection(file_index=self._selection.file_index, test_index=index)
        self._populate_runs()
        self._refresh_data()

    def _on_display_changed(self, index: int) -> None:
        if index < 0:
            return
        run_index = None if index == 0 else index - 1
        self._selection = Selection(
            file_index=self._selection.file_index,
            test_index=self._selection.test_index,
            run_index=run_index,
        )
        self._refresh_data()

    def _populate_tests(self) -> None:
        self._test_combo.blockSignals(True)
        self._test_combo.clear()
        view = self._store.select(self._selection.file_index) if self._store.file_names() else NoData()
        if not isinstance(view, NoData):
            for i, perf in enumerate(view.results.perf_stats):
                self._test_combo.addItem(perf.info.benchmark_name or f"Test {i + 1}")
        self._test_combo.blockSignals(False)
        self._populate_runs()

    def _populate_runs(self) -> None:
        self._display_combo.blockSignals(True)
        self._display_combo.clear()
        view = self._store.select_view(self._selection)
        if not isinstance(view, NoData):
            self._display_combo.addItems(view.perf.run_labels())
            self._show_info(view.perf.info.rows())
        else:
            self._show_info([])
        self._display_combo.blockSignals(False)

    def _show_info(self, rows: list[tuple[str, str]]) -> None:
        while self._info_layout.count():
            item = self._info_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        for column, column_rows in enumerate(split_columns(rows)):
            for row, (label, value) in enumerate(column_rows):
                self._info_layout.addWidget(QtWidgets.QLabel(label), row, column * 2)
                value_label = QtWidgets.QLabel(f"<b>{value}</b>")
                self._info_layout.addWidget(value_label, row, column * 2 + 1)

    def _refresh_data(self) -> None:
        selection = self._selection
        self._graph.set_source(
            lambda bounds: render_selection(self._store, selection, bounds, self._style)
        )

        try:
            view = compute_series_to_render(self._store, selection)
        except DataIntegrityError as e:
            self._set_summary([f"Invalid data: {e}", "", "", ""])
            return

        if isinstance(view, NoData):
            self._set_summary([view.message, "", "", ""])
        else:
            self._set_summary(format_summary(view.stats))

    def _set_summary(self, texts: list[str]) -> None:
        for label, text in zip(self._summary_labels, texts):
            label.setText(text)

    # ------------------------------------------------------------------- tools

    def _current_target(self) -> str:
        return self._target_combo.currentText()

    def _build_suite(self) -> None:
        self._run_build(lambda: self._orchestrator.build_suite(self._current_target()))

    def _build_scene(self) -> None:
        index = self._scene_combo.currentIndex()
        self._run_build(lambda: self._orchestrator.build_scene(self._current_target(), index))

    def _run_build(self, build) -> Optional[BuildReport]:
        self._status_bar.showMessage("Building benchmark...")
        QtWidgets.QApplication.processEvents()
        try:
            report = build()
        except OrchestrationError as e:
            QtWidgets.QMessageBox.warning(self, "Benchmark Build", str(e))
            self._status_bar.showMessage("Build not started")
            return None

        if report.succeeded:
            self._status_bar.showMessage(f"Benchmark Build Complete: {report.output_path}")
        else:
            self._status_bar.showMessage("Benchmark Build Failed")
            QtWidgets.QMessageBox.warning(
                self, "Benchmark Build", f"Build failed (exit code {report.return_code}).\n\n{report.log_tail}"
            )
        return report

    def _run_interactive(self, scene_index: Optional[int]) -> None:
        try:
            self._orchestrator.launch_interactive(scene_index)
        except OrchestrationError as e:
            QtWidgets.QMessageBox.warning(self, "Run Benchmark", str(e))
            return
        self._status_bar.showMessage("Benchmark started; reload results when it finishes")

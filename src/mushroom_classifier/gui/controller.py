# -*- coding: utf-8 -*-
"""Controller that connects the window to the analysis pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from mushroom_classifier.config import AppConfig
from mushroom_classifier.core import session
from mushroom_classifier.core.session import ResultView
from mushroom_classifier.core.state import AppState
from mushroom_classifier.gui.workers import ClassificationWorker
from mushroom_classifier.models.analysis_result import AnalysisResult, Failure
from mushroom_classifier.pipeline.analyzer import Analyzer

logger = logging.getLogger(__name__)


class AppController(QObject):
    """
    Owns the application state and the single background thread.
    Results come back through a queued signal, so the view is only
    touched on the UI thread.
    """

    result_ready = pyqtSignal(object)

    def __init__(
        self,
        config: AppConfig,
        view: ResultView,
        analyzer: Analyzer | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.config = config
        self.view = view
        self.analyzer = analyzer or Analyzer()
        self.state = AppState()
        self._thread: QThread | None = None
        self._worker: ClassificationWorker | None = None
        self._running: list[QThread] = []

    def select_image(self, path: str | Path) -> bool:
        return session.load_image(self.state, path, self.view)

    def classify(self) -> bool:
        """Start a classification; False when nothing was started."""
        request = session.start_classification(self.state, self.config, self.view)
        if request is None:
            return False

        thread = QThread(self)
        worker = ClassificationWorker(self.analyzer, request)
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.finished.connect(self._on_worker_finished)
        worker.error.connect(self._on_worker_error)

        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        thread.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.finished.connect(lambda finished=thread: self._on_thread_finished(finished))

        self._thread = thread
        self._worker = worker
        self._running.append(thread)
        thread.start()
        return True

    def is_busy(self) -> bool:
        return self.state.busy

    def shutdown(self, timeout_ms: int = 35_000) -> None:
        """Block until every classification thread (if any) has finished."""
        for thread in list(self._running):
            if thread.isRunning():
                logger.info("Waiting up to %ds for running classification before exit", timeout_ms // 1000)
                thread.quit()
                thread.wait(timeout_ms)

    @pyqtSlot(object)
    def _on_worker_finished(self, result: AnalysisResult) -> None:
        session.finish_classification(self.state, result, self.view)
        self.result_ready.emit(result)

    @pyqtSlot(str)
    def _on_worker_error(self, message: str) -> None:
        self._on_worker_finished(Failure(f"Unexpected error: {message}"))

    def _on_thread_finished(self, thread: QThread) -> None:
        if thread in self._running:
            self._running.remove(thread)
        # A newer classification may already own _thread.
        if self._thread is thread:
            self._thread = None
            self._worker = None

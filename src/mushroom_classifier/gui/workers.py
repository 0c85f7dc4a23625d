# -*- coding: utf-8 -*-
"""Worker classes for background processing."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from mushroom_classifier.models.analysis_request import AnalysisRequest
from mushroom_classifier.pipeline.analyzer import Analyzer

logger = logging.getLogger(__name__)


class ClassificationWorker(QObject):
    """Run one analysis off the UI thread and emit exactly one message."""

    finished = pyqtSignal(object)
    error = pyqtSignal(str)

    def __init__(self, analyzer: Analyzer, request: AnalysisRequest) -> None:
        super().__init__()
        self.analyzer = analyzer
        self.request = request

    def run(self) -> None:
        try:
            logger.info("ClassificationWorker: sending request (%s)", self.request.model)
            result = self.analyzer.analyze(self.request)
            self.finished.emit(result)
        except Exception as e:
            logger.exception("ClassificationWorker: analysis crashed")
            self.error.emit(str(e))

# -*- coding: utf-8 -*-
"""Main window: image preview, the two actions, status and result text."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent, QPixmap, QResizeEvent
from PyQt6.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from mushroom_classifier.config import AppConfig
from mushroom_classifier.constants import APP_NAME, IMAGE_FILE_FILTER, STATUS_IDLE, WINDOW_SIZE
from mushroom_classifier.gui.controller import AppController
from mushroom_classifier.pipeline.analyzer import Analyzer

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Select a mushroom photo, classify it, and read the model's answer."""

    def __init__(
        self,
        config: AppConfig,
        analyzer: Analyzer | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._pixmap = QPixmap()
        self.controller = AppController(config, view=self, analyzer=analyzer, parent=self)

        self.setWindowTitle(APP_NAME)
        self.resize(*WINDOW_SIZE)

        self._build_ui()
        self._apply_styles()
        self.set_controls_enabled(True, False)

    def _build_ui(self) -> None:
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        self.title_label = QLabel(APP_NAME)
        self.title_label.setObjectName("appTitle")
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        separator = QFrame()
        separator.setFrameShape(QFrame.Shape.HLine)

        self.image_label = QLabel("No image selected")
        self.image_label.setObjectName("viewerSurface")
        self.image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.image_label.setMinimumSize(400, 300)

        self.select_button = QPushButton("Select Image")
        self.select_button.setObjectName("secondaryButton")
        self.select_button.clicked.connect(self.choose_image)
        self.classify_button = QPushButton("Classify Mushroom")
        self.classify_button.setObjectName("primaryButton")
        self.classify_button.clicked.connect(self.classify)

        buttons = QHBoxLayout()
        buttons.setSpacing(8)
        buttons.addWidget(self.select_button)
        buttons.addWidget(self.classify_button)
        buttons.addStretch(1)

        self.status_label = QLabel(STATUS_IDLE)
        self.status_label.setObjectName("mutedText")

        results_title = QLabel("Results:")
        results_title.setObjectName("sectionTitle")
        self.result_view = QPlainTextEdit()
        self.result_view.setReadOnly(True)
        self.result_view.setLineWrapMode(QPlainTextEdit.LineWrapMode.WidgetWidth)
        self.result_view.setMinimumHeight(200)

        layout.addWidget(self.title_label)
        layout.addWidget(separator)
        layout.addWidget(self.image_label, 1)
        layout.addLayout(buttons)
        layout.addWidget(self.status_label)
        layout.addWidget(results_title)
        layout.addWidget(self.result_view, 1)
        self.setCentralWidget(central)

    def _apply_styles(self) -> None:
        self.setStyleSheet(
            """
            QMainWindow, QWidget {
                background: #f3f5f8;
                color: #1f2937;
                font-family: "Segoe UI", "Noto Sans", sans-serif;
                font-size: 12px;
            }
            QLabel#appTitle {
                font-size: 20px;
                font-weight: 700;
                color: #0f172a;
            }
            QLabel#sectionTitle {
                font-size: 13px;
                font-weight: 700;
                color: #111827;
            }
            QLabel#mutedText {
                color: #6b7280;
            }
            QLabel#viewerSurface {
                background: white;
                border: 1px solid #d1d9e6;
                border-radius: 12px;
                color: #64748b;
            }
            QPushButton#primaryButton {
                background: #0f766e;
                color: white;
                border: 1px solid #115e59;
                border-radius: 10px;
                padding: 8px 14px;
                font-weight: 700;
            }
            QPushButton#primaryButton:disabled {
                background: #94a3b8;
                border-color: #94a3b8;
            }
            QPushButton#secondaryButton {
                background: white;
                border: 1px solid #d0d7e2;
                border-radius: 10px;
                padding: 8px 12px;
            }
            QPlainTextEdit {
                background: white;
                border: 1px solid #d0d7e2;
                border-radius: 8px;
            }
            """
        )

    # Actions

    def choose_image(self) -> None:
        """Open the file picker and load the selected image."""
        selected, _ = QFileDialog.getOpenFileName(self, "Select Image", "", IMAGE_FILE_FILTER)
        if selected:
            self.controller.select_image(Path(selected))

    def classify(self) -> None:
        self.controller.classify()

    # ResultView

    def set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def set_result(self, text: str) -> None:
        self.result_view.setPlainText(text)

    def show_error(self, title: str, message: str) -> None:
        logger.error("%s: %s", title, message)
        QMessageBox.critical(self, title, message)

    def show_image(self, path: Path) -> None:
        pixmap = QPixmap(str(path))
        if pixmap.isNull():
            # Encoded bytes are still sent; only the preview is missing.
            logger.warning("Could not render preview for %s", path)
            self._pixmap = QPixmap()
            self.image_label.setPixmap(QPixmap())
            self.image_label.setText(path.name)
            return
        self._pixmap = pixmap
        self._update_preview()

    def set_controls_enabled(self, select_enabled: bool, classify_enabled: bool) -> None:
        self.select_button.setEnabled(select_enabled)
        self.classify_button.setEnabled(classify_enabled)

    # Qt events

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802
        super().resizeEvent(event)
        self._update_preview()

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        if self.controller.is_busy():
            # shutdown() blocks until the request ends.
            self.hide()
        self.controller.shutdown()
        super().closeEvent(event)

    def _update_preview(self) -> None:
        if self._pixmap.isNull():
            return
        scaled = self._pixmap.scaled(
            self.image_label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.image_label.setPixmap(scaled)

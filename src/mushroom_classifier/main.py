# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

from PyQt6.QtWidgets import QApplication, QMessageBox

from mushroom_classifier.config import load_config
from mushroom_classifier.constants import APP_NAME
from mushroom_classifier.errors import ConfigurationError
from mushroom_classifier.gui.main_window import MainWindow
from mushroom_classifier.utils.logger import setup_session_logging


def global_exception_handler(exc_type, exc_value, exc_traceback):
    """Log fatal errors and keep a copy of the last crash next to the session logs."""
    error_msg = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    logging.getLogger().critical("FATAL CRASH:\n%s", error_msg)

    crash_path = Path.cwd() / "logs" / "LAST_CRASH.log"
    try:
        crash_path.parent.mkdir(parents=True, exist_ok=True)
        crash_path.write_text(error_msg, encoding="utf-8")
    except OSError:
        logging.getLogger().exception("Could not write crash report to %s", crash_path)

    if QApplication.instance():
        QMessageBox.critical(None, "Application Crash", f"A fatal error occurred.\nDetails saved to: {crash_path}")

    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def main() -> int:
    """Start the GUI application."""
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    try:
        config = load_config()
    except ConfigurationError as exc:
        setup_session_logging(Path.cwd(), APP_NAME)
        logging.getLogger(__name__).critical("Failed to load configuration: %s", exc.message)
        QMessageBox.critical(None, APP_NAME, f"Failed to load configuration: {exc.message}")
        return 1

    session_log_path = setup_session_logging(Path.cwd(), APP_NAME, config.log_level)
    logger = logging.getLogger(__name__)
    if session_log_path is not None:
        logger.info("Session log file: %s", session_log_path)
    logger.info("Using endpoint %s with model %s", config.api_url, config.model)
    sys.excepthook = global_exception_handler

    window = MainWindow(config)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

# -*- coding: utf-8 -*-
"""Root logging setup: console plus one log file per session."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

from mushroom_classifier.constants import DEFAULT_LOG_LEVEL


def setup_session_logging(
    base_dir: str | Path,
    app_name: str,
    level: str = DEFAULT_LOG_LEVEL,
) -> Path | None:
    """Configure root logging for the app and return the session log path."""
    root = logging.getLogger()
    if getattr(root, "_mushroom_logging_configured", False):
        return getattr(root, "_mushroom_session_log", None)

    numeric_level = getattr(logging, level.upper(), logging.DEBUG)
    root.setLevel(numeric_level)

    # Thread name distinguishes the classification worker from the UI thread
    formatter = logging.Formatter(
        "%(asctime)s [%(threadName)s] %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    if not any(isinstance(handler, logging.StreamHandler) for handler in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(numeric_level)
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    logs_dir = Path(base_dir) / "logs"
    safe_app_name = app_name.lower().replace(" ", "-")
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    session_log_path: Path | None = logs_dir / f"{safe_app_name}-{timestamp}.log"
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(session_log_path, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        root.info("=== %s starting (level=%s) ===", app_name, logging.getLevelName(numeric_level))
        root.info("Session log file established: %s", session_log_path)
        root.info("System info: OS=%s", os.name)
    except OSError as e:
        root.error("Failed to establish session log file: %s", e)
        session_log_path = None

    root._mushroom_logging_configured = True  # type: ignore[attr-defined]
    root._mushroom_session_log = session_log_path  # type: ignore[attr-defined]
    return session_log_path

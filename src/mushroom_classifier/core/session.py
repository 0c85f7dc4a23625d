# -*- coding: utf-8 -*-
"""UI handlers that drive the view through a small capability interface.

Nothing here imports a GUI toolkit: the window implements ``ResultView`` and
the handlers only mutate ``AppState`` and call view methods, so the flow can
be exercised with a plain test double.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from mushroom_classifier.config import AppConfig
from mushroom_classifier.constants import (
    MUSHROOM_PROMPT,
    RESULT_PLACEHOLDER,
    STATUS_ANALYZING,
    STATUS_COMPLETE,
    STATUS_FAILED,
    STATUS_LOADED,
)
from mushroom_classifier.core.state import AppState
from mushroom_classifier.errors import ClassifierError
from mushroom_classifier.models.analysis_request import AnalysisRequest
from mushroom_classifier.models.analysis_result import AnalysisResult, Success
from mushroom_classifier.utils.image_utils import load_as_encoded_image

logger = logging.getLogger(__name__)


class ResultView(Protocol):
    def set_status(self, text: str) -> None: ...

    def set_result(self, text: str) -> None: ...

    def show_error(self, title: str, message: str) -> None: ...

    def show_image(self, path: Path) -> None: ...

    def set_controls_enabled(self, select_enabled: bool, classify_enabled: bool) -> None: ...


def refresh_controls(state: AppState, view: ResultView) -> None:
    view.set_controls_enabled(not state.busy, state.has_image and not state.busy)


def load_image(state: AppState, path: str | Path, view: ResultView) -> bool:
    """Read and encode the chosen file. On failure the previous image stays loaded."""
    if state.busy:
        logger.debug("Ignoring image selection while a request is running")
        return False

    file_path = Path(path)
    try:
        encoded = load_as_encoded_image(file_path)
    except ClassifierError as exc:
        logger.error("Failed to load image %s: %s", file_path, exc.message)
        view.show_error("Failed to load image", exc.message)
        return False

    state.image_path = file_path
    state.encoded_image = encoded
    state.last_result = None
    view.show_image(file_path)
    view.set_status(STATUS_LOADED.format(name=file_path.name))
    refresh_controls(state, view)
    logger.info("Loaded image %s (%d bytes)", file_path.name, encoded.byte_length)
    return True


def start_classification(state: AppState, config: AppConfig, view: ResultView) -> AnalysisRequest | None:
    """Mark the session busy and build the request for the loaded image.

    Returns None when nothing should be sent: a request is already running or
    no image is loaded.
    """
    if state.busy:
        logger.warning("Classification requested while another one is running")
        return None
    if not state.has_image:
        view.show_error("No image loaded", "Select an image before classifying.")
        return None

    state.busy = True
    refresh_controls(state, view)
    view.set_status(STATUS_ANALYZING)
    view.set_result(RESULT_PLACEHOLDER)

    return AnalysisRequest(
        credential=config.api_key,
        endpoint=config.api_url,
        prompt_text=MUSHROOM_PROMPT,
        model=config.model,
        image_data=state.encoded_image,
        max_output_tokens=config.max_tokens,
    )


def finish_classification(state: AppState, result: AnalysisResult, view: ResultView) -> None:
    """Render a finished result and make the controls usable again."""
    state.busy = False
    state.last_result = result
    if isinstance(result, Success):
        view.set_result(result.content)
        view.set_status(STATUS_COMPLETE)
    else:
        view.set_result("")
        view.set_status(STATUS_FAILED)
        view.show_error("Analysis failed", result.message)
    refresh_controls(state, view)

# -*- coding: utf-8 -*-
"""Application state container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mushroom_classifier.models.analysis_result import AnalysisResult
from mushroom_classifier.utils.image_utils import EncodedImage


@dataclass
class AppState:
    """Mutable per-window state, only touched from the UI thread."""

    image_path: Path | None = None
    encoded_image: EncodedImage | None = None
    busy: bool = False
    last_result: AnalysisResult | None = None

    @property
    def has_image(self) -> bool:
        return self.encoded_image is not None

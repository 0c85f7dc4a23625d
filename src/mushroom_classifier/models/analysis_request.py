# -*- coding: utf-8 -*-
"""Analysis request data model."""

from __future__ import annotations

from dataclasses import dataclass

from mushroom_classifier.constants import DEFAULT_MAX_TOKENS, DEFAULT_MODEL
from mushroom_classifier.utils.image_utils import EncodedImage


@dataclass(frozen=True)
class AnalysisRequest:
    """Everything needed for one vision API call. Built fresh per user action."""

    credential: str
    endpoint: str
    prompt_text: str
    model: str = DEFAULT_MODEL
    image_data: EncodedImage | None = None
    max_output_tokens: int = DEFAULT_MAX_TOKENS

    def __repr__(self) -> str:
        image = f"{self.image_data.byte_length} bytes" if self.image_data else None
        return (
            f"AnalysisRequest(endpoint={self.endpoint!r}, model={self.model!r}, "
            f"prompt_chars={len(self.prompt_text)}, image={image}, "
            f"max_output_tokens={self.max_output_tokens})"
        )

# -*- coding: utf-8 -*-
"""Analysis result data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Success:
    """Text returned by the model for the first completion choice."""

    content: str


@dataclass(frozen=True)
class Failure:
    """User-facing description of why an analysis did not produce content."""

    message: str


AnalysisResult = Union[Success, Failure]

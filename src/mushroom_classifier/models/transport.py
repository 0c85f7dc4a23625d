# -*- coding: utf-8 -*-
"""Raw HTTP response data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TransportOutcome:
    """Status code and body bytes of a completed HTTP exchange."""

    status_code: int
    body: bytes

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

# -*- coding: utf-8 -*-
"""Analysis orchestration: validate, build, POST, parse."""

from __future__ import annotations

import logging
import time

from mushroom_classifier.errors import APIError, ClassifierError, ParseError, TransportError
from mushroom_classifier.integrations.http_client import Transport, post_json
from mushroom_classifier.integrations.openai_client import (
    build_payload,
    decode_response,
    encode_payload,
    parse_response,
)
from mushroom_classifier.models.analysis_request import AnalysisRequest
from mushroom_classifier.models.analysis_result import AnalysisResult, Failure

logger = logging.getLogger(__name__)


class Analyzer:
    """Run one request through the vision API and return a single result shape."""

    def __init__(self, transport: Transport | None = None) -> None:
        self.transport = transport or post_json

    def analyze(self, req: AnalysisRequest) -> AnalysisResult:
        """Every expected failure becomes a Failure; only programming errors escape."""
        logger.info("Starting analysis: %r", req)
        started = time.monotonic()
        try:
            body = encode_payload(build_payload(req))
            outcome = self.transport(req.endpoint, req.credential, body)
        except TransportError as exc:
            result = self._failure_from_transport(exc)
        except ClassifierError as exc:
            logger.warning("Analysis aborted before completion: %s", exc.message)
            result = Failure(exc.message)
        else:
            result = parse_response(outcome.status_code, outcome.body)

        logger.info(
            "Analysis finished in %.2fs: %s",
            time.monotonic() - started,
            type(result).__name__,
        )
        return result

    def _failure_from_transport(self, exc: TransportError) -> Failure:
        # An HTTP error body may still hold the provider's own explanation.
        if exc.outcome is not None:
            try:
                decode_response(exc.outcome.body)
            except APIError as api_exc:
                logger.warning("HTTP %d with API error: %s", exc.outcome.status_code, api_exc.message)
                return Failure(api_exc.message)
            except ParseError:
                pass
        logger.error("HTTP request failed (%s): %s", exc.reason, exc.message)
        return Failure(f"HTTP request failed: {exc.message}")


def analyze(req: AnalysisRequest, transport: Transport | None = None) -> AnalysisResult:
    return Analyzer(transport=transport).analyze(req)

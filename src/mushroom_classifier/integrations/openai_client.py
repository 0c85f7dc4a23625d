# -*- coding: utf-8 -*-
"""Chat-completion payloads and responses for OpenAI-compatible vision models."""

from __future__ import annotations

import json
import logging
from typing import Any

from mushroom_classifier.constants import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    MSG_NO_RESPONSE,
    MSG_PARSE_FAILED,
)
from mushroom_classifier.errors import APIError, InvalidRequestError, ParseError
from mushroom_classifier.models.analysis_request import AnalysisRequest
from mushroom_classifier.models.analysis_result import AnalysisResult, Failure, Success

logger = logging.getLogger(__name__)


def validate_request(req: AnalysisRequest) -> None:
    """Reject requests that must never reach the network."""
    if not req.credential:
        raise InvalidRequestError("API key is required", field="credential")
    if not req.endpoint:
        raise InvalidRequestError("API URL is required", field="endpoint")
    if not req.prompt_text:
        raise InvalidRequestError("Prompt is required", field="prompt_text")


def build_payload(req: AnalysisRequest) -> dict[str, Any]:
    """Assemble the chat-completion body for one user message.

    The text part always comes first. The image part is only appended when
    the request carries image data, so text-only calls share this path.
    """
    validate_request(req)

    model = req.model or DEFAULT_MODEL
    max_tokens = req.max_output_tokens if req.max_output_tokens and req.max_output_tokens > 0 else DEFAULT_MAX_TOKENS

    content: list[dict[str, Any]] = [{"type": "text", "text": req.prompt_text}]
    if req.image_data is not None:
        content.append(
            {
                "type": "image_url",
                "image_url": {"url": req.image_data.as_data_uri()},
            }
        )

    return {
        "model": model,
        "messages": [{"role": "user", "content": content}],
        "max_tokens": max_tokens,
    }


def encode_payload(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload).encode("utf-8")


def _message_text(content_value: Any) -> str:
    if content_value is None:
        return ""
    if isinstance(content_value, str):
        return content_value
    if isinstance(content_value, list):
        text_parts = []
        for item in content_value:
            if isinstance(item, dict) and item.get("type") == "text":
                text_parts.append(str(item.get("text", "")))
        return "\n".join(part for part in text_parts if part)
    raise ParseError(MSG_PARSE_FAILED)


def decode_response(body: bytes) -> str:
    """Return ``choices[0].message.content`` from a chat-completion body.

    Only the first choice is ever used, even when the provider returns more.

    Raises:
        APIError: the body carries an ``error`` object.
        ParseError: malformed JSON, unexpected shape, or no choices.
    """
    try:
        document = json.loads(body.decode("utf-8"))
    except (ValueError, RecursionError) as exc:
        logger.error("Response is not valid JSON: %s", exc)
        raise ParseError(MSG_PARSE_FAILED) from exc
    if not isinstance(document, dict):
        raise ParseError(MSG_PARSE_FAILED)

    api_error = document.get("error")
    if isinstance(api_error, dict):
        raise APIError(
            f"API error: {api_error.get('message') or ''}",
            error_type=str(api_error.get("type") or ""),
            code=str(api_error.get("code") or ""),
        )
    if isinstance(api_error, str) and api_error:
        raise APIError(f"API error: {api_error}")

    choices = document.get("choices", [])
    if not isinstance(choices, list):
        raise ParseError(MSG_PARSE_FAILED)
    if not choices:
        raise ParseError(MSG_NO_RESPONSE)

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise ParseError(MSG_PARSE_FAILED)
    return _message_text(message.get("content"))


def parse_response(status: int, body: bytes) -> AnalysisResult:
    """Map a raw response to Success or Failure. Never raises."""
    try:
        content = decode_response(body)
    except APIError as exc:
        logger.warning("Provider returned an error (status=%s, type=%s): %s", status, exc.error_type, exc.message)
        return Failure(exc.message)
    except ParseError as exc:
        logger.warning("Could not use response (status=%s): %s", status, exc.message)
        return Failure(exc.message)
    logger.debug("Parsed response (status=%s, %d chars)", status, len(content))
    return Success(content)

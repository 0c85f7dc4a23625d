# -*- coding: utf-8 -*-
"""End-to-end tests for the validate -> build -> POST -> parse pipeline."""

from __future__ import annotations

import base64
from pathlib import Path

from conftest import JPEG_LIKE_BYTES, RecordingTransport, completion_body, error_body
from mushroom_classifier.errors import TransportError
from mushroom_classifier.models.analysis_request import AnalysisRequest
from mushroom_classifier.models.analysis_result import Failure, Success
from mushroom_classifier.models.transport import TransportOutcome
from mushroom_classifier.pipeline.analyzer import Analyzer, analyze
from mushroom_classifier.utils.image_utils import load_as_encoded_image

URL = "https://api.example.test/v1/chat/completions"


def _request(image=None, **overrides) -> AnalysisRequest:
    values = {
        "credential": "test-key",
        "endpoint": URL,
        "prompt_text": "Identify this mushroom.",
        "image_data": image,
    }
    values.update(overrides)
    return AnalysisRequest(**values)


def test_analyze_image_returns_echoed_content(sample_image: Path, success_transport: RecordingTransport) -> None:
    result = analyze(_request(load_as_encoded_image(sample_image)), transport=success_transport)

    assert result == Success("Amanita muscaria")
    endpoint, credential, _ = success_transport.calls[0]
    assert endpoint == URL
    assert credential == "test-key"
    payload = success_transport.last_payload()
    expected_uri = "data:image/jpeg;base64," + base64.b64encode(JPEG_LIKE_BYTES).decode("ascii")
    assert payload["messages"][0]["content"][1]["image_url"]["url"] == expected_uri


def test_text_only_request_uses_same_path(success_transport: RecordingTransport) -> None:
    result = Analyzer(transport=success_transport).analyze(_request())

    assert isinstance(result, Success)
    assert len(success_transport.last_payload()["messages"][0]["content"]) == 1


def test_empty_prompt_never_reaches_transport(success_transport: RecordingTransport) -> None:
    result = analyze(_request(prompt_text=""), transport=success_transport)

    assert result == Failure("Prompt is required")
    assert success_transport.calls == []


def test_empty_credential_never_reaches_transport(success_transport: RecordingTransport) -> None:
    result = analyze(_request(credential=""), transport=success_transport)

    assert isinstance(result, Failure)
    assert success_transport.calls == []


def test_timeout_becomes_failure_naming_timeout(sample_image: Path) -> None:
    transport = RecordingTransport(error=TransportError("request timed out after 30s", reason="timeout"))

    result = analyze(_request(load_as_encoded_image(sample_image)), transport=transport)

    assert isinstance(result, Failure)
    assert "timed out" in result.message
    assert len(transport.calls) == 1


def test_http_error_with_api_error_body_surfaces_provider_message() -> None:
    outcome = TransportOutcome(status_code=401, body=error_body("Incorrect API key provided"))
    transport = RecordingTransport(
        error=TransportError("HTTP error 401", reason="http_status", outcome=outcome)
    )

    result = analyze(_request(), transport=transport)

    assert result == Failure("API error: Incorrect API key provided")


def test_http_error_with_opaque_body_reports_transport_error() -> None:
    outcome = TransportOutcome(status_code=502, body=b"<html>Bad Gateway</html>")
    transport = RecordingTransport(
        error=TransportError("HTTP error 502: <html>Bad Gateway</html>", reason="http_status", outcome=outcome)
    )

    result = analyze(_request(), transport=transport)

    assert isinstance(result, Failure)
    assert result.message.startswith("HTTP request failed")
    assert "502" in result.message


def test_api_error_in_success_status_is_failure() -> None:
    transport = RecordingTransport(TransportOutcome(status_code=200, body=error_body("bad key")))

    assert analyze(_request(), transport=transport) == Failure("API error: bad key")


def test_empty_choices_is_failure() -> None:
    transport = RecordingTransport(TransportOutcome(status_code=200, body=b'{"choices": []}'))

    assert analyze(_request(), transport=transport) == Failure("No response from API")


def test_payload_uses_request_model_and_tokens() -> None:
    transport = RecordingTransport(TransportOutcome(status_code=200, body=completion_body("ok")))

    analyze(_request(model="gpt-4o-mini", max_output_tokens=250), transport=transport)

    payload = transport.last_payload()
    assert payload["model"] == "gpt-4o-mini"
    assert payload["max_tokens"] == 250

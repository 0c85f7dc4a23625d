# -*- coding: utf-8 -*-
"""Tests for chat-completion payload building and response parsing."""

from __future__ import annotations

import json

import pytest

from conftest import completion_body, error_body
from mushroom_classifier.errors import APIError, InvalidRequestError, ParseError
from mushroom_classifier.integrations.openai_client import (
    build_payload,
    decode_response,
    encode_payload,
    parse_response,
)
from mushroom_classifier.models.analysis_request import AnalysisRequest
from mushroom_classifier.models.analysis_result import Failure, Success
from mushroom_classifier.utils.image_utils import EncodedImage


def _request(**overrides) -> AnalysisRequest:
    values = {
        "credential": "test-key",
        "endpoint": "https://api.example.test/v1/chat/completions",
        "prompt_text": "What mushroom is this?",
    }
    values.update(overrides)
    return AnalysisRequest(**values)


# build_payload


@pytest.mark.parametrize(
    "field_name,overrides",
    [
        ("credential", {"credential": ""}),
        ("endpoint", {"endpoint": ""}),
        ("prompt_text", {"prompt_text": ""}),
    ],
)
def test_missing_required_field_is_rejected(field_name: str, overrides: dict) -> None:
    with pytest.raises(InvalidRequestError) as exc_info:
        build_payload(_request(**overrides))
    assert exc_info.value.field == field_name


def test_text_only_payload_has_single_text_part() -> None:
    payload = build_payload(_request())
    assert payload["messages"] == [
        {"role": "user", "content": [{"type": "text", "text": "What mushroom is this?"}]}
    ]


def test_image_part_follows_text_part() -> None:
    image = EncodedImage(data="aGVsbG8=", byte_length=5)
    content = build_payload(_request(image_data=image))["messages"][0]["content"]
    assert [part["type"] for part in content] == ["text", "image_url"]
    assert content[1]["image_url"]["url"] == "data:image/jpeg;base64,aGVsbG8="


def test_defaults_for_model_and_token_limit() -> None:
    payload = build_payload(_request(model="", max_output_tokens=0))
    assert payload["model"] == "gpt-4o"
    assert payload["max_tokens"] == 1000


def test_negative_token_limit_falls_back_to_default() -> None:
    assert build_payload(_request(max_output_tokens=-5))["max_tokens"] == 1000


def test_explicit_model_and_token_limit_are_kept() -> None:
    payload = build_payload(_request(model="gpt-4o-mini", max_output_tokens=300))
    assert payload["model"] == "gpt-4o-mini"
    assert payload["max_tokens"] == 300


def test_encode_payload_is_utf8_json() -> None:
    payload = build_payload(_request(prompt_text="Pfifferling? äöü"))
    assert json.loads(encode_payload(payload).decode("utf-8")) == payload


# parse_response


def test_success_returns_first_choice_content() -> None:
    result = parse_response(200, b'{"choices":[{"message":{"content":"Amanita"}}]}')
    assert result == Success("Amanita")


def test_only_first_choice_is_used() -> None:
    body = json.dumps(
        {"choices": [{"message": {"content": "first"}}, {"message": {"content": "second"}}]}
    ).encode("utf-8")
    assert parse_response(200, body) == Success("first")


@pytest.mark.parametrize("status", [200, 401, 500])
def test_error_object_wins_regardless_of_status(status: int) -> None:
    result = parse_response(status, b'{"error":{"message":"bad key"}}')
    assert isinstance(result, Failure)
    assert result.message.endswith("bad key")


def test_error_object_wins_over_choices() -> None:
    body = json.dumps(
        {"error": {"message": "quota exceeded"}, "choices": [{"message": {"content": "x"}}]}
    ).encode("utf-8")
    assert parse_response(200, body) == Failure("API error: quota exceeded")


def test_empty_choices_is_no_response() -> None:
    assert parse_response(200, b'{"choices":[]}') == Failure("No response from API")


def test_missing_choices_is_no_response() -> None:
    assert parse_response(200, b"{}") == Failure("No response from API")


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"not json",
        b"\xff\xfe",
        b"[1, 2]",
        b'{"choices": "nope"}',
        b'{"choices": [42]}',
        b'{"choices": [{"message": "text"}]}',
        b'{"choices": [{"message": {"content": 7}}]}',
        b"[" * 200000,
    ],
)
def test_malformed_bodies_fail_without_raising(body: bytes) -> None:
    assert parse_response(200, body) == Failure("Failed to parse response")


def test_null_content_is_empty_success() -> None:
    assert parse_response(200, b'{"choices":[{"message":{"content":null}}]}') == Success("")


def test_content_parts_are_joined() -> None:
    body = json.dumps(
        {
            "choices": [
                {
                    "message": {
                        "content": [
                            {"type": "text", "text": "Boletus edulis"},
                            {"type": "image_url", "image_url": {"url": "x"}},
                            {"type": "text", "text": "Edible"},
                        ]
                    }
                }
            ]
        }
    ).encode("utf-8")
    assert parse_response(200, body) == Success("Boletus edulis\nEdible")


def test_decode_response_raises_typed_errors() -> None:
    with pytest.raises(APIError) as exc_info:
        decode_response(error_body("bad key"))
    assert exc_info.value.error_type == "invalid_request_error"
    assert exc_info.value.code == "invalid_api_key"

    with pytest.raises(ParseError):
        decode_response(b"<html>")

    assert decode_response(completion_body("Morel")) == "Morel"

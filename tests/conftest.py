# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import base64
import json
import os
import sys
from pathlib import Path

import pytest


SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from mushroom_classifier.config import AppConfig  # noqa: E402
from mushroom_classifier.models.transport import TransportOutcome  # noqa: E402


PNG_1X1_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO7+fJ8AAAAASUVORK5CYII="
)
JPEG_LIKE_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF"


def completion_body(content: str) -> bytes:
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]}).encode("utf-8")


def error_body(message: str, error_type: str = "invalid_request_error", code: str = "invalid_api_key") -> bytes:
    return json.dumps({"error": {"message": message, "type": error_type, "code": code}}).encode("utf-8")


class RecordingTransport:
    """Stands in for post_json; returns a fixed outcome or raises a fixed error."""

    def __init__(self, outcome: TransportOutcome | None = None, error: Exception | None = None) -> None:
        self.outcome = outcome
        self.error = error
        self.calls: list[tuple[str, str, bytes]] = []

    def __call__(self, endpoint: str, credential: str, body: bytes) -> TransportOutcome:
        self.calls.append((endpoint, credential, body))
        if self.error is not None:
            raise self.error
        assert self.outcome is not None
        return self.outcome

    def last_payload(self) -> dict:
        return json.loads(self.calls[-1][2].decode("utf-8"))


@pytest.fixture
def sample_image(tmp_path: Path) -> Path:
    path = tmp_path / "chanterelle.jpg"
    path.write_bytes(JPEG_LIKE_BYTES)
    return path


@pytest.fixture
def sample_png(tmp_path: Path) -> Path:
    path = tmp_path / "amanita.png"
    path.write_bytes(PNG_1X1_BYTES)
    return path


@pytest.fixture
def empty_image(tmp_path: Path) -> Path:
    path = tmp_path / "empty.jpg"
    path.write_bytes(b"")
    return path


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        api_key="test-key",
        api_url="https://api.example.test/v1/chat/completions",
        model="gpt-4o",
        max_tokens=1000,
    )


@pytest.fixture
def success_transport() -> RecordingTransport:
    return RecordingTransport(TransportOutcome(status_code=200, body=completion_body("Amanita muscaria")))


@pytest.fixture(scope="session")
def qt_app():
    qt_widgets = pytest.importorskip("PyQt6.QtWidgets")
    app = qt_widgets.QApplication.instance() or qt_widgets.QApplication([])
    yield app

# -*- coding: utf-8 -*-
"""Read image files and encode them for inlining into JSON requests."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from pathlib import Path

from mushroom_classifier.constants import IMAGE_MIME_TYPE
from mushroom_classifier.errors import EmptyFileError, ImageReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodedImage:
    """Base64 text of an image together with its raw size."""

    data: str
    byte_length: int
    source: Path | None = None

    def as_data_uri(self, mime_type: str = IMAGE_MIME_TYPE) -> str:
        return f"data:{mime_type};base64,{self.data}"


def encode_data(data: bytes) -> str:
    """Encode bytes as padded standard base64 (RFC 4648)."""
    return base64.b64encode(data).decode("ascii")


def load_as_encoded_image(path: str | Path) -> EncodedImage:
    """Read a whole file into memory and encode it.

    No size cap is applied; the file is read fully on every call.

    Raises:
        ImageReadError: path is missing or unreadable.
        EmptyFileError: the file has zero bytes.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except OSError as exc:
        raise ImageReadError(f"failed to read file {file_path}: {exc}", path=str(file_path)) from exc

    if not raw:
        raise EmptyFileError(f"file {file_path} is empty", path=str(file_path))

    logger.debug("Encoded %s (%d bytes)", file_path.name, len(raw))
    return EncodedImage(data=encode_data(raw), byte_length=len(raw), source=file_path)

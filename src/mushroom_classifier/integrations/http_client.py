# -*- coding: utf-8 -*-
"""Single-attempt JSON POST over urllib."""

from __future__ import annotations

import http.client
import logging
import socket
import time
from typing import Callable
from urllib import error, request

from mushroom_classifier.constants import HTTP_TIMEOUT_SECONDS
from mushroom_classifier.errors import TransportError
from mushroom_classifier.models.transport import TransportOutcome

logger = logging.getLogger(__name__)

Transport = Callable[[str, str, bytes], TransportOutcome]

READ_CHUNK_SIZE = 65536


def _classify_os_error(exc: BaseException) -> str:
    if isinstance(exc, (TimeoutError, socket.timeout)):
        return "timeout"
    if isinstance(exc, socket.gaierror):
        return "dns"
    return "connection"


def _read_failure(exc: BaseException, endpoint: str, timeout: float) -> TransportError:
    reason = _classify_os_error(exc)
    logger.error("Request to %s failed (%s): %s", endpoint, reason, exc)
    if reason == "timeout":
        return TransportError(f"request timed out after {timeout:.0f}s", reason=reason)
    return TransportError(f"failed to read response: {exc}", reason=reason)


def _read_body(response, deadline: float) -> bytes:
    """Read the body in chunks, giving up once the deadline has passed."""
    chunks: list[bytes] = []
    while True:
        if time.monotonic() > deadline:
            raise TimeoutError("response body not received before the deadline")
        chunk = response.read1(READ_CHUNK_SIZE)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


def post_json(
    endpoint: str,
    credential: str,
    body: bytes,
    *,
    timeout: float = HTTP_TIMEOUT_SECONDS,
) -> TransportOutcome:
    """POST a JSON body and return status and raw response bytes.

    The bearer header is only sent when ``credential`` is non-empty. There is
    no retry; redirects follow the urllib defaults. ``timeout`` is a deadline
    for the whole exchange: each socket operation is bounded by it, and the
    body is read in chunks that stop once it has passed.

    Raises:
        TransportError: ``reason`` is ``"timeout"``, ``"dns"`` or
            ``"connection"`` when no response was received, and
            ``"http_status"`` (with ``outcome`` set) for status >= 400.
    """
    headers = {"Content-Type": "application/json"}
    if credential:
        headers["Authorization"] = f"Bearer {credential}"

    try:
        req = request.Request(endpoint, data=body, headers=headers, method="POST")
    except ValueError as exc:
        raise TransportError(f"failed to create request: {exc}", reason="connection") from exc

    started = time.monotonic()
    deadline = started + timeout
    logger.debug("POST %s (%d bytes, timeout=%.0fs)", endpoint, len(body), timeout)
    try:
        with request.urlopen(req, timeout=timeout) as response:
            status = int(getattr(response, "status", 200))
            raw_body = _read_body(response, deadline)
    except error.HTTPError as exc:
        try:
            raw_body = _read_body(exc, deadline) if exc.fp is not None else b""
        except (OSError, http.client.HTTPException) as read_exc:
            raise _read_failure(read_exc, endpoint, timeout) from read_exc
        outcome = TransportOutcome(status_code=int(exc.code), body=raw_body)
        logger.warning("HTTP error %d from %s after %.2fs", exc.code, endpoint, time.monotonic() - started)
        raise TransportError(
            f"HTTP error {exc.code}: {raw_body.decode('utf-8', errors='replace')[:500]}",
            reason="http_status",
            outcome=outcome,
        ) from exc
    except error.URLError as exc:
        reason = _classify_os_error(exc.reason) if isinstance(exc.reason, BaseException) else "connection"
        logger.error("Request to %s failed (%s): %s", endpoint, reason, exc.reason)
        if reason == "timeout":
            raise TransportError(f"request timed out after {timeout:.0f}s", reason=reason) from exc
        raise TransportError(f"failed to perform request: {exc.reason}", reason=reason) from exc
    except (OSError, http.client.HTTPException) as exc:
        raise _read_failure(exc, endpoint, timeout) from exc

    outcome = TransportOutcome(status_code=status, body=raw_body)
    logger.info("HTTP %d from %s in %.2fs (%d bytes)", status, endpoint, time.monotonic() - started, len(raw_body))
    if outcome.is_error:
        raise TransportError(
            f"HTTP error {status}: {raw_body.decode('utf-8', errors='replace')[:500]}",
            reason="http_status",
            outcome=outcome,
        )
    return outcome

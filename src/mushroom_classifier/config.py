# -*- coding: utf-8 -*-
"""Settings loading and validation from a local .env file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from mushroom_classifier.constants import (
    DEFAULT_API_URL,
    DEFAULT_ENV_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
)
from mushroom_classifier.errors import ConfigurationError


ENV_KEYS = ("OPENAI_API_KEY", "OPENAI_API_URL", "OPENAI_MODEL", "OPENAI_MAX_TOKENS", "LOG_LEVEL")


@dataclass(frozen=True)
class AppConfig:
    """Runtime settings needed to reach the vision API."""

    api_key: str
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        return (
            f"AppConfig(api_key={'***' if self.api_key else ''!r}, api_url={self.api_url!r}, "
            f"model={self.model!r}, max_tokens={self.max_tokens!r}, log_level={self.log_level!r})"
        )


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load a simple .env file (KEY=VALUE)."""
    values: dict[str, str] = {}
    if not env_path.exists():
        return values

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        if not key:
            continue
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        values[key] = value
    return values


def _apply_env_overrides(values: dict[str, str], environ: Mapping[str, str]) -> dict[str, str]:
    """Process environment variables win over the .env file."""
    merged = dict(values)
    for key in ENV_KEYS:
        override = environ.get(key, "").strip()
        if override:
            merged[key] = override
    return merged


def _parse_max_tokens(raw: str) -> int:
    if not raw:
        return DEFAULT_MAX_TOKENS
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"OPENAI_MAX_TOKENS must be an integer, got {raw!r}") from None
    return value if value > 0 else DEFAULT_MAX_TOKENS


def validate_config(values: Mapping[str, str]) -> AppConfig:
    """Turn raw key/value settings into an AppConfig or raise ConfigurationError."""
    api_key = values.get("OPENAI_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY not found in .env file")

    return AppConfig(
        api_key=api_key,
        api_url=values.get("OPENAI_API_URL", "").strip() or DEFAULT_API_URL,
        model=values.get("OPENAI_MODEL", "").strip() or DEFAULT_MODEL,
        max_tokens=_parse_max_tokens(values.get("OPENAI_MAX_TOKENS", "").strip()),
        log_level=values.get("LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL,
    )


def load_config(
    env_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load settings from the .env file next to the working directory.

    Missing credential is fatal: the application must not start without it.
    """
    path = Path(env_path or Path.cwd() / DEFAULT_ENV_FILE)
    values = _load_env_file(path)
    values = _apply_env_overrides(values, os.environ if environ is None else environ)
    if not values and not path.exists():
        raise ConfigurationError(f"configuration file {path.name} not found")
    return validate_config(values)

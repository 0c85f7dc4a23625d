# -*- coding: utf-8 -*-
"""Configuration and API connectivity check, run without the GUI."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from mushroom_classifier.config import load_config
from mushroom_classifier.constants import APP_NAME, APP_VERSION, DIAGNOSTIC_PROMPT
from mushroom_classifier.errors import ConfigurationError
from mushroom_classifier.integrations.http_client import Transport
from mushroom_classifier.models.analysis_request import AnalysisRequest
from mushroom_classifier.models.analysis_result import Success
from mushroom_classifier.pipeline.analyzer import Analyzer

logger = logging.getLogger(__name__)


def run_diagnostics(
    env_path: str | Path | None = None,
    transport: Transport | None = None,
) -> dict[str, Any]:
    """Check configuration, then send a text-only request through the normal pipeline."""
    report: dict[str, Any] = {
        "status": "ok",
        "app": {"name": APP_NAME, "version": APP_VERSION},
        "system": {
            "os": os.name,
            "platform": sys.platform,
            "python_version": sys.version,
            "cwd": os.getcwd(),
        },
        "config": {},
        "api": {},
        "errors": [],
    }

    try:
        config = load_config(env_path)
    except ConfigurationError as exc:
        report["status"] = "error"
        report["config"] = {"loaded": False}
        report["errors"].append(exc.message)
        return report

    report["config"] = {
        "loaded": True,
        "api_url": config.api_url,
        "model": config.model,
        "max_tokens": config.max_tokens,
        "api_key": "present",
    }

    request = AnalysisRequest(
        credential=config.api_key,
        endpoint=config.api_url,
        prompt_text=DIAGNOSTIC_PROMPT,
        model=config.model,
        max_output_tokens=config.max_tokens,
    )
    result = Analyzer(transport=transport).analyze(request)
    if isinstance(result, Success):
        report["api"] = {"reachable": True, "reply": result.content[:200]}
    else:
        report["status"] = "error"
        report["api"] = {"reachable": False}
        report["errors"].append(result.message)
    return report


def main() -> int:
    logging.basicConfig(level=logging.WARNING)
    print(f"Running {APP_NAME} diagnostics...")
    report = run_diagnostics()

    report_path = Path("logs/diagnostic_report.json")
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(json.dumps(report, indent=2), encoding="utf-8")

    print(f"\nDiagnostic Report saved to: {report_path.absolute()}")
    print("-" * 40)
    print(f"Status: {report['status'].upper()}")
    print(f"Config: {'LOADED' if report['config'].get('loaded') else 'MISSING'}")
    if report["config"].get("loaded"):
        print(f"Endpoint: {report['config']['api_url']} ({report['config']['model']})")
        print(f"API: {'REACHABLE' if report['api'].get('reachable') else 'FAILED'}")

    for err in report["errors"]:
        print(f"ERROR: {err}")

    return 1 if report["status"] == "error" else 0


if __name__ == "__main__":
    raise SystemExit(main())

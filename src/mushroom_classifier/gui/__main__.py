# -*- coding: utf-8 -*-
"""CLI module entry point for `python -m mushroom_classifier.gui`."""

from __future__ import annotations

from mushroom_classifier.main import main


if __name__ == "__main__":
    raise SystemExit(main())

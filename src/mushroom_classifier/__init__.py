# -*- coding: utf-8 -*-
"""Mushroom Classifier: send a photo to a vision model and show its analysis."""

from mushroom_classifier.constants import APP_VERSION

__version__ = APP_VERSION

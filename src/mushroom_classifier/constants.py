# -*- coding: utf-8 -*-
"""Application constants."""

APP_NAME = "Mushroom Classifier"
APP_VERSION = "0.1.0"

DEFAULT_ENV_FILE = ".env"
DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 1000
DEFAULT_LOG_LEVEL = "DEBUG"

# Covers connect and response read; single attempt.
HTTP_TIMEOUT_SECONDS = 30.0

# Providers accept PNG under this label as well.
IMAGE_MIME_TYPE = "image/jpeg"

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")
IMAGE_FILE_FILTER = "Images (*.jpg *.jpeg *.png *.JPG *.JPEG *.PNG)"

WINDOW_SIZE = (800, 600)

STATUS_IDLE = "Select an image to begin"
STATUS_LOADED = "Loaded: {name}"
STATUS_ANALYZING = "Analyzing image..."
STATUS_COMPLETE = "Analysis complete"
STATUS_FAILED = "Analysis failed"
RESULT_PLACEHOLDER = "Processing..."

MSG_NO_RESPONSE = "No response from API"
MSG_PARSE_FAILED = "Failed to parse response"

MUSHROOM_PROMPT = """You are an expert mycologist. Analyze this image of a mushroom and provide:

1. **Species Identification**: Common name and scientific name
2. **Confidence Level**: How certain you are of the identification (High/Medium/Low)
3. **Key Identifying Features**: What visual characteristics led to this identification
4. **Edibility**: Whether this mushroom is edible, poisonous, or unknown
5. **Safety Warning**: Any important safety information
6. **Similar Species**: Other mushrooms it might be confused with

IMPORTANT: Always err on the side of caution. If uncertain, clearly state so. Never encourage consumption of wild mushrooms without expert verification."""

DIAGNOSTIC_PROMPT = "Reply with the single word: ready"

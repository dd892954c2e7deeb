"""Local configuration for sectionhtml."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_TOC_TEMPLATE = "toc.html"
DEFAULT_TOC_MIN_HEADINGS = 3
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "sectionhtml/0.1"
DEFAULT_LOG_LEVEL = "INFO"

# Optional directory searched before the packaged templates.
_templates_path = os.getenv("SECTIONHTML_TEMPLATES_PATH")
SECTIONHTML_TEMPLATES_PATH = Path(_templates_path).expanduser().resolve() if _templates_path else None
SECTIONHTML_TOC_TEMPLATE = os.getenv("SECTIONHTML_TOC_TEMPLATE", DEFAULT_TOC_TEMPLATE)
SECTIONHTML_TOC_MIN_HEADINGS = int(os.getenv("SECTIONHTML_TOC_MIN_HEADINGS", str(DEFAULT_TOC_MIN_HEADINGS)))
SECTIONHTML_FETCH_TIMEOUT_S = float(os.getenv("SECTIONHTML_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
SECTIONHTML_FETCH_MAX_RETRIES = int(os.getenv("SECTIONHTML_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
SECTIONHTML_FETCH_BACKOFF_S = float(os.getenv("SECTIONHTML_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
SECTIONHTML_USER_AGENT = os.getenv("SECTIONHTML_USER_AGENT", DEFAULT_USER_AGENT)
SECTIONHTML_LOG_LEVEL = os.getenv("SECTIONHTML_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

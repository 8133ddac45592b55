"""
Language bundle loader — maps a two-letter code to a message catalog.

Catalogs ship as JSON in bibbox_core/lang/. Unsupported codes silently
fall back to the baseline catalog.
"""

import json

from .config import log, resource_path
from .constants import SUPPORTED_LANGUAGE_CODES, BASELINE_LANGUAGE_CODE


def select_language(language_code):
    """Return the supported code to load for language_code."""
    code = (language_code or "").strip().lower()
    if code in SUPPORTED_LANGUAGE_CODES:
        return code
    log.info("Language %r not supported — using %s", language_code, BASELINE_LANGUAGE_CODE)
    return BASELINE_LANGUAGE_CODE


def load_catalog(language_code):
    """Load the catalog for a supported code. Returns (code, messages)."""
    code = select_language(language_code)
    path = resource_path(f"lang/{code}.json")
    with open(path, "r", encoding="utf-8") as f:
        messages = json.load(f)
    log.info("Loaded %d translations for '%s'", len(messages), code)
    return code, messages


def message(messages, message_id, default=None):
    """Look up a message, falling back to the default text or the id itself."""
    return messages.get(message_id) or default or message_id

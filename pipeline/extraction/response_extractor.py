"""
Response Extractor.

Pulls the JSON array out of free-text model output. Models wrap the array in
markdown fences, add prose around it, or leave a trailing comma before a
closing brace; all three are tolerated here.
"""

import logging
import re

logger = logging.getLogger(__name__)

LEADING_FENCE_CHARS = "`json\n"
TRAILING_FENCE_CHARS = "`\n"

_ARRAY_PATTERN = re.compile(r"\[.*?\]", re.DOTALL)
_TRAILING_COMMA_PATTERN = re.compile(r",(\s*})")


def extract_json(raw_text: str) -> str:
    """
    Return the first bracketed JSON array found in ``raw_text``.

    Leading fence characters are stripped twice to cope with doubled fences.
    Returns an empty string when no array is present or extraction fails.
    """
    try:
        text = raw_text.lstrip(LEADING_FENCE_CHARS)
        text = text.lstrip(LEADING_FENCE_CHARS)
        text = text.rstrip(TRAILING_FENCE_CHARS)

        match = _ARRAY_PATTERN.search(text)
        if not match:
            logger.debug("No JSON array found in model response")
            return ""

        json_text = match.group(0).strip()
        json_text = _TRAILING_COMMA_PATTERN.sub(r"\1", json_text)
        logger.debug("Extracted JSON array (%d chars)", len(json_text))
        return json_text
    except Exception as e:
        logger.debug("JSON extraction failed: %s", e)
        return ""

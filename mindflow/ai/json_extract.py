"""
Tolerant JSON extraction for text-generation output.

Models are told to answer with raw JSON but regularly wrap it in a fenced
code block anyway. extract_json() removes one leading fence (```, ```json,
```JSON, ```javascript ...) and one trailing fence before parsing.
"""

import json
import re
from typing import Any

from mindflow.ai.errors import MalformedGenerationError

_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*")
_TRAILING_FENCE = "```"


def strip_code_fence(raw_text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    text = raw_text.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    if text.endswith(_TRAILING_FENCE):
        text = text[: -len(_TRAILING_FENCE)]
    return text.strip()


def extract_json(raw_text: str) -> Any:
    """
    Parse a JSON document out of generated text.

    Raises:
        MalformedGenerationError: empty input or invalid JSON after fence stripping
    """
    if not raw_text or not raw_text.strip():
        raise MalformedGenerationError("No content generated")

    cleaned = strip_code_fence(raw_text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedGenerationError(f"Generated content is not valid JSON: {exc}") from exc

"""Locate and decode the JSON literal embedded in free-form model output."""
from __future__ import annotations

import json
import logging
from typing import Any, Literal

from studyplanner.services.schedule_errors import ExtractionFailure, ParseFailure

logger = logging.getLogger(__name__)

PayloadShape = Literal["object", "array"]

_DELIMITERS = {"object": ("{", "}"), "array": ("[", "]")}
_RAW_PREVIEW_CHARS = 2000


def extract_payload(raw: str, shape: PayloadShape) -> str:
    """Return the text between the first opening and last closing delimiter of ``shape``.

    No bracket balancing is attempted; the model is expected to emit exactly one
    literal, possibly wrapped in prose or a markdown fence.
    """
    opening, closing = _DELIMITERS[shape]
    text = raw or ""
    start = text.find(opening)
    end = text.rfind(closing)
    if start == -1:
        logger.error("No %s literal in model output: %r", shape, text[:_RAW_PREVIEW_CHARS])
        raise ExtractionFailure(details=f"Model output contains no '{opening}'.")
    if end < start:
        logger.error("Unterminated %s literal in model output: %r", shape, text[:_RAW_PREVIEW_CHARS])
        raise ExtractionFailure(details=f"Model output has no '{closing}' after the first '{opening}'.")
    return text[start : end + 1]


def parse_payload(raw: str, shape: PayloadShape) -> Any:
    """Extract and JSON-decode the literal, checking it has the requested shape."""
    literal = extract_payload(raw, shape)
    try:
        value = json.loads(literal)
    except json.JSONDecodeError as exc:
        logger.error("Model output is not valid JSON (%s): %r", exc, raw[:_RAW_PREVIEW_CHARS])
        raise ParseFailure(details=f"Failed to generate valid JSON from AI: {exc.msg}") from exc

    expected = dict if shape == "object" else list
    if not isinstance(value, expected):
        raise ParseFailure(details=f"Expected a JSON {shape}, got {type(value).__name__}.")
    return value

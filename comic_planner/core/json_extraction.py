"""
JSON extraction and repair for raw model responses.

Models wrap JSON in code fences, leave trailing commas, write heights as
6'2" inside string values, drift into JSON5 (single quotes, bare keys,
comments), or add prose after the closing brace. This module cleans those up
before strict parsing and falls back to JSON5, then to partial decoding.
"""

import json
import logging
import re
from typing import Any, Optional

import json5

from .exceptions import ResponseParseError

logger = logging.getLogger("comic_planner.json")

_FENCE_OPEN = re.compile(r"^```(?:json|JSON)?\s*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_HEIGHT_QUOTE = re.compile(r"(\d)'(\d{1,2})\"")


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN.sub("", cleaned)
        cleaned = _FENCE_CLOSE.sub("", cleaned)
    return cleaned.strip()


def repair_json_text(text: str) -> str:
    """Fix trailing commas and unescaped height quotes inside string values."""
    cleaned = _TRAILING_COMMA.sub(r"\1", text)

    def _fix_height(match: re.Match) -> str:
        before = cleaned[max(0, match.start() - 50):match.start()]
        # only inside a string value: the nearest opened value is still open
        opened = before.rfind('": "')
        if opened >= 0 and '"' not in before[opened + 4:]:
            return f"{match.group(1)}'{match.group(2)} inches"
        return match.group(0)

    return _HEIGHT_QUOTE.sub(_fix_height, cleaned)


def _balanced_object(text: str) -> Optional[str]:
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i, char in enumerate(text[start:], start):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def _lenient_parse(text: str) -> Any:
    try:
        result = json5.loads(text)
        logger.debug("[JSON] JSON5 parse succeeded")
        return result
    except ValueError as e:
        logger.debug(f"[JSON] JSON5 parse failed: {e}")

    # raw_decode from the first bracket ignores trailing prose
    decoder = json.JSONDecoder()
    starts = sorted(i for i in (text.find("{"), text.find("[")) if i >= 0)
    for start_idx in starts:
        try:
            result, _ = decoder.raw_decode(text[start_idx:])
            logger.debug(f"[JSON] raw_decode succeeded at index {start_idx}")
            return result
        except json.JSONDecodeError as e:
            logger.debug(f"[JSON] raw_decode failed at index {start_idx}: {e}")

    candidate = _balanced_object(text)
    if candidate is not None:
        try:
            result = json.loads(candidate)
            logger.debug("[JSON] Balanced brace extraction succeeded")
            return result
        except json.JSONDecodeError as e:
            logger.debug(f"[JSON] Balanced brace extraction failed: {e}")

    raise ResponseParseError("no decodable JSON value", preview=text[:50])


def _decode_embedded_arrays(parsed: Any) -> Any:
    """Decode top-level string values that hold a JSON array."""
    if not isinstance(parsed, dict):
        return parsed
    for key, value in parsed.items():
        if isinstance(value, str) and value.startswith("["):
            try:
                parsed[key] = json.loads(value)
            except json.JSONDecodeError:
                pass
    return parsed


def extract_json(text: str) -> Any:
    """
    Parse a raw model response into a JSON value.

    Raises:
        ResponseParseError: empty response, text that does not start with an
            object or array after fence stripping, or nothing decodable.
    """
    if not text or not text.strip():
        raise ResponseParseError("empty response")

    cleaned = strip_code_fences(text)
    if not cleaned.startswith(("{", "[")):
        preview = cleaned[:50].replace("\n", " ")
        raise ResponseParseError(f'"{preview}..."', preview=preview)

    cleaned = repair_json_text(cleaned)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.debug(f"[JSON] Strict parse failed: {e}")
        parsed = _lenient_parse(cleaned)

    return _decode_embedded_arrays(parsed)

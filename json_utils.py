"""
JSON utilities for the AI Media Studio engine
==============================================

Thin orjson wrapper with a json-module-like interface, plus the helper used
to pull a JSON document out of a model response that may be wrapped in a
markdown code fence.
"""

import re
from typing import Any, Optional

import orjson

_FENCE_PATTERN = re.compile(r"^```(?:json|JSON)?\s*\n?([\s\S]*?)\n?```$")


def dumps(obj: Any, indent: Optional[int] = None, default: callable = None) -> str:
    """
    Serialize obj to a JSON string using orjson.

    Args:
        obj: Object to serialize
        indent: Any non-None value pretty prints with two spaces
        default: Callable for objects orjson cannot serialize (e.g. default=str)

    Returns:
        JSON string (orjson returns bytes; decoded here)
    """
    option = orjson.OPT_SERIALIZE_UUID
    if indent is not None:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, default=default, option=option).decode("utf-8")


def loads(s: Any) -> Any:
    """Deserialize a JSON str/bytes document."""
    return orjson.loads(s)


def strip_code_fence(content: str) -> str:
    """Remove a single surrounding markdown code fence, if present."""
    stripped = content.strip()
    if stripped.count("```") != 2:
        return stripped
    match = _FENCE_PATTERN.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def loads_object(content: str) -> Any:
    """
    Parse a model response into a JSON value.

    Accepts a bare document or one wrapped in a ```json fence. Raises
    JSONDecodeError when the text is not valid JSON.
    """
    return orjson.loads(strip_code_fence(content))


# Compatibility constant
JSONDecodeError = orjson.JSONDecodeError

from __future__ import annotations

import json
from typing import Any, List, Mapping

from nocode_index.errors import PropertyParseError


def looks_like_json(text: str) -> bool:
    """Return True if text is shaped like a JSON object or array.

    This is a shape check only; the text may still fail to decode.
    """

    s = text.strip()
    if len(s) < 2:
        return False
    return (s[0] == "{" and s[-1] == "}") or (s[0] == "[" and s[-1] == "]")


def looks_like_json_object(text: str) -> bool:
    s = text.strip()
    return len(s) >= 2 and s[0] == "{" and s[-1] == "}"


def looks_like_json_array(text: str) -> bool:
    s = text.strip()
    return len(s) >= 2 and s[0] == "[" and s[-1] == "]"


def decode_json(text: str, *, editor_alias: str) -> Any:
    """Decode JSON text, raising PropertyParseError on corrupt input."""

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise PropertyParseError(
            f"invalid JSON for {editor_alias}: {e.msg} (pos {e.pos})", editor_alias=editor_alias
        ) from e


def decode_json_object(text: str, *, editor_alias: str) -> Mapping[str, Any]:
    decoded = decode_json(text, editor_alias=editor_alias)
    if not isinstance(decoded, Mapping):
        raise PropertyParseError(
            f"expected a JSON object for {editor_alias}, got {type(decoded).__name__}",
            editor_alias=editor_alias,
        )
    return decoded


def decode_json_array(text: str, *, editor_alias: str) -> List[Any]:
    decoded = decode_json(text, editor_alias=editor_alias)
    if not isinstance(decoded, list):
        raise PropertyParseError(
            f"expected a JSON array for {editor_alias}, got {type(decoded).__name__}",
            editor_alias=editor_alias,
        )
    return decoded

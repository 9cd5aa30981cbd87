from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from nocode_index.errors import PropertyParseError

from .contracts import Scalar, is_index_scalar
from .registry import ParserRegistry

log = logging.getLogger("nocode_index.parsing")

DEFAULT_MAX_LOGGED_VALUE_CHARS = 200


class ParseStatus(str, enum.Enum):
    PARSED = "parsed"            # the editor's own parser understood the value
    FALLBACK = "fallback"        # the fallback parser understood the value
    UNINDEXABLE = "unindexable"  # nothing understood the value


@dataclass(frozen=True)
class ParseOutcome:
    """Outcome of dispatching one raw property value.

    error is set when the editor's parser raised; the fallback was still
    attempted, so status may be FALLBACK or UNINDEXABLE.
    """

    status: ParseStatus
    values: Tuple[Scalar, ...] = ()
    parser_id: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def indexable(self) -> bool:
        return self.status is not ParseStatus.UNINDEXABLE


def _checked(values: Any, *, editor_alias: str) -> Any:
    """Enforce the parser output contract: None or a list of scalars."""

    if values is None:
        return None
    if not isinstance(values, (list, tuple)):
        raise PropertyParseError(
            f"parser returned {type(values).__name__}, expected a list", editor_alias=editor_alias
        )
    for v in values:
        if not is_index_scalar(v):
            raise PropertyParseError(f"parser returned a non-scalar value: {v!r}", editor_alias=editor_alias)
    return values


def truncate_for_log(raw_value: Any, max_chars: int = DEFAULT_MAX_LOGGED_VALUE_CHARS) -> str:
    text = repr(raw_value)
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + f"...(+{len(text) - max_chars} chars)"


def dispatch_property_value(
    registry: ParserRegistry,
    raw_value: Any,
    *,
    property_alias: str,
    editor_type: str,
    content_type_alias: Optional[str] = None,
    max_logged_value_chars: int = DEFAULT_MAX_LOGGED_VALUE_CHARS,
) -> ParseOutcome:
    """Route a raw property value to its parser, falling back when needed.

    Selection rules (deterministic):
    1) The parser registered for editor_type is tried first, if any.
    2) A parser exception is logged and treated as "not applicable".
    3) "Not applicable" hands the same raw value to the fallback parser.
    4) If the fallback declines too, the value is unindexable (debug log only).

    Never raises for anything a parser does.
    """

    error: Optional[BaseException] = None
    fallback = registry.fallback
    specific = registry.resolve(editor_type)
    if specific is not fallback:
        try:
            values = _checked(specific.parse(raw_value), editor_alias=editor_type)
        except Exception as e:
            shown = truncate_for_log(raw_value, max_logged_value_chars)
            log.warning(
                "property_parse_failed: property %s of type %s could not parse value %s",
                property_alias,
                editor_type,
                shown,
                exc_info=True,
                extra={
                    "property_alias": property_alias,
                    "editor_type": editor_type,
                    "content_type_alias": content_type_alias,
                    "parser_id": specific.metadata.parser_id,
                    "raw_value": shown,
                },
            )
            error = e
            values = None

        if values is not None:
            return ParseOutcome(
                status=ParseStatus.PARSED,
                values=tuple(values),
                parser_id=specific.metadata.parser_id,
            )

    try:
        values = _checked(fallback.parse(raw_value), editor_alias=editor_type)
    except Exception:
        # A custom fallback may misbehave; treat it like "not applicable".
        log.warning(
            "fallback_parse_failed: property %s of type %s",
            property_alias,
            editor_type,
            exc_info=True,
            extra={"property_alias": property_alias, "editor_type": editor_type},
        )
        values = None

    if values is not None:
        return ParseOutcome(
            status=ParseStatus.FALLBACK,
            values=tuple(values),
            parser_id=fallback.metadata.parser_id,
            error=error,
        )

    if log.isEnabledFor(logging.DEBUG):
        log.debug(
            "property_value_unindexable: property %s of content type %s is not supported",
            property_alias,
            content_type_alias,
            extra={
                "property_alias": property_alias,
                "editor_type": editor_type,
                "content_type_alias": content_type_alias,
            },
        )
    return ParseOutcome(status=ParseStatus.UNINDEXABLE, error=error)

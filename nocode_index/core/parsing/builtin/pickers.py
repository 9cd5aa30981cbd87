from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional
from uuid import UUID

from nocode_index.core.parsing import editors
from nocode_index.core.parsing.contracts import ParserMetadata, PropertyTypeParser, Scalar
from nocode_index.core.parsing.json_shape import decode_json_array, looks_like_json_array
from nocode_index.errors import PropertyParseError

_UDI_PREFIX = "umb://"
_GUID_RE = re.compile(r"^[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}$")


def is_udi(text: str) -> bool:
    return text.strip().lower().startswith(_UDI_PREFIX)


def key_from_udi(udi: str, *, editor_alias: str) -> str:
    """Extract the entity key from a UDI such as umb://document/<32 hex>.

    Returns the key in canonical dashed GUID form.
    """

    rest = udi.strip()[len(_UDI_PREFIX):]
    entity_type, _, ident = rest.partition("/")
    if not entity_type or not ident:
        raise PropertyParseError(f"malformed UDI: {udi!r}", editor_alias=editor_alias)
    try:
        return str(UUID(ident))
    except ValueError as e:
        raise PropertyParseError(f"UDI does not carry a GUID: {udi!r}", editor_alias=editor_alias) from e


def _key_from_reference(value: str, *, editor_alias: str) -> Optional[str]:
    s = value.strip()
    if is_udi(s):
        return key_from_udi(s, editor_alias=editor_alias)
    if _GUID_RE.match(s):
        return str(UUID(s))
    return None


@dataclass(frozen=True)
class ContentPickerParser(PropertyTypeParser):
    """Single content reference, stored as a UDI or a bare GUID."""

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="builtin.content_picker",
            editor_alias=editors.CONTENT_PICKER,
            name="Content Picker",
        )

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, UUID):
            return [str(raw_value)]
        if not isinstance(raw_value, str):
            return None
        if raw_value.strip() == "":
            return []
        key = _key_from_reference(raw_value, editor_alias=editors.CONTENT_PICKER)
        return [key] if key is not None else None


@dataclass(frozen=True)
class MultiNodeTreePickerParser(PropertyTypeParser):
    """Comma separated UDIs, e.g. "umb://document/...,umb://document/..."."""

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="builtin.multi_node_tree_picker",
            editor_alias=editors.MULTI_NODE_TREE_PICKER,
            name="Multinode Treepicker",
        )

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, str):
            parts = [p.strip() for p in raw_value.split(",") if p.strip()]
        elif isinstance(raw_value, (list, tuple)) and all(isinstance(p, str) for p in raw_value):
            parts = [p.strip() for p in raw_value if p.strip()]
        else:
            return None

        if not parts:
            return []
        if not any(is_udi(p) for p in parts):
            return None

        # Once one entry is a UDI, every entry has to be.
        return [key_from_udi(p, editor_alias=editors.MULTI_NODE_TREE_PICKER) for p in parts]


@dataclass(frozen=True)
class MultiUrlPickerParser(PropertyTypeParser):
    """JSON array of links.

    Internal links index the linked item's key, external links their URL.
    """

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="builtin.multi_url_picker",
            editor_alias=editors.MULTI_URL_PICKER,
            name="Multi Url Picker",
        )

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, str) and not raw_value.strip():
            return []
        if not isinstance(raw_value, str) or not looks_like_json_array(raw_value):
            return None

        links = decode_json_array(raw_value, editor_alias=editors.MULTI_URL_PICKER)
        values: List[Scalar] = []
        for link in links:
            if not isinstance(link, Mapping):
                raise PropertyParseError(
                    "multi url picker entries must be objects", editor_alias=editors.MULTI_URL_PICKER
                )
            udi = link.get("udi")
            url = link.get("url")
            if isinstance(udi, str) and udi.strip():
                values.append(key_from_udi(udi, editor_alias=editors.MULTI_URL_PICKER))
            elif isinstance(url, str) and url.strip():
                values.append(url.strip())
        return values

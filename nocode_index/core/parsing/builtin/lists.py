from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from nocode_index.core.parsing import editors
from nocode_index.core.parsing.contracts import ParserMetadata, PropertyTypeParser, Scalar
from nocode_index.core.parsing.json_shape import decode_json_array, looks_like_json_array
from nocode_index.errors import PropertyParseError


def _string_items(items: List[Any], *, editor_alias: str) -> List[Scalar]:
    out: List[Scalar] = []
    for item in items:
        if not isinstance(item, str):
            raise PropertyParseError(
                f"expected only strings, got {type(item).__name__}", editor_alias=editor_alias
            )
        s = item.strip()
        if s:
            out.append(s)
    return out


def _json_string_array(raw_value: Any, *, editor_alias: str) -> Optional[List[Scalar]]:
    """Shared shape for editors storing a JSON array of strings."""

    if isinstance(raw_value, list):
        return _string_items(raw_value, editor_alias=editor_alias)
    if isinstance(raw_value, str) and not raw_value.strip():
        return []
    if not isinstance(raw_value, str) or not looks_like_json_array(raw_value):
        return None
    return _string_items(decode_json_array(raw_value, editor_alias=editor_alias), editor_alias=editor_alias)


@dataclass(frozen=True)
class TagsParser(PropertyTypeParser):
    """Tags stored as a JSON array, or as comma separated text (CSV storage)."""

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="builtin.tags", editor_alias=editors.TAGS, name="Tags")

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        values = _json_string_array(raw_value, editor_alias=editors.TAGS)
        if values is not None:
            return values
        if isinstance(raw_value, str):
            return [t.strip() for t in raw_value.split(",") if t.strip()]
        return None


@dataclass(frozen=True)
class MultipleTextStringParser(PropertyTypeParser):
    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="builtin.multiple_textstring",
            editor_alias=editors.MULTIPLE_TEXTSTRING,
            name="Repeatable Textstrings",
        )

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, list):
            return _string_items(raw_value, editor_alias=editors.MULTIPLE_TEXTSTRING)
        if not isinstance(raw_value, str):
            return None
        return [line.strip() for line in raw_value.splitlines() if line.strip()]


@dataclass(frozen=True)
class CheckBoxListParser(PropertyTypeParser):
    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="builtin.checkbox_list",
            editor_alias=editors.CHECKBOX_LIST,
            name="Checkbox List",
        )

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        return _json_string_array(raw_value, editor_alias=editors.CHECKBOX_LIST)


@dataclass(frozen=True)
class DropDownListParser(PropertyTypeParser):
    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="builtin.dropdown_list",
            editor_alias=editors.DROPDOWN_LIST,
            name="Dropdown",
        )

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        return _json_string_array(raw_value, editor_alias=editors.DROPDOWN_LIST)

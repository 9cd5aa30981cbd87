from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from nocode_index.core.parsing import editors
from nocode_index.core.parsing.contracts import ParserMetadata, PropertyTypeParser, Scalar
from nocode_index.core.parsing.json_shape import decode_json_object, looks_like_json_object
from nocode_index.errors import PropertyParseError


@dataclass(frozen=True)
class ColorPickerParser(PropertyTypeParser):
    """Built-in parser for the color picker editor.

    Expected raw value: a JSON object carrying the selected color, e.g.
    '{"value": "#ff0000", "label": "Red"}'. Only "value" is indexed.

    Outcomes:
    - blank text -> [] (no color selected)
    - not text, or text that is not shaped like a JSON object -> None
      (the fallback parser decides)
    - JSON-shaped but undecodable, or "value" missing/not a scalar string
      -> PropertyParseError
    - otherwise -> [value]
    """

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="builtin.color_picker",
            editor_alias=editors.COLOR_PICKER,
            name="Color Picker",
        )

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, str) and not raw_value.strip():
            return []
        if not isinstance(raw_value, str) or not looks_like_json_object(raw_value):
            return None

        dto = decode_json_object(raw_value, editor_alias=editors.COLOR_PICKER)
        value = dto.get("value")
        if not isinstance(value, str):
            raise PropertyParseError(
                "color picker value is missing or not a string", editor_alias=editors.COLOR_PICKER
            )
        return [value]

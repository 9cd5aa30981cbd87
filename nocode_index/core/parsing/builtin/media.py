from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional
from uuid import UUID

from nocode_index.core.parsing import editors
from nocode_index.core.parsing.contracts import ParserMetadata, PropertyTypeParser, Scalar
from nocode_index.core.parsing.json_shape import (
    decode_json_array,
    decode_json_object,
    looks_like_json_array,
    looks_like_json_object,
)
from nocode_index.errors import PropertyParseError


@dataclass(frozen=True)
class MediaPickerParser(PropertyTypeParser):
    """JSON array of picked media: [{"key": ..., "mediaKey": ..., "crops": [...]}].

    Indexes the picked media keys. Entries without a mediaKey are skipped.
    """

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="builtin.media_picker",
            editor_alias=editors.MEDIA_PICKER,
            name="Media Picker",
        )

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, str) and not raw_value.strip():
            return []
        if not isinstance(raw_value, str) or not looks_like_json_array(raw_value):
            return None

        items = decode_json_array(raw_value, editor_alias=editors.MEDIA_PICKER)
        keys: List[Scalar] = []
        for item in items:
            if not isinstance(item, Mapping):
                raise PropertyParseError(
                    "media picker entries must be objects", editor_alias=editors.MEDIA_PICKER
                )
            media_key = item.get("mediaKey")
            if media_key is None:
                continue
            try:
                keys.append(str(UUID(str(media_key))))
            except ValueError as e:
                raise PropertyParseError(
                    f"invalid mediaKey: {media_key!r}", editor_alias=editors.MEDIA_PICKER
                ) from e
        return keys


@dataclass(frozen=True)
class ImageCropperParser(PropertyTypeParser):
    """JSON object {"src": "/media/...", "crops": [...]}; indexes src."""

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="builtin.image_cropper",
            editor_alias=editors.IMAGE_CROPPER,
            name="Image Cropper",
        )

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, str) and not raw_value.strip():
            return []
        if not isinstance(raw_value, str) or not looks_like_json_object(raw_value):
            return None

        dto = decode_json_object(raw_value, editor_alias=editors.IMAGE_CROPPER)
        src = dto.get("src")
        if src is None:
            return []
        if not isinstance(src, str):
            raise PropertyParseError("image cropper src must be a string", editor_alias=editors.IMAGE_CROPPER)
        return [src] if src.strip() else []

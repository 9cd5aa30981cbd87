from __future__ import annotations

from functools import lru_cache

from nocode_index.core.parsing.builtin import (
    BooleanParser,
    CheckBoxListParser,
    ColorPickerParser,
    ContentPickerParser,
    DateTimeParser,
    DecimalParser,
    DropDownListParser,
    ImageCropperParser,
    IntegerParser,
    MarkdownParser,
    MediaPickerParser,
    MultiNodeTreePickerParser,
    MultipleTextStringParser,
    MultiUrlPickerParser,
    RichTextParser,
    SliderParser,
    TagsParser,
)
from nocode_index.core.parsing.fallback import FallbackParser
from nocode_index.core.parsing.registry import ParserRegistry


def load_builtin_parsers() -> ParserRegistry:
    """Build a registry holding every built-in parser."""
    parsers = [
        ContentPickerParser(),
        MediaPickerParser(),
        TagsParser(),
        MultipleTextStringParser(),
        CheckBoxListParser(),
        DropDownListParser(),
        ColorPickerParser(),
        SliderParser(),
        IntegerParser(),
        DecimalParser(),
        DateTimeParser(),
        BooleanParser(),
        MultiNodeTreePickerParser(),
        MultiUrlPickerParser(),
        MarkdownParser(),
        ImageCropperParser(),
        RichTextParser(),
    ]
    return ParserRegistry.from_parsers(parsers, fallback=FallbackParser())


@lru_cache(maxsize=1)
def builtin_registry() -> ParserRegistry:
    """Process-wide built-in registry, constructed on first use."""
    return load_builtin_parsers()

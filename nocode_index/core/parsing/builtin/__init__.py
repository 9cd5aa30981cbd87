from .color_picker import ColorPickerParser
from .lists import CheckBoxListParser, DropDownListParser, MultipleTextStringParser, TagsParser
from .media import ImageCropperParser, MediaPickerParser
from .pickers import ContentPickerParser, MultiNodeTreePickerParser, MultiUrlPickerParser
from .scalars import BooleanParser, DateTimeParser, DecimalParser, IntegerParser, SliderParser
from .text import MarkdownParser, RichTextParser

__all__ = [
    "ContentPickerParser",
    "MediaPickerParser",
    "TagsParser",
    "MultipleTextStringParser",
    "CheckBoxListParser",
    "DropDownListParser",
    "ColorPickerParser",
    "SliderParser",
    "IntegerParser",
    "DecimalParser",
    "DateTimeParser",
    "BooleanParser",
    "MultiNodeTreePickerParser",
    "MultiUrlPickerParser",
    "MarkdownParser",
    "ImageCropperParser",
    "RichTextParser",
]

from __future__ import annotations

import re
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import Any, List, Optional

from nocode_index.core.parsing import editors
from nocode_index.core.parsing.contracts import ParserMetadata, PropertyTypeParser, Scalar
from nocode_index.core.parsing.json_shape import decode_json_object, looks_like_json_object
from nocode_index.errors import PropertyParseError

_WS_RE = re.compile(r"\s+")

_MARKDOWN_RULES = (
    (re.compile(r"^```.*$", re.M), ""),
    (re.compile(r"!\[([^\]]*)\]\([^)]*\)"), r"\1"),
    (re.compile(r"\[([^\]]*)\]\([^)]*\)"), r"\1"),
    (re.compile(r"^\s{0,3}#{1,6}\s*", re.M), ""),
    (re.compile(r"^\s{0,3}>\s?", re.M), ""),
    (re.compile(r"^\s*(?:[-*+]|\d+\.)\s+", re.M), ""),
    (re.compile(r"[*_`~]+"), ""),
)

# Content of these elements is never indexed.
_SKIPPED_TAGS = {"script", "style"}


class _TextExtractor(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: List[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in _SKIPPED_TAGS:
            self._skip_depth += 1
        else:
            self.parts.append(" ")

    def handle_endtag(self, tag):
        if tag in _SKIPPED_TAGS and self._skip_depth:
            self._skip_depth -= 1
        else:
            self.parts.append(" ")

    def handle_data(self, data):
        if not self._skip_depth:
            self.parts.append(data)


def html_to_text(markup: str) -> str:
    extractor = _TextExtractor()
    extractor.feed(markup)
    extractor.close()
    return _WS_RE.sub(" ", "".join(extractor.parts)).strip()


def markdown_to_text(markdown: str) -> str:
    text = markdown
    for pattern, repl in _MARKDOWN_RULES:
        text = pattern.sub(repl, text)
    return _WS_RE.sub(" ", text).strip()


@dataclass(frozen=True)
class MarkdownParser(PropertyTypeParser):
    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="builtin.markdown", editor_alias=editors.MARKDOWN, name="Markdown Editor")

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if not isinstance(raw_value, str):
            return None
        text = markdown_to_text(raw_value)
        return [text] if text else []


@dataclass(frozen=True)
class RichTextParser(PropertyTypeParser):
    """Rich text, stored either as plain markup or as a JSON object
    {"markup": "<p>...</p>", "blocks": {...}}.

    Tags are stripped; block data is not indexed.
    """

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="builtin.rich_text", editor_alias=editors.RICH_TEXT, name="Rich Text")

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if not isinstance(raw_value, str):
            return None

        markup: Any = raw_value
        if looks_like_json_object(raw_value):
            markup = decode_json_object(raw_value, editor_alias=editors.RICH_TEXT).get("markup")
            if markup is None:
                return []
            if not isinstance(markup, str):
                raise PropertyParseError("rich text markup must be a string", editor_alias=editors.RICH_TEXT)

        text = html_to_text(markup)
        return [text] if text else []

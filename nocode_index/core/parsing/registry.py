from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from nocode_index.errors import RegistryConfigurationError

from .contracts import PropertyTypeParser
from .fallback import FallbackParser


@dataclass(frozen=True)
class ParserRegistry:
    """Immutable mapping from editor type to property type parser.

    Built once from a fixed set of parsers and shared read-only by every
    indexing call. There is no register() after construction.

    - resolve: O(1) average
    - list_parsers: O(n)
    """

    _parsers: Mapping[str, PropertyTypeParser] = field(repr=False)
    fallback: PropertyTypeParser = field(default_factory=FallbackParser)

    @classmethod
    def from_parsers(
        cls,
        parsers: Iterable[PropertyTypeParser],
        *,
        fallback: Optional[PropertyTypeParser] = None,
    ) -> "ParserRegistry":
        """Build a registry keyed by each parser's editor alias."""
        table: Dict[str, PropertyTypeParser] = {}
        for parser in parsers:
            if not isinstance(parser, PropertyTypeParser):
                raise RegistryConfigurationError(f"Not a property type parser: {parser!r}")
            alias = parser.metadata.editor_alias
            if alias in table:
                raise RegistryConfigurationError(f"Duplicate editor type: {alias}")
            table[alias] = parser
        return cls(_parsers=MappingProxyType(table), fallback=fallback or FallbackParser())

    def resolve(self, editor_type: Optional[str]) -> PropertyTypeParser:
        """Return the parser for an editor type, or the fallback parser."""
        if editor_type is None:
            return self.fallback
        return self._parsers.get(editor_type, self.fallback)

    def editor_types(self) -> List[str]:
        """List editor types in registration order."""
        return list(self._parsers.keys())

    def list_parsers(self) -> List[PropertyTypeParser]:
        """List specific parsers in registration order."""
        return list(self._parsers.values())

    def __len__(self) -> int:
        return len(self._parsers)

    def __contains__(self, editor_type: object) -> bool:
        return editor_type in self._parsers

from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, TypeVar

from nocode_index.config import IndexerConfig
from nocode_index.core.definitions.models import DefinitionSnapshot
from nocode_index.core.parsing.contracts import Scalar
from nocode_index.core.parsing.dispatch import ParseOutcome, dispatch_property_value
from nocode_index.core.parsing.loader import builtin_registry
from nocode_index.core.parsing.registry import ParserRegistry

from .content import ContentItem
from .models import IndexField, IndexFieldValue

log = logging.getLogger("nocode_index.indexing")

T = TypeVar("T", bound=Hashable)


def _distinct_scalars(values: Iterable[Scalar]) -> Tuple[Scalar, ...]:
    """Deduplicate preserving first-seen order.

    Values are compared together with their type, so True and 1 (or 1 and
    1.0) stay distinct.
    """

    seen: Dict[Tuple[type, Any], Scalar] = {}
    for v in values:
        seen.setdefault((type(v), v), v)
    return tuple(seen.values())


def _union(*groups: Iterable[T]) -> List[T]:
    """Ordered set union."""

    return list(dict.fromkeys(item for group in groups for item in group))


class NoCodeContentIndexer:
    """Computes filter and sort index field values for content items.

    The indexer holds a DefinitionSnapshot and an immutable ParserRegistry.
    It has no per-call mutable state, so one instance can serve concurrent
    indexing calls. Replace the definitions with use_definitions() when they
    change; each call works against the snapshot it saw when it started.
    """

    def __init__(
        self,
        definitions: DefinitionSnapshot,
        *,
        registry: Optional[ParserRegistry] = None,
        config: Optional[IndexerConfig] = None,
    ) -> None:
        self._definitions = definitions
        self._registry = registry or builtin_registry()
        self._config = config or IndexerConfig()

    @property
    def definitions(self) -> DefinitionSnapshot:
        return self._definitions

    @property
    def registry(self) -> ParserRegistry:
        return self._registry

    def use_definitions(self, definitions: DefinitionSnapshot) -> None:
        """Swap in a newly resolved definition snapshot."""
        self._definitions = definitions

    def get_field_values(self, content: ContentItem, locale: Optional[str] = None) -> List[IndexFieldValue]:
        """Filter field values followed by sort field values for one content item."""

        definitions = self._definitions
        return _union(
            self._filter_field_values(definitions, content, locale),
            self._sort_field_values(definitions, content, locale),
        )

    def get_fields(self) -> List[IndexField]:
        """Schema of every field this indexer can emit, plus buffer fields."""

        definitions = self._definitions
        declared = [*definitions.filters, *definitions.sorts, *definitions.buffer_fields]
        return _union(
            IndexField(
                field_name=d.index_field_name,
                field_type=d.index_field_type,
                varies_by_culture=False,
            )
            for d in declared
        )

    def filter_field_values(self, content: ContentItem, locale: Optional[str] = None) -> List[IndexFieldValue]:
        return self._filter_field_values(self._definitions, content, locale)

    def sort_field_values(self, content: ContentItem, locale: Optional[str] = None) -> List[IndexFieldValue]:
        return self._sort_field_values(self._definitions, content, locale)

    def _filter_field_values(
        self, definitions: DefinitionSnapshot, content: ContentItem, locale: Optional[str]
    ) -> List[IndexFieldValue]:
        out: List[IndexFieldValue] = []
        for definition in definitions.filters:
            # filters can have multiple values per content item
            collected: List[Scalar] = []
            for alias in definition.property_aliases:
                outcome = self._parse_property(content, alias, locale)
                if outcome is not None:
                    collected.extend(outcome.values)

            out.append(
                IndexFieldValue(field_name=definition.index_field_name, values=_distinct_scalars(collected))
            )
        return out

    def _sort_field_values(
        self, definitions: DefinitionSnapshot, content: ContentItem, locale: Optional[str]
    ) -> List[IndexFieldValue]:
        out: List[IndexFieldValue] = []
        for definition in definitions.sorts:
            # sorting only works with a single value per content item
            outcome = self._parse_property(content, definition.property_alias, locale)
            if outcome is None or not outcome.values:
                continue
            out.append(IndexFieldValue(field_name=definition.index_field_name, values=outcome.values[:1]))
        return out

    def _parse_property(self, content: ContentItem, alias: str, locale: Optional[str]) -> Optional[ParseOutcome]:
        """Read and parse one property value.

        Returns None when there is nothing to index: the property is missing,
        has no value for the locale, its editor type is unknown, or no parser
        understood the value.
        """

        content_type_alias = getattr(content, "content_type_alias", None)
        try:
            if not content.has_property(alias):
                return None
            raw_value = content.get_value(alias, locale)
            if raw_value is None:
                return None
            editor_type = content.editor_type_of(alias)
        except Exception:
            log.warning(
                "property_read_failed: property %s of content type %s could not be read",
                alias,
                content_type_alias,
                exc_info=True,
                extra={"property_alias": alias, "content_type_alias": content_type_alias, "locale": locale},
            )
            return None

        if editor_type is None:
            log.warning(
                "property_type_missing: the property type for property %s was not found on content type %s",
                alias,
                content_type_alias,
                extra={"property_alias": alias, "content_type_alias": content_type_alias},
            )
            return None

        outcome = dispatch_property_value(
            self._registry,
            raw_value,
            property_alias=alias,
            editor_type=editor_type,
            content_type_alias=content_type_alias,
            max_logged_value_chars=self._config.max_logged_value_chars,
        )
        return outcome if outcome.indexable else None

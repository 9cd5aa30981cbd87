from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Tuple
from uuid import UUID, uuid4

from nocode_index.errors import DefinitionConfigurationError

if TYPE_CHECKING:
    from .source import DefinitionSource


class PrimitiveFieldType(str, enum.Enum):
    """Field type chosen for a filter or sort definition."""

    STRING = "String"
    NUMBER = "Number"
    DATE = "Date"


class IndexFieldType(str, enum.Enum):
    """Field type as handed to the index backend."""

    STRING_RAW = "StringRaw"
    STRING_ANALYZED = "StringAnalyzed"
    STRING_SORTABLE = "StringSortable"
    NUMBER = "Number"
    DATE = "Date"


def _filter_field_type(primitive: PrimitiveFieldType) -> IndexFieldType:
    # Filters match on exact values.
    if primitive is PrimitiveFieldType.STRING:
        return IndexFieldType.STRING_RAW
    if primitive is PrimitiveFieldType.NUMBER:
        return IndexFieldType.NUMBER
    return IndexFieldType.DATE


def _sort_field_type(primitive: PrimitiveFieldType) -> IndexFieldType:
    if primitive is PrimitiveFieldType.STRING:
        return IndexFieldType.STRING_SORTABLE
    if primitive is PrimitiveFieldType.NUMBER:
        return IndexFieldType.NUMBER
    return IndexFieldType.DATE


def _require_text(value: str, what: str) -> str:
    if not isinstance(value, str) or value.strip() == "":
        raise DefinitionConfigurationError(f"{what} must be a non-empty string")
    return value


@dataclass(frozen=True)
class FilterDefinition:
    """A filter: one index field fed by one or more content properties.

    property_aliases is ordered and non-empty. Duplicates are tolerated since
    filter values are deduplicated.
    """

    name: str
    alias: str
    field_name: str
    primitive_field_type: PrimitiveFieldType
    property_aliases: Tuple[str, ...]
    key: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        _require_text(self.field_name, "field_name")
        aliases = (
            (self.property_aliases,)
            if isinstance(self.property_aliases, str)
            else tuple(self.property_aliases or ())
        )
        if not aliases:
            raise DefinitionConfigurationError(f"filter {self.alias!r} has no property aliases")
        for a in aliases:
            _require_text(a, "property alias")
        object.__setattr__(self, "property_aliases", aliases)
        object.__setattr__(self, "primitive_field_type", PrimitiveFieldType(self.primitive_field_type))

    @property
    def index_field_name(self) -> str:
        return self.field_name

    @property
    def index_field_type(self) -> IndexFieldType:
        return _filter_field_type(self.primitive_field_type)


@dataclass(frozen=True)
class SortDefinition:
    """A sort: one index field fed by exactly one content property."""

    name: str
    alias: str
    field_name: str
    primitive_field_type: PrimitiveFieldType
    property_alias: str
    key: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        _require_text(self.field_name, "field_name")
        _require_text(self.property_alias, "property alias")
        object.__setattr__(self, "primitive_field_type", PrimitiveFieldType(self.primitive_field_type))

    @property
    def index_field_name(self) -> str:
        return self.field_name

    @property
    def index_field_type(self) -> IndexFieldType:
        return _sort_field_type(self.primitive_field_type)


@dataclass(frozen=True)
class FieldDescriptor:
    """A statically declared index field (buffer field)."""

    field_name: str
    field_type: IndexFieldType

    def __post_init__(self) -> None:
        _require_text(self.field_name, "field_name")
        object.__setattr__(self, "field_type", IndexFieldType(self.field_type))

    @property
    def index_field_name(self) -> str:
        return self.field_name

    @property
    def index_field_type(self) -> IndexFieldType:
        return self.field_type


@dataclass(frozen=True)
class DefinitionSnapshot:
    """Resolved filters, sorts and buffer fields, read-only for its lifetime."""

    filters: Tuple[FilterDefinition, ...] = ()
    sorts: Tuple[SortDefinition, ...] = ()
    buffer_fields: Tuple[FieldDescriptor, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.filters))
        object.__setattr__(self, "sorts", tuple(self.sorts))
        object.__setattr__(self, "buffer_fields", tuple(self.buffer_fields))

    @classmethod
    def of(
        cls,
        filters: Iterable[FilterDefinition] = (),
        sorts: Iterable[SortDefinition] = (),
        buffer_fields: Iterable[FieldDescriptor] = (),
    ) -> "DefinitionSnapshot":
        return cls(filters=tuple(filters), sorts=tuple(sorts), buffer_fields=tuple(buffer_fields))

    @classmethod
    def from_source(cls, source: "DefinitionSource") -> "DefinitionSnapshot":
        """Resolve a synchronous definition source."""
        return cls.of(
            filters=source.get_all_filter_definitions(),
            sorts=source.get_all_sort_definitions(),
            buffer_fields=source.get_buffer_fields(),
        )

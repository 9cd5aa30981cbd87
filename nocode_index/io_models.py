from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from nocode_index.core.definitions.models import (
    DefinitionSnapshot,
    FieldDescriptor,
    FilterDefinition,
    IndexFieldType,
    PrimitiveFieldType,
    SortDefinition,
)
from nocode_index.core.definitions.source import InMemoryDefinitionSource
from nocode_index.core.indexing.content import InMemoryContentItem, PropertyData
from nocode_index.core.indexing.models import IndexField, IndexFieldValue
from nocode_index.utils.json_safe import to_jsonable


class FilterIn(BaseModel):
    """A filter definition as written in a definitions file."""

    key: Optional[UUID] = None
    name: str
    alias: str
    field_name: str
    primitive_field_type: PrimitiveFieldType = PrimitiveFieldType.STRING
    property_aliases: List[str] = Field(min_length=1)

    def to_definition(self) -> FilterDefinition:
        return FilterDefinition(
            key=self.key or uuid4(),
            name=self.name,
            alias=self.alias,
            field_name=self.field_name,
            primitive_field_type=self.primitive_field_type,
            property_aliases=tuple(self.property_aliases),
        )


class SortIn(BaseModel):
    """A sort definition as written in a definitions file."""

    key: Optional[UUID] = None
    name: str
    alias: str
    field_name: str
    primitive_field_type: PrimitiveFieldType = PrimitiveFieldType.STRING
    property_alias: str

    def to_definition(self) -> SortDefinition:
        return SortDefinition(
            key=self.key or uuid4(),
            name=self.name,
            alias=self.alias,
            field_name=self.field_name,
            primitive_field_type=self.primitive_field_type,
            property_alias=self.property_alias,
        )


class BufferFieldIn(BaseModel):
    field_name: str
    field_type: IndexFieldType = IndexFieldType.STRING_RAW

    def to_descriptor(self) -> FieldDescriptor:
        return FieldDescriptor(field_name=self.field_name, field_type=self.field_type)


class DefinitionsFile(BaseModel):
    """Top-level shape of a definitions JSON file."""

    filters: List[FilterIn] = Field(default_factory=list)
    sorts: List[SortIn] = Field(default_factory=list)
    buffer_fields: List[BufferFieldIn] = Field(default_factory=list)

    def to_source(self) -> InMemoryDefinitionSource:
        return InMemoryDefinitionSource.from_iterables(
            filters=[f.to_definition() for f in self.filters],
            sorts=[s.to_definition() for s in self.sorts],
            buffer_fields=[b.to_descriptor() for b in self.buffer_fields],
        )

    def to_snapshot(self) -> DefinitionSnapshot:
        return self.to_source().snapshot()


class PropertyIn(BaseModel):
    """One content property.

    value holds the invariant value; values holds per-locale values.
    """

    editor_alias: Optional[str] = None
    value: Any = None
    values: Dict[str, Any] = Field(default_factory=dict)

    def to_property(self) -> PropertyData:
        by_locale: Dict[Optional[str], Any] = dict(self.values)
        if self.value is not None or not by_locale:
            by_locale[None] = self.value
        return PropertyData(editor_alias=self.editor_alias, values=by_locale)


class ContentItemFile(BaseModel):
    """Top-level shape of a content item JSON file."""

    content_type_alias: str
    key: Optional[str] = None
    properties: Dict[str, PropertyIn] = Field(default_factory=dict)

    def to_content_item(self) -> InMemoryContentItem:
        return InMemoryContentItem.create(
            self.content_type_alias,
            {alias: p.to_property() for alias, p in self.properties.items()},
            key=self.key,
        )


class FieldValueOut(BaseModel):
    field_name: str
    values: List[Any] = Field(default_factory=list)

    @classmethod
    def from_value(cls, value: IndexFieldValue) -> "FieldValueOut":
        return cls(field_name=value.field_name, values=[to_jsonable(v) for v in value.values])


class FieldOut(BaseModel):
    field_name: str
    field_type: str
    varies_by_culture: bool = False

    @classmethod
    def from_field(cls, field: IndexField) -> "FieldOut":
        return cls(
            field_name=field.field_name,
            field_type=field.field_type.value,
            varies_by_culture=field.varies_by_culture,
        )

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Iterable, List, Protocol, Sequence, runtime_checkable

from .models import DefinitionSnapshot, FieldDescriptor, FilterDefinition, SortDefinition


@runtime_checkable
class DefinitionSource(Protocol):
    """Supplies the current filter/sort definitions and buffer fields."""

    def get_all_filter_definitions(self) -> Sequence[FilterDefinition]: ...

    def get_all_sort_definitions(self) -> Sequence[SortDefinition]: ...

    def get_buffer_fields(self) -> Sequence[FieldDescriptor]: ...


@runtime_checkable
class AsyncDefinitionSource(Protocol):
    """Asynchronous variant, e.g. backed by a remote or async database client."""

    async def get_all_filter_definitions(self) -> Sequence[FilterDefinition]: ...

    async def get_all_sort_definitions(self) -> Sequence[SortDefinition]: ...

    def get_buffer_fields(self) -> Sequence[FieldDescriptor]: ...


def snapshot_from_source(source: DefinitionSource) -> DefinitionSnapshot:
    """Resolve a synchronous source into an immutable snapshot."""

    return DefinitionSnapshot.from_source(source)


async def load_snapshot(source: AsyncDefinitionSource) -> DefinitionSnapshot:
    """Resolve an asynchronous source into an immutable snapshot.

    Filters and sorts are fetched concurrently. Call this outside the
    per-item indexing path and hand the snapshot to the indexer.
    """

    filters, sorts = await asyncio.gather(
        source.get_all_filter_definitions(),
        source.get_all_sort_definitions(),
    )
    return DefinitionSnapshot.of(filters=filters, sorts=sorts, buffer_fields=source.get_buffer_fields())


@dataclass
class InMemoryDefinitionSource:
    """List-backed DefinitionSource (tests, CLI definition files)."""

    filters: List[FilterDefinition] = field(default_factory=list)
    sorts: List[SortDefinition] = field(default_factory=list)
    buffer_fields: List[FieldDescriptor] = field(default_factory=list)

    @classmethod
    def from_iterables(
        cls,
        filters: Iterable[FilterDefinition] = (),
        sorts: Iterable[SortDefinition] = (),
        buffer_fields: Iterable[FieldDescriptor] = (),
    ) -> "InMemoryDefinitionSource":
        return cls(filters=list(filters), sorts=list(sorts), buffer_fields=list(buffer_fields))

    def get_all_filter_definitions(self) -> List[FilterDefinition]:
        return list(self.filters)

    def get_all_sort_definitions(self) -> List[SortDefinition]:
        return list(self.sorts)

    def get_buffer_fields(self) -> List[FieldDescriptor]:
        return list(self.buffer_fields)

    def snapshot(self) -> DefinitionSnapshot:
        return snapshot_from_source(self)

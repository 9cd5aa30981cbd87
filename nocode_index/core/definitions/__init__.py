from .models import (
    DefinitionSnapshot,
    FieldDescriptor,
    FilterDefinition,
    IndexFieldType,
    PrimitiveFieldType,
    SortDefinition,
)
from .source import (
    AsyncDefinitionSource,
    DefinitionSource,
    InMemoryDefinitionSource,
    load_snapshot,
    snapshot_from_source,
)

__all__ = [
    "PrimitiveFieldType",
    "IndexFieldType",
    "FilterDefinition",
    "SortDefinition",
    "FieldDescriptor",
    "DefinitionSnapshot",
    "DefinitionSource",
    "AsyncDefinitionSource",
    "InMemoryDefinitionSource",
    "snapshot_from_source",
    "load_snapshot",
]

"""Index field computation for content items.

The indexer turns a content item into filter and sort index field values,
using the current filter/sort definitions and the property value parsers.
"""

from .content import ContentItem, InMemoryContentItem, PropertyData
from .indexer import NoCodeContentIndexer
from .models import IndexField, IndexFieldValue

__all__ = [
    "ContentItem",
    "PropertyData",
    "InMemoryContentItem",
    "IndexField",
    "IndexFieldValue",
    "NoCodeContentIndexer",
]

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class ContentItem(Protocol):
    """Read access to one content item's properties.

    The raw value shape is defined by the property's editor type and is
    opaque to the indexer.
    """

    @property
    def content_type_alias(self) -> str: ...

    def has_property(self, alias: str) -> bool: ...

    def editor_type_of(self, alias: str) -> Optional[str]: ...

    def get_value(self, alias: str, locale: Optional[str] = None) -> Any: ...


@dataclass(frozen=True)
class PropertyData:
    """One property: its editor type and raw values keyed by locale.

    The None key holds the invariant value.
    """

    editor_alias: Optional[str]
    values: Mapping[Optional[str], Any] = field(default_factory=dict)

    @property
    def varies_by_culture(self) -> bool:
        return any(k is not None for k in self.values)


@dataclass(frozen=True)
class InMemoryContentItem:
    """Immutable in-memory ContentItem.

    Invariant properties answer every locale with their invariant value;
    variant properties answer only the locales they hold.
    """

    content_type_alias: str
    properties: Mapping[str, PropertyData]
    key: Optional[str] = None

    @classmethod
    def create(
        cls,
        content_type_alias: str,
        properties: Mapping[str, PropertyData],
        *,
        key: Optional[str] = None,
    ) -> "InMemoryContentItem":
        copied: Dict[str, PropertyData] = {
            alias: PropertyData(
                editor_alias=p.editor_alias,
                values=MappingProxyType(deepcopy(dict(p.values))),
            )
            for alias, p in properties.items()
        }
        return cls(content_type_alias=content_type_alias, properties=MappingProxyType(copied), key=key)

    def has_property(self, alias: str) -> bool:
        return alias in self.properties

    def editor_type_of(self, alias: str) -> Optional[str]:
        prop = self.properties.get(alias)
        return prop.editor_alias if prop is not None else None

    def get_value(self, alias: str, locale: Optional[str] = None) -> Any:
        prop = self.properties.get(alias)
        if prop is None:
            return None
        if locale in prop.values:
            return prop.values[locale]
        if locale is not None and not prop.varies_by_culture:
            return prop.values.get(None)
        return None

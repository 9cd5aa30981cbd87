from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from nocode_index.core.definitions.models import IndexFieldType
from nocode_index.core.parsing.contracts import Scalar


@dataclass(frozen=True)
class IndexField:
    """Schema record for one index field.

    varies_by_culture is always False; it is kept for index backends that
    expect the flag.
    """

    field_name: str
    field_type: IndexFieldType
    varies_by_culture: bool = False


@dataclass(frozen=True)
class IndexFieldValue:
    """Values of one index field for one content item."""

    field_name: str
    values: Tuple[Scalar, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .contracts import ParserMetadata, PropertyTypeParser, Scalar, is_index_scalar


@dataclass(frozen=True)
class FallbackParser(PropertyTypeParser):
    """Generic parser used when no specific parser applies.

    Raw values that already are primitive scalars (text, number, boolean,
    date) are indexed unchanged. Anything else, non-finite Decimals
    included, is not applicable, which is terminal: the property value is
    not indexed.
    """

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="builtin.fallback", editor_alias="*", name="Fallback")

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if is_index_scalar(raw_value):
            return [raw_value]
        return None

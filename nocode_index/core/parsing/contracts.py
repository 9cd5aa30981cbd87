from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional, Protocol, Union, runtime_checkable

# Atomic values an index field can carry.
Scalar = Union[str, int, float, Decimal, bool, datetime, date]

SCALAR_TYPES = (str, int, float, Decimal, bool, datetime, date)


def is_index_scalar(value: Any) -> bool:
    """True for values an index field can store and deduplicate.

    Non-finite Decimals are excluded: a signaling NaN cannot be hashed.
    """
    if isinstance(value, Decimal):
        return value.is_finite()
    return isinstance(value, SCALAR_TYPES)


@dataclass(frozen=True)
class ParserMetadata:
    """
    Immutable metadata describing a property type parser.
    """
    parser_id: str                 # Unique identifier
    editor_alias: str              # Editor type the parser is registered for
    name: str                      # Human-readable name
    version: str = "1.0"

# ------------------------------
# Parser Interface / Protocol
# ------------------------------

@runtime_checkable
class PropertyTypeParser(Protocol):
    """
    Protocol all property type parsers must implement.

    Parsers are stateless and reentrant. One instance is shared by every
    concurrent indexing call.
    """

    @property
    def metadata(self) -> ParserMetadata:
        """
        Return parser metadata.
        """
        ...

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        """
        Convert a raw property value into index scalars.

        Returns None when the raw value's shape is not one this parser
        handles. Returns a (possibly empty) list when the value was
        understood. Raises only when the shape is applicable but corrupt.
        """
        ...

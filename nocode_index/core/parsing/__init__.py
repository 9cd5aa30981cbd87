"""Property value parsing.

Parsers turn editor-specific raw property values into index scalars.
Dispatch picks the parser registered for an editor type and falls back to a
generic parser when the specific one declines or fails.
"""

from .contracts import SCALAR_TYPES, ParserMetadata, PropertyTypeParser, Scalar, is_index_scalar
from .dispatch import ParseOutcome, ParseStatus, dispatch_property_value
from .fallback import FallbackParser
from .loader import builtin_registry, load_builtin_parsers
from .registry import ParserRegistry

__all__ = [
    "Scalar",
    "SCALAR_TYPES",
    "is_index_scalar",
    "ParserMetadata",
    "PropertyTypeParser",
    "ParserRegistry",
    "FallbackParser",
    "load_builtin_parsers",
    "builtin_registry",
    "ParseStatus",
    "ParseOutcome",
    "dispatch_property_value",
]

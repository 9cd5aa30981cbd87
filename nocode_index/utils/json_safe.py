from __future__ import annotations

import enum
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping
from uuid import UUID


def to_jsonable(obj: Any) -> Any:
    """
    Convert index values and records to JSON-serializable equivalents.

    - Decimals become ints when integral, floats otherwise.
    - does NOT execute or import anything dynamically.

    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj

    if isinstance(obj, enum.Enum):
        return to_jsonable(obj.value)

    if isinstance(obj, Decimal):
        if obj.is_finite() and obj == obj.to_integral_value():
            return int(obj)
        return float(obj)

    # datetime/date -> ISO 8601
    if isinstance(obj, (datetime, date)):
        # keep timezone info if present
        return obj.isoformat()

    if isinstance(obj, UUID):
        return str(obj)

    # dataclasses
    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))

    # mappings
    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}

    # iterables (including set/frozenset/tuple/list)
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_jsonable(x) for x in obj]

    # fallback: string representation
    return str(obj)

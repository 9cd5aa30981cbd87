from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from nocode_index.core.parsing import editors
from nocode_index.core.parsing.contracts import ParserMetadata, PropertyTypeParser, Scalar
from nocode_index.errors import PropertyParseError

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_ISO_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_TRUE_TEXT = {"1", "true"}
_FALSE_TEXT = {"0", "false"}


def _to_decimal(text: str) -> Optional[Decimal]:
    try:
        d = Decimal(text.strip())
    except InvalidOperation:
        return None
    return d if d.is_finite() else None


@dataclass(frozen=True)
class SliderParser(PropertyTypeParser):
    """Single value "10" or range "10,20"; both ends are indexed."""

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="builtin.slider", editor_alias=editors.SLIDER, name="Slider")

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, bool):
            return None
        if isinstance(raw_value, (int, float, Decimal)):
            d = Decimal(str(raw_value))
            return [d] if d.is_finite() else None
        if not isinstance(raw_value, str):
            return None

        parts = [p.strip() for p in raw_value.split(",") if p.strip()]
        if not parts:
            return []
        values = [_to_decimal(p) for p in parts]
        if all(v is None for v in values):
            return None
        if any(v is None for v in values):
            raise PropertyParseError(f"invalid slider range: {raw_value!r}", editor_alias=editors.SLIDER)
        return list(values)


@dataclass(frozen=True)
class IntegerParser(PropertyTypeParser):
    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="builtin.integer", editor_alias=editors.INTEGER, name="Numeric")

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, bool):
            return None
        if isinstance(raw_value, int):
            return [raw_value]
        if isinstance(raw_value, float):
            return [int(raw_value)] if math.isfinite(raw_value) and raw_value.is_integer() else None
        if isinstance(raw_value, Decimal):
            if not raw_value.is_finite() or raw_value != raw_value.to_integral_value():
                return None
            return [int(raw_value)]
        if not isinstance(raw_value, str):
            return None

        s = raw_value.strip()
        if s == "":
            return []
        return [int(s)] if _INTEGER_RE.match(s) else None


@dataclass(frozen=True)
class DecimalParser(PropertyTypeParser):
    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="builtin.decimal", editor_alias=editors.DECIMAL, name="Decimal")

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, bool):
            return None
        if isinstance(raw_value, (int, float, Decimal)):
            d = Decimal(str(raw_value))
            return [d] if d.is_finite() else None
        if not isinstance(raw_value, str):
            return None

        if raw_value.strip() == "":
            return []
        d = _to_decimal(raw_value)
        return [d] if d is not None else None


@dataclass(frozen=True)
class DateTimeParser(PropertyTypeParser):
    """datetime/date objects, or ISO 8601 text.

    Text that starts like an ISO date but fails to parse is corrupt.
    """

    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="builtin.datetime", editor_alias=editors.DATETIME, name="Date Time")

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, datetime):
            return [raw_value]
        if isinstance(raw_value, date):
            return [datetime.combine(raw_value, time.min)]
        if not isinstance(raw_value, str):
            return None

        s = raw_value.strip()
        if s == "":
            return []
        if not _ISO_DATE_PREFIX_RE.match(s):
            return None
        try:
            return [datetime.fromisoformat(s)]
        except ValueError as e:
            raise PropertyParseError(f"invalid date/time: {raw_value!r}", editor_alias=editors.DATETIME) from e


@dataclass(frozen=True)
class BooleanParser(PropertyTypeParser):
    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="builtin.boolean", editor_alias=editors.BOOLEAN, name="Toggle")

    def parse(self, raw_value: Any) -> Optional[List[Scalar]]:
        if isinstance(raw_value, bool):
            return [raw_value]
        if isinstance(raw_value, int):
            return [raw_value != 0] if raw_value in (0, 1) else None
        if not isinstance(raw_value, str):
            return None

        s = raw_value.strip().lower()
        if s == "":
            return []
        if s in _TRUE_TEXT:
            return [True]
        if s in _FALSE_TEXT:
            return [False]
        return None

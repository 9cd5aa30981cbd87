from datetime import date, datetime, timezone
from decimal import Decimal

from nocode_index.core.parsing import FallbackParser


def test_fallback_passes_scalars_through() -> None:
    parser = FallbackParser()
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    assert parser.parse("text") == ["text"]
    assert parser.parse("") == [""]
    assert parser.parse(3) == [3]
    assert parser.parse(2.5) == [2.5]
    assert parser.parse(Decimal("1.10")) == [Decimal("1.10")]
    assert parser.parse(True) == [True]
    assert parser.parse(now) == [now]
    assert parser.parse(date(2024, 5, 1)) == [date(2024, 5, 1)]


def test_fallback_declines_structured_values() -> None:
    parser = FallbackParser()

    assert parser.parse({"a": 1}) is None
    assert parser.parse(["a", "b"]) is None
    assert parser.parse(object()) is None
    assert parser.parse(b"bytes") is None


def test_fallback_declines_non_finite_decimals() -> None:
    parser = FallbackParser()

    assert parser.parse(Decimal("sNaN")) is None
    assert parser.parse(Decimal("NaN")) is None
    assert parser.parse(Decimal("Infinity")) is None

import logging
from dataclasses import dataclass
from decimal import Decimal

from nocode_index.core.definitions import (
    DefinitionSnapshot,
    FieldDescriptor,
    FilterDefinition,
    IndexFieldType,
    PrimitiveFieldType,
    SortDefinition,
)
from nocode_index.core.indexing import (
    IndexField,
    IndexFieldValue,
    InMemoryContentItem,
    NoCodeContentIndexer,
    PropertyData,
)
from nocode_index.core.parsing import ParserMetadata, ParserRegistry


def _filter(field_name, *aliases, primitive=PrimitiveFieldType.STRING) -> FilterDefinition:
    return FilterDefinition(
        name=field_name,
        alias=field_name,
        field_name=field_name,
        primitive_field_type=primitive,
        property_aliases=aliases,
    )


def _sort(field_name, alias, primitive=PrimitiveFieldType.STRING) -> SortDefinition:
    return SortDefinition(
        name=field_name,
        alias=field_name,
        field_name=field_name,
        primitive_field_type=primitive,
        property_alias=alias,
    )


def _item(**props) -> InMemoryContentItem:
    """props: alias -> (editor_alias, invariant value)."""
    return InMemoryContentItem.create(
        "article",
        {alias: PropertyData(editor, {None: value}) for alias, (editor, value) in props.items()},
    )


def _by_field(values):
    return {v.field_name: v for v in values}


def test_tags_filter_is_deduplicated() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(filters=[_filter("tags_filter", "tags")]))
    item = _item(tags=("Umbraco.Tags", '["red","blue","red"]'))

    values = indexer.get_field_values(item)

    assert values == [IndexFieldValue("tags_filter", ("red", "blue"))]


def test_filter_aggregates_and_deduplicates_across_properties() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(filters=[_filter("letters", "first", "second", "first")]))
    item = _item(first=("Umbraco.TextBox", "A"), second=("Umbraco.TextBox", "A"))

    (value,) = indexer.get_field_values(item)

    assert value.field_name == "letters"
    assert value.values == ("A",)


def test_filter_keeps_true_and_one_apart() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(filters=[_filter("mixed", "flag", "count")]))
    item = _item(flag=("Umbraco.TrueFalse", True), count=("Umbraco.Integer", 1))

    (value,) = indexer.get_field_values(item)

    assert value.values == (True, 1)
    assert [type(v) for v in value.values] == [bool, int]


def test_filter_with_nothing_to_index_emits_empty_entry() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(filters=[_filter("missing_filter", "nope")]))

    assert indexer.get_field_values(_item()) == [IndexFieldValue("missing_filter", ())]


def test_sort_for_absent_property_emits_nothing() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(sorts=[_sort("title_sort", "title")]))

    assert indexer.get_field_values(_item(other=("Umbraco.TextBox", "x"))) == []


def test_sort_takes_first_parsed_value() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(sorts=[_sort("tag_sort", "tags")]))
    item = _item(tags=("Umbraco.Tags", '["b","a"]'))

    assert indexer.get_field_values(item) == [IndexFieldValue("tag_sort", ("b",))]


def test_sort_with_empty_parse_result_emits_nothing() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(sorts=[_sort("tag_sort", "tags")]))

    assert indexer.get_field_values(_item(tags=("Umbraco.Tags", "[]"))) == []


def test_color_picker_values_and_fallback() -> None:
    snapshot = DefinitionSnapshot.of(filters=[_filter("color_filter", "color")])
    indexer = NoCodeContentIndexer(snapshot)

    parsed = indexer.get_field_values(_item(color=("Umbraco.ColorPicker", '{"value":"#ff0000"}')))
    fallback = indexer.get_field_values(_item(color=("Umbraco.ColorPicker", "not json")))

    assert parsed == [IndexFieldValue("color_filter", ("#ff0000",))]
    assert fallback == [IndexFieldValue("color_filter", ("not json",))]


def test_filters_come_before_sorts() -> None:
    snapshot = DefinitionSnapshot.of(
        filters=[_filter("tags_filter", "tags")],
        sorts=[_sort("title_sort", "title")],
    )
    indexer = NoCodeContentIndexer(snapshot)
    item = _item(tags=("Umbraco.Tags", '["x"]'), title=("Umbraco.TextBox", "Hello"))

    values = indexer.get_field_values(item)

    assert [v.field_name for v in values] == ["tags_filter", "title_sort"]
    assert indexer.filter_field_values(item) == values[:1]
    assert indexer.sort_field_values(item) == values[1:]


@dataclass(frozen=True)
class _ExplodingParser:
    @property
    def metadata(self) -> ParserMetadata:
        return ParserMetadata(parser_id="test.exploding", editor_alias="Custom.Exploding", name="Exploding")

    def parse(self, raw_value):
        raise RuntimeError("boom")


class _BrokenItem:
    """A content item whose accessor fails for one property."""

    content_type_alias = "broken"

    def has_property(self, alias):
        return True

    def editor_type_of(self, alias):
        return "Umbraco.TextBox"

    def get_value(self, alias, locale=None):
        if alias == "bad":
            raise LookupError("storage hiccup")
        return "ok"


def test_parser_failure_only_affects_its_own_property(caplog) -> None:
    caplog.set_level(logging.WARNING)
    registry = ParserRegistry.from_parsers([_ExplodingParser()])
    snapshot = DefinitionSnapshot.of(
        filters=[_filter("a_filter", "broken", "fine")],
        sorts=[_sort("broken_sort", "broken"), _sort("fine_sort", "fine")],
    )
    indexer = NoCodeContentIndexer(snapshot, registry=registry)
    item = _item(broken=("Custom.Exploding", {"shape": "odd"}), fine=("Umbraco.TextBox", "kept"))

    values = _by_field(indexer.get_field_values(item))

    assert values["a_filter"].values == ("kept",)
    assert "broken_sort" not in values
    assert values["fine_sort"].values == ("kept",)
    assert any(r.getMessage().startswith("property_parse_failed") for r in caplog.records)


def test_content_accessor_failure_is_contained(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="nocode_index.indexing")
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(filters=[_filter("f", "bad", "good")]))

    values = indexer.get_field_values(_BrokenItem())

    assert values == [IndexFieldValue("f", ("ok",))]
    assert any(r.getMessage().startswith("property_read_failed") for r in caplog.records)


def test_missing_editor_type_skips_property(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="nocode_index.indexing")
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(sorts=[_sort("s", "orphan")]))
    item = InMemoryContentItem.create("article", {"orphan": PropertyData(None, {None: "value"})})

    assert indexer.get_field_values(item) == []
    records = [r for r in caplog.records if r.name == "nocode_index.indexing"]
    assert records and records[0].property_alias == "orphan"


def test_locale_selects_variant_values() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(sorts=[_sort("title_sort", "title")]))
    item = InMemoryContentItem.create(
        "article",
        {"title": PropertyData("Umbraco.TextBox", {"en-US": "Hello", "da-DK": "Hej"})},
    )

    assert indexer.get_field_values(item, "da-DK") == [IndexFieldValue("title_sort", ("Hej",))]
    assert indexer.get_field_values(item, "de-DE") == []
    assert indexer.get_field_values(item) == []


def test_get_field_values_is_idempotent_and_does_not_mutate_item() -> None:
    snapshot = DefinitionSnapshot.of(
        filters=[_filter("tags_filter", "tags")],
        sorts=[_sort("count_sort", "count", PrimitiveFieldType.NUMBER)],
    )
    indexer = NoCodeContentIndexer(snapshot)
    item = _item(tags=("Umbraco.Tags", '["a","b"]'), count=("Umbraco.Integer", "7"))
    before = {alias: (p.editor_alias, dict(p.values)) for alias, p in item.properties.items()}

    first = indexer.get_field_values(item, "en-US")
    second = indexer.get_field_values(item, "en-US")

    assert first == second
    assert {alias: (p.editor_alias, dict(p.values)) for alias, p in item.properties.items()} == before


def test_get_fields_is_union_of_definitions_and_buffer_fields() -> None:
    snapshot = DefinitionSnapshot.of(
        filters=[_filter("tags_filter", "tags"), _filter("price_filter", "price", primitive=PrimitiveFieldType.NUMBER)],
        sorts=[_sort("title_sort", "title"), _sort("date_sort", "date", PrimitiveFieldType.DATE)],
        buffer_fields=[FieldDescriptor("buffer_1", IndexFieldType.STRING_ANALYZED)],
    )
    indexer = NoCodeContentIndexer(snapshot)

    fields = indexer.get_fields()

    assert fields == [
        IndexField("tags_filter", IndexFieldType.STRING_RAW),
        IndexField("price_filter", IndexFieldType.NUMBER),
        IndexField("title_sort", IndexFieldType.STRING_SORTABLE),
        IndexField("date_sort", IndexFieldType.DATE),
        IndexField("buffer_1", IndexFieldType.STRING_ANALYZED),
    ]
    assert all(f.varies_by_culture is False for f in fields)


def test_use_definitions_swaps_snapshot() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot())
    item = _item(tags=("Umbraco.Tags", '["x"]'))
    assert indexer.get_field_values(item) == []
    assert indexer.get_fields() == []

    indexer.use_definitions(DefinitionSnapshot.of(filters=[_filter("tags_filter", "tags")]))

    assert indexer.get_field_values(item) == [IndexFieldValue("tags_filter", ("x",))]


def test_signaling_nan_is_not_indexed() -> None:
    snapshot = DefinitionSnapshot.of(
        filters=[_filter("num_filter", "num")],
        sorts=[_sort("num_sort", "num", PrimitiveFieldType.NUMBER)],
    )
    indexer = NoCodeContentIndexer(snapshot)
    item = _item(num=("Custom.Number", Decimal("sNaN")))

    assert indexer.get_field_values(item) == [IndexFieldValue("num_filter", ())]


def test_blank_checkbox_list_yields_empty_filter_entry() -> None:
    indexer = NoCodeContentIndexer(DefinitionSnapshot.of(filters=[_filter("cb", "choices")]))

    assert indexer.get_field_values(_item(choices=("Umbraco.CheckBoxList", ""))) == [IndexFieldValue("cb", ())]

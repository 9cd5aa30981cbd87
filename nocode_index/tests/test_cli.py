import json
from pathlib import Path

import pytest

from nocode_index.cli.main import main

DEFINITIONS = {
    "filters": [
        {
            "name": "Tags",
            "alias": "tags",
            "field_name": "tags_filter",
            "primitive_field_type": "String",
            "property_aliases": ["tags"],
        },
        {
            "name": "Price",
            "alias": "price",
            "field_name": "price_filter",
            "primitive_field_type": "Number",
            "property_aliases": ["price"],
        },
    ],
    "sorts": [
        {
            "name": "Published",
            "alias": "published",
            "field_name": "published_sort",
            "primitive_field_type": "Date",
            "property_alias": "published",
        }
    ],
    "buffer_fields": [{"field_name": "buffer_1", "field_type": "StringRaw"}],
}

CONTENT = {
    "content_type_alias": "article",
    "properties": {
        "tags": {"editor_alias": "Umbraco.Tags", "value": '["red", "blue", "red"]'},
        "price": {"editor_alias": "Umbraco.Decimal", "values": {"en-US": "9.50", "da-DK": "70"}},
        "published": {"editor_alias": "Umbraco.DateTime", "value": "2024-05-01T10:30:00"},
    },
}


@pytest.fixture(autouse=True)
def _no_env_db(monkeypatch) -> None:
    monkeypatch.delenv("NOCODE_DEFINITIONS_DB", raising=False)


def _write(tmp_path: Path, name: str, payload) -> Path:
    p = tmp_path / name
    p.write_text(json.dumps(payload), encoding="utf-8")
    return p


def test_index_content_from_definitions_file(tmp_path: Path, capsys) -> None:
    defs = _write(tmp_path, "definitions.json", DEFINITIONS)
    content = _write(tmp_path, "content.json", CONTENT)

    rc = main(["index-content", str(content), "--definitions", str(defs), "--locale", "en-US"])

    assert rc == 0
    out = {v["field_name"]: v["values"] for v in json.loads(capsys.readouterr().out)}
    assert out == {
        "tags_filter": ["red", "blue"],
        "price_filter": [9.5],
        "published_sort": ["2024-05-01T10:30:00"],
    }


def test_list_fields_from_db(tmp_path: Path, capsys) -> None:
    defs = _write(tmp_path, "definitions.json", DEFINITIONS)
    db = tmp_path / "definitions.db"

    assert main(["db-init", "--db", str(db)]) == 0
    assert main(["db-import", "--db", str(db), "--definitions", str(defs)]) == 0
    capsys.readouterr()

    assert main(["list-fields", "--db", str(db)]) == 0
    fields = json.loads(capsys.readouterr().out)

    # Buffer fields are not stored in the database.
    assert [(f["field_name"], f["field_type"]) for f in fields] == [
        ("tags_filter", "StringRaw"),
        ("price_filter", "Number"),
        ("published_sort", "Date"),
    ]
    assert all(f["varies_by_culture"] is False for f in fields)


def test_list_parsers(capsys) -> None:
    assert main(["list-parsers"]) == 0
    out = capsys.readouterr().out
    assert "Umbraco.ColorPicker  builtin.color_picker" in out
    assert "(fallback)" in out


def test_missing_inputs_exit_2(tmp_path: Path, capsys) -> None:
    content = _write(tmp_path, "content.json", CONTENT)

    assert main(["index-content", str(content)]) == 2
    assert "no definitions" in capsys.readouterr().err

    assert main(["index-content", str(tmp_path / "nope.json"), "--definitions", str(content)]) == 2
    assert "file not found" in capsys.readouterr().err


def test_invalid_definitions_file_exit_2(tmp_path: Path, capsys) -> None:
    defs = _write(tmp_path, "definitions.json", {"filters": [{"name": "x", "alias": "x", "field_name": "x"}]})

    assert main(["list-fields", "--definitions", str(defs)]) == 2
    assert "invalid definitions file" in capsys.readouterr().err

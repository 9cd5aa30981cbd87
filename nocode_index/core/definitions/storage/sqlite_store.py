from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple
from uuid import UUID

from nocode_index.errors import DefinitionConfigurationError, DefinitionNotFoundError

from ..models import (
    DefinitionSnapshot,
    FieldDescriptor,
    FilterDefinition,
    PrimitiveFieldType,
    SortDefinition,
)
from ..source import snapshot_from_source


def _json_dumps(obj: Any) -> str:
    """Deterministic JSON serialization."""

    return json.dumps(obj, sort_keys=True, separators=(",", ":"))


def _aliases_from_json(text: str, *, key: str) -> Tuple[str, ...]:
    """Parse a stored property alias list.

    Security: rows are untrusted; anything but a JSON list of strings is rejected.
    """

    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        raise DefinitionConfigurationError(f"filter {key}: property_aliases is not JSON") from e
    if not isinstance(decoded, list) or not all(isinstance(a, str) for a in decoded):
        raise DefinitionConfigurationError(f"filter {key}: property_aliases must be a list of strings")
    return tuple(decoded)


def _primitive(text: str, *, key: str) -> PrimitiveFieldType:
    try:
        return PrimitiveFieldType(text)
    except ValueError as e:
        raise DefinitionConfigurationError(f"definition {key}: unknown primitive field type {text!r}") from e


@dataclass(slots=True)
class SQLiteDefinitionStore:
    """SQLite persistence for filter and sort definitions.

    Implements DefinitionSource. Definitions are returned in insertion order
    (by id); saving an existing key updates it in place and keeps its order.

    Security notes:
    - Treat all values read from the database as untrusted.

    Complexity
    - save_*/get_*/delete_*: O(1) statements
    - get_all_*: O(n) for n stored definitions
    """

    db_path: Path
    buffer_fields: Tuple[FieldDescriptor, ...] = field(default=())

    def __post_init__(self) -> None:
        self.db_path = Path(self.db_path)
        self.buffer_fields = tuple(self.buffer_fields)

    def connect(self) -> sqlite3.Connection:
        """Open a SQLite connection."""

        con = sqlite3.connect(str(self.db_path))
        con.row_factory = sqlite3.Row
        return con

    def init_schema(self) -> None:
        """Create tables if missing."""

        with self.connect() as con:
            con.executescript(
                """
                CREATE TABLE IF NOT EXISTS filters (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    key TEXT NOT NULL UNIQUE,
                    name TEXT NOT NULL,
                    alias TEXT NOT NULL,
                    primitive TEXT NOT NULL,
                    field_name TEXT NOT NULL,
                    property_aliases TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS sorts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    key TEXT NOT NULL UNIQUE,
                    name TEXT NOT NULL,
                    alias TEXT NOT NULL,
                    primitive TEXT NOT NULL,
                    field_name TEXT NOT NULL,
                    property_alias TEXT NOT NULL
                );
                """
            )

    # Filters

    def save_filter(self, definition: FilterDefinition) -> None:
        """Insert a filter, or update the stored filter with the same key."""

        self.init_schema()
        with self.connect() as con:
            con.execute(
                """INSERT INTO filters(key, name, alias, primitive, field_name, property_aliases)
                VALUES(?,?,?,?,?,?)
                ON CONFLICT(key) DO UPDATE SET
                    name = excluded.name,
                    alias = excluded.alias,
                    primitive = excluded.primitive,
                    field_name = excluded.field_name,
                    property_aliases = excluded.property_aliases""",
                (
                    str(definition.key),
                    definition.name,
                    definition.alias,
                    definition.primitive_field_type.value,
                    definition.field_name,
                    _json_dumps(list(definition.property_aliases)),
                ),
            )

    def get_filter(self, key: UUID) -> FilterDefinition:
        self.init_schema()
        with self.connect() as con:
            row = con.execute("SELECT * FROM filters WHERE key = ?", (str(key),)).fetchone()
        if row is None:
            raise DefinitionNotFoundError(f"filter not found: {key}")
        return self._filter_from_row(row)

    def delete_filter(self, key: UUID) -> bool:
        self.init_schema()
        with self.connect() as con:
            cur = con.execute("DELETE FROM filters WHERE key = ?", (str(key),))
            return cur.rowcount > 0

    def get_all_filter_definitions(self) -> List[FilterDefinition]:
        self.init_schema()
        with self.connect() as con:
            rows = con.execute("SELECT * FROM filters ORDER BY id").fetchall()
        return [self._filter_from_row(r) for r in rows]

    # Sorts

    def save_sort(self, definition: SortDefinition) -> None:
        """Insert a sort, or update the stored sort with the same key."""

        self.init_schema()
        with self.connect() as con:
            con.execute(
                """INSERT INTO sorts(key, name, alias, primitive, field_name, property_alias)
                VALUES(?,?,?,?,?,?)
                ON CONFLICT(key) DO UPDATE SET
                    name = excluded.name,
                    alias = excluded.alias,
                    primitive = excluded.primitive,
                    field_name = excluded.field_name,
                    property_alias = excluded.property_alias""",
                (
                    str(definition.key),
                    definition.name,
                    definition.alias,
                    definition.primitive_field_type.value,
                    definition.field_name,
                    definition.property_alias,
                ),
            )

    def get_sort(self, key: UUID) -> SortDefinition:
        self.init_schema()
        with self.connect() as con:
            row = con.execute("SELECT * FROM sorts WHERE key = ?", (str(key),)).fetchone()
        if row is None:
            raise DefinitionNotFoundError(f"sort not found: {key}")
        return self._sort_from_row(row)

    def delete_sort(self, key: UUID) -> bool:
        self.init_schema()
        with self.connect() as con:
            cur = con.execute("DELETE FROM sorts WHERE key = ?", (str(key),))
            return cur.rowcount > 0

    def get_all_sort_definitions(self) -> List[SortDefinition]:
        self.init_schema()
        with self.connect() as con:
            rows = con.execute("SELECT * FROM sorts ORDER BY id").fetchall()
        return [self._sort_from_row(r) for r in rows]

    # Buffer fields and snapshots

    def get_buffer_fields(self) -> List[FieldDescriptor]:
        return list(self.buffer_fields)

    def snapshot(self, *, buffer_fields: Optional[Sequence[FieldDescriptor]] = None) -> DefinitionSnapshot:
        """Read everything once into an immutable snapshot."""

        snap = snapshot_from_source(self)
        if buffer_fields is None:
            return snap
        return DefinitionSnapshot.of(filters=snap.filters, sorts=snap.sorts, buffer_fields=buffer_fields)

    @staticmethod
    def _filter_from_row(row: sqlite3.Row) -> FilterDefinition:
        key = row["key"]
        return FilterDefinition(
            key=UUID(key),
            name=row["name"],
            alias=row["alias"],
            field_name=row["field_name"],
            primitive_field_type=_primitive(row["primitive"], key=key),
            property_aliases=_aliases_from_json(row["property_aliases"], key=key),
        )

    @staticmethod
    def _sort_from_row(row: sqlite3.Row) -> SortDefinition:
        key = row["key"]
        return SortDefinition(
            key=UUID(key),
            name=row["name"],
            alias=row["alias"],
            field_name=row["field_name"],
            primitive_field_type=_primitive(row["primitive"], key=key),
            property_alias=row["property_alias"],
        )

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from pydantic import ValidationError

from nocode_index.config import IndexerConfig
from nocode_index.core.definitions.models import DefinitionSnapshot
from nocode_index.core.definitions.storage.sqlite_store import SQLiteDefinitionStore
from nocode_index.core.indexing.indexer import NoCodeContentIndexer
from nocode_index.core.parsing.loader import builtin_registry
from nocode_index.errors import NoCodeIndexError
from nocode_index.io_models import ContentItemFile, DefinitionsFile, FieldOut, FieldValueOut


class CliInputError(Exception):
    """Bad command line input; reported as "error: ..." with exit code 2."""


def _read_json(path: str) -> dict:
    """Read a JSON file."""

    if not os.path.isfile(path):
        raise CliInputError(f"file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise CliInputError(f"invalid JSON in {path}: {e}") from e


def _read_definitions_file(path: str) -> DefinitionsFile:
    try:
        return DefinitionsFile.model_validate(_read_json(path))
    except ValidationError as e:
        raise CliInputError(f"invalid definitions file {path}: {e}") from e


def _resolve_db(args: argparse.Namespace, cfg: IndexerConfig) -> Optional[str]:
    db = getattr(args, "db", None)
    if db:
        return db
    return str(cfg.definitions_db) if cfg.definitions_db else None


def _load_snapshot(args: argparse.Namespace, cfg: IndexerConfig) -> DefinitionSnapshot:
    """Definitions come from --definitions, else --db, else NOCODE_DEFINITIONS_DB."""

    if getattr(args, "definitions", None):
        return _read_definitions_file(args.definitions).to_snapshot()
    db = _resolve_db(args, cfg)
    if db:
        return SQLiteDefinitionStore(db).snapshot()
    raise CliInputError("no definitions: pass --definitions FILE or --db PATH (or set NOCODE_DEFINITIONS_DB)")


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def cmd_list_parsers(_: argparse.Namespace, cfg: IndexerConfig) -> int:
    """List registered property type parsers."""
    registry = builtin_registry()

    for p in registry.list_parsers():
        md = p.metadata
        print(f"{md.editor_alias}  {md.parser_id}  v{md.version}  name={md.name}")
    print(f"*  {registry.fallback.metadata.parser_id}  (fallback)")
    return 0


def cmd_list_fields(args: argparse.Namespace, cfg: IndexerConfig) -> int:
    """Print the index field schema."""

    indexer = NoCodeContentIndexer(_load_snapshot(args, cfg), config=cfg)
    _print_json([FieldOut.from_field(f).model_dump() for f in indexer.get_fields()])
    return 0


def cmd_index_content(args: argparse.Namespace, cfg: IndexerConfig) -> int:
    """Compute index field values for a content item file."""

    try:
        item = ContentItemFile.model_validate(_read_json(args.content)).to_content_item()
    except ValidationError as e:
        raise CliInputError(f"invalid content file {args.content}: {e}") from e

    indexer = NoCodeContentIndexer(_load_snapshot(args, cfg), config=cfg)
    values = indexer.get_field_values(item, args.locale)
    _print_json([FieldValueOut.from_value(v).model_dump() for v in values])
    return 0


def cmd_db_init(args: argparse.Namespace, cfg: IndexerConfig) -> int:
    db = _resolve_db(args, cfg)
    if not db:
        raise CliInputError("no database: pass --db PATH (or set NOCODE_DEFINITIONS_DB)")
    SQLiteDefinitionStore(db).init_schema()
    print(f"initialized {db}")
    return 0


def cmd_db_import(args: argparse.Namespace, cfg: IndexerConfig) -> int:
    """Store the definitions of a definitions file in a SQLite database."""

    db = _resolve_db(args, cfg)
    if not db:
        raise CliInputError("no database: pass --db PATH (or set NOCODE_DEFINITIONS_DB)")
    source = _read_definitions_file(args.definitions).to_source()
    store = SQLiteDefinitionStore(db)
    for f in source.get_all_filter_definitions():
        store.save_filter(f)
    for s in source.get_all_sort_definitions():
        store.save_sort(s)
    print(f"imported {len(source.filters)} filters and {len(source.sorts)} sorts into {db}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    p = argparse.ArgumentParser(prog="nocode-index", description="nocode-index CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    lp = sub.add_parser("list-parsers", help="List property type parsers")
    lp.set_defaults(func=cmd_list_parsers)

    lf = sub.add_parser("list-fields", help="Print the index field schema")
    lf.add_argument("--definitions", default=None, help="Definitions JSON file")
    lf.add_argument("--db", default=None, help="SQLite definitions database")
    lf.set_defaults(func=cmd_list_fields)

    ic = sub.add_parser("index-content", help="Compute index field values for a content item")
    ic.add_argument("content", help="Content item JSON file")
    ic.add_argument("--definitions", default=None, help="Definitions JSON file")
    ic.add_argument("--db", default=None, help="SQLite definitions database")
    ic.add_argument("--locale", default=None, help="Locale (culture) to index")
    ic.set_defaults(func=cmd_index_content)

    dbi = sub.add_parser("db-init", help="Initialize a SQLite definitions database")
    dbi.add_argument("--db", default=None, help="SQLite definitions database")
    dbi.set_defaults(func=cmd_db_init)

    dbm = sub.add_parser("db-import", help="Import a definitions file into a SQLite database")
    dbm.add_argument("--db", default=None, help="SQLite definitions database")
    dbm.add_argument("--definitions", required=True, help="Definitions JSON file")
    dbm.set_defaults(func=cmd_db_import)

    return p


def main(argv: List[str] | None = None) -> int:
    """CLI entry."""
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = IndexerConfig.from_env()
    level = cfg.log_level if cfg.log_level in logging.getLevelNamesMapping() else "INFO"
    logging.basicConfig(level=level, format="%(levelname)s %(name)s %(message)s")

    try:
        return int(args.func(args, cfg))
    except (CliInputError, NoCodeIndexError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())

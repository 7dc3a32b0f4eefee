import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ddl2struct.errors import SchemaError, UnsupportedStatement
from ddl2struct.sql_parser import CreateTable, Statement


@dataclass(frozen=True)
class Column:
    name: str
    sql_type: str
    length: Optional[str] = None
    enum_values: Tuple[str, ...] = ()
    is_primary_key: bool = False
    is_unique: bool = False
    auto_increment: bool = False
    not_null: bool = False
    default: Optional[str] = None


@dataclass(frozen=True)
class Table:
    name: str
    columns: Tuple[Column, ...] = ()


def _resolve_keys(indexes):
    """
    Scan the index list once.
    Returns (primary key column name or None, set of unique column names).
    Only the first key column of each index counts; a later PRIMARY KEY
    replaces an earlier one.
    """
    primary_key = None
    unique_keys = set()
    for ind in indexes:
        if not ind.columns:
            logging.warning("Index %r has no key columns, ignoring", ind.kind)
            continue
        if ind.kind == "primary key":
            primary_key = ind.columns[0]
        elif ind.kind == "unique key":
            unique_keys.add(ind.columns[0])
        else:
            logging.warning("Unrecognized index kind %r on %s, ignoring", ind.kind, ", ".join(ind.columns))
    return primary_key, unique_keys


def extract_table(stmt: Statement) -> Table:
    """Build the Table model from a parsed CREATE TABLE statement."""
    if not isinstance(stmt, CreateTable):
        raise UnsupportedStatement(getattr(stmt, "kind", type(stmt).__name__))

    if stmt.columns is None:
        raise SchemaError("cannot get table specification")
    if not stmt.name:
        raise SchemaError("table has no name")

    primary_key, unique_keys = _resolve_keys(stmt.indexes)

    columns = []
    for spec in stmt.columns:
        sql_type = spec.type.lower()
        columns.append(Column(
            name=spec.name,
            sql_type=sql_type,
            length=spec.length or None,
            enum_values=tuple(spec.enum_values) if sql_type == "enum" else (),
            is_primary_key=spec.name == primary_key,
            is_unique=spec.name in unique_keys,
            auto_increment=spec.auto_increment,
            not_null=spec.not_null,
            default=spec.default,
        ))

    logging.info("Extracted table %s: %d columns, primary key %s", stmt.name, len(columns), primary_key or "-")
    return Table(name=stmt.name, columns=tuple(columns))

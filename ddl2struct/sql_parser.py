"""
Thin adapter over sqlglot.

Turns the text of one SQL statement into either a CreateTable (table name,
ordered column specs, ordered index specs) or an OtherStatement. Nothing
here knows about Go structs or tags.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError as SqlglotParseError
from sqlglot.errors import TokenError

from ddl2struct.errors import InputError, ParseError

# sqlglot canonical type names that MySQL spells differently
TYPE_KEYWORD_ALIASES = {
    "timestamptz": "timestamp",
    "utinyint": "tinyint",
    "usmallint": "smallint",
    "umediumint": "mediumint",
    "uint": "int",
    "ubigint": "bigint",
    "udouble": "double",
    "udecimal": "decimal",
}

# defaults the MySQL generator would print with a trailing ()
BARE_DEFAULT_KEYWORDS = {
    exp.CurrentTimestamp: "CURRENT_TIMESTAMP",
    exp.CurrentDate: "CURRENT_DATE",
    exp.CurrentTime: "CURRENT_TIME",
}


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    type: str
    length: Optional[str] = None
    default: Optional[str] = None
    enum_values: Tuple[str, ...] = ()
    auto_increment: bool = False
    not_null: bool = False


@dataclass(frozen=True)
class IndexSpec:
    kind: str
    columns: Tuple[str, ...]


@dataclass(frozen=True)
class CreateTable:
    name: str
    # None when the statement has no column list (CREATE TABLE ... AS SELECT)
    columns: Optional[Tuple[ColumnSpec, ...]]
    indexes: Tuple[IndexSpec, ...] = ()


@dataclass(frozen=True)
class OtherStatement:
    kind: str
    sql: str


Statement = Union[CreateTable, OtherStatement]


# ----------------------------------------------------
# File reading
# ----------------------------------------------------
def read_sql_file(path) -> str:
    """Read a DDL file, honouring UTF-16/UTF-8 byte order marks."""
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise InputError(f"cannot read {path}: {e.strerror or e}") from e

    if raw.startswith(b"\xff\xfe"):
        enc = "utf-16-le"
    elif raw.startswith(b"\xfe\xff"):
        enc = "utf-16-be"
    elif raw.startswith(b"\xef\xbb\xbf"):
        enc = "utf-8-sig"
    else:
        try:
            raw.decode("utf-8")
            enc = "utf-8"
        except UnicodeDecodeError:
            enc = "latin-1"

    text = raw.decode(enc, errors="ignore")
    # utf-16 decoding keeps the BOM as U+FEFF
    return text.lstrip("\ufeff")


# ----------------------------------------------------
# Parsing
# ----------------------------------------------------
def parse_statement(text: str, dialect: str = "mysql") -> Statement:
    try:
        statements = [s for s in sqlglot.parse(text, read=dialect) if s is not None]
    except (SqlglotParseError, TokenError) as e:
        raise ParseError(str(e)) from e

    if not statements:
        raise ParseError("no SQL statement found")
    if len(statements) > 1:
        raise ParseError(f"expected exactly one statement, found {len(statements)}")

    stmt = statements[0]
    logging.debug("Parsed %s: %s", type(stmt).__name__, stmt.sql(dialect=dialect))

    if isinstance(stmt, exp.Create) and str(stmt.args.get("kind") or "").upper() == "TABLE":
        return _create_table(stmt)
    return OtherStatement(kind=_statement_kind(stmt), sql=stmt.sql(dialect=dialect))


def _statement_kind(stmt: exp.Expression) -> str:
    if isinstance(stmt, exp.Create):
        return f"CREATE {stmt.args.get('kind') or ''}".strip()
    if isinstance(stmt, exp.Command):
        return str(stmt.this).upper()
    return stmt.key.upper()


def _create_table(stmt: exp.Create) -> CreateTable:
    target = stmt.this
    if not isinstance(target, exp.Schema):
        # CREATE TABLE t AS SELECT ... / CREATE TABLE t LIKE u
        return CreateTable(name=target.name, columns=None)

    columns = []
    indexes = []
    for node in target.expressions:
        if isinstance(node, exp.ColumnDef):
            spec, inline = _column_spec(node)
            columns.append(spec)
            indexes.extend(inline)
        else:
            indexes.extend(_table_constraint(node))

    return CreateTable(
        name=target.this.name,
        columns=tuple(columns),
        indexes=tuple(indexes),
    )


def _column_spec(node: exp.ColumnDef):
    name = node.name
    dtype = node.args.get("kind")

    sql_type = ""
    length = None
    enum_values = ()
    if isinstance(dtype, exp.DataType):
        sql_type = _type_keyword(dtype)
        params = [p.name for p in dtype.expressions]
        if sql_type == "enum":
            enum_values = tuple(params)
        elif params:
            length = ",".join(params)

    auto_increment = False
    not_null = False
    default = None
    inline = []
    for constraint in node.args.get("constraints") or []:
        kind = constraint.args.get("kind")
        if isinstance(kind, exp.AutoIncrementColumnConstraint):
            auto_increment = True
        elif isinstance(kind, exp.NotNullColumnConstraint):
            not_null = not kind.args.get("allow_null")
        elif isinstance(kind, exp.DefaultColumnConstraint):
            default = _literal_text(kind.this)
        elif isinstance(kind, exp.PrimaryKeyColumnConstraint):
            inline.append(IndexSpec("primary key", (name,)))
        elif isinstance(kind, exp.UniqueColumnConstraint):
            inline.append(IndexSpec("unique key", (name,)))

    spec = ColumnSpec(
        name=name,
        type=sql_type,
        length=length,
        default=default,
        enum_values=enum_values,
        auto_increment=auto_increment,
        not_null=not_null,
    )
    return spec, inline


def _type_keyword(dtype: exp.DataType) -> str:
    if dtype.this == exp.DataType.Type.USERDEFINED and dtype.args.get("kind"):
        keyword = str(dtype.args["kind"]).lower()
    elif isinstance(dtype.this, exp.DataType.Type):
        keyword = dtype.this.value.lower()
    else:
        keyword = str(dtype.this).lower()
    return TYPE_KEYWORD_ALIASES.get(keyword, keyword)


def _literal_text(node) -> Optional[str]:
    if node is None:
        return None
    if isinstance(node, exp.Literal):
        return node.name
    if isinstance(node, exp.Null):
        return "NULL"
    keyword = BARE_DEFAULT_KEYWORDS.get(type(node))
    if keyword and not node.args.get("this"):
        return keyword
    return node.sql(dialect="mysql")


def _key_names(nodes) -> Tuple[str, ...]:
    names = []
    for node in nodes or []:
        if isinstance(node, exp.Ordered):
            node = node.this
        names.append(node.name)
    return tuple(names)


def _table_constraint(node) -> list:
    """Map a table-level constraint node to zero or more IndexSpecs."""
    if isinstance(node, exp.Constraint):
        out = []
        for inner in node.expressions:
            out.extend(_table_constraint(inner))
        return out

    if isinstance(node, exp.PrimaryKey):
        return [IndexSpec("primary key", _key_names(node.expressions))]

    if isinstance(node, exp.UniqueColumnConstraint):
        schema = node.this
        cols = _key_names(schema.expressions) if isinstance(schema, exp.Schema) else ()
        return [IndexSpec("unique key", cols)]

    if isinstance(node, exp.IndexColumnConstraint):
        prefix = str(node.args.get("kind") or "").lower()
        kind = f"{prefix} key" if prefix else "key"
        return [IndexSpec(kind, _key_names(node.expressions))]

    if isinstance(node, exp.ForeignKey):
        return [IndexSpec("foreign key", _key_names(node.expressions))]

    logging.debug("Skipping table element %s", node.sql(dialect="mysql"))
    return []

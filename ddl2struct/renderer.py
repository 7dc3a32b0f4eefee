"""
Render a Table model as a Go struct with ORM field tags.

Two tag dialects are supported:
  - "xorm": bare positional tags,   xorm:"varchar(255) not null unique 'email'"
  - "gorm": type-prefixed tags,     gorm:"type:varchar(255);column:email;not null;UNIQUE"
"""
import logging

from ddl2struct.extractor import Column, Table

UNKNOWN_TYPE = "UNKNOWN_TYPE"

GO_TYPES = {
    "varchar": "string",
    "text": "string",
    "enum": "string",
    "int": "int64",
    "tinyint": "int",
    "double": "float64",
    "float": "float64",
    "date": "time.Time",
    "datetime": "time.Time",
    "time": "time.Time",
    "timestamp": "time.Time",
    "blob": "[]byte",
}


def go_type(sql_type: str) -> str:
    return GO_TYPES.get(sql_type, UNKNOWN_TYPE)


def field_name(name: str) -> str:
    return name[:1].upper() + name[1:]


def _type_suffix(col: Column) -> str:
    """(a,b,c) for enums, (length) for sized types, nothing otherwise."""
    if col.enum_values:
        return "(" + ",".join(col.enum_values) + ")"
    if col.length:
        return f"({col.length})"
    return ""


# ----------------------------------------------------
# Tag bodies
# ----------------------------------------------------
def xorm_tag(col: Column) -> str:
    parts = [col.sql_type + _type_suffix(col)]
    if col.auto_increment:
        parts.append("autoincr")
    if col.not_null:
        parts.append("not null")
    if col.default is not None:
        parts.append(f"default '{col.default}'")
    if col.is_primary_key:
        parts.append("pk")
    if col.is_unique:
        parts.append("unique")
    parts.append(f"'{col.name}'")
    return " ".join(parts)


def gorm_tag(col: Column) -> str:
    parts = [f"type:{col.sql_type}{_type_suffix(col)}", f"column:{col.name}"]
    if col.auto_increment:
        parts.append("AUTO_INCREMENT")
    if col.not_null:
        parts.append("not null")
    if col.default is not None:
        parts.append(f"default:{col.default}")
    if col.is_primary_key:
        parts.append("PRIMARY_KEY")
    if col.is_unique:
        parts.append("UNIQUE")
    return ";".join(parts)


TAG_DIALECTS = {
    "gorm": gorm_tag,
    "xorm": xorm_tag,
}


# ----------------------------------------------------
# Struct
# ----------------------------------------------------
def render_struct(table: Table, dialect: str = "gorm") -> str:
    try:
        tag = TAG_DIALECTS[dialect]
    except KeyError:
        raise ValueError(f"unknown tag dialect {dialect!r}, expected one of {sorted(TAG_DIALECTS)}") from None

    lines = [f"type {field_name(table.name)} struct {{"]
    for col in table.columns:
        gtype = go_type(col.sql_type)
        if gtype == UNKNOWN_TYPE:
            logging.warning("Unknown column type %r for %s.%s", col.sql_type, table.name, col.name)
        lines.append(f'\t{field_name(col.name)} {gtype} `{dialect}:"{tag(col)}"`')
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_gorm(table: Table) -> str:
    return render_struct(table, "gorm")


def render_xorm(table: Table) -> str:
    return render_struct(table, "xorm")

from ddl2struct.errors import (
    Ddl2StructError,
    InputError,
    ParseError,
    SchemaError,
    UnsupportedStatement,
)
from ddl2struct.sql_parser import parse_statement, read_sql_file
from ddl2struct.extractor import Column, Table, extract_table
from ddl2struct.renderer import render_gorm, render_struct, render_xorm

__version__ = "0.1.0"

__all__ = [
    "Ddl2StructError",
    "InputError",
    "ParseError",
    "SchemaError",
    "UnsupportedStatement",
    "parse_statement",
    "read_sql_file",
    "Column",
    "Table",
    "extract_table",
    "render_gorm",
    "render_struct",
    "render_xorm",
]

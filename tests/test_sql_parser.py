from pathlib import Path

import pytest

from ddl2struct.cli import run
from ddl2struct.errors import InputError, ParseError
from ddl2struct.sql_parser import CreateTable, IndexSpec, OtherStatement, parse_statement, read_sql_file
from conftest import USERS_SQL

DATA = Path(__file__).parent / "data"


def test_users_create_table():
    stmt = parse_statement(USERS_SQL)
    assert isinstance(stmt, CreateTable)
    assert stmt.name == "users"
    assert [c.name for c in stmt.columns] == ["id", "email"]

    id_col, email_col = stmt.columns
    assert id_col.type == "int"
    assert id_col.auto_increment and id_col.not_null
    assert id_col.length is None
    assert email_col.type == "varchar"
    assert email_col.length == "255"
    assert email_col.not_null and not email_col.auto_increment

    assert IndexSpec("primary key", ("id",)) in stmt.indexes
    assert IndexSpec("unique key", ("email",)) in stmt.indexes


def test_data_file_columns_and_indexes():
    stmt = parse_statement(read_sql_file(DATA / "users.sql"))
    cols = {c.name: c for c in stmt.columns}

    assert list(cols) == ["id", "email", "nickname", "status", "age", "score", "bio", "birthday", "created_at"]
    assert cols["id"].length == "11"
    assert cols["nickname"].default == "anon"
    assert cols["status"].type == "enum"
    assert cols["status"].enum_values == ("active", "banned", "deleted")
    assert cols["status"].length is None
    assert cols["status"].default == "active"
    assert cols["age"].type == "tinyint"
    assert cols["score"].type == "double"
    assert cols["score"].default == "0"
    assert cols["bio"].type == "text"
    assert cols["birthday"].type == "date"
    assert cols["created_at"].type == "datetime"

    kinds = [i.kind for i in stmt.indexes]
    assert kinds == ["primary key", "unique key", "key"]
    assert stmt.indexes[1].columns == ("email",)
    assert stmt.indexes[2].columns == ("created_at",)


def test_nullable_column_is_not_not_null():
    stmt = parse_statement("CREATE TABLE t (a INT NULL, b INT)")
    assert [c.not_null for c in stmt.columns] == [False, False]


def test_inline_keys_become_indexes():
    stmt = parse_statement("CREATE TABLE t (id INT PRIMARY KEY, code VARCHAR(8) UNIQUE)")
    assert stmt.indexes == (
        IndexSpec("primary key", ("id",)),
        IndexSpec("unique key", ("code",)),
    )


def test_named_constraint_is_unwrapped():
    stmt = parse_statement("CREATE TABLE t (id INT, CONSTRAINT pk_t PRIMARY KEY (id))")
    assert stmt.indexes == (IndexSpec("primary key", ("id",)),)


def test_composite_primary_key_keeps_all_columns():
    stmt = parse_statement("CREATE TABLE t (a INT, b INT, PRIMARY KEY (a, b))")
    assert stmt.indexes == (IndexSpec("primary key", ("a", "b")),)


def test_decimal_length_keeps_scale():
    stmt = parse_statement("CREATE TABLE t (price DECIMAL(10,2))")
    assert stmt.columns[0].type == "decimal"
    assert stmt.columns[0].length == "10,2"


def test_keyword_defaults_keep_bare_spelling():
    stmt = parse_statement(
        "CREATE TABLE t (a DATETIME DEFAULT CURRENT_TIMESTAMP, b DATETIME DEFAULT current_timestamp, "
        "c DATE DEFAULT CURRENT_DATE, d INT DEFAULT NULL)"
    )
    assert [c.default for c in stmt.columns] == ["CURRENT_TIMESTAMP", "CURRENT_TIMESTAMP", "CURRENT_DATE", "NULL"]


@pytest.mark.parametrize("sql_type,keyword,go", [
    ("VARCHAR(10)", "varchar", "string"),
    ("TEXT", "text", "string"),
    ("ENUM('a','b')", "enum", "string"),
    ("INT", "int", "int64"),
    ("INT UNSIGNED", "int", "int64"),
    ("TINYINT", "tinyint", "int"),
    ("TINYINT UNSIGNED", "tinyint", "int"),
    ("DOUBLE", "double", "float64"),
    ("FLOAT", "float", "float64"),
    ("DATE", "date", "time.Time"),
    ("DATETIME", "datetime", "time.Time"),
    ("TIME", "time", "time.Time"),
    ("TIMESTAMP", "timestamp", "time.Time"),
    ("BLOB", "blob", "[]byte"),
])
def test_type_keywords_through_parser(write_sql, sql_type, keyword, go):
    sql = f"CREATE TABLE t (c {sql_type})"
    assert parse_statement(sql).columns[0].type == keyword

    out = run(str(write_sql(sql)), "gorm")
    assert f"\tC {go} `gorm:\"type:{keyword}" in out


def test_select_is_other_statement():
    stmt = parse_statement("SELECT id FROM users")
    assert isinstance(stmt, OtherStatement)
    assert stmt.kind == "SELECT"


def test_create_view_is_other_statement():
    stmt = parse_statement("CREATE VIEW v AS SELECT 1")
    assert isinstance(stmt, OtherStatement)
    assert stmt.kind == "CREATE VIEW"


def test_create_table_as_select_has_no_columns():
    stmt = parse_statement("CREATE TABLE t AS SELECT 1 AS x")
    assert isinstance(stmt, CreateTable)
    assert stmt.name == "t"
    assert stmt.columns is None


def test_invalid_sql_raises_parse_error():
    with pytest.raises(ParseError):
        parse_statement("CREATE TABLE users (id INT")


def test_empty_input_raises_parse_error():
    with pytest.raises(ParseError):
        parse_statement("   ")


def test_multiple_statements_rejected():
    with pytest.raises(ParseError, match="exactly one statement"):
        parse_statement("CREATE TABLE a (x INT); CREATE TABLE b (y INT);")


def test_read_missing_file(tmp_path):
    with pytest.raises(InputError):
        read_sql_file(tmp_path / "nope.sql")


def test_read_utf16_file_with_bom(tmp_path):
    p = tmp_path / "u16.sql"
    p.write_bytes("CREATE TABLE t (a INT);".encode("utf-16"))
    assert read_sql_file(p) == "CREATE TABLE t (a INT);"


def test_read_utf8_bom_file(tmp_path):
    p = tmp_path / "bom.sql"
    p.write_bytes(b"\xef\xbb\xbfCREATE TABLE t (a INT);")
    assert read_sql_file(p) == "CREATE TABLE t (a INT);"

import logging

import pytest

from ddl2struct.extractor import Column, Table

USERS_SQL = (
    "CREATE TABLE users (id INT AUTO_INCREMENT NOT NULL, "
    "email VARCHAR(255) NOT NULL, PRIMARY KEY(id), UNIQUE KEY(email));"
)


@pytest.fixture(autouse=True)
def reset_root_logger():
    # cli.main() installs handlers bound to the captured stderr of one test
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        if type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()


@pytest.fixture
def users_sql(tmp_path):
    p = tmp_path / "users.sql"
    p.write_text(USERS_SQL, encoding="utf-8")
    return p


@pytest.fixture
def write_sql(tmp_path):
    def _write(text, name="schema.sql"):
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return p
    return _write


@pytest.fixture
def users_table():
    return Table(name="users", columns=(
        Column(name="id", sql_type="int", is_primary_key=True, auto_increment=True, not_null=True),
        Column(name="email", sql_type="varchar", length="255", is_unique=True, not_null=True),
    ))

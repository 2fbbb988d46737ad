"""Pytest fixtures shared by the ora2ch tests."""

import pytest
import structlog
from fastapi.testclient import TestClient

from ora2ch.config import get_settings_env
from ora2ch.main import app

ENV_VARS = [
    "ORA_DUMP_FILE",
    "ORA_CONNECT_STRING",
    "ORA_USER",
    "ORA_PASSWORD",
    "ORA_ODBC_DSN",
    "ORA_OWNER",
    "CH_TABLE_PREFIX",
    "CH_OUTPUT_FILE",
    "CH_UNMAPPED_POLICY",
    "CH_TABLE_IDENTITY",
    "ORA2CH_DEBUG",
]

TITLE_BOX = [
    "+----------------------------------+",
    "| SELECT * FROM all_tab_columns    |",
    "+----------------------------------+",
]

HEADER_BOX = [
    "+-------+------------+-------------+-----------+---------------+-----------------+-------------+----------------+------------+----------+",
    "| OWNER | TABLE_NAME | COLUMN_NAME | DATA_TYPE | DATA_TYPE_MOD | DATA_TYPE_OWNER | DATA_LENGTH | DATA_PRECISION | DATA_SCALE | NULLABLE |",
    "+-------+------------+-------------+-----------+---------------+-----------------+-------------+----------------+------------+----------+",
]

CLOSING_BORDER = HEADER_BOX[0]


def dump_row(owner, table, column, data_type, length="", precision="", nullable="Y"):
    return f"| {owner} | {table} | {column} | {data_type} |  |  | {length} | {precision} |  | {nullable} |"


def build_dump(rows):
    return "\n".join(TITLE_BOX + HEADER_BOX + list(rows) + [CLOSING_BORDER]) + "\n"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env or shell settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    assert get_settings_env()["dump_file"] is None
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_dump():
    return build_dump


@pytest.fixture
def row():
    return dump_row


@pytest.fixture
def foo_dump():
    """Two columns of HR.FOO: A VARCHAR2, B NUMBER."""
    return build_dump([
        dump_row("HR", "FOO", "A", "VARCHAR2", "20", "", "Y"),
        dump_row("HR", "FOO", "B", "NUMBER", "22", "10", "N"),
    ])


@pytest.fixture
def dump_file(tmp_path, foo_dump):
    path = tmp_path / "all_tab_columns.txt"
    path.write_text(foo_dump, encoding="utf-8")
    return path


@pytest.fixture
def test_client():
    with TestClient(app) as client:
        yield client

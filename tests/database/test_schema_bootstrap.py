from __future__ import annotations

from pathlib import Path

from src.travel_desk.travel_desk.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\n-- comment; here\nSELECT 1;"
    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE x;\nUSE x;\nCREATE TABLE IF NOT EXISTS a (id INT);"
    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE IF NOT EXISTS a (id INT)"]


def test_schema_statements_are_idempotent():
    statements = list(_iter_sql_statements(SCHEMA.read_text(encoding="utf-8")))
    assert len(statements) == 4
    assert all(s.startswith("CREATE TABLE IF NOT EXISTS") for s in statements)

from pathlib import Path

from src.hrms.hrms.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splitter_handles_quotes_and_comments():
    sql = "-- header; comment\nINSERT INTO t VALUES ('a;b');\nSELECT 1; -- trailing\n"

    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\nCREATE TABLE x (id INT);\n"

    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE x (id INT)"]


def test_schema_declares_one_record_per_user_and_day():
    statements = list(_iter_sql_statements(_strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))))
    tables = [s for s in statements if s.upper().startswith("CREATE TABLE")]

    assert len(tables) == 4
    attendance = next(s for s in tables if "attendance_records" in s)
    assert "UNIQUE KEY uq_attendance_user_day (user_id, work_date)" in attendance

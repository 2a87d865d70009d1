from __future__ import annotations

from pathlib import Path

from src.staff_portal.staff_portal.database.bootstrap import _strip_create_db_and_use, iter_sql_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_file_yields_one_statement_per_table():
    sql = _strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))
    statements = list(iter_sql_statements(sql))

    assert [s.split("(")[0].split()[-1] for s in statements] == ["staff", "attendance_records", "timetables"]
    assert any("uq_attendance_staff_date" in s for s in statements)


def test_semicolons_inside_quotes_and_comments_do_not_split():
    sql = "-- setup; ignored\nINSERT INTO t VALUES ('a;b', \"c;d\");\nSELECT 1"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b', \"c;d\")", "SELECT 1"]

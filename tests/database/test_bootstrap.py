from rollcall.database.bootstrap import SCHEMA_PATH, SEED_PATH, iter_sql_statements


def test_splits_on_semicolons_outside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_escaped_quote_inside_string():
    sql = "INSERT INTO t VALUES ('it\\'s;fine'); SELECT 2;"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('it\\'s;fine')", "SELECT 2"]


def test_bundled_sql_files_exist():
    assert SCHEMA_PATH.is_file()
    assert SEED_PATH.is_file()
    assert "CREATE TABLE IF NOT EXISTS attendance" in SCHEMA_PATH.read_text(encoding="utf-8")

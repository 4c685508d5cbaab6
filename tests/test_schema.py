from psycopg2 import errors as pg_errors
import pytest

from user_console.core.exceptions import DataAccessError
from user_console.core.schema import SchemaManager


@pytest.fixture
def schema(fake_db):
    return SchemaManager(fake_db)


def test_update_creates_table_and_adds_missing_columns(schema, fake_db):
    schema.apply("update")

    statements = fake_db.executed_sql()
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS users")
    assert statements[1:] == [
        "ALTER TABLE users ADD COLUMN IF NOT EXISTS name VARCHAR(255)",
        "ALTER TABLE users ADD COLUMN IF NOT EXISTS email VARCHAR(255)",
        "ALTER TABLE users ADD COLUMN IF NOT EXISTS age INTEGER",
        "ALTER TABLE users ADD COLUMN IF NOT EXISTS created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
    ]
    assert fake_db.commits == 1


@pytest.mark.parametrize("mode", ["create", "create-drop"])
def test_create_modes_recreate_table(schema, fake_db, mode):
    schema.apply(mode)

    statements = fake_db.executed_sql()
    assert statements[0] == "DROP TABLE IF EXISTS users"
    assert statements[1].startswith("CREATE TABLE IF NOT EXISTS users")
    assert fake_db.commits == 1


def test_none_mode_touches_nothing(schema, fake_db):
    schema.apply("none")

    fake_db.cursor.execute.assert_not_called()
    assert fake_db.commits == 0


def test_validate_accepts_complete_table(schema, fake_db):
    fake_db.cursor.fetchall.return_value = [
        {"column_name": name} for name in ("id", "name", "email", "age", "created_at")
    ]

    schema.apply("validate")

    assert fake_db.cursor.execute.call_args.args[1] == ("users",)


def test_validate_reports_missing_columns(schema, fake_db):
    fake_db.cursor.fetchall.return_value = [{"column_name": "id"}, {"column_name": "name"}]

    with pytest.raises(DataAccessError, match="age, created_at, email"):
        schema.apply("validate")


def test_ddl_failure_is_translated(schema, fake_db):
    error = pg_errors.InsufficientPrivilege("permission denied for schema public")
    fake_db.cursor.execute.side_effect = error

    with pytest.raises(DataAccessError) as exc_info:
        schema.apply("update")

    assert exc_info.value.original_error is error
    assert fake_db.rollbacks == 1


def test_unknown_mode(schema):
    with pytest.raises(DataAccessError):
        schema.apply("migrate")


def test_teardown_drops_table_only_for_create_drop(schema, fake_db):
    schema.teardown("update")
    fake_db.cursor.execute.assert_not_called()

    schema.teardown("create-drop")
    assert fake_db.executed_sql() == ["DROP TABLE IF EXISTS users"]

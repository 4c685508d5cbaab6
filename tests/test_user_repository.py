from datetime import datetime

import psycopg2
from psycopg2 import errors as pg_errors
import pytest
from loguru import logger

from user_console.core.exceptions import DataAccessError, ValidationError
from user_console.core.models import User
from user_console.services.user_repository import (
    DELETE_USER,
    INSERT_USER,
    SELECT_ALL_USERS,
    SELECT_USER_BY_ID,
    SELECT_USER_FOR_DELETE,
    UPDATE_USER,
    UserRepository,
)

CREATED_AT = datetime(2024, 5, 1, 9, 15)


def user_row(user_id=1, name="Max", email="max@test.io", age=30):
    return {"id": user_id, "name": name, "email": email, "age": age, "created_at": CREATED_AT}


@pytest.fixture
def repository(fake_db):
    return UserRepository(fake_db)


class TestCreate:

    def test_inserts_row_and_assigns_identity(self, repository, fake_db):
        fake_db.cursor.fetchone.return_value = {"id": 7, "created_at": CREATED_AT}
        user = User(name="Max", email="max@test.io", age=30)

        user_id = repository.create(user)

        assert user_id == 7
        assert user.id == 7
        assert user.created_at == CREATED_AT
        fake_db.cursor.execute.assert_called_once_with(INSERT_USER, ("Max", "max@test.io", 30))
        assert fake_db.commits == 1

    @pytest.mark.parametrize("user", [
        User(name="", email="max@test.io", age=30),
        User(name="Max", email="", age=30),
        User(name="Max", email="max@test.io", age=200),
        User(name="Max", email="max@test.io", age=30, id=4),
        User(name="a\x00b", email="max@test.io", age=30),
    ])
    def test_invalid_user_never_reaches_storage(self, repository, fake_db, user):
        with pytest.raises(ValidationError):
            repository.create(user)

        fake_db.cursor.execute.assert_not_called()
        assert fake_db.commits == 0

    def test_storage_failure_is_translated(self, repository, fake_db):
        error = psycopg2.IntegrityError("null value in column \"name\"")
        fake_db.cursor.execute.side_effect = error
        user = User(name="Max", email="max@test.io", age=30)

        with pytest.raises(DataAccessError) as exc_info:
            repository.create(user)

        assert exc_info.value.original_error is error
        assert exc_info.value.__cause__ is error
        assert fake_db.rollbacks == 1
        assert user.id is None


class TestRead:

    def test_returns_mapped_user(self, repository, fake_db):
        fake_db.cursor.fetchone.return_value = user_row(user_id=5)

        user = repository.read(5)

        assert user == User(name="Max", email="max@test.io", age=30, id=5, created_at=CREATED_AT)
        fake_db.cursor.execute.assert_called_once_with(SELECT_USER_BY_ID, (5,))
        assert fake_db.commits == 1

    def test_missing_user_is_none(self, repository, fake_db):
        fake_db.cursor.fetchone.return_value = None
        assert repository.read(404) is None
        assert fake_db.commits == 1

    def test_storage_failure_is_translated(self, repository, fake_db):
        fake_db.cursor.execute.side_effect = psycopg2.OperationalError("server closed the connection")

        with pytest.raises(DataAccessError):
            repository.read(1)
        assert fake_db.rollbacks == 1


class TestUpdate:

    def test_writes_mutable_fields_only(self, repository, fake_db):
        fake_db.cursor.rowcount = 1
        user = User(name="Maxim", email="max@test.io", age=31, id=3, created_at=CREATED_AT)

        assert repository.update(user) is True

        fake_db.cursor.execute.assert_called_once_with(UPDATE_USER, ("Maxim", "max@test.io", 31, 3))
        assert "created_at" not in UPDATE_USER
        assert fake_db.commits == 1

    def test_unknown_identifier_reports_not_found(self, repository, fake_db):
        fake_db.cursor.rowcount = 0

        assert repository.update(User(name="Max", email="max@test.io", age=30, id=99)) is False

        executed = fake_db.executed_sql()
        assert len(executed) == 1
        assert executed[0].startswith("UPDATE users")
        assert fake_db.commits == 1

    def test_transient_user_is_rejected(self, repository, fake_db):
        with pytest.raises(ValidationError):
            repository.update(User(name="Max", email="max@test.io", age=30))
        fake_db.cursor.execute.assert_not_called()

    def test_invalid_fields_are_rejected(self, repository, fake_db):
        with pytest.raises(ValidationError) as exc_info:
            repository.update(User(name="Max", email="not-an-email", age=30, id=1))
        assert [v.field for v in exc_info.value.violations] == ["email"]
        fake_db.cursor.execute.assert_not_called()

    def test_storage_failure_is_translated(self, repository, fake_db):
        fake_db.cursor.execute.side_effect = pg_errors.StringDataRightTruncation("value too long")

        with pytest.raises(DataAccessError):
            repository.update(User(name="Max", email="max@test.io", age=30, id=1))
        assert fake_db.rollbacks == 1


class TestDelete:

    def test_removes_existing_row(self, repository, fake_db):
        fake_db.cursor.fetchone.return_value = {"id": 3}
        fake_db.cursor.rowcount = 1

        assert repository.delete(3) is True

        calls = [c.args for c in fake_db.cursor.execute.call_args_list]
        assert calls == [(SELECT_USER_FOR_DELETE, (3,)), (DELETE_USER, (3,))]
        assert fake_db.commits == 1

    def test_missing_row_is_silent_no_op(self, repository, fake_db):
        fake_db.cursor.fetchone.return_value = None

        assert repository.delete(42) is False

        fake_db.cursor.execute.assert_called_once_with(SELECT_USER_FOR_DELETE, (42,))
        assert fake_db.commits == 1
        assert fake_db.rollbacks == 0

    def test_storage_failure_is_translated(self, repository, fake_db):
        fake_db.cursor.execute.side_effect = psycopg2.OperationalError("terminating connection")

        with pytest.raises(DataAccessError):
            repository.delete(1)
        assert fake_db.rollbacks == 1


class TestFindAll:

    def test_maps_every_row(self, repository, fake_db):
        fake_db.cursor.fetchall.return_value = [user_row(1), user_row(2, name="Ivan", email="ivan@test.io", age=25)]

        users = repository.find_all()

        assert [u.id for u in users] == [1, 2]
        assert users[1].name == "Ivan"
        fake_db.cursor.execute.assert_called_once_with(SELECT_ALL_USERS, ())

    def test_empty_table(self, repository, fake_db):
        fake_db.cursor.fetchall.return_value = []
        assert repository.find_all() == []

    def test_storage_failure_is_translated(self, repository, fake_db):
        error = pg_errors.UndefinedTable("relation \"users\" does not exist")
        fake_db.cursor.execute.side_effect = error

        with pytest.raises(DataAccessError) as exc_info:
            repository.find_all()
        assert exc_info.value.original_error is error


NUL_ERROR = "A string literal cannot contain NUL (0x00) characters."


@pytest.mark.parametrize("call", [
    lambda r: r.create(User(name="Max", email="max@test.io", age=30)),
    lambda r: r.read(1),
    lambda r: r.update(User(name="Max", email="max@test.io", age=30, id=1)),
    lambda r: r.delete(1),
    lambda r: r.find_all(),
])
def test_driver_value_error_is_translated(repository, fake_db, call):
    error = ValueError(NUL_ERROR)
    fake_db.cursor.execute.side_effect = error

    with pytest.raises(DataAccessError) as exc_info:
        call(repository)

    assert exc_info.value.original_error is error
    assert fake_db.rollbacks == 1


def test_sql_log_omits_parameter_values(repository, fake_db):
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    fake_db.cursor.fetchone.return_value = {"id": 1, "created_at": CREATED_AT}
    try:
        repository.create(User(name="Max", email="max@test.io", age=30))
    finally:
        logger.remove(handler_id)

    log = "".join(messages)
    assert "INSERT INTO users" in log
    assert "max@test.io" not in log

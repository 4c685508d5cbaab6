"""Общие фикстуры и подставные реализации для тестов."""

from contextlib import contextmanager
from datetime import datetime
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from user_console.core.models import User
from user_console.core.validation import validate_user

FIXED_CREATED_AT = datetime(2024, 1, 11, 12, 30)

MANAGED_ENV_VARS = [
    "DB_POOL_MIN",
    "DB_POOL_MAX",
    "DB_CONNECT_TIMEOUT",
    "DB_SCHEMA_AUTO",
    "APP_NAME",
    "LOG_LEVEL",
    "LOG_ROTATION",
    "LOG_RETENTION",
    "USER_CONSOLE_ENV_FILE",
]


@pytest.fixture(autouse=True)
def db_env(monkeypatch, tmp_path):
    """Минимальное окружение для Config без внешнего .env"""
    monkeypatch.setenv("DB_URL", "postgresql://localhost:5432/users_test")
    monkeypatch.setenv("DB_USER", "tester")
    monkeypatch.setenv("DB_PASS", "secret")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    for name in MANAGED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class FakeDatabaseManager:
    """Подмена UserDatabaseManager: считает commit/rollback, отдает MagicMock-курсор"""

    def __init__(self):
        self.cursor = MagicMock()
        self.commits = 0
        self.rollbacks = 0

    @contextmanager
    def transaction(self):
        try:
            yield self.cursor
        except Exception:
            self.rollbacks += 1
            raise
        self.commits += 1

    def is_connected(self) -> bool:
        return True

    def executed_sql(self) -> List[str]:
        return [" ".join(c.args[0].split()) for c in self.cursor.execute.call_args_list]


@pytest.fixture
def fake_db():
    return FakeDatabaseManager()


class InMemoryUserRepository:
    """Репозиторий в памяти с тем же контрактом, что и UserRepository"""

    def __init__(self):
        self.rows: Dict[int, User] = {}
        self._next_id = 1

    def create(self, user: User) -> int:
        validate_user(user).raise_if_invalid()
        user.id = self._next_id
        user.created_at = FIXED_CREATED_AT
        self._next_id += 1
        self.rows[user.id] = User(user.name, user.email, user.age, user.id, user.created_at)
        return user.id

    def read(self, user_id: int) -> Optional[User]:
        stored = self.rows.get(user_id)
        if stored is None:
            return None
        return User(stored.name, stored.email, stored.age, stored.id, stored.created_at)

    def update(self, user: User) -> bool:
        validate_user(user, require_id=True).raise_if_invalid()
        stored = self.rows.get(user.id)
        if stored is None:
            return False
        stored.name, stored.email, stored.age = user.name, user.email, user.age
        return True

    def delete(self, user_id: int) -> bool:
        return self.rows.pop(user_id, None) is not None

    def find_all(self) -> List[User]:
        return [self.read(user_id) for user_id in sorted(self.rows)]


@pytest.fixture
def memory_repository():
    return InMemoryUserRepository()


def scripted_input(*lines: str):
    """input() по заранее заданным строкам; EOFError, когда строки закончились"""
    remaining = list(lines)

    def _input(prompt: str = "") -> str:
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return _input

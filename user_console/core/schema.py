"""
MODULE: user_console.core.schema
RESPONSIBILITY: Reconcile the users table at startup according to DB_SCHEMA_AUTO.
ALLOWED: psycopg2, loguru, core.database, core.exceptions.
FORBIDDEN: Business logic, data migrations.
ERRORS: DataAccessError.

Автоматическое приведение схемы таблицы users.

Режимы:
- none: ничего не делать
- validate: проверить наличие таблицы и колонок
- update: создать таблицу при отсутствии и добавить недостающие колонки
- create: пересоздать таблицу
- create-drop: пересоздать таблицу при запуске и удалить при завершении
"""

from typing import List, Tuple

import psycopg2
from loguru import logger

from user_console.core.database import UserDatabaseManager
from user_console.core.exceptions import DataAccessError

USERS_TABLE = "users"

CREATE_USERS_TABLE = f"""
CREATE TABLE IF NOT EXISTS {USERS_TABLE} (
    id BIGSERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    email VARCHAR(255) NOT NULL,
    age INTEGER NOT NULL,
    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""

DROP_USERS_TABLE = f"DROP TABLE IF EXISTS {USERS_TABLE}"

# Колонки, которые режим update добавляет в существующую таблицу.
# Добавляются без NOT NULL, чтобы не ломаться на уже существующих строках.
RECONCILED_COLUMNS: List[Tuple[str, str]] = [
    ("name", "VARCHAR(255)"),
    ("email", "VARCHAR(255)"),
    ("age", "INTEGER"),
    ("created_at", "TIMESTAMP DEFAULT CURRENT_TIMESTAMP"),
]

REQUIRED_COLUMNS = {"id", "name", "email", "age", "created_at"}

SELECT_COLUMNS = """
    SELECT column_name
    FROM information_schema.columns
    WHERE table_schema = current_schema()
      AND table_name = %s
"""


class SchemaManager:
    """Приведение схемы таблицы пользователей"""

    def __init__(self, db_manager: UserDatabaseManager):
        self.db_manager = db_manager

    def apply(self, mode: str) -> None:
        """
        Применение режима DB_SCHEMA_AUTO при запуске

        Raises:
            DataAccessError: При ошибке выполнения DDL или несоответствии схемы
        """
        if mode == "none":
            logger.debug("Автоматическое приведение схемы отключено")
            return
        if mode == "validate":
            self._validate()
        elif mode == "update":
            self._run([CREATE_USERS_TABLE] + [
                f"ALTER TABLE {USERS_TABLE} ADD COLUMN IF NOT EXISTS {name} {definition}"
                for name, definition in RECONCILED_COLUMNS
            ], "обновлении схемы")
        elif mode in ("create", "create-drop"):
            self._run([DROP_USERS_TABLE, CREATE_USERS_TABLE], "создании схемы")
        else:
            raise DataAccessError(f"Неизвестный режим схемы: {mode}")
        logger.info(f"Схема таблицы {USERS_TABLE} приведена (режим {mode})")

    def teardown(self, mode: str) -> None:
        """Удаление таблицы при завершении работы в режиме create-drop"""
        if mode != "create-drop":
            return
        self._run([DROP_USERS_TABLE], "удалении схемы")
        logger.info(f"Таблица {USERS_TABLE} удалена (режим {mode})")

    def _run(self, statements: List[str], context: str) -> None:
        try:
            with self.db_manager.transaction() as cursor:
                for statement in statements:
                    logger.debug(f"SQL: {statement.strip()}")
                    cursor.execute(statement)
        except psycopg2.Error as e:
            error_msg = f"Ошибка при {context}: {e}"
            logger.error(error_msg)
            raise DataAccessError(error_msg, original_error=e) from e

    def _validate(self) -> None:
        try:
            with self.db_manager.transaction() as cursor:
                cursor.execute(SELECT_COLUMNS, (USERS_TABLE,))
                rows = cursor.fetchall()
        except psycopg2.Error as e:
            error_msg = f"Ошибка при проверке схемы: {e}"
            logger.error(error_msg)
            raise DataAccessError(error_msg, original_error=e) from e

        missing = REQUIRED_COLUMNS - {row["column_name"] for row in rows}
        if missing:
            error_msg = (
                f"Схема таблицы {USERS_TABLE} не соответствует модели, "
                f"отсутствуют колонки: {', '.join(sorted(missing))}"
            )
            logger.error(error_msg)
            raise DataAccessError(error_msg)

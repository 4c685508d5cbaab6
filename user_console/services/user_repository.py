"""
MODULE: user_console.services.user_repository
RESPONSIBILITY: CRUD access to the users table (transaction per call).
ALLOWED: typing, loguru, psycopg2, core.database, core.models, core.validation.
FORBIDDEN: Console I/O, business logic outside DB operations.
ERRORS: ValidationError, DataAccessError.

Репозиторий для работы с пользователями.

Каждая операция выполняется в собственной транзакции
(UserDatabaseManager.transaction). Ошибки драйвера откатывают транзакцию
и преобразуются в DataAccessError с исходной ошибкой внутри.
Отображение строк в User и обратно написано явно.
"""

from typing import Any, Dict, List, Optional

import psycopg2
from loguru import logger

from user_console.core.database import UserDatabaseManager
from user_console.core.exceptions import DataAccessError
from user_console.core.models import User
from user_console.core.schema import USERS_TABLE
from user_console.core.validation import validate_user

USER_COLUMNS = "id, name, email, age, created_at"

INSERT_USER = f"""
    INSERT INTO {USERS_TABLE} (name, email, age)
    VALUES (%s, %s, %s)
    RETURNING id, created_at
"""

SELECT_USER_BY_ID = f"SELECT {USER_COLUMNS} FROM {USERS_TABLE} WHERE id = %s"

SELECT_ALL_USERS = f"SELECT {USER_COLUMNS} FROM {USERS_TABLE} ORDER BY id"

UPDATE_USER = f"""
    UPDATE {USERS_TABLE}
    SET name = %s, email = %s, age = %s
    WHERE id = %s
"""

SELECT_USER_FOR_DELETE = f"SELECT id FROM {USERS_TABLE} WHERE id = %s FOR UPDATE"

DELETE_USER = f"DELETE FROM {USERS_TABLE} WHERE id = %s"

# psycopg2 бросает ValueError при адаптации недопустимых параметров
DRIVER_ERRORS = (psycopg2.Error, ValueError)


def _row_to_user(row: Dict[str, Any]) -> User:
    """Преобразование строки результата в User"""
    return User(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        age=row["age"],
        created_at=row["created_at"],
    )


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, db_manager: UserDatabaseManager):
        self.db_manager = db_manager

    def _execute(self, cursor, query: str, params: tuple) -> None:
        # Значения параметров не логируются
        logger.debug(f"SQL: {' '.join(query.split())} | params: {len(params)}")
        cursor.execute(query, params)

    def _fail(self, message: str, error: Exception) -> DataAccessError:
        logger.error(f"{message}: {error}")
        return DataAccessError(message, original_error=error)

    def create(self, user: User) -> int:
        """
        Сохранение нового пользователя

        Валидация выполняется до обращения к БД. После сохранения
        пользователю назначаются id и created_at.

        Args:
            user: Временный (без id) пользователь

        Returns:
            Идентификатор созданного пользователя

        Raises:
            ValidationError: Если поля пользователя некорректны
            DataAccessError: При ошибке сохранения
        """
        result = validate_user(user)
        if not result.is_valid:
            for violation in result.violations:
                logger.warning(f"Ошибка валидации: поле '{violation.field}' - {violation.message}")
            result.raise_if_invalid()

        try:
            with self.db_manager.transaction() as cursor:
                self._execute(cursor, INSERT_USER, (user.name, user.email, user.age))
                row = cursor.fetchone()
        except DRIVER_ERRORS as e:
            raise self._fail("Не удалось создать пользователя", e) from e

        user.id = row["id"]
        user.created_at = row["created_at"]
        logger.info(f"Создан пользователь id={user.id}")
        return user.id

    def read(self, user_id: int) -> Optional[User]:
        """
        Получение пользователя по идентификатору

        Returns:
            User или None, если пользователь не найден

        Raises:
            DataAccessError: При ошибке доступа к данным
        """
        try:
            with self.db_manager.transaction() as cursor:
                self._execute(cursor, SELECT_USER_BY_ID, (user_id,))
                row = cursor.fetchone()
        except DRIVER_ERRORS as e:
            raise self._fail(f"Не удалось получить пользователя id={user_id}", e) from e

        if row is None:
            logger.debug(f"Пользователь id={user_id} не найден")
            return None
        return _row_to_user(row)

    def update(self, user: User) -> bool:
        """
        Обновление имени, email и возраста существующего пользователя

        id и created_at не изменяются. Если строки с таким id нет,
        ничего не вставляется и возвращается False.

        Returns:
            True, если пользователь обновлен

        Raises:
            ValidationError: Если поля пользователя некорректны
            DataAccessError: При ошибке обновления
        """
        result = validate_user(user, require_id=True)
        if not result.is_valid:
            for violation in result.violations:
                logger.warning(
                    f"Ошибка валидации при обновлении: поле '{violation.field}' - {violation.message}"
                )
            result.raise_if_invalid()

        try:
            with self.db_manager.transaction() as cursor:
                self._execute(cursor, UPDATE_USER, (user.name, user.email, user.age, user.id))
                updated = cursor.rowcount > 0
        except DRIVER_ERRORS as e:
            raise self._fail(f"Не удалось обновить пользователя id={user.id}", e) from e

        if updated:
            logger.info(f"Обновлен пользователь id={user.id}")
        else:
            logger.warning(f"Обновление: пользователь id={user.id} не найден")
        return updated

    def delete(self, user_id: int) -> bool:
        """
        Удаление пользователя по идентификатору

        Операция идемпотентна: если пользователя нет, транзакция
        фиксируется без изменений.

        Returns:
            True, если строка была удалена

        Raises:
            DataAccessError: При ошибке удаления
        """
        try:
            with self.db_manager.transaction() as cursor:
                self._execute(cursor, SELECT_USER_FOR_DELETE, (user_id,))
                deleted = False
                if cursor.fetchone() is not None:
                    self._execute(cursor, DELETE_USER, (user_id,))
                    deleted = cursor.rowcount > 0
        except DRIVER_ERRORS as e:
            raise self._fail(f"Не удалось удалить пользователя id={user_id}", e) from e

        if deleted:
            logger.info(f"Удален пользователь id={user_id}")
        else:
            logger.debug(f"Удаление: пользователь id={user_id} не найден")
        return deleted

    def find_all(self) -> List[User]:
        """
        Получение всех пользователей

        Raises:
            DataAccessError: При ошибке выполнения запроса
        """
        try:
            with self.db_manager.transaction() as cursor:
                self._execute(cursor, SELECT_ALL_USERS, ())
                rows = cursor.fetchall()
        except DRIVER_ERRORS as e:
            raise self._fail("Не удалось получить список пользователей", e) from e

        return [_row_to_user(row) for row in rows]

"""
MODULE: user_console.core.database
RESPONSIBILITY: PostgreSQL connection pool handle with explicit lifecycle.
ALLOWED: psycopg2, loguru, contextlib.
FORBIDDEN: Business logic, user-specific SQL (use repositories).
ERRORS: DatabaseConnectionError.

Менеджер базы данных пользователей

Модуль предоставляет:
- UserDatabaseManager: владелец пула соединений. Создается явно,
  открывается connect() и закрывается close(); глобального экземпляра нет.
- transaction(): область транзакции на один вызов (взять соединение,
  выполнить, commit или rollback, вернуть соединение в пул).
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2.pool import SimpleConnectionPool
from loguru import logger

from user_console.config.settings import DatabaseConfig
from user_console.core.exceptions import DatabaseConnectionError


class UserDatabaseManager:
    """
    Менеджер пула соединений к PostgreSQL

    Один экземпляр создается в точке входа и передается в репозитории.
    Приложение однопоточное, поэтому используется SimpleConnectionPool.

    Attributes:
        db_config: Конфигурация подключения к БД
    """

    def __init__(self, db_config: DatabaseConfig):
        self.db_config = db_config
        self._pool: Optional[SimpleConnectionPool] = None

    def connect(self) -> None:
        """
        Открытие пула соединений

        Raises:
            DatabaseConnectionError: При ошибке подключения
        """
        if self._pool is not None and not self._pool.closed:
            logger.debug("Пул соединений уже открыт")
            return

        try:
            self._pool = SimpleConnectionPool(
                self.db_config.pool_min,
                self.db_config.pool_max,
                **self.db_config.get_connection_kwargs()
            )
            logger.info(f"Успешное подключение к БД: {self.db_config.get_dsn()}")
        except psycopg2.Error as e:
            error_msg = f"Ошибка подключения к БД {self.db_config.get_dsn()}: {e}"
            logger.error(error_msg)
            raise DatabaseConnectionError(error_msg, original_error=e) from e

    def close(self) -> None:
        """Закрытие всех соединений пула"""
        pool, self._pool = self._pool, None
        if pool is None or pool.closed:
            return
        try:
            pool.closeall()
            logger.info("Пул соединений с БД закрыт")
        except psycopg2.Error as e:
            logger.warning(f"Ошибка при закрытии пула соединений: {e}")

    def is_connected(self) -> bool:
        """Проверка наличия открытого пула"""
        return self._pool is not None and not self._pool.closed

    @contextmanager
    def transaction(self) -> Iterator[RealDictCursor]:
        """
        Область транзакции на одну операцию

        Соединение берется из пула, транзакция открывается первым запросом
        (autocommit выключен). При успешном выходе выполняется commit,
        при любом исключении - rollback и повторный выброс исключения.
        Соединение возвращается в пул на любом пути выхода.

        Yields:
            Курсор, возвращающий строки в виде словарей

        Raises:
            DatabaseConnectionError: Если пул не открыт или соединение не получено
        """
        if not self.is_connected():
            raise DatabaseConnectionError("Нет активного подключения к БД")

        pool = self._pool
        try:
            connection = pool.getconn()
        except psycopg2.Error as e:
            error_msg = f"Не удалось получить соединение из пула: {e}"
            logger.error(error_msg)
            raise DatabaseConnectionError(error_msg, original_error=e) from e

        try:
            with connection.cursor(cursor_factory=RealDictCursor) as cursor:
                yield cursor
            connection.commit()
        except Exception:
            self._rollback(connection)
            raise
        finally:
            pool.putconn(connection, close=bool(connection.closed))

    @staticmethod
    def _rollback(connection) -> None:
        # Ошибка отката не должна скрывать исходное исключение
        if connection.closed:
            return
        try:
            connection.rollback()
            logger.debug("Транзакция откачена")
        except psycopg2.Error as e:
            logger.warning(f"Ошибка при откате транзакции: {e}")

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

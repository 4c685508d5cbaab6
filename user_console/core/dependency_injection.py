"""
MODULE: user_console.core.dependency_injection
RESPONSIBILITY: Dependency container with explicit lifecycle.
ALLOWED: Importing services and repositories.
FORBIDDEN: Business logic.
ERRORS: DatabaseConnectionError, DataAccessError (from start()).

Контейнер зависимостей

Создается явно в точке входа, открывает пул соединений в start()
и освобождает его в cleanup(). Глобального экземпляра нет.
"""

from typing import Optional
from loguru import logger

from user_console.config.settings import Config
from user_console.core.database import UserDatabaseManager
from user_console.core.exceptions import DataAccessError
from user_console.core.schema import SchemaManager
from user_console.services.user_repository import UserRepository
from user_console.services.user_service import UserService


class DependencyContainer:
    """Контейнер зависимостей для управления жизненным циклом сервисов"""

    def __init__(self, config: Config):
        self.config = config
        self._db_manager: Optional[UserDatabaseManager] = None
        self._schema_manager: Optional[SchemaManager] = None
        self._user_repository: Optional[UserRepository] = None
        self._user_service: Optional[UserService] = None

    def get_database_manager(self) -> UserDatabaseManager:
        """Получение менеджера базы данных"""
        if self._db_manager is None:
            logger.debug("Создание UserDatabaseManager")
            self._db_manager = UserDatabaseManager(self.config.database)
        return self._db_manager

    def get_schema_manager(self) -> SchemaManager:
        """Получение менеджера схемы"""
        if self._schema_manager is None:
            self._schema_manager = SchemaManager(self.get_database_manager())
        return self._schema_manager

    def get_user_repository(self) -> UserRepository:
        """Получение репозитория пользователей"""
        if self._user_repository is None:
            logger.debug("Создание UserRepository")
            self._user_repository = UserRepository(self.get_database_manager())
        return self._user_repository

    def get_user_service(self) -> UserService:
        """Получение сервиса пользователей"""
        if self._user_service is None:
            logger.debug("Создание UserService")
            self._user_service = UserService(self.get_user_repository())
        return self._user_service

    def start(self) -> None:
        """
        Открытие пула соединений и приведение схемы

        Raises:
            DatabaseConnectionError: Если не удалось подключиться к БД
            DataAccessError: Если не удалось привести схему
        """
        self.get_database_manager().connect()
        self.get_schema_manager().apply(self.config.database.schema_auto)

    def cleanup(self) -> None:
        """Освобождение ресурсов при завершении работы приложения"""
        logger.info("Очистка зависимостей")

        if self._db_manager is not None:
            if self._db_manager.is_connected():
                try:
                    self.get_schema_manager().teardown(self.config.database.schema_auto)
                except DataAccessError as e:
                    logger.error(f"Ошибка при удалении схемы при завершении: {e}")
                finally:
                    self._db_manager.close()
            self._db_manager = None

        self._schema_manager = None
        self._user_repository = None
        self._user_service = None

"""
MODULE: user_console.config.settings
RESPONSIBILITY: Application configuration loading and validation.
ALLOWED: os, dotenv, dataclasses.
FORBIDDEN: Complex business logic, database connections (only config).
ERRORS: ConfigurationError.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
import os
from dotenv import load_dotenv
from loguru import logger

from user_console.core.exceptions import ConfigurationError

SCHEMA_AUTO_MODES = ("none", "validate", "update", "create", "create-drop")

JDBC_PREFIX = "jdbc:"


@dataclass(frozen=True)
class DatabaseConfig:
    """Конфигурация базы данных"""
    url: str
    user: str
    password: str
    pool_min: int = 1
    pool_max: int = 5
    connect_timeout: int = 10
    schema_auto: str = "update"

    def get_dsn(self) -> str:
        """URL подключения для psycopg2 (без префикса jdbc:)"""
        if self.url.startswith(JDBC_PREFIX):
            return self.url[len(JDBC_PREFIX):]
        return self.url

    def get_connection_kwargs(self) -> Dict[str, Any]:
        """Параметры для psycopg2.connect / пула соединений"""
        return {
            "dsn": self.get_dsn(),
            "user": self.user,
            "password": self.password,
            "connect_timeout": self.connect_timeout,
        }


@dataclass(frozen=True)
class AppConfig:
    """Основная конфигурация приложения"""
    app_name: str = "User Service"
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_rotation: str = "10 MB"
    log_retention: str = "30 days"


class Config:
    """
    Главный класс конфигурации, загружающий все настройки из .env файла
    и переменных окружения
    """

    def __init__(self, env_file: Optional[str] = None):
        """
        Инициализация конфигурации

        Args:
            env_file: Путь к .env файлу (опционально)

        Raises:
            ConfigurationError: Если обязательные параметры не заданы или некорректны
        """
        self._load_environment(env_file or os.getenv("USER_CONSOLE_ENV_FILE"))
        self.database = self._load_database_config()
        self.app = self._load_app_config()
        self.validate()

    def _load_environment(self, env_file: Optional[str]) -> None:
        """Загрузка переменных окружения"""
        if env_file:
            if not os.path.exists(env_file):
                raise ConfigurationError(f"Файл окружения {env_file} не найден")
            load_dotenv(env_file)
        else:
            load_dotenv()

    def _get_env_var(self, key: str, default: Any = None, required: bool = False) -> Any:
        """
        Получение переменной окружения с валидацией

        Args:
            key: Ключ переменной
            default: Значение по умолчанию
            required: Обязательная ли переменная

        Returns:
            Значение переменной

        Raises:
            ConfigurationError: Если обязательная переменная не найдена
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigurationError(f"Обязательная переменная окружения {key} не найдена")
            return default

        return value

    def _get_env_int(self, key: str, default: int) -> int:
        """Получение int переменной из окружения"""
        value = self._get_env_var(key, default)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Неверный формат int для {key}: {value!r}") from e

    def _load_database_config(self) -> DatabaseConfig:
        """Загрузка конфигурации базы данных"""
        return DatabaseConfig(
            url=self._get_env_var("DB_URL", required=True),
            user=self._get_env_var("DB_USER", required=True),
            password=self._get_env_var("DB_PASS", required=True),
            pool_min=self._get_env_int("DB_POOL_MIN", 1),
            pool_max=self._get_env_int("DB_POOL_MAX", 5),
            connect_timeout=self._get_env_int("DB_CONNECT_TIMEOUT", 10),
            schema_auto=self._get_env_var("DB_SCHEMA_AUTO", "update").strip().lower(),
        )

    def _load_app_config(self) -> AppConfig:
        """Загрузка основной конфигурации приложения"""
        return AppConfig(
            app_name=self._get_env_var("APP_NAME", "User Service"),
            log_level=self._get_env_var("LOG_LEVEL", "INFO").upper(),
            log_dir=self._get_env_var("LOG_DIR", "logs"),
            log_rotation=self._get_env_var("LOG_ROTATION", "10 MB"),
            log_retention=self._get_env_var("LOG_RETENTION", "30 days"),
        )

    def validate(self) -> None:
        """
        Валидация конфигурации

        Raises:
            ConfigurationError: При некорректных значениях
        """
        if not self.database.url.strip():
            raise ConfigurationError("DB_URL не должен быть пустым")
        if not self.database.user.strip():
            raise ConfigurationError("DB_USER не должен быть пустым")
        if self.database.pool_min < 1:
            raise ConfigurationError("DB_POOL_MIN должен быть не меньше 1")
        if self.database.pool_max < self.database.pool_min:
            raise ConfigurationError("DB_POOL_MAX должен быть не меньше DB_POOL_MIN")
        if self.database.connect_timeout < 0:
            raise ConfigurationError("DB_CONNECT_TIMEOUT не может быть отрицательным")
        if self.database.schema_auto not in SCHEMA_AUTO_MODES:
            raise ConfigurationError(
                f"Неизвестный режим DB_SCHEMA_AUTO: {self.database.schema_auto} "
                f"(допустимо: {', '.join(SCHEMA_AUTO_MODES)})"
            )
        try:
            logger.level(self.app.log_level)
        except ValueError as e:
            raise ConfigurationError(f"Неизвестный уровень LOG_LEVEL: {self.app.log_level}") from e
        logger.debug("Конфигурация прошла валидацию")

    def to_dict(self) -> Dict[str, Any]:
        """Преобразование конфигурации в словарь (без паролей)"""
        return {
            "database": {
                "url": self.database.get_dsn(),
                "user": self.database.user,
                "pool_min": self.database.pool_min,
                "pool_max": self.database.pool_max,
                "connect_timeout": self.database.connect_timeout,
                "schema_auto": self.database.schema_auto,
            },
            "app": {
                "app_name": self.app.app_name,
                "log_level": self.app.log_level,
                "log_dir": self.app.log_dir,
            },
        }

"""
MODULE: user_console.logger
RESPONSIBILITY: Centralized Loguru configuration.
ALLOWED: Configuring loguru sinks.
FORBIDDEN: Business logic, re-configuring logger in other modules.
ERRORS: OSError (if log directory creation fails).

Централизованная настройка логирования через Loguru.
Настройка выполняется один раз из точки входа (configure_logging),
остальные модули используют `from loguru import logger`.
"""
import sys
from pathlib import Path
from loguru import logger

from user_console.config.settings import AppConfig

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Консоль занята меню, поэтому в stderr идут только предупреждения и ошибки
CONSOLE_MIN_LEVEL = "WARNING"


def _console_level(level: str) -> str:
    if logger.level(level).no < logger.level(CONSOLE_MIN_LEVEL).no:
        return CONSOLE_MIN_LEVEL
    return level


def configure_logging(app_config: AppConfig) -> Path:
    """
    Настройка обработчиков loguru

    Args:
        app_config: Конфигурация приложения (уровень, каталог, ротация)

    Returns:
        Каталог с файлами логов
    """
    logger.remove()

    log_dir = Path(app_config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=_console_level(app_config.log_level),
        colorize=True,
    )

    # Файл приложения (DEBUG и выше, включая SQL)
    logger.add(
        log_dir / "app.log",
        format=FILE_FORMAT,
        level="DEBUG",
        rotation=app_config.log_rotation,
        retention=app_config.log_retention,
        compression="zip",
    )

    # Файл ошибок (ERROR и выше)
    logger.add(
        log_dir / "errors.log",
        format=FILE_FORMAT,
        level="ERROR",
        rotation=app_config.log_rotation,
        retention=app_config.log_retention,
        compression="zip",
        backtrace=True,
        diagnose=False,
    )

    logger.debug(f"Логирование настроено, каталог логов: {log_dir}")
    return log_dir

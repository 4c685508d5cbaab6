"""
MODULE: user_console.main
RESPONSIBILITY: Process entry point (config, logging, container, console loop).
ALLOWED: All application layers.
FORBIDDEN: SQL, business logic.
ERRORS: Exit status 1 on configuration, log directory or startup storage failure.

Точка входа консольного приложения управления пользователями.
"""

import sys
from typing import Callable, Optional

from loguru import logger

from user_console.config.settings import Config
from user_console.console.console_app import ConsoleApp
from user_console.core.dependency_injection import DependencyContainer
from user_console.core.exceptions import ConfigurationError, DataAccessError
from user_console.logger import configure_logging


def main(config: Optional[Config] = None, input_func: Callable[[str], str] = input) -> int:
    """
    Запуск приложения

    Ошибка конфигурации или подключения к БД при запуске фатальна:
    меню не показывается, возвращается код 1.

    Returns:
        Код завершения процесса
    """
    if config is None:
        try:
            config = Config()
        except ConfigurationError as e:
            print(f"CRITICAL ERROR during config initialization: {e}", file=sys.stderr)
            return 1

    try:
        configure_logging(config.app)
    except OSError as e:
        print(f"CRITICAL ERROR during logging initialization: {e}", file=sys.stderr)
        return 1

    logger.info(f"Запуск {config.app.app_name}")
    logger.debug(f"Конфигурация: {config.to_dict()}")

    container = DependencyContainer(config)
    try:
        container.start()
    except DataAccessError as e:
        logger.critical(f"Не удалось инициализировать хранилище: {e}")
        print(f"Ошибка инициализации базы данных: {e}", file=sys.stderr)
        container.cleanup()
        return 1

    try:
        app = ConsoleApp(
            container.get_user_service(),
            app_name=config.app.app_name,
            input_func=input_func,
        )
        app.run()
    except KeyboardInterrupt:
        logger.info("Прервано пользователем")
    finally:
        container.cleanup()

    logger.info("Работа завершена")
    return 0


if __name__ == "__main__":
    sys.exit(main())

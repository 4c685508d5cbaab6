"""
MODULE: user_console.core.exceptions
RESPONSIBILITY: Define the project-wide error taxonomy.
ALLOWED: Defining exception classes inheriting from UserConsoleError.
FORBIDDEN: Business logic, external imports (except standard library).
ERRORS: None (defines errors).

Пользовательские исключения приложения.
Все исключения должны наследоваться от UserConsoleError.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from user_console.core.validation import FieldViolation


class UserConsoleError(Exception):
    """Базовое исключение приложения"""
    pass


class ValidationError(UserConsoleError):
    """Ошибка валидации входных данных (поля пользователя, ввод с консоли)"""

    def __init__(self, message: str, violations: Optional[List["FieldViolation"]] = None):
        super().__init__(message)
        self.violations = list(violations or [])

    def __str__(self) -> str:
        if not self.violations:
            return super().__str__()
        details = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        return f"{super().__str__()} ({details})"


class DataAccessError(UserConsoleError):
    """Ошибка при работе с хранилищем данных"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error


class DatabaseConnectionError(DataAccessError):
    """Ошибка подключения к базе данных"""
    pass


class ConfigurationError(UserConsoleError):
    """Ошибка конфигурации приложения"""
    pass

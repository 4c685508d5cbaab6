"""
MODULE: user_console.services
RESPONSIBILITY: Expose repository and service classes.
ALLOWED: Internal modules.
FORBIDDEN: None.
ERRORS: None.

Репозиторий и сервис пользователей.
"""

from user_console.services.user_repository import UserRepository
from user_console.services.user_service import UserService

__all__ = [
    'UserRepository',
    'UserService',
]

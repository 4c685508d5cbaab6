"""
Сервис для работы с пользователями.

Фасад над репозиторием: делегирует вызовы без дополнительной логики,
валидации и преобразования ошибок. Позволяет подменить реализацию
доступа к данным (например, в тестах).
"""

from typing import List, Optional

from user_console.core.interfaces import IUserRepository
from user_console.core.models import User


class UserService:
    """Сервис для работы с пользователями."""

    def __init__(self, user_repository: IUserRepository):
        self.user_repository = user_repository

    def create(self, user: User) -> int:
        """Создание пользователя."""
        return self.user_repository.create(user)

    def read(self, user_id: int) -> Optional[User]:
        """Получение пользователя по идентификатору."""
        return self.user_repository.read(user_id)

    def update(self, user: User) -> bool:
        """Обновление пользователя."""
        return self.user_repository.update(user)

    def delete(self, user_id: int) -> bool:
        """Удаление пользователя."""
        return self.user_repository.delete(user_id)

    def find_all(self) -> List[User]:
        """Получение всех пользователей."""
        return self.user_repository.find_all()

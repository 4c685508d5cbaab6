"""
MODULE: user_console.core.interfaces
RESPONSIBILITY: Define Protocols for dependency injection.
ALLOWED: Typing imports, Protocol.
FORBIDDEN: Implementation details, concrete classes (except data structures).
ERRORS: None.

Интерфейсы (Protocol) для модульного проектирования

Определяет контракты слоя доступа к данным и сервиса пользователей,
обеспечивая возможность подмены реализации в тестах.
"""

from typing import Protocol, Optional, List

from user_console.core.models import User


class IUserRepository(Protocol):
    """Интерфейс для репозитория пользователей"""

    def create(self, user: User) -> int:
        """Сохранение нового пользователя, возвращает идентификатор"""
        ...

    def read(self, user_id: int) -> Optional[User]:
        """Получение пользователя по идентификатору (None, если не найден)"""
        ...

    def update(self, user: User) -> bool:
        """Обновление пользователя (False, если идентификатор не найден)"""
        ...

    def delete(self, user_id: int) -> bool:
        """Удаление пользователя (False, если удалять нечего)"""
        ...

    def find_all(self) -> List[User]:
        """Получение всех пользователей"""
        ...


class IUserService(IUserRepository, Protocol):
    """Интерфейс для сервиса пользователей (тот же контракт, что у репозитория)"""

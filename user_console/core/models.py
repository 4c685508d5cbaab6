"""
MODULE: user_console.core.models
RESPONSIBILITY: Define domain data structures (dataclasses).
ALLOWED: Dataclasses, Typing.
FORBIDDEN: Business logic, database operations.
ERRORS: None.

Модель данных пользователя.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

CREATED_AT_FORMAT = "%Y-%m-%d %H:%M"


@dataclass
class User:
    """
    Модель пользователя

    Пользователь без идентификатора считается временным (transient),
    с идентификатором - сохраненным (persistent).

    Attributes:
        name: Имя пользователя
        email: Адрес электронной почты
        age: Возраст
        id: Идентификатор, назначается базой данных при создании
        created_at: Дата создания записи, назначается базой данных
    """
    name: str = ""
    email: str = ""
    age: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_persistent(self) -> bool:
        """Сохранен ли пользователь в базе данных"""
        return self.id is not None

    def format_created_at(self) -> str:
        if self.created_at is None:
            return "-"
        return self.created_at.strftime(CREATED_AT_FORMAT)

    def format_line(self) -> str:
        """Строка для вывода в консоль: id: имя, email, возраст, дата создания"""
        return f"{self.id}: {self.name}, {self.email}, {self.age}, {self.format_created_at()}"

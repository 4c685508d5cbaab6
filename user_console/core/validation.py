"""
MODULE: user_console.core.validation
RESPONSIBILITY: Field rules for the User entity and console numeric parsing.
ALLOWED: re, dataclasses, typing, core.models, core.exceptions.
FORBIDDEN: Database operations, console I/O.
ERRORS: ValidationError (parse_int only).

Правила валидации пользователя.

validate_user не бросает исключений, а возвращает ValidationResult
со списком нарушений. Решение о том, что делать с нарушениями,
принимает вызывающий слой.
"""

import re
from dataclasses import dataclass, field
from typing import List

from user_console.core.exceptions import ValidationError
from user_console.core.models import User

NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255
MIN_AGE = 0
MAX_AGE = 150

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
INT_PATTERN = re.compile(r"^[+-]?\d+$", re.ASCII)


@dataclass(frozen=True)
class FieldViolation:
    """Нарушение правила для одного поля"""
    field: str
    message: str


@dataclass
class ValidationResult:
    """Результат проверки пользователя"""
    violations: List[FieldViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def add(self, field_name: str, message: str) -> None:
        self.violations.append(FieldViolation(field_name, message))

    def raise_if_invalid(self, message: str = "Валидация не пройдена") -> None:
        """Преобразование непустого результата в ValidationError"""
        if self.violations:
            raise ValidationError(message, self.violations)


def _check_text(result: ValidationResult, field_name: str, value, max_length: int) -> bool:
    if not isinstance(value, str) or not value.strip():
        result.add(field_name, "не должно быть пустым")
        return False
    if len(value) > max_length:
        result.add(field_name, f"длина не должна превышать {max_length} символов")
        return False
    # PostgreSQL не хранит NUL в текстовых полях
    if "\x00" in value:
        result.add(field_name, "не должно содержать символ NUL")
        return False
    return True


def validate_user(user: User, require_id: bool = False) -> ValidationResult:
    """
    Проверка полей пользователя

    Args:
        user: Проверяемый пользователь
        require_id: True для обновления (нужен идентификатор),
            False для создания (идентификатора быть не должно)

    Returns:
        ValidationResult со всеми найденными нарушениями
    """
    result = ValidationResult()

    if require_id:
        if isinstance(user.id, bool) or not isinstance(user.id, int) or user.id <= 0:
            result.add("id", "требуется идентификатор существующего пользователя")
    elif user.id is not None:
        result.add("id", "пользователь уже сохранен")

    _check_text(result, "name", user.name, NAME_MAX_LENGTH)

    if _check_text(result, "email", user.email, EMAIL_MAX_LENGTH):
        if not EMAIL_PATTERN.match(user.email):
            result.add("email", "некорректный адрес электронной почты")

    # bool - подкласс int, но возрастом не является
    if isinstance(user.age, bool) or not isinstance(user.age, int):
        result.add("age", "должен быть целым числом")
    elif not MIN_AGE <= user.age <= MAX_AGE:
        result.add("age", f"должен быть в диапазоне {MIN_AGE}..{MAX_AGE}")

    return result


def parse_int(raw: str, field_name: str) -> int:
    """
    Преобразование введенной строки в целое число

    Raises:
        ValidationError: Если строка не является целым числом
    """
    try:
        text = raw.strip()
        if not INT_PATTERN.match(text):
            raise ValueError(text)
        return int(text)
    except (AttributeError, ValueError) as e:
        raise ValidationError(
            f"'{raw}' не является целым числом",
            [FieldViolation(field_name, "должно быть целым числом")],
        ) from e

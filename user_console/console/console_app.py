"""
MODULE: user_console.console.console_app
RESPONSIBILITY: Line-oriented text menu over UserService.
ALLOWED: print/input, loguru, core.models, core.validation, core.exceptions.
FORBIDDEN: SQL, connection management.
ERRORS: None propagated (ValidationError / DataAccessError are reported to the operator).

Консольное приложение для управления пользователями.

Команды меню: 1 - создать, 2 - прочитать, 3 - обновить, 4 - удалить,
5 - список, 0 - выход. Ошибки валидации и доступа к данным выводятся
оператору, после чего цикл продолжается.
"""

import sys
from typing import Callable, Dict, Optional, TextIO

from loguru import logger

from user_console.core.exceptions import DataAccessError, ValidationError
from user_console.core.interfaces import IUserService
from user_console.core.models import User
from user_console.core.validation import parse_int

EXIT_COMMAND = "0"


class ConsoleApp:
    """Текстовое меню для операций над пользователями"""

    def __init__(
        self,
        user_service: IUserService,
        app_name: str = "User Service",
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
        error_output: Optional[TextIO] = None,
    ):
        self.user_service = user_service
        self.app_name = app_name
        self._input = input_func
        self._output = output
        self._error_output = error_output
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.create,
            "2": self.read,
            "3": self.update,
            "4": self.delete,
            "5": self.list_all,
        }

    def _print(self, message: str = "") -> None:
        print(message, file=self._output or sys.stdout)

    def _print_error(self, message: str) -> None:
        print(message, file=self._error_output or sys.stderr)

    def _prompt(self, label: str) -> str:
        return self._input(label).strip()

    def print_menu(self) -> None:
        """Вывод меню доступных команд"""
        self._print(f"\n=== {self.app_name} ===")
        self._print("1) Создать пользователя")
        self._print("2) Прочитать по ID")
        self._print("3) Обновить пользователя")
        self._print("4) Удалить по ID")
        self._print("5) Список всех")
        self._print("0) Выход")

    def run(self) -> None:
        """
        Цикл обработки команд до команды выхода или конца ввода.
        Освобождение ресурсов выполняет вызывающий код.
        """
        logger.info("Консольное меню запущено")
        while True:
            self.print_menu()
            try:
                option = self._prompt("Выбор: ")
                if option == EXIT_COMMAND:
                    break
                action = self._actions.get(option)
                if action is None:
                    self._print("Неверный ввод.")
                    continue
                self._dispatch(action)
            except EOFError:
                logger.info("Конец ввода, завершение работы")
                break
        self._print("Завершение работы...")

    def _dispatch(self, action: Callable[[], None]) -> None:
        try:
            action()
        except ValidationError as e:
            self._print_error(f"Неверный ввод: {e}")
        except DataAccessError as e:
            self._print_error(f"Ошибка работы с данными: {e}")

    def _prompt_id(self) -> int:
        return parse_int(self._prompt("ID: "), "id")

    def create(self) -> None:
        """Создание пользователя по данным, введенным в консоли"""
        name = self._prompt("Имя: ")
        email = self._prompt("Email: ")
        age = parse_int(self._prompt("Возраст: "), "age")
        user_id = self.user_service.create(User(name=name, email=email, age=age))
        self._print(f"Пользователь создан, id={user_id}")

    def read(self) -> None:
        """Вывод пользователя по введенному ID"""
        user = self.user_service.read(self._prompt_id())
        if user is None:
            self._print("Пользователь не найден.")
        else:
            self._print(f"▶ {user.format_line()}")

    def update(self) -> None:
        """
        Обновление существующего пользователя.
        Пустой ввод оставляет текущее значение поля.
        """
        user = self.user_service.read(self._prompt_id())
        if user is None:
            self._print("Нет такого ID.")
            return

        name = self._prompt(f"Новое имя ({user.name}): ")
        if name:
            user.name = name
        email = self._prompt(f"Новый email ({user.email}): ")
        if email:
            user.email = email
        age = self._prompt(f"Новый возраст ({user.age}): ")
        if age:
            user.age = parse_int(age, "age")

        if self.user_service.update(user):
            self._print("Обновлено.")
        else:
            self._print("Нет такого ID.")

    def delete(self) -> None:
        """Удаление пользователя по введенному ID"""
        self.user_service.delete(self._prompt_id())
        self._print("Удалено.")

    def list_all(self) -> None:
        """Вывод списка всех пользователей"""
        users = self.user_service.find_all()
        if not users:
            self._print("Нет ни одного пользователя.")
            return
        for user in users:
            self._print(user.format_line())

from user_console.console.console_app import ConsoleApp

__all__ = ["ConsoleApp"]

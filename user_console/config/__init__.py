from user_console.config.settings import AppConfig, Config, DatabaseConfig

__all__ = ["AppConfig", "Config", "DatabaseConfig"]

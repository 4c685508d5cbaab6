"""
Консольный менеджер пользователей поверх PostgreSQL.
"""

__version__ = "1.0.0"

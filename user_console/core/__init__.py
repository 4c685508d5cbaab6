"""
CORE LAYER CONTRACT

This package contains core application components and abstractions.

RULES:
- Contains fundamental building blocks for all layers
- Defines the User entity, its validation rules and the error hierarchy
- Owns the connection pool handle and schema reconciliation
- No console I/O

LAYER RESPONSIBILITY:
- UserConsoleError hierarchy
- User model and ValidationResult
- UserDatabaseManager (pool + transaction scope)
- Protocols for repository / service substitution
- DependencyContainer wiring

CROSS-LAYER RESTRICTIONS:
- No imports from user_console.console
- Only dependency_injection may import from user_console.services
"""

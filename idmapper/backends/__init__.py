"""Mapper backends.

The in-memory backend is imported eagerly. The SQLite backend pulls in
sqlmodel/SQLAlchemy, so import it from ``idmapper.backends.sql`` when needed.
"""

from idmapper.backends.memory import InMemoryIDMapper

__all__ = [
    "InMemoryIDMapper",
]

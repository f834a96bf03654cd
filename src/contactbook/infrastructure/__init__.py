"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.database import (
    create_engine_from_url,
    get_database_url,
)
from contactbook.infrastructure.memory_repository import InMemoryContactRepository
from contactbook.infrastructure.persistence.sql_repository import SqlContactRepository

__all__ = [
    "InMemoryContactRepository",
    "SqlContactRepository",
    "create_engine_from_url",
    "get_database_url",
]

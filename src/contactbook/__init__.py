"""
Contactbook core: clean-architecture layout.

- domain: the Contact entity and its field rules. No outer dependencies.
- application: use cases (ContactService), ports (ContactRepository), DTOs.
- infrastructure: adapters (InMemoryContactRepository, SqlContactRepository).
"""

from contactbook.application import (
    UNCHANGED,
    ContactCreated,
    ContactDeleted,
    ContactRepository,
    ContactService,
    ContactUpdate,
    ContactUpdated,
    Invalid,
    NotFound,
    StoreError,
    StoreFailure,
)
from contactbook.domain import Contact
from contactbook.infrastructure import (
    InMemoryContactRepository,
    SqlContactRepository,
    create_engine_from_url,
)

__all__ = [
    "UNCHANGED",
    "Contact",
    "ContactCreated",
    "ContactDeleted",
    "ContactRepository",
    "ContactService",
    "ContactUpdate",
    "ContactUpdated",
    "InMemoryContactRepository",
    "Invalid",
    "NotFound",
    "SqlContactRepository",
    "StoreError",
    "StoreFailure",
    "create_engine_from_url",
]

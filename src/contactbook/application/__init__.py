"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from contactbook.application.contact_service import ContactService
from contactbook.application.dto import (
    UNCHANGED,
    ContactCreated,
    ContactDeleted,
    ContactUpdate,
    ContactUpdated,
    Invalid,
    NotFound,
    StoreFailure,
)
from contactbook.application.ports import ContactRepository, StoreError

__all__ = [
    "UNCHANGED",
    "ContactCreated",
    "ContactDeleted",
    "ContactRepository",
    "ContactService",
    "ContactUpdate",
    "ContactUpdated",
    "Invalid",
    "NotFound",
    "StoreError",
    "StoreFailure",
]

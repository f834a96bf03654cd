"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.domain import Contact


class StoreError(Exception):
    """The store could not carry out the operation (connectivity, constraint, ...).
    Adapters log the underlying fault and raise this instead."""


class ContactRepository(Protocol):
    """Persists and queries contacts. Store faults raise StoreError; a missing row is None/False."""

    def add(self, contact: Contact) -> int:
        """Store a new contact. Returns the assigned id."""
        ...

    def delete(self, contact_id: int) -> bool:
        """Delete by id. Returns True if a row existed and was removed."""
        ...

    def update(self, contact: Contact) -> bool:
        """Overwrite every field of the row with contact.id. Returns True if the row existed."""
        ...

    def get_by_id(self, contact_id: int) -> Contact | None:
        """Return the contact with the given id, or None."""
        ...

    def list_all(self) -> list[Contact]:
        """Return all contacts in the store's natural order."""
        ...

    def search(self, keyword: str) -> list[Contact]:
        """Return contacts whose name or phone contains keyword, ignoring case of A-Z only."""
        ...

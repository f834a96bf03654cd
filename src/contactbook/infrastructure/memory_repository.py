"""In-memory implementation of ContactRepository (no DB)."""

import dataclasses
import itertools

from contactbook.domain import Contact, ascii_lower


class InMemoryContactRepository:
    """Stores contacts in a dict. Natural order is insertion order; ids start at 1 and are never reused."""

    def __init__(self) -> None:
        self._by_id: dict[int, Contact] = {}
        self._ids = itertools.count(1)

    def add(self, contact: Contact) -> int:
        contact_id = next(self._ids)
        self._by_id[contact_id] = dataclasses.replace(contact, id=contact_id)
        return contact_id

    def delete(self, contact_id: int) -> bool:
        return self._by_id.pop(contact_id, None) is not None

    def update(self, contact: Contact) -> bool:
        if contact.id not in self._by_id:
            return False
        self._by_id[contact.id] = contact
        return True

    def get_by_id(self, contact_id: int) -> Contact | None:
        return self._by_id.get(contact_id)

    def list_all(self) -> list[Contact]:
        return list(self._by_id.values())

    def search(self, keyword: str) -> list[Contact]:
        needle = ascii_lower(keyword)
        return [
            c
            for c in self._by_id.values()
            if needle in ascii_lower(c.name) or needle in ascii_lower(c.phone)
        ]

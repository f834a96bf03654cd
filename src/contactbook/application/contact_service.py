"""Contact creation, update, deletion, lookup, listing, and search."""

import dataclasses
import logging

from contactbook.application.dto import (
    UNCHANGED,
    BlacklistResult,
    ContactCreated,
    ContactDeleted,
    ContactUpdate,
    ContactUpdated,
    CreateResult,
    DeleteResult,
    Invalid,
    NotFound,
    StoreFailure,
    UpdateResult,
)
from contactbook.application.ports import ContactRepository, StoreError
from contactbook.domain import Contact

logger = logging.getLogger(__name__)


def _by_name(contacts: list[Contact]) -> list[Contact]:
    # sorted() is stable: equal names keep the repository's order.
    return sorted(contacts, key=lambda c: c.name)


class ContactService:
    """Business rules in front of a ContactRepository. Never raises on bad input or store faults:
    writes report StoreFailure, reads come back empty or None."""

    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository

    def create_contact(
        self,
        name: str,
        phone: str,
        email: str | None = None,
        address: str | None = None,
        blacklisted: bool = False,
    ) -> CreateResult:
        """Validate and store a new contact. Blank email/address are stored as None."""
        try:
            contact = Contact(
                name=name,
                phone=phone,
                email=email,
                address=address,
                blacklisted=blacklisted,
            )
        except ValueError as e:
            logger.debug("Rejected new contact %r: %s", name, e)
            return Invalid(reason=str(e))

        try:
            contact_id = self._repo.add(contact)
        except StoreError:
            return StoreFailure()
        logger.info("Created contact %s (%s)", contact_id, contact.name)
        return ContactCreated(contact_id=contact_id, name=contact.name)

    def update_contact(self, contact_id: int, changes: ContactUpdate) -> UpdateResult:
        """
        Apply changes to an existing contact and write the whole record back.
        Fields left UNCHANGED keep their stored value; any supplied value is
        re-validated and an invalid one fails the update without writing.
        """
        try:
            current = self._repo.get_by_id(contact_id)
        except StoreError:
            return StoreFailure()
        if current is None:
            return NotFound(contact_id=contact_id)

        fields = {"blacklisted": changes.blacklisted}
        for name in ("name", "phone"):
            value = getattr(changes, name)
            if value is UNCHANGED:
                continue
            if value is None or not value.strip():
                logger.debug("Rejected update of %s: blank %s", contact_id, name)
                return Invalid(reason=f"{name.capitalize()} cannot be blank.")
            fields[name] = value
        for name in ("email", "address"):
            value = getattr(changes, name)
            if value is not UNCHANGED:
                fields[name] = value

        try:
            updated = dataclasses.replace(current, **fields)
        except ValueError as e:
            logger.debug("Rejected update of %s: %s", contact_id, e)
            return Invalid(reason=str(e))

        return self._write(updated, "Updated")

    def delete_contact(self, contact_id: int) -> DeleteResult:
        """Delete by id. Deleting a missing id returns NotFound, every time."""
        try:
            deleted = self._repo.delete(contact_id)
        except StoreError:
            return StoreFailure()
        if not deleted:
            return NotFound(contact_id=contact_id)
        logger.info("Deleted contact %s", contact_id)
        return ContactDeleted(contact_id=contact_id)

    def get_contact(self, contact_id: int) -> Contact | None:
        try:
            return self._repo.get_by_id(contact_id)
        except StoreError:
            return None

    def list_contacts(self) -> list[Contact]:
        """Return all contacts ordered by name."""
        try:
            return _by_name(self._repo.list_all())
        except StoreError:
            return []

    def search_contacts(self, keyword: str) -> list[Contact]:
        """Return contacts whose name or phone contains keyword, ordered by name.
        Matching ignores the case of A-Z; an empty keyword matches everything."""
        try:
            return _by_name(self._repo.search(keyword or ""))
        except StoreError:
            return []

    def add_to_blacklist(self, contact_id: int) -> BlacklistResult:
        """Set blacklisted=True, leaving every other field as stored."""
        try:
            current = self._repo.get_by_id(contact_id)
        except StoreError:
            return StoreFailure()
        if current is None:
            return NotFound(contact_id=contact_id)
        try:
            updated = dataclasses.replace(current, blacklisted=True)
        except ValueError as e:
            # The stored row itself breaks a field rule; it has to be corrected first.
            return Invalid(reason=str(e))
        return self._write(updated, "Blacklisted")

    def find_by_name_and_phone(self, name: str, phone: str) -> Contact | None:
        """First contact (in name order) with exactly this name and phone."""
        for contact in self.list_contacts():
            if contact.name == name and contact.phone == phone:
                return contact
        return None

    def _write(self, contact: Contact, verb: str) -> ContactUpdated | NotFound | StoreFailure:
        try:
            written = self._repo.update(contact)
        except StoreError:
            return StoreFailure()
        if not written:
            # Deleted between the read and the write.
            return NotFound(contact_id=contact.id)
        logger.info("%s contact %s", verb, contact.id)
        return ContactUpdated(contact_id=contact.id)

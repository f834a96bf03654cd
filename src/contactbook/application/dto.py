"""Input DTOs and result types for the contact use cases."""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class _Unchanged(Enum):
    UNCHANGED = "unchanged"

    def __repr__(self) -> str:
        return "UNCHANGED"


# Marks a ContactUpdate field the caller did not touch.
UNCHANGED = _Unchanged.UNCHANGED

FieldChange = str | None | _Unchanged


@dataclass(frozen=True)
class ContactUpdate:
    """
    Changes to apply to an existing contact.

    Each text field is one of three states:
    UNCHANGED (keep the stored value), a string (set it), or None (clear it).
    A blank string also clears email/address. name and phone cannot be
    cleared; None or blank for those is rejected by the service.
    blacklisted is always written as given.
    """

    blacklisted: bool
    name: FieldChange = UNCHANGED
    phone: FieldChange = UNCHANGED
    email: FieldChange = UNCHANGED
    address: FieldChange = UNCHANGED

    @classmethod
    def from_form(
        cls,
        name: str | None,
        phone: str | None,
        email: str | None,
        address: str | None,
        blacklisted: bool,
    ) -> "ContactUpdate":
        """Form convention: None leaves a field unchanged, blank email/address clears it."""

        def change(value: str | None) -> FieldChange:
            return UNCHANGED if value is None else value

        return cls(
            blacklisted=blacklisted,
            name=change(name),
            phone=change(phone),
            email=change(email),
            address=change(address),
        )


# --- success results ---


@dataclass(frozen=True)
class ContactCreated:
    """Contact passed validation and was stored under contact_id."""

    ok: ClassVar[bool] = True

    contact_id: int
    name: str


@dataclass(frozen=True)
class ContactUpdated:
    ok: ClassVar[bool] = True

    contact_id: int


@dataclass(frozen=True)
class ContactDeleted:
    ok: ClassVar[bool] = True

    contact_id: int


# --- failure results ---


@dataclass(frozen=True)
class Invalid:
    """Caller-supplied data broke a field rule."""

    ok: ClassVar[bool] = False

    reason: str


@dataclass(frozen=True)
class NotFound:
    """No contact with the given id (never existed or already deleted)."""

    ok: ClassVar[bool] = False

    contact_id: int
    reason: str = field(default="", compare=False)

    def __post_init__(self):
        if not self.reason:
            object.__setattr__(
                self, "reason", f"No contact with id {self.contact_id}."
            )


@dataclass(frozen=True)
class StoreFailure:
    """The store did not accept the operation (connectivity, constraint, ...)."""

    ok: ClassVar[bool] = False

    reason: str = "The contact store is unavailable; nothing was changed."


CreateResult = ContactCreated | Invalid | StoreFailure
UpdateResult = ContactUpdated | Invalid | NotFound | StoreFailure
DeleteResult = ContactDeleted | NotFound | StoreFailure
BlacklistResult = ContactUpdated | Invalid | NotFound | StoreFailure

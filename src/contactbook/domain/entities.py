"""Domain entities: Contact and the field rules it enforces."""

import re
from dataclasses import dataclass

PHONE_PATTERN = re.compile(r"^[0-9]{7,11}$")
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
# Bare QQ mailboxes are not accepted as a contact's email.
REJECTED_EMAIL_SUFFIXES = ("@qq.com", "@qq.cn")


def is_valid_phone(phone: str | None) -> bool:
    """7 to 11 ASCII digits, nothing else."""
    if phone is None:
        return False
    return PHONE_PATTERN.fullmatch(phone) is not None


def is_valid_email(email: str | None) -> bool:
    """Blank or absent is valid. Otherwise local@domain.tld and not a QQ mailbox."""
    if email is None or not email.strip():
        return True
    if EMAIL_PATTERN.fullmatch(email) is None:
        return False
    return not email.lower().endswith(REJECTED_EMAIL_SUFFIXES)


_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def ascii_lower(value: str) -> str:
    """Lowercase A-Z only, the way SQL lower() does on SQLite."""
    return value.translate(_ASCII_LOWER)


def blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


@dataclass(frozen=True)
class Contact:
    """
    One entry of the address book.
    id is None until the repository has stored the contact and assigned one.
    Blank email/address are normalized to None; a Contact never holds "".
    """

    name: str
    phone: str
    email: str | None = None
    address: str | None = None
    blacklisted: bool = False
    id: int | None = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Name is required.")
        if not is_valid_phone(self.phone):
            raise ValueError("Phone number must be 7 to 11 digits.")
        if not is_valid_email(self.email):
            raise ValueError(
                "Email is malformed or is a QQ mailbox (@qq.com / @qq.cn)."
            )
        object.__setattr__(self, "email", blank_to_none(self.email))
        object.__setattr__(self, "address", blank_to_none(self.address))
        object.__setattr__(self, "blacklisted", bool(self.blacklisted))

    @classmethod
    def from_storage(
        cls,
        id: int,
        name: str,
        phone: str,
        email: str | None,
        address: str | None,
        blacklisted: bool,
    ) -> "Contact":
        """Rebuild a stored row as-is. Rows written by other tools may break the
        field rules; they stay readable, and any change to them is validated."""
        contact = object.__new__(cls)
        object.__setattr__(contact, "id", id)
        object.__setattr__(contact, "name", name or "")
        object.__setattr__(contact, "phone", phone or "")
        object.__setattr__(contact, "email", blank_to_none(email))
        object.__setattr__(contact, "address", blank_to_none(address))
        object.__setattr__(contact, "blacklisted", bool(blacklisted))
        return contact

"""Domain layer: entities and field rules. No dependencies on outer layers."""

from contactbook.domain.entities import (
    Contact,
    ascii_lower,
    blank_to_none,
    is_valid_email,
    is_valid_phone,
)

__all__ = ["Contact", "ascii_lower", "blank_to_none", "is_valid_email", "is_valid_phone"]

"""SQL implementation of ContactRepository (SQLAlchemy Core).
One table, `contacts`; every statement binds its parameters.
Store faults are logged here and re-raised as StoreError; the service turns them into failure results.
"""

import logging

from sqlalchemy import (
    Boolean,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    delete,
    false,
    func,
    insert,
    literal,
    or_,
    select,
    update,
)
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from contactbook.application.ports import StoreError
from contactbook.domain import Contact

logger = logging.getLogger(__name__)

metadata = MetaData()

contacts_table = Table(
    "contacts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("phone", String(15), nullable=False),
    Column("email", String(100), nullable=True),
    Column("address", String(255), nullable=True),
    Column("blacklisted", Boolean, nullable=False, default=False, server_default=false()),
)

LIKE_ESCAPE = "\\"


def _escape_like(keyword: str) -> str:
    """Make % and _ in a user keyword match literally."""
    return (
        keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _row_to_contact(row: Row) -> Contact:
    return Contact.from_storage(
        id=row.id,
        name=row.name,
        phone=row.phone,
        email=row.email,
        address=row.address,
        blacklisted=row.blacklisted,
    )


def _values(contact: Contact) -> dict:
    return {
        "name": contact.name,
        "phone": contact.phone,
        "email": contact.email,
        "address": contact.address,
        "blacklisted": contact.blacklisted,
    }


class SqlContactRepository:
    """Stores contacts in the `contacts` table of any SQLAlchemy-supported database.
    The table is created on construction if it does not exist yet.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        try:
            metadata.create_all(engine, checkfirst=True)
        except SQLAlchemyError:
            logger.exception("Could not create the contacts table")

    def add(self, contact: Contact) -> int:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(insert(contacts_table).values(**_values(contact)))
                return result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            logger.exception("Failed to add contact %r", contact.name)
            raise StoreError("add failed") from e

    def delete(self, contact_id: int) -> bool:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    delete(contacts_table).where(contacts_table.c.id == contact_id)
                )
                return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.exception("Failed to delete contact %s", contact_id)
            raise StoreError("delete failed") from e

    def update(self, contact: Contact) -> bool:
        if contact.id is None:
            return False
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(contacts_table)
                    .where(contacts_table.c.id == contact.id)
                    .values(**_values(contact))
                )
                return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.exception("Failed to update contact %s", contact.id)
            raise StoreError("update failed") from e

    def get_by_id(self, contact_id: int) -> Contact | None:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(contacts_table).where(contacts_table.c.id == contact_id)
                ).first()
        except SQLAlchemyError as e:
            logger.exception("Failed to look up contact %s", contact_id)
            raise StoreError("lookup failed") from e
        if row is None:
            return None
        return _row_to_contact(row)

    def list_all(self) -> list[Contact]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(select(contacts_table)).all()
        except SQLAlchemyError as e:
            logger.exception("Failed to list contacts")
            raise StoreError("list failed") from e
        return [_row_to_contact(row) for row in rows]

    def search(self, keyword: str) -> list[Contact]:
        # Both sides go through the store's lower() so they fold case the same way.
        pattern = func.lower(literal(f"%{_escape_like(keyword)}%"))
        c = contacts_table.c
        stmt = select(contacts_table).where(
            or_(
                func.lower(c.name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(c.phone).like(pattern, escape=LIKE_ESCAPE),
            )
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as e:
            logger.exception("Failed to search contacts for %r", keyword)
            raise StoreError("search failed") from e
        return [_row_to_contact(row) for row in rows]

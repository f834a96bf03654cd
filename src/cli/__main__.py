"""
Line-menu front end: ContactService + SQL store.
Run: python -m cli (from repo root, with .env or env vars set).
"""
import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path

from dotenv import load_dotenv

# Repo root: from src/cli/__main__.py go up to repo root
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent
for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
    if path.exists():
        load_dotenv(path)
        break

from contactbook.application import ContactService, ContactUpdate
from contactbook.domain import Contact
from contactbook.infrastructure import SqlContactRepository, create_engine_from_url

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]

MENU = """
===== Contacts =====
1. Add contact
2. Delete contact
3. Update contact
4. Show contact (by id)
5. List all contacts
6. Search contacts (name or phone)
0. Exit
===================="""

# Typed at an email/address prompt during update to clear the field.
CLEAR_MARK = "-"


def format_contact(c: Contact) -> str:
    flag = " [blacklisted]" if c.blacklisted else ""
    return (
        f"#{c.id} {c.name} | phone: {c.phone} | email: {c.email or '-'}"
        f" | address: {c.address or '-'}{flag}"
    )


def _yes(answer: str) -> bool:
    return answer.strip().lower() in {"y", "yes"}


def _read_id(read: Reader, write: Writer, prompt: str) -> int | None:
    try:
        return int(read(prompt).strip())
    except ValueError:
        write("Please enter a numeric id.")
        return None


def _write_contacts(write: Writer, contacts: list[Contact], empty: str) -> None:
    if not contacts:
        write(empty)
        return
    for c in contacts:
        write(format_contact(c))


def add_contact(service: ContactService, read: Reader, write: Writer) -> None:
    name = read("Name: ")
    phone = read("Phone: ")
    email = read("Email (optional): ")
    address = read("Address (optional): ")
    blacklisted = _yes(read("Blacklist this contact? (y/N): "))
    result = service.create_contact(name, phone, email, address, blacklisted)
    if result.ok:
        write(f"Contact {result.name} added with id {result.contact_id}.")
    else:
        write(f"Could not add contact: {result.reason}")


def delete_contact(service: ContactService, read: Reader, write: Writer) -> None:
    contact_id = _read_id(read, write, "Id of the contact to delete: ")
    if contact_id is None:
        return
    result = service.delete_contact(contact_id)
    if result.ok:
        write("Contact deleted.")
    else:
        write(result.reason)


def update_contact(service: ContactService, read: Reader, write: Writer) -> None:
    contact_id = _read_id(read, write, "Id of the contact to update: ")
    if contact_id is None:
        return
    current = service.get_contact(contact_id)
    if current is None:
        write(f"No contact with id {contact_id}.")
        return

    write(f"Leave a field empty to keep it. Enter '{CLEAR_MARK}' to clear email or address.")

    def keep_if_empty(answer: str) -> str | None:
        return answer if answer.strip() else None

    def optional(answer: str) -> str | None:
        if answer.strip() == CLEAR_MARK:
            return ""
        return keep_if_empty(answer)

    name = keep_if_empty(read(f"Name [{current.name}]: "))
    phone = keep_if_empty(read(f"Phone [{current.phone}]: "))
    email = optional(read(f"Email [{current.email or ''}]: "))
    address = optional(read(f"Address [{current.address or ''}]: "))
    answer = read(f"Blacklisted? (y/n) [{'y' if current.blacklisted else 'n'}]: ")
    blacklisted = _yes(answer) if answer.strip() else current.blacklisted

    changes = ContactUpdate.from_form(name, phone, email, address, blacklisted)
    result = service.update_contact(contact_id, changes)
    if result.ok:
        write("Contact updated.")
    else:
        write(f"Could not update contact: {result.reason}")


def show_contact(service: ContactService, read: Reader, write: Writer) -> None:
    contact_id = _read_id(read, write, "Contact id: ")
    if contact_id is None:
        return
    contact = service.get_contact(contact_id)
    if contact is None:
        write(f"No contact with id {contact_id}.")
        return
    write(format_contact(contact))


def list_contacts(service: ContactService, read: Reader, write: Writer) -> None:
    _write_contacts(write, service.list_contacts(), "No contacts yet.")


def search_contacts(service: ContactService, read: Reader, write: Writer) -> None:
    keyword = read("Keyword (name or phone): ")
    _write_contacts(write, service.search_contacts(keyword), "No contacts match that keyword.")


ACTIONS = {
    1: add_contact,
    2: delete_contact,
    3: update_contact,
    4: show_contact,
    5: list_contacts,
    6: search_contacts,
}


def _read_choice(read: Reader) -> int:
    try:
        return int(read("Choose an option: ").strip())
    except ValueError:
        return -1


def run(service: ContactService, read: Reader = input, write: Writer = print) -> int:
    """Menu loop. Returns the process exit code (0 on exit or end of input)."""
    write("Contactbook")
    while True:
        write(MENU)
        try:
            choice = _read_choice(read)
            if choice == 0:
                write("Bye.")
                return 0
            action = ACTIONS.get(choice)
            if action is None:
                write("Invalid option, try again.")
                continue
            action(service, read, write)
        except EOFError:
            return 0


def main() -> int:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
    )
    engine = create_engine_from_url()
    logger.info("Using contact store %s", engine.url.render_as_string(hide_password=True))
    service = ContactService(SqlContactRepository(engine))
    try:
        return run(service)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())

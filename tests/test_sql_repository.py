"""Tests for SqlContactRepository against a SQLite file per test."""

import dataclasses

import pytest
from sqlalchemy import inspect, text

from contactbook.application import (
    ContactCreated,
    ContactService,
    ContactUpdate,
    ContactUpdated,
    Invalid,
    StoreError,
    StoreFailure,
)
from contactbook.domain import Contact
from contactbook.infrastructure import (
    InMemoryContactRepository,
    SqlContactRepository,
    create_engine_from_url,
)


@pytest.fixture
def engine(tmp_path):
    engine = create_engine_from_url(f"sqlite:///{tmp_path / 'contacts.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def repo(engine):
    return SqlContactRepository(engine)


def test_table_created_on_construction(engine):
    SqlContactRepository(engine)
    columns = {c["name"] for c in inspect(engine).get_columns("contacts")}
    assert columns == {"id", "name", "phone", "email", "address", "blacklisted"}
    # A second repository on the same database leaves the table alone.
    SqlContactRepository(engine)


def test_add_get_by_id_list_all(repo):
    contact = Contact(
        name="Alice", phone="1234567", email="alice@example.com", address="Home"
    )
    contact_id = repo.add(contact)
    assert isinstance(contact_id, int)

    found = repo.get_by_id(contact_id)
    assert found == dataclasses.replace(contact, id=contact_id)

    all_contacts = repo.list_all()
    assert len(all_contacts) == 1
    assert all_contacts[0].id == contact_id


def test_ids_are_unique(repo):
    first = repo.add(Contact(name="Alice", phone="1234567"))
    second = repo.add(Contact(name="Bob", phone="7654321"))
    assert first != second


def test_absent_optionals_stored_as_null(engine, repo):
    contact_id = repo.add(Contact(name="Alice", phone="1234567", email="", address=" "))
    with engine.connect() as conn:
        row = conn.execute(
            text("SELECT email, address, blacklisted FROM contacts WHERE id = :id"),
            {"id": contact_id},
        ).one()
    assert row.email is None
    assert row.address is None
    assert not row.blacklisted


def test_get_missing_returns_none(repo):
    assert repo.get_by_id(404) is None


def test_delete_reports_whether_row_existed(repo):
    contact_id = repo.add(Contact(name="Alice", phone="1234567"))
    assert repo.delete(contact_id) is True
    assert repo.delete(contact_id) is False
    assert repo.get_by_id(contact_id) is None


def test_update_overwrites_whole_row(repo):
    contact_id = repo.add(Contact(name="Alice", phone="1234567", email="a@example.com"))
    updated = Contact(
        id=contact_id, name="Alicia", phone="7654321", address="Work", blacklisted=True
    )
    assert repo.update(updated) is True
    assert repo.get_by_id(contact_id) == updated


def test_update_missing_row(repo):
    assert repo.update(Contact(id=99, name="Ghost", phone="1234567")) is False
    assert repo.update(Contact(name="No id", phone="1234567")) is False
    assert repo.list_all() == []


def test_search_by_name_or_phone(repo):
    repo.add(Contact(name="Ann", phone="1234567"))
    repo.add(Contact(name="Bob", phone="7654321"))
    repo.add(Contact(name="Carl123", phone="5555555"))

    assert sorted(c.name for c in repo.search("123")) == ["Ann", "Carl123"]
    assert [c.name for c in repo.search("765")] == ["Bob"]
    assert repo.search("zzz") == []


def test_search_ignores_case(repo):
    repo.add(Contact(name="Alice Smith", phone="1234567"))
    assert len(repo.search("smith")) == 1
    assert len(repo.search("ALICE")) == 1


def test_search_treats_wildcards_literally(repo):
    repo.add(Contact(name="100% Sure", phone="1234567"))
    repo.add(Contact(name="Plain", phone="7654321"))
    repo.add(Contact(name="snake_case", phone="1111111"))

    assert [c.name for c in repo.search("%")] == ["100% Sure"]
    assert [c.name for c in repo.search("_")] == ["snake_case"]
    assert len(repo.search("")) == 3


def test_quotes_in_values_are_bound_not_interpolated(repo):
    name = "O'Brien\"; DROP TABLE contacts; --"
    contact_id = repo.add(Contact(name=name, phone="1234567"))
    assert repo.get_by_id(contact_id).name == name
    assert [c.name for c in repo.search("O'Brien")] == [name]


def test_store_fault_raises_store_error(engine, repo):
    contact_id = repo.add(Contact(name="Alice", phone="1234567"))
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE contacts"))

    with pytest.raises(StoreError):
        repo.add(Contact(name="Bob", phone="7654321"))
    with pytest.raises(StoreError):
        repo.get_by_id(contact_id)
    with pytest.raises(StoreError):
        repo.list_all()
    with pytest.raises(StoreError):
        repo.search("A")
    with pytest.raises(StoreError):
        repo.delete(contact_id)
    with pytest.raises(StoreError):
        repo.update(Contact(id=contact_id, name="Alice", phone="1234567"))


def test_service_reports_outage_as_store_failure(engine, repo):
    service = ContactService(repo)
    created = service.create_contact("Alice", "1234567")
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE contacts"))

    assert isinstance(service.create_contact("Bob", "7654321"), StoreFailure)
    assert isinstance(service.delete_contact(created.contact_id), StoreFailure)
    assert isinstance(
        service.update_contact(created.contact_id, ContactUpdate(blacklisted=True)),
        StoreFailure,
    )
    assert isinstance(service.add_to_blacklist(created.contact_id), StoreFailure)
    assert service.list_contacts() == []
    assert service.search_contacts("A") == []
    assert service.get_contact(created.contact_id) is None


def test_search_non_ascii_names(repo):
    repo.add(Contact(name="Émile", phone="1234567"))
    repo.add(Contact(name="张伟", phone="7654321"))

    assert [c.name for c in repo.search("Émile")] == ["Émile"]
    assert [c.name for c in repo.search("ÉMILE")] == ["Émile"]
    assert [c.name for c in repo.search("伟")] == ["张伟"]


def test_search_agrees_with_memory_repository(repo):
    memory = InMemoryContactRepository()
    for name, phone in [("Émile", "1234567"), ("émile", "2345678"), ("Zoë", "3456789")]:
        repo.add(Contact(name=name, phone=phone))
        memory.add(Contact(name=name, phone=phone))

    for keyword in ["Émile", "émile", "ÉMILE", "MILE", "zo", "Ë", "ë", "345"]:
        sql_names = sorted(c.name for c in repo.search(keyword))
        memory_names = sorted(c.name for c in memory.search(keyword))
        assert sql_names == memory_names, keyword


def test_rows_breaking_field_rules_stay_readable(engine, repo):
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO contacts (name, phone, email, address, blacklisted)"
                " VALUES (:name, :phone, :email, :address, :blacklisted)"
            ),
            {"name": "Bob", "phone": "12", "email": "", "address": None, "blacklisted": False},
        )
    service = ContactService(repo)

    listed = service.list_contacts()
    assert [(c.name, c.phone, c.email) for c in listed] == [("Bob", "12", None)]
    assert [c.name for c in service.search_contacts("Bo")] == ["Bob"]

    bob_id = listed[0].id
    # Touching the row validates it as a whole; fixing the phone is allowed.
    assert isinstance(service.add_to_blacklist(bob_id), Invalid)
    assert isinstance(
        service.update_contact(bob_id, ContactUpdate(blacklisted=True, phone="1234567")),
        ContactUpdated,
    )
    assert service.get_contact(bob_id).phone == "1234567"


def test_service_over_sql_store(repo):
    service = ContactService(repo)
    service.create_contact("Bob", "2000000")
    created = service.create_contact("Alice", "1000000", email="", address="")
    assert isinstance(created, ContactCreated)

    assert [c.name for c in service.list_contacts()] == ["Alice", "Bob"]
    alice = service.get_contact(created.contact_id)
    assert alice.email is None
    assert alice.address is None

    service.add_to_blacklist(created.contact_id)
    assert service.get_contact(created.contact_id).blacklisted is True

"""
FastAPI backend: the form-and-table surface over ContactService.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from contactbook.application import (
    ContactCreated,
    ContactService,
    ContactUpdate,
    Invalid,
    NotFound,
    StoreFailure,
)
from contactbook.domain import Contact
from contactbook.infrastructure import SqlContactRepository, create_engine_from_url

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
)
logger = logging.getLogger(__name__)


def get_service(app: FastAPI) -> ContactService:
    """One ContactService per app, built on first use from CONTACTS_DATABASE_URL."""
    if getattr(app.state, "service", None) is None:
        engine = create_engine_from_url()
        app.state.service = ContactService(SqlContactRepository(engine))
    return app.state.service


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_service(app)
    logger.info("Contact store ready")
    yield


app = FastAPI(title="Contactbook API", lifespan=lifespan)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


class ContactBody(BaseModel):
    name: str
    phone: str
    email: str | None = None
    address: str | None = None
    blacklisted: bool = False


class UpdateContactBody(BaseModel):
    """Omitted (null) text fields keep their stored value; blank email/address clears it.
    blacklisted is required: it is always written as sent."""

    blacklisted: bool
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None


class ContactItem(BaseModel):
    id: int
    name: str
    phone: str
    email: str | None = None
    address: str | None = None
    blacklisted: bool = False


def _item(contact: Contact) -> ContactItem:
    return ContactItem(
        id=contact.id,
        name=contact.name,
        phone=contact.phone,
        email=contact.email,
        address=contact.address,
        blacklisted=contact.blacklisted,
    )


def _raise_for_failure(result) -> None:
    if isinstance(result, Invalid):
        raise HTTPException(status_code=422, detail=result.reason)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail=result.reason)
    if isinstance(result, StoreFailure):
        raise HTTPException(status_code=503, detail=result.reason)


@app.get("/contacts")
def list_contacts(request: Request):
    service = get_service(request.app)
    return [_item(c) for c in service.list_contacts()]


@app.get("/contacts/search")
def search_contacts(request: Request, q: str = ""):
    service = get_service(request.app)
    return [_item(c) for c in service.search_contacts(q)]


@app.get("/contacts/{contact_id}")
def get_contact(contact_id: int, request: Request):
    contact = get_service(request.app).get_contact(contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail=NotFound(contact_id).reason)
    return _item(contact)


@app.post("/contacts")
def create_contact(body: ContactBody, request: Request):
    service = get_service(request.app)
    result = service.create_contact(
        body.name, body.phone, body.email, body.address, body.blacklisted
    )
    if not isinstance(result, ContactCreated):
        _raise_for_failure(result)
    return JSONResponse(
        content={"id": result.contact_id, "name": result.name},
        status_code=201,
    )


@app.put("/contacts/{contact_id}")
def update_contact(contact_id: int, body: UpdateContactBody, request: Request):
    service = get_service(request.app)
    changes = ContactUpdate.from_form(
        body.name, body.phone, body.email, body.address, body.blacklisted
    )
    result = service.update_contact(contact_id, changes)
    _raise_for_failure(result)
    return _item(service.get_contact(contact_id))


@app.delete("/contacts/{contact_id}")
def delete_contact(contact_id: int, request: Request):
    result = get_service(request.app).delete_contact(contact_id)
    _raise_for_failure(result)
    return {"id": contact_id, "deleted": True}


@app.post("/contacts/{contact_id}/blacklist")
def blacklist_contact(contact_id: int, request: Request):
    service = get_service(request.app)
    result = service.add_to_blacklist(contact_id)
    _raise_for_failure(result)
    return _item(service.get_contact(contact_id))

"""Engine construction from configuration."""

import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool

DEFAULT_DATABASE_URL = "sqlite:///contacts.db"


def get_database_url() -> str:
    return os.environ.get("CONTACTS_DATABASE_URL", DEFAULT_DATABASE_URL).strip()


def create_engine_from_url(url: str | None = None) -> Engine:
    """Engine without a connection pool: each repository call opens and closes its own connection."""
    return create_engine(url or get_database_url(), poolclass=NullPool)

"""Database helpers for the flight reservation processor."""
from __future__ import annotations

import os
from typing import Tuple

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

DEFAULT_DB_URL = os.environ.get("FLIGHT_RESERVATION_DB_URL", "sqlite+pysqlite:///:memory:")


def init_db(db_url: str = DEFAULT_DB_URL, *, echo: bool = False) -> Tuple[Engine, sessionmaker[Session]]:
    """Create a fresh SQLite schema and return the engine/session factory pair.

    Existing tables are dropped first so no state carries over from an earlier run.
    The active-seat index is a SQLite partial index, so other backends are refused.
    """

    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        raise ValueError(
            f"unsupported database {url.get_backend_name()!r}; only SQLite URLs are accepted"
        )

    options = {"echo": echo, "connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        # One shared connection, otherwise every checkout sees an empty database.
        options["poolclass"] = StaticPool
    engine = create_engine(url, **options)
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    return engine, sessionmaker(bind=engine, expire_on_commit=False)


__all__ = ["DEFAULT_DB_URL", "init_db"]

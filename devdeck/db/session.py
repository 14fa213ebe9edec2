"""Database engine, session factory, and dependency injection."""

import json
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from devdeck.core.config import Settings


def _json_serializer(value) -> str:
    return json.dumps(value, ensure_ascii=False)


def create_db_engine(settings: Settings) -> Engine:
    """Build the engine for ``settings.DATABASE_URL``.

    SQLite gets foreign keys switched on so ON DELETE CASCADE behaves like
    MySQL; an in-memory SQLite URL shares a single connection.
    """
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        engine = create_engine(
            url, echo=settings.DEBUG, json_serializer=_json_serializer, **kwargs
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        pool_size=10,
        max_overflow=20,
        pool_recycle=1800,
        pool_pre_ping=True,
        echo=settings.DEBUG,
        json_serializer=_json_serializer,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency that provides a DB session per request."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

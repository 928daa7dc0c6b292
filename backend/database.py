# backend/database.py
from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import Settings

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    # Hosted Postgres hands out postgres://, SQLAlchemy requires postgresql://
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def build_engine(settings: Settings) -> Engine:
    url = normalize_database_url(settings.DATABASE_URL)

    if "sqlite" in url:
        connect_args = {"check_same_thread": False}  # SQLite only
    else:
        connect_args = {}

    # In-memory SQLite must share one connection or every session sees an empty db
    if url in ("sqlite://", "sqlite:///:memory:"):
        engine = create_engine(url, connect_args=connect_args, poolclass=StaticPool)
    else:
        engine = create_engine(url, connect_args=connect_args)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def enable_sqlite_foreign_keys(dbapi_conn, connection_record):
            # SQLite ignores REFERENCES and ON DELETE unless asked per connection
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine):
    # Register every mapped table on Base.metadata before creating them
    import models.users, models.restaurant, models.menu, models.reservation, models.order, models.log  # noqa: F401

    Base.metadata.create_all(bind=engine)

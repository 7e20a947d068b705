"""
Engine and session factory for the document table.
SQLite URLs (the default) get a thread-shared connection and WAL journaling;
any other SQLAlchemy URL is passed through unchanged.
"""
from typing import Any, Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from solarview.core.config import settings
from solarview.core.logger import logger

SQLITE_PRAGMAS = ("PRAGMA journal_mode=WAL", "PRAGMA synchronous=NORMAL")


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _apply_sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    for pragma in SQLITE_PRAGMAS:
        cursor.execute(pragma)
    cursor.close()


def build_engine(url: str, **kwargs: Any) -> Engine:
    """
    Creates the engine for a database URL.
    Extra keyword arguments go to create_engine, e.g. a StaticPool for in-memory SQLite.
    """
    if is_sqlite(url):
        # Requests may run on any worker thread
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    db_engine = create_engine(url, **kwargs)
    if is_sqlite(url):
        event.listen(db_engine, "connect", _apply_sqlite_pragmas)
    return db_engine


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session, closed once the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None) -> None:
    """Creates the document table when missing. Safe to run on every start."""
    import solarview.storage.models  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Tabela de documentos pronta: dialeto={target.dialect.name}")

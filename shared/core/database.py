from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from shared.core.config import settings, get_contract_database_url

Base = declarative_base()

POOL_SIZE = settings.DB_POOL_SIZE
MAX_OVERFLOW = settings.DB_MAX_OVERFLOW


def build_engine(url: str | None = None):
    """Create an engine for the contract database.

    SQLite engines get foreign key enforcement switched on for every
    connection; other backends get the pooled configuration.
    """
    url = url or get_contract_database_url()

    if url.startswith("sqlite"):
        engine = create_engine(
            url, connect_args={"check_same_thread": False})

        @event.listens_for(engine, "connect")
        def enable_sqlite_foreign_keys(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=POOL_SIZE,          # max idle connections
        max_overflow=MAX_OVERFLOW,      # max temporary extra connections
        pool_timeout=settings.DB_POOL_TIMEOUT
    )


def build_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


_contract_session_factory = None


def get_contract_session_factory():
    global _contract_session_factory
    if _contract_session_factory is None:
        _contract_session_factory = build_session_factory(build_engine())
    return _contract_session_factory


@contextmanager
def session_scope(session_factory):
    """One session, one transaction: commit on success, roll back on any error."""
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# resto_backend/database.py
# type: ignore

import logging
import sys

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from resto_backend.core.config import DATABASE_URL, SQL_ECHO

logger = logging.getLogger(__name__)

if DATABASE_URL is None:
    logger.critical("FATAL ERROR: environment variable 'DATABASE_URL' is not set.")
    sys.exit(1)


def create_db_engine(url: str, **kwargs):
    """Create an engine; SQLite connections get foreign-key enforcement."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    db_engine = create_engine(url, echo=SQL_ECHO, **kwargs)

    if db_engine.dialect.name == "sqlite":
        # ON DELETE CASCADE / SET NULL are ignored by SQLite unless this is on
        @event.listens_for(db_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return db_engine


# ***************************************************************
# 1. Engine and session factory (one session per request)
# ***************************************************************
engine = create_db_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ***************************************************************
# 2. Declarative base shared by every model
# ***************************************************************
Base = declarative_base()


def get_db():
    """Provide a database session to a FastAPI endpoint."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

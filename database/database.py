"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and a simple `init_db` helper that
creates the tables on startup.
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .models import Base

# Read/Write partitioning pattern
# For SQLite both URLs default to the same file but the interfaces are separated.
WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///nutrition.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

# Engines
write_engine = create_engine(WRITE_DATABASE_URL, connect_args={"check_same_thread": False})
read_engine = create_engine(READ_DATABASE_URL, connect_args={"check_same_thread": False})

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db():
    """Create all tables declared on the ORM models."""
    Base.metadata.create_all(bind=write_engine)


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope.

    Use this generator as a FastAPI dependency to ensure the session is
    properly closed after the request completes.
    """
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope."""
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()

"""Dependency helpers that expose read/write DB session generators.

These wrappers give FastAPI endpoints application-friendly names:
`get_db_write` for the settings mutations and `get_db_read` for lookups.
"""

from .database import get_read_session, get_write_session


def get_db_write():
    """Yield a write-capable DB session for FastAPI dependency injection."""
    yield from get_write_session()


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()

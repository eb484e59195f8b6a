"""Repository helpers for database operations.

Wraps the add/commit/refresh boilerplate and the lookups used by the
credential settings endpoints.
"""

from sqlalchemy.orm import Session
from typing import TypeVar, Generic, Type, Optional
from database.models import Base

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository for common database operations.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def create(self, obj: T) -> T:
        """Add, commit and refresh a new object."""
        return save(self.session, obj)

    def first(self) -> Optional[T]:
        """Return the oldest stored row, or None when the table is empty."""
        return self.session.query(self.model).order_by(self.model.id).first()

    def update(self, obj: T) -> T:
        """Commit changes to an existing object and refresh it."""
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def delete(self, obj: T) -> None:
        self.session.delete(obj)
        self.session.commit()


def save(session: Session, obj: Base) -> Base:
    """Convenience function to add, commit and refresh an object.

    Args:
        session: Database session.
        obj: Model instance to persist.

    Returns:
        The persisted object with refreshed attributes.
    """
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj

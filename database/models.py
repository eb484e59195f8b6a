"""SQLAlchemy ORM models for the nutrition plan service.

Plan text and rendered pages are never persisted. The only durable record
is the AI credential the user saves from the settings panel.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class ApiCredential(Base):
    """ORM model holding the single saved AI provider key.

    The provider is not stored; it is derived from the key prefix when the
    key is used.
    """

    __tablename__ = "api_credentials"
    id = Column(Integer, primary_key=True, index=True)
    api_key = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

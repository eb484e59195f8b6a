"""Database package: credential model and session helpers."""

from .database import (
    WriteSessionLocal,
    ReadSessionLocal,
    init_db,
)
from . import models

__all__ = [
    "WriteSessionLocal",
    "ReadSessionLocal",
    "init_db",
    "models",
]

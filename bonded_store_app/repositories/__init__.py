"""
Repository layer for persistence (SQLite via SQLAlchemy).
"""

from .database import SessionLocal, Base, init_database
from .state_repository import StateRepository, StoreEntryORM

__all__ = [
    "SessionLocal",
    "Base",
    "init_database",
    "StateRepository",
    "StoreEntryORM",
]

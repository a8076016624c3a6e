"""Database models, engine, and session management."""

from loginguard.db.database import (
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
    verify_database_connection,
)
from loginguard.db.models import CredentialEntry

__all__ = [
    # Base
    "Base",
    # Engine
    "create_db_engine",
    "init_db",
    "verify_database_connection",
    # Session
    "create_session_factory",
    # Models
    "CredentialEntry",
]

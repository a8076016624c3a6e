"""Credential store backends."""

from loginguard.config import Settings
from loginguard.core import get_logger
from loginguard.store.base import CredentialStore
from loginguard.store.memory import InMemoryCredentialStore
from loginguard.store.sql import SqlCredentialStore

logger = get_logger(__name__)


def build_credential_store(settings: Settings) -> CredentialStore:
    """Instantiate the configured credential store backend."""
    if settings.store_backend == "memory":
        logger.warning("Using in-memory credential store; lockouts will not survive restarts")
        return InMemoryCredentialStore()

    from loginguard.db import create_db_engine, create_session_factory, init_db

    engine = create_db_engine(settings.database_url, echo=settings.debug)
    init_db(engine)
    return SqlCredentialStore(create_session_factory(engine), owns_engine=True)


__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "SqlCredentialStore",
    "build_credential_store",
]

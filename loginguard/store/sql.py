"""
SQLAlchemy-backed credential store.

Each operation runs in its own session and commits before returning, so
values survive process restarts.

Calls are synchronous and run on the event loop that drives the login
controller (from the authentication task and the lockout countdown). The
store is expected to be fast, local and blocking, which holds for SQLite;
a remote database would need its calls moved off the loop.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from loginguard.core import get_logger
from loginguard.db import verify_database_connection
from loginguard.db.models import CredentialEntry
from loginguard.store.base import (
    KEY_AUTH_TOKEN,
    KEY_FAILURES,
    KEY_LOCKOUT_UNTIL,
    CredentialStore,
)

logger = get_logger(__name__)


def _get_value(db: Session, key: str) -> str | None:
    entry = db.get(CredentialEntry, key)
    return entry.value if entry else None


def _set_value(db: Session, key: str, value: str | None) -> None:
    """Upsert ``key``; a None value deletes the row."""
    entry = db.get(CredentialEntry, key)
    if value is None:
        if entry is not None:
            db.delete(entry)
        return
    if entry is None:
        db.add(CredentialEntry(key=key, value=value))
    else:
        entry.value = value


class SqlCredentialStore(CredentialStore):
    """Credential store persisted in the ``credential_entries`` table."""

    def __init__(self, session_factory: sessionmaker[Session], *, owns_engine: bool = False):
        self._session_factory = session_factory
        self._owns_engine = owns_engine

    @property
    def engine(self) -> Engine:
        return self._session_factory.kw["bind"]

    def healthcheck(self) -> bool:
        return verify_database_connection(self.engine)

    def close(self) -> None:
        if self._owns_engine:
            self.engine.dispose()
            logger.info("Credential store engine disposed")

    def increment_failure_count(self) -> None:
        with self._session_factory() as db, db.begin():
            current = _get_value(db, KEY_FAILURES)
            count = int(current) + 1 if current else 1
            _set_value(db, KEY_FAILURES, str(count))
        logger.debug("Failure count incremented", data={"failures": count})

    def get_failure_count(self) -> int:
        with self._session_factory() as db:
            value = _get_value(db, KEY_FAILURES)
        return int(value) if value else 0

    def reset_failure_count(self) -> None:
        with self._session_factory() as db, db.begin():
            _set_value(db, KEY_FAILURES, None)

    def set_lockout_until(self, timestamp: int | None) -> None:
        with self._session_factory() as db, db.begin():
            _set_value(
                db, KEY_LOCKOUT_UNTIL, str(int(timestamp)) if timestamp is not None else None
            )

    def get_lockout_until(self) -> int | None:
        with self._session_factory() as db:
            value = _get_value(db, KEY_LOCKOUT_UNTIL)
        if not value:
            return None
        timestamp = int(value)
        return timestamp if timestamp > 0 else None

    def save_token(self, token: str | None) -> None:
        with self._session_factory() as db, db.begin():
            _set_value(db, KEY_AUTH_TOKEN, token)

    def get_saved_token(self) -> str | None:
        with self._session_factory() as db:
            return _get_value(db, KEY_AUTH_TOKEN)

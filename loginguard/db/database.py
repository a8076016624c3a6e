"""
Database engine and session management.

Creates the SQLAlchemy engine used by the SQL credential store, with
SQLite-specific handling (thread check, data directory creation). Engines
are owned by whoever builds them; there is no process-wide engine.
"""

from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from loginguard.core import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for loginguard models."""


def create_db_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Build an engine for ``database_url``."""
    if database_url.startswith("sqlite"):
        db_path = database_url.replace("sqlite:///", "")
        if db_path and db_path != ":memory:":
            if db_path.startswith("./"):
                db_path = db_path[2:]
            db_dir = Path(db_path).parent
            if db_dir and not db_dir.exists():
                db_dir.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created database directory: {db_dir}")

        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
            pool_pre_ping=True,
        )
    else:
        engine = create_engine(database_url, echo=echo, pool_pre_ping=True)

    logger.info(
        "Database engine created",
        data={"dialect": engine.dialect.name, "database": engine.url.database},
    )
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    # Register models on the metadata before create_all.
    from loginguard.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def verify_database_connection(engine: Engine) -> bool:
    """
    Verify database connectivity with a simple query.

    Returns:
        True if connection successful, False otherwise.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False

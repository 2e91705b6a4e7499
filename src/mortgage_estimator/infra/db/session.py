from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Engine, create_engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from mortgage_estimator.infra.db.config import database_url

logger = logging.getLogger(__name__)

# Lazy initialization - only create engine/session when needed
_engine: Engine | None = None
_session_local: sessionmaker[Session] | None = None


def engine_options(url: str) -> dict[str, Any]:
    """
    Pool settings for the given database URL.

    The last-inputs cache is a handful of rows, so server pools stay small:
    - pool_size / max_overflow: at most 10 connections
    - pool_pre_ping: verify connection health before checkout
    - pool_recycle: recycle connections after an hour

    SQLite gets the dialect defaults.
    """
    if make_url(url).get_backend_name() == "sqlite":
        return {}

    return {
        "pool_size": 5,
        "max_overflow": 5,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


def get_engine() -> Engine:
    """Get or create the database engine (lazy initialization)."""
    global _engine
    if _engine is None:
        url = database_url()
        _engine = create_engine(url, **engine_options(url))
        logger.info(
            "Database engine created",
            extra={"backend": _engine.dialect.name},
        )
    return _engine


def get_session_local() -> sessionmaker[Session]:
    """Get or create the session factory (lazy initialization)."""
    global _session_local
    if _session_local is None:
        _session_local = sessionmaker(
            bind=get_engine(),
            class_=Session,
            expire_on_commit=False,
        )
    return _session_local


def dispose_engine() -> None:
    """Close pooled connections and forget the engine; the next call rebuilds it."""
    global _engine, _session_local
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_local = None


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a database session that commits on success and rolls back on error."""
    session = get_session_local()()

    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.warning("Session rolled back", extra={"error_type": type(exc).__name__})
        raise
    finally:
        session.close()

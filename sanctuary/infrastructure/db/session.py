# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from http import HTTPStatus
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from sanctuary.shared.config import load_config
from sanctuary.shared.config.settings import DatabaseConfig
from sanctuary.shared.errors import InfrastructureError
from sanctuary.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _engine_options(database: DatabaseConfig) -> dict[str, Any]:
    url = make_url(database.url)
    if url.get_backend_name() != "sqlite":
        return {
            "pool_size": database.pool_size,
            "max_overflow": database.max_overflow,
            "pool_timeout": database.pool_timeout,
        }

    # In-memory SQLite uses a single-connection pool that rejects sizing args.
    options: dict[str, Any] = {
        "connect_args": {
            "check_same_thread": False,
            "timeout": int(database.pool_timeout),
        }
    }
    if url.database not in (None, "", ":memory:"):
        options["pool_size"] = database.pool_size
        options["max_overflow"] = database.max_overflow
    return options


def _build_engine(database: DatabaseConfig) -> Engine:
    engine = create_engine(
        database.url, echo=False, pool_pre_ping=True, **_engine_options(database)
    )
    logger.debug(f"db.engine: created for dialect={engine.dialect.name}")
    return engine


ENGINE: Engine = _build_engine(load_config().database)

SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, autocommit=False, expire_on_commit=False)
)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception as exc:
        logger.error(f"db.session: {type(exc).__name__}, rolling back")
        session.rollback()
        if isinstance(exc, OperationalError):
            raise InfrastructureError(
                "database_unavailable", status=HTTPStatus.SERVICE_UNAVAILABLE
            ) from exc
        raise
    finally:
        session.close()
        SessionLocal.remove()


def init_db() -> None:
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=ENGINE)
    logger.info(f"Database schema ensured ({ENGINE.dialect.name})")

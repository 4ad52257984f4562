# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from tailorshop.shared.config import DatabaseConfig
from tailorshop.shared.logging import logger

SessionFactory = scoped_session[Session]


class Base(DeclarativeBase):
    pass


def create_db_engine(config: DatabaseConfig) -> Engine:
    options: dict[str, object] = {}
    connect_args: dict[str, object] = {}
    if config.url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }
    else:
        options = {
            "pool_size": config.pool_size,
            "max_overflow": config.max_overflow,
            "pool_timeout": config.pool_timeout,
        }

    return create_engine(
        config.url,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args,
        **options,
    )


def create_session_factory(engine: Engine) -> SessionFactory:
    return scoped_session(
        sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    )


@contextmanager
def session_scope(factory: SessionFactory) -> Iterator[Session]:
    session = factory()
    logger.debug("db.session: opened scoped session")
    try:
        yield session
        session.commit()
        logger.debug("db.session: committed scoped session")
    except Exception as exc:
        logger.warning(f"db.session: {type(exc).__name__}, rolling back")
        session.rollback()
        raise
    finally:
        session.close()
        factory.remove()
        logger.debug("db.session: closed scoped session")


def init_db(engine: Engine) -> None:
    # Registers the mapped tables on Base.metadata
    from tailorshop.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")

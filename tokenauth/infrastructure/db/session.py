# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tokenauth.infrastructure.unit_of_work import unit_of_work_scope
from tokenauth.shared.config.settings import DatabaseConfig
from tokenauth.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _build_engine(config: DatabaseConfig) -> Engine:
    url = make_url(config.url)
    kwargs: dict[str, Any] = {"echo": False, "pool_pre_ping": True}

    is_sqlite = url.get_backend_name() == "sqlite"
    if is_sqlite:
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": config.pool_timeout,
        }
    if is_sqlite and url.database in (None, "", ":memory:"):
        # one shared connection, otherwise every checkout sees a fresh empty database
        kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )

    engine = create_engine(url, **kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Database:
    """Storage handle owned by the application: one engine and session factory."""

    def __init__(self, config: DatabaseConfig) -> None:
        self.engine = _build_engine(config)
        self.session_factory: sessionmaker[Session] = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
        )
        logger.debug(f"db: engine created for backend={self.engine.url.get_backend_name()}")

    @classmethod
    def from_url(cls, url: str) -> Database:
        return cls(DatabaseConfig(url=url))  # type: ignore[call-arg]

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        with unit_of_work_scope(self.session_factory) as session:
            yield session

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def drop_schema(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()
        logger.debug("db: engine disposed")

"""SQL storage backend built on SQLAlchemy."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import Engine, Text, create_engine, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from starlette.concurrency import run_in_threadpool

from wallet_auth.core.errors import StorageUnavailable
from wallet_auth.core.settings import Settings
from wallet_auth.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Base(DeclarativeBase):
    """Declarative base for storage tables."""


class KeyValueEntry(Base):
    """One value in one namespace; nonce records live here as decimal strings."""

    __tablename__ = "kv_entries"

    namespace: Mapped[str] = mapped_column(Text, primary_key=True)
    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


def create_sql_engine(settings: Settings) -> Engine:
    """Create the engine for the configured database URL."""
    connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
        connect_args=connect_args,
    )


class SqlKeyValueStore(KeyValueStore):
    """Store backed by the ``kv_entries`` table.

    Session work is synchronous and runs in the threadpool so the event loop
    keeps serving other requests. Compare-and-swap is a conditional UPDATE
    (or an INSERT guarded by the primary key), so the database arbitrates
    concurrent writers.
    """

    def __init__(self, engine: Engine, namespace: str) -> None:
        super().__init__(namespace)
        self._engine = engine
        self._sessions = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    async def initialize(self) -> None:
        await self._run(lambda: Base.metadata.create_all(bind=self._engine))

    async def get(self, key: str) -> str | None:
        return await self._run(lambda: self._get(key))

    async def put(self, key: str, value: str) -> None:
        await self._run(lambda: self._put(key, value))

    async def compare_and_swap(self, key: str, expected: str | None, value: str) -> bool:
        return await self._run(lambda: self._compare_and_swap(key, expected, value))

    async def _run(self, operation: Callable[[], T]) -> T:
        try:
            return await run_in_threadpool(operation)
        except SQLAlchemyError as err:
            logger.error("SQL storage operation failed in %s: %s", self.namespace, err)
            raise StorageUnavailable(str(err)) from err

    def _get(self, key: str) -> str | None:
        with self._sessions() as db:
            entry = db.get(KeyValueEntry, (self.namespace, key))
            return entry.value if entry is not None else None

    def _put(self, key: str, value: str) -> None:
        with self._sessions.begin() as db:
            db.merge(KeyValueEntry(namespace=self.namespace, key=key, value=value))

    def _compare_and_swap(self, key: str, expected: str | None, value: str) -> bool:
        with self._sessions() as db:
            if expected is None:
                return self._insert_new(db, key, value)
            result = db.execute(
                update(KeyValueEntry)
                .where(
                    KeyValueEntry.namespace == self.namespace,
                    KeyValueEntry.key == key,
                    KeyValueEntry.value == expected,
                )
                .values(value=value)
            )
            db.commit()
            return result.rowcount == 1

    def _insert_new(self, db: Session, key: str, value: str) -> bool:
        db.add(KeyValueEntry(namespace=self.namespace, key=key, value=value))
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return False
        return True

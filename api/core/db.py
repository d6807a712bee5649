"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`). Route handlers receive the pool
wrapped in a `Database` through the `get_db` dependency, so tests can swap in
a fake store with `app.dependency_overrides`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import asyncpg

from . import settings

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

# Column bounds: bigserial ids and integer votes.
MAX_ID = 2**63 - 1
MIN_VOTE = -(2**31)
MAX_VOTE = 2**31 - 1

logger = logging.getLogger(__name__)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    """
    Thin wrapper over an asyncpg pool (or a single connection inside a
    transaction) exposing the three query shapes the repositories use.
    """

    def __init__(self, executor: asyncpg.Pool | asyncpg.Connection) -> None:
        self._executor = executor

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self._executor.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._executor.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). Returns the status tag.
        """
        return await self._executor.execute(sql, *args)

    async def close(self) -> None:
        await self._executor.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Database]:
        """
        Run the block on one connection inside a transaction.

        The yielded `Database` is bound to that connection; leaving the block
        with an exception rolls everything back.
        """
        if isinstance(self._executor, asyncpg.Pool):
            async with self._executor.acquire() as conn:  # type: asyncpg.Connection
                async with conn.transaction():
                    yield Database(conn)
        else:
            # Nested use becomes a savepoint on the same connection.
            async with self._executor.transaction():
                yield self


_database: Database | None = None


async def init_pool() -> None:
    global _database
    if _database is not None:
        return None
    pool = await asyncpg.create_pool(
        dsn=settings.database_url(),
        min_size=settings.pool_min_size(),
        max_size=settings.pool_max_size(),
        command_timeout=settings.command_timeout(),
    )
    _database = Database(pool)
    logger.info(
        "db_pool_ready min_size=%s max_size=%s",
        settings.pool_min_size(),
        settings.pool_max_size(),
    )


async def close_pool() -> None:
    global _database
    if _database is None:
        return None
    await _database.close()
    _database = None


def database() -> Database:
    if _database is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _database


def get_db() -> Database:
    """
    FastAPI dependency returning the process-wide database handle.
    """
    return database()


async def bootstrap_schema() -> None:
    """
    Create the tables if they do not exist yet (`schema.sql`).
    """
    await database().execute(SCHEMA_PATH.read_text(encoding="utf-8"))
    logger.info("db_schema_bootstrapped path=%s", SCHEMA_PATH.name)

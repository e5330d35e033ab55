"""
Async database access helpers (raw SQL) using asyncpg.

`Database` wraps one connection pool. The application creates it on startup
and closes it on shutdown (see `api/main.py`), then hands it to repositories
explicitly instead of reaching for a module-level pool.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg

from . import config

logger = logging.getLogger(__name__)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    @classmethod
    async def connect(cls, settings: config.PoolSettings | None = None) -> "Database":
        settings = settings or config.pool_settings()
        pool = await asyncpg.create_pool(
            dsn=settings.dsn,
            min_size=settings.min_size,
            max_size=settings.max_size,
            command_timeout=settings.command_timeout,
        )
        logger.info("db_pool_opened min_size=%s max_size=%s", settings.min_size, settings.max_size)
        return cls(pool)

    async def close(self) -> None:
        await self._pool.close()
        logger.info("db_pool_closed")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Hold one pooled connection for a sequence of statements.

        The connection goes back to the pool when the block exits, on
        success or failure. No transaction is opened.
        """
        async with self._pool.acquire() as conn:
            yield conn

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._pool.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def fetch_value(self, sql: str, *args: Any) -> Any:
        return await self._pool.fetchval(sql, *args)

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return the status tag,
        e.g. "DELETE 1".
        """
        return await self._pool.execute(sql, *args)

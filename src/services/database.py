import aiosqlite
import json
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Optional
import logging

logger = logging.getLogger(__name__)


class Database:
    """Small async key-value store for state that must survive restarts."""

    def __init__(self, path: str):
        self.path = path
        self._initialized = False

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        conn = await aiosqlite.connect(self.path)
        await conn.execute("PRAGMA journal_mode=WAL;")
        try:
            yield conn
        finally:
            await conn.close()

    async def init_tables(self) -> None:
        """Initialize the key-value table."""
        if self._initialized:
            return

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        async with self.connect() as conn:
            await conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    namespace TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            await conn.commit()
        self._initialized = True
        logger.info("Database tables initialized")

    async def get_value(self, namespace: str) -> Optional[Any]:
        """Return the decoded value stored under a namespace, or None."""
        await self.init_tables()
        async with self.connect() as conn:
            cursor = await conn.execute(
                "SELECT value FROM kv_store WHERE namespace = ?",
                (namespace,)
            )
            row = await cursor.fetchone()

        if row is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable value for {namespace}")
            return None

    async def set_value(self, namespace: str, value: Any) -> None:
        await self.init_tables()
        async with self.connect() as conn:
            await conn.execute(
                """
                INSERT OR REPLACE INTO kv_store (namespace, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (namespace, json.dumps(value), datetime.now(timezone.utc).isoformat())
            )
            await conn.commit()

    async def delete_value(self, namespace: str) -> None:
        await self.init_tables()
        async with self.connect() as conn:
            await conn.execute("DELETE FROM kv_store WHERE namespace = ?", (namespace,))
            await conn.commit()

"""
RecentQueryHistory - Bounded, most-recent-first list of submitted queries.
Persisted through the key-value Database so it survives restarts.
"""
import logging
from typing import List

from services.database import Database

logger = logging.getLogger(__name__)

RECENT_QUERIES_KEY = "search_recent_queries"


class RecentQueryHistory:
    """
    Case-insensitively deduplicated query history.

    Every mutation is written to the database before the call returns.
    """

    def __init__(
        self,
        database: Database,
        limit: int = 8,
        namespace: str = RECENT_QUERIES_KEY,
    ):
        self.db = database
        self.limit = limit
        self.namespace = namespace
        self._queries: List[str] = []

    @classmethod
    async def open(
        cls,
        database: Database,
        limit: int = 8,
        namespace: str = RECENT_QUERIES_KEY,
    ) -> "RecentQueryHistory":
        history = cls(database, limit=limit, namespace=namespace)
        await history.load()
        return history

    async def load(self) -> None:
        """Read the persisted list, dropping anything that is not a string."""
        stored = await self.db.get_value(self.namespace)
        if not isinstance(stored, list):
            self._queries = []
            return
        self._queries = [q for q in stored if isinstance(q, str)][:self.limit]
        logger.debug(f"Loaded {len(self._queries)} recent queries")

    def all(self) -> List[str]:
        return list(self._queries)

    async def add(self, query: str) -> None:
        trimmed = query.strip()
        if not trimmed:
            return

        folded = trimmed.casefold()
        queries = [q for q in self._queries if q.casefold() != folded]
        queries.insert(0, trimmed)
        self._queries = queries[:self.limit]

        await self._persist()

    async def clear(self) -> None:
        self._queries = []
        await self.db.delete_value(self.namespace)

    async def _persist(self) -> None:
        await self.db.set_value(self.namespace, self._queries)

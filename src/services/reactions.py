"""
Reaction overlay: like counts and the viewer's own likes for a batch of posts.
"""
import asyncio
import logging
from collections import Counter
from typing import Dict, Iterable, List, Set

from pydantic import TypeAdapter

from core.entities import ReactionState
from core.schemas import LikeRow
from services.store import RestStore, eq, in_

logger = logging.getLogger(__name__)

LIKES_TABLE = "likes"
POST_TARGET = "post"

_like_rows = TypeAdapter(List[LikeRow])


class ReactionOverlay:
    """
    Fetches {liked, count} per content id.

    Likes are a non-critical overlay: a failed lookup degrades to
    zero counts / not liked instead of raising.
    """

    def __init__(self, store: RestStore, target_type: str = POST_TARGET):
        self.store = store
        self.target_type = target_type

    async def fetch_states(self, ids: Iterable[str]) -> Dict[str, ReactionState]:
        unique_ids = list(dict.fromkeys(str(i) for i in ids))
        if not unique_ids:
            return {}

        user_id = self.store.user_id
        if user_id:
            counts, liked = await asyncio.gather(
                self._fetch_counts(unique_ids),
                self._fetch_liked(unique_ids, user_id),
            )
        else:
            counts = await self._fetch_counts(unique_ids)
            liked = set()

        return {
            content_id: ReactionState(
                is_liked=content_id in liked,
                like_count=counts.get(content_id, 0),
            )
            for content_id in unique_ids
        }

    async def _fetch_counts(self, ids: List[str]) -> Counter:
        try:
            rows = await self.store.select(
                LIKES_TABLE,
                columns="target_id",
                filters={
                    "target_type": eq(self.target_type),
                    "target_id": in_(ids),
                },
            )
            return Counter(row.target_id for row in _like_rows.validate_python(rows))
        except Exception as e:
            logger.warning(f"Failed to fetch like counts: {e}")
            return Counter()

    async def _fetch_liked(self, ids: List[str], user_id: str) -> Set[str]:
        try:
            rows = await self.store.select(
                LIKES_TABLE,
                columns="target_id",
                filters={
                    "target_type": eq(self.target_type),
                    "user_id": eq(user_id),
                    "target_id": in_(ids),
                },
            )
            return {row.target_id for row in _like_rows.validate_python(rows)}
        except Exception as e:
            logger.warning(f"Failed to fetch viewer like states: {e}")
            return set()

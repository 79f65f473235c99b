"""
Ranking key and query relevance scoring
"""

import math
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from core.entities import UnifiedResult

EXACT_MATCH = 100
PREFIX_MATCH = 80
SUBSTRING_MATCH = 60
TEXT_MATCH = 40


def _recency(created_at: Optional[datetime]) -> float:
    """
    Negated epoch seconds, so ascending order puts the newest first and
    missing timestamps last.
    """
    if created_at is None:
        return math.inf
    return -created_at.timestamp()


def ranking_key(result: UnifiedResult) -> Tuple[int, float, float]:
    """
    Promotion tier ascending, popularity descending, recency descending.
    """
    return (result.tier, -result.popularity, _recency(result.created_at))


def rank(results: Iterable[UnifiedResult]) -> List[UnifiedResult]:
    """
    Stable sort by the ranking key; exact ties keep their input order.
    """
    return sorted(results, key=ranking_key)


def relevance_score(result: UnifiedResult, query: str) -> int:
    """
    Scores how well the title matches the whole query.

    The caller is expected to have already kept only results whose
    searchable text contains every query token, so anything that misses
    the title still scores TEXT_MATCH.
    """
    normalized = query.strip().lower()
    title = result.title.lower()

    if title == normalized:
        return EXACT_MATCH
    if title.startswith(normalized):
        return PREFIX_MATCH
    if normalized in title:
        return SUBSTRING_MATCH
    return TEXT_MATCH


def relevance_key(score: int, result: UnifiedResult) -> Tuple[int, float]:
    return (-score, _recency(result.created_at))

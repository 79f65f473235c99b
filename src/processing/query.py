import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from core.entities import Category, UnifiedResult
from core.scoring import relevance_key, relevance_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredResult:
    result: UnifiedResult
    score: int


@dataclass(frozen=True)
class QueryResult:
    """
    Outcome of one query.

    ``active`` is False only when the trimmed query was empty, which lets
    callers tell "nothing typed" apart from "nothing matched".
    """
    query: str
    active: bool
    category: Optional[Category] = None
    hits: Tuple[ScoredResult, ...] = ()

    @property
    def results(self) -> List[UnifiedResult]:
        return [hit.result for hit in self.hits]

    def score_of(self, result: UnifiedResult) -> Optional[int]:
        for hit in self.hits:
            if hit.result.identity == result.identity:
                return hit.score
        return None


def tokenize(query: str) -> List[str]:
    return query.lower().split()


def matches_all_tokens(text: str, tokens: Iterable[str]) -> bool:
    """Substring AND-match; tokens are expected lowercased."""
    text = text.lower()
    return all(token in text for token in tokens)


def run_query(
    results: Iterable[UnifiedResult],
    query: str,
    category: Optional[Category] = None,
) -> QueryResult:
    """
    Filter and rank results for a free-text query.

    Only the searchable text decides membership; the title decides the
    score. The order is independent of the promotion tier.
    """
    trimmed = query.strip()
    if not trimmed:
        return QueryResult(query=query, active=False, category=category)

    tokens = tokenize(trimmed)

    hits = [
        ScoredResult(result=result, score=relevance_score(result, trimmed))
        for result in results
        if (category is None or result.category == category)
        and matches_all_tokens(result.searchable_text, tokens)
    ]
    hits.sort(key=lambda hit: relevance_key(hit.score, hit.result))

    logger.debug(f"Query {trimmed!r} matched {len(hits)} results")
    return QueryResult(query=query, active=True, category=category, hits=tuple(hits))

import logging
from typing import Iterable, List, Set, Tuple

from core.entities import Category, UnifiedResult
from core.scoring import rank

logger = logging.getLogger(__name__)


def drop_duplicates(results: Iterable[UnifiedResult]) -> List[UnifiedResult]:
    """
    Keep the first occurrence of each (category, id).

    Ids are only unique within a category, so the same id in two
    categories is two different results.
    """
    unique: List[UnifiedResult] = []
    seen: Set[Tuple[Category, str]] = set()

    for result in results:
        if result.identity in seen:
            logger.debug(f"Skipping duplicate result: {result.category.value}/{result.id}")
            continue
        seen.add(result.identity)
        unique.append(result)

    return unique


def merge_results(batches: Iterable[Iterable[UnifiedResult]]) -> List[UnifiedResult]:
    """
    Concatenate per-category batches, drop repeated identities and sort
    once by the ranking key.
    """
    merged: List[UnifiedResult] = []
    for batch in batches:
        merged.extend(batch)

    unique = drop_duplicates(merged)
    if len(unique) != len(merged):
        logger.info(f"Merge dropped {len(merged) - len(unique)} duplicate results")

    return rank(unique)

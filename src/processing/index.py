"""
Immutable snapshot of everything the last refresh returned.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from core.entities import Category, UnifiedResult
from processing.merge import merge_results

DEFAULT_TOP_N = 10
DEFAULT_TRENDING_SIZE = 5


@dataclass(frozen=True)
class UnifiedIndex:
    """
    Merged, globally ranked results plus the per-category views derived
    from them. A refresh replaces the whole snapshot; nothing patches it.
    """
    results: Tuple[UnifiedResult, ...] = ()
    counts: Dict[Category, int] = field(default_factory=dict)
    top: Dict[Category, Tuple[UnifiedResult, ...]] = field(default_factory=dict)
    trending: Tuple[UnifiedResult, ...] = ()
    built_at: Optional[datetime] = None

    @classmethod
    def empty(cls) -> "UnifiedIndex":
        return cls()

    @classmethod
    def build(
        cls,
        batches: Iterable[Iterable[UnifiedResult]],
        top_n: int = DEFAULT_TOP_N,
        trending_size: int = DEFAULT_TRENDING_SIZE,
    ) -> "UnifiedIndex":
        ranked = tuple(merge_results(batches))

        counts: Dict[Category, int] = {}
        for result in ranked:
            counts[result.category] = counts.get(result.category, 0) + 1

        # Filtering an already sorted sequence keeps it sorted
        top = {
            category: tuple(r for r in ranked if r.category == category)[:top_n]
            for category in Category
        }

        return cls(
            results=ranked,
            counts=counts,
            top=top,
            trending=ranked[:trending_size],
            built_at=datetime.now(timezone.utc),
        )

    def __len__(self) -> int:
        return len(self.results)

    def in_category(self, category: Optional[Category]) -> List[UnifiedResult]:
        if category is None:
            return list(self.results)
        return [r for r in self.results if r.category == category]

    def count_by_category(self, category: Category) -> int:
        return self.counts.get(category, 0)

    def top_by_category(self, category: Category) -> List[UnifiedResult]:
        return list(self.top.get(category, ()))

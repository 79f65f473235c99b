"""
Base classes for category adapters
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, TypeAdapter

from core.categories import CategorySpec
from core.entities import (
    DEFAULT_TIER,
    Category,
    FetchOutcome,
    HighlightType,
    UnifiedResult,
)
from core.schemas import PostRow
from services.store import RestStore

logger = logging.getLogger(__name__)


class RawCategoryRecord(BaseModel):
    """
    A category row projected into the engine's common shape.
    """
    id: str
    title: str
    subtitle: str
    created_at: Optional[datetime]
    searchable_text: str
    preview_image_url: Optional[str] = None
    popularity: float = 0.0
    tier: int = DEFAULT_TIER
    highlight: HighlightType = HighlightType.NONE

    def to_result(self, category: Category) -> UnifiedResult:
        return UnifiedResult(category=category, **dict(self))


class CategoryAdapter(ABC):
    """
    Base interface for all category sources.
    """

    spec: CategorySpec
    row_model: Type[PostRow] = PostRow

    # Matches the ranking key so a truncated snapshot keeps the most prominent rows
    ORDER: Tuple[Tuple[str, bool], ...] = (
        ("highlight_rank", True),
        ("hot_score", False),
        ("created_at", False),
    )

    def __init__(
        self,
        store: RestStore,
        view: Optional[str] = None,
        limit: Optional[int] = None,
    ):
        self.store = store
        self.view = view or self.spec.view
        self.limit = limit or self.spec.default_limit
        self._rows = TypeAdapter(List[self.row_model])

    @property
    def category(self) -> Category:
        return self.spec.category

    async def fetch(self, limit: Optional[int] = None) -> FetchOutcome:
        """
        Fetch and project this category's snapshot.
        Never raises except for cancellation, which is left to the caller.
        """
        try:
            rows = await self.store.select(
                self.view,
                order=self.ORDER,
                limit=limit or self.limit,
            )
            records = [self.project(row) for row in self._rows.validate_python(rows)]
        except Exception as e:
            logger.warning(
                f"Fetch failed for {self.category.value}: {e}",
                extra={"category": self.category},
            )
            return FetchOutcome.failed(self.category, str(e))

        return FetchOutcome.ok(
            self.category,
            [record.to_result(self.category) for record in records],
        )

    @abstractmethod
    def project(self, row: Any) -> RawCategoryRecord:
        """
        Map one validated row to a RawCategoryRecord.
        """
        raise NotImplementedError

    @staticmethod
    def ranking_fields(row: PostRow) -> Dict[str, Any]:
        """Fields every category fills the same way."""
        return {
            "id": row.id,
            "created_at": row.created_at,
            "popularity": max(0.0, row.hot_score or 0.0),
            "tier": row.highlight_rank if row.highlight_rank is not None else DEFAULT_TIER,
            "highlight": HighlightType.parse(row.highlight_type),
        }


def format_price(value: float) -> str:
    return f"${int(value)}"


def first_non_empty(value: Optional[str], fallback: str) -> str:
    text = (value or "").strip()
    return text if text else fallback

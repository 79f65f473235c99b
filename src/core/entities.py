from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple


class Category(str, Enum):
    """
    The five content sources merged by the search engine.
    """
    RENT = "rent"
    MARKET = "market"
    RIDE = "ride"
    TEAM = "team"
    FORUM = "forum"

    @classmethod
    def parse(cls, value: str) -> "Category":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown category: {value}") from None


class HighlightType(str, Enum):
    """
    Cosmetic highlight badge. Not part of the ranking math.
    """
    NONE = "none"
    PINNED = "pinned"
    URGENT = "urgent"
    FEATURED = "featured"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "HighlightType":
        if not raw:
            return cls.NONE
        value = raw.strip().lower()
        value = _HIGHLIGHT_ALIASES.get(value, value)
        try:
            return cls(value)
        except ValueError:
            return cls.NONE


# spellings still stored by older rows
_HIGHLIGHT_ALIASES = {
    "normal": "none",
    "breaking": "featured",
}

DEFAULT_TIER = 2


@dataclass(frozen=True)
class UnifiedResult:
    """
    Canonical, category-tagged search result.
    """
    category: Category
    id: str
    title: str
    subtitle: str
    created_at: Optional[datetime]
    searchable_text: str
    preview_image_url: Optional[str] = None
    popularity: float = 0.0
    tier: int = DEFAULT_TIER
    highlight: HighlightType = HighlightType.NONE

    @property
    def identity(self) -> Tuple[Category, str]:
        return (self.category, self.id)


@dataclass(frozen=True)
class ReactionState:
    is_liked: bool = False
    like_count: int = 0


@dataclass(frozen=True)
class EngagedResult:
    """
    A result paired with its freshly fetched reaction state.
    """
    result: UnifiedResult
    reaction: ReactionState


class FetchStatus(str, Enum):
    OK = "ok"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchOutcome:
    """
    Result of one adapter fetch. Failed and cancelled outcomes carry no records.
    """
    category: Category
    status: FetchStatus
    results: Tuple[UnifiedResult, ...] = ()
    reason: Optional[str] = None

    @classmethod
    def ok(cls, category: Category, results: List[UnifiedResult]) -> "FetchOutcome":
        return cls(category=category, status=FetchStatus.OK, results=tuple(results))

    @classmethod
    def failed(cls, category: Category, reason: str) -> "FetchOutcome":
        return cls(category=category, status=FetchStatus.FAILED, reason=reason)

    @classmethod
    def cancelled(cls, category: Category) -> "FetchOutcome":
        return cls(category=category, status=FetchStatus.CANCELLED)


@dataclass(frozen=True)
class RefreshReport:
    """
    Summary of a refresh: per-category outcomes and whether the snapshot changed.
    """
    outcomes: Tuple[FetchOutcome, ...] = ()
    total: int = 0
    skipped: bool = False
    published: bool = False

    @property
    def failed_categories(self) -> List[Category]:
        return [o.category for o in self.outcomes if o.status == FetchStatus.FAILED]

    def outcome_for(self, category: Category) -> Optional[FetchOutcome]:
        for outcome in self.outcomes:
            if outcome.category == category:
                return outcome
        return None

import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Iterable, Optional

import httpx
import pytest
import pytest_asyncio

# Ensure the src/ packages are importable when tests run from the repo root
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from core.entities import Category, FetchOutcome, UnifiedResult
from services.database import Database
from services.recent_queries import RecentQueryHistory
from services.store import RestStore, StoreSession


BASE_TIME = datetime(2025, 9, 1, 12, 0, tzinfo=timezone.utc)


def at(hours: float) -> datetime:
    """A timestamp `hours` after BASE_TIME."""
    return BASE_TIME + timedelta(hours=hours)


class FakeAdapter:
    """Stands in for a category adapter; optionally blocks until `gate` is set."""

    def __init__(
        self,
        category: Category,
        results: Iterable[UnifiedResult] = (),
        *,
        error: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        self.category = category
        self.results = list(results)
        self.error = error
        self.gate = gate
        self.calls = 0
        self.started = asyncio.Event()

    async def fetch(self, limit=None) -> FetchOutcome:
        self.calls += 1
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return FetchOutcome.ok(self.category, self.results)


@pytest.fixture
def make_result() -> Callable[..., UnifiedResult]:
    def _make(
        category: Category = Category.RENT,
        id: str = "1",
        title: str = "Item",
        *,
        tier: int = 2,
        popularity: float = 0.0,
        created_at: Optional[datetime] = None,
        searchable_text: Optional[str] = None,
        subtitle: str = "",
    ) -> UnifiedResult:
        return UnifiedResult(
            category=category,
            id=str(id),
            title=title,
            subtitle=subtitle,
            created_at=created_at,
            searchable_text=searchable_text if searchable_text is not None else title,
            tier=tier,
            popularity=popularity,
        )

    return _make


@pytest.fixture
def make_store() -> Callable[..., RestStore]:
    """Build a RestStore whose HTTP traffic is answered by `handler`."""

    def _make(handler, session: Optional[StoreSession] = None) -> RestStore:
        return RestStore(
            base_url="http://store.test",
            api_key="anon-key",
            session=session,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def database(tmp_path) -> Database:
    return Database(str(tmp_path / "app.db"))


@pytest_asyncio.fixture
async def history(database) -> RecentQueryHistory:
    return await RecentQueryHistory.open(database)

import asyncio
import logging
from typing import Iterable, List, Optional, Sequence, Set

from core.entities import (
    Category,
    EngagedResult,
    FetchOutcome,
    FetchStatus,
    ReactionState,
    RefreshReport,
    UnifiedResult,
)
from ingestion.base import CategoryAdapter
from processing.index import DEFAULT_TOP_N, DEFAULT_TRENDING_SIZE, UnifiedIndex
from processing.query import QueryResult, run_query
from services.reactions import ReactionOverlay
from services.recent_queries import RecentQueryHistory
from workflows.base import SearchWorkflow

logger = logging.getLogger(__name__)


class SearchEngine(SearchWorkflow):
    """
    Owns the search state for one screen.

    ``refresh`` fans out to every adapter and swaps in a new UnifiedIndex;
    everything else reads the current snapshot and never touches the network,
    apart from the reaction overlay.
    """

    name = "search"

    def __init__(
        self,
        adapters: Iterable[CategoryAdapter],
        history: RecentQueryHistory,
        overlay: Optional[ReactionOverlay] = None,
        *,
        top_n: int = DEFAULT_TOP_N,
        trending_size: int = DEFAULT_TRENDING_SIZE,
        fetch_limit: Optional[int] = None,
    ):
        self.adapters = list(adapters)
        self.history = history
        self.overlay = overlay
        self.top_n = top_n
        self.trending_size = trending_size
        self.fetch_limit = fetch_limit

        self._index = UnifiedIndex.empty()
        self._last_query = QueryResult(query="", active=False)
        self._refreshing = False
        self._cancel_requested = False
        self._inflight: Set[asyncio.Task] = set()

    # ----------------------------
    # Snapshot accessors
    # ----------------------------
    @property
    def index(self) -> UnifiedIndex:
        return self._index

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    @property
    def last_query(self) -> QueryResult:
        return self._last_query

    @property
    def is_query_active(self) -> bool:
        return self._last_query.active

    def count_by_category(self, category: Category) -> int:
        return self._index.count_by_category(category)

    def top_by_category(self, category: Category) -> List[UnifiedResult]:
        return self._index.top_by_category(category)

    def trending(self) -> List[UnifiedResult]:
        return list(self._index.trending)

    # ----------------------------
    # Refresh
    # ----------------------------
    async def refresh(self) -> RefreshReport:
        if self._refreshing:
            logger.info("Refresh already in progress, skipping")
            return RefreshReport(skipped=True, total=len(self._index))

        self._refreshing = True
        self._cancel_requested = False
        try:
            outcomes = await self._fetch_all()
        finally:
            self._refreshing = False
            self._inflight.clear()

        if self._cancel_requested:
            logger.debug("Refresh cancelled, keeping previous snapshot")
            return RefreshReport(outcomes=tuple(outcomes), total=len(self._index))

        self._index = UnifiedIndex.build(
            (outcome.results for outcome in outcomes),
            top_n=self.top_n,
            trending_size=self.trending_size,
        )

        if self._last_query.active:
            self.search(self._last_query.query, self._last_query.category)

        succeeded = sum(1 for o in outcomes if o.status == FetchStatus.OK)
        logger.info(
            f"Refresh complete: {len(self._index)} results from "
            f"{succeeded}/{len(outcomes)} categories"
        )
        return RefreshReport(outcomes=tuple(outcomes), total=len(self._index), published=True)

    async def _fetch_all(self) -> List[FetchOutcome]:
        tasks = [
            asyncio.create_task(
                adapter.fetch(self.fetch_limit),
                name=f"fetch-{adapter.category.value}",
            )
            for adapter in self.adapters
        ]
        self._inflight.update(tasks)

        results = await asyncio.gather(*tasks, return_exceptions=True)

        outcomes: List[FetchOutcome] = []
        for adapter, result in zip(self.adapters, results):
            if isinstance(result, asyncio.CancelledError):
                logger.debug(f"Fetch cancelled: {adapter.category.value}")
                outcomes.append(FetchOutcome.cancelled(adapter.category))
            elif isinstance(result, Exception):
                # Adapters report their own failures; this only catches ones that leaked
                logger.warning(
                    f"Adapter {adapter.__class__.__name__} raised: {result}",
                    extra={"category": adapter.category},
                )
                outcomes.append(FetchOutcome.failed(adapter.category, str(result)))
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append(result)

        return outcomes

    def cancel_refresh(self) -> int:
        """
        Cancel in-flight adapter fetches, e.g. when the screen goes away.
        Returns the number of fetches that were still running.
        """
        pending = [task for task in self._inflight if not task.done()]
        if not pending:
            return 0

        self._cancel_requested = True
        for task in pending:
            task.cancel()
        logger.debug(f"Cancelled {len(pending)} in-flight fetches")
        return len(pending)

    async def close(self) -> None:
        self.cancel_refresh()

    # ----------------------------
    # Query
    # ----------------------------
    def search(self, query: str, category: Optional[Category] = None) -> List[UnifiedResult]:
        self._last_query = run_query(self._index.results, query, category)
        return self._last_query.results

    # ----------------------------
    # Recent queries
    # ----------------------------
    def recent_queries(self) -> List[str]:
        return self.history.all()

    async def add_recent_query(self, query: str) -> None:
        await self.history.add(query)

    async def clear_recent_queries(self) -> None:
        await self.history.clear()

    # ----------------------------
    # Reactions
    # ----------------------------
    async def overlay_reactions(self, results: Sequence[UnifiedResult]) -> List[EngagedResult]:
        """
        Pair results with fresh like state. Never cached; call per render.

        Likes are stored per post id only, so results from different
        categories that share an id also share one like state.
        """
        if self.overlay is None or not results:
            states = {}
        else:
            states = await self.overlay.fetch_states(r.id for r in results)

        return [
            EngagedResult(result=r, reaction=states.get(r.id, ReactionState()))
            for r in results
        ]

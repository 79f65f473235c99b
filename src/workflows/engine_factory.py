"""
Engine Factory - Creates the search engine from configuration.
"""
import logging
from typing import Optional

from ingestion.source_factory import create_adapters_from_config
from services.config import Config
from services.database import Database
from services.reactions import ReactionOverlay
from services.recent_queries import RecentQueryHistory
from services.store import RestStore, StoreSession
from workflows.search_engine import SearchEngine

logger = logging.getLogger(__name__)


def create_store_from_config(
    config: Config,
    session: Optional[StoreSession] = None,
) -> RestStore:
    return RestStore(
        base_url=config.store.url,
        api_key=config.store.api_key,
        timeout=config.store.timeout,
        session=session,
    )


async def create_engine_from_config(
    config: Config,
    store: Optional[RestStore] = None,
    database: Optional[Database] = None,
) -> SearchEngine:
    """
    Build a SearchEngine with adapters, reaction overlay and a loaded
    recent-query history.

    Args:
        config: Loaded application config
        store: Remote store client; built from config when omitted
        database: Local database; opened at DATABASE_PATH when omitted

    Returns:
        Ready-to-refresh SearchEngine
    """
    store = store or create_store_from_config(config)
    database = database or Database(config.DATABASE_PATH)

    adapters = create_adapters_from_config(config.categories, store)
    history = await RecentQueryHistory.open(
        database,
        limit=config.search.recent_limit,
        namespace=config.search.recent_namespace,
    )

    logger.info(f"Created search engine with {len(adapters)} adapters")

    return SearchEngine(
        adapters,
        history,
        ReactionOverlay(store),
        top_n=config.search.top_n,
        trending_size=config.search.trending_size,
        fetch_limit=config.search.fetch_limit,
    )

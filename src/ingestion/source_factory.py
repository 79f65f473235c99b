"""
Source Factory - Creates category adapters from configuration.
"""
import logging
from typing import Dict, List, Type

from core.entities import Category
from ingestion.base import CategoryAdapter
from ingestion.forum import ForumAdapter
from ingestion.market import MarketAdapter
from ingestion.rent import RentAdapter
from ingestion.ride import RideAdapter
from ingestion.team import TeamAdapter
from services.config import CategoryConfig
from services.store import RestStore

logger = logging.getLogger(__name__)

ADAPTER_TYPES: Dict[Category, Type[CategoryAdapter]] = {
    Category.RENT: RentAdapter,
    Category.MARKET: MarketAdapter,
    Category.RIDE: RideAdapter,
    Category.TEAM: TeamAdapter,
    Category.FORUM: ForumAdapter,
}


def create_category_adapter(category_config: CategoryConfig, store: RestStore) -> CategoryAdapter:
    """
    Create a category adapter from configuration.

    Args:
        category_config: Configuration for the category
        store: Shared remote store client

    Returns:
        Configured CategoryAdapter instance

    Raises:
        ValueError: If the category has no adapter
    """
    adapter_type = ADAPTER_TYPES.get(category_config.name)
    if adapter_type is None:
        raise ValueError(f"Unknown category: {category_config.name}")

    return adapter_type(
        store,
        view=category_config.view,
        limit=category_config.limit,
    )


def create_adapters_from_config(
    categories: List[CategoryConfig],
    store: RestStore,
) -> List[CategoryAdapter]:
    """
    Create adapters for every enabled category.
    """
    adapters = []

    for category_config in categories:
        if not category_config.enabled:
            logger.info(f"Category '{category_config.name.value}' is disabled, skipping")
            continue
        try:
            adapter = create_category_adapter(category_config, store)
            adapters.append(adapter)
            logger.info(f"Created {category_config.name.value} adapter: {adapter.view}")
        except Exception as e:
            logger.error(f"Failed to create adapter for {category_config.name}: {e}")

    return adapters

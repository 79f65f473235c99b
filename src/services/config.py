"""
Loads and handles config from config.yml
Store credentials (SUPABASE_URL, SUPABASE_PUBLISHABLE_KEY) are loaded from .env for security
"""
import logging
import os
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from core.categories import ALL_CATEGORIES
from core.entities import Category

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    """Connection settings for the hosted database."""
    url: str = "http://localhost:54321"
    api_key: str = ""
    timeout: float = 30.0


class CategoryConfig(BaseModel):
    """Configuration for a single category adapter."""
    name: Category
    enabled: bool = True
    view: Optional[str] = None  # Defaults to the category's own view
    limit: int = Field(80, ge=1)


class SearchSettings(BaseModel):
    top_n: int = Field(10, ge=1)
    trending_size: int = Field(5, ge=0)
    recent_limit: int = Field(8, ge=1)
    recent_namespace: str = "search_recent_queries"
    fetch_limit: Optional[int] = Field(None, ge=1)  # Overrides every category's limit


class Config(BaseModel):
    DATABASE_PATH: str = "data/app.db"
    LOG_LEVEL: str = "INFO"

    store: StoreConfig = StoreConfig()
    search: SearchSettings = SearchSettings()
    categories: List[CategoryConfig] = []


def _bool(value: str | bool) -> bool:
    """Convert string or bool to boolean."""
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("1", "true", "yes", "on")


def _get_config_path() -> str:
    """Get the path to config.yml, handling different working directories."""
    if os.path.exists('resources/config.yml'):
        return 'resources/config.yml'

    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    config_path = os.path.join(project_root, 'resources', 'config.yml')
    if os.path.exists(config_path):
        return config_path

    raise FileNotFoundError("Cannot find resources/config.yml")


def _parse_category_config(name: str, data: Optional[Dict[str, Any]]) -> CategoryConfig:
    """Parse a single category entry from YAML data."""
    data = data or {}
    category = Category.parse(name)
    return CategoryConfig(
        name=category,
        enabled=_bool(data.get("enabled", True)),
        view=data.get("view"),
        limit=int(data.get("limit", ALL_CATEGORIES[category].default_limit)),
    )


def _parse_categories(data: Dict[str, Any]) -> List[CategoryConfig]:
    parsed: Dict[Category, CategoryConfig] = {}
    for name, entry in (data or {}).items():
        try:
            category_config = _parse_category_config(name, entry)
        except ValueError as e:
            logger.error(f"Failed to parse category '{name}': {e}")
            continue
        parsed[category_config.name] = category_config

    # Categories missing from the file stay enabled with their defaults
    for category, spec in ALL_CATEGORIES.items():
        if category not in parsed:
            parsed[category] = CategoryConfig(name=category, limit=spec.default_limit)

    return [parsed[category] for category in ALL_CATEGORIES]


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from config.yml and store credentials from .env."""
    load_dotenv()

    config_path = path or _get_config_path()

    with open(config_path, 'r') as file:
        config = yaml.safe_load(file) or {}

    store_data = config.get("store", {}) or {}
    search_data = config.get("search", {}) or {}

    store = StoreConfig(
        url=os.getenv("SUPABASE_URL") or store_data.get("url", "http://localhost:54321"),
        api_key=os.getenv("SUPABASE_PUBLISHABLE_KEY") or store_data.get("api_key", ""),
        timeout=float(store_data.get("timeout", 30.0)),
    )

    return Config(
        DATABASE_PATH=config.get("DATABASE_PATH", "data/app.db"),
        LOG_LEVEL=str(config.get("LOG_LEVEL", "INFO")).upper(),
        store=store,
        search=SearchSettings(**search_data),
        categories=_parse_categories(config.get("categories", {})),
    )


def get_enabled_categories(config: Config) -> List[CategoryConfig]:
    """Get only enabled categories from a config."""
    return [c for c in config.categories if c.enabled]

"""
Workflows module - Search engine orchestration.
"""
from workflows.base import SearchWorkflow
from workflows.search_engine import SearchEngine
from workflows.engine_factory import create_engine_from_config, create_store_from_config

__all__ = [
    "SearchWorkflow",
    "SearchEngine",
    "create_engine_from_config",
    "create_store_from_config",
]

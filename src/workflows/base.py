"""
Contains base class for search workflows
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from core.entities import Category, RefreshReport, UnifiedResult


class SearchWorkflow(ABC):
    """
    Orchestrates fetch → merge → rank, and answers queries
    from the resulting snapshot.
    """

    name: str

    @abstractmethod
    async def refresh(self) -> RefreshReport:
        """
        Rebuild the snapshot from every source.
        Must never raise for a source failure.
        """
        raise NotImplementedError

    @abstractmethod
    def search(self, query: str, category: Optional[Category] = None) -> List[UnifiedResult]:
        """
        Filter and rank the current snapshot. Must not perform I/O.
        """
        raise NotImplementedError

"""Base search client interface."""

from abc import ABC, abstractmethod

from wine_lens.schema import SearchResult


class BaseSearchClient(ABC):
    """Abstract base class for wine search services."""

    @abstractmethod
    def search(self, query: str) -> SearchResult:
        """Run a keyword search.

        Args:
            query: Free-text query, usually a guessed wine name

        Returns:
            SearchResult with hits in the service's ranking order
        """
        pass

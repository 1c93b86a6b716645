"""Base class for web search providers."""

from abc import ABC, abstractmethod

from job_scraper.models import SearchHit


class BaseSearchProvider(ABC):
    """
    Abstract base class for web search providers.

    A provider is used as an async context manager for the lifetime of one
    workflow run and closed when the run is finalized.
    """

    name: str

    @abstractmethod
    async def search(self, query: str, max_results: int) -> list[SearchHit]:
        """
        Run a web search.

        Args:
            query: Search query string
            max_results: Maximum number of hits to return

        Returns:
            Ranked search hits
        """

    async def aclose(self) -> None:
        """Release any network resources held by the provider."""

    async def __aenter__(self) -> "BaseSearchProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<SearchProvider: {self.name}>"

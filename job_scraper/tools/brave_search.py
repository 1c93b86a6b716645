"""
Brave search provider.

Uses the Brave Search API to find job postings.
"""

import httpx

from job_scraper.exceptions import ConfigurationError
from job_scraper.models import SearchHit
from job_scraper.tools.base import BaseSearchProvider

BRAVE_API_URL = "https://api.search.brave.com/res/v1/web/search"


class BraveSearchProvider(BaseSearchProvider):
    """Web search via the Brave Search REST API."""

    name = "brave"

    def __init__(self, api_key: str, timeout: float = 30.0, client: httpx.AsyncClient | None = None):
        if not api_key:
            raise ConfigurationError("BRAVE_API_KEY not set")
        self._headers = {
            "Accept": "application/json",
            "X-Subscription-Token": api_key,
        }
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def search(self, query: str, max_results: int) -> list[SearchHit]:
        params = {
            "q": query,
            "count": max_results,
        }
        response = await self._client.get(BRAVE_API_URL, headers=self._headers, params=params)
        response.raise_for_status()
        data = response.json()

        return [
            SearchHit(
                title=r.get("title", ""),
                url=r.get("url", ""),
                snippet=r.get("description"),
            )
            for r in data.get("web", {}).get("results", [])
        ]

    async def aclose(self) -> None:
        await self._client.aclose()

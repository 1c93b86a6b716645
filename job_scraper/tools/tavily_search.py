"""
Tavily search provider.

Uses the Tavily API to search the web for job postings.
"""

import asyncio

from tavily import AsyncTavilyClient

from job_scraper.exceptions import ConfigurationError
from job_scraper.models import SearchHit
from job_scraper.tools.base import BaseSearchProvider


class TavilySearchProvider(BaseSearchProvider):
    """Web search via the Tavily API."""

    name = "tavily"

    def __init__(self, api_key: str, timeout: float = 30.0):
        if not api_key:
            raise ConfigurationError("TAVILY_API_KEY not set")
        self._client = AsyncTavilyClient(api_key=api_key)
        self._timeout = timeout

    async def search(self, query: str, max_results: int) -> list[SearchHit]:
        results = await asyncio.wait_for(
            self._client.search(query=query, max_results=max_results, topic="general"),
            timeout=self._timeout,
        )
        return [
            SearchHit(
                title=r.get("title", ""),
                url=r.get("url", ""),
                snippet=r.get("content"),
            )
            for r in results.get("results", [])
        ]

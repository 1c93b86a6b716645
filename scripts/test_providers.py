"""Tests for search provider adapters."""

import asyncio

import httpx
import pytest

from job_scraper.config import Settings
from job_scraper.exceptions import ConfigurationError
from job_scraper.tools import create_search_provider
from job_scraper.tools.brave_search import BRAVE_API_URL, BraveSearchProvider
from job_scraper.tools.tavily_search import TavilySearchProvider


def test_brave_search_parses_results():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        seen["params"] = dict(request.url.params)
        seen["token"] = request.headers["X-Subscription-Token"]
        return httpx.Response(
            200,
            json={
                "web": {
                    "results": [
                        {"title": "Backend Engineer", "url": "https://indeed.com/1", "description": "Python"},
                        {"title": "Data Engineer", "url": "https://indeed.com/2"},
                    ]
                }
            },
        )

    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with BraveSearchProvider("brave-key", client=client) as provider:
            hits = await provider.search("python site:indeed.com", 5)
        return hits, client

    hits, client = asyncio.run(run())

    assert seen["url"] == BRAVE_API_URL
    assert seen["params"] == {"q": "python site:indeed.com", "count": "5"}
    assert seen["token"] == "brave-key"
    assert [h.title for h in hits] == ["Backend Engineer", "Data Engineer"]
    assert hits[0].snippet == "Python"
    assert hits[1].snippet is None
    assert client.is_closed


def test_brave_search_raises_on_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={})

    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with BraveSearchProvider("brave-key", client=client) as provider:
            await provider.search("python", 5)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(run())


def test_tavily_search_parses_results():
    class FakeTavily:
        async def search(self, **kwargs):
            self.kwargs = kwargs
            return {"results": [{"title": "SRE", "url": "https://greenhouse.io/1", "content": "On-call"}]}

    provider = TavilySearchProvider("tavily-key")
    provider._client = FakeTavily()

    hits = asyncio.run(provider.search("sre site:greenhouse.io", 5))

    assert provider._client.kwargs["query"] == "sre site:greenhouse.io"
    assert provider._client.kwargs["max_results"] == 5
    assert hits[0].url == "https://greenhouse.io/1"
    assert hits[0].snippet == "On-call"


def test_missing_credentials_raise_configuration_error():
    with pytest.raises(ConfigurationError):
        TavilySearchProvider("")
    with pytest.raises(ConfigurationError):
        BraveSearchProvider("")


def test_create_search_provider():
    provider = create_search_provider(Settings(search_provider="tavily", tavily_api_key="k"))
    assert isinstance(provider, TavilySearchProvider)

    with pytest.raises(ConfigurationError):
        create_search_provider(Settings(search_provider="bing"))

"""
Tools for the Job Scraper Agent.

- tavily_search: Web search via Tavily API
- brave_search: Web search via Brave API
- job_search: Multi-site job search with per-site failure isolation
- schemas: `search_jobs` tool schema
"""

from job_scraper.config import Settings
from job_scraper.exceptions import ConfigurationError
from job_scraper.tools.base import BaseSearchProvider
from job_scraper.tools.brave_search import BraveSearchProvider
from job_scraper.tools.job_search import JOB_SITES, SourceFanoutSearch
from job_scraper.tools.schemas import SEARCH_JOBS_TOOL_SCHEMA, SearchJobsArgs
from job_scraper.tools.tavily_search import TavilySearchProvider


SEARCH_PROVIDER_KEYS = {
    "tavily": ("tavily_api_key", "TAVILY_API_KEY"),
    "brave": ("brave_api_key", "BRAVE_API_KEY"),
}


def check_search_credentials(settings: Settings) -> None:
    """Raise ConfigurationError if the configured provider is unknown or has no API key."""
    if settings.search_provider not in SEARCH_PROVIDER_KEYS:
        raise ConfigurationError(f"Unknown search provider: {settings.search_provider}")
    field, env_name = SEARCH_PROVIDER_KEYS[settings.search_provider]
    if not getattr(settings, field):
        raise ConfigurationError(f"{env_name} not set")


def create_search_provider(settings: Settings) -> BaseSearchProvider:
    """Build the configured search provider."""
    if settings.search_provider == "tavily":
        return TavilySearchProvider(settings.tavily_api_key, timeout=settings.search_timeout)
    if settings.search_provider == "brave":
        return BraveSearchProvider(settings.brave_api_key, timeout=settings.search_timeout)
    raise ConfigurationError(f"Unknown search provider: {settings.search_provider}")


__all__ = [
    "BaseSearchProvider",
    "BraveSearchProvider",
    "TavilySearchProvider",
    "SourceFanoutSearch",
    "JOB_SITES",
    "SEARCH_JOBS_TOOL_SCHEMA",
    "SearchJobsArgs",
    "check_search_credentials",
    "create_search_provider",
]

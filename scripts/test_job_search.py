"""Tests for the multi-site job search."""

import asyncio

import pytest
from pydantic import ValidationError

from fakes import FakeSearchProvider
from job_scraper.exceptions import SourceSearchError
from job_scraper.models import SearchQuery, SearchResult, SourceOutcome
from job_scraper.tools.job_search import JOB_SITES, RESULTS_PER_SOURCE, SourceFanoutSearch, aggregate_outcomes

BARE_SITES = [
    "greenhouse.io",
    "linkedin.com/jobs",
    "indeed.com",
    "glassdoor.com",
    "monster.com",
    "ziprecruiter.com",
    "careerbuilder.com",
]


def test_searches_every_site_in_order(provider):
    results = asyncio.run(SourceFanoutSearch(provider).search("software engineer", "Austin"))

    assert [q for q, _ in provider.queries] == [
        f'software engineer Austin {site} "open positions" OR "now hiring" OR "apply now"' for site in JOB_SITES
    ]
    assert all(cap == RESULTS_PER_SOURCE for _, cap in provider.queries)
    assert len(results) == 35

    # Site order first, provider order within a site
    assert [r.source for r in results[::5]] == BARE_SITES
    assert [r.title for r in results[:5]] == [f"Job 1.{i}" for i in range(5)]


def test_results_are_tagged_with_query(provider):
    results = asyncio.run(SourceFanoutSearch(provider).search("software engineer", "Austin"))

    assert all(r.keywords == "software engineer" for r in results)
    assert all(r.location == "Austin" for r in results)
    assert {r.source for r in results} <= set(BARE_SITES)


def test_query_without_location(provider):
    results = asyncio.run(SourceFanoutSearch(provider).search("data scientist"))

    assert provider.queries[2][0] == 'data scientist site:indeed.com "open positions" OR "now hiring" OR "apply now"'
    assert all(r.location == "Not specified" for r in results)


def test_failed_site_is_skipped():
    provider = FakeSearchProvider(failing=("indeed.com",))

    results = asyncio.run(SourceFanoutSearch(provider).search("software engineer", "Austin"))

    assert len(provider.queries) == 7
    assert len(results) == 30
    assert "indeed.com" not in {r.source for r in results}
    assert [r.source for r in results[::5]] == [s for s in BARE_SITES if s != "indeed.com"]


def test_all_sites_failing_returns_empty_list():
    provider = FakeSearchProvider(failing=tuple(BARE_SITES))

    results = asyncio.run(SourceFanoutSearch(provider).search("software engineer"))

    assert results == []
    assert len(provider.queries) == 7


def test_results_capped_per_site():
    provider = FakeSearchProvider(hits_per_query=8)

    results = asyncio.run(SourceFanoutSearch(provider).search("nurse", "Denver"))

    assert len(results) == len(JOB_SITES) * RESULTS_PER_SOURCE


def test_site_returning_fewer_hits():
    provider = FakeSearchProvider(hits_per_query=2)

    results = asyncio.run(SourceFanoutSearch(provider).search("nurse"))

    assert len(results) == 14


def test_search_site_records_error():
    failing = FakeSearchProvider(failing=("monster.com",))
    search = SourceFanoutSearch(failing)

    outcome = asyncio.run(search.search_site(SearchQuery(keywords="chef"), "site:monster.com"))

    assert not outcome.ok
    assert outcome.source == "monster.com"
    assert isinstance(outcome.error, SourceSearchError)
    assert outcome.results == ()


def test_aggregate_outcomes_skips_failures():
    def result(title, source):
        return SearchResult(title=title, url="https://x", source=source, keywords="chef")

    outcomes = [
        SourceOutcome(source="greenhouse.io", results=(result("a", "greenhouse.io"), result("b", "greenhouse.io"))),
        SourceOutcome(source="indeed.com", error=SourceSearchError("site:indeed.com", "timeout")),
        SourceOutcome(source="monster.com", results=(result("c", "monster.com"),)),
    ]

    assert [r.title for r in aggregate_outcomes(outcomes)] == ["a", "b", "c"]


def test_empty_keywords_rejected(provider):
    with pytest.raises(ValidationError):
        asyncio.run(SourceFanoutSearch(provider).search(""))
    assert provider.queries == []

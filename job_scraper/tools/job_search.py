"""
Multi-source job search.

Runs one web search per job site, tags every hit with the site it came from
and merges the per-site outcomes. A failing site is logged and skipped.
"""

import logging
from collections.abc import Iterable

from job_scraper.exceptions import SourceSearchError
from job_scraper.models import NO_LOCATION, SearchHit, SearchQuery, SearchResult, SourceOutcome
from job_scraper.tools.base import BaseSearchProvider

logger = logging.getLogger(__name__)

JOB_SITES = (
    "site:greenhouse.io",
    "site:linkedin.com/jobs",
    "site:indeed.com",
    "site:glassdoor.com",
    "site:monster.com",
    "site:ziprecruiter.com",
    "site:careerbuilder.com",
)

RESULTS_PER_SOURCE = 5


def site_domain(site: str) -> str:
    """Strip the `site:` qualifier, e.g. `site:indeed.com` -> `indeed.com`."""
    return site.removeprefix("site:")


def tag_results(hits: Iterable[SearchHit], query: SearchQuery, site: str) -> list[SearchResult]:
    """Attach source, keywords and location to provider hits."""
    source = site_domain(site)
    return [
        SearchResult(
            **hit.model_dump(),
            source=source,
            keywords=query.keywords,
            location=query.location or NO_LOCATION,
        )
        for hit in hits
    ]


def aggregate_outcomes(outcomes: Iterable[SourceOutcome]) -> list[SearchResult]:
    """Concatenate successful outcomes in source order. Failed sources add nothing."""
    results: list[SearchResult] = []
    for outcome in outcomes:
        if outcome.ok:
            results.extend(outcome.results)
    return results


class SourceFanoutSearch:
    """Searches every job site in order with per-site failure isolation."""

    def __init__(
        self,
        provider: BaseSearchProvider,
        sites: tuple[str, ...] = JOB_SITES,
        max_results: int = RESULTS_PER_SOURCE,
    ):
        self.provider = provider
        self.sites = sites
        self.max_results = max_results

    async def search_site(self, query: SearchQuery, site: str) -> SourceOutcome:
        """Search a single job site. Never raises for provider failures."""
        try:
            hits = await self.provider.search(query.for_site(site), self.max_results)
        except Exception as e:
            logger.warning(f"Error searching {site}: {e}")
            return SourceOutcome(source=site_domain(site), error=SourceSearchError(site, str(e)))

        tagged = tag_results(hits[: self.max_results], query, site)
        logger.debug(f"{site}: {len(tagged)} results")
        return SourceOutcome(source=site_domain(site), results=tuple(tagged))

    async def search(self, keywords: str, location: str | None = None) -> list[SearchResult]:
        """
        Search all job sites for postings.

        Args:
            keywords: Job search keywords (e.g., "software engineer")
            location: Optional job location

        Returns:
            Tagged results in site order, then provider order within a site.
            Empty if every site failed.
        """
        query = SearchQuery(keywords=keywords, location=location)

        outcomes = []
        for site in self.sites:
            outcomes.append(await self.search_site(query, site))

        results = aggregate_outcomes(outcomes)
        failed = [o.source for o in outcomes if not o.ok]
        logger.info(
            f"Job search '{keywords}' ({location or NO_LOCATION}): "
            f"{len(results)} results from {len(outcomes) - len(failed)}/{len(outcomes)} sites"
        )
        if failed:
            logger.info(f"Failed sites: {', '.join(failed)}")
        return results

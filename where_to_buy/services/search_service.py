"""
Search Service - Fan a query out to every platform and categorize the results
Adapters run concurrently; the whole fan-out is bounded by a timeout and any
platform that fails or is still running contributes no records.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError, as_completed
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from where_to_buy.errors import SourceError
from where_to_buy.models.record import RawRecord
from where_to_buy.scrapers.affiliate_api import (
    AffiliateApiSource,
    AmazonProductApi,
    FlipkartAffiliateApi,
)
from where_to_buy.scrapers.amazon_scraper import AmazonScraper
from where_to_buy.scrapers.flipkart_scraper import FlipkartScraper
from where_to_buy.scrapers.jiomart_scraper import JioMartScraper
from where_to_buy.scrapers.meesho_scraper import MeeshoScraper
from where_to_buy.utils.results import (
    build_search_context,
    categorize_results,
    remove_duplicates,
)
from where_to_buy.utils.validators import is_valid_record

logger = logging.getLogger(__name__)


def _scraper_kwargs(config: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "timeout": config.get("SCRAPER_TIMEOUT", 5),
        "max_retries": config.get("MAX_RETRIES", 3),
        "backoff_factor": config.get("RETRY_BACKOFF_FACTOR", 2.0),
        "request_interval": config.get("SITE_REQUEST_INTERVAL", 1.0),
        "user_agent": config.get("SCRAPER_USER_AGENT"),
    }


def _selenium_kwargs(config: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "use_selenium": config.get("SELENIUM_ENABLED", True),
        "headless": config.get("SELENIUM_HEADLESS", True),
        "selenium_timeout": config.get("SELENIUM_TIMEOUT", 10),
        "page_load_timeout": config.get("SELENIUM_PAGE_LOAD_TIMEOUT", 30),
    }


def build_sources(config: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create one source adapter per enabled platform.

    In "api" mode Amazon and Flipkart use their official affiliate APIs;
    Meesho and JioMart have no public API and are always scraped.
    """
    scraper_kwargs = _scraper_kwargs(config)
    selenium_kwargs = _selenium_kwargs(config)
    use_api = config.get("SOURCE_MODE", "scrape") == "api"

    factories = {
        "amazon": lambda: (
            AmazonProductApi(
                config.get("AMAZON_ACCESS_KEY"),
                config.get("AMAZON_SECRET_KEY"),
                config.get("AMAZON_PARTNER_TAG"),
                marketplace=config.get("AMAZON_MARKETPLACE", "www.amazon.in"),
                host=config.get("AMAZON_API_HOST", "webservices.amazon.in"),
                region=config.get("AMAZON_API_REGION", "eu-west-1"),
                timeout=scraper_kwargs["timeout"],
            )
            if use_api
            else AmazonScraper(**scraper_kwargs)
        ),
        "flipkart": lambda: (
            FlipkartAffiliateApi(
                config.get("FLIPKART_AFFILIATE_ID"),
                config.get("FLIPKART_AFFILIATE_TOKEN"),
                timeout=scraper_kwargs["timeout"],
            )
            if use_api
            else FlipkartScraper(**scraper_kwargs)
        ),
        "meesho": lambda: MeeshoScraper(**scraper_kwargs, **selenium_kwargs),
        "jiomart": lambda: JioMartScraper(**scraper_kwargs, **selenium_kwargs),
    }

    sources = {}
    for key in config.get("ENABLED_PLATFORMS", list(factories)):
        factory = factories.get(key.lower())
        if factory is None:
            logger.warning(f"Unknown platform in ENABLED_PLATFORMS: {key}")
            continue
        sources[key.lower()] = factory()

    return sources


class SearchService:
    """Runs source adapters and feeds their settled results to the categorizer."""

    def __init__(
        self,
        sources: Mapping[str, Any],
        max_workers: int = 5,
        timeout: float = 30.0,
        max_results_per_platform: int = 10,
    ):
        """
        Args:
            sources: Platform key -> adapter with name, search() and close()
            max_workers: Maximum concurrent adapter calls
            timeout: Seconds to wait for all adapters before giving up
            max_results_per_platform: Result cap passed to each adapter
        """
        self.sources = dict(sources)
        self.max_workers = max_workers
        self.timeout = timeout
        self.max_results_per_platform = max_results_per_platform

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "SearchService":
        return cls(
            build_sources(config),
            max_workers=config.get("MAX_WORKERS", 5),
            timeout=config.get("SEARCH_TIMEOUT_SECONDS", 30),
            max_results_per_platform=config.get("MAX_RESULTS_PER_PLATFORM", 10),
        )

    def _safe_search(self, source, query: str) -> List[Dict]:
        try:
            return source.search(query, self.max_results_per_platform)
        except SourceError as e:
            logger.warning(e.message)
            return []
        except Exception as e:
            logger.error(f"{source.name} search error: {e}")
            return []

    def fetch_all(self, query: str) -> Dict[str, List[Dict]]:
        """
        Query every source concurrently.

        Returns:
            Platform name -> raw record dictionaries, in source order. A
            platform that failed or missed the deadline maps to [].
        """
        results: Dict[str, List[Dict]] = {source.name: [] for source in self.sources.values()}
        if not self.sources:
            return results

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        future_to_name = {
            executor.submit(self._safe_search, source, query): source.name
            for source in self.sources.values()
        }

        try:
            for future in as_completed(future_to_name, timeout=self.timeout):
                name = future_to_name[future]
                results[name] = future.result() or []
                logger.info(f"Search completed for {name}: {len(results[name])} results")
        except TimeoutError:
            pending = [name for future, name in future_to_name.items() if not future.done()]
            logger.warning(
                f"Search for '{query}' timed out after {self.timeout}s; "
                f"no results from {', '.join(pending)}"
            )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return results

    def search(self, query: str) -> Dict[str, Any]:
        """
        Search all platforms and categorize the combined results.

        Records are validated and deduplicated per platform, then combined
        in platform order before brand/size matching and price ranking.
        """
        raw_results = self.fetch_all(query)

        sources: Dict[str, int] = {}
        combined: List[RawRecord] = []

        for platform, items in raw_results.items():
            records = []
            for item in items:
                record = RawRecord.from_dict(item)
                record.platform = record.platform or platform
                if is_valid_record(record):
                    records.append(record)

            sources[platform] = len(records)
            combined.extend(remove_duplicates(records))

        if not combined:
            logger.info(f"No results found for '{query}'")

        context = build_search_context(query)
        logger.info(
            f"Query '{query}': brands={context.potential_brands} size={context.search_size}"
        )

        categorized = categorize_results(
            combined, context.potential_brands, context.search_size
        )

        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "query": query,
            "sources": sources,
            "count": len(combined),
            "potentialBrands": context.potential_brands,
            "searchSize": context.search_size,
            "valid": True,
        }
        payload.update(categorized.to_dict())
        return payload

    def get_supported_sites(self) -> List[Dict]:
        """Describe the configured sources."""
        return [
            {
                "key": key,
                "name": source.name,
                "method": "api" if isinstance(source, AffiliateApiSource) else "scrape",
                "domains": list(source.supported_domains),
            }
            for key, source in self.sources.items()
        ]

    def close(self) -> None:
        for source in self.sources.values():
            source.close()


def get_search_service() -> SearchService:
    """Get the application's search service, creating it on first use."""
    from flask import current_app

    service = current_app.extensions.get("search_service")
    if service is None:
        service = SearchService.from_config(current_app.config)
        current_app.extensions["search_service"] = service
    return service

"""Tests for the concurrent search service."""

from where_to_buy.config import TestingConfig
from where_to_buy.errors import SourceFailedError, SourceNotConfiguredError
from where_to_buy.scrapers import (
    AmazonProductApi,
    AmazonScraper,
    FlipkartAffiliateApi,
    FlipkartScraper,
    JioMartScraper,
    MeeshoScraper,
)
from where_to_buy.services.search_service import SearchService, build_sources

from conftest import FakeSource, make_record


def _config(**overrides):
    config = {
        key: getattr(TestingConfig, key) for key in dir(TestingConfig) if key.isupper()
    }
    config.update(overrides)
    return config


class TestBuildSources:
    def test_scrape_mode(self):
        sources = build_sources(_config(SOURCE_MODE="scrape"))
        assert list(sources) == ["amazon", "flipkart", "meesho", "jiomart"]
        assert isinstance(sources["amazon"], AmazonScraper)
        assert isinstance(sources["flipkart"], FlipkartScraper)
        assert isinstance(sources["meesho"], MeeshoScraper)
        assert isinstance(sources["jiomart"], JioMartScraper)
        assert sources["meesho"].use_selenium is False

    def test_api_mode(self):
        sources = build_sources(_config(SOURCE_MODE="api"))
        assert isinstance(sources["amazon"], AmazonProductApi)
        assert isinstance(sources["flipkart"], FlipkartAffiliateApi)
        assert isinstance(sources["meesho"], MeeshoScraper)

    def test_enabled_platforms(self):
        sources = build_sources(_config(ENABLED_PLATFORMS=["Flipkart", "ebay"]))
        assert list(sources) == ["flipkart"]


class TestFetchAll:
    def test_results_keyed_by_platform(self):
        service = SearchService(
            {
                "amazon": FakeSource("Amazon", [make_record("Dove Soap", "₹50")]),
                "flipkart": FakeSource("Flipkart", [make_record("Dove Soap", "₹48", "Flipkart")]),
            }
        )
        results = service.fetch_all("dove")
        assert list(results) == ["Amazon", "Flipkart"]
        assert results["Flipkart"][0]["price"] == "₹48"

    def test_failures_give_empty_lists(self):
        service = SearchService(
            {
                "amazon": FakeSource("Amazon", error=SourceFailedError("Amazon", "503")),
                "flipkart": FakeSource("Flipkart", error=SourceNotConfiguredError("Flipkart")),
                "meesho": FakeSource("Meesho", error=RuntimeError("boom")),
                "jiomart": FakeSource("JioMart", [make_record("Dove Soap", "₹55", "JioMart")]),
            }
        )
        results = service.fetch_all("dove")
        assert results["Amazon"] == []
        assert results["Flipkart"] == []
        assert results["Meesho"] == []
        assert len(results["JioMart"]) == 1

    def test_slow_source_is_abandoned(self):
        service = SearchService(
            {
                "amazon": FakeSource("Amazon", [make_record("Dove Soap", "₹50")]),
                "meesho": FakeSource("Meesho", [make_record("Dove Soap", "₹40")], delay=1),
            },
            timeout=0.2,
        )
        results = service.fetch_all("dove")
        assert len(results["Amazon"]) == 1
        assert results["Meesho"] == []

    def test_max_results_passed_to_sources(self):
        source = FakeSource("Amazon", [make_record(f"Soap {i}", "₹10") for i in range(5)])
        service = SearchService({"amazon": source}, max_results_per_platform=2)
        assert len(service.fetch_all("soap")["Amazon"]) == 2

    def test_no_sources(self):
        assert SearchService({}).fetch_all("dove") == {}


class TestSearch:
    def test_payload(self, search_service):
        payload = search_service.search("Dove")

        assert payload["query"] == "Dove"
        assert payload["valid"] is True
        assert payload["potentialBrands"] == ["dove"]
        assert payload["searchSize"] is None
        assert payload["sources"] == {"Amazon": 2}
        assert payload["count"] == 2
        assert [r["title"] for r in payload["exactMatches"]] == ["Dove Soap 100g"]
        assert [r["title"] for r in payload["alternatives"]] == ["Lifebuoy Soap 100g"]
        assert "timestamp" in payload

    def test_invalid_records_not_counted(self):
        source = FakeSource(
            "Flipkart",
            [
                make_record("Dove Soap 100g", "₹50", "Flipkart"),
                make_record("Dove Soap 100g", "", "Flipkart"),
                make_record("", "₹50", "Flipkart"),
            ],
        )
        payload = SearchService({"flipkart": source}).search("Dove")
        assert payload["sources"] == {"Flipkart": 1}
        assert payload["count"] == 1

    def test_duplicates_removed_per_platform(self):
        amazon = FakeSource(
            "Amazon",
            [make_record("Dove Soap 100g", "₹50"), make_record("Dove Soap 100g", "₹50")],
        )
        flipkart = FakeSource("Flipkart", [make_record("Dove Soap 100g", "₹50", "Flipkart")])
        payload = SearchService({"amazon": amazon, "flipkart": flipkart}).search("Dove")

        assert payload["sources"] == {"Amazon": 2, "Flipkart": 1}
        assert payload["count"] == 2
        assert [r["platform"] for r in payload["exactMatches"]] == ["Amazon", "Flipkart"]

    def test_missing_platform_filled_in(self):
        source = FakeSource("Meesho", [{"title": "Neem Soap 100g", "price": 99,
                                        "link": "https://www.meesho.com/product/1"}])
        payload = SearchService({"meesho": source}).search("neem soap")
        assert payload["exactMatches"][0]["platform"] == "Meesho"

    def test_size_in_query(self):
        source = FakeSource(
            "Amazon",
            [make_record("Dettol Liquid 500ml", "₹99"), make_record("Dettol Liquid 1L", "₹180")],
        )
        payload = SearchService({"amazon": source}).search("Dettol 500ml")
        assert payload["searchSize"] == "500ml"
        assert [r["title"] for r in payload["exactMatches"]] == ["Dettol Liquid 500ml"]
        assert [r["title"] for r in payload["alternatives"]] == ["Dettol Liquid 1L"]

    def test_no_results(self):
        payload = SearchService({"amazon": FakeSource("Amazon")}).search("dove")
        assert payload["count"] == 0
        assert payload["exactMatches"] == []
        assert payload["alternatives"] == []


class TestSupportedSitesAndClose:
    def test_supported_sites(self):
        service = SearchService(
            {
                "amazon": AmazonProductApi("a", "b", "c"),
                "flipkart": FlipkartScraper(),
            }
        )
        assert service.get_supported_sites() == [
            {"key": "amazon", "name": "Amazon", "method": "api", "domains": ["amazon.in"]},
            {"key": "flipkart", "name": "Flipkart", "method": "scrape", "domains": ["flipkart.com"]},
        ]
        service.close()

    def test_close(self, search_service, amazon_source):
        search_service.close()
        assert amazon_source.closed

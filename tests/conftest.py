"""Test fixtures: Flask app with fake sources and per-test cache/limiter state."""

import time

import pytest

from where_to_buy import create_app
from where_to_buy.config import TestingConfig
from where_to_buy.models.record import RawRecord
from where_to_buy.services.search_service import SearchService
from where_to_buy.utils import cache as cache_module
from where_to_buy.utils import rate_limiter as rate_limiter_module


class FakeSource:
    """Source adapter returning canned listings."""

    def __init__(self, name, records=None, error=None, delay=0):
        self.name = name
        self.supported_domains = [f"{name.lower()}.in"]
        self.records = records or []
        self.error = error
        self.delay = delay
        self.calls = []
        self.closed = False

    def search(self, query, max_results=10):
        self.calls.append(query)
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return list(self.records[:max_results])

    def close(self):
        self.closed = True


def make_record(title, price, platform="Amazon", link=None):
    return {
        "platform": platform,
        "title": title,
        "price": price,
        "link": "https://www.amazon.in/dp/TEST" if link is None else link,
        "image": "",
    }


def make_raw(title, price, platform="Amazon", link=None):
    return RawRecord.from_dict(make_record(title, price, platform, link))


@pytest.fixture(autouse=True)
def reset_globals():
    cache_module._cache_instance = None
    rate_limiter_module._rate_limiter = None
    yield
    cache_module._cache_instance = None
    rate_limiter_module._rate_limiter = None


@pytest.fixture()
def amazon_source():
    return FakeSource(
        "Amazon",
        [
            make_record("Dove Soap 100g", "₹50"),
            make_record("Lifebuoy Soap 100g", "₹45"),
        ],
    )


@pytest.fixture()
def search_service(amazon_source):
    return SearchService({"amazon": amazon_source}, max_workers=2, timeout=5)


@pytest.fixture()
def app(search_service):
    app = create_app(TestingConfig)
    app.extensions["search_service"] = search_service
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()

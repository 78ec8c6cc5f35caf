"""
Configuration settings for Where-to-Buy
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


def _env_list(name: str, default: str) -> list:
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]


class Config:
    """Base configuration class."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-production"
    DEBUG = False
    TESTING = False
    PORT = int(os.environ.get("PORT", 5000))

    # Scraper configuration
    SCRAPER_TIMEOUT = int(os.environ.get("SCRAPER_TIMEOUT", 5))
    SCRAPER_USER_AGENT = os.environ.get(
        "SCRAPER_USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    )
    MAX_RETRIES = int(os.environ.get("MAX_RETRIES", 3))
    RETRY_BACKOFF_FACTOR = float(os.environ.get("RETRY_BACKOFF_FACTOR", 2.0))
    SITE_REQUEST_INTERVAL = float(os.environ.get("SITE_REQUEST_INTERVAL", 1.0))
    MAX_RESULTS_PER_PLATFORM = int(os.environ.get("MAX_RESULTS_PER_PLATFORM", 10))

    # Concurrency: adapters run in parallel, the whole search is time-boxed
    MAX_WORKERS = int(os.environ.get("MAX_WORKERS", 5))
    SEARCH_TIMEOUT_SECONDS = float(os.environ.get("SEARCH_TIMEOUT_SECONDS", 30))

    # Sources: "scrape" parses search pages, "api" uses official affiliate APIs
    SOURCE_MODE = os.environ.get("SOURCE_MODE", "scrape").lower()
    ENABLED_PLATFORMS = _env_list("ENABLED_PLATFORMS", "amazon,flipkart,meesho,jiomart")

    # Amazon Product Advertising API 5.0 (India marketplace)
    AMAZON_ACCESS_KEY = os.environ.get("AMAZON_ACCESS_KEY")
    AMAZON_SECRET_KEY = os.environ.get("AMAZON_SECRET_KEY")
    AMAZON_PARTNER_TAG = os.environ.get("AMAZON_PARTNER_TAG")
    AMAZON_MARKETPLACE = os.environ.get("AMAZON_MARKETPLACE", "www.amazon.in")
    AMAZON_API_HOST = os.environ.get("AMAZON_API_HOST", "webservices.amazon.in")
    AMAZON_API_REGION = os.environ.get("AMAZON_API_REGION", "eu-west-1")

    # Flipkart Affiliate API
    FLIPKART_AFFILIATE_ID = os.environ.get("FLIPKART_AFFILIATE_ID")
    FLIPKART_AFFILIATE_TOKEN = os.environ.get("FLIPKART_AFFILIATE_TOKEN")

    # Selenium settings (Meesho and JioMart render results client-side)
    SELENIUM_ENABLED = _env_flag("SELENIUM_ENABLED", "true")
    SELENIUM_HEADLESS = _env_flag("SELENIUM_HEADLESS", "true")
    SELENIUM_TIMEOUT = int(os.environ.get("SELENIUM_TIMEOUT", 10))
    SELENIUM_PAGE_LOAD_TIMEOUT = int(os.environ.get("SELENIUM_PAGE_LOAD_TIMEOUT", 30))

    # Response cache, keyed by the full request URL
    CACHE_TTL_SECONDS = int(os.environ.get("CACHE_TTL_SECONDS", 3600))
    CACHE_MAX_SIZE = int(os.environ.get("CACHE_MAX_SIZE", 100))

    # Rate limiting: 100 requests per 15 minutes per API key or IP
    RATE_LIMIT_REQUESTS = int(os.environ.get("RATE_LIMIT_REQUESTS", 100))
    RATE_LIMIT_WINDOW_SECONDS = int(os.environ.get("RATE_LIMIT_WINDOW_SECONDS", 900))

    # API key authentication
    REQUIRE_API_KEY = _env_flag("REQUIRE_API_KEY", "false")
    VALID_API_KEYS = _env_list("VALID_API_KEYS", "")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    DEBUG = True
    SELENIUM_ENABLED = False
    REQUIRE_API_KEY = False
    SEARCH_TIMEOUT_SECONDS = 5


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}

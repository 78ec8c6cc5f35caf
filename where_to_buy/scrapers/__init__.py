"""
Source adapters for Where-to-Buy
"""

from where_to_buy.scrapers.base_scraper import BaseScraper
from where_to_buy.scrapers.selenium_scraper import SeleniumScraper
from where_to_buy.scrapers.selenium_driver import SeleniumDriver
from where_to_buy.scrapers.amazon_scraper import AmazonScraper
from where_to_buy.scrapers.flipkart_scraper import FlipkartScraper
from where_to_buy.scrapers.meesho_scraper import MeeshoScraper
from where_to_buy.scrapers.jiomart_scraper import JioMartScraper
from where_to_buy.scrapers.affiliate_api import (
    AffiliateApiSource,
    AmazonProductApi,
    FlipkartAffiliateApi,
)

__all__ = [
    "BaseScraper",
    "SeleniumScraper",
    "SeleniumDriver",
    "AmazonScraper",
    "FlipkartScraper",
    "MeeshoScraper",
    "JioMartScraper",
    "AffiliateApiSource",
    "AmazonProductApi",
    "FlipkartAffiliateApi",
]

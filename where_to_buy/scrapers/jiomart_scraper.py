"""
JioMart Scraper - Search results from jiomart.com (groceries and essentials)
"""

import re
import logging
from typing import Dict, List, Optional
from urllib.parse import quote
from bs4 import BeautifulSoup
from where_to_buy.scrapers.selenium_scraper import SeleniumScraper

logger = logging.getLogger(__name__)


def _has_rupee(text: Optional[str]) -> bool:
    return bool(text) and "₹" in text


class JioMartScraper(SeleniumScraper):
    """Scraper for JioMart search pages."""

    @property
    def name(self) -> str:
        return "JioMart"

    @property
    def base_url(self) -> str:
        return "https://www.jiomart.com"

    @property
    def search_url_template(self) -> str:
        return "https://www.jiomart.com/search/{query}"

    @property
    def wait_selector(self) -> Optional[str]:
        return ".plp-card-container, .product-card"

    def build_search_url(self, query: str) -> str:
        """JioMart puts the query in the path rather than a parameter."""
        return self.search_url_template.format(query=quote(query.strip().lower()))

    def parse_search_results(self, html: str, max_results: int = 10) -> List[Dict]:
        """
        Parse JioMart search results page.

        Args:
            html: Search results page HTML
            max_results: Maximum results to return

        Returns:
            List of record dictionaries
        """
        soup = BeautifulSoup(html, "lxml")
        records = []

        cards = soup.find_all("div", {"class": re.compile(r"plp-card-container")})
        if not cards:
            cards = soup.find_all("li", {"class": re.compile(r"product")})

        for card in cards:
            try:
                record = self._parse_search_card(card)
            except (AttributeError, KeyError, TypeError) as e:
                logger.warning(f"Failed to parse JioMart search card: {e}")
                continue

            if record:
                records.append(record)
                if len(records) >= max_results:
                    break

        logger.info(f"Parsed {len(records)} products from JioMart search")
        return records

    def _parse_search_card(self, card: BeautifulSoup) -> Optional[Dict]:
        """Parse a single product card from search results."""
        link_elem = card.find("a", href=True)
        if not link_elem:
            return None

        title_elem = card.find(["div", "span"], {"class": re.compile(r"plp-card-details-name|product-name")})
        title = title_elem.get_text(strip=True) if title_elem else None

        img_elem = card.find("img")
        if not title and img_elem:
            title = img_elem.get("alt")
        if not title:
            return None

        price = None
        price_elem = card.find("span", {"class": re.compile(r"jm-heading|final-price|selling-price")})
        if price_elem and _has_rupee(price_elem.get_text()):
            price = price_elem.get_text(strip=True)
        else:
            price_text = card.find(string=_has_rupee)
            price = price_text.strip() if price_text else None

        image = (img_elem.get("src") or img_elem.get("data-src")) if img_elem else None

        return self.make_record(title, price, link_elem.get("href"), image)

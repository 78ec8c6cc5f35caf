"""
Flipkart Scraper - Search results from flipkart.com
"""

import re
import logging
from typing import Dict, List, Optional
from bs4 import BeautifulSoup
from where_to_buy.scrapers.base_scraper import BaseScraper

logger = logging.getLogger(__name__)


def _is_product_link(href: Optional[str]) -> bool:
    return bool(href) and "/p/" in href


def _has_rupee(text: Optional[str]) -> bool:
    return bool(text) and "₹" in text


class FlipkartScraper(BaseScraper):
    """Scraper for Flipkart search pages."""

    @property
    def name(self) -> str:
        return "Flipkart"

    @property
    def base_url(self) -> str:
        return "https://www.flipkart.com"

    @property
    def search_url_template(self) -> str:
        return "https://www.flipkart.com/search?q={query}"

    def parse_search_results(self, html: str, max_results: int = 10) -> List[Dict]:
        """
        Parse Flipkart search results page.

        Class names on Flipkart are generated, so cards are found through
        their data-id attribute and product links through "/p/" in the href.
        """
        soup = BeautifulSoup(html, "lxml")
        records = []

        cards = soup.find_all("div", {"data-id": True})

        for card in cards:
            try:
                record = self._parse_search_card(card)
            except (AttributeError, KeyError, TypeError) as e:
                logger.warning(f"Failed to parse Flipkart search card: {e}")
                continue

            if record:
                records.append(record)
                if len(records) >= max_results:
                    break

        logger.info(f"Parsed {len(records)} products from Flipkart search")
        return records

    def _parse_search_card(self, card: BeautifulSoup) -> Optional[Dict]:
        """Parse a single product card from search results."""
        link_elem = card.find("a", href=_is_product_link)
        if not link_elem:
            return None

        img_elem = card.find("img", alt=True)
        title = img_elem.get("alt") if img_elem else None
        if not title:
            title = link_elem.get("title") or link_elem.get_text(strip=True)
        if not title:
            return None

        # The first rupee amount is the selling price, the second the MRP
        price = None
        price_text = card.find(string=_has_rupee)
        if price_text:
            match = re.search(r"₹\s*[\d,]+(?:\.\d+)?", price_text)
            price = match.group().replace(" ", "") if match else None

        image = img_elem.get("src") if img_elem else None

        return self.make_record(title, price, link_elem.get("href"), image)

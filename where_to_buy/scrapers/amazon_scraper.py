"""
Amazon Scraper - Search results from amazon.in
"""

import logging
from typing import Dict, List, Optional
from bs4 import BeautifulSoup
from where_to_buy.scrapers.base_scraper import BaseScraper

logger = logging.getLogger(__name__)


class AmazonScraper(BaseScraper):
    """Scraper for Amazon India search pages."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Amazon serves a captcha page to clients without browser-like headers
        self.headers.update(
            {
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
                "DNT": "1",
                "Upgrade-Insecure-Requests": "1",
                "Sec-Fetch-Dest": "document",
                "Sec-Fetch-Mode": "navigate",
                "Sec-Fetch-Site": "none",
                "Sec-Fetch-User": "?1",
            }
        )
        self.session.headers.update(self.headers)

    @property
    def name(self) -> str:
        return "Amazon"

    @property
    def base_url(self) -> str:
        return "https://www.amazon.in"

    @property
    def search_url_template(self) -> str:
        return "https://www.amazon.in/s?k={query}"

    def parse_search_results(self, html: str, max_results: int = 10) -> List[Dict]:
        """
        Parse Amazon search results page.

        Args:
            html: Search results page HTML
            max_results: Maximum results to return

        Returns:
            List of record dictionaries
        """
        soup = BeautifulSoup(html, "lxml")
        records = []

        cards = soup.find_all("div", {"data-component-type": "s-search-result"})

        for card in cards:
            try:
                record = self._parse_search_card(card)
            except (AttributeError, KeyError, TypeError) as e:
                logger.warning(f"Failed to parse Amazon search card: {e}")
                continue

            if record:
                records.append(record)
                if len(records) >= max_results:
                    break

        logger.info(f"Parsed {len(records)} products from Amazon search")
        return records

    def _parse_search_card(self, card: BeautifulSoup) -> Optional[Dict]:
        """Parse a single product card from search results."""
        if not card.get("data-asin"):
            return None

        title_elem = card.find("h2") or card.find("span", {"class": "a-text-normal"})
        title = title_elem.get_text(strip=True) if title_elem else None
        if not title:
            return None

        link_elem = card.find("a", {"class": "s-no-outline"}) or card.find(
            "a", {"class": "a-link-normal"}
        )
        href = link_elem.get("href") if link_elem else None

        price = None
        price_elem = card.find("span", {"class": "a-price"})
        if price_elem and price_elem.get("data-a-strike") != "true":
            offscreen = price_elem.find("span", {"class": "a-offscreen"})
            whole = price_elem.find("span", {"class": "a-price-whole"})
            if offscreen:
                price = offscreen.get_text(strip=True)
            elif whole:
                price = whole.get_text(strip=True).rstrip(".")

        img_elem = card.find("img", {"class": "s-image"})
        image = img_elem.get("src") if img_elem else None

        return self.make_record(title, price, href, image)

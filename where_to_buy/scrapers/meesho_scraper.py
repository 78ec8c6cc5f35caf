"""
Meesho Scraper - Search results from meesho.com
Results come from the Next.js page data when present, otherwise from the
rendered product cards.
"""

import re
import json
import logging
from typing import Dict, List, Optional
from bs4 import BeautifulSoup
from where_to_buy.scrapers.selenium_scraper import SeleniumScraper

logger = logging.getLogger(__name__)


def _is_product_link(href: Optional[str]) -> bool:
    return bool(href) and ("/p/" in href or "/product/" in href)


def _has_rupee(text: Optional[str]) -> bool:
    return bool(text) and "₹" in text


class MeeshoScraper(SeleniumScraper):
    """Scraper for Meesho search pages."""

    @property
    def name(self) -> str:
        return "Meesho"

    @property
    def base_url(self) -> str:
        return "https://www.meesho.com"

    @property
    def search_url_template(self) -> str:
        return "https://www.meesho.com/search?q={query}"

    @property
    def wait_selector(self) -> Optional[str]:
        return "a[href*='/p/']"

    def parse_search_results(self, html: str, max_results: int = 10) -> List[Dict]:
        """
        Parse Meesho search results page.

        Args:
            html: Search results page HTML
            max_results: Maximum results to return

        Returns:
            List of record dictionaries
        """
        records = [
            record
            for record in map(self._parse_catalog_item, self._extract_catalog(html))
            if record
        ][:max_results]

        if records:
            logger.info(f"Parsed {len(records)} products from Meesho page data")
            return records

        soup = BeautifulSoup(html, "lxml")
        for card in soup.find_all("a", href=_is_product_link):
            record = self._parse_search_card(card)
            if record:
                records.append(record)
                if len(records) >= max_results:
                    break

        logger.info(f"Parsed {len(records)} products from Meesho search")
        return records

    def _extract_catalog(self, html: str) -> List[Dict]:
        """Read the catalog list embedded in the __NEXT_DATA__ script."""
        match = re.search(
            r'<script id="__NEXT_DATA__"[^>]*>(\{.*?\})</script>', html, re.DOTALL
        )
        if not match:
            return []

        try:
            data = json.loads(match.group(1))
        except json.JSONDecodeError as e:
            logger.debug(f"Meesho page data is not valid JSON: {e}")
            return []

        page_props = data.get("props", {}).get("pageProps", {})
        catalog = page_props.get("initialData", {}).get("catalogList") or []
        return [item for item in catalog if isinstance(item, dict)]

    def _parse_catalog_item(self, item: Dict) -> Optional[Dict]:
        """Parse one catalog entry from the page data."""
        title = item.get("name")
        product_id = item.get("product_id") or item.get("id")
        if not title or not product_id:
            return None

        price = item.get("min_catalog_price") or item.get("min_product_price")
        images = item.get("product_images") or []
        image = images[0].get("url") if images and isinstance(images[0], dict) else None

        return self.make_record(title, price, f"/product/{product_id}", image)

    def _parse_search_card(self, card: BeautifulSoup) -> Optional[Dict]:
        """Parse a rendered product card (an anchor wrapping the card)."""
        title_elem = card.find("p") or card.find("span")
        title = title_elem.get_text(strip=True) if title_elem else None

        img_elem = card.find("img")
        if not title and img_elem:
            title = img_elem.get("alt")
        if not title:
            return None

        price_text = card.find(string=_has_rupee)
        price = price_text.strip() if price_text else None
        image = (img_elem.get("src") or img_elem.get("data-src")) if img_elem else None

        return self.make_record(title, price, card.get("href"), image)

"""
Selenium-enabled Base Scraper
Renders search pages in Chrome and falls back to plain requests when the
browser is disabled or fails.
"""

import logging
import threading
from typing import Optional

from where_to_buy.scrapers.base_scraper import BaseScraper
from where_to_buy.scrapers.selenium_driver import SeleniumDriver

logger = logging.getLogger(__name__)


class SeleniumScraper(BaseScraper):
    """Base scraper for sites whose result lists are rendered client-side."""

    def __init__(
        self,
        *args,
        use_selenium: bool = True,
        headless: bool = True,
        selenium_timeout: int = 10,
        page_load_timeout: int = 30,
        **kwargs,
    ):
        """
        Args:
            use_selenium: Render pages in Chrome (False uses requests only)
            headless: Run browser in headless mode
            selenium_timeout: Seconds to wait for wait_selector
            page_load_timeout: Seconds before a page load is abandoned
        """
        super().__init__(*args, **kwargs)
        self.use_selenium = use_selenium
        self.headless = headless
        self.selenium_timeout = selenium_timeout
        self.page_load_timeout = page_load_timeout
        self._selenium_driver: Optional[SeleniumDriver] = None
        self._driver_lock = threading.Lock()

    @property
    def wait_selector(self) -> Optional[str]:
        """CSS selector to wait for before reading the page."""
        return None

    def _get_selenium_driver(self) -> SeleniumDriver:
        with self._driver_lock:
            if self._selenium_driver is None:
                self._selenium_driver = SeleniumDriver(
                    headless=self.headless,
                    timeout=self.selenium_timeout,
                    page_load_timeout=self.page_load_timeout,
                    user_agent=self.headers.get("User-Agent"),
                )
            return self._selenium_driver

    def fetch_page(self, url: str) -> Optional[str]:
        """Fetch page using Selenium or requests based on configuration."""
        if not self.use_selenium:
            return super().fetch_page(url)

        try:
            html = self._get_selenium_driver().fetch_page(url, self.wait_selector)
        except Exception as e:
            logger.error(f"Selenium fetch failed for {url}: {e}")
            html = None

        if html:
            return html

        logger.info(f"Falling back to requests for {url}")
        return super().fetch_page(url)

    def close(self) -> None:
        """Close Selenium driver and HTTP session."""
        with self._driver_lock:
            driver, self._selenium_driver = self._selenium_driver, None
        if driver:
            driver.close()
        super().close()

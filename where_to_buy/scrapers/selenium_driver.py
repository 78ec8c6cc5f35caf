"""
Selenium WebDriver wrapper for Where-to-Buy
Renders search pages of platforms that build their result lists in the browser.
"""

import logging
import threading
import time
from typing import Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

logger = logging.getLogger(__name__)

HIDE_WEBDRIVER_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', {get: () => undefined});
"""


class SeleniumDriver:
    """Lazily started headless Chrome used to fetch rendered HTML."""

    def __init__(
        self,
        headless: bool = True,
        timeout: int = 10,
        page_load_timeout: int = 30,
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            headless: Run browser in headless mode
            timeout: Seconds to wait for the result selector
            page_load_timeout: Seconds before a page load is abandoned
            user_agent: Optional User-Agent override
        """
        self.headless = headless
        self.timeout = timeout
        self.page_load_timeout = page_load_timeout
        self.user_agent = user_agent
        self._driver: Optional[webdriver.Chrome] = None
        # One browser per instance; WebDriver sessions are not thread-safe
        self._lock = threading.RLock()

    def _create_options(self) -> ChromeOptions:
        options = ChromeOptions()

        if self.headless:
            options.add_argument("--headless=new")

        options.add_argument("--disable-blink-features=AutomationControlled")
        options.add_experimental_option("excludeSwitches", ["enable-automation"])
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--disable-gpu")
        options.add_argument("--window-size=1920,1080")

        if self.user_agent:
            options.add_argument(f"user-agent={self.user_agent}")

        # Images are not needed to read titles and prices
        options.add_experimental_option(
            "prefs", {"profile.managed_default_content_settings.images": 2}
        )
        return options

    def _create_service(self) -> ChromeService:
        try:
            return ChromeService(ChromeDriverManager().install())
        except (OSError, ValueError) as e:
            # Selenium Manager resolves a driver when none is given explicitly
            logger.warning(f"webdriver-manager could not install ChromeDriver: {e}")
            return ChromeService()

    def get_driver(self) -> webdriver.Chrome:
        """Get or create the WebDriver instance."""
        with self._lock:
            if self._driver is None:
                driver = webdriver.Chrome(
                    service=self._create_service(), options=self._create_options()
                )
                driver.set_page_load_timeout(self.page_load_timeout)
                driver.execute_cdp_cmd(
                    "Page.addScriptToEvaluateOnNewDocument", {"source": HIDE_WEBDRIVER_SCRIPT}
                )
                self._driver = driver
                logger.info("Selenium WebDriver initialized")

            return self._driver

    def fetch_page(self, url: str, wait_selector: Optional[str] = None) -> Optional[str]:
        """
        Load a page and return its rendered HTML.

        Args:
            url: URL to fetch
            wait_selector: CSS selector that signals the results have rendered

        Returns:
            Rendered HTML, or None when the page did not load
        """
        with self._lock:
            return self._load(self.get_driver(), url, wait_selector)

    def _load(self, driver: webdriver.Chrome, url: str, wait_selector: Optional[str]) -> Optional[str]:
        try:
            logger.info(f"Selenium fetching: {url}")
            driver.get(url)

            if wait_selector:
                try:
                    WebDriverWait(driver, self.timeout).until(
                        EC.presence_of_element_located((By.CSS_SELECTOR, wait_selector))
                    )
                except TimeoutException:
                    logger.warning(f"Timeout waiting for selector: {wait_selector}")

            # Lazy-loaded cards only render once scrolled into view
            for _ in range(3):
                driver.execute_script("window.scrollBy(0, 800);")
                time.sleep(0.5)

            html = driver.page_source
            logger.info(f"Selenium fetched {url} ({len(html)} bytes)")
            return html
        except TimeoutException:
            logger.error(f"Page load timeout for {url}")
            return None
        except WebDriverException as e:
            logger.error(f"Selenium error fetching {url}: {e}")
            return None

    def close(self) -> None:
        """Quit the browser if it was started."""
        with self._lock:
            if self._driver is None:
                return

            try:
                self._driver.quit()
                logger.info("Selenium WebDriver closed")
            except WebDriverException as e:
                logger.warning(f"Error closing WebDriver: {e}")
            finally:
                self._driver = None


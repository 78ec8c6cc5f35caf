"""
Base Scraper - Abstract base class for search-page source adapters
Each adapter turns a query into raw listings: platform, title, price, link, image.
"""
import time
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from urllib.parse import quote_plus, urljoin, urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from where_to_buy.errors import SourceFailedError
from where_to_buy.utils.helpers import clean_text
from where_to_buy.utils.price import CURRENCY_SYMBOL

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)


class BaseScraper(ABC):
    """Abstract base class for all search scrapers."""

    def __init__(
        self,
        timeout: int = 5,
        max_retries: int = 3,
        backoff_factor: float = 2.0,
        request_interval: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """
        Initialize base scraper with common settings.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts
            backoff_factor: Exponential backoff factor
            request_interval: Minimum seconds between requests to one domain
            user_agent: User-Agent header sent with every request
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor

        self.session = requests.Session()

        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        self.headers = {
            'User-Agent': user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
            'Accept-Language': 'en-IN,en-GB;q=0.9,en-US;q=0.8,en;q=0.7',
            'Accept-Encoding': 'gzip, deflate, br',
            'Connection': 'keep-alive',
            'Cache-Control': 'no-cache',
        }
        self.session.headers.update(self.headers)

        self._last_request_time: Dict[str, float] = {}
        self._request_interval = request_interval

    @property
    @abstractmethod
    def name(self) -> str:
        """Platform name attached to every record."""
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Site root used to resolve relative links."""
        pass

    @property
    @abstractmethod
    def search_url_template(self) -> str:
        """Search URL with a {query} placeholder."""
        pass

    @property
    def supported_domains(self) -> list:
        return [urlparse(self.base_url).netloc.replace("www.", "")]

    def build_search_url(self, query: str) -> str:
        return self.search_url_template.format(query=quote_plus(query.strip()))

    def _respect_rate_limit(self, domain: str) -> None:
        """Wait until the per-domain request interval has passed."""
        current_time = time.time()
        last_time = self._last_request_time.get(domain, 0)

        time_since_last = current_time - last_time
        if time_since_last < self._request_interval:
            sleep_time = self._request_interval - time_since_last
            logger.debug(f"Rate limiting: sleeping {sleep_time:.2f}s for {domain}")
            time.sleep(sleep_time)

        self._last_request_time[domain] = time.time()

    def fetch_page(self, url: str) -> Optional[str]:
        """
        Fetch the HTML content of a page with retry logic.

        Raises:
            SourceFailedError: On timeouts and HTTP errors.
        """
        self._respect_rate_limit(urlparse(url).netloc)

        try:
            logger.info(f"Fetching: {url}")
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            logger.info(f"Fetched {url} ({len(response.text)} bytes)")
            return response.text
        except requests.Timeout:
            logger.error(f"Timeout fetching {url}")
            raise SourceFailedError(self.name, f"request timed out after {self.timeout}s")
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {url}: {e}")
            raise SourceFailedError(self.name, str(e))

    def search(self, query: str, max_results: int = 10) -> List[Dict]:
        """
        Search the site and return raw listings.

        Args:
            query: Search query string
            max_results: Maximum number of results to return

        Returns:
            List of record dictionaries (platform, title, price, link, image)
        """
        search_url = self.build_search_url(query)
        html = self.fetch_page(search_url)
        if not html:
            return []

        records = self.parse_search_results(html, max_results)
        logger.info(f"{self.name}: found {len(records)} results for '{query}'")
        return records

    @abstractmethod
    def parse_search_results(self, html: str, max_results: int = 10) -> List[Dict]:
        """Parse a search results page into record dictionaries."""
        pass

    def make_record(
        self,
        title: Optional[str],
        price: Optional[str],
        href: Optional[str],
        image: Optional[str] = None,
    ) -> Dict:
        """Build a record dictionary with an absolute link and a rupee price."""
        price_text = clean_text(str(price)) if price else ""
        if price_text and CURRENCY_SYMBOL not in price_text:
            price_text = f"{CURRENCY_SYMBOL}{price_text}"

        return {
            "platform": self.name,
            "title": clean_text(title or ""),
            "price": price_text,
            "link": urljoin(self.base_url, href) if href else "",
            "image": image or "",
        }

    def close(self) -> None:
        self.session.close()

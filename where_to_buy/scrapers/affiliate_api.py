"""
Official affiliate API sources
Amazon Product Advertising API 5.0 and the Flipkart Affiliate API, used
instead of page scraping when SOURCE_MODE is "api".
"""

import json
import logging
from typing import Dict, List, Optional

import requests
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from where_to_buy.errors import SourceFailedError, SourceNotConfiguredError
from where_to_buy.utils.helpers import clean_text
from where_to_buy.utils.price import CURRENCY_SYMBOL

logger = logging.getLogger(__name__)


class AffiliateApiSource:
    """Shared HTTP handling for JSON affiliate APIs."""

    name = "Affiliate"
    supported_domains: List[str] = []

    def __init__(self, timeout: int = 5):
        self.timeout = timeout
        self.session = requests.Session()

    @property
    def is_configured(self) -> bool:
        return True

    def search(self, query: str, max_results: int = 10) -> List[Dict]:
        """
        Search the platform through its API.

        Raises:
            SourceNotConfiguredError: When credentials are missing.
            SourceFailedError: When the API call fails.
        """
        if not self.is_configured:
            raise SourceNotConfiguredError(self.name)

        try:
            data = self._request(query.strip(), max_results)
        except requests.Timeout:
            raise SourceFailedError(self.name, f"API timed out after {self.timeout}s")
        except (requests.RequestException, ValueError) as e:
            raise SourceFailedError(self.name, str(e))

        records = self.parse_response(data)[:max_results]
        logger.info(f"{self.name} API returned {len(records)} results")
        return records

    def _request(self, query: str, max_results: int) -> Dict:
        raise NotImplementedError

    def parse_response(self, data: Dict) -> List[Dict]:
        raise NotImplementedError

    def _record(self, title: str, amount, link: str, image: Optional[str]) -> Dict:
        return {
            "platform": self.name,
            "title": clean_text(title or ""),
            "price": f"{CURRENCY_SYMBOL}{amount}" if amount is not None else "",
            "link": link or "",
            "image": image or "",
        }

    def close(self) -> None:
        self.session.close()


class AmazonProductApi(AffiliateApiSource):
    """Amazon PA-API 5.0 SearchItems client with AWS Signature Version 4."""

    name = "Amazon"
    supported_domains = ["amazon.in"]
    service = "ProductAdvertisingAPI"
    path = "/paapi5/searchitems"
    target = "com.amazon.paapi5.v1.ProductAdvertisingAPIv1.SearchItems"

    def __init__(
        self,
        access_key: Optional[str],
        secret_key: Optional[str],
        partner_tag: Optional[str],
        marketplace: str = "www.amazon.in",
        host: str = "webservices.amazon.in",
        region: str = "eu-west-1",
        timeout: int = 5,
    ):
        super().__init__(timeout)
        self.access_key = access_key
        self.secret_key = secret_key
        self.partner_tag = partner_tag
        self.marketplace = marketplace
        self.host = host
        self.region = region

    @property
    def is_configured(self) -> bool:
        return bool(self.access_key and self.secret_key and self.partner_tag)

    def build_payload(self, query: str, max_results: int) -> Dict:
        return {
            "Keywords": query,
            "Resources": [
                "ItemInfo.Title",
                "Offers.Listings.Price",
                "Images.Primary.Medium",
            ],
            "ItemCount": min(max_results, 10),
            "PartnerTag": self.partner_tag,
            "PartnerType": "Associates",
            "Marketplace": self.marketplace,
            "Operation": "SearchItems",
        }

    @property
    def endpoint(self) -> str:
        return f"https://{self.host}{self.path}"

    def sign_headers(self, body: str) -> Dict[str, str]:
        """Build SigV4-signed request headers for a JSON body."""
        request = AWSRequest(
            method="POST",
            url=self.endpoint,
            data=body.encode("utf-8"),
            headers={
                "content-encoding": "amz-1.0",
                "content-type": "application/json; charset=utf-8",
                "host": self.host,
                "x-amz-target": self.target,
            },
        )
        credentials = Credentials(self.access_key, self.secret_key)
        SigV4Auth(credentials, self.service, self.region).add_auth(request)
        return dict(request.headers.items())

    def _request(self, query: str, max_results: int) -> Dict:
        body = json.dumps(self.build_payload(query, max_results))
        response = self.session.post(
            self.endpoint,
            data=body.encode("utf-8"),
            headers=self.sign_headers(body),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def parse_response(self, data: Dict) -> List[Dict]:
        """Turn a SearchItems response into record dictionaries."""
        records = []
        items = (data or {}).get("SearchResult", {}).get("Items") or []

        for item in items:
            title = (item.get("ItemInfo") or {}).get("Title", {}).get("DisplayValue")
            listings = (item.get("Offers") or {}).get("Listings") or []
            price = listings[0].get("Price") if listings else None
            if not title or not price:
                continue

            image = (
                (item.get("Images") or {}).get("Primary", {}).get("Medium", {}).get("URL")
            )
            records.append(
                self._record(title, price.get("Amount"), item.get("DetailPageURL"), image)
            )

        return records


class FlipkartAffiliateApi(AffiliateApiSource):
    """Flipkart Affiliate API product search client."""

    name = "Flipkart"
    supported_domains = ["flipkart.com"]
    search_url = "https://affiliate-api.flipkart.net/affiliate/1.0/search.json"

    def __init__(
        self,
        affiliate_id: Optional[str],
        affiliate_token: Optional[str],
        timeout: int = 5,
    ):
        super().__init__(timeout)
        self.affiliate_id = affiliate_id
        self.affiliate_token = affiliate_token

    @property
    def is_configured(self) -> bool:
        return bool(self.affiliate_id and self.affiliate_token)

    def _request(self, query: str, max_results: int) -> Dict:
        response = self.session.get(
            self.search_url,
            params={"query": query, "resultCount": max_results},
            headers={
                "Fk-Affiliate-Id": self.affiliate_id,
                "Fk-Affiliate-Token": self.affiliate_token,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def parse_response(self, data: Dict) -> List[Dict]:
        """Turn an affiliate search response into record dictionaries."""
        records = []

        for product in (data or {}).get("products") or []:
            info = product.get("productBaseInfoV1") or {}
            special = (info.get("flipkartSpecialPrice") or {}).get("amount")
            mrp = (info.get("maximumRetailPrice") or {}).get("amount")
            amount = special if special else mrp

            records.append(
                self._record(
                    info.get("title"),
                    amount,
                    info.get("productUrl"),
                    (info.get("imageUrls") or {}).get("200x200"),
                )
            )

        return records

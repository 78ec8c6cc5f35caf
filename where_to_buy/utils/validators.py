"""
Validation utilities for Where-to-Buy
"""

from urllib.parse import urlparse

from where_to_buy.models.record import RawRecord
from where_to_buy.utils.price import parse_price


def validate_url(url: str) -> bool:
    """
    Validate if a string is an absolute http(s) URL.

    Args:
        url: The URL string to validate.

    Returns:
        True if valid URL, False otherwise.
    """
    if not url or not isinstance(url, str):
        return False

    try:
        result = urlparse(url.strip())
        return all([result.scheme in ("http", "https"), result.netloc])
    except ValueError:
        return False


def is_valid_record(record: RawRecord) -> bool:
    """
    Check that a listing can be categorized.

    A record needs a non-empty title, a price with at least one digit and an
    absolute link.
    """
    if not record.title or not record.title.strip():
        return False

    if not record.price or parse_price(record.price) is None:
        return False

    return validate_url(record.link)

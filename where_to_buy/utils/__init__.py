"""
Utilities module for Where-to-Buy
"""

from where_to_buy.utils.validators import validate_url, is_valid_record
from where_to_buy.utils.helpers import clean_text, simplify_title
from where_to_buy.utils.price import parse_price, format_price

__all__ = [
    "validate_url",
    "is_valid_record",
    "clean_text",
    "simplify_title",
    "parse_price",
    "format_price",
]

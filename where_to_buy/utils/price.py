"""
Price utilities for Where-to-Buy
Parse locale-formatted rupee strings and format numeric prices for display.
"""

import re
from typing import Optional, Tuple, Union

CURRENCY_SYMBOL = "₹"

# First run of digits, thousands separators allowed, at most one decimal point
PRICE_PATTERN = re.compile(r"\d[\d,]*\.?\d*")


def parse_price(price_str: Union[str, int, float, None]) -> Optional[float]:
    """
    Extract the numeric value from a price string.

    Only the first numeric run is used, so "₹499 (was ₹599)" gives 499.0.

    Args:
        price_str: The price string (e.g., "₹1,299.00")

    Returns:
        The numeric price, or None when no digits are present.
    """
    if price_str is None or price_str == "":
        return None

    if isinstance(price_str, (int, float)):
        return float(price_str)

    match = PRICE_PATTERN.search(str(price_str))
    if not match:
        return None

    try:
        return float(match.group().replace(",", ""))
    except ValueError:
        return None


def format_price(price: Union[str, int, float, None]) -> str:
    """
    Format a price for display with the rupee symbol and two decimals.

    Strings that already carry the rupee symbol are returned unchanged.
    """
    if not price:
        return f"{CURRENCY_SYMBOL}0.00"

    if isinstance(price, str) and CURRENCY_SYMBOL in price:
        return price

    value = parse_price(price)
    if value is None:
        return f"{CURRENCY_SYMBOL}0.00"

    return f"{CURRENCY_SYMBOL}{value:.2f}"


def price_sort_key(price: Optional[float]) -> Tuple[int, float]:
    """Sort key that places missing prices after every known price."""
    if price is None:
        return (1, 0.0)
    return (0, price)

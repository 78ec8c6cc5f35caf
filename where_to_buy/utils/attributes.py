"""
Attribute extraction for Where-to-Buy
Detect weight/volume, pack size and feature keywords in product titles and
derive unit economics (price per 100g / 100ml) from them.
"""

import re
import logging
from typing import List, Optional

from where_to_buy.models.record import Attributes
from where_to_buy.utils.price import format_price

logger = logging.getLogger(__name__)

# Order matters: the first pattern that matches wins
WEIGHT_PATTERNS = (
    re.compile(r"([0-9.]+)\s*(kg|g|gm|gram|ml|l|liter|litre)", re.IGNORECASE),
    re.compile(r"([0-9.]+)\s*-?\s*(kg|g|gm|gram|ml|l|liter|litre)", re.IGNORECASE),
    re.compile(r"([0-9.]+)(kg|g|gm|gram|ml|l)", re.IGNORECASE),
)

PACK_PATTERNS = (
    re.compile(r"pack\s*of\s*([0-9]+)", re.IGNORECASE),
    re.compile(r"([0-9]+)\s*x\s*[0-9.]+", re.IGNORECASE),
    re.compile(r"([0-9]+)\s*pack", re.IGNORECASE),
    re.compile(r"([0-9]+)\s*count", re.IGNORECASE),
    re.compile(r"([0-9]+)\s*pc", re.IGNORECASE),
    re.compile(r"set\s*of\s*([0-9]+)", re.IGNORECASE),
)

# Tag -> keyword, or tuple of keywords that must all be present
FEATURE_KEYWORDS = (
    ("original", "original"),
    ("fresh", "fresh"),
    ("cool", "cooling"),
    ("icy", "cooling"),
    ("lemon", "lemon"),
    ("germ protection", ("germ", "protection")),
    ("antibacterial", "antibacterial"),
    ("anti-bacterial", "antibacterial"),
    ("natural", "natural"),
    ("organic", "organic"),
    ("fragrance", "fragrance"),
    ("scented", "scented"),
)

# Unit -> (canonical unit, multiplier)
UNIT_CONVERSIONS = {
    "kg": ("g", 1000),
    "g": ("g", 1),
    "gm": ("g", 1),
    "gram": ("g", 1),
    "l": ("ml", 1000),
    "liter": ("ml", 1000),
    "litre": ("ml", 1000),
    "ml": ("ml", 1),
}

VOLUME_UNITS = ("l", "liter", "litre", "ml")

SIZE_TOLERANCE = 0.1


def _first_match(patterns, text: Optional[str]) -> Optional[re.Match]:
    if not text:
        return None

    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match

    return None


def extract_weight(title: Optional[str]) -> Optional[re.Match]:
    """
    Find the weight/volume mentioned in a title.

    Returns:
        Match with the number in group 1 and the unit in group 2, or None.
    """
    return _first_match(WEIGHT_PATTERNS, title)


def extract_pack_size(title: Optional[str]) -> Optional[re.Match]:
    """
    Find the multi-pack count mentioned in a title.

    Returns:
        Match with the count in group 1, or None.
    """
    return _first_match(PACK_PATTERNS, title)


def extract_features(title: Optional[str]) -> List[str]:
    """Return every feature tag whose keyword(s) appear in the title."""
    if not title:
        return []

    lower_title = title.lower()
    features = []

    for tag, keywords in FEATURE_KEYWORDS:
        if isinstance(keywords, tuple):
            if all(word in lower_title for word in keywords):
                features.append(tag)
        elif keywords in lower_title:
            features.append(tag)

    return features


def _to_number(text: str) -> float:
    # Titles like "vol. gel" capture a lone "." as the number
    try:
        return float(text)
    except ValueError:
        return 0.0


def compute_economics(
    weight_match: Optional[re.Match],
    pack_match: Optional[re.Match],
    price_value: Optional[float],
) -> Attributes:
    """
    Standardize the detected weight and compute the price per 100 units.

    Args:
        weight_match: Result of extract_weight
        pack_match: Result of extract_pack_size
        price_value: Parsed package price, None when unknown

    Returns:
        Attributes with weights in grams or milliliters and the unit price.
    """
    individual_weight = 0.0
    total_weight = 0.0
    weight_unit = ""
    pack_size = int(pack_match.group(1)) if pack_match else None

    if weight_match:
        raw_unit = weight_match.group(2).lower()
        weight_unit, multiplier = UNIT_CONVERSIONS[raw_unit]
        individual_weight = _to_number(weight_match.group(1)) * multiplier

        total_weight = individual_weight
        if pack_size is not None:
            total_weight = individual_weight * pack_size

    unit_price = 0.0
    unit_price_formatted = None

    if total_weight > 0 and price_value is not None:
        unit_price = (price_value / total_weight) * 100
        per = "100ml" if weight_unit == "ml" else "100g"
        unit_price_formatted = f"{format_price(unit_price)}/{per}"

    return Attributes(
        weight=weight_match.group(0) if weight_match else None,
        individual_weight=individual_weight,
        total_weight=total_weight,
        weight_unit=weight_unit,
        pack_size=pack_size,
        price_value=price_value or 0,
        unit_price=unit_price,
        unit_price_formatted=unit_price_formatted,
    )


def _is_volume(unit: str) -> bool:
    return any(u in unit for u in VOLUME_UNITS)


def compare_sizes(weight_match: Optional[re.Match], search_size: Optional[str]) -> bool:
    """
    Check whether a product's size matches the size from the search query.

    Values must be within 0.1 of each other and both be volumes or both be
    weights, so "2L" never matches "2kg".
    """
    if not weight_match or not search_size:
        return False

    try:
        product_size = weight_match.group(0).lower()
        search_size = search_size.lower()

        search_value = float(re.search(r"[\d.]+", search_size).group())
        product_value = float(re.search(r"[\d.]+", product_size).group())

        search_unit = re.sub(r"[\d.\s]+", "", search_size, count=1).strip()
        product_unit = re.sub(r"[\d.\s]+", "", product_size, count=1).strip()

        compatible_units = _is_volume(search_unit) == _is_volume(product_unit)

        return compatible_units and abs(search_value - product_value) < SIZE_TOLERANCE
    except (AttributeError, ValueError) as e:
        logger.error(f"Error comparing sizes '{search_size}': {e}")
        return False

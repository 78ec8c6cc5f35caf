"""
Result categorization for Where-to-Buy
Deduplicate listings, enrich them with attributes and split them into exact
matches and alternatives, each ranked into price tiers.
"""

import logging
from functools import cmp_to_key
from typing import Iterable, List, Optional, Sequence

from where_to_buy.models.record import (
    MATCH_ALTERNATIVE,
    MATCH_EXACT,
    CategorizedRecord,
    CategorizedResults,
    RawRecord,
    SearchContext,
)
from where_to_buy.utils.attributes import (
    compare_sizes,
    compute_economics,
    extract_features,
    extract_pack_size,
    extract_weight,
)
from where_to_buy.utils.brands import check_brand_match, detect_brands
from where_to_buy.utils.helpers import simplify_title
from where_to_buy.utils.price import parse_price, price_sort_key
from where_to_buy.utils.validators import is_valid_record

logger = logging.getLogger(__name__)


def build_search_context(query: str) -> SearchContext:
    """Derive brand candidates and the requested size from a query."""
    size_match = extract_weight(query)
    return SearchContext(
        query=query,
        potential_brands=detect_brands(query),
        search_size=size_match.group(0).lower() if size_match else None,
    )


def remove_duplicates(records: Iterable[RawRecord]) -> List[RawRecord]:
    """
    Drop repeated listings, keeping the first occurrence.

    Two records are duplicates when their lowercased titles and raw price
    strings are identical; "₹499" and "₹499.00" are kept apart.
    """
    seen = set()
    unique = []

    for record in records:
        key = f"{record.title.lower()}_{record.price}"
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)

    return unique


def _compare_by_price(a: CategorizedRecord, b: CategorizedRecord) -> int:
    a_unit = a.attributes.unit_price
    b_unit = b.attributes.unit_price

    if a_unit > 0 and b_unit > 0:
        return (a_unit > b_unit) - (a_unit < b_unit)
    if a_unit > 0:
        return -1
    if b_unit > 0:
        return 1

    a_key = price_sort_key(parse_price(a.record.price))
    b_key = price_sort_key(parse_price(b.record.price))
    return (a_key > b_key) - (a_key < b_key)


def categorize_by_price(items: Sequence[CategorizedRecord]) -> List[str]:
    """
    Rank items by effective price and assign a tier to each one.

    Returns:
        Tiers aligned with the input order (the input is not reordered).
    """
    count = len(items)
    if count == 0:
        return []

    order = sorted(
        range(count),
        key=cmp_to_key(lambda i, j: _compare_by_price(items[i], items[j])),
    )

    categories = ["medium"] * count
    categories[order[0]] = "cheapest"
    if count > 1:
        categories[order[-1]] = "expensive"

    return categories


def _categorize_record(
    record: RawRecord,
    potential_brands: Sequence[str],
    search_size: Optional[str],
) -> CategorizedRecord:
    title = record.title.lower()

    brand_match = check_brand_match(title, potential_brands)
    logger.debug(f"Title: {title} | Brand match: {brand_match}")

    weight_match = extract_weight(title)
    pack_match = extract_pack_size(title)

    attributes = compute_economics(weight_match, pack_match, parse_price(record.price))
    attributes.features = extract_features(title)

    is_exact = brand_match
    if is_exact and search_size:
        # A size was requested; products without a detectable size cannot qualify
        is_exact = weight_match is not None and compare_sizes(weight_match, search_size)
        logger.debug(f"Size comparison for {title}: {is_exact}")

    return CategorizedRecord(
        record=record,
        attributes=attributes,
        weight_info=weight_match.group(0) if weight_match else None,
        pack_info=pack_match.group(0) if pack_match else None,
        display_title=simplify_title(record.title),
        match_class=MATCH_EXACT if is_exact else MATCH_ALTERNATIVE,
    )


def categorize_results(
    records: Iterable[RawRecord],
    potential_brands: Sequence[str],
    search_size: Optional[str] = None,
) -> CategorizedResults:
    """
    Split records into exact matches and alternatives with price tiers.

    Args:
        records: Validated, deduplicated listings
        potential_brands: Brand candidates from detect_brands
        search_size: Size text from the query, if any

    Returns:
        CategorizedResults with both buckets in input order
    """
    results = CategorizedResults()

    for record in records:
        if not is_valid_record(record):
            logger.debug(f"Skipping invalid record: {record.title!r} ({record.link!r})")
            continue

        item = _categorize_record(record, potential_brands, search_size)
        if item.match_class == MATCH_EXACT:
            results.exact_matches.append(item)
        else:
            results.alternatives.append(item)

    for bucket in (results.exact_matches, results.alternatives):
        for item, category in zip(bucket, categorize_by_price(bucket)):
            item.price_category = category

    return results

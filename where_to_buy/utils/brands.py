"""
Brand detection and matching for Where-to-Buy
"""

import logging
from typing import List, Sequence

logger = logging.getLogger(__name__)

# Words that are never treated as brand candidates
GENERIC_WORDS = frozenset({
    # Units and measurements
    'liter', 'litre', 'ml', 'kg', 'gram', 'gm', 'oz', 'inch', 'cm', 'mm',
    # Product types
    'liquid', 'soap', 'gel', 'powder', 'cream', 'oil', 'lotion', 'spray',
    # Descriptors
    'pack', 'set', 'box', 'case', 'bundle', 'refill', 'new', 'fresh',
    # Sizes
    'small', 'large', 'medium', 'mini', 'big', 'giant', 'tiny',
    # Colors
    'red', 'blue', 'green', 'black', 'white', 'yellow', 'pink',
    # Filler
    'with', 'and', 'for', 'the', 'best', 'premium', 'quality', 'value',
    # Containers and product forms
    'dishwash', 'bathing', 'bar', 'bottle', 'container', 'tube', 'jar',
})

# Brands written anywhere in this prefix of the title count as a match
BRAND_PREFIX_WINDOW = 20


def _is_title_case(word: str) -> bool:
    return len(word) > 1 and word[0].isupper() and word[1].islower()


def detect_brands(query: str) -> List[str]:
    """
    Guess which words of a search query are brand names.

    Brands tend to lead the query or be capitalized, so the first long word
    and every Title-Case word are candidates. When neither yields anything,
    all non-generic words are used.

    Args:
        query: The raw search query

    Returns:
        Lowercased brand candidates in priority order
    """
    if not query:
        return []

    words = [w for w in query.lower().split() if len(w) > 2]
    brands: List[str] = []

    if words and words[0] not in GENERIC_WORDS:
        brands.append(words[0])

    for word in query.split():
        normalized = word.lower()
        if not _is_title_case(word) or normalized in GENERIC_WORDS:
            continue
        if normalized not in brands:
            brands.append(normalized)

    if not brands:
        brands = [w for w in words if w not in GENERIC_WORDS]

    return brands


def check_brand_match(title: str, potential_brands: Sequence[str]) -> bool:
    """
    Check whether a product title refers to one of the candidate brands.

    Matching is deliberately loose: the first title word, the start of the
    title and finally every title word are tried in turn.
    """
    if not title or not potential_brands:
        return False

    title = title.lower()
    title_words = title.split()
    if not title_words:
        return False

    first_word = title_words[0]
    if any(
        first_word == brand or brand in first_word or first_word in brand
        for brand in potential_brands
    ):
        return True

    if any(
        brand in title and title.index(brand) < BRAND_PREFIX_WINDOW
        for brand in potential_brands
    ):
        return True

    for brand in potential_brands:
        if any(word == brand or brand in word or word in brand for word in title_words):
            return True

    return False

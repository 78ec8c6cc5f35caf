"""
Helper utilities for Where-to-Buy
"""

import re

# Phrases stripped from titles before display
MARKETING_PHRASES = (
    "best quality",
    "premium quality",
    "high quality",
    "top quality",
    "best selling",
    "new arrival",
    "special offer",
    "limited time",
    "exclusive",
    "authentic",
)

MAX_TITLE_LENGTH = 60


def clean_text(text: str) -> str:
    """
    Clean and normalize text content.

    Args:
        text: The text to clean.

    Returns:
        Text with runs of whitespace collapsed to single spaces.
    """
    if not text:
        return ""

    return " ".join(text.split())


def simplify_title(title: str) -> str:
    """
    Shorten a product title for display.

    Marketing phrases are removed (case-insensitive) and titles longer than
    60 characters are cut to 57 characters followed by "...".
    """
    if not title:
        return ""

    simplified = title
    for phrase in MARKETING_PHRASES:
        simplified = re.sub(re.escape(phrase), "", simplified, flags=re.IGNORECASE)

    simplified = clean_text(simplified)

    if len(simplified) > MAX_TITLE_LENGTH:
        simplified = simplified[:MAX_TITLE_LENGTH - 3] + "..."

    return simplified

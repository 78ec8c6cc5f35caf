"""
Models module for Where-to-Buy
"""
from where_to_buy.models.record import (
    Attributes,
    CategorizedRecord,
    CategorizedResults,
    RawRecord,
    SearchContext,
)

__all__ = [
    'RawRecord',
    'Attributes',
    'CategorizedRecord',
    'CategorizedResults',
    'SearchContext',
]

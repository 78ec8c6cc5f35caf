"""
Services module for Where-to-Buy
"""

from where_to_buy.services.search_service import SearchService, get_search_service

__all__ = ["SearchService", "get_search_service"]

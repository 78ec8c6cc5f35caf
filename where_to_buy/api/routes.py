"""
API Routes for Where-to-Buy
- GET /search - Search every platform and split results into exact matches and alternatives
- GET /supported-sites - Configured platforms
- GET|POST /admin/cache/clear - Drop cached search responses
"""

from flask import jsonify, request
from where_to_buy.api import api_bp
from where_to_buy.services.search_service import get_search_service
from where_to_buy.utils.auth import require_api_key
from where_to_buy.utils.rate_limiter import rate_limit
from where_to_buy.utils.cache import get_cache
import logging

logger = logging.getLogger(__name__)


@api_bp.route("/search", methods=["GET"])
@require_api_key
@rate_limit
def search_products():
    """
    Search for a product across all enabled e-commerce platforms.

    Query Parameters:
        product (required): Search query (q is accepted as an alias)
        api_key (optional): Client API key

    Returns:
        JSON with exact matches, alternatives and per-platform counts.
    """
    query = (request.args.get("product") or request.args.get("q") or "").strip()

    if not query:
        return (
            jsonify(
                {
                    "success": False,
                    "error": "Bad Request",
                    "message": "Please provide a product query using the product parameter",
                }
            ),
            400,
        )

    # Responses are cached per full request URL
    cache = get_cache()
    cache_key = request.full_path
    cached_result = cache.get(cache_key)

    if cached_result is not None:
        logger.info(f"Cache hit for search: {query}")
        return jsonify({"success": True, "data": cached_result, "cached": True}), 200

    try:
        logger.info(f"Searching for: {query}")
        result = get_search_service().search(query)
        cache.set(cache_key, result)

        logger.info(
            f"Search for '{query}': {len(result['exactMatches'])} exact matches, "
            f"{len(result['alternatives'])} alternatives"
        )
        return jsonify({"success": True, "data": result, "cached": False}), 200

    except Exception as e:
        logger.error(f"Search error: {e}")
        return (
            jsonify(
                {
                    "success": False,
                    "error": "Internal Server Error",
                    "message": "Failed to fetch results",
                }
            ),
            500,
        )


@api_bp.route("/supported-sites", methods=["GET"])
def get_supported_sites():
    """
    Get list of configured e-commerce platforms.

    Returns:
        Platform key, display name and whether it is scraped or read from an API.
    """
    sites = get_search_service().get_supported_sites()
    return jsonify({"success": True, "data": sites}), 200


@api_bp.route("/admin/cache/clear", methods=["GET", "POST"])
@require_api_key
def clear_cache():
    """Clear all cached search responses."""
    try:
        cleared = get_cache().clear()
        logger.info(f"Cache cleared: {cleared} entries removed")
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Cache cleared successfully",
                    "data": {"cleared": cleared},
                }
            ),
            200,
        )
    except Exception as e:
        logger.error(f"Cache clear error: {e}")
        return (
            jsonify(
                {
                    "success": False,
                    "error": "Internal Server Error",
                    "message": "Failed to clear cache",
                }
            ),
            500,
        )

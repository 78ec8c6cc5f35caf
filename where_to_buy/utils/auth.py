"""
API key authentication for Where-to-Buy
"""
import logging
from functools import wraps
from flask import current_app, jsonify, request

logger = logging.getLogger(__name__)


def require_api_key(func):
    """
    Decorator that checks the api_key query parameter.

    Only enforced when REQUIRE_API_KEY is enabled. A missing key gives 401,
    a key not listed in VALID_API_KEYS gives 403.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not current_app.config.get('REQUIRE_API_KEY'):
            return func(*args, **kwargs)

        api_key = request.args.get('api_key')
        if not api_key:
            return jsonify({
                'success': False,
                'error': 'Unauthorized',
                'message': 'Please provide an API key via the api_key query parameter'
            }), 401

        if api_key not in current_app.config.get('VALID_API_KEYS', []):
            logger.warning(f"Rejected request with invalid API key from {request.remote_addr}")
            return jsonify({
                'success': False,
                'error': 'Forbidden',
                'message': 'The provided API key is not valid'
            }), 403

        return func(*args, **kwargs)

    return wrapper

"""
Error handlers for Where-to-Buy
"""
from flask import jsonify


def _error_response(status_code: int, error: str, message: str):
    return jsonify({
        'success': False,
        'error': error,
        'message': message
    }), status_code


def register_error_handlers(app):
    """Register error handlers with the Flask app."""

    @app.errorhandler(400)
    def bad_request(error):
        message = str(error.description) if hasattr(error, 'description') else 'Invalid request'
        return _error_response(400, 'Bad Request', message)

    @app.errorhandler(401)
    def unauthorized(error):
        return _error_response(401, 'Unauthorized', 'API key is required')

    @app.errorhandler(403)
    def forbidden(error):
        return _error_response(403, 'Forbidden', 'The provided API key is not valid')

    @app.errorhandler(404)
    def not_found(error):
        return _error_response(404, 'Not Found', 'The requested resource was not found')

    @app.errorhandler(405)
    def method_not_allowed(error):
        return _error_response(405, 'Method Not Allowed', 'The method is not allowed for this endpoint')

    @app.errorhandler(429)
    def rate_limit_exceeded(error):
        return _error_response(429, 'Rate Limit Exceeded', 'Too many requests. Please try again later.')

    @app.errorhandler(500)
    def internal_server_error(error):
        return _error_response(500, 'Internal Server Error', 'An unexpected error occurred')

    @app.errorhandler(503)
    def service_unavailable(error):
        return _error_response(503, 'Service Unavailable', 'The service is temporarily unavailable')


class SourceError(Exception):
    """Base exception for source adapter errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class SourceNotConfiguredError(SourceError):
    """Raised when a source is missing the credentials it needs."""

    def __init__(self, platform: str):
        message = f"{platform} API credentials not configured"
        super().__init__(message, status_code=503)


class SourceFailedError(SourceError):
    """Raised when a source cannot produce search results."""

    def __init__(self, platform: str, reason: str = None):
        message = f"Search failed for {platform}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, status_code=502)

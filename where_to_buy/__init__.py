"""
Where-to-Buy - Flask Application Factory
Product search across Indian e-commerce platforms with brand/size matching
and unit price comparison.
"""

import logging
from datetime import datetime, timezone
from flask import Flask
from where_to_buy.config import Config

__version__ = "0.1.0"


def configure_logging(app: Flask) -> None:
    """Configure application logging."""
    log_level = logging.DEBUG if app.debug else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    app.logger.setLevel(log_level)

    # Reduce noise from third-party libraries
    for name in ("urllib3", "requests", "selenium", "WDM"):
        logging.getLogger(name).setLevel(logging.WARNING)


def create_app(config_class=Config):
    """Application factory pattern for creating Flask app instances."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)

    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = '*'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
        return response

    # Register blueprints
    from where_to_buy.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api/v1")

    # Register error handlers
    from where_to_buy.errors import register_error_handlers

    register_error_handlers(app)

    @app.route("/health")
    def health_check():
        from where_to_buy.utils.cache import get_cache

        return {
            "status": "healthy",
            "service": "where-to-buy",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "cache": get_cache().stats(),
        }

    @app.route("/")
    def index():
        return {
            "service": "Where-to-Buy API",
            "version": __version__,
            "description": "Compare product prices across Indian e-commerce platforms",
            "endpoints": {
                "health": "/health",
                "search": "/api/v1/search?product={query}",
                "supported_sites": "/api/v1/supported-sites",
                "clear_cache": "/api/v1/admin/cache/clear",
            },
        }

    app.logger.info("Where-to-Buy initialized successfully")
    return app

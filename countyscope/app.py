"""
CountyScope Flask Application.

Main entry point for the web service. Initializes:
- Logging
- CORS for the API
- API routes
- Service factories (overridable for testing)

Usage:
    python -m countyscope.app

Or with gunicorn:
    gunicorn 'countyscope.app:create_app()'
"""

import logging
import os
from typing import Callable, Optional

from flask import Flask
from flask_cors import CORS

from countyscope.config import config
from countyscope.api import industries_bp, naics_bp, metrics_bp
from countyscope.services import EmploymentService, NaicsTaxonomyService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    employment_service_factory: Optional[Callable[..., EmploymentService]] = None,
    taxonomy_service_factory: Optional[Callable[[], NaicsTaxonomyService]] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        employment_service_factory: Callable taking `api_key=` and returning
                                    an EmploymentService. Override for testing.
        taxonomy_service_factory: Callable returning a NaicsTaxonomyService.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key
    app.config['EMPLOYMENT_SERVICE_FACTORY'] = employment_service_factory or EmploymentService
    app.config['TAXONOMY_SERVICE_FACTORY'] = taxonomy_service_factory or NaicsTaxonomyService

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Register API blueprints
    app.register_blueprint(industries_bp)
    app.register_blueprint(naics_bp)
    app.register_blueprint(metrics_bp)

    if not config.census.has_api_key:
        logger.warning('CENSUS_API_KEY not set - requests must pass ?key= or use anonymous limits')
    if not config.hud.is_configured:
        logger.warning('HUD_API_TOKEN not set - ZIP lookups will use the static fallback table')

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok'}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    port = int(os.environ.get('PORT', 5000))

    logger.info(f'Starting CountyScope on http://localhost:{port}')
    logger.info(f'Try: http://localhost:{port}/api/industries?zip=02459')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()

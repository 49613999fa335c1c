"""
Status API endpoints.

Provides endpoints for:
- GET /api/metrics/status - Cache statistics and configuration flags
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, jsonify

from countyscope.cache import taxonomy_cache
from countyscope.config import config

logger = logging.getLogger(__name__)

metrics_bp = Blueprint('metrics', __name__, url_prefix='/api/metrics')


@metrics_bp.route('/status', methods=['GET'])
def get_system_status():
    """
    Get service status information.

    Returns:
    - Taxonomy cache statistics
    - Which upstream credentials are configured (never the values)
    - Dataset settings
    """
    start_time = time.perf_counter()

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'status': 'ok',
        'cache': taxonomy_cache.stats,
        'config': {
            'census_key_configured': config.census.has_api_key,
            'hud_token_configured': config.hud.is_configured,
            'cbp_year': config.census.year,
            'naics_year': config.naics.year,
            'top_n': config.results.top_n,
        },
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })

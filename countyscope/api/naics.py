"""
NAICS taxonomy API endpoints.

Provides endpoints for:
- GET /api/naics/sectors - 2-digit sector codes and titles
- GET /api/naics/<code> - Title for a single code
- GET /api/naics/<code>/children - Direct child codes
"""

import logging
import re
import time

from flask import Blueprint, current_app, jsonify

logger = logging.getLogger(__name__)

naics_bp = Blueprint('naics', __name__, url_prefix='/api/naics')

_NAICS_RE = re.compile(r'^\d{2,6}$')


def _taxonomy():
    return current_app.config['TAXONOMY_SERVICE_FACTORY']()


@naics_bp.route('/sectors', methods=['GET'])
def list_sectors():
    """List 2-digit NAICS sectors."""
    start_time = time.perf_counter()

    sectors = _taxonomy().get_two_digit_codes()

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'sectors': [{'code': code, 'title': title} for code, title in sorted(sectors.items())],
        'count': len(sectors),
        'query_time_ms': round(query_time_ms, 2),
    })


@naics_bp.route('/<code>', methods=['GET'])
def describe_code(code: str):
    """Title for a NAICS code ('NAICS <code>' when unknown)."""
    if not _NAICS_RE.match(code):
        return jsonify({'error': 'Invalid NAICS code'}), 400

    return jsonify({
        'code': code,
        'title': _taxonomy().get_code_description(code),
        'level': len(code),
    })


@naics_bp.route('/<code>/children', methods=['GET'])
def child_codes(code: str):
    """
    Direct children of a NAICS code.

    Results are cached for the life of the process, so repeated
    drill-downs on the same code make no upstream requests.
    """
    start_time = time.perf_counter()

    if not _NAICS_RE.match(code):
        return jsonify({'error': 'Invalid NAICS code'}), 400

    children = _taxonomy().get_child_codes(code)

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'parent': code,
        'children': [c.to_dict() for c in children],
        'count': len(children),
        'query_time_ms': round(query_time_ms, 2),
    })

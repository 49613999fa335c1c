"""
Industry data API endpoints.

Provides endpoints for:
- GET /api/industries - Top industries for the county containing a ZIP
- GET /api/industries/<state>/<county>/<naics>/children - Drill down one level
"""

import logging
import re
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from countyscope.analytics import rank_industries, summarize
from countyscope.config import config
from countyscope.errors import ApiError
from countyscope.models import MetricType

logger = logging.getLogger(__name__)

industries_bp = Blueprint('industries', __name__, url_prefix='/api/industries')

_ZIP_RE = re.compile(r'^\d{5}$')
_STATE_RE = re.compile(r'^\d{2}$')
_COUNTY_RE = re.compile(r'^\d{3}$')
_NAICS_RE = re.compile(r'^\d{2,5}$')


def _api_key():
    """Opaque Census key from the request, if the caller supplied one."""
    return request.args.get('key') or request.headers.get('X-Census-Key') or None


def _employment_service():
    factory = current_app.config['EMPLOYMENT_SERVICE_FACTORY']
    return factory(api_key=_api_key())


def _parse_limit(default: int) -> int:
    try:
        limit = int(request.args.get('limit', default))
    except (TypeError, ValueError):
        limit = default
    return max(0, min(limit, config.results.max_limit))


@industries_bp.route('', methods=['GET'])
def top_industries():
    """
    Top industries for the county containing a ZIP code.

    Query parameters:
    - zip: 5-digit ZIP code (required)
    - metric: employees|establishments|payroll (default employees)
    - limit: int, max industries to return (default TOP_N, 0 = all)
    - key: Census API key (optional, overrides the configured key)

    Percentages are relative to the county's all-industry totals.
    """
    start_time = time.perf_counter()

    zip_code = (request.args.get('zip') or '').strip()
    if not _ZIP_RE.match(zip_code):
        return jsonify({'error': 'zip must be a 5-digit ZIP code', 'code': 'invalid_zip'}), 400

    metric = MetricType.parse(request.args.get('metric'))
    limit = _parse_limit(config.results.top_n)

    try:
        report = _employment_service().fetch_employment_for_zip(zip_code)
    except ApiError as e:
        status = 404 if e.code == 'county_not_found' else 502
        logger.warning(f'Industry query for ZIP {zip_code} failed: {e.message}')
        return jsonify({'error': e.message, 'code': e.code}), status

    ranked = rank_industries(report.industries, metric, limit=limit)
    summary = summarize(report.industries, metric, report.totals, top_n=limit or None)

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'zip_code': report.zip_code,
        'county': report.county.to_dict(),
        'county_totals': report.totals.to_dict(),
        'metric': metric.value,
        'industries': [r.to_dict(metric) for r in ranked],
        'count': len(ranked),
        'total_industries': len(report.industries),
        'summary': summary.to_dict(),
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })


@industries_bp.route('/<state>/<county>/<naics>/children', methods=['GET'])
def sub_industries(state: str, county: str, naics: str):
    """
    Drill down one level below a NAICS code in a county.

    Query parameters:
    - metric: employees|establishments|payroll (default employees)
    - limit: int, max sub-industries to return (default 0 = all)
    - key: Census API key (optional)

    Returns an empty list for leaf codes or when upstream has no data.
    """
    start_time = time.perf_counter()

    if not (_STATE_RE.match(state) and _COUNTY_RE.match(county)):
        return jsonify({'error': 'state must be 2 digits and county 3 digits'}), 400
    if not _NAICS_RE.match(naics):
        return jsonify({'error': 'naics must be a 2-5 digit NAICS code'}), 400

    metric = MetricType.parse(request.args.get('metric'))
    limit = _parse_limit(0)

    service = _employment_service()
    totals = service.census_client.fetch_county_totals(state, county)
    children = service.fetch_sub_industries(state, county, naics, totals)
    ranked = rank_industries(children, metric, limit=limit)

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'parent': {
            'naics_code': naics,
            'title': service.taxonomy.get_code_description(naics),
        },
        'state': state,
        'county': county,
        'metric': metric.value,
        'sub_industries': [r.to_dict(metric) for r in ranked],
        'count': len(ranked),
        'county_totals': totals.to_dict(),
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })

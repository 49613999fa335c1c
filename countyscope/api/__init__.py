"""
API module for CountyScope.

Provides REST endpoints for:
- Top industries by ZIP code, and drill-down by NAICS code
- NAICS taxonomy lookups
- Service status
"""

from countyscope.api.industries import industries_bp
from countyscope.api.naics import naics_bp
from countyscope.api.metrics import metrics_bp

__all__ = ['industries_bp', 'naics_bp', 'metrics_bp']

"""
Analytics module for CountyScope.

Ranking, share-of-county and concentration figures for a county's
industry mix, computed with NumPy.
"""

from countyscope.analytics.industry_mix import (
    MixSummary,
    rank_industries,
    metric_total,
    summarize,
    format_number,
    format_payroll,
    format_metric_value,
)

__all__ = [
    'MixSummary',
    'rank_industries',
    'metric_total',
    'summarize',
    'format_number',
    'format_payroll',
    'format_metric_value',
]

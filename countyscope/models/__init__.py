"""
Domain models for CountyScope.

Plain dataclasses; nothing here is persisted:
1. County geography and all-industry totals
2. Industry records from County Business Patterns
3. NAICS taxonomy entries
"""

from countyscope.models.industry import IndustryRecord, MetricType, EmploymentReport
from countyscope.models.county import CountyInfo, CountyTotals
from countyscope.models.naics import NaicsCode

__all__ = [
    'CountyInfo',
    'CountyTotals',
    'EmploymentReport',
    'IndustryRecord',
    'MetricType',
    'NaicsCode',
]

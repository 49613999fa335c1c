"""
Orchestration services.

Combine the upstream clients with fallbacks and caching into the
operations the HTTP layer exposes.
"""

from countyscope.services.employment import EmploymentService
from countyscope.services.naics_taxonomy import NaicsTaxonomyService
from countyscope.services.zip_lookup import ZipCountyResolver, fallback_county

__all__ = ['EmploymentService', 'NaicsTaxonomyService', 'ZipCountyResolver', 'fallback_county']

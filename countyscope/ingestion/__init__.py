"""
Upstream API clients for CountyScope.

Handles the three third-party HTTP APIs: HUD's ZIP crosswalk, the
Census CBP statistics dataset, and the Census NAICS search handler.
"""

from countyscope.ingestion.census_client import CensusClient, SECTOR_CODES
from countyscope.ingestion.hud_client import HudClient, normalize_zip
from countyscope.ingestion.naics_client import NaicsClient

__all__ = ['CensusClient', 'HudClient', 'NaicsClient', 'SECTOR_CODES', 'normalize_zip']

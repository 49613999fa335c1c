"""
ZIP code -> county resolution.

Tries the HUD crosswalk first. If that fails for any reason (no token,
network error, no match) a small static table of well-known ZIP codes
is consulted instead.
"""

import logging
from typing import Optional

from countyscope.ingestion.hud_client import HudClient, normalize_zip
from countyscope.models import CountyInfo

logger = logging.getLogger(__name__)

_MIDDLESEX_MA = CountyInfo('25', '017', 'Middlesex County, MA')
_SUFFOLK_MA = CountyInfo('25', '025', 'Suffolk County, MA')
_NEW_YORK_NY = CountyInfo('36', '061', 'New York County, NY')
_LOS_ANGELES_CA = CountyInfo('06', '037', 'Los Angeles County, CA')
_SAN_FRANCISCO_CA = CountyInfo('06', '075', 'San Francisco County, CA')
_COOK_IL = CountyInfo('17', '031', 'Cook County, IL')
_MIAMI_DADE_FL = CountyInfo('12', '086', 'Miami-Dade County, FL')
_KING_WA = CountyInfo('53', '033', 'King County, WA')

FALLBACK_ZIP_COUNTIES = {
    # Massachusetts
    '02459': _MIDDLESEX_MA,  # Newton
    '02138': _MIDDLESEX_MA,  # Cambridge
    '02115': _SUFFOLK_MA,    # Boston
    '02101': _SUFFOLK_MA,
    '02116': _SUFFOLK_MA,
    '02134': _SUFFOLK_MA,    # Allston

    # New York
    '10001': _NEW_YORK_NY,   # Manhattan
    '10002': _NEW_YORK_NY,
    '10003': _NEW_YORK_NY,
    '11201': CountyInfo('36', '047', 'Kings County, NY'),  # Brooklyn

    # California
    '90210': _LOS_ANGELES_CA,  # Beverly Hills
    '90211': _LOS_ANGELES_CA,
    '94102': _SAN_FRANCISCO_CA,
    '94103': _SAN_FRANCISCO_CA,

    # Illinois
    '60601': _COOK_IL,  # Chicago
    '60602': _COOK_IL,
    '60603': _COOK_IL,

    # Texas
    '77001': CountyInfo('48', '201', 'Harris County, TX'),  # Houston
    '75201': CountyInfo('48', '113', 'Dallas County, TX'),  # Dallas

    # Florida
    '33101': _MIAMI_DADE_FL,  # Miami
    '33102': _MIAMI_DADE_FL,

    # Washington
    '98101': _KING_WA,  # Seattle
    '98102': _KING_WA,

    # Maryland
    '20810': CountyInfo('24', '031', 'Montgomery County, MD'),  # Bethesda
}


def fallback_county(zip_code: str) -> Optional[CountyInfo]:
    """Look up a ZIP in the static table only."""
    return FALLBACK_ZIP_COUNTIES.get(normalize_zip(zip_code))


class ZipCountyResolver:
    """Resolve ZIP codes to counties: HUD first, then the static table."""

    def __init__(self, hud_client: Optional[HudClient] = None):
        self.hud_client = hud_client or HudClient.from_config()

    def resolve(self, zip_code: str) -> Optional[CountyInfo]:
        """
        Find the county containing `zip_code`.

        Returns None if neither HUD nor the static table knows the ZIP.
        """
        z = normalize_zip(zip_code)

        try:
            return self.hud_client.lookup_county(z)
        except Exception as e:
            logger.error(f'HUD API method failed for ZIP {z}: {e}')

        logger.info(f'Using fallback mapping for ZIP {z}')
        return fallback_county(z)

"""
HUD USPS ZIP crosswalk API client.

Resolves a ZIP code to the county that contains it. Queries with
type=2 (ZIP -> county) and reads the first result.

Response shape (abridged):
    {
      "data": {
        "results": [
          {"geoid": "25017", "county_name": "MIDDLESEX", "state_name": "MA", ...}
        ]
      }
    }

geoid is the 5-digit county FIPS: first 2 digits are the state,
last 3 are the county.
"""

import logging
import re
from typing import Optional

import requests

from countyscope.config import config
from countyscope.errors import HudLookupError
from countyscope.models import CountyInfo

logger = logging.getLogger(__name__)


def normalize_zip(raw: Optional[str]) -> str:
    """
    Normalize user input to a 5-digit ZIP.

    Strips non-digits, left-pads with zeros, keeps the first 5 digits:
    '2459' -> '02459', '02459-1234' -> '02459'.
    """
    digits = re.sub(r'\D', '', raw or '')
    return digits.zfill(5)[:5]


class HudClient:
    """
    Client for the HUD USPS crosswalk API.

    Requires a bearer token; without one every lookup raises HudLookupError
    before any request is made.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = 'https://www.huduser.gov/hudapi/public/usps',
        timeout: int = 15,
    ):
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self.session = requests.Session()

        if not token:
            logger.debug('HUD client has no API token - ZIP lookups will fall back to static data')

    @classmethod
    def from_config(cls) -> 'HudClient':
        """Create client from application configuration."""
        return cls(
            token=config.hud.token,
            base_url=config.hud.base_url,
            timeout=config.hud.timeout_seconds,
        )

    def lookup_county(self, zip_code: str) -> CountyInfo:
        """
        Look up the county for a ZIP code.

        Raises:
            HudLookupError if HUD rejects the query, has no match, or
            returns an unusable geoid.
            requests.RequestException on network errors.
        """
        z = normalize_zip(zip_code)
        logger.debug(f'Looking up county for ZIP {z} using HUD API')

        if not self.token:
            raise HudLookupError('HUD API token not configured')

        response = self.session.get(
            self.base_url,
            params={'type': 2, 'query': z},
            headers={'Authorization': f'Bearer {self.token}'},
            timeout=self.timeout,
        )
        body = response.text or ''
        logger.debug(f'HUD response status: {response.status_code}')

        if not response.ok:
            raise HudLookupError(f'HUD API query failed: {response.status_code} {body[:200]}')

        try:
            data = response.json()
        except ValueError as e:
            raise HudLookupError(f'HUD API returned invalid JSON: {e}') from e

        payload = data.get('data') if isinstance(data, dict) else None
        results = payload.get('results') if isinstance(payload, dict) else None
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            logger.info(f'No results found for ZIP {z} in HUD API')
            raise HudLookupError(f'ZIP code {z} not found in HUD database.')

        result = results[0]
        geoid = str(result.get('geoid') or '')
        if len(geoid) != 5:
            logger.info(f'Invalid or missing geoid in HUD response: geoid={geoid!r}')
            raise HudLookupError(f'Could not determine county FIPS codes for ZIP {z}')

        county = CountyInfo(
            state=geoid[:2],
            county=geoid[2:5],
            name=f"{result.get('county_name')}, {result.get('state_name')}",
        )
        logger.info(f'Found county via HUD API: {county.name} ({county.state}:{county.county})')
        return county

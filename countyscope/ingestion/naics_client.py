"""
Census NAICS search handler client.

The handler behind census.gov's NAICS search page. It takes a year and
a free-text input and returns matching index entries:

    {"result": {"0": {"naics22": "621", "title": "Ambulatory Health Care Services", ...},
                "1": {...}}}

`result` is sometimes an array rather than an object keyed by index.
Entries use `naics22` or `code` for the code and `title`,
`index_desc` or `description` for the text. Passing chart=chart
returns the sector chart instead of search hits.
"""

import logging
from typing import Any, Dict, List

import requests

from countyscope.config import config

logger = logging.getLogger(__name__)


def extract_records(data: Any) -> List[Dict[str, Any]]:
    """Pull record dicts out of a handler response, whatever shape `result` takes."""
    if not isinstance(data, dict):
        return []
    result = data.get('result') or {}
    if isinstance(result, list):
        items = result
    elif isinstance(result, dict):
        items = list(result.values())
    else:
        items = []
    return [item for item in items if isinstance(item, dict)]


def record_code(record: Dict[str, Any], *keys: str) -> str:
    """First non-empty code among `keys`, as a stripped string."""
    for key in keys:
        value = record.get(key)
        if value not in (None, ''):
            return str(value).strip()
    return ''


def record_title(record: Dict[str, Any]) -> str:
    """Best available title text for a record."""
    return record_code(record, 'title', 'index_desc', 'description')


class NaicsClient:
    """
    Transport for the NAICS search handler.

    Raises on any transport, HTTP or decode failure; fallback policy
    belongs to the taxonomy service.
    """

    def __init__(
        self,
        base_url: str = 'https://www.census.gov/naics/resources/model/dataHandler.php',
        year: str = '2022',
        user_agent: str = 'naics-collector/1.0',
        timeout: int = 15,
    ):
        self.base_url = base_url
        self.year = year
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'User-Agent': user_agent,
        })

    @classmethod
    def from_config(cls) -> 'NaicsClient':
        """Create client from application configuration."""
        return cls(
            base_url=config.naics.base_url,
            year=config.naics.year,
            user_agent=config.naics.user_agent,
            timeout=config.naics.timeout_seconds,
        )

    def search(self, term: str, chart: bool = False, year: str = None) -> List[Dict[str, Any]]:
        """
        Run one search against the handler.

        Returns:
            List of record dicts (possibly empty)

        Raises:
            requests.RequestException on network/HTTP errors
            ValueError if the body is not JSON
        """
        params = {
            'search': year or self.year,
            'input': term,
        }
        if chart:
            params['chart'] = 'chart'

        logger.debug(f'NAICS search: input={term!r} chart={chart}')

        response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()

        records = extract_records(data)
        logger.debug(f'NAICS search {term!r} returned {len(records)} records')
        return records

"""
Census County Business Patterns (CBP) API client.

Queries county-level employment statistics by NAICS code. The API
returns a JSON array of rows where the first row is the header:

    [["NAME", "NAICS2017_LABEL", "EMP", "ESTAB", "PAYANN", "GEO_ID", "NAICS2017", "state", "county"],
     ["Middlesex County, Massachusetts", "Health care and social assistance",
      "150000", "6000", "9000000", "0500000US25017", "62", "25", "017"]]

Column notes:
- EMP: paid employees for the pay period including March 12
- ESTAB: number of establishments
- PAYANN: annual payroll in $1,000s
- Suppressed cells carry a flag instead of a number (N, D, S)

Every upstream failure here degrades to an empty result; the caller
never sees a transport exception.
"""

import json
import logging
import re
from typing import Optional, List, Iterable

import requests

from countyscope.config import config
from countyscope.models import CountyTotals, IndustryRecord

logger = logging.getLogger(__name__)

# 2-digit NAICS sectors queried for the top-level view
SECTOR_CODES = (
    '11',  # Agriculture, Forestry, Fishing and Hunting
    '21',  # Mining, Quarrying, and Oil and Gas Extraction
    '22',  # Utilities
    '23',  # Construction
    '31',  # Manufacturing (31-33)
    '32',
    '33',
    '42',  # Wholesale Trade
    '44',  # Retail Trade (44-45)
    '45',
    '48',  # Transportation and Warehousing (48-49)
    '49',
    '51',  # Information
    '52',  # Finance and Insurance
    '53',  # Real Estate and Rental and Leasing
    '54',  # Professional, Scientific, and Technical Services
    '55',  # Management of Companies and Enterprises
    '56',  # Administrative and Support and Waste Management
    '61',  # Educational Services
    '62',  # Health Care and Social Assistance
    '71',  # Arts, Entertainment, and Recreation
    '72',  # Accommodation and Food Services
    '81',  # Other Services (except Public Administration)
    '92',  # Public Administration
)

# NAICS code for the all-industries row
ALL_INDUSTRIES_CODE = '00'

SUPPRESSION_FLAGS = {'N', 'D', 'S'}

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def parse_count(value) -> int:
    """
    Parse a CBP count cell.

    Missing values, 'null' and suppression flags become 0. Otherwise
    the leading integer is used ('123abc' -> 123); non-numeric -> 0.
    """
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    text = str(value)
    if not text or text == 'null' or text in SUPPRESSION_FLAGS:
        return 0
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_payroll(value) -> int:
    """Parse a PAYANN cell (thousands of dollars) into dollars."""
    return parse_count(value) * 1000


class CensusClient:
    """
    Client for the CBP dataset of the Census Data API.

    The API key is an opaque credential; when absent it is left out of
    the query string and the API applies its anonymous limits.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        dataset_url: str = 'https://api.census.gov/data/2022/cbp',
        naics_variable: str = 'NAICS2017',
        timeout: int = 30,
    ):
        self.api_key = api_key
        self.dataset_url = dataset_url
        self.naics_variable = naics_variable
        self.timeout = timeout
        self.session = requests.Session()

    @classmethod
    def from_config(cls, api_key: Optional[str] = None) -> 'CensusClient':
        """Create client from application configuration, optionally overriding the key."""
        return cls(
            api_key=api_key or config.census.api_key,
            dataset_url=config.census.dataset_url,
            naics_variable=config.census.naics_variable,
            timeout=config.census.timeout_seconds,
        )

    def _params(self, fields: str, state: str, county: str, naics_code: str) -> dict:
        params = {
            'get': fields,
            'for': f'county:{county}',
            'in': f'state:{state}',
            self.naics_variable: naics_code,
        }
        if self.api_key:
            params['key'] = self.api_key
        return params

    def _get_rows(self, params: dict, what: str) -> List[list]:
        """
        Fetch a CBP query and return its data rows (header dropped).

        Returns [] on HTTP errors, empty bodies, or malformed JSON.
        """
        try:
            response = self.session.get(self.dataset_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f'CBP request failed for {what}: {e}')
            return []

        if not response.ok:
            logger.error(f'Error fetching {what}: {response.status_code}')
            return []

        body = response.text or ''
        if not body.strip():
            # CBP answers 204 / empty body when the county has no such industry
            return []

        try:
            data = json.loads(body)
        except ValueError as e:
            logger.error(f'Error processing {what}: {e}')
            return []

        if not isinstance(data, list) or len(data) < 2:
            return []

        return data[1:]

    def fetch_sector(self, state: str, county: str, naics_code: str) -> List[IndustryRecord]:
        """
        Fetch CBP rows for one NAICS code in one county.

        Only rows with some data (employees, establishments or payroll)
        are returned.
        """
        fields = f'NAME,{self.naics_variable}_LABEL,EMP,ESTAB,PAYANN,GEO_ID'
        params = self._params(fields, state, county, naics_code)
        logger.debug(f'Fetching data for NAICS {naics_code} in {state}:{county}')

        records = []
        for row in self._get_rows(params, f'NAICS {naics_code}'):
            if not isinstance(row, (list, tuple)):
                continue
            row = list(row) + [None] * (6 - len(row))
            record = IndustryRecord(
                industry=row[1] or f'NAICS {naics_code}',
                employees=parse_count(row[2]),
                establishments=parse_count(row[3]),
                payroll=parse_payroll(row[4]),
                naics_code=naics_code,
                location=row[0] or 'Unknown Location',
                geo_id=row[5] or '',
                level=len(naics_code),
            )
            if record.has_data:
                records.append(record)

        return records

    def fetch_county_totals(self, state: str, county: str) -> CountyTotals:
        """Fetch the all-industries row for a county; zeros on any failure."""
        params = self._params('NAME,EMP,ESTAB,PAYANN', state, county, ALL_INDUSTRIES_CODE)
        logger.debug(f'Fetching county totals for county {county}, state {state}')

        rows = self._get_rows(params, 'county totals')
        if not rows or not isinstance(rows[0], (list, tuple)):
            return CountyTotals.empty()

        row = list(rows[0]) + [None] * (4 - len(rows[0]))
        return CountyTotals(
            employees=parse_count(row[1]),
            establishments=parse_count(row[2]),
            payroll=parse_payroll(row[3]),
        )

    def fetch_sectors(
        self,
        state: str,
        county: str,
        codes: Iterable[str] = SECTOR_CODES,
    ) -> List[IndustryRecord]:
        """
        Fan out across NAICS codes for a county.

        Queries run sequentially; a code that fails is logged and
        skipped. Result is sorted by employees, largest first.
        """
        logger.info(f'Fetching employment data for county {county} in state {state}')

        results: List[IndustryRecord] = []
        for code in codes:
            try:
                results.extend(self.fetch_sector(state, county, code))
            except Exception as e:
                logger.error(f'Error fetching NAICS {code}: {e}')

        results = [r for r in results if r.has_data]
        results.sort(key=lambda r: r.employees, reverse=True)

        logger.debug(f'Parsed {len(results)} sector records for {state}:{county}')
        return results

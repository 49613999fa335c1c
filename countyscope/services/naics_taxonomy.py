"""
NAICS taxonomy service - resolves sector lists and parent -> child codes.

The Census search handler has no "children of X" query, so children
are found heuristically: search for a handful of terms derived from
the parent code and keep hits that are exactly one digit longer and
share the parent's prefix.

Fallback chain for the sector list:
1. Chart method: one request for the sector chart
2. Sweep method: search every seed 0-9, a-z and union the 2-digit hits
3. Static list baked into this module

All successful lookups are cached for the life of the process in the
shared taxonomy cache.
"""

import logging
import string
from typing import Dict, List, Optional

import requests

from countyscope.cache import TaxonomyCache, taxonomy_cache
from countyscope.config import config
from countyscope.ingestion.naics_client import NaicsClient, record_code, record_title
from countyscope.models import NaicsCode

logger = logging.getLogger(__name__)

SWEEP_SEEDS = string.digits + string.ascii_lowercase

FALLBACK_SECTORS: Dict[str, str] = {
    '11': 'Agriculture, Forestry, Fishing and Hunting',
    '21': 'Mining, Quarrying, and Oil and Gas Extraction',
    '22': 'Utilities',
    '23': 'Construction',
    '31': 'Manufacturing',
    '32': 'Manufacturing',
    '33': 'Manufacturing',
    '42': 'Wholesale Trade',
    '44': 'Retail Trade',
    '45': 'Retail Trade',
    '48': 'Transportation and Warehousing',
    '49': 'Transportation and Warehousing',
    '51': 'Information',
    '52': 'Finance and Insurance',
    '53': 'Real Estate and Rental and Leasing',
    '54': 'Professional, Scientific, and Technical Services',
    '55': 'Management of Companies and Enterprises',
    '56': 'Administrative and Support and Waste Management',
    '61': 'Educational Services',
    '62': 'Health Care and Social Assistance',
    '71': 'Arts, Entertainment, and Recreation',
    '72': 'Accommodation and Food Services',
    '81': 'Other Services (except Public Administration)',
    '92': 'Public Administration',
}

# Common 3-digit subsectors, used only with the static sector list
FALLBACK_SUBSECTORS: Dict[str, str] = {
    '621': 'Ambulatory Health Care Services',
    '622': 'Hospitals',
    '623': 'Nursing and Residential Care Facilities',
    '624': 'Social Assistance',
    '611': 'Educational Services',
    '541': 'Professional, Scientific, and Technical Services',
    '722': 'Food Services and Drinking Places',
    '721': 'Accommodation',
    '236': 'Construction of Buildings',
    '237': 'Heavy and Civil Engineering Construction',
    '238': 'Specialty Trade Contractors',
    '441': 'Motor Vehicle and Parts Dealers',
    '445': 'Food and Beverage Stores',
    '452': 'General Merchandise Stores',
    '561': 'Administrative and Support Services',
    '562': 'Waste Management and Remediation Services',
    '311': 'Food Manufacturing',
    '332': 'Fabricated Metal Product Manufacturing',
    '333': 'Machinery Manufacturing',
    '334': 'Computer and Electronic Product Manufacturing',
    '484': 'Truck Transportation',
    '493': 'Warehousing and Storage',
    '522': 'Credit Intermediation and Related Activities',
}


def fallback_codes() -> List[NaicsCode]:
    """Static taxonomy used when both remote methods come back empty."""
    codes = [NaicsCode(code, title) for code, title in FALLBACK_SECTORS.items()]
    codes.extend(NaicsCode(code, title) for code, title in FALLBACK_SUBSECTORS.items())
    return codes


def child_search_terms(parent: str) -> List[str]:
    """
    Search terms tried, in order, when looking for children of `parent`.

    The bare code usually works; the suffixed variants coax the handler
    into prefix matching; the 2-digit sector is a broad last resort.
    """
    return [
        parent,
        f'{parent}*',
        f'{parent}0',
        f'{parent}1',
        parent[:2],
    ]


def _is_sector(code: str) -> bool:
    return len(code) == 2 and code.isdigit()


class NaicsTaxonomyService:
    """
    Lookups against the NAICS hierarchy.

    Instances are cheap; the cache is shared through the module-level
    `taxonomy_cache` singleton unless one is injected.
    """

    def __init__(
        self,
        client: Optional[NaicsClient] = None,
        cache: Optional[TaxonomyCache] = None,
    ):
        self.client = client or NaicsClient.from_config()
        self.cache = cache if cache is not None else taxonomy_cache

    # -------------------------------------------------------------------------
    # Sector list
    # -------------------------------------------------------------------------

    def fetch_naics_codes(self, year: str = None) -> List[NaicsCode]:
        """
        Get the sector list: chart method, then sweep, then static data.

        Whatever method produces the list, the result is cached.
        """
        year = year or config.naics.year
        cache_key = f'all-{year}'

        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            codes = self._chart_method(year)
            if not codes:
                codes = self._sweep_method(year)
            if not codes:
                logger.warning('Both NAICS fetching methods failed, using fallback data')
                codes = fallback_codes()
        except Exception as e:
            logger.error(f'Error fetching NAICS codes: {e}')
            codes = fallback_codes()

        self.cache.set(cache_key, codes)
        return codes

    def _chart_method(self, year: str) -> List[NaicsCode]:
        """Read sectors from the chart view. Empty list on failure."""
        try:
            records = self.client.search('', chart=True, year=year)
        except (requests.RequestException, ValueError) as e:
            logger.error(f'Chart method failed: {e}')
            return []

        titles: Dict[str, str] = {}
        for rec in records:
            code = record_code(rec, 'code', 'naics22')
            if not _is_sector(code):
                continue
            title = record_code(rec, 'title', 'index_desc')
            if title or code not in titles:
                titles[code] = title

        return [
            NaicsCode(code, titles[code] or f'NAICS {code}')
            for code in sorted(titles)
        ]

    def _sweep_method(self, year: str) -> List[NaicsCode]:
        """Union the 2-digit hits of a search for every seed character."""
        titles: Dict[str, str] = {}

        for seed in SWEEP_SEEDS:
            try:
                records = self.client.search(seed, year=year)
            except (requests.RequestException, ValueError):
                continue

            for rec in records:
                code = record_code(rec, 'naics22')
                if not _is_sector(code) or code in titles:
                    continue
                titles[code] = record_code(rec, 'title', 'index_desc') or f'NAICS {code}'

        return [NaicsCode(code, titles[code]) for code in sorted(titles)]

    def get_two_digit_codes(self) -> Dict[str, str]:
        """Map of 2-digit sector code -> title."""
        try:
            return {c.code: c.title for c in self.fetch_naics_codes() if len(c.code) == 2}
        except Exception as e:
            logger.error(f'Error getting 2-digit codes: {e}')
            return dict(FALLBACK_SECTORS)

    def get_code_description(self, code: str) -> str:
        """Title for a code from the sector list, or 'NAICS <code>'."""
        try:
            for c in self.fetch_naics_codes():
                if c.code == code:
                    return c.title
        except Exception as e:
            logger.error(f'Error getting description for {code}: {e}')
        return f'NAICS {code}'

    # -------------------------------------------------------------------------
    # Parent -> child resolution
    # -------------------------------------------------------------------------

    def get_child_codes(self, parent_code: str) -> List[NaicsCode]:
        """
        Direct children of `parent_code` (one digit longer), sorted by code.

        Cache hits make no requests. An empty result means a leaf (or
        an upstream that could not say) and is cached like any other.
        """
        parent_code = (parent_code or '').strip()
        cache_key = f'children-{parent_code}'

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f'Using cached child codes for {parent_code}: {[c.code for c in cached]}')
            return cached

        try:
            children = self._search_child_codes(parent_code)
        except Exception as e:
            logger.error(f'Error getting child codes for {parent_code}: {e}')
            return []

        logger.info(f'Found {len(children)} child codes for {parent_code}: {[c.code for c in children]}')
        self.cache.set(cache_key, children)
        return children

    def _search_child_codes(self, parent_code: str) -> List[NaicsCode]:
        """Try each search term until one yields at least one child."""
        titles: Dict[str, str] = {}

        for term in child_search_terms(parent_code):
            try:
                records = self.client.search(term)
            except (requests.RequestException, ValueError) as e:
                logger.debug(f'Search term {term!r} failed: {e}')
                continue

            for rec in records:
                candidate = NaicsCode(record_code(rec, 'naics22', 'code'), record_title(rec))
                if candidate.is_child_of(parent_code) and candidate.code not in titles:
                    titles[candidate.code] = candidate.title or f'NAICS {candidate.code}'

            if titles:
                logger.debug(f'Found {len(titles)} children with search term {term!r}')
                break

        if not titles:
            logger.info(f'No children found for {parent_code} - leaf node or missing upstream data')

        return [NaicsCode(code, titles[code]) for code in sorted(titles)]

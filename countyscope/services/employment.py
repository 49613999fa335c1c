"""
Employment service - the orchestration layer behind a ZIP query.

Flow for a ZIP code:
1. Resolve ZIP -> county (HUD, else static table)
2. In parallel: fan out across the sector list, and fetch the
   county-wide totals row
3. Merge totals into every sector record for percentage figures

Drill-down resolves child NAICS codes through the taxonomy service and
queries CBP for each child, carrying the county totals along.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from countyscope.errors import ApiError
from countyscope.ingestion.census_client import CensusClient
from countyscope.ingestion.hud_client import normalize_zip
from countyscope.models import CountyInfo, CountyTotals, EmploymentReport, IndustryRecord
from countyscope.services.naics_taxonomy import NaicsTaxonomyService
from countyscope.services.zip_lookup import ZipCountyResolver

logger = logging.getLogger(__name__)


def _sort_by_employees(records: List[IndustryRecord]) -> List[IndustryRecord]:
    kept = [r for r in records if r.has_data]
    kept.sort(key=lambda r: r.employees, reverse=True)
    return kept


class EmploymentService:
    """
    Answers "what are the top industries for this ZIP" and drill-downs.

    The Census key is an opaque credential carried by the CBP client.
    """

    def __init__(
        self,
        census_client: Optional[CensusClient] = None,
        resolver: Optional[ZipCountyResolver] = None,
        taxonomy: Optional[NaicsTaxonomyService] = None,
        api_key: Optional[str] = None,
    ):
        self.census_client = census_client or CensusClient.from_config(api_key=api_key)
        self.resolver = resolver or ZipCountyResolver()
        self.taxonomy = taxonomy or NaicsTaxonomyService()

    def fetch_employment_for_zip(self, zip_code: str) -> EmploymentReport:
        """
        Sector-level employment for the county containing `zip_code`.

        Raises:
            ApiError if the county cannot be found or anything else
            goes wrong along the way.
        """
        z = normalize_zip(zip_code)

        try:
            county = self.resolver.resolve(z)
            if county is None:
                raise ApiError(f'Could not find county for ZIP code {z}', code='county_not_found')

            logger.info(f'Found county: {county.name} ({county.state}:{county.county})')

            with ThreadPoolExecutor(max_workers=2) as pool:
                sectors_future = pool.submit(self.census_client.fetch_sectors, county.state, county.county)
                totals_future = pool.submit(self.census_client.fetch_county_totals, county.state, county.county)
                sectors = sectors_future.result()
                totals = totals_future.result()

        except ApiError as e:
            raise ApiError(f'Failed to fetch employment data: {e.message}', code=e.code) from e
        except Exception as e:
            raise ApiError(f'Failed to fetch employment data: {e}', code='upstream') from e

        industries = [r.with_county_totals(totals) for r in sectors]
        logger.info(f'ZIP {z}: {len(industries)} sectors with data in {county.name}')

        return EmploymentReport(zip_code=z, county=county, industries=industries, totals=totals)

    def fetch_sub_industries(
        self,
        state: str,
        county: str,
        parent_code: str,
        totals: Optional[CountyTotals] = None,
    ) -> List[IndustryRecord]:
        """
        County data for each direct child of `parent_code`.

        Never raises: an unknown or leaf code, or any upstream failure,
        yields an empty list. `totals` (the county-wide row) is merged
        into each child for percentage-of-county figures.
        """
        logger.info(f'Fetching sub-industries for NAICS {parent_code} in county {county}, state {state}')

        try:
            children = self.taxonomy.get_child_codes(parent_code)
            if not children:
                logger.info(f'No child codes found for {parent_code}')
                return []

            results: List[IndustryRecord] = []
            for child in children:
                try:
                    for record in self.census_client.fetch_sector(state, county, child.code):
                        record.level = child.level
                        results.append(record)
                except Exception as e:
                    logger.error(f'Error fetching child NAICS {child.code}: {e}')

            results = _sort_by_employees(results)
            logger.info(f'Found {len(results)} sub-industries with data for {parent_code}')

            return [r.with_county_totals(totals) for r in results]

        except Exception as e:
            logger.error(f'Error fetching sub-industries for {parent_code}: {e}')
            return []

    def expand(
        self,
        county: CountyInfo,
        records: List[IndustryRecord],
        path: Sequence[str],
        totals: Optional[CountyTotals] = None,
    ) -> List[IndustryRecord]:
        """
        Drill down along `path` (e.g. ['62', '621', '6211']).

        Each code in the path must appear in the level above it; its
        children are nested under that record's `sub_industries`.
        Codes not found at their level stop the descent. Returns
        `records` for chaining.
        """
        level = records
        for code in path:
            match = next((r for r in level if r.naics_code == code), None)
            if match is None:
                logger.warning(f'NAICS {code} not present at this level, stopping drill-down')
                break
            if not match.sub_industries:
                match.sub_industries = self.fetch_sub_industries(
                    county.state, county.county, code, totals,
                )
            level = match.sub_industries
        return records

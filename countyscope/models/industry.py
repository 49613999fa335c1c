"""
Industry records - one CBP row for a county and NAICS code.

Records carry raw counts from the statistics API plus, once merged by
the orchestration layer, the county-wide totals used for
percentage-of-county figures. Drill-down results nest under
`sub_industries`.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, List, TYPE_CHECKING

if TYPE_CHECKING:
    from countyscope.models.county import CountyInfo, CountyTotals


class MetricType(str, Enum):
    """
    Ranking metric for industries.

    - EMPLOYEES: Number of paid employees (mid-March pay period)
    - ESTABLISHMENTS: Number of establishments
    - PAYROLL: Annual payroll in dollars
    """
    EMPLOYEES = 'employees'
    ESTABLISHMENTS = 'establishments'
    PAYROLL = 'payroll'

    @property
    def label(self) -> str:
        return {
            MetricType.EMPLOYEES: 'Employees',
            MetricType.ESTABLISHMENTS: 'Establishments',
            MetricType.PAYROLL: 'Annual Payroll',
        }[self]

    @classmethod
    def parse(cls, value) -> 'MetricType':
        """Parse a metric name; unknown values fall back to EMPLOYEES."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or '').strip().lower())
        except (ValueError, AttributeError):
            return cls.EMPLOYEES


@dataclass
class IndustryRecord:
    """
    Employment statistics for one industry in one county.

    Counts suppressed upstream (flags N/D/S) arrive here as 0.
    """
    industry: str
    employees: int
    establishments: int
    payroll: int  # dollars
    naics_code: str
    location: str
    geo_id: str
    level: int

    # Merged from the county-wide totals row
    county_total_employees: Optional[int] = None
    county_total_establishments: Optional[int] = None
    county_total_payroll: Optional[int] = None

    sub_industries: List['IndustryRecord'] = field(default_factory=list)

    def __repr__(self) -> str:
        return f'<IndustryRecord {self.naics_code} {self.industry!r} emp={self.employees}>'

    @property
    def has_data(self) -> bool:
        return self.employees > 0 or self.establishments > 0 or self.payroll > 0

    @property
    def short_label(self) -> str:
        """Industry label without any ' - ' qualifier suffix."""
        return self.industry.split(' - ')[0]

    def value_for(self, metric: MetricType) -> int:
        return getattr(self, MetricType.parse(metric).value)

    def county_total_for(self, metric: MetricType) -> Optional[int]:
        return getattr(self, f'county_total_{MetricType.parse(metric).value}')

    def percent_of_county(self, metric: MetricType) -> float:
        """Share of the county total for `metric`, in percent (0 if unknown)."""
        total = self.county_total_for(metric) or 0
        if total <= 0:
            return 0.0
        return self.value_for(metric) / total * 100

    def with_county_totals(self, totals: Optional['CountyTotals']) -> 'IndustryRecord':
        """Return a copy with county totals merged in."""
        if totals is None:
            return replace(self, sub_industries=list(self.sub_industries))
        return replace(
            self,
            sub_industries=list(self.sub_industries),
            county_total_employees=totals.employees,
            county_total_establishments=totals.establishments,
            county_total_payroll=totals.payroll,
        )

    def to_dict(self, metric: Optional[MetricType] = None) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        result = {
            'industry': self.industry,
            'naics_code': self.naics_code,
            'level': self.level,
            'employees': self.employees,
            'establishments': self.establishments,
            'payroll': self.payroll,
            'location': self.location,
            'geo_id': self.geo_id,
            'county_totals': {
                'employees': self.county_total_employees,
                'establishments': self.county_total_establishments,
                'payroll': self.county_total_payroll,
            },
        }
        if metric is not None:
            metric = MetricType.parse(metric)
            result['metric'] = metric.value
            result['value'] = self.value_for(metric)
            result['percent_of_county'] = round(self.percent_of_county(metric), 2)
        if self.sub_industries:
            result['sub_industries'] = [s.to_dict(metric) for s in self.sub_industries]
        return result


@dataclass
class EmploymentReport:
    """Result of a ZIP code query: the county and its sector records."""
    zip_code: str
    county: 'CountyInfo'
    industries: List[IndustryRecord]
    totals: 'CountyTotals'

    def to_dict(self, metric: Optional[MetricType] = None) -> dict:
        return {
            'zip_code': self.zip_code,
            'county': self.county.to_dict(),
            'county_totals': self.totals.to_dict(),
            'industries': [r.to_dict(metric) for r in self.industries],
        }

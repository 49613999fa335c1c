"""
County geography and county-wide totals.

A county is identified by its FIPS pair: 2-digit state code and
3-digit county code. Totals are the all-industry (NAICS "00") CBP row
used as the denominator for percentage-of-county figures.
"""

from dataclasses import dataclass

from countyscope.models.industry import MetricType


@dataclass(frozen=True)
class CountyInfo:
    """County resolved from a ZIP code."""
    state: str   # 2-digit state FIPS, e.g. '25'
    county: str  # 3-digit county FIPS, e.g. '017'
    name: str    # Display name, e.g. 'Middlesex County, MA'

    @property
    def geoid(self) -> str:
        """5-digit county GEOID (state + county FIPS)."""
        return f'{self.state}{self.county}'

    def to_dict(self) -> dict:
        return {
            'state': self.state,
            'county': self.county,
            'name': self.name,
            'geoid': self.geoid,
        }


@dataclass(frozen=True)
class CountyTotals:
    """All-industry totals for a county. Payroll is in dollars."""
    employees: int = 0
    establishments: int = 0
    payroll: int = 0

    @classmethod
    def empty(cls) -> 'CountyTotals':
        return cls(employees=0, establishments=0, payroll=0)

    def value_for(self, metric: MetricType) -> int:
        return getattr(self, MetricType.parse(metric).value)

    @property
    def is_empty(self) -> bool:
        return not (self.employees or self.establishments or self.payroll)

    def to_dict(self) -> dict:
        return {
            'employees': self.employees,
            'establishments': self.establishments,
            'payroll': self.payroll,
        }

"""
Industry mix analysis using NumPy.

Turns a list of industry records into the figures a results view
needs: ranking by the selected metric, shares of the county total, and
a summary of how concentrated the county's economy is.

Concentration uses the Herfindahl-Hirschman Index (HHI) over the
industries' shares of the listed total, on the usual 0-10,000 scale:
- < 1,500: diversified
- 1,500 - 2,500: moderately concentrated
- > 2,500: highly concentrated
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from countyscope.config import config
from countyscope.models import CountyTotals, IndustryRecord, MetricType

logger = logging.getLogger(__name__)

HHI_MODERATE = 1500.0
HHI_HIGH = 2500.0


@dataclass
class MixSummary:
    """Summary statistics for one county's industry mix under one metric."""
    metric: MetricType
    industry_count: int
    total: int
    county_total: int
    covered_percent: float
    top_industry: Optional[str]
    top_n_percent: float
    hhi: float

    @property
    def concentration(self) -> str:
        if self.industry_count == 0:
            return 'unknown'
        if self.hhi > HHI_HIGH:
            return 'high'
        if self.hhi >= HHI_MODERATE:
            return 'moderate'
        return 'diversified'

    def to_dict(self) -> dict:
        return {
            'metric': self.metric.value,
            'metric_label': self.metric.label,
            'industry_count': self.industry_count,
            'total': self.total,
            'total_display': format_metric_value(self.total, self.metric),
            'county_total': self.county_total,
            'covered_percent': round(self.covered_percent, 2),
            'top_industry': self.top_industry,
            'top_n_percent': round(self.top_n_percent, 2),
            'hhi': round(self.hhi, 1),
            'concentration': self.concentration,
        }


def rank_industries(
    records: Sequence[IndustryRecord],
    metric: MetricType,
    limit: Optional[int] = None,
) -> List[IndustryRecord]:
    """
    Sort records by `metric`, largest first, and cap at `limit`.

    Ties keep their input order. `limit=None` uses the configured
    top-N; `limit=0` returns everything.
    """
    metric = MetricType.parse(metric)
    if limit is None:
        limit = config.results.top_n

    ranked = sorted(records, key=lambda r: r.value_for(metric), reverse=True)
    return ranked[:limit] if limit else ranked


def metric_total(records: Sequence[IndustryRecord], metric: MetricType) -> int:
    """Sum of `metric` across records."""
    metric = MetricType.parse(metric)
    if not records:
        return 0
    values = np.array([r.value_for(metric) for r in records], dtype=np.int64)
    return int(values.sum())


def summarize(
    records: Sequence[IndustryRecord],
    metric: MetricType,
    totals: Optional[CountyTotals] = None,
    top_n: Optional[int] = None,
) -> MixSummary:
    """
    Compute the mix summary for `records` under `metric`.

    `totals` supplies the county-wide denominator; without it (or when
    it is zero) covered_percent and top_n_percent are 0.
    """
    metric = MetricType.parse(metric)
    top_n = top_n or config.results.top_n
    county_total = totals.value_for(metric) if totals else 0

    if not records:
        return MixSummary(
            metric=metric,
            industry_count=0,
            total=0,
            county_total=county_total,
            covered_percent=0.0,
            top_industry=None,
            top_n_percent=0.0,
            hhi=0.0,
        )

    ranked = rank_industries(records, metric, limit=0)
    values = np.array([r.value_for(metric) for r in ranked], dtype=np.float64)
    total = float(values.sum())

    # HHI over shares of the listed total, in percent points squared
    if total > 0:
        shares = values / total * 100.0
        hhi = float(np.sum(shares ** 2))
    else:
        hhi = 0.0

    if county_total > 0:
        covered_percent = total / county_total * 100.0
        top_n_percent = float(values[:top_n].sum()) / county_total * 100.0
    else:
        covered_percent = 0.0
        top_n_percent = 0.0

    return MixSummary(
        metric=metric,
        industry_count=len(ranked),
        total=int(total),
        county_total=county_total,
        covered_percent=covered_percent,
        top_industry=ranked[0].short_label,
        top_n_percent=top_n_percent,
        hhi=hhi,
    )


# -------------------------------------------------------------------------
# Display formatting
# -------------------------------------------------------------------------

def format_number(value: int) -> str:
    """Thousands separators: 1234567 -> '1,234,567'."""
    return f'{value:,}'


def format_payroll(amount: int) -> str:
    """Compact dollars: $1.2B, $3.4M, $56K, or the plain amount below $1,000."""
    if amount >= 1_000_000_000:
        return f'${amount / 1_000_000_000:.1f}B'
    if amount >= 1_000_000:
        return f'${amount / 1_000_000:.1f}M'
    if amount >= 1_000:
        return f'${amount / 1_000:.0f}K'
    return f'${format_number(amount)}'


def format_metric_value(value: int, metric: MetricType) -> str:
    if MetricType.parse(metric) is MetricType.PAYROLL:
        return format_payroll(value)
    return format_number(value)

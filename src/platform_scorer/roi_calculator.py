"""ROI Calculator - converts headcounts and benchmark hours into ROI.

For each department the benchmark hours saved per user per week are
turned into annual hours and dollar savings, and set against the
platform's per-seat cost.
"""

import logging
from collections.abc import Mapping
from typing import Optional

from .benchmarks import PLATFORM_IDS, hours_saved, monthly_price
from .schema import Department, DepartmentROI, PlatformId, ROIResult

logger = logging.getLogger(__name__)

# Working weeks per year, allowing for vacation
WEEKS_PER_YEAR = 50
MONTHS_PER_YEAR = 12


class ROICalculator:
    """Computes annual savings, cost and ROI per platform.

    Principles:
    - Unrecognized departments contribute zero savings but still incur cost
    - ROI is 0 when there is no cost basis
    - Three-year ROI triples one year's net savings against a single year
      of cost; it is not a cash-flow projection
    """

    def __init__(
        self,
        benchmarks: Optional[Mapping[str, Mapping[str, float]]] = None,
        pricing: Optional[Mapping[str, float]] = None,
    ):
        """Initialize with optional benchmark and pricing tables."""
        self.benchmarks = benchmarks
        self.pricing = pricing

    def calculate(self, departments: list[Department], platform_id: PlatformId) -> ROIResult:
        """Compute the ROI of one platform across all departments.

        Args:
            departments: Departments taking part in the assessment
            platform_id: Platform to evaluate

        Returns:
            ROIResult with a per-department breakdown
        """
        price = monthly_price(platform_id, self.pricing)
        total_savings = 0.0
        total_cost = 0.0
        breakdown = []

        for dept in departments:
            hours_per_week = hours_saved(dept.name, platform_id, self.benchmarks)
            annual_hours = hours_per_week * WEEKS_PER_YEAR * dept.user_count
            annual_savings = annual_hours * dept.hourly_rate
            platform_cost = price * MONTHS_PER_YEAR * dept.user_count

            total_savings += annual_savings
            total_cost += platform_cost

            breakdown.append(DepartmentROI(
                department=dept.name,
                user_count=dept.user_count,
                hours_saved_per_user_per_week=hours_per_week,
                annual_hours_saved=annual_hours,
                annual_savings=annual_savings,
                platform_cost=platform_cost,
                net_savings=annual_savings - platform_cost,
            ))

        net = total_savings - total_cost
        if total_cost > 0:
            one_year = net / total_cost * 100
            three_year = net * 3 / total_cost * 100
        else:
            one_year = 0.0
            three_year = 0.0

        return ROIResult(
            platform=platform_id,
            total_annual_savings=total_savings,
            total_cost=total_cost,
            net_annual_savings=net,
            one_year_roi_pct=one_year,
            three_year_roi_pct=three_year,
            department_breakdown=breakdown,
        )

    def calculate_all(self, departments: list[Department]) -> list[ROIResult]:
        """Compute ROI for every catalogued platform, in catalog order."""
        results = [self.calculate(departments, pid) for pid in PLATFORM_IDS]
        logger.debug(
            "ROI computed for %d platforms over %d departments",
            len(results), len(departments),
        )
        return results

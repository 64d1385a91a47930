"""
Inflation normalizer.

Present-values each reference contract's AAV with a compounding annual
rate and derives the cohort baseline AAV and length.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from comp_valuation.models import ReferenceContract

logger = logging.getLogger(__name__)


@dataclass
class CohortBaseline:
    """
    Cohort averages before any subject-specific adjustment.

    Attributes:
        baseline_aav: Mean inflation-adjusted AAV
        raw_baseline_aav: Mean AAV as signed
        baseline_years: Mean contract length
        adjusted_values: Contract id -> inflation-adjusted AAV
        avg_signed_year: Mean signing year (missing years count as 0)
        cohort_size: Number of contracts averaged
    """

    baseline_aav: float = 0.0
    raw_baseline_aav: float = 0.0
    baseline_years: float = 0.0
    adjusted_values: Dict[str, float] = field(default_factory=dict)
    avg_signed_year: float = 0.0
    cohort_size: int = 0

    @property
    def is_empty(self) -> bool:
        """True when no contracts were averaged."""
        return self.cohort_size == 0


class InflationNormalizer:
    """
    Compounds reference AAVs forward to the present year.

    adjusted = annual_value * (1 + rate) ** max(0, present_year - signed_year)

    Contracts without a signing year are not adjusted.
    """

    def normalize_rate(self, inflation_percent: float) -> float:
        """Convert a percent to a rate, clamping negatives to zero."""
        if inflation_percent < 0:
            logger.warning(
                "Negative inflation_percent %.2f clamped to 0", inflation_percent
            )
            return 0.0
        return inflation_percent / 100

    def adjust_value(
        self,
        annual_value: float,
        signed_year: Optional[int],
        rate: float,
        present_year: int,
    ) -> float:
        """Present-value a single AAV."""
        years_since_signing = max(0, present_year - signed_year) if signed_year else 0
        return annual_value * (1 + rate) ** years_since_signing

    def build_baseline(
        self,
        contracts: List[ReferenceContract],
        inflation_percent: float,
        present_year: int,
    ) -> CohortBaseline:
        """
        Average the active cohort.

        Args:
            contracts: Active cohort members (already filtered)
            inflation_percent: Annual inflation, negative values clamp to 0
            present_year: Year to present-value to

        Returns:
            CohortBaseline; all zeros when contracts is empty
        """
        if not contracts:
            return CohortBaseline()

        rate = self.normalize_rate(inflation_percent)
        count = len(contracts)

        adjusted = [
            self.adjust_value(c.annual_value, c.signed_year, rate, present_year)
            for c in contracts
        ]

        return CohortBaseline(
            baseline_aav=sum(adjusted) / count,
            raw_baseline_aav=sum(c.annual_value for c in contracts) / count,
            baseline_years=sum(c.contract_years for c in contracts) / count,
            adjusted_values={
                c.contract_id: value for c, value in zip(contracts, adjusted)
            },
            avg_signed_year=sum(c.signed_year or 0 for c in contracts) / count,
            cohort_size=count,
        )

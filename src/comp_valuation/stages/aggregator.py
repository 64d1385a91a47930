"""
Multiplier aggregator.

Combines per-category ratios into a single bounded AAV multiplier and
attributes the AAV adjustment to individual categories.
"""

from dataclasses import dataclass
from typing import List

from comp_valuation.models import CategoryComparison


@dataclass
class AggregateMultiplier:
    """
    Aggregated multiplier and fair AAV.

    Attributes:
        raw_multiplier: Weighted mean ratio (1.0 when total weight is 0)
        aav_multiplier: Clamped multiplier, 1.0 when AAV adjustment is off
        fair_aav: baseline_aav * aav_multiplier
        total_weight: Sum of weights over compared categories
    """

    raw_multiplier: float
    aav_multiplier: float
    fair_aav: float
    total_weight: float


class MultiplierAggregator:
    """
    Weighted mean of category ratios, clamped to +/-30% around baseline.

    Per-category dollar impacts use the final total weight so that they
    sum to fair_aav - baseline_aav whenever the multiplier is unclamped.
    """

    MULTIPLIER_MIN = 0.80
    MULTIPLIER_MAX = 1.30

    def aggregate(
        self,
        comparisons: List[CategoryComparison],
        baseline_aav: float,
        adjust_aav: bool = True,
    ) -> AggregateMultiplier:
        """
        Aggregate comparisons into a multiplier.

        Fills contribution and aav_impact on each comparison in place;
        comparisons are built fresh by the comparator for every valuation.

        Args:
            comparisons: Category comparisons from the comparator
            baseline_aav: Cohort baseline AAV
            adjust_aav: When False the multiplier is forced to 1.0

        Returns:
            AggregateMultiplier
        """
        weighted_sum = sum(c.ratio * c.weight for c in comparisons)
        total_weight = sum(c.weight for c in comparisons)

        for comparison in comparisons:
            comparison.contribution = (comparison.ratio - 1) * comparison.weight
            if total_weight > 0:
                comparison.aav_impact = baseline_aav * comparison.contribution / total_weight
            else:
                comparison.aav_impact = 0.0

        raw_multiplier = weighted_sum / total_weight if total_weight > 0 else 1.0

        if adjust_aav:
            aav_multiplier = max(
                self.MULTIPLIER_MIN, min(self.MULTIPLIER_MAX, raw_multiplier)
            )
        else:
            aav_multiplier = 1.0

        return AggregateMultiplier(
            raw_multiplier=raw_multiplier,
            aav_multiplier=aav_multiplier,
            fair_aav=baseline_aav * aav_multiplier,
            total_weight=total_weight,
        )

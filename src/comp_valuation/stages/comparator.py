"""
Weighted performance comparator.

Scores the subject against the cohort average in each stat category,
producing a bounded ratio, delta, and percent difference per category.
"""

import logging
from typing import Dict, List, Optional

from comp_valuation.categories.registry import (
    CategoryRegistry,
    DEFAULT_REGISTRY,
    StatCategory,
)
from comp_valuation.models import (
    CategoryComparison,
    PerformanceRecord,
    ReferenceContract,
)
from comp_valuation.settings import ValuationSettings

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


class WeightedPerformanceComparator:
    """
    Compares subject stats to cohort averages.

    Ratio policies:
    - Bipolar categories: additive delta scaled by typical range,
      clamped to [0.5, 2.0]
    - Higher is better: subject / cohort, clamped to [0.1, 10]
    - Lower is better: cohort / subject, clamped to [0.1, 10]

    Near-zero denominators fall back to fixed 1.1 / 0.9 / 1.0 ratios.
    """

    RATIO_MIN = 0.1
    RATIO_MAX = 10.0
    BIPOLAR_RATIO_MIN = 0.5
    BIPOLAR_RATIO_MAX = 2.0
    BIPOLAR_SLOPE = 0.2

    PCT_DIFF_LIMIT = 500.0

    NEAR_ZERO_UP = 1.1
    NEAR_ZERO_DOWN = 0.9

    def __init__(
        self,
        registry: CategoryRegistry = DEFAULT_REGISTRY,
        epsilon: float = ValuationSettings.NEAR_ZERO_EPSILON,
    ):
        """
        Initialize the comparator.

        Args:
            registry: Categories to score
            epsilon: Magnitude below which a value is treated as zero
        """
        self._registry = registry
        self._epsilon = epsilon

    @property
    def registry(self) -> CategoryRegistry:
        return self._registry

    def cohort_averages(
        self, contracts: List[ReferenceContract]
    ) -> Dict[str, float]:
        """
        Arithmetic mean of each category over members' pre-signing stats.

        Members missing a category are left out of that category's mean.
        Categories no member reports are absent from the result.
        """
        averages: Dict[str, float] = {}
        for category in self._registry:
            values = [
                c.performance.get(category.key)
                for c in contracts
                if c.performance.get(category.key) is not None
            ]
            if values:
                averages[category.key] = sum(values) / len(values)
        return averages

    def resolve_weights(self, weights: Dict[str, float]) -> Dict[str, float]:
        """
        Effective weight per registered category.

        Raises:
            UnknownCategoryError: If weights names an unregistered category
        """
        self._registry.validate_keys(weights)
        resolved = {}
        for category in self._registry:
            weight = weights.get(category.key, category.weight)
            if weight < 0:
                logger.warning(
                    "Negative weight %.3f for %s clamped to 0", weight, category.key
                )
                weight = 0.0
            resolved[category.key] = weight
        return resolved

    def compare(
        self,
        subject: PerformanceRecord,
        contracts: List[ReferenceContract],
        weights: Dict[str, float],
        cohort_averages: Optional[Dict[str, float]] = None,
    ) -> List[CategoryComparison]:
        """
        Compare the subject to the cohort in every scorable category.

        Args:
            subject: Subject's current-period stats
            contracts: Active cohort members
            weights: Category key -> weight (absent keys use registry weight)
            cohort_averages: Precomputed averages, if the caller has them

        Returns:
            One CategoryComparison per category that both the subject
            and the cohort report, in registry order
        """
        effective = self.resolve_weights(weights)
        if cohort_averages is None:
            cohort_averages = self.cohort_averages(contracts)

        comparisons = []
        for category in self._registry:
            subject_value = subject.get(category.key)
            cohort_value = cohort_averages.get(category.key)
            if subject_value is None or cohort_value is None:
                logger.debug("Skipping %s: no comparable data", category.key)
                continue
            comparisons.append(
                self.compare_category(
                    category, subject_value, cohort_value, effective[category.key]
                )
            )
        return comparisons

    def compare_category(
        self,
        category: StatCategory,
        subject_value: float,
        cohort_value: float,
        weight: float,
    ) -> CategoryComparison:
        """Score a single category."""
        delta = subject_value - cohort_value
        return CategoryComparison(
            key=category.key,
            label=category.label,
            subject_value=subject_value,
            cohort_value=cohort_value,
            ratio=self.calculate_ratio(category, subject_value, cohort_value),
            delta=delta,
            pct_diff=self.calculate_pct_diff(delta, cohort_value),
            weight=weight,
        )

    def calculate_pct_diff(self, delta: float, cohort_value: float) -> float:
        """Percent difference, bounded to +/-500 even for a zero baseline."""
        if abs(cohort_value) < self._epsilon:
            return _sign(delta) * min(self.PCT_DIFF_LIMIT, abs(delta * 100))
        pct_diff = (delta / abs(cohort_value)) * 100
        return _clamp(pct_diff, -self.PCT_DIFF_LIMIT, self.PCT_DIFF_LIMIT)

    def calculate_ratio(
        self,
        category: StatCategory,
        subject_value: float,
        cohort_value: float,
    ) -> float:
        """Bounded multiplicative ratio for AAV impact."""
        if category.bipolar:
            delta = subject_value - cohort_value
            ratio = 1 + (delta / category.typical_range) * self.BIPOLAR_SLOPE
            return _clamp(ratio, self.BIPOLAR_RATIO_MIN, self.BIPOLAR_RATIO_MAX)

        if category.higher_is_better:
            numerator, denominator = subject_value, cohort_value
        else:
            numerator, denominator = cohort_value, subject_value

        if abs(denominator) < self._epsilon:
            if numerator > 0:
                ratio = self.NEAR_ZERO_UP
            elif numerator < 0:
                ratio = self.NEAR_ZERO_DOWN
            else:
                ratio = 1.0
        else:
            ratio = numerator / denominator
        return _clamp(ratio, self.RATIO_MIN, self.RATIO_MAX)

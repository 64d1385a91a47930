"""
Years adjustment engine.

Derives a recommended contract length from the cohort baseline, the
subject's age relative to the cohort at signing, and the AAV multiplier.
"""

import math
from typing import List, Optional

from comp_valuation.models import ReferenceContract, YearsAdjustment


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class YearsAdjustmentEngine:
    """
    Contract length adjustment with asymmetric age curves and soft caps.

    Order of application (the clamps do not commute):
    1. Age multiplier from the age delta to the cohort signing age
       (quadratic penalty when older, damped benefit when younger)
    2. Absolute penalty for subjects aged 30+
    3. Performance nudge from the AAV multiplier
    4. Soft cap at baseline + 1 year
    5. Round to the nearest half year, floor of 3 years
    """

    # Older than cohort: 0.08 * d + 0.02 * d^2
    OLDER_LINEAR = 0.08
    OLDER_QUADRATIC = 0.02

    # Younger than cohort: 0.02 * d - 0.008 * d^2
    YOUNGER_LINEAR = 0.02
    YOUNGER_QUADRATIC = 0.008

    AGE_MULTIPLIER_MIN = 0.4
    AGE_MULTIPLIER_MAX = 1.35

    # Market aversion to long deals from age 30
    ABSOLUTE_PENALTY_AGE = 30
    ABSOLUTE_PENALTY_PER_YEAR = 0.45
    ABSOLUTE_PENALTY_MAX = 3.0

    PERFORMANCE_SCALE = 1.2
    PERFORMANCE_LIMIT = 1.0

    SOFT_CAP_YEARS = 1.0
    MIN_YEARS = 3.0

    def cohort_signing_age(
        self,
        contracts: List[ReferenceContract],
        subject_age: Optional[float],
    ) -> Optional[float]:
        """
        Mean age at signing over the cohort.

        Each member contributes its pre-signing performance age, or its
        recorded age at signing. Falls back to the subject's age when no
        member has either.
        """
        ages = [c.signing_age for c in contracts if c.signing_age]
        if ages:
            return sum(ages) / len(ages)
        return subject_age

    def age_multiplier(self, age_delta: float) -> float:
        """Clamped multiplier on baseline years from the age delta."""
        older = max(0.0, age_delta)
        younger = max(0.0, -age_delta)
        penalty = self.OLDER_LINEAR * older + self.OLDER_QUADRATIC * older * older
        benefit = self.YOUNGER_LINEAR * younger - self.YOUNGER_QUADRATIC * younger * younger
        return _clamp(
            1 - penalty + benefit, self.AGE_MULTIPLIER_MIN, self.AGE_MULTIPLIER_MAX
        )

    def absolute_age_penalty(self, subject_age: Optional[float]) -> float:
        """Flat years penalty for subjects aged 30 and over."""
        if subject_age is None or subject_age < self.ABSOLUTE_PENALTY_AGE:
            return 0.0
        return min(
            self.ABSOLUTE_PENALTY_MAX,
            (subject_age - (self.ABSOLUTE_PENALTY_AGE - 1)) * self.ABSOLUTE_PENALTY_PER_YEAR,
        )

    def performance_adjustment(self, aav_multiplier: float) -> float:
        """Damped, bounded years nudge from the AAV multiplier."""
        return _clamp(
            (aav_multiplier - 1) * self.PERFORMANCE_SCALE,
            -self.PERFORMANCE_LIMIT,
            self.PERFORMANCE_LIMIT,
        )

    def round_years(self, years: float) -> float:
        """Nearest half year (halves round up), never below MIN_YEARS."""
        return max(self.MIN_YEARS, math.floor(years * 2 + 0.5) / 2)

    def calculate(
        self,
        subject_age: Optional[float],
        contracts: List[ReferenceContract],
        baseline_years: float,
        aav_multiplier: float,
        adjust_years: bool = True,
    ) -> YearsAdjustment:
        """
        Compute the fair contract length.

        Args:
            subject_age: Subject's current-period age
            contracts: Active cohort members
            baseline_years: Mean cohort contract length
            aav_multiplier: Clamped AAV multiplier
            adjust_years: When False the total adjustment is 0

        Returns:
            YearsAdjustment with every intermediate value
        """
        signing_age = self.cohort_signing_age(contracts, subject_age)
        if subject_age is not None and signing_age is not None:
            age_delta = subject_age - signing_age
        else:
            age_delta = 0.0

        age_multiplier = self.age_multiplier(age_delta)
        absolute_penalty = self.absolute_age_penalty(subject_age)
        performance = self.performance_adjustment(aav_multiplier)

        if adjust_years:
            total = (
                (baseline_years * age_multiplier - baseline_years)
                - absolute_penalty
                + performance
            )
        else:
            total = 0.0

        proposed = baseline_years + total
        capped = min(baseline_years + self.SOFT_CAP_YEARS, proposed)

        return YearsAdjustment(
            subject_age=subject_age,
            cohort_signing_age=signing_age,
            age_delta=age_delta,
            age_multiplier=age_multiplier,
            absolute_age_penalty=absolute_penalty,
            performance_adjustment=performance,
            total_adjustment=total,
            proposed_years=proposed,
            capped_years=capped,
            fair_years=self.round_years(capped),
        )

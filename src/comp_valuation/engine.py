"""
Comparable Valuation Engine - Main orchestrator.

Runs the valuation stages in order to turn a subject and a cohort of
comparable contracts into a recommended AAV and contract length.
"""

import logging
from typing import List, Optional

from comp_valuation.categories.registry import CategoryRegistry, DEFAULT_REGISTRY
from comp_valuation.context import ValuationInputs
from comp_valuation.exceptions import SubjectNotFoundError, UnknownCategoryError
from comp_valuation.logging_config import log_exception
from comp_valuation.models import ReferenceContract, ValuationResult, YearsAdjustment
from comp_valuation.settings import ValuationSettings
from comp_valuation.sources.base import CohortSource
from comp_valuation.stages import (
    InflationNormalizer,
    WeightedPerformanceComparator,
    MultiplierAggregator,
    YearsAdjustmentEngine,
)

logger = logging.getLogger(__name__)


class ComparableValuationEngine:
    """
    Main orchestrator for comparable-based valuation.

    Stateless: every call is a pure function of its ValuationInputs, so a
    single engine can be shared between callers and threads.

    Usage:
        engine = ComparableValuationEngine()
        inputs = ValuationInputs.for_position(subject, cohort, position="1B")
        result = engine.valuate(inputs)
        print(f"Fair AAV: ${result.fair_aav:.2f}M over {result.fair_years} years")
    """

    def __init__(
        self,
        registry: Optional[CategoryRegistry] = None,
        normalizer: Optional[InflationNormalizer] = None,
        comparator: Optional[WeightedPerformanceComparator] = None,
        aggregator: Optional[MultiplierAggregator] = None,
        years_engine: Optional[YearsAdjustmentEngine] = None,
    ):
        """
        Initialize the valuation engine.

        Args:
            registry: Stat categories. If None, uses the default registry.
            normalizer: Custom InflationNormalizer.
            comparator: Custom comparator. If None, one is built on registry.
            aggregator: Custom MultiplierAggregator.
            years_engine: Custom YearsAdjustmentEngine.
        """
        self._registry = registry or DEFAULT_REGISTRY
        self._normalizer = normalizer or InflationNormalizer()
        self._comparator = comparator or WeightedPerformanceComparator(self._registry)
        self._aggregator = aggregator or MultiplierAggregator()
        self._years_engine = years_engine or YearsAdjustmentEngine()

    @property
    def registry(self) -> CategoryRegistry:
        return self._registry

    def valuate(self, inputs: ValuationInputs) -> ValuationResult:
        """
        Perform a complete valuation.

        Args:
            inputs: Subject, cohort selection, weights, and toggles

        Returns:
            ValuationResult. An empty active cohort yields the degenerate
            result (zero AAV, multiplier 1, minimum length) rather than
            an error.

        Raises:
            UnknownCategoryError: If a weight key or an active stat key is
                not registered
        """
        # Step 1: Unknown categories are a programming error, even for an empty cohort
        active = inputs.active_cohort()
        self._validate_categories(inputs, active)

        if not active:
            logger.warning("No active cohort members; returning degenerate valuation")
            return self._degenerate_result(inputs)

        # Step 2: Inflation-adjusted cohort baseline
        baseline = self._normalizer.build_baseline(
            active, inputs.inflation_percent, inputs.present_year
        )

        # Step 3: Per-category comparison
        cohort_averages = self._comparator.cohort_averages(active)
        comparisons = self._comparator.compare(
            inputs.subject, active, inputs.weights, cohort_averages
        )

        # Step 4: Aggregate multiplier -> fair AAV
        aggregate = self._aggregator.aggregate(
            comparisons, baseline.baseline_aav, inputs.adjust_aav
        )

        # Step 5: Contract length
        years = self._years_engine.calculate(
            subject_age=inputs.subject.age,
            contracts=active,
            baseline_years=baseline.baseline_years,
            aav_multiplier=aggregate.aav_multiplier,
            adjust_years=inputs.adjust_years,
        )

        logger.debug(
            "Valuated against %d comps: baseline %.2f -> fair %.2f (x%.3f), "
            "years %.2f -> %.1f",
            baseline.cohort_size, baseline.baseline_aav, aggregate.fair_aav,
            aggregate.aav_multiplier, baseline.baseline_years, years.fair_years,
        )

        return ValuationResult(
            baseline_aav=baseline.baseline_aav,
            raw_baseline_aav=baseline.raw_baseline_aav,
            baseline_years=baseline.baseline_years,
            fair_aav=aggregate.fair_aav,
            fair_years=years.fair_years,
            aav_multiplier=aggregate.aav_multiplier,
            raw_multiplier=aggregate.raw_multiplier,
            comparisons=comparisons,
            years_adjustment=years,
            adjusted_values=baseline.adjusted_values,
            cohort_averages=cohort_averages,
            cohort_size=baseline.cohort_size,
            cohort_avg_signed_year=baseline.avg_signed_year,
            present_year=inputs.present_year,
        )

    def valuate_batch(self, inputs_list: List[ValuationInputs]) -> List[ValuationResult]:
        """Valuate several independent inputs."""
        return [self.valuate(inputs) for inputs in inputs_list]

    def valuate_from_source(
        self,
        subject_id: str,
        source: CohortSource,
        selected_ids: Optional[List[str]] = None,
        position: Optional[str] = None,
        inflation_percent: float = ValuationSettings.DEFAULT_INFLATION_PERCENT,
        adjust_aav: bool = True,
        adjust_years: bool = True,
        present_year: int = ValuationSettings.DEFAULT_PRESENT_YEAR,
    ) -> ValuationResult:
        """
        Resolve a subject through a cohort source and valuate it.

        Args:
            subject_id: Subject identifier understood by the source
            source: Ingestion collaborator
            selected_ids: Contract ids to include. If None, keeps each
                         candidate's own included_in_cohort flag.
            position: Weight profile override. If None, uses the subject's
                     position.
            inflation_percent: Annual inflation
            adjust_aav: AAV adjustment toggle
            adjust_years: Years adjustment toggle
            present_year: Year to present-value to

        Raises:
            SubjectNotFoundError: If the source cannot resolve subject_id
        """
        try:
            bundle = source.load(subject_id)
        except SubjectNotFoundError as e:
            log_exception(logger, e, context={"subject_id": subject_id}, level="WARNING")
            raise

        inputs = ValuationInputs.for_position(
            subject=bundle.subject,
            cohort=bundle.candidates,
            position=position or bundle.position,
            inflation_percent=inflation_percent,
            adjust_aav=adjust_aav,
            adjust_years=adjust_years,
            present_year=present_year,
        )
        if selected_ids is not None:
            inputs = inputs.with_selection(selected_ids)
        return self.valuate(inputs)

    def _validate_categories(
        self, inputs: ValuationInputs, active: List[ReferenceContract]
    ) -> None:
        """Reject weight or stat keys the registry does not know."""
        self._registry.validate_keys(inputs.weights)
        self._registry.validate_keys(inputs.subject.values)
        for contract in active:
            try:
                self._registry.validate_keys(contract.performance.values)
            except UnknownCategoryError:
                logger.error(
                    "Contract %s reports an unregistered category", contract.contract_id
                )
                raise

    def _degenerate_result(self, inputs: ValuationInputs) -> ValuationResult:
        """Zero-valued result for an empty active cohort."""
        min_years = self._years_engine.MIN_YEARS
        years = YearsAdjustment(
            subject_age=inputs.subject.age,
            cohort_signing_age=None,
            age_delta=0.0,
            age_multiplier=1.0,
            absolute_age_penalty=0.0,
            performance_adjustment=0.0,
            total_adjustment=0.0,
            proposed_years=0.0,
            capped_years=0.0,
            fair_years=min_years,
        )
        return ValuationResult(
            baseline_aav=0.0,
            raw_baseline_aav=0.0,
            baseline_years=0.0,
            fair_aav=0.0,
            fair_years=min_years,
            aav_multiplier=1.0,
            raw_multiplier=1.0,
            comparisons=[],
            years_adjustment=years,
            adjusted_values={},
            cohort_averages={},
            cohort_size=0,
            cohort_avg_signed_year=0.0,
            present_year=inputs.present_year,
            degenerate=True,
        )

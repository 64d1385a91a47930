"""
Comparable Valuation Engine.

Derives a recommended annual value and contract length for a subject
player from a cohort of already-signed comparable contracts:
inflation-normalized baseline, weighted per-category performance
comparison, a bounded AAV multiplier, and an age/performance driven
contract length adjustment.

Usage:
    from comp_valuation import (
        # Main engine
        ComparableValuationEngine,
        # Inputs
        ValuationInputs,
        PerformanceRecord,
        ReferenceContract,
        # Output
        ValuationResult,
    )

Example:
    subject = PerformanceRecord(values={"fg_xwOBA": 0.370, "fg_PA": 650}, age=30)
    comp = ReferenceContract(
        contract_id="comp-1",
        performance=PerformanceRecord(values={"fg_xwOBA": 0.350, "fg_PA": 620}, age=29),
        annual_value=27.0,
        contract_years=6,
        signed_year=2022,
    )
    engine = ComparableValuationEngine()
    result = engine.valuate(ValuationInputs.for_position(subject, [comp], position="1B"))
    print(f"Fair AAV: ${result.fair_aav:.2f}M x {result.fair_years} years")
"""

# Main engine
from comp_valuation.engine import ComparableValuationEngine

# Core models
from comp_valuation.models import (
    PerformanceRecord,
    ReferenceContract,
    CategoryComparison,
    YearsAdjustment,
    ValuationResult,
)

# Inputs
from comp_valuation.context import ValuationInputs

# Categories
from comp_valuation.categories import (
    StatScale,
    StatCategory,
    CategoryRegistry,
    DEFAULT_REGISTRY,
    get_weights_for_position,
)

# Collaborator interfaces
from comp_valuation.sources import CohortBundle, CohortSource, InMemoryCohortSource
from comp_valuation.market import MarketComparator, MarketComparison

# Errors
from comp_valuation.exceptions import (
    ValuationError,
    UnknownCategoryError,
    MalformedContractError,
    SubjectNotFoundError,
)

__all__ = [
    # Main engine
    "ComparableValuationEngine",
    # Core models
    "PerformanceRecord",
    "ReferenceContract",
    "CategoryComparison",
    "YearsAdjustment",
    "ValuationResult",
    "ValuationInputs",
    # Categories
    "StatScale",
    "StatCategory",
    "CategoryRegistry",
    "DEFAULT_REGISTRY",
    "get_weights_for_position",
    # Collaborators
    "CohortBundle",
    "CohortSource",
    "InMemoryCohortSource",
    "MarketComparator",
    "MarketComparison",
    # Errors
    "ValuationError",
    "UnknownCategoryError",
    "MalformedContractError",
    "SubjectNotFoundError",
]

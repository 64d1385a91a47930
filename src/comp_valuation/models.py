"""
Core data models for the Comparable Valuation Engine.

Provides dataclasses for:
- PerformanceRecord: Per-category stat values plus age
- ReferenceContract: An already-signed comparable contract
- CategoryComparison: Subject vs cohort result for one category
- YearsAdjustment: Audit trail of the contract length adjustment
- ValuationResult: Complete valuation output
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, TYPE_CHECKING

from comp_valuation.exceptions import MalformedContractError

if TYPE_CHECKING:
    from comp_valuation.categories.registry import CategoryRegistry


def _is_finite_number(value: Any) -> bool:
    """True for int or float values that are neither NaN nor infinite."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


@dataclass
class PerformanceRecord:
    """
    Stat values for one player over one period.

    Used for the subject (current period) and for each reference contract
    (the period leading up to signing).

    Attributes:
        values: Category key -> stat value
        age: Player age for the period, if known
    """

    values: Dict[str, float] = field(default_factory=dict)
    age: Optional[float] = None

    def __post_init__(self):
        """Validate fields."""
        if not isinstance(self.values, dict):
            raise ValueError("values must be a dictionary")
        if self.age is not None and not _is_finite_number(self.age):
            raise ValueError(f"age must be a finite number, got {self.age!r}")
        for key, value in self.values.items():
            if value is not None and not _is_finite_number(value):
                raise ValueError(f"stat {key} must be a finite number, got {value!r}")

    def __contains__(self, key: object) -> bool:
        return self.values.get(key) is not None

    def get(self, key: str) -> Optional[float]:
        """Stat value for a category, or None if absent."""
        return self.values.get(key)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"values": self.values.copy(), "age": self.age}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PerformanceRecord":
        """Create from dictionary."""
        return cls(values=dict(data.get("values", {})), age=data.get("age"))

    @classmethod
    def from_source_fields(
        cls,
        stats: Dict[str, Any],
        registry: Optional["CategoryRegistry"] = None,
    ) -> "PerformanceRecord":
        """
        Build a record from an ingested stat row.

        Ingested rows use source field names (xwOBA, Kpct, fg_Def, ...).
        Fields that map to no category are ignored; an "age" field is
        carried over.
        """
        if registry is None:
            from comp_valuation.categories.registry import DEFAULT_REGISTRY
            registry = DEFAULT_REGISTRY

        field_map = registry.source_field_map()
        values = {
            field_map[name]: float(value)
            for name, value in stats.items()
            if name in field_map and value is not None
        }
        age = stats.get("age")
        return cls(values=values, age=float(age) if age is not None else None)


@dataclass
class ReferenceContract:
    """
    An already-signed comparable contract.

    Created by the ingestion collaborator and read-only to the engine.

    Attributes:
        contract_id: Unique identifier
        performance: Stats for the period leading up to signing
        annual_value: AAV at signing (millions)
        contract_years: Contract length in years
        signed_year: Year the contract was signed, if known
        age_at_signing: Age at signing, used when performance has no age
        included_in_cohort: Whether the presentation layer selected it
        name: Player name
        position: Player position code
    """

    contract_id: str
    performance: PerformanceRecord
    annual_value: float
    contract_years: float
    signed_year: Optional[int] = None
    age_at_signing: Optional[float] = None
    included_in_cohort: bool = True
    name: str = ""
    position: str = ""

    def __post_init__(self):
        """Validate fields. Negative or non-finite money or length is malformed upstream data."""
        if not self.contract_id:
            raise MalformedContractError("contract_id must be non-empty")
        if not _is_finite_number(self.annual_value) or self.annual_value < 0:
            raise MalformedContractError(
                f"annual_value must be a finite non-negative number, got {self.annual_value} "
                f"(contract {self.contract_id})"
            )
        if not _is_finite_number(self.contract_years) or self.contract_years < 0:
            raise MalformedContractError(
                f"contract_years must be a finite non-negative number, got {self.contract_years} "
                f"(contract {self.contract_id})"
            )
        if self.age_at_signing is not None and not _is_finite_number(self.age_at_signing):
            raise MalformedContractError(
                f"age_at_signing must be a finite number, got {self.age_at_signing} "
                f"(contract {self.contract_id})"
            )

    @property
    def signing_age(self) -> Optional[float]:
        """Age at signing, preferring the pre-signing performance record."""
        if self.performance.age:
            return self.performance.age
        if self.age_at_signing:
            return self.age_at_signing
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "contract_id": self.contract_id,
            "performance": self.performance.to_dict(),
            "annual_value": self.annual_value,
            "contract_years": self.contract_years,
            "signed_year": self.signed_year,
            "age_at_signing": self.age_at_signing,
            "included_in_cohort": self.included_in_cohort,
            "name": self.name,
            "position": self.position,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReferenceContract":
        """Create from dictionary."""
        return cls(
            contract_id=data["contract_id"],
            performance=PerformanceRecord.from_dict(data.get("performance", {})),
            annual_value=data["annual_value"],
            contract_years=data["contract_years"],
            signed_year=data.get("signed_year"),
            age_at_signing=data.get("age_at_signing"),
            included_in_cohort=data.get("included_in_cohort", True),
            name=data.get("name", ""),
            position=data.get("position", ""),
        )


@dataclass
class CategoryComparison:
    """
    Subject vs cohort comparison for a single stat category.

    Attributes:
        key: Category key
        label: Display label
        subject_value: Subject's stat value
        cohort_value: Cohort average stat value
        ratio: Bounded multiplicative ratio used for AAV impact
        delta: subject_value - cohort_value
        pct_diff: Percent difference, clamped to [-500, 500]
        weight: Weight applied to this category
        contribution: (ratio - 1) * weight
        aav_impact: Dollar share of the AAV adjustment (millions)
    """

    key: str
    label: str
    subject_value: float
    cohort_value: float
    ratio: float
    delta: float
    pct_diff: float
    weight: float
    contribution: float = 0.0
    aav_impact: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "key": self.key,
            "label": self.label,
            "subject_value": self.subject_value,
            "cohort_value": self.cohort_value,
            "ratio": self.ratio,
            "delta": self.delta,
            "pct_diff": self.pct_diff,
            "weight": self.weight,
            "contribution": self.contribution,
            "aav_impact": self.aav_impact,
        }


@dataclass
class YearsAdjustment:
    """Audit trail of the contract length adjustment."""

    subject_age: Optional[float]
    cohort_signing_age: Optional[float]
    age_delta: float
    age_multiplier: float
    absolute_age_penalty: float
    performance_adjustment: float
    total_adjustment: float
    proposed_years: float
    capped_years: float
    fair_years: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "subject_age": self.subject_age,
            "cohort_signing_age": self.cohort_signing_age,
            "age_delta": self.age_delta,
            "age_multiplier": self.age_multiplier,
            "absolute_age_penalty": self.absolute_age_penalty,
            "performance_adjustment": self.performance_adjustment,
            "total_adjustment": self.total_adjustment,
            "proposed_years": self.proposed_years,
            "capped_years": self.capped_years,
            "fair_years": self.fair_years,
        }


@dataclass
class ValuationResult:
    """
    Complete valuation output.

    A pure function of ValuationInputs; recomputed in full on every input
    change and never patched.

    Attributes:
        baseline_aav: Mean inflation-adjusted AAV of the active cohort
        raw_baseline_aav: Mean AAV of the active cohort before inflation
        baseline_years: Mean contract length of the active cohort
        fair_aav: Recommended AAV
        fair_years: Recommended contract length (half-year steps, min 3)
        aav_multiplier: Clamped multiplier applied to baseline_aav
        raw_multiplier: Weighted mean ratio before clamping
        comparisons: Per-category breakdown
        years_adjustment: Length adjustment audit trail
        adjusted_values: Contract id -> inflation-adjusted AAV
        cohort_averages: Category key -> cohort average stat value
        cohort_size: Number of active cohort members
        cohort_avg_signed_year: Mean signing year of the active cohort
        present_year: Year values were present-valued to
        degenerate: True when the active cohort was empty
    """

    baseline_aav: float
    raw_baseline_aav: float
    baseline_years: float
    fair_aav: float
    fair_years: float
    aav_multiplier: float
    raw_multiplier: float
    comparisons: List[CategoryComparison]
    years_adjustment: Optional[YearsAdjustment]
    adjusted_values: Dict[str, float]
    cohort_averages: Dict[str, float]
    cohort_size: int
    cohort_avg_signed_year: float
    present_year: int
    degenerate: bool = False

    @property
    def aav_adjustment(self) -> float:
        """fair_aav - baseline_aav."""
        return self.fair_aav - self.baseline_aav

    @property
    def years_delta(self) -> float:
        """fair_years - baseline_years."""
        return self.fair_years - self.baseline_years

    @property
    def total_value(self) -> float:
        """Fair AAV over the fair length."""
        return self.fair_aav * self.fair_years

    def get_comparison(self, key: str) -> Optional[CategoryComparison]:
        """Comparison for a category key, if it was scored."""
        for comparison in self.comparisons:
            if comparison.key == key:
                return comparison
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "baseline_aav": self.baseline_aav,
            "raw_baseline_aav": self.raw_baseline_aav,
            "baseline_years": self.baseline_years,
            "fair_aav": self.fair_aav,
            "fair_years": self.fair_years,
            "aav_multiplier": self.aav_multiplier,
            "raw_multiplier": self.raw_multiplier,
            "comparisons": [c.to_dict() for c in self.comparisons],
            "years_adjustment": (
                self.years_adjustment.to_dict() if self.years_adjustment else None
            ),
            "adjusted_values": self.adjusted_values.copy(),
            "cohort_averages": self.cohort_averages.copy(),
            "cohort_size": self.cohort_size,
            "cohort_avg_signed_year": self.cohort_avg_signed_year,
            "present_year": self.present_year,
            "degenerate": self.degenerate,
        }

    def to_summary(self) -> Dict[str, Any]:
        """Headline figures for a presentation collaborator."""
        return {
            "baseline_aav": round(self.baseline_aav, 2),
            "fair_aav": round(self.fair_aav, 2),
            "baseline_years": round(self.baseline_years, 2),
            "fair_years": self.fair_years,
            "aav_multiplier": round(self.aav_multiplier, 4),
            "total_value": round(self.total_value, 2),
            "cohort_size": self.cohort_size,
        }

"""
Input context for the Comparable Valuation Engine.

ValuationInputs bundles everything the presentation layer controls:
the subject, the candidate cohort and its selection, category weights,
the inflation rate, and the AAV/years adjustment toggles.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from comp_valuation.models import PerformanceRecord, ReferenceContract
from comp_valuation.settings import ValuationSettings
from comp_valuation.categories.position_profiles import get_weights_for_position


@dataclass
class ValuationInputs:
    """
    Complete input to one valuation.

    Callers own their copy; the engine reads it and never mutates it.

    Attributes:
        subject: Subject's current-period performance record
        cohort: Candidate reference contracts (selection via included_in_cohort)
        weights: Category key -> weight; absent keys use the registry weight
        inflation_percent: Annual inflation applied to reference AAVs
        adjust_aav: Apply the performance multiplier to AAV
        adjust_years: Apply the age/performance adjustment to length
        present_year: Year reference AAVs are present-valued to
    """

    subject: PerformanceRecord
    cohort: List[ReferenceContract] = field(default_factory=list)
    weights: Dict[str, float] = field(default_factory=dict)
    inflation_percent: float = ValuationSettings.DEFAULT_INFLATION_PERCENT
    adjust_aav: bool = True
    adjust_years: bool = True
    present_year: int = ValuationSettings.DEFAULT_PRESENT_YEAR

    def __post_init__(self):
        """Validate field types."""
        if not isinstance(self.subject, PerformanceRecord):
            raise ValueError("subject must be a PerformanceRecord")
        if not isinstance(self.weights, dict):
            raise ValueError("weights must be a dictionary")
        for key, weight in self.weights.items():
            if not isinstance(weight, (int, float)) or not math.isfinite(weight):
                raise ValueError(f"weight for {key} must be a finite number, got {weight!r}")
        if not isinstance(self.inflation_percent, (int, float)) or not math.isfinite(
            self.inflation_percent
        ):
            raise ValueError(
                f"inflation_percent must be a finite number, got {self.inflation_percent!r}"
            )
        if not isinstance(self.present_year, int):
            raise ValueError(f"present_year must be an integer, got {self.present_year}")

    def active_cohort(self) -> List[ReferenceContract]:
        """Reference contracts selected into the cohort."""
        return [c for c in self.cohort if c.included_in_cohort]

    def with_selection(self, contract_ids: List[str]) -> "ValuationInputs":
        """
        Copy of these inputs with only the given contracts included.

        Contracts are rebuilt rather than mutated so the caller's list
        is left untouched.
        """
        selected = set(contract_ids)
        cohort = [
            ReferenceContract(
                contract_id=c.contract_id,
                performance=c.performance,
                annual_value=c.annual_value,
                contract_years=c.contract_years,
                signed_year=c.signed_year,
                age_at_signing=c.age_at_signing,
                included_in_cohort=c.contract_id in selected,
                name=c.name,
                position=c.position,
            )
            for c in self.cohort
        ]
        return ValuationInputs(
            subject=self.subject,
            cohort=cohort,
            weights=dict(self.weights),
            inflation_percent=self.inflation_percent,
            adjust_aav=self.adjust_aav,
            adjust_years=self.adjust_years,
            present_year=self.present_year,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "subject": self.subject.to_dict(),
            "cohort": [c.to_dict() for c in self.cohort],
            "weights": self.weights.copy(),
            "inflation_percent": self.inflation_percent,
            "adjust_aav": self.adjust_aav,
            "adjust_years": self.adjust_years,
            "present_year": self.present_year,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValuationInputs":
        """Create from dictionary."""
        return cls(
            subject=PerformanceRecord.from_dict(data["subject"]),
            cohort=[ReferenceContract.from_dict(c) for c in data.get("cohort", [])],
            weights=dict(data.get("weights", {})),
            inflation_percent=data.get(
                "inflation_percent", ValuationSettings.DEFAULT_INFLATION_PERCENT
            ),
            adjust_aav=data.get("adjust_aav", True),
            adjust_years=data.get("adjust_years", True),
            present_year=data.get("present_year", ValuationSettings.DEFAULT_PRESENT_YEAR),
        )

    @classmethod
    def for_position(
        cls,
        subject: PerformanceRecord,
        cohort: List[ReferenceContract],
        position: Optional[str] = None,
        inflation_percent: float = ValuationSettings.DEFAULT_INFLATION_PERCENT,
        adjust_aav: bool = True,
        adjust_years: bool = True,
        present_year: int = ValuationSettings.DEFAULT_PRESENT_YEAR,
    ) -> "ValuationInputs":
        """Factory that fills weights from the position's profile."""
        return cls(
            subject=subject,
            cohort=list(cohort),
            weights=get_weights_for_position(position or ValuationSettings.DEFAULT_POSITION),
            inflation_percent=inflation_percent,
            adjust_aav=adjust_aav,
            adjust_years=adjust_years,
            present_year=present_year,
        )

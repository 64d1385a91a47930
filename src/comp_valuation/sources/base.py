"""
Abstract interface for the cohort ingestion collaborator.

The engine does not load or validate raw source data. A CohortSource
resolves a subject identifier to the subject's performance record and
the candidate reference contracts it should be compared against.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from comp_valuation.models import PerformanceRecord, ReferenceContract


@dataclass
class CohortBundle:
    """
    Subject plus candidate comparables, as returned by a CohortSource.

    Attributes:
        subject_id: Identifier that was resolved
        name: Subject's display name
        position: Subject's position code
        subject: Subject's current-period performance record
        candidates: Reference contracts, typically same position
    """

    subject_id: str
    name: str
    position: str
    subject: PerformanceRecord
    candidates: List[ReferenceContract] = field(default_factory=list)


class CohortSource(ABC):
    """
    Abstract cohort source.

    Subclasses must implement:
    - load(): Resolve a subject and its candidate comparables

    Example implementations:
    - InMemoryCohortSource: Dict/JSON backed, same-position comps first
    """

    @abstractmethod
    def load(self, subject_id: str) -> CohortBundle:
        """
        Resolve a subject and its candidate comparables.

        Args:
            subject_id: Subject identifier (id or case-insensitive name)

        Returns:
            CohortBundle

        Raises:
            SubjectNotFoundError: If the subject cannot be resolved
        """
        pass

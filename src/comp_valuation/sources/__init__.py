"""
Cohort sources: the boundary to the data-ingestion collaborator.
"""

from .base import CohortBundle, CohortSource
from .in_memory import InMemoryCohortSource, SubjectProfile

__all__ = [
    'CohortBundle',
    'CohortSource',
    'InMemoryCohortSource',
    'SubjectProfile',
]

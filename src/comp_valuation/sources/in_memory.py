"""
Dictionary and JSON backed cohort source.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from comp_valuation.categories.position_profiles import normalize_position
from comp_valuation.exceptions import SubjectNotFoundError
from comp_valuation.models import PerformanceRecord, ReferenceContract
from comp_valuation.sources.base import CohortBundle, CohortSource

logger = logging.getLogger(__name__)


@dataclass
class SubjectProfile:
    """A player who can be valued."""

    subject_id: str
    name: str
    position: str
    performance: PerformanceRecord

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubjectProfile":
        """
        Create from dictionary.

        Accepts either a "performance" record keyed by category, or a
        "stats" row keyed by ingested field names.
        """
        if "performance" in data:
            performance = PerformanceRecord.from_dict(data["performance"])
        else:
            performance = PerformanceRecord.from_source_fields(data.get("stats", {}))
        return cls(
            subject_id=data["subject_id"],
            name=data.get("name", data["subject_id"]),
            position=data.get("position", ""),
            performance=performance,
        )


class InMemoryCohortSource(CohortSource):
    """
    Cohort source over preloaded subjects and contracts.

    Candidates are suggested comps: contracts at the subject's position
    come first, then other positions fill the list up to ``limit``. With
    position filtering on, only same-position contracts are suggested.
    The subject's own record is never a candidate.

    Usage:
        source = InMemoryCohortSource.from_json_file("data/cohorts.json")
        bundle = source.load("pete-alonso")
    """

    DEFAULT_LIMIT = 4

    def __init__(
        self,
        subjects: Iterable[SubjectProfile],
        contracts: Iterable[ReferenceContract],
        filter_by_position: bool = False,
        limit: Optional[int] = DEFAULT_LIMIT,
    ):
        """
        Initialize the source.

        Args:
            subjects: Subjects that can be valued
            contracts: All known reference contracts
            filter_by_position: Suggest only contracts at the subject's position
            limit: Maximum candidates per subject, or None for no limit
        """
        if limit is not None and (not isinstance(limit, int) or limit < 0):
            raise ValueError(f"limit must be a non-negative integer or None, got {limit!r}")
        self._subjects: Dict[str, SubjectProfile] = {s.subject_id: s for s in subjects}
        self._contracts: List[ReferenceContract] = list(contracts)
        self._filter_by_position = filter_by_position
        self._limit = limit

    @property
    def subject_ids(self) -> List[str]:
        return list(self._subjects)

    def load(self, subject_id: str) -> CohortBundle:
        """Resolve a subject by id or case-insensitive name."""
        profile = self._find_subject(subject_id)
        if profile is None:
            raise SubjectNotFoundError(subject_id)

        candidates = self._suggest_comps(profile)
        logger.debug(
            "Loaded subject %s (%s) with %d candidates",
            profile.subject_id, profile.position, len(candidates),
        )
        return CohortBundle(
            subject_id=profile.subject_id,
            name=profile.name,
            position=profile.position,
            subject=profile.performance,
            candidates=candidates,
        )

    def _suggest_comps(self, profile: SubjectProfile) -> List[ReferenceContract]:
        others = [c for c in self._contracts if c.contract_id != profile.subject_id]
        same_position = [c for c in others if self._same_position(c, profile)]

        if self._filter_by_position:
            suggested = same_position
        else:
            suggested = same_position + [
                c for c in others if not self._same_position(c, profile)
            ]

        if self._limit is None:
            return suggested
        return suggested[:self._limit]

    def _find_subject(self, subject_id: str) -> Optional[SubjectProfile]:
        if subject_id in self._subjects:
            return self._subjects[subject_id]
        wanted = subject_id.strip().lower()
        for profile in self._subjects.values():
            if profile.name.lower() == wanted:
                return profile
        return None

    @staticmethod
    def _same_position(contract: ReferenceContract, profile: SubjectProfile) -> bool:
        return normalize_position(contract.position) == normalize_position(profile.position)

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        filter_by_position: bool = False,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> "InMemoryCohortSource":
        """
        Create from a {"subjects": [...], "contracts": [...]} dictionary.

        Raises:
            MalformedContractError: If a contract has a negative or non-finite
                value or length
        """
        return cls(
            subjects=[SubjectProfile.from_dict(s) for s in data.get("subjects", [])],
            contracts=[ReferenceContract.from_dict(c) for c in data.get("contracts", [])],
            filter_by_position=filter_by_position,
            limit=limit,
        )

    @classmethod
    def from_json_file(
        cls,
        path: Union[str, Path],
        filter_by_position: bool = False,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> "InMemoryCohortSource":
        """Load subjects and contracts from a JSON file."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        source = cls.from_dict(data, filter_by_position=filter_by_position, limit=limit)
        logger.info(
            "Loaded %d subjects and %d contracts from %s",
            len(source._subjects), len(source._contracts), path,
        )
        return source
